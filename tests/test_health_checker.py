# tests/test_health_checker.py

"""Tests for the CMS health checker service."""

import asyncio
import unittest
from unittest.mock import MagicMock

from curl_cffi import CurlError

from strapi_catalog.clients.errors import HttpStatusError, TransportError
from strapi_catalog.config.settings import ApiConfig, ExecutionContext
from strapi_catalog.services.health_checker import (
    HealthChecker,
    HealthResult,
    check_client,
)


def _mock_client(
    context: ExecutionContext = ExecutionContext.SERVER,
) -> MagicMock:
    """A StrapiClient stand-in with a real config and URL builder."""
    client = MagicMock()
    client.config = ApiConfig.from_env(context, environ={})
    client.build_url.side_effect = (
        lambda endpoint, options=None: f"{client.config.api_url}{endpoint}"
    )
    return client


class TestCheckClient(unittest.TestCase):
    """Tests for the per-client health check."""

    def test_ok_status(self) -> None:
        client = _mock_client()
        client.fetch.return_value = {"data": [], "meta": {}}

        result = check_client(client)

        self.assertEqual(result.status, "ok")
        self.assertEqual(result.context, "server")
        self.assertEqual(result.url, "http://localhost:1337/api/products")
        self.assertGreaterEqual(result.latency_ms, 0)

    def test_requests_a_single_item(self) -> None:
        client = _mock_client()
        client.fetch.return_value = {"data": []}

        check_client(client)

        endpoint, options = client.fetch.call_args.args
        self.assertEqual(endpoint, "/products")
        self.assertEqual(options, {"pagination": {"pageSize": 1}})

    def test_down_on_http_error(self) -> None:
        client = _mock_client()
        client.fetch.side_effect = HttpStatusError(
            403, "http://localhost:1337/api/products", "Forbidden",
        )

        result = check_client(client)

        self.assertEqual(result.status, "down")
        self.assertEqual(result.message, "HTTP 403")

    def test_down_on_transport_error(self) -> None:
        client = _mock_client(ExecutionContext.BROWSER)
        client.fetch.side_effect = TransportError(
            "http://localhost:8380/api/products",
            CurlError("Connection refused"),
        )

        result = check_client(client)

        self.assertEqual(result.status, "down")
        self.assertEqual(result.context, "browser")
        self.assertLessEqual(len(result.message), 80)


class TestHealthChecker(unittest.TestCase):

    def test_check_all_covers_every_client(self) -> None:
        server = _mock_client(ExecutionContext.SERVER)
        server.fetch.return_value = {"data": []}
        browser = _mock_client(ExecutionContext.BROWSER)
        browser.fetch.side_effect = HttpStatusError(
            502, "http://localhost:8380/api/products", "Bad Gateway",
        )

        results = asyncio.run(HealthChecker([server, browser]).check_all())

        self.assertTrue(all(isinstance(r, HealthResult) for r in results))
        self.assertEqual(
            [(r.context, r.status) for r in results],
            [("server", "ok"), ("browser", "down")],
        )


if __name__ == "__main__":
    unittest.main()
