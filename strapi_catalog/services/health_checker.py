# strapi_catalog/services/health_checker.py

"""CMS connectivity health checker."""

import asyncio
import logging
import time
from dataclasses import dataclass

from strapi_catalog.clients.errors import HttpStatusError, StrapiError
from strapi_catalog.clients.strapi_client import StrapiClient
from strapi_catalog.config.settings import Settings

logger = logging.getLogger("strapi_catalog.health")


@dataclass
class HealthResult:
    """Result of a single endpoint health check."""

    context: str
    url: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def check_client(client: StrapiClient) -> HealthResult:
    """Request one product through *client* and time the round trip."""
    options = {"pagination": {"pageSize": 1}}
    url = client.build_url(Settings.PRODUCTS_ENDPOINT, options)
    context = client.config.context.value

    start = time.monotonic()
    try:
        client.fetch(Settings.PRODUCTS_ENDPOINT, options)
    except HttpStatusError as exc:
        return HealthResult(
            context=context,
            url=url,
            status="down",
            latency_ms=(time.monotonic() - start) * 1000,
            message=f"HTTP {exc.status}",
        )
    except StrapiError as exc:
        return HealthResult(
            context=context,
            url=url,
            status="down",
            latency_ms=(time.monotonic() - start) * 1000,
            message=str(exc)[:80],
        )

    elapsed_ms = (time.monotonic() - start) * 1000
    if elapsed_ms > Settings.HEALTH_SLOW_MS:
        return HealthResult(
            context=context,
            url=url,
            status="slow",
            latency_ms=elapsed_ms,
            message="High latency",
        )
    return HealthResult(
        context=context,
        url=url,
        status="ok",
        latency_ms=elapsed_ms,
        message="",
    )


class HealthChecker:
    """Runs concurrent checks against one client per execution context."""

    def __init__(self, clients: list[StrapiClient]) -> None:
        self.clients = clients

    async def check_all(self) -> list[HealthResult]:
        """Check every client concurrently."""
        tasks = [
            asyncio.to_thread(check_client, client)
            for client in self.clients
        ]
        results: list[HealthResult] = list(await asyncio.gather(*tasks))
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.context,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
