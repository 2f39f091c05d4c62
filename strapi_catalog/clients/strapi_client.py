# strapi_catalog/clients/strapi_client.py

"""Single-shot GET client for the CMS REST API."""

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from curl_cffi import CurlError
from curl_cffi import requests as curl_requests

from strapi_catalog.clients.errors import (
    DecodeError,
    HttpStatusError,
    TransportError,
)
from strapi_catalog.config.settings import ApiConfig, Settings
from strapi_catalog.models.envelope import ListResponse
from strapi_catalog.query.query_builder import build_query_string

T = TypeVar("T")


class StrapiClient:
    """Issues exactly one GET per call and decodes the JSON body.

    There are no retries: every failure is logged once with the URL it
    came from and then raised to the caller unchanged.
    """

    def __init__(self, config: ApiConfig) -> None:
        self.config = config
        self.logger = logging.getLogger("strapi_catalog.client")
        self.session = curl_requests.Session()

    def build_url(
        self,
        endpoint: str,
        options: Mapping[str, object] | None = None,
    ) -> str:
        """Join the API base, *endpoint* and the encoded *options*."""
        return f"{self.config.api_url}{endpoint}{build_query_string(options)}"

    def fetch(
        self,
        endpoint: str,
        options: Mapping[str, object] | None = None,
    ) -> Any:
        """GET *endpoint* with *options* and return the decoded JSON body.

        Raises:
            TransportError: the request did not complete.
            HttpStatusError: the CMS answered with a non-2xx status.
            DecodeError: the body is not valid JSON.
        """
        url = self.build_url(endpoint, options)
        self.logger.debug("GET %s", url)

        try:
            resp = self.session.get(
                url, headers=Settings.DEFAULT_HEADERS,
            )
        except CurlError as exc:
            self.logger.error(
                "Error fetching from Strapi: %s (%s)", url, exc,
                exc_info=True,
            )
            raise TransportError(url, exc) from exc

        if not 200 <= resp.status_code < 300:
            self.logger.error(
                "Error fetching from Strapi: %s returned HTTP %d %s",
                url,
                resp.status_code,
                resp.reason,
            )
            raise HttpStatusError(resp.status_code, url, resp.reason or "")

        try:
            return resp.json()
        except ValueError as exc:
            self.logger.error(
                "Error fetching from Strapi: %s returned invalid JSON: %s",
                url,
                exc,
            )
            raise DecodeError(url, str(exc)) from exc

    def fetch_list(
        self,
        endpoint: str,
        options: Mapping[str, object] | None,
        item_parser: Callable[[dict[str, Any]], T],
    ) -> ListResponse[T]:
        """Fetch a collection page and map it into a typed envelope."""
        body = self.fetch(endpoint, options)
        try:
            return ListResponse.from_dict(body, item_parser)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            url = self.build_url(endpoint, options)
            self.logger.error(
                "Error fetching from Strapi: %s returned an unexpected "
                "envelope: %r",
                url,
                exc,
            )
            raise DecodeError(url, repr(exc)) from exc
