# strapi_catalog/clients/errors.py

"""Failures raised by the CMS request pipeline."""


class StrapiError(Exception):
    """Base class for every failure surfaced by the CMS client."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class TransportError(StrapiError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f"Transport error fetching {url}: {cause}", url)
        self.cause = cause


class HttpStatusError(StrapiError):
    """The CMS answered with a non-2xx status."""

    def __init__(self, status: int, url: str, reason: str = "") -> None:
        detail = f"{status} {reason}".strip()
        super().__init__(f"API Error: {detail} ({url})", url)
        self.status = status
        self.reason = reason


class DecodeError(StrapiError):
    """The body was not JSON, or not shaped like the expected envelope."""

    def __init__(self, url: str, detail: str) -> None:
        super().__init__(f"Could not decode response from {url}: {detail}", url)
        self.detail = detail
