# strapi_catalog/config/settings.py

"""Central configuration for the strapi_catalog data-access layer."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the strapi_catalog data-access layer."""

    # --- CMS endpoints ---
    DEFAULT_SERVER_URL: str = "http://localhost:1337"
    DEFAULT_PUBLIC_API_URL: str = "http://localhost:8380/api"
    PRODUCTS_ENDPOINT: str = "/products"

    # --- Query presets ---
    DEFAULT_PAGE_SIZE: int = 100        # Products list page size
    FEATURED_PAGE_SIZE: int = 6         # Featured strip page size
    HEALTH_SLOW_MS: float = 2000.0      # Check latency flagged as slow

    DEFAULT_HEADERS: dict[str, str] = {
        "Content-Type": "application/json",
    }

    # --- Media ---
    DEFAULT_MEDIA_PUBLIC_URL: str = "http://localhost:8380"
    DEFAULT_MEDIA_INTERNAL_ORIGIN: str = "http://maysol_strapi_dev:1337"
    PLACEHOLDER_IMAGE: str = "/images/placeholder.jpg"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"


class ExecutionContext(str, Enum):
    """Where the calling code runs, which decides the reachable API origin."""

    SERVER = "server"
    BROWSER = "browser"


@dataclass(frozen=True)
class ApiConfig:
    """Immutable, once-per-process view of the CMS endpoints.

    Server-side code can reach the CMS over the private network, so its
    base is ``STRAPI_URL`` with ``/api`` appended. Browser-side code must
    go through the public origin, ``PUBLIC_STRAPI_URL``, which already
    carries its path prefix and is used as-is.
    """

    context: ExecutionContext
    api_url: str
    public_media_url: str = Settings.DEFAULT_MEDIA_PUBLIC_URL
    internal_media_origin: str = Settings.DEFAULT_MEDIA_INTERNAL_ORIGIN
    placeholder_image: str = Settings.PLACEHOLDER_IMAGE

    @classmethod
    def from_env(
        cls,
        context: ExecutionContext = ExecutionContext.SERVER,
        environ: Mapping[str, str] | None = None,
    ) -> "ApiConfig":
        """Resolve the configuration for *context* from environment values."""
        env = os.environ if environ is None else environ

        if context is ExecutionContext.SERVER:
            origin = env.get("STRAPI_URL") or Settings.DEFAULT_SERVER_URL
            api_url = f"{origin.rstrip('/')}/api"
        else:
            api_url = (
                env.get("PUBLIC_STRAPI_URL")
                or Settings.DEFAULT_PUBLIC_API_URL
            ).rstrip("/")

        public_media_url = (
            env.get("STRAPI_MEDIA_PUBLIC_URL")
            or Settings.DEFAULT_MEDIA_PUBLIC_URL
        )
        internal_media_origin = (
            env.get("STRAPI_MEDIA_INTERNAL_ORIGIN")
            or Settings.DEFAULT_MEDIA_INTERNAL_ORIGIN
        )

        return cls(
            context=context,
            api_url=api_url,
            public_media_url=public_media_url.rstrip("/"),
            internal_media_origin=internal_media_origin.rstrip("/"),
        )
