# tests/conftest.py

"""Shared pytest fixtures for all client tests."""

import os
from collections.abc import Generator
from unittest.mock import patch

import pytest

_STRAPI_ENV_VARS = (
    "STRAPI_URL",
    "PUBLIC_STRAPI_URL",
    "STRAPI_MEDIA_PUBLIC_URL",
    "STRAPI_MEDIA_INTERNAL_ORIGIN",
)


@pytest.fixture(autouse=True)
def clean_strapi_env() -> Generator[None, None, None]:
    """Hide any CMS URLs from a local .env so defaults are predictable."""
    cleaned = {
        k: v for k, v in os.environ.items() if k not in _STRAPI_ENV_VARS
    }
    with patch.dict(os.environ, cleaned, clear=True):
        yield
