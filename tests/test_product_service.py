# tests/test_product_service.py

"""Tests for the product queries using a mocked CMS session."""

import json
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch
from urllib.parse import parse_qsl, urlsplit

from strapi_catalog.clients.errors import DecodeError, HttpStatusError
from strapi_catalog.clients.strapi_client import StrapiClient
from strapi_catalog.config.settings import ApiConfig, ExecutionContext
from strapi_catalog.models.product import Category
from strapi_catalog.services.product_service import ProductService

FIXTURES_DIR = Path(__file__).parent / "fixtures"

EMPTY_BODY = {"data": [], "meta": {}}


class _ServiceTestCase(unittest.TestCase):
    """Builds a ProductService whose session returns canned bodies."""

    def setUp(self) -> None:
        patcher = patch(
            "strapi_catalog.clients.strapi_client.curl_requests.Session"
        )
        mock_session_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.session = MagicMock()
        mock_session_cls.return_value = self.session

        config = ApiConfig.from_env(ExecutionContext.SERVER)
        self.service = ProductService(StrapiClient(config))

    def respond_with(self, body: object, status_code: int = 200) -> None:
        resp = MagicMock()
        resp.status_code = status_code
        resp.reason = "OK" if status_code == 200 else "Error"
        resp.json.return_value = body
        self.session.get.return_value = resp

    def respond_with_fixture(self, name: str) -> None:
        with open(FIXTURES_DIR / name, encoding="utf-8") as f:
            self.respond_with(json.load(f))

    def requested_url(self) -> str:
        self.assertEqual(self.session.get.call_count, 1)
        return self.session.get.call_args.args[0]

    def requested_params(self) -> list[tuple[str, str]]:
        return parse_qsl(urlsplit(self.requested_url()).query)


class TestGetProducts(_ServiceTestCase):

    def test_default_options(self) -> None:
        self.respond_with_fixture("products_page.json")

        self.service.get_products()

        self.assertTrue(
            self.requested_url().startswith(
                "http://localhost:1337/api/products?"
            )
        )
        self.assertEqual(
            self.requested_params(),
            [
                ("populate", "*"),
                ("sort[0]", "createdAt:desc"),
                ("pagination[pageSize]", "100"),
            ],
        )

    def test_returns_full_envelope(self) -> None:
        self.respond_with_fixture("products_page.json")

        response = self.service.get_products()

        self.assertEqual(len(response.data), 2)
        self.assertEqual(response.data[0].slug, "docena-huevos-organicos")
        self.assertIsNotNone(response.meta.pagination)
        self.assertEqual(response.meta.pagination.total, 2)

    def test_caller_pagination_replaces_default_wholesale(self) -> None:
        self.respond_with(EMPTY_BODY)

        self.service.get_products({"pagination": {"page": 3}})

        params = self.requested_params()
        self.assertIn(("pagination[page]", "3"), params)
        self.assertNotIn(("pagination[pageSize]", "100"), params)

    def test_caller_filters_are_added(self) -> None:
        self.respond_with(EMPTY_BODY)

        self.service.get_products(
            {"filters": {"category": {"$in": ["huevos", "pollos"]}}}
        )

        self.assertEqual(
            self.requested_params(),
            [
                ("populate", "*"),
                ("filters[category][$in][0]", "huevos"),
                ("filters[category][$in][1]", "pollos"),
                ("sort[0]", "createdAt:desc"),
                ("pagination[pageSize]", "100"),
            ],
        )

    def test_caller_sort_wins(self) -> None:
        self.respond_with(EMPTY_BODY)

        self.service.get_products({"sort": ["price:asc", "name:asc"]})

        params = self.requested_params()
        self.assertIn(("sort[0]", "price:asc"), params)
        self.assertIn(("sort[1]", "name:asc"), params)
        self.assertNotIn(("sort[0]", "createdAt:desc"), params)


class TestGetProductBySlug(_ServiceTestCase):

    def test_filters_on_slug(self) -> None:
        self.respond_with(EMPTY_BODY)

        self.service.get_product_by_slug("docena-huevos-organicos")

        self.assertEqual(
            self.requested_params(),
            [
                ("populate", "*"),
                ("filters[slug][$eq]", "docena-huevos-organicos"),
            ],
        )

    def test_returns_first_match(self) -> None:
        self.respond_with_fixture("products_page.json")

        product = self.service.get_product_by_slug("docena-huevos-organicos")

        self.assertIsNotNone(product)
        self.assertEqual(product.id, 12)

    def test_empty_data_returns_none(self) -> None:
        self.respond_with(EMPTY_BODY)

        self.assertIsNone(
            self.service.get_product_by_slug("docena-huevos-organicos")
        )

    def test_missing_data_returns_none(self) -> None:
        self.respond_with({"meta": {}})

        self.assertIsNone(self.service.get_product_by_slug("nada"))


class TestGetFeaturedProducts(_ServiceTestCase):

    def test_featured_options(self) -> None:
        self.respond_with(EMPTY_BODY)

        self.service.get_featured_products()

        self.assertEqual(
            self.requested_params(),
            [
                ("populate", "*"),
                ("filters[featured][$eq]", "true"),
                ("filters[available][$eq]", "true"),
                ("sort[0]", "createdAt:desc"),
                ("pagination[pageSize]", "6"),
            ],
        )

    def test_empty_data_returns_empty_list(self) -> None:
        self.respond_with(EMPTY_BODY)

        self.assertEqual(self.service.get_featured_products(), [])

    def test_returns_products(self) -> None:
        self.respond_with_fixture("products_page.json")

        products = self.service.get_featured_products()

        self.assertEqual(
            [p.slug for p in products],
            ["docena-huevos-organicos", "alimento-pollos-engorde"],
        )


class TestGetProductsByCategory(_ServiceTestCase):

    def test_category_options(self) -> None:
        self.respond_with(EMPTY_BODY)

        self.service.get_products_by_category(Category.HUEVOS)

        self.assertEqual(
            self.requested_params(),
            [
                ("populate", "*"),
                ("filters[category][$eq]", "huevos"),
                ("filters[available][$eq]", "true"),
                ("sort[0]", "name:asc"),
            ],
        )

    def test_accepts_plain_string(self) -> None:
        self.respond_with(EMPTY_BODY)

        self.service.get_products_by_category("cerdos")

        self.assertIn(
            ("filters[category][$eq]", "cerdos"), self.requested_params()
        )

    def test_null_data_returns_empty_list(self) -> None:
        self.respond_with({"data": None, "meta": {}})

        self.assertEqual(
            self.service.get_products_by_category(Category.POLLOS), []
        )


class TestResponseMapping(_ServiceTestCase):
    """Accessors map odd-but-valid entries and reject malformed ones."""

    def _entry(self, **overrides: object) -> dict:
        entry = {
            "id": 30,
            "documentId": "doc30",
            "name": "Pato criollo",
            "slug": "pato-criollo",
            "category": "patos",
            "available": True,
            "createdAt": "2025-04-01T00:00:00.000Z",
            "updatedAt": "2025-04-01T00:00:00.000Z",
        }
        entry.update(overrides)
        return entry

    def test_unknown_category_does_not_empty_the_list(self) -> None:
        self.respond_with({"data": [self._entry()], "meta": {}})

        products = self.service.get_products_by_category("patos")

        self.assertEqual([p.slug for p in products], ["pato-criollo"])
        self.assertEqual(products[0].category, "patos")

    def test_slug_lookup_with_string_og_image_raises_decode_error(
        self,
    ) -> None:
        self.respond_with(
            {"data": [self._entry(og_image="x.jpg")], "meta": {}}
        )

        with self.assertRaises(DecodeError):
            self.service.get_product_by_slug("pato-criollo")

    def test_featured_with_object_images_raises_decode_error(self) -> None:
        self.respond_with({"data": [self._entry(images={"a": 1})]})

        with self.assertRaises(DecodeError):
            self.service.get_featured_products()


class TestErrorPropagation(_ServiceTestCase):
    """Every accessor surfaces non-2xx statuses unchanged."""

    def test_status_is_preserved_for_every_accessor(self) -> None:
        calls = {
            "get_products": lambda: self.service.get_products(),
            "get_product_by_slug": (
                lambda: self.service.get_product_by_slug("x")
            ),
            "get_featured_products": (
                lambda: self.service.get_featured_products()
            ),
            "get_products_by_category": (
                lambda: self.service.get_products_by_category("huevos")
            ),
        }
        for status in (401, 404, 500):
            self.respond_with({"error": {}}, status_code=status)
            for name, call in calls.items():
                with self.subTest(accessor=name, status=status):
                    with self.assertRaises(HttpStatusError) as ctx:
                        call()
                    self.assertEqual(ctx.exception.status, status)


if __name__ == "__main__":
    unittest.main()
