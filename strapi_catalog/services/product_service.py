# strapi_catalog/services/product_service.py

"""Named product queries against the CMS ``/products`` collection."""

import logging

from strapi_catalog.clients.strapi_client import StrapiClient
from strapi_catalog.config.settings import Settings
from strapi_catalog.models.envelope import ListResponse
from strapi_catalog.models.product import Category, Product
from strapi_catalog.query.query_builder import FetchOptions

logger = logging.getLogger("strapi_catalog.products")


class ProductService:
    """Canonical product queries, each one a single page from the CMS.

    Lists are never followed past the first page: callers that need more
    pass their own ``pagination`` to :meth:`get_products`.
    """

    def __init__(self, client: StrapiClient) -> None:
        self.client = client
        self.endpoint = Settings.PRODUCTS_ENDPOINT

    def _fetch(self, options: FetchOptions) -> ListResponse[Product]:
        return self.client.fetch_list(
            self.endpoint, options, Product.from_dict
        )

    def get_products(
        self, options: FetchOptions | None = None,
    ) -> ListResponse[Product]:
        """Fetch the product list, newest first.

        *options* are merged shallowly over the defaults: a key supplied
        by the caller replaces the default value for that key entirely.
        """
        merged: FetchOptions = {
            "populate": "*",
            "sort": "createdAt:desc",
            "pagination": {"pageSize": Settings.DEFAULT_PAGE_SIZE},
            **(options or {}),
        }
        return self._fetch(merged)

    def get_product_by_slug(self, slug: str) -> Product | None:
        """Return the product with *slug*, or ``None`` if there is none."""
        response = self._fetch({
            "filters": {"slug": {"$eq": slug}},
            "populate": "*",
        })
        product = response.first
        if product is None:
            logger.info("No product found for slug %r", slug)
        return product

    def get_featured_products(self) -> list[Product]:
        """Return up to ``FEATURED_PAGE_SIZE`` featured, available products."""
        response = self._fetch({
            "filters": {
                "featured": {"$eq": True},
                "available": {"$eq": True},
            },
            "populate": "*",
            "sort": "createdAt:desc",
            "pagination": {"pageSize": Settings.FEATURED_PAGE_SIZE},
        })
        return response.data

    def get_products_by_category(
        self, category: Category | str,
    ) -> list[Product]:
        """Return available products in *category*, sorted by name."""
        value = category.value if isinstance(category, Category) else category
        response = self._fetch({
            "filters": {
                "category": {"$eq": value},
                "available": {"$eq": True},
            },
            "populate": "*",
            "sort": "name:asc",
        })
        return response.data
