# strapi_catalog/cli/runner.py

"""Headless CLI commands on top of the product queries."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from strapi_catalog.clients.errors import StrapiError
from strapi_catalog.clients.strapi_client import StrapiClient
from strapi_catalog.config.settings import ApiConfig, ExecutionContext
from strapi_catalog.models.product import Category, Product
from strapi_catalog.query.query_builder import FetchOptions, PaginationOptions
from strapi_catalog.services.health_checker import HealthChecker
from strapi_catalog.services.media import get_strapi_media_url
from strapi_catalog.services.product_service import ProductService

logger = logging.getLogger("strapi_catalog.cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def product_to_dict(
    product: Product, config: ApiConfig,
) -> dict[str, object]:
    """Serialise a product to a flat dict for JSON output."""
    image_url = product.image.url if product.image else None
    return {
        "id": product.id,
        "documentId": product.document_id,
        "name": product.name,
        "slug": product.slug,
        "category": product.category_value,
        "categoryLabel": product.category_label,
        "price": product.price,
        "unit": product.unit,
        "featured": product.featured,
        "available": product.available,
        "image": get_strapi_media_url(image_url, config),
        "createdAt": product.created_at.isoformat(),
        "publishedAt": (
            product.published_at.isoformat()
            if product.published_at
            else None
        ),
    }


def _print_table(products: list[Product], title: str) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(title=title, show_lines=True, title_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", max_width=50)
    table.add_column("Slug", style="dim")
    table.add_column("Category", style="magenta")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Featured", justify="center")

    for idx, p in enumerate(products, 1):
        price = f"{p.price} / {p.unit}" if p.price and p.unit else p.price
        table.add_row(
            str(idx),
            p.name,
            p.slug,
            p.category_label or "—",
            price or "N/A",
            "★" if p.featured else "",
        )

    Console().print(table)


def _emit(
    products: list[Product],
    config: ApiConfig,
    output_format: str,
    title: str,
) -> None:
    if output_format == "table":
        _print_table(products, title)
        return
    json.dump(
        [product_to_dict(p, config) for p in products],
        sys.stdout,
        ensure_ascii=False,
        indent=2,
    )
    sys.stdout.write("\n")


def _report_failure(exc: StrapiError) -> int:
    logger.debug("Command failed: %s", exc)
    _err.print(f"[red]{exc}[/red]")
    return EXIT_ERROR


def run_products(
    service: ProductService,
    output_format: str,
    page: int | None = None,
    page_size: int | None = None,
    sort: str | None = None,
) -> int:
    """List one page of products and return an exit code."""
    options: FetchOptions = {}
    if page is not None or page_size is not None:
        pagination: PaginationOptions = {}
        if page is not None:
            pagination["page"] = page
        if page_size is not None:
            pagination["pageSize"] = page_size
        options["pagination"] = pagination
    if sort:
        options["sort"] = sort

    try:
        response = service.get_products(options)
    except StrapiError as exc:
        return _report_failure(exc)

    pagination_meta = response.meta.pagination
    if pagination_meta:
        _err.print(
            f"[dim]Page {pagination_meta.page}/{pagination_meta.page_count}"
            f" ({pagination_meta.total} products)[/dim]"
        )
    _emit(response.data, service.client.config, output_format, "Products")
    return EXIT_OK


def run_product(
    service: ProductService, slug: str, output_format: str,
) -> int:
    """Show one product by slug; exit 2 when it does not exist."""
    try:
        product = service.get_product_by_slug(slug)
    except StrapiError as exc:
        return _report_failure(exc)

    if product is None:
        _err.print(f"[yellow]No product with slug '{slug}'.[/yellow]")
        return EXIT_NOT_FOUND
    _emit([product], service.client.config, output_format, product.name)
    return EXIT_OK


def run_featured(service: ProductService, output_format: str) -> int:
    try:
        products = service.get_featured_products()
    except StrapiError as exc:
        return _report_failure(exc)
    _emit(products, service.client.config, output_format, "Featured")
    return EXIT_OK


def run_category(
    service: ProductService, category: str, output_format: str,
) -> int:
    try:
        products = service.get_products_by_category(Category(category))
    except StrapiError as exc:
        return _report_failure(exc)
    _emit(products, service.client.config, output_format, category)
    return EXIT_OK


def run_media(url: str | None, config: ApiConfig) -> int:
    """Print the public URL for a media path."""
    sys.stdout.write(get_strapi_media_url(url, config) + "\n")
    return EXIT_OK


async def run_health_check() -> int:
    """Check the products endpoint from both execution contexts."""
    _err.print("[bold]Running CMS health check...[/bold]")
    checker = HealthChecker([
        StrapiClient(ApiConfig.from_env(context))
        for context in ExecutionContext
    ])
    results = await checker.check_all()

    table = Table(
        title="CMS Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Context", style="bold")
    table.add_column("URL", overflow="fold", style="dim")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]OK[/green]"
        elif r.status == "slow":
            status = "[yellow]SLOW[/yellow]"
        else:
            status = "[red]DOWN[/red]"
            any_down = True

        latency = f"{r.latency_ms:.0f}ms" if r.latency_ms > 0 else "—"
        table.add_row(r.context, r.url, status, latency, r.message)

    Console().print(table)
    return EXIT_ERROR if any_down else EXIT_OK
