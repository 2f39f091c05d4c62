# main.py

"""Entry point for the strapi_catalog command-line client."""

import argparse
import asyncio
import logging
import sys

from strapi_catalog.config.logging_config import setup_logging
from strapi_catalog.config.settings import ApiConfig, ExecutionContext
from strapi_catalog.models.product import Category

logger = logging.getLogger("strapi_catalog.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="strapi-catalog",
        description="Query the product catalogue published in the CMS.",
    )
    parser.add_argument(
        "-c",
        "--context",
        choices=[c.value for c in ExecutionContext],
        default=ExecutionContext.SERVER.value,
        help="Which API origin to use (default: server).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Also show info-level log messages on stderr.",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    products = commands.add_parser("products", help="List products.")
    products.add_argument("--page", type=int, default=None)
    products.add_argument(
        "--page-size", type=int, default=None, dest="page_size",
    )
    products.add_argument(
        "--sort", default=None, help="Sort spec, e.g. 'name:asc'.",
    )

    product = commands.add_parser("product", help="Show one product.")
    product.add_argument("slug")

    commands.add_parser("featured", help="List featured products.")

    category = commands.add_parser(
        "category", help="List available products in a category.",
    )
    category.add_argument(
        "category", choices=[c.value for c in Category],
    )

    media = commands.add_parser(
        "media", help="Resolve a media path to its public URL.",
    )
    media.add_argument("url", nargs="?", default=None)

    commands.add_parser(
        "health", help="Check the CMS from both execution contexts.",
    )
    return parser


def run(args: argparse.Namespace) -> int:
    """Dispatch a parsed command and return its exit code."""
    from strapi_catalog.cli import runner
    from strapi_catalog.clients.strapi_client import StrapiClient
    from strapi_catalog.services.product_service import ProductService

    if args.command == "health":
        return asyncio.run(runner.run_health_check())

    config = ApiConfig.from_env(ExecutionContext(args.context))
    logger.info("Using %s API at %s", config.context.value, config.api_url)

    if args.command == "media":
        return runner.run_media(args.url, config)

    service = ProductService(StrapiClient(config))
    if args.command == "products":
        return runner.run_products(
            service,
            args.output_format,
            page=args.page,
            page_size=args.page_size,
            sort=args.sort,
        )
    if args.command == "product":
        return runner.run_product(service, args.slug, args.output_format)
    if args.command == "featured":
        return runner.run_featured(service, args.output_format)
    return runner.run_category(service, args.category, args.output_format)


def main() -> None:
    args = _build_parser().parse_args()
    log_file = setup_logging(
        console_level=logging.INFO if args.verbose else logging.WARNING,
    )
    logger.info("strapi_catalog starting, log file: %s", log_file)

    try:
        exit_code = run(args)
    except Exception:
        logger.critical("Fatal error during CLI run", exc_info=True)
        raise
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
