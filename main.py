# main.py

"""Entry point for the storefront application (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from storefront.config.logging_config import setup_logging
from storefront.config.settings import Settings

logger = logging.getLogger("storefront.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    sort_slugs = [
        f"{o['type']}-{o['value']}" for o in Settings.SORT_OPTIONS
    ]

    parser = argparse.ArgumentParser(
        prog="storefront",
        description="Browse a product catalog with promotional offers.",
        epilog=f"Sort options: {', '.join(sort_slugs)}",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        default=False,
        dest="list_products",
        help="Print the catalog headlessly instead of launching the TUI.",
    )
    parser.add_argument(
        "-c",
        "--category",
        default=Settings.DEFAULT_CATEGORY,
        help="Category to list (default: all).",
    )
    parser.add_argument(
        "-s",
        "--sort",
        default="{type}-{value}".format(**Settings.DEFAULT_SORT),
        choices=sort_slugs,
        dest="sort_slug",
        help="Sort order (default: price-asc).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="table",
        dest="output_format",
        help="Output format for --list (default: table).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the offer generator for reproducible discounts.",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        dest="base_url",
        help=f"Catalog service URL (default: {Settings.API_BASE_URL}).",
    )
    parser.add_argument(
        "--categories",
        action="store_true",
        default=False,
        dest="list_categories",
        help="Print the category catalog and exit.",
    )
    parser.add_argument(
        "--init-auth-db",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        dest="auth_db",
        help="Create the auth tables in a SQLite file "
        f"(default: {Settings.AUTH_DB_PATH}).",
    )
    return parser


def _run_tui(base_url: str | None) -> None:
    """Launch the interactive Textual TUI."""
    from storefront.services.catalog_client import CatalogClient
    from storefront.services.catalog_controller import CatalogController
    from storefront.ui.app import StorefrontApp

    try:
        controller = CatalogController(client=CatalogClient(base_url))
        app = StorefrontApp(controller)
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("storefront TUI shutting down")


def _run_list(args: argparse.Namespace) -> None:
    """List the catalog headlessly and exit."""
    from storefront.cli.runner import cli_list

    exit_code = asyncio.run(
        cli_list(
            category=args.category,
            sort_slug=args.sort_slug,
            output_format=args.output_format,
            base_url=args.base_url,
            seed=args.seed,
        )
    )
    sys.exit(exit_code)


def _run_categories(base_url: str | None) -> None:
    """Print the category catalog and exit."""
    from storefront.cli.runner import cli_categories

    exit_code = asyncio.run(cli_categories(base_url))
    sys.exit(exit_code)


def _run_init_auth_db(path: str) -> None:
    """Create the authentication schema and exit."""
    from storefront.cli.runner import run_init_auth_db

    exit_code = run_init_auth_db(path or None)
    sys.exit(exit_code)


def main() -> None:
    """Route to the TUI (no flags) or one of the headless commands."""
    parser = _build_parser()
    args = parser.parse_args()

    headless = (
        args.list_products
        or args.list_categories
        or args.auth_db is not None
    )
    log_file = setup_logging(console=headless)
    logger.info("storefront starting — log file: %s", log_file)

    if args.auth_db is not None:
        _run_init_auth_db(args.auth_db)
    elif args.list_categories:
        _run_categories(args.base_url)
    elif args.list_products:
        _run_list(args)
    else:
        _run_tui(args.base_url)


if __name__ == "__main__":
    main()
