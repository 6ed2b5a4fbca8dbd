# storefront/cli/runner.py

"""Headless catalog listing on top of the async catalog controller."""

import json
import logging
import random
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from storefront.filters.offer_generator import OfferGenerator
from storefront.models.product import Product
from storefront.models.sort_directive import SortDirective
from storefront.services.catalog_client import CatalogClient
from storefront.services.catalog_controller import CatalogController
from storefront.ui.product_card import ProductCard, format_price, render_stars

logger = logging.getLogger("storefront.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def parse_sort(slug: str) -> SortDirective:
    """Turn ``price-desc`` into a directive; exit on anything else."""
    try:
        return SortDirective.from_slug(slug)
    except ValueError as exc:
        _err.print(f"[red]{exc}[/red]")
        _err.print(
            "[dim]Available: price-asc, price-desc, rating-asc, "
            "rating-desc, name-asc, name-desc[/dim]"
        )
        raise SystemExit(1) from exc


def _cards_to_dicts(products: list[Product]) -> list[dict[str, object]]:
    """Serialise products through the rendering contract for JSON output."""
    return [ProductCard.from_product(p).to_dict() for p in products]


def _print_table(products: list[Product], title: str) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title=title,
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", max_width=60)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Offer", justify="center", style="bold red")
    table.add_column("Rating", justify="center", style="yellow")
    table.add_column("Image", overflow="fold", style="dim")

    for idx, product in enumerate(products, 1):
        card = ProductCard.from_product(product)
        if card.discounted_price is not None:
            price_str = (
                f"[strike]{card.price_label}[/strike] "
                f"{format_price(card.discounted_price)}"
            )
        else:
            price_str = card.price_label
        table.add_row(
            str(idx),
            card.title[:60],
            price_str,
            card.offer_label or "—",
            f"{render_stars(card.rating)} ({card.rating_count})",
            card.image,
        )

    Console().print(table)


def _build_controller(
    base_url: str | None,
    seed: int | None,
    category: str = "all",
    sort: SortDirective | None = None,
) -> CatalogController:
    rng = random.Random(seed) if seed is not None else None
    return CatalogController(
        client=CatalogClient(base_url),
        offers=OfferGenerator(rng=rng),
        category=category,
        sort=sort,
    )


async def cli_list(
    category: str,
    sort_slug: str,
    output_format: str,
    base_url: str | None = None,
    seed: int | None = None,
) -> int:
    """List the catalog headlessly; return an exit code (0=ok, 1=fail)."""
    directive = parse_sort(sort_slug)
    controller = _build_controller(base_url, seed, category, directive)

    _err.print(
        f"[bold]Catalog:[/bold] {category}  "
        f"[dim]sort={directive.slug}[/dim]"
    )

    try:
        loaded = await controller.refresh()
    finally:
        controller.client.close()

    if not loaded:
        _err.print(
            "[red]Failed to load products (see log for details).[/red]"
        )
        return 1

    products = controller.products
    if products:
        offered = sum(1 for p in products if p.offer.has_offer)
        _err.print(
            f"[green]✓ {len(products)} products, {offered} on offer[/green]"
        )
    else:
        _err.print(f"[yellow]No products in {category}.[/yellow]")

    if output_format == "table":
        if products:
            _print_table(products, f"Storefront: {category}")
    else:
        json.dump(
            _cards_to_dicts(products),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0


async def cli_categories(base_url: str | None = None) -> int:
    """Print the category catalog, one name per line."""
    controller = _build_controller(base_url, None)
    try:
        await controller.load_categories()
    finally:
        controller.client.close()

    if not controller.categories:
        _err.print("[yellow]No categories loaded.[/yellow]")
        return 1
    for name in controller.categories:
        sys.stdout.write(f"{name}\n")
    return 0


def run_init_auth_db(db_path: str | None) -> int:
    """Create the authentication tables in a SQLite file."""
    from storefront.storage.auth_schema import AuthSchemaDB

    path = Path(db_path) if db_path else None
    try:
        db = AuthSchemaDB(path)
    except Exception as exc:
        logger.error("Auth schema creation failed: %s", exc, exc_info=True)
        _err.print(f"[red]Auth schema creation failed: {exc}[/red]")
        return 1

    tables = db.existing_tables()
    db.close()
    _err.print(
        f"[green]✓ {len(tables)} auth tables ready in {db.path}[/green]"
    )
    for name in tables:
        _err.print(f"[dim]  {name}[/dim]")
    return 0
