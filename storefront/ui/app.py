# storefront/ui/app.py

"""Terminal UI for browsing the storefront catalog."""

import logging
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    Collapsible,
    DataTable,
    Footer,
    Header,
    Static,
)

from storefront.config.settings import Settings
from storefront.models.sort_directive import SortDirective
from storefront.services.catalog_controller import (
    CATEGORY_MENU,
    SORT_MENU,
    CatalogController,
    CatalogState,
    FetchStatus,
)
from storefront.ui.product_card import ProductCard, format_price, render_stars

logger = logging.getLogger("storefront.ui")

_MENU_IDS: dict[str, str] = {
    CATEGORY_MENU: "#category_menu",
    SORT_MENU: "#sort_menu",
}


def _sort_label(directive: SortDirective) -> str:
    for option in Settings.SORT_OPTIONS:
        if (option["type"], option["value"]) == (directive.type, directive.value):
            return option["label"]
    return directive.slug


def _price_cell(card: ProductCard) -> Text:
    if card.discounted_price is None:
        return Text(card.price_label)
    return Text.assemble(
        (card.price_label, "strike dim"),
        " ",
        (format_price(card.discounted_price), "bold green"),
    )


class StorefrontApp(App[object]):
    """Terminal UI for browsing the storefront catalog."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "reload", "Reload"),
        Binding("c", "copy_url", "Copy Image URL"),
    ]

    def __init__(self, controller: CatalogController | None = None) -> None:
        super().__init__()
        self.controller = controller or CatalogController()
        self.controller.on_menu_close = self.close_menu
        self.settings = Settings()
        self._rendered_categories: tuple[str, ...] = ()
        self.status_message = ""

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        sort_buttons = [
            Button(
                option["label"],
                name=f"{option['type']}-{option['value']}",
                classes="sort-option",
            )
            for option in self.settings.SORT_OPTIONS
        ]

        yield Header()
        yield Container(
            Static("🛍️  Storefront", id="title"),
            Horizontal(
                Collapsible(
                    Button(
                        "All",
                        name=self.settings.DEFAULT_CATEGORY,
                        classes="category-option",
                    ),
                    title="Categories",
                    collapsed=True,
                    id="category_menu",
                ),
                Collapsible(
                    *sort_buttons,
                    title="Sort",
                    collapsed=True,
                    id="sort_menu",
                ),
                id="toolbar",
            ),
            Static("Loading catalog...", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="results_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure the table and start the initial catalog load."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        table.add_columns("Rating", "Reviews", "Title", "Price", "Offer")
        self.controller.subscribe(self.render_state)
        self.run_worker(self.controller.mount(), group="catalog")

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Dispatch category and sort menu choices to the controller."""
        button = event.button
        if button.name is None:
            return
        if button.has_class("category-option"):
            self.run_worker(
                self.controller.select_category(button.name),
                group="catalog",
            )
        elif button.has_class("sort-option"):
            self.run_worker(
                self.controller.select_sort(
                    SortDirective.from_slug(button.name)
                ),
                group="catalog",
            )

    def close_menu(self, menu: str) -> None:
        """Collapse the category or sort menu after a choice."""
        selector = _MENU_IDS.get(menu)
        if selector is None:
            return
        self.query_one(selector, Collapsible).collapsed = True

    # ── Rendering ────────────────────────────────────────

    def render_state(self, state: CatalogState) -> None:
        """Redraw everything derived from a controller snapshot."""
        if state.categories != self._rendered_categories:
            self._render_categories(state.categories)
        self.populate_table(state)
        self._render_status(state)

    def _render_categories(self, categories: tuple[str, ...]) -> None:
        menu = self.query_one("#category_menu", Collapsible)
        contents = menu.query_one(Collapsible.Contents)
        for button in contents.query(".category-option"):
            if button.name != self.settings.DEFAULT_CATEGORY:
                button.remove()
        contents.mount_all(
            Button(name, name=name, classes="category-option")
            for name in categories
        )
        self._rendered_categories = categories

    def populate_table(self, state: CatalogState) -> None:
        """Fill the DataTable with the current product list."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        table.clear()
        for product in state.products:
            card = ProductCard.from_product(product)
            table.add_row(
                Text(render_stars(card.rating), style="yellow"),
                f"({card.rating_count})",
                card.title[:60],
                _price_cell(card),
                Text(card.offer_label, style="bold white on dark_red")
                if card.has_offer
                else "",
                key=str(card.id),
            )

    def _render_status(self, state: CatalogState) -> None:
        if state.status is FetchStatus.FETCHING:
            message = "🔄 Loading products..."
        elif not state.products:
            message = "❌ No products"
        else:
            shown = state.shown_category
            category = (
                "All" if shown == self.settings.DEFAULT_CATEGORY else shown
            )
            message = (
                f"✅ {len(state.products)} products | {category} | "
                f"{_sort_label(state.shown_sort)}"
            )
        self.status_message = message
        self.query_one("#status", Static).update(message)

    # ── Actions ──────────────────────────────────────────

    def action_reload(self) -> None:
        """Refetch the current category with fresh offers."""
        self.run_worker(self.controller.refresh(), group="catalog")

    def action_copy_url(self) -> None:
        """Copy the selected product's image URL to the clipboard."""
        products = self.controller.products
        try:
            import pyperclip  # type: ignore[import-untyped]

            table = cast(
                DataTable[str | Text],
                self.query_one("#results_table", DataTable),
            )
            pyperclip.copy(products[table.cursor_row].image)
            self.notify("Image URL copied")
        except Exception:
            logger.error(
                "Failed to copy image URL to clipboard",
                exc_info=True,
            )
            self.notify("Install pyperclip", severity="warning")
