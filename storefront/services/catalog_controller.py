# storefront/services/catalog_controller.py

"""Owns the catalog view state and runs the fetch-enrich-sort cycle."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum

from storefront.config.settings import Settings
from storefront.exceptions import FetchError
from storefront.filters.offer_generator import OfferGenerator
from storefront.filters.product_sorter import ProductSorter
from storefront.models.product import Product
from storefront.models.sort_directive import SortDirective
from storefront.services.catalog_client import CatalogClient

logger = logging.getLogger("storefront.controller")

CATEGORY_MENU = "categories"
SORT_MENU = "sort"


class FetchStatus(Enum):
    """Whether a product request is outstanding."""

    IDLE = "idle"
    FETCHING = "fetching"


def _default_sort() -> SortDirective:
    return SortDirective(**Settings.DEFAULT_SORT)


@dataclass(frozen=True)
class CatalogState:
    """Immutable snapshot of everything the display layer renders."""

    category: str = Settings.DEFAULT_CATEGORY
    sort: SortDirective = field(default_factory=_default_sort)
    products: tuple[Product, ...] = ()
    categories: tuple[str, ...] = ()
    status: FetchStatus = FetchStatus.IDLE
    generation: int = 0  # request that produced ``products``
    # selection that produced ``products``; lags behind on failed fetches
    shown_category: str = Settings.DEFAULT_CATEGORY
    shown_sort: SortDirective = field(default_factory=_default_sort)


StateListener = Callable[[CatalogState], None]
MenuCloser = Callable[[str], None]


class CatalogController:
    """Coordinates catalog fetches for one storefront view.

    Selections replace state and trigger :meth:`refresh`.  Each refresh
    takes a new request generation; a response is applied only if no
    newer request was issued meanwhile, so rapid selection changes can
    never leave an older result on screen.

    Fetch failures are logged and swallowed: the last successfully
    loaded products (or categories) stay visible.
    """

    def __init__(
        self,
        client: CatalogClient | None = None,
        offers: OfferGenerator | None = None,
        on_change: StateListener | None = None,
        on_menu_close: MenuCloser | None = None,
        category: str = Settings.DEFAULT_CATEGORY,
        sort: SortDirective | None = None,
    ) -> None:
        self.client = client or CatalogClient()
        self.offers = offers or OfferGenerator()
        sort = sort or _default_sort()
        self._state = CatalogState(
            category=category,
            sort=sort,
            shown_category=category,
            shown_sort=sort,
        )
        self._latest_generation = 0
        self._in_flight = 0
        self._listeners: list[StateListener] = []
        if on_change is not None:
            self._listeners.append(on_change)
        self.on_menu_close = on_menu_close

    # ── State access ─────────────────────────────────────

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def products(self) -> list[Product]:
        return list(self._state.products)

    @property
    def categories(self) -> list[str]:
        return list(self._state.categories)

    def subscribe(self, listener: StateListener) -> None:
        """Call *listener* with the new snapshot after every change."""
        self._listeners.append(listener)

    def _update(self, **changes: object) -> None:
        self._state = replace(self._state, **changes)  # type: ignore[arg-type]
        for listener in self._listeners:
            listener(self._state)

    def _close_menu(self, menu: str) -> None:
        if self.on_menu_close is not None:
            self.on_menu_close(menu)

    # ── User selections ──────────────────────────────────

    async def mount(self) -> None:
        """Load the category catalog and the initial product list."""
        await asyncio.gather(self.load_categories(), self.refresh())

    async def select_category(self, name: str) -> bool:
        """Switch category (``"all"`` for everything) and refetch."""
        logger.info("Category selected: %s", name)
        self._update(category=name)
        self._close_menu(CATEGORY_MENU)
        return await self.refresh()

    async def select_sort(self, directive: SortDirective) -> bool:
        """Switch sort directive and rerun the full fetch cycle."""
        logger.info("Sort selected: %s", directive.slug)
        self._update(sort=directive)
        self._close_menu(SORT_MENU)
        return await self.refresh()

    # ── Fetch cycle ──────────────────────────────────────

    async def refresh(self) -> bool:
        """Fetch, enrich and sort products for the current selection.

        Returns ``True`` when the displayed list was replaced, ``False``
        when the fetch failed or its response was stale.
        """
        self._latest_generation += 1
        generation = self._latest_generation
        category = self._state.category
        directive = self._state.sort

        self._in_flight += 1
        self._update(status=FetchStatus.FETCHING)
        try:
            fetched = await asyncio.to_thread(
                self.client.fetch_products, category
            )
        except FetchError as exc:
            logger.error(
                "Failed to fetch products (category=%s): %s",
                category,
                exc,
                exc_info=True,
            )
            return False
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._update(status=FetchStatus.IDLE)

        if generation != self._latest_generation:
            logger.debug(
                "Discarding stale response #%d (latest is #%d)",
                generation,
                self._latest_generation,
            )
            return False

        enriched = self.offers.enrich(fetched)
        ordered = ProductSorter.sort(enriched, directive)
        self._update(
            products=tuple(ordered),
            generation=generation,
            shown_category=category,
            shown_sort=directive,
        )
        logger.info(
            "Displaying %d products (category=%s, sort=%s)",
            len(ordered),
            category,
            directive.slug,
        )
        return True

    async def load_categories(self) -> bool:
        """Fetch the category catalog once; keep it empty on failure."""
        try:
            categories = await asyncio.to_thread(
                self.client.fetch_categories
            )
        except FetchError as exc:
            logger.error(
                "Failed to fetch categories: %s", exc, exc_info=True
            )
            return False
        self._update(categories=tuple(categories))
        return True
