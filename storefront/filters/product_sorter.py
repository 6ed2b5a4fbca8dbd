# storefront/filters/product_sorter.py

"""Stable ordering of catalog products by a sort directive."""

import unicodedata
from collections.abc import Callable
from typing import Any

from storefront.models.product import Product
from storefront.models.sort_directive import SortDirective


def collation_key(text: str) -> tuple[str, str]:
    """Natural alphabetical key: accent- and case-insensitive first.

    The original string breaks ties so that "apple" and "Apple" still
    have a fixed relative order.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(
        ch for ch in decomposed if not unicodedata.combining(ch)
    )
    return base.casefold(), text


_SORT_KEYS: dict[str, Callable[[Product], Any]] = {
    "price": lambda p: p.price,
    "rating": lambda p: p.rating.rate,
    "name": lambda p: collation_key(p.title),
}


class ProductSorter:
    """Order products for display."""

    @staticmethod
    def sort(
        products: list[Product],
        directive: SortDirective,
    ) -> list[Product]:
        """Return a new list ordered by *directive*.

        ``sorted`` is stable in both directions, so products with equal
        keys keep their fetched order and re-sorting is idempotent.
        """
        return sorted(
            products,
            key=_SORT_KEYS[directive.type],
            reverse=directive.descending,
        )
