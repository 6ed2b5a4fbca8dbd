# tests/helpers.py

"""Catalog payloads and fakes shared by the test modules."""

import random
import threading
from typing import Any

from storefront.exceptions import NetworkError
from storefront.filters.offer_generator import OfferGenerator
from storefront.models.product import Product, Rating


def product_json(
    pid: int,
    title: str,
    price: float,
    rate: float = 3.0,
    count: int = 10,
    category: str = "electronics",
) -> dict[str, Any]:
    """One product object as served by the catalog API."""
    return {
        "id": pid,
        "title": title,
        "price": price,
        "description": f"{title} description",
        "category": category,
        "image": f"https://fakestoreapi.com/img/{pid}.jpg",
        "rating": {"rate": rate, "count": count},
    }


def make_product(
    pid: int, title: str, price: float, rate: float = 3.0,
) -> Product:
    return Product(
        id=pid,
        title=title,
        price=price,
        rating=Rating(rate=rate, count=1),
    )


CATALOG: list[dict[str, Any]] = [
    product_json(1, "Backpack", 109.95, 3.9, 120, "men's clothing"),
    product_json(2, "Casual T-Shirt", 22.3, 4.1, 259, "men's clothing"),
    product_json(3, "gold ring", 695.0, 4.6, 400, "jewelery"),
    product_json(4, "SSD 1TB", 109.0, 4.8, 319, "electronics"),
]

CATEGORIES = ["electronics", "jewelery", "men's clothing", "women's clothing"]


def no_offers() -> OfferGenerator:
    """An offer generator that never grants a discount."""
    return OfferGenerator(rng=random.Random(0), probability=0.0)


class FakeCatalogClient:
    """In-memory stand-in for CatalogClient.

    ``responses`` maps a category to a product list or an exception to
    raise.  Every call is recorded in ``requested``.
    """

    def __init__(
        self,
        responses: dict[str, Any] | None = None,
        categories: Any = None,
    ) -> None:
        self.responses = responses or {}
        self.categories = categories if categories is not None else []
        self.requested: list[str] = []
        self.closed = False
        self.gates: dict[str, threading.Event] = {}

    def fetch_products(self, category: str = "all") -> list[Product]:
        self.requested.append(category)
        gate = self.gates.get(category)
        if gate is not None:
            gate.wait(timeout=5)
        result = self.responses.get(category, [])
        if isinstance(result, Exception):
            raise result
        return [Product.from_json(item) for item in result]

    def fetch_categories(self) -> list[str]:
        if isinstance(self.categories, Exception):
            raise self.categories
        return list(self.categories)

    def close(self) -> None:
        self.closed = True


def offline() -> NetworkError:
    return NetworkError("Connection refused", url="https://fakestoreapi.com")
