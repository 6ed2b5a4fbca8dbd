# storefront/models/product.py

"""Product data model for the catalog view."""

from dataclasses import dataclass, field
from typing import Any

from storefront.exceptions import ParseError


@dataclass(frozen=True)
class Rating:
    """Average customer rating (0-5) and the number of votes."""

    rate: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class Offer:
    """A locally synthesized promotional discount.

    Offers exist only for display and are rebuilt on every fetch.
    """

    has_offer: bool = False
    discount: float = 0.0

    @property
    def percent(self) -> int:
        """Discount as a whole percentage for the offer badge."""
        return round(self.discount * 100)


NO_OFFER = Offer()


@dataclass(frozen=True)
class Product:
    """A single catalog listing as returned by the catalog service."""

    id: int
    title: str
    price: float
    description: str = ""
    category: str = ""
    image: str = ""
    rating: Rating = field(default_factory=Rating)
    offer: Offer = NO_OFFER

    @property
    def discounted_price(self) -> float:
        """Price after the active offer, rounded to cents."""
        return round(self.price * (1 - self.offer.discount), 2)

    @classmethod
    def from_json(cls, raw: Any) -> "Product":
        """Build a Product from one catalog JSON object.

        Raises ``ParseError`` when a required field is missing or has
        the wrong type.  The ``offer`` field is never read from the
        payload.
        """
        if not isinstance(raw, dict):
            raise ParseError(
                f"Expected product object, got {type(raw).__name__}"
            )
        try:
            rating_raw: Any = raw.get("rating") or {}
            if not isinstance(rating_raw, dict):
                raise TypeError("rating must be an object")
            title = raw["title"]
            if not isinstance(title, str):
                raise TypeError(f"title must be a string, got {title!r}")
            price = float(raw["price"])
            if price < 0:
                raise ValueError(f"negative price {price}")
            rate = float(rating_raw.get("rate", 0.0))
            if not 0 <= rate <= 5:
                raise ValueError(f"rating {rate} outside 0-5")
            count = int(rating_raw.get("count", 0))
            if count < 0:
                raise ValueError(f"negative rating count {count}")
            return cls(
                id=int(raw["id"]),
                title=title,
                price=price,
                description=str(raw.get("description", "")),
                category=str(raw.get("category", "")),
                image=str(raw.get("image", "")),
                rating=Rating(rate=rate, count=count),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ParseError(
                f"Malformed product {raw.get('id', '?')!r}: {exc}"
            ) from exc
