# storefront/ui/product_card.py

"""Display-ready view of a product, shared by the TUI and the CLI."""

from dataclasses import asdict, dataclass

from storefront.models.product import Product

_STAR_COUNT = 5


@dataclass(frozen=True)
class ProductCard:
    """Everything a product tile shows, and nothing more."""

    id: int
    title: str
    image: str
    price: float
    discounted_price: float | None
    rating: float
    rating_count: int
    has_offer: bool
    offer_percent: int

    @classmethod
    def from_product(cls, product: Product) -> "ProductCard":
        offer = product.offer
        return cls(
            id=product.id,
            title=product.title,
            image=product.image,
            price=product.price,
            discounted_price=(
                product.discounted_price if offer.has_offer else None
            ),
            rating=product.rating.rate,
            rating_count=product.rating.count,
            has_offer=offer.has_offer,
            offer_percent=offer.percent if offer.has_offer else 0,
        )

    @property
    def price_label(self) -> str:
        return format_price(self.price)

    @property
    def offer_label(self) -> str:
        """Badge text, empty when there is no offer."""
        if not self.has_offer:
            return ""
        return f"Offer: {self.offer_percent}% off"

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def format_price(amount: float) -> str:
    return f"${amount:,.2f}"


def render_stars(rate: float) -> str:
    """Five-star bar with the rating rounded to the nearest star."""
    clamped = max(0.0, min(float(_STAR_COUNT), rate))
    full = int(clamped + 0.5)
    return "★" * full + "☆" * (_STAR_COUNT - full)
