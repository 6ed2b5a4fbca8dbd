# storefront/models/sort_directive.py

"""Sort directive: which field orders the catalog, and in which direction."""

from dataclasses import dataclass

SORT_TYPES: tuple[str, ...] = ("price", "rating", "name")
SORT_VALUES: tuple[str, ...] = ("asc", "desc")


@dataclass(frozen=True)
class SortDirective:
    """One of the six (field, direction) combinations."""

    type: str = "price"
    value: str = "asc"

    def __post_init__(self) -> None:
        if self.type not in SORT_TYPES:
            raise ValueError(f"Unknown sort type: {self.type!r}")
        if self.value not in SORT_VALUES:
            raise ValueError(f"Unknown sort direction: {self.value!r}")

    @property
    def descending(self) -> bool:
        return self.value == "desc"

    @property
    def slug(self) -> str:
        """CLI form, e.g. ``price-asc``."""
        return f"{self.type}-{self.value}"

    @classmethod
    def from_slug(cls, slug: str) -> "SortDirective":
        """Parse ``price-asc`` style strings."""
        sort_type, _, value = slug.partition("-")
        return cls(type=sort_type, value=value)
