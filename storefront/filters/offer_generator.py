# storefront/filters/offer_generator.py

"""Randomized promotional offers attached to freshly fetched products."""

import logging
import math
import random
from dataclasses import replace

from storefront.config.settings import Settings
from storefront.models.product import NO_OFFER, Offer, Product

logger = logging.getLogger("storefront.offers")


class OfferGenerator:
    """Draw offers from an injectable random source.

    Each product independently has ``OFFER_PROBABILITY`` chance of an
    offer; the discount is a whole percentage in
    ``[0, MAX_DISCOUNT_PERCENT)`` divided by 100.  Pass a seeded
    :class:`random.Random` to make the draws reproducible.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        probability: float | None = None,
        max_percent: int | None = None,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.probability = (
            Settings.OFFER_PROBABILITY if probability is None else probability
        )
        self.max_percent = (
            Settings.MAX_DISCOUNT_PERCENT if max_percent is None else max_percent
        )

    def generate(self) -> Offer:
        """Draw a single offer."""
        if self._rng.random() < self.probability:
            percent = math.floor(self._rng.uniform(0, self.max_percent))
            # uniform() may return the upper bound itself
            percent = min(percent, self.max_percent - 1)
            return Offer(has_offer=True, discount=percent / 100)
        return NO_OFFER

    def enrich(self, products: list[Product]) -> list[Product]:
        """Return copies of *products* with a fresh offer each."""
        enriched = [replace(p, offer=self.generate()) for p in products]
        offered = sum(1 for p in enriched if p.offer.has_offer)
        logger.debug(
            "Attached offers to %d of %d products", offered, len(enriched)
        )
        return enriched
