# tests/test_offer_generator.py

"""Tests for the randomized offer generator."""

import random
import unittest
from unittest.mock import MagicMock

from helpers import make_product

from storefront.filters.offer_generator import OfferGenerator
from storefront.models.product import NO_OFFER


def _scripted_rng(random_values: list[float], uniform_values: list[float]) -> MagicMock:
    """A Random stand-in that replays fixed draws."""
    rng = MagicMock(spec=random.Random)
    rng.random.side_effect = random_values
    rng.uniform.side_effect = uniform_values
    return rng


class TestGenerate(unittest.TestCase):
    """OfferGenerator.generate draw semantics."""

    def test_draw_below_threshold_grants_offer(self) -> None:
        """random() < 0.2 yields an offer of floor(uniform)/100."""
        gen = OfferGenerator(rng=_scripted_rng([0.1], [13.7]))
        offer = gen.generate()
        self.assertTrue(offer.has_offer)
        self.assertEqual(offer.discount, 0.13)

    def test_draw_at_threshold_no_offer(self) -> None:
        """random() == 0.2 is not below the threshold."""
        rng = _scripted_rng([0.2], [])
        offer = OfferGenerator(rng=rng).generate()
        self.assertIs(offer, NO_OFFER)
        rng.uniform.assert_not_called()

    def test_upper_bound_clamped(self) -> None:
        """uniform() returning exactly 20 still gives at most 19%."""
        gen = OfferGenerator(rng=_scripted_rng([0.0], [20.0]))
        self.assertEqual(gen.generate().discount, 0.19)

    def test_zero_percent_offer_possible(self) -> None:
        """A flagged offer may carry a 0% discount."""
        gen = OfferGenerator(rng=_scripted_rng([0.05], [0.4]))
        offer = gen.generate()
        self.assertTrue(offer.has_offer)
        self.assertEqual(offer.discount, 0.0)

    def test_discounts_are_integer_percent_below_twenty(self) -> None:
        """Every discount is k/100 with k in 0..19; none when no offer."""
        gen = OfferGenerator(rng=random.Random(1234))
        for _ in range(2000):
            offer = gen.generate()
            if offer.has_offer:
                self.assertIn(
                    round(offer.discount * 100), range(20)
                )
                self.assertAlmostEqual(
                    offer.discount * 100, round(offer.discount * 100)
                )
                self.assertLess(offer.discount, 0.20)
            else:
                self.assertEqual(offer.discount, 0.0)

    def test_offer_frequency_near_twenty_percent(self) -> None:
        """Roughly one product in five gets an offer."""
        gen = OfferGenerator(rng=random.Random(42))
        n = 10_000
        hits = sum(1 for _ in range(n) if gen.generate().has_offer)
        self.assertGreater(hits / n, 0.17)
        self.assertLess(hits / n, 0.23)

    def test_seeded_generators_agree(self) -> None:
        """Same seed, same offers."""
        a = OfferGenerator(rng=random.Random(7))
        b = OfferGenerator(rng=random.Random(7))
        self.assertEqual(
            [a.generate() for _ in range(50)],
            [b.generate() for _ in range(50)],
        )


class TestEnrich(unittest.TestCase):
    """OfferGenerator.enrich over product lists."""

    def test_returns_new_products_in_same_order(self) -> None:
        """Input products are untouched; output keeps order."""
        products = [make_product(i, f"P{i}", float(i)) for i in range(1, 6)]
        gen = OfferGenerator(rng=random.Random(3), probability=1.0)
        enriched = gen.enrich(products)
        self.assertEqual([p.id for p in enriched], [1, 2, 3, 4, 5])
        self.assertTrue(all(p.offer.has_offer for p in enriched))
        self.assertTrue(all(p.offer is NO_OFFER for p in products))

    def test_probability_zero_never_offers(self) -> None:
        """probability=0 disables offers."""
        products = [make_product(i, f"P{i}", 1.0) for i in range(20)]
        enriched = OfferGenerator(probability=0.0).enrich(products)
        self.assertFalse(any(p.offer.has_offer for p in enriched))

    def test_each_product_drawn_independently(self) -> None:
        """One draw per product, in order."""
        rng = _scripted_rng([0.5, 0.1, 0.9], [5.2])
        enriched = OfferGenerator(rng=rng).enrich(
            [make_product(i, "P", 1.0) for i in range(3)]
        )
        self.assertEqual(
            [p.offer.has_offer for p in enriched], [False, True, False]
        )
        self.assertEqual(enriched[1].offer.discount, 0.05)

    def test_empty_list(self) -> None:
        """Enriching nothing returns nothing."""
        self.assertEqual(OfferGenerator().enrich([]), [])


if __name__ == "__main__":
    unittest.main()
