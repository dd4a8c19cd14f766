"""Tests for cart_pricing.domain.discount."""

import pytest

from cart_pricing.domain.discount import resolve_rate
from cart_pricing.domain.errors import InvalidQuantity
from cart_pricing.domain.models import DiscountTier

TIERS = (DiscountTier(10, 0.1), DiscountTier(20, 0.2))


class TestResolveRate:
    def test_below_first_tier_is_zero(self):
        assert resolve_rate(TIERS, 9) == 0.0

    def test_exactly_at_tier(self):
        assert resolve_rate(TIERS, 10) == 0.1
        assert resolve_rate(TIERS, 20) == 0.2

    def test_between_tiers_uses_lower(self):
        assert resolve_rate(TIERS, 15) == 0.1

    def test_highest_tier_wins_not_cumulative(self):
        assert resolve_rate(TIERS, 100) == 0.2

    def test_no_tiers(self):
        assert resolve_rate((), 50) == 0.0

    def test_unsorted_input_still_picks_greatest_min_quantity(self):
        tiers = [DiscountTier(20, 0.2), DiscountTier(5, 0.05), DiscountTier(10, 0.1)]
        assert resolve_rate(tiers, 12) == 0.1

    def test_zero_quantity_raises(self):
        with pytest.raises(InvalidQuantity):
            resolve_rate(TIERS, 0)

    def test_monotonic_in_quantity(self):
        tiers = (DiscountTier(3, 0.05), DiscountTier(10, 0.15), DiscountTier(30, 0.25))
        rates = [resolve_rate(tiers, q) for q in range(1, 50)]
        assert rates == sorted(rates)
