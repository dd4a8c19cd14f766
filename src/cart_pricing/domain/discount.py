"""Quantity-tier discount resolution."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import InvalidQuantity
from .models import DiscountTier


def resolve_rate(tiers: Iterable[DiscountTier], quantity: int) -> float:
    """Return the discount rate a line of ``quantity`` units qualifies for.

    Tiers are not cumulative: among all tiers whose ``min_quantity`` is
    reached, only the one with the greatest ``min_quantity`` applies.
    Returns 0.0 when no tier is reached.

    Raises:
        InvalidQuantity: If ``quantity`` is below 1.
    """
    if quantity < 1:
        raise InvalidQuantity(f"quantity must be at least 1: {quantity}")

    best: DiscountTier | None = None
    for tier in tiers:
        if tier.min_quantity > quantity:
            continue
        if best is None or tier.min_quantity > best.min_quantity:
            best = tier
    return best.rate if best is not None else 0.0
