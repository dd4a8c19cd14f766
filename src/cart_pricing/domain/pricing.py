"""Per-line pricing: stock check, tier discount, floored subtotal."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal

from .discount import resolve_rate
from .errors import InvalidQuantity, StockExceeded
from .models import Product


@dataclass(frozen=True)
class LinePrice:
    unit_price: int
    quantity: int
    discount_rate: float
    subtotal: int

    @property
    def undiscounted(self) -> int:
        return self.unit_price * self.quantity


def floor_scaled(amount: int, factor: Decimal) -> int:
    """Floor ``amount * factor`` to an integer without float drift.

    ``100000 * (1 - 0.9)`` in binary floating point is not exactly 10000;
    doing the multiplication in ``Decimal`` keeps the floor honest.
    """
    scaled = Decimal(amount) * factor
    return int(scaled.to_integral_value(rounding=ROUND_FLOOR))


def to_decimal(value: float) -> Decimal:
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"non-finite value: {value}")
    return Decimal(str(value))


def price_line(product: Product, quantity: int) -> LinePrice:
    """Price ``quantity`` units of ``product``.

    Raises:
        InvalidQuantity: If ``quantity`` is below 1.
        StockExceeded: If ``quantity`` is above ``product.stock``. Callers
            decide whether to clamp or reject.
    """
    if quantity < 1:
        raise InvalidQuantity(f"quantity must be at least 1: {quantity}")
    if quantity > product.stock:
        raise StockExceeded(product.id, quantity, product.stock)

    rate = resolve_rate(product.discounts, quantity)
    subtotal = floor_scaled(product.price * quantity, 1 - to_decimal(rate))
    return LinePrice(
        unit_price=product.price,
        quantity=quantity,
        discount_rate=rate,
        subtotal=subtotal,
    )
