"""Domain entities and value objects for the storefront.

Products and coupons are frozen dataclasses: an admin edit produces a new
instance rather than mutating one that a cart line may be pointing at.
Money is kept in integer minor units throughout.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DiscountType(Enum):
    """How a coupon's ``discount_value`` is interpreted."""

    AMOUNT = "amount"
    PERCENTAGE = "percentage"


@dataclass(frozen=True)
class DiscountTier:
    """Minimum purchase quantity that unlocks a discount rate."""

    min_quantity: int
    rate: float

    def __post_init__(self) -> None:
        if self.min_quantity < 1:
            raise ValueError(
                f"min_quantity must be at least 1: {self.min_quantity}"
            )
        if not 0 < self.rate < 1:
            raise ValueError(f"rate must be in (0, 1): {self.rate}")


@dataclass(frozen=True)
class Product:
    """A catalog item.

    Attributes:
        id: Unique product identifier.
        name: Display name.
        price: Unit price in minor currency units (positive).
        stock: Units available (non-negative). A cart line never exceeds it.
        discounts: Quantity tiers, kept sorted ascending by ``min_quantity``.
        description: Free text used by catalog search.
        is_recommended: Merchandising flag carried through from storage.
    """

    id: str
    name: str
    price: int
    stock: int
    discounts: tuple[DiscountTier, ...] = ()
    description: str = ""
    is_recommended: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("product id must not be empty")
        if self.price <= 0:
            raise ValueError(f"price must be positive: {self.price}")
        if self.stock < 0:
            raise ValueError(f"stock must be non-negative: {self.stock}")
        tiers = tuple(sorted(self.discounts, key=lambda t: t.min_quantity))
        seen = [t.min_quantity for t in tiers]
        if len(set(seen)) != len(seen):
            raise ValueError(f"duplicate discount tier quantities: {seen}")
        # frozen: bypass __setattr__ to store the normalised ordering
        object.__setattr__(self, "discounts", tiers)


@dataclass(frozen=True)
class Coupon:
    """A coupon definition.

    ``discount_value`` is a currency amount for ``AMOUNT`` coupons and a
    percentage (0-100) for ``PERCENTAGE`` coupons. Range checks belong to
    coupon registration, not to the value itself, so that the applier can
    still be exercised with degenerate inputs.
    """

    code: str
    name: str
    discount_type: DiscountType
    discount_value: float


@dataclass
class CartLine:
    """One product and its requested quantity. Owned by ``Cart``."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class LineSnapshot:
    product_id: str
    name: str
    quantity: int
    unit_price: int
    discount_rate: float
    subtotal: int


@dataclass(frozen=True)
class CartSnapshot:
    """Fully computed, immutable view of a cart for rendering.

    ``coupon_eligible`` is False when a coupon is selected but the current
    total falls below the configured percentage-coupon threshold; in that
    case the coupon stays selected and contributes no discount.
    """

    lines: tuple[LineSnapshot, ...] = ()
    total_item_count: int = 0
    undiscounted_total: int = 0
    pre_coupon_total: int = 0
    post_coupon_total: int = 0
    applied_discount: int = 0
    applied_coupon: Coupon | None = None
    coupon_eligible: bool = True

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def line_discount(self) -> int:
        """Amount saved by quantity tiers alone."""
        return self.undiscounted_total - self.pre_coupon_total

    @property
    def total_discount(self) -> int:
        return self.undiscounted_total - self.post_coupon_total
