"""Coupon application and the coupon set.

``apply_coupon`` is pure arithmetic on a pre-coupon total. ``CouponBook``
is the admin-side catalogue of coupons that exist; which one a cart has
selected is tracked by the cart, not here.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .errors import CouponNotApplicable, CouponNotFound, DuplicateCouponCode, InvalidCoupon
from .models import Coupon, DiscountType
from .pricing import floor_scaled, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CouponApplication:
    post_coupon_total: int
    applied_discount: int


def apply_coupon(coupon: Coupon | None, pre_coupon_total: int) -> CouponApplication:
    """Compute the total after ``coupon``. The result never drops below 0.

    Amount coupons subtract their value; percentage coupons scale the whole
    total and floor. A percentage above 100 simply yields 0.
    """
    if coupon is None or pre_coupon_total <= 0:
        return CouponApplication(
            post_coupon_total=max(0, pre_coupon_total), applied_discount=0,
        )

    value = to_decimal(coupon.discount_value)
    if coupon.discount_type is DiscountType.AMOUNT:
        post = math.floor(pre_coupon_total - value)
    else:
        post = floor_scaled(pre_coupon_total, 1 - value / 100)
    post = max(0, post)
    return CouponApplication(
        post_coupon_total=post, applied_discount=pre_coupon_total - post,
    )


def is_coupon_eligible(
    coupon: Coupon, pre_coupon_total: int, min_total: int | None,
) -> bool:
    """False only for a percentage coupon on a total under ``min_total``."""
    if min_total is None or coupon.discount_type is not DiscountType.PERCENTAGE:
        return True
    return pre_coupon_total >= min_total


def check_coupon_eligible(
    coupon: Coupon, pre_coupon_total: int, min_total: int | None,
) -> None:
    """Raise ``CouponNotApplicable`` if ``coupon`` cannot be used on the total."""
    if not is_coupon_eligible(coupon, pre_coupon_total, min_total):
        raise CouponNotApplicable(coupon.code, pre_coupon_total, min_total)


def validate_coupon(coupon: Coupon) -> None:
    """Admin-side checks for a coupon about to be registered.

    Raises:
        InvalidCoupon: On a blank code or name, a non-finite or non-positive
            value, or a percentage above 100.
    """
    if not coupon.code.strip():
        raise InvalidCoupon("Coupon code must not be empty")
    if not coupon.name.strip():
        raise InvalidCoupon("Coupon name must not be empty")
    if not math.isfinite(coupon.discount_value):
        raise InvalidCoupon(
            f"Discount value must be a finite number: {coupon.discount_value}"
        )
    if coupon.discount_value <= 0:
        raise InvalidCoupon(
            f"Discount value must be positive: {coupon.discount_value}"
        )
    if (
        coupon.discount_type is DiscountType.PERCENTAGE
        and coupon.discount_value > 100
    ):
        raise InvalidCoupon(
            f"Percentage discount cannot exceed 100: {coupon.discount_value}"
        )


class CouponBook:
    """Registered coupons keyed by case-sensitive code, in insertion order."""

    def __init__(self, coupons: Iterable[Coupon] = ()):
        self._coupons: dict[str, Coupon] = {}
        for coupon in coupons:
            self.add(coupon)

    def add(self, coupon: Coupon) -> Coupon:
        """Register ``coupon``.

        Raises:
            InvalidCoupon: If the definition fails validation.
            DuplicateCouponCode: If the code is taken. The existing coupon
                is kept as is.
        """
        validate_coupon(coupon)
        if coupon.code in self._coupons:
            raise DuplicateCouponCode(coupon.code)
        self._coupons[coupon.code] = coupon
        logger.info("Registered coupon %s (%s)", coupon.code, coupon.discount_type.value)
        return coupon

    def remove(self, code: str) -> Coupon:
        try:
            coupon = self._coupons.pop(code)
        except KeyError:
            raise CouponNotFound(code) from None
        logger.info("Removed coupon %s", code)
        return coupon

    def get(self, code: str) -> Coupon:
        try:
            return self._coupons[code]
        except KeyError:
            raise CouponNotFound(code) from None

    def __contains__(self, code: object) -> bool:
        return code in self._coupons

    def __iter__(self) -> Iterator[Coupon]:
        return iter(list(self._coupons.values()))

    def __len__(self) -> int:
        return len(self._coupons)
