"""Seed catalog used when storage holds nothing usable."""

from .domain.models import Coupon, DiscountTier, DiscountType, Product

DEFAULT_PRODUCTS: tuple[Product, ...] = (
    Product(
        id="p1",
        name="Product 1",
        price=10000,
        stock=20,
        discounts=(DiscountTier(10, 0.1), DiscountTier(20, 0.2)),
        description="Best-selling item",
    ),
    Product(
        id="p2",
        name="Product 2",
        price=20000,
        stock=20,
        discounts=(DiscountTier(10, 0.15),),
        description="Recommended item",
        is_recommended=True,
    ),
    Product(
        id="p3",
        name="Product 3",
        price=30000,
        stock=20,
        discounts=(DiscountTier(10, 0.2), DiscountTier(30, 0.25)),
        description="Premium item",
    ),
)

DEFAULT_COUPONS: tuple[Coupon, ...] = (
    Coupon(
        code="AMOUNT5000",
        name="5,000 off",
        discount_type=DiscountType.AMOUNT,
        discount_value=5000,
    ),
    Coupon(
        code="PERCENT10",
        name="10% off",
        discount_type=DiscountType.PERCENTAGE,
        discount_value=10,
    ),
)
