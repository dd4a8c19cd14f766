"""Domain layer: entities, pricing rules, cart aggregate and storage interface."""

from .cart import Cart
from .catalog import ProductCatalog
from .coupon import CouponApplication, CouponBook, apply_coupon
from .discount import resolve_rate
from .errors import (
    CartDomainError,
    CouponNotApplicable,
    CouponNotFound,
    DuplicateCouponCode,
    InvalidCoupon,
    InvalidProduct,
    InvalidQuantity,
    OutOfStock,
    ProductNotFound,
    StockExceeded,
)
from .models import (
    CartLine,
    CartSnapshot,
    Coupon,
    DiscountTier,
    DiscountType,
    LineSnapshot,
    Product,
)
from .pricing import LinePrice, price_line
from .storage import StateStorage

__all__ = [
    "Cart",
    "CartDomainError",
    "CartLine",
    "CartSnapshot",
    "Coupon",
    "CouponApplication",
    "CouponBook",
    "CouponNotApplicable",
    "CouponNotFound",
    "DiscountTier",
    "DiscountType",
    "DuplicateCouponCode",
    "InvalidCoupon",
    "InvalidProduct",
    "InvalidQuantity",
    "LinePrice",
    "LineSnapshot",
    "OutOfStock",
    "Product",
    "ProductCatalog",
    "ProductNotFound",
    "StateStorage",
    "StockExceeded",
    "apply_coupon",
    "price_line",
    "resolve_rate",
]
