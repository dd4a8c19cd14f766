"""Domain exceptions raised by the pricing engine."""

from __future__ import annotations


class CartDomainError(Exception):
    """Base class for recoverable storefront domain errors."""


class InvalidQuantity(CartDomainError, ValueError):
    """A quantity below 1 was supplied where a positive one is required."""


class StockExceeded(CartDomainError):
    """Requested quantity is larger than the product's stock."""

    def __init__(
        self, product_id: str, requested: int, stock: int, message: str | None = None,
    ):
        super().__init__(
            message
            or f"Requested {requested} of {product_id!r} but only {stock} in stock"
        )
        self.product_id = product_id
        self.requested = requested
        self.stock = stock


class OutOfStock(StockExceeded):
    """No units left to put in the cart."""

    def __init__(self, product_id: str):
        super().__init__(product_id, 1, 0, f"{product_id!r} is out of stock")


class ProductNotFound(CartDomainError, KeyError):
    def __init__(self, product_id: str):
        super().__init__(product_id)
        self.product_id = product_id

    def __str__(self) -> str:
        return f"Unknown product: {self.product_id!r}"


class DuplicateCouponCode(CartDomainError):
    def __init__(self, code: str):
        super().__init__(f"Coupon code already exists: {code!r}")
        self.code = code


class CouponNotFound(CartDomainError, KeyError):
    def __init__(self, code: str):
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return f"Unknown coupon code: {self.code!r}"


class InvalidCoupon(CartDomainError, ValueError):
    """Coupon definition rejected at registration."""


class CouponNotApplicable(CartDomainError):
    """Coupon exists but cannot be used on the current total."""

    def __init__(self, code: str, total: int, min_total: int):
        super().__init__(
            f"Percentage coupon {code!r} requires a total of at least "
            f"{min_total:,} (current total: {total:,})"
        )
        self.code = code
        self.total = total
        self.min_total = min_total


class InvalidProduct(CartDomainError, ValueError):
    """Product definition rejected by the catalog."""
