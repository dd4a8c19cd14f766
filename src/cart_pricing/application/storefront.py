"""Session boundary between the UI and the pricing engine.

A ``StorefrontSession`` owns one catalog, one coupon book and one cart.
Everything a shopper or admin can do goes through it, and every command
returns an ``OperationResult`` rather than raising. There is no module
level state: two sessions never share a cart.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from ..config import PricingConfig
from ..domain.cart import Cart
from ..domain.catalog import ProductCatalog
from ..domain.coupon import CouponBook
from ..domain.errors import CartDomainError
from ..domain.models import CartSnapshot, Coupon, DiscountTier, Product
from ..domain.storage import StateStorage
from .results import OperationResult

logger = logging.getLogger(__name__)


class StorefrontSession:
    """One shopping session plus the admin operations that affect it.

    Args:
        products: Already-deserialized product catalog.
        coupons: Already-deserialized coupon set.
        config: Pricing settings; defaults to ``PricingConfig()``.
        storage: Optional storage adapter. Admin changes are written to it
            after they succeed. A failed write is reported as a warning and
            never rolls back or blocks the in-memory change.
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        coupons: Iterable[Coupon] = (),
        config: PricingConfig | None = None,
        storage: StateStorage | None = None,
    ) -> None:
        self.config = config or PricingConfig()
        self.catalog = ProductCatalog(products)
        self.coupons = CouponBook(coupons)
        self.cart = Cart(
            self.catalog,
            min_percentage_total=self.config.percentage_coupon_min_total,
        )
        self._storage = storage

    @classmethod
    def from_storage(
        cls, storage: StateStorage, config: PricingConfig | None = None,
    ) -> StorefrontSession:
        return cls(
            products=storage.load_products(),
            coupons=storage.load_coupons(),
            config=config,
            storage=storage,
        )

    # ------------------------------------------------------------------ #
    #  Queries                                                             #
    # ------------------------------------------------------------------ #

    def snapshot(self) -> CartSnapshot:
        return self.cart.snapshot()

    def search_products(self, term: str = "") -> list[Product]:
        return self.catalog.search(term)

    def remaining_stock(self, product_id: str) -> int:
        if product_id not in self.catalog:
            return 0
        return self.cart.remaining_stock(self.catalog[product_id])

    # ------------------------------------------------------------------ #
    #  Shopper commands                                                    #
    # ------------------------------------------------------------------ #

    def add_to_cart(self, product_id: str, quantity: int = 1) -> OperationResult:
        try:
            product = self.catalog.require(product_id)
            before = self.cart.quantity_of(product_id)
            after = self.cart.add_product(product, quantity)
        except CartDomainError as exc:
            return self._failed("add_to_cart", exc)

        if after < before + quantity:
            return OperationResult.warning(
                f"Only {product.stock} of {product.name} available; "
                f"cart holds {after}",
                snapshot=self.snapshot(),
            )
        return OperationResult.success(
            f"Added {product.name} to cart", snapshot=self.snapshot(),
        )

    def update_quantity(self, product_id: str, quantity: int) -> OperationResult:
        try:
            result = self.cart.set_quantity(product_id, quantity)
        except CartDomainError as exc:
            return self._failed("update_quantity", exc)
        if result == 0:
            return OperationResult.success(
                "Removed item from cart", snapshot=self.snapshot(),
            )
        return OperationResult.success(
            "Quantity updated", snapshot=self.snapshot(),
        )

    def remove_from_cart(self, product_id: str) -> OperationResult:
        self.cart.remove_product(product_id)
        return OperationResult.success(
            "Removed item from cart", snapshot=self.snapshot(),
        )

    def apply_coupon(self, code: str) -> OperationResult:
        try:
            coupon = self.coupons.get(code)
            self.cart.apply_coupon(coupon)
        except CartDomainError as exc:
            return self._failed("apply_coupon", exc)
        return OperationResult.success(
            f"Coupon {coupon.code} applied", snapshot=self.snapshot(),
        )

    def clear_coupon(self) -> OperationResult:
        self.cart.clear_coupon()
        return OperationResult.success("Coupon removed", snapshot=self.snapshot())

    def checkout(self) -> OperationResult:
        """Finalise the cart and start a fresh one.

        The returned result carries the final snapshot and, in ``value``,
        an order number of the form ``ORD-<epoch-ms>``.
        """
        final = self.snapshot()
        if final.is_empty:
            return OperationResult.warning("Cart is empty", snapshot=final)
        order_number = f"ORD-{int(time.time() * 1000)}"
        self.cart.clear()
        logger.info(
            "Order %s placed: %d items, total %d",
            order_number, final.total_item_count, final.post_coupon_total,
        )
        return OperationResult.success(
            f"Order {order_number} placed", snapshot=final, value=order_number,
        )

    # ------------------------------------------------------------------ #
    #  Admin commands                                                      #
    # ------------------------------------------------------------------ #

    def add_product(
        self,
        name: str,
        price: int,
        stock: int,
        discounts: Iterable[DiscountTier] = (),
        description: str = "",
        is_recommended: bool = False,
    ) -> OperationResult:
        try:
            product = self.catalog.create(
                name=name,
                price=price,
                stock=stock,
                discounts=discounts,
                description=description,
                is_recommended=is_recommended,
            )
        except CartDomainError as exc:
            return self._failed("add_product", exc)
        return self._persisted_products(
            OperationResult.success("Product added", value=product)
        )

    def update_product(self, product_id: str, **changes) -> OperationResult:
        try:
            before = self.cart.quantity_of(product_id)
            product = self.catalog.update(product_id, **changes)
            after = self.cart.reconcile_stock(product_id)
        except CartDomainError as exc:
            return self._failed("update_product", exc)

        if after < before:
            result = OperationResult.warning(
                f"Product updated; cart reduced to {after} of {product.name}",
                value=product,
                snapshot=self.snapshot(),
            )
        else:
            result = OperationResult.success(
                "Product updated", value=product, snapshot=self.snapshot(),
            )
        return self._persisted_products(result)

    def delete_product(self, product_id: str) -> OperationResult:
        try:
            product = self.catalog.remove(product_id)
        except CartDomainError as exc:
            return self._failed("delete_product", exc)
        self.cart.remove_product(product_id)
        return self._persisted_products(
            OperationResult.success(
                "Product deleted", value=product, snapshot=self.snapshot(),
            )
        )

    def add_coupon(self, coupon: Coupon) -> OperationResult:
        try:
            self.coupons.add(coupon)
        except CartDomainError as exc:
            return self._failed("add_coupon", exc)
        return self._persisted_coupons(
            OperationResult.success("Coupon added", value=coupon)
        )

    def delete_coupon(self, code: str) -> OperationResult:
        try:
            coupon = self.coupons.remove(code)
        except CartDomainError as exc:
            return self._failed("delete_coupon", exc)
        selected = self.cart.applied_coupon
        if selected is not None and selected.code == code:
            self.cart.clear_coupon()
        return self._persisted_coupons(
            OperationResult.success(
                "Coupon deleted", value=coupon, snapshot=self.snapshot(),
            )
        )

    # ------------------------------------------------------------------ #
    #  Internal                                                            #
    # ------------------------------------------------------------------ #

    def _failed(self, operation: str, exc: CartDomainError) -> OperationResult:
        logger.info("%s rejected: %s", operation, exc)
        return OperationResult.failure(exc, snapshot=self.snapshot())

    def _persisted_products(self, result: OperationResult) -> OperationResult:
        if self._storage is None:
            return result
        try:
            self._storage.save_products(list(self.catalog.values()))
        except OSError as exc:
            logger.exception("Saving products failed")
            return OperationResult.warning(
                f"{result.message} (not saved: {exc})",
                snapshot=result.snapshot,
                value=result.value,
            )
        return result

    def _persisted_coupons(self, result: OperationResult) -> OperationResult:
        if self._storage is None:
            return result
        try:
            self._storage.save_coupons(list(self.coupons))
        except OSError as exc:
            logger.exception("Saving coupons failed")
            return OperationResult.warning(
                f"{result.message} (not saved: {exc})",
                snapshot=result.snapshot,
                value=result.value,
            )
        return result
