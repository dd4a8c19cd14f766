"""Cart aggregate.

The cart holds (product id, quantity) lines and at most one selected
coupon. Prices and totals are never stored: every ``snapshot()`` call
reprices all lines against the catalog as it is right now, so an admin
edit to a price or tier table shows up immediately.

Invariants:
    1. A line's quantity never exceeds the product's stock.
    2. At most one line per product id.
    3. Line quantities are always >= 1; a line set to 0 is removed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .coupon import apply_coupon, check_coupon_eligible, is_coupon_eligible
from .errors import InvalidQuantity, OutOfStock, ProductNotFound, StockExceeded
from .models import CartLine, CartSnapshot, Coupon, LineSnapshot, Product
from .pricing import LinePrice, price_line

logger = logging.getLogger(__name__)


class Cart:
    """Shopping cart for one session.

    Args:
        catalog: Read-only view of the products the cart may reference.
            Stock ceilings are read from here at mutation time.
        min_percentage_total: If set, percentage coupons only apply to
            pre-coupon totals of at least this amount.
    """

    def __init__(
        self,
        catalog: Mapping[str, Product],
        min_percentage_total: int | None = None,
    ) -> None:
        self._catalog = catalog
        self._min_percentage_total = min_percentage_total
        self._lines: dict[str, CartLine] = {}
        self._coupon: Coupon | None = None

    # --- read-only views ---

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(
            CartLine(line.product_id, line.quantity) for line in self._lines.values()
        )

    @property
    def applied_coupon(self) -> Coupon | None:
        return self._coupon

    @property
    def total_item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._lines

    def quantity_of(self, product_id: str) -> int:
        line = self._lines.get(product_id)
        return line.quantity if line else 0

    def remaining_stock(self, product: Product) -> int:
        """Units of ``product`` still available to add."""
        current = self._product(product.id)
        return max(0, current.stock - self.quantity_of(product.id))

    # --- line transitions ---

    def add_product(self, product: Product, quantity: int = 1) -> int:
        """Add ``quantity`` units, merging into an existing line.

        Over-stock requests are clamped to the stock ceiling without error.
        Returns the line's resulting quantity.

        Raises:
            InvalidQuantity: If ``quantity`` is below 1.
            ProductNotFound: If the product is not in the catalog.
            OutOfStock: If the product has no stock and no line yet.
        """
        if quantity < 1:
            raise InvalidQuantity(f"quantity must be at least 1: {quantity}")
        current = self._product(product.id)
        line = self._lines.get(current.id)

        if line is None:
            if current.stock == 0:
                raise OutOfStock(current.id)
            line = CartLine(current.id, 0)
            self._lines[current.id] = line

        requested = line.quantity + quantity
        line.quantity = min(requested, current.stock)
        if line.quantity < requested:
            logger.warning(
                "Clamped %s to stock: requested %d, kept %d",
                current.id, requested, line.quantity,
            )
        return line.quantity

    def set_quantity(self, product_id: str, quantity: int) -> int:
        """Set a line's quantity outright.

        ``quantity <= 0`` removes the line. A missing line is created.
        Returns the resulting quantity (0 when removed).

        Raises:
            ProductNotFound: If the product is not in the catalog.
            StockExceeded: If ``quantity`` is above stock. The line is
                left unchanged.
        """
        if quantity <= 0:
            self.remove_product(product_id)
            return 0

        current = self._product(product_id)
        if quantity > current.stock:
            raise StockExceeded(product_id, quantity, current.stock)

        line = self._lines.get(product_id)
        if line is None:
            self._lines[product_id] = CartLine(product_id, quantity)
        else:
            line.quantity = quantity
        return quantity

    def remove_product(self, product_id: str) -> bool:
        """Drop a line. Removing an absent product is a no-op."""
        return self._lines.pop(product_id, None) is not None

    def reconcile_stock(self, product_id: str) -> int:
        """Clamp a line to the product's current stock.

        Called after the catalog lowers a product's stock. A product with no
        stock left loses its line. Returns the resulting quantity.
        """
        line = self._lines.get(product_id)
        if line is None:
            return 0
        stock = self._product(product_id).stock
        if line.quantity <= stock:
            return line.quantity
        if stock == 0:
            del self._lines[product_id]
            logger.warning("Dropped %s from cart: out of stock", product_id)
            return 0
        logger.warning(
            "Reduced %s from %d to %d after stock change",
            product_id, line.quantity, stock,
        )
        line.quantity = stock
        return stock

    # --- coupon selection ---

    def apply_coupon(self, coupon: Coupon) -> None:
        """Select ``coupon``, replacing any previous selection.

        Raises:
            CouponNotApplicable: If the current total is below the
                percentage-coupon threshold. The selection is unchanged.
        """
        check_coupon_eligible(coupon, self.pre_coupon_total(), self._min_percentage_total)
        self._coupon = coupon

    def clear_coupon(self) -> None:
        self._coupon = None

    def clear(self) -> None:
        self._lines.clear()
        self._coupon = None

    # --- totals ---

    def pre_coupon_total(self) -> int:
        return sum(price.subtotal for _, price in self._priced_lines())

    def snapshot(self) -> CartSnapshot:
        """Reprice every line and apply the selected coupon."""
        priced = self._priced_lines()
        line_views = tuple(
            LineSnapshot(
                product_id=product.id,
                name=product.name,
                quantity=price.quantity,
                unit_price=price.unit_price,
                discount_rate=price.discount_rate,
                subtotal=price.subtotal,
            )
            for product, price in priced
        )
        pre_total = sum(price.subtotal for _, price in priced)

        eligible = True
        coupon_for_total = self._coupon
        if self._coupon is not None:
            eligible = is_coupon_eligible(
                self._coupon, pre_total, self._min_percentage_total,
            )
            if not eligible:
                coupon_for_total = None
        applied = apply_coupon(coupon_for_total, pre_total)

        logger.debug(
            "Cart repriced: %d lines, pre=%d post=%d",
            len(line_views), pre_total, applied.post_coupon_total,
        )
        return CartSnapshot(
            lines=line_views,
            total_item_count=sum(price.quantity for _, price in priced),
            undiscounted_total=sum(price.undiscounted for _, price in priced),
            pre_coupon_total=pre_total,
            post_coupon_total=applied.post_coupon_total,
            applied_discount=applied.applied_discount,
            applied_coupon=self._coupon,
            coupon_eligible=eligible,
        )

    # --- internal ---

    def _product(self, product_id: str) -> Product:
        try:
            return self._catalog[product_id]
        except KeyError:
            raise ProductNotFound(product_id) from None

    def _priced_lines(self) -> list[tuple[Product, LinePrice]]:
        priced = []
        for line in self._lines.values():
            product = self._product(line.product_id)
            priced.append((product, price_line(product, line.quantity)))
        return priced
