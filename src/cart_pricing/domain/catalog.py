"""In-memory product catalog with admin CRUD and shopper search."""

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Iterable, Iterator, Mapping

from .errors import InvalidProduct, ProductNotFound
from .models import DiscountTier, Product

logger = logging.getLogger(__name__)


class ProductCatalog(Mapping[str, Product]):
    """Products keyed by id, iterated in insertion order.

    Behaves as a read-only ``Mapping`` so a ``Cart`` can look products up
    without being able to edit them.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self._products: dict[str, Product] = {}
        for product in products:
            self.add(product)

    # ------------------------------------------------------------------ #
    #  Mapping protocol                                                    #
    # ------------------------------------------------------------------ #

    def __getitem__(self, product_id: str) -> Product:
        return self._products[product_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    # ------------------------------------------------------------------ #
    #  Admin operations                                                    #
    # ------------------------------------------------------------------ #

    def require(self, product_id: str) -> Product:
        """Return the product or raise ``ProductNotFound``."""
        try:
            return self._products[product_id]
        except KeyError:
            raise ProductNotFound(product_id) from None

    def add(self, product: Product) -> Product:
        if product.id in self._products:
            raise InvalidProduct(f"Product id already exists: {product.id!r}")
        self._products[product.id] = product
        logger.debug("Added product %s", product.id)
        return product

    def create(
        self,
        name: str,
        price: int,
        stock: int,
        discounts: Iterable[DiscountTier] = (),
        description: str = "",
        is_recommended: bool = False,
    ) -> Product:
        """Create a product with a generated ``p<epoch-ms>`` id.

        Raises:
            InvalidProduct: If a field value is rejected.
        """
        product = _build(
            Product,
            id=self._next_id(),
            name=name,
            price=price,
            stock=stock,
            discounts=tuple(discounts),
            description=description,
            is_recommended=is_recommended,
        )
        return self.add(product)

    def update(self, product_id: str, **changes) -> Product:
        """Replace a product with a copy carrying ``changes``.

        The id cannot be changed. Returns the new product.
        """
        if "id" in changes:
            raise InvalidProduct("Product id cannot be changed")
        current = self.require(product_id)
        if "discounts" in changes:
            changes["discounts"] = tuple(changes["discounts"])
        updated = _build(dataclasses.replace, current, **changes)
        self._products[product_id] = updated
        logger.debug("Updated product %s: %s", product_id, sorted(changes))
        return updated

    def remove(self, product_id: str) -> Product:
        try:
            product = self._products.pop(product_id)
        except KeyError:
            raise ProductNotFound(product_id) from None
        logger.debug("Removed product %s", product_id)
        return product

    def search(self, term: str) -> list[Product]:
        """Case-insensitive substring match on name and description."""
        needle = term.strip().lower()
        if not needle:
            return list(self._products.values())
        return [
            p for p in self._products.values()
            if needle in p.name.lower() or needle in p.description.lower()
        ]

    def _next_id(self) -> str:
        stamp = int(time.time() * 1000)
        while f"p{stamp}" in self._products:
            stamp += 1
        return f"p{stamp}"


def _build(factory, *args, **kwargs) -> Product:
    try:
        return factory(*args, **kwargs)
    except (TypeError, ValueError) as exc:
        raise InvalidProduct(str(exc)) from exc
