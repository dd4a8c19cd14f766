"""Storefront state storage protocol (interface).

Storage adapters (JSON file, in-memory, ...) implement this protocol so
that the application layer can load and save the product catalog and the
coupon set without knowing where they live. The pricing engine itself
never calls storage.
"""

from __future__ import annotations

from typing import Protocol

from .models import Coupon, Product


class StateStorage(Protocol):
    """Persists products and coupons as two independent collections."""

    @property
    def backend(self) -> str:
        """Short lowercase backend name, e.g. 'json', 'memory'."""
        ...

    def load_products(self) -> list[Product]:
        """Return stored products, or the seed catalog if none are stored."""
        ...

    def load_coupons(self) -> list[Coupon]:
        """Return stored coupons, or the seed coupons if none are stored."""
        ...

    def save_products(self, products: list[Product]) -> None:
        ...

    def save_coupons(self, coupons: list[Coupon]) -> None:
        ...
