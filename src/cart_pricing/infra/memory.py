"""In-memory StateStorage, mainly for tests and throwaway sessions."""

from ..defaults import DEFAULT_COUPONS, DEFAULT_PRODUCTS
from ..domain.models import Coupon, Product


class MemoryStorage:
    """Implements the ``StateStorage`` protocol with plain lists."""

    def __init__(
        self,
        products: list[Product] | None = None,
        coupons: list[Coupon] | None = None,
    ):
        self._products = list(DEFAULT_PRODUCTS if products is None else products)
        self._coupons = list(DEFAULT_COUPONS if coupons is None else coupons)

    @property
    def backend(self) -> str:
        return "memory"

    def load_products(self) -> list[Product]:
        return list(self._products)

    def load_coupons(self) -> list[Coupon]:
        return list(self._coupons)

    def save_products(self, products: list[Product]) -> None:
        self._products = list(products)

    def save_coupons(self, coupons: list[Coupon]) -> None:
        self._coupons = list(coupons)
