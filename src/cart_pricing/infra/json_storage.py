"""JSON file adapter implementing StateStorage.

One document, two independent keys::

    {"products": [...], "coupons": [...]}

A key that is missing, cannot be decoded, or holds entries the catalog or
coupon book would refuse falls back to the seed data without touching the
other key.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

from ..defaults import DEFAULT_COUPONS, DEFAULT_PRODUCTS
from ..domain.coupon import validate_coupon
from ..domain.errors import CartDomainError, DuplicateCouponCode, InvalidProduct
from ..domain.models import Coupon, Product
from .records import (
    coupon_from_record,
    coupon_to_record,
    product_from_record,
    product_to_record,
)

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "products"
COUPONS_KEY = "coupons"

T = TypeVar("T")


class JsonStorage:
    """Products and coupons stored in a single JSON document.

    Implements the ``StateStorage`` protocol.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def backend(self) -> str:
        return "json"

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------ #
    #  Public: StateStorage                                                #
    # ------------------------------------------------------------------ #

    def load_products(self) -> list[Product]:
        return self._load(
            PRODUCTS_KEY, product_from_record, DEFAULT_PRODUCTS, _check_products,
        )

    def load_coupons(self) -> list[Coupon]:
        return self._load(
            COUPONS_KEY, coupon_from_record, DEFAULT_COUPONS, _check_coupons,
        )

    def save_products(self, products: list[Product]) -> None:
        self._save(PRODUCTS_KEY, [product_to_record(p) for p in products])

    def save_coupons(self, coupons: list[Coupon]) -> None:
        self._save(COUPONS_KEY, [coupon_to_record(c) for c in coupons])

    # ------------------------------------------------------------------ #
    #  Internal: document access                                           #
    # ------------------------------------------------------------------ #

    def _read_document(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: top level is not an object", self._path)
            return {}
        return data

    def _load(
        self,
        key: str,
        from_record: Callable[[dict[str, Any]], T],
        defaults: tuple[T, ...],
        check: Callable[[list[T]], None],
    ) -> list[T]:
        raw = self._read_document().get(key)
        if raw is None:
            return list(defaults)
        if not isinstance(raw, list):
            logger.warning("Stored %r is not a list; using defaults", key)
            return list(defaults)
        try:
            items = [from_record(record) for record in raw]
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Stored %r is malformed (%s); using defaults", key, exc)
            return list(defaults)
        try:
            check(items)
        except CartDomainError as exc:
            logger.warning("Stored %r was rejected (%s); using defaults", key, exc)
            return list(defaults)
        return items

    def _save(self, key: str, records: list[dict[str, Any]]) -> None:
        document = self._read_document()
        document[key] = records
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(
            json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8",
        )
        tmp.replace(self._path)
        logger.info("Saved %d %s to %s", len(records), key, self._path)


def _check_products(products: list[Product]) -> None:
    seen: set[str] = set()
    for product in products:
        if product.id in seen:
            raise InvalidProduct(f"Product id already exists: {product.id!r}")
        seen.add(product.id)


def _check_coupons(coupons: list[Coupon]) -> None:
    seen: set[str] = set()
    for coupon in coupons:
        validate_coupon(coupon)
        if coupon.code in seen:
            raise DuplicateCouponCode(coupon.code)
        seen.add(coupon.code)
