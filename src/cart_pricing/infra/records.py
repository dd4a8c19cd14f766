"""Mapping between domain objects and stored plain records.

Stored records keep the storefront's field names (``price``,
``discounts[{quantity, rate}]``, ``discountType``, ``discountValue``,
``isRecommended``) so existing saved data stays readable.
"""

from __future__ import annotations

from typing import Any

from ..domain.models import Coupon, DiscountTier, DiscountType, Product


def product_from_record(record: dict[str, Any]) -> Product:
    """Build a ``Product`` from a stored record.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If a field holds an invalid value.
    """
    return Product(
        id=str(record["id"]),
        name=str(record["name"]),
        price=int(record["price"]),
        stock=int(record["stock"]),
        discounts=tuple(
            DiscountTier(min_quantity=int(d["quantity"]), rate=float(d["rate"]))
            for d in record.get("discounts") or []
        ),
        description=str(record.get("description") or ""),
        is_recommended=bool(record.get("isRecommended", False)),
    )


def product_to_record(product: Product) -> dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "price": product.price,
        "stock": product.stock,
        "discounts": [
            {"quantity": t.min_quantity, "rate": t.rate} for t in product.discounts
        ],
        "description": product.description,
        "isRecommended": product.is_recommended,
    }


def coupon_from_record(record: dict[str, Any]) -> Coupon:
    value = record["discountValue"]
    return Coupon(
        code=str(record["code"]),
        name=str(record["name"]),
        discount_type=DiscountType(record["discountType"]),
        discount_value=value if isinstance(value, (int, float)) else float(value),
    )


def coupon_to_record(coupon: Coupon) -> dict[str, Any]:
    return {
        "name": coupon.name,
        "code": coupon.code,
        "discountType": coupon.discount_type.value,
        "discountValue": coupon.discount_value,
    }
