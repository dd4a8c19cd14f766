"""Tabular views of a cart snapshot.

Every exported quote has the same column layout regardless of what is in
the cart, so CSV files from different sessions can be concatenated.
"""

import pandas as pd

from ..domain.models import CartSnapshot

LINE_COLUMNS: list[str] = [
    "product_id", "name", "quantity", "unit_price",
    "discount_rate", "undiscounted", "subtotal",
]

SUMMARY_COLUMNS: list[str] = [
    "total_item_count", "undiscounted_total", "pre_coupon_total",
    "coupon_code", "coupon_eligible", "applied_discount", "post_coupon_total",
]


def snapshot_to_frame(snapshot: CartSnapshot) -> pd.DataFrame:
    """One row per cart line, columns in ``LINE_COLUMNS`` order."""
    if snapshot.is_empty:
        return pd.DataFrame(columns=LINE_COLUMNS)

    df = pd.DataFrame([
        {
            "product_id": line.product_id,
            "name": line.name,
            "quantity": line.quantity,
            "unit_price": line.unit_price,
            "discount_rate": line.discount_rate,
            "undiscounted": line.unit_price * line.quantity,
            "subtotal": line.subtotal,
        }
        for line in snapshot.lines
    ])
    for col in ("quantity", "unit_price", "undiscounted", "subtotal"):
        df[col] = df[col].astype("int64")
    df["discount_rate"] = df["discount_rate"].astype(float)
    return df[LINE_COLUMNS]


def summary_to_frame(snapshot: CartSnapshot) -> pd.DataFrame:
    """Single-row frame of cart totals, columns in ``SUMMARY_COLUMNS`` order."""
    coupon = snapshot.applied_coupon
    row = {
        "total_item_count": snapshot.total_item_count,
        "undiscounted_total": snapshot.undiscounted_total,
        "pre_coupon_total": snapshot.pre_coupon_total,
        "coupon_code": coupon.code if coupon else None,
        "coupon_eligible": snapshot.coupon_eligible,
        "applied_discount": snapshot.applied_discount,
        "post_coupon_total": snapshot.post_coupon_total,
    }
    return pd.DataFrame([row], columns=SUMMARY_COLUMNS)
