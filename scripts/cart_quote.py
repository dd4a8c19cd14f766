#!/usr/bin/env python3
"""Price a cart against the stored catalog and print or export the quote.

The CSV schema is fixed (see ``cart_pricing.infra.snapshot_frame``), so
quotes from different runs can be concatenated for analysis.

Usage examples:
    # 10 x p1 and 2 x p2 with a coupon
    uv run scripts/cart_quote.py --item p1:10 --item p2:2 --coupon AMOUNT5000

    # Enforce the storefront's 10,000 minimum for percentage coupons
    uv run scripts/cart_quote.py --item p1:1 --coupon PERCENT10 \
        --min-percentage-total 10000

    # Write line items to CSV
    uv run scripts/cart_quote.py --item p3:12 --output data/quote.csv

    # Show what is in the catalog
    uv run scripts/cart_quote.py --list-products --list-coupons
"""

import argparse
import sys
from pathlib import Path

from cart_pricing import Level, PricingConfig, StorefrontSession, create_storage
from cart_pricing.infra.snapshot_frame import snapshot_to_frame, summary_to_frame


def parse_item(raw: str) -> tuple[str, int]:
    """Parse ``'<product_id>:<quantity>'``; a bare id means quantity 1."""
    product_id, sep, qty = raw.partition(":")
    product_id = product_id.strip()
    if not product_id:
        raise argparse.ArgumentTypeError(f"Missing product id in {raw!r}")
    if not sep:
        return product_id, 1
    try:
        quantity = int(qty)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Quantity must be an integer in {raw!r}"
        ) from None
    if quantity < 1:
        raise argparse.ArgumentTypeError(f"Quantity must be at least 1 in {raw!r}")
    return product_id, quantity


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Price a cart and print or export the quote",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--storage", default=None,
        help="Storage JSON file (default: $CART_STORAGE_PATH or data/storefront.json)",
    )
    parser.add_argument(
        "--item", action="append", type=parse_item, default=[],
        metavar="ID[:QTY]",
        help="Product to add, repeatable (e.g. p1:10)",
    )
    parser.add_argument("--coupon", default=None, help="Coupon code to apply")
    parser.add_argument(
        "--min-percentage-total", type=int, default=None,
        help="Minimum total for percentage coupons "
             "(default: $CART_PERCENTAGE_COUPON_MIN_TOTAL or none)",
    )
    parser.add_argument(
        "--output", default=None,
        help="Write line items to this CSV file instead of printing",
    )
    parser.add_argument(
        "--list-products", action="store_true",
        help="List catalog products and exit",
    )
    parser.add_argument(
        "--list-coupons", action="store_true",
        help="List registered coupons and exit",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    config = PricingConfig.from_env(
        min_total=args.min_percentage_total, storage_path=args.storage,
    )
    storage = create_storage("json", path=config.storage_path)
    session = StorefrontSession.from_storage(storage, config)

    if args.list_products or args.list_coupons:
        if args.list_products:
            print("Products:")
            for p in session.catalog.values():
                tiers = ", ".join(
                    f"{t.min_quantity}+ -{t.rate:.0%}" for t in p.discounts
                ) or "none"
                print(f"  {p.id:<16} {p.name:<20} {p.price:>10,}  "
                      f"stock {p.stock:>4}  tiers: {tiers}")
        if args.list_coupons:
            print("Coupons:")
            for c in session.coupons:
                print(f"  {c.code:<16} {c.name:<20} "
                      f"{c.discount_type.value} {c.discount_value}")
        return 0

    if not args.item:
        print("Error: at least one --item is required", file=sys.stderr)
        return 1

    failed = False
    for product_id, quantity in args.item:
        result = session.add_to_cart(product_id, quantity)
        if not result.ok:
            failed = True
            print(f"Error: {result.message}", file=sys.stderr)
        elif result.level is Level.WARNING:
            print(f"Warning: {result.message}", file=sys.stderr)

    if args.coupon:
        result = session.apply_coupon(args.coupon)
        if not result.ok:
            failed = True
            print(f"Error: {result.message}", file=sys.stderr)

    snapshot = session.snapshot()
    lines = snapshot_to_frame(snapshot)

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        lines.to_csv(output, index=False)
        print(f"Saved: {output} ({len(lines)} rows)")
    else:
        print("=" * 60)
        print("Cart Quote")
        print("=" * 60)
        print(lines.to_string(index=False) if not lines.empty else "  (empty cart)")
        print("-" * 60)
        print(summary_to_frame(snapshot).T.to_string(header=False))
        print("=" * 60)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
