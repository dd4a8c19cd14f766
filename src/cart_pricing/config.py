"""Runtime configuration.

Values are resolved in order: explicit override, process environment,
``.env`` file at the working directory, built-in default.

Environment variables:
    CART_PERCENTAGE_COUPON_MIN_TOTAL  Minimum pre-coupon total for
                                      percentage coupons (unset = none).
    CART_STORAGE_PATH                 JSON file holding products/coupons.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_STORAGE_PATH = Path("data") / "storefront.json"

ENV_MIN_TOTAL = "CART_PERCENTAGE_COUPON_MIN_TOTAL"
ENV_STORAGE_PATH = "CART_STORAGE_PATH"


ENV_PREFIX = "CART_"


def load_dotenv(dotenv_path: Path, prefix: str = "") -> dict[str, str]:
    """Read ``KEY=value`` pairs from a ``.env`` file.

    Blank lines, ``#`` comments and lines without ``=`` are skipped, and one
    layer of matching single or double quotes is stripped from values. Only
    keys starting with ``prefix`` are returned. A missing file yields ``{}``.
    """
    if not dotenv_path.exists():
        return {}
    values: dict[str, str] = {}
    for line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key, value = key.strip(), value.strip()
        if not key or not key.startswith(prefix):
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key] = value
    return values


@dataclass(frozen=True)
class PricingConfig:
    """Session-wide pricing settings.

    Attributes:
        percentage_coupon_min_total: Percentage coupons are rejected on
            totals below this. ``None`` disables the rule.
        storage_path: Where the JSON storage adapter keeps its document.
    """

    percentage_coupon_min_total: int | None = None
    storage_path: Path = DEFAULT_STORAGE_PATH

    def __post_init__(self) -> None:
        if (
            self.percentage_coupon_min_total is not None
            and self.percentage_coupon_min_total < 0
        ):
            raise ValueError(
                "percentage_coupon_min_total must be non-negative: "
                f"{self.percentage_coupon_min_total}"
            )

    @classmethod
    def from_env(
        cls,
        *,
        min_total: int | None = None,
        storage_path: str | Path | None = None,
        dotenv_path: Path | None = None,
    ) -> PricingConfig:
        dotenv = load_dotenv(dotenv_path or Path(".env"), prefix=ENV_PREFIX)

        def get_str(env_key: str) -> str:
            return os.environ.get(env_key, "") or dotenv.get(env_key, "")

        if min_total is None:
            raw = get_str(ENV_MIN_TOTAL).strip()
            if raw:
                try:
                    min_total = int(raw)
                except ValueError:
                    raise ValueError(
                        f"{ENV_MIN_TOTAL} must be an integer, got {raw!r}"
                    ) from None

        path = storage_path or get_str(ENV_STORAGE_PATH) or DEFAULT_STORAGE_PATH
        return cls(percentage_coupon_min_total=min_total, storage_path=Path(path))
