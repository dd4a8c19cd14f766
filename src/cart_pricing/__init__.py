"""cart_pricing: storefront cart pricing engine.

Usage:
    from cart_pricing import StorefrontSession, create_storage

    storage = create_storage("json", path="data/storefront.json")
    session = StorefrontSession.from_storage(storage)
    session.add_to_cart("p1", 10)
    session.apply_coupon("AMOUNT5000")
    print(session.snapshot().post_coupon_total)
"""

from .application import Level, OperationResult, StorefrontSession
from .config import PricingConfig
from .domain import (
    Cart,
    CartDomainError,
    CartSnapshot,
    Coupon,
    CouponBook,
    DiscountTier,
    DiscountType,
    Product,
    ProductCatalog,
    StateStorage,
    apply_coupon,
    price_line,
    resolve_rate,
)

_REGISTRY: dict[str, type] = {}


def _ensure_registry() -> None:
    """Lazily populate the registry on first use."""
    if _REGISTRY:
        return
    from .infra.json_storage import JsonStorage
    from .infra.memory import MemoryStorage

    _REGISTRY["json"] = JsonStorage
    _REGISTRY["memory"] = MemoryStorage


def create_storage(backend: str, **kwargs) -> StateStorage:
    """Create a StateStorage for the given backend.

    Args:
        backend: Backend name ('json' or 'memory').
        **kwargs: Passed to the adapter constructor.

    Raises:
        ValueError: If the backend is not supported.
    """
    _ensure_registry()
    cls = _REGISTRY.get(backend.lower())
    if cls is None:
        supported = ", ".join(sorted(_REGISTRY))
        raise ValueError(
            f"Unsupported storage backend: {backend!r}. Supported: {supported}"
        )
    return cls(**kwargs)


__all__ = [
    "Cart",
    "CartDomainError",
    "CartSnapshot",
    "Coupon",
    "CouponBook",
    "DiscountTier",
    "DiscountType",
    "Level",
    "OperationResult",
    "PricingConfig",
    "Product",
    "ProductCatalog",
    "StateStorage",
    "StorefrontSession",
    "apply_coupon",
    "create_storage",
    "price_line",
    "resolve_rate",
]
