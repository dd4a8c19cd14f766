"""Application layer: session boundary and result values."""

from .results import Level, OperationResult
from .storefront import StorefrontSession

__all__ = ["Level", "OperationResult", "StorefrontSession"]
