"""Result values handed back to the UI collaborator.

The session never lets a ``CartDomainError`` escape. It reports the outcome
in an ``OperationResult`` instead, and the caller decides how to show it
(a toast, a log line, an HTTP status, ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..domain.errors import CartDomainError
from ..domain.models import CartSnapshot


class Level(Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one session operation.

    Attributes:
        level: Severity, for display.
        message: Human-readable outcome.
        error: The domain error when ``level`` is ``ERROR``.
        snapshot: Cart state after the operation, for cart operations.
        value: Operation-specific payload (created product, search hits, ...).
    """

    level: Level
    message: str
    error: CartDomainError | None = None
    snapshot: CartSnapshot | None = None
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.level is not Level.ERROR

    @property
    def error_kind(self) -> str | None:
        """Exception class name, e.g. ``'DuplicateCouponCode'``."""
        return type(self.error).__name__ if self.error is not None else None

    @classmethod
    def success(cls, message: str, **kwargs: Any) -> OperationResult:
        return cls(Level.SUCCESS, message, **kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: Any) -> OperationResult:
        return cls(Level.WARNING, message, **kwargs)

    @classmethod
    def failure(cls, error: CartDomainError, **kwargs: Any) -> OperationResult:
        return cls(Level.ERROR, str(error), error=error, **kwargs)
