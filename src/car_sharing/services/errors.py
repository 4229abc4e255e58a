"""Custom service layer errors."""

from __future__ import annotations

from typing import Iterable


class ServiceError(Exception):
    """Base error for service-layer failures."""


class ValidationError(ServiceError):
    """Raised when an entity breaks one of its invariants."""

    def __init__(self, violations: Iterable[str]) -> None:
        self.violations = list(violations)
        super().__init__("; ".join(self.violations) or "invalid entity")


class ConflictError(ServiceError):
    """Raised when a write would clash with data already in the store."""


class CarNotAvailableError(ConflictError):
    """Raised when a car is already rented during the requested interval."""


class InvalidArgumentError(ServiceError, ValueError):
    """Raised when an operation receives an unusable argument."""


class IllegalStateError(ServiceError):
    """Raised when an entity is in the wrong lifecycle state."""
