"""Kernel – framework-agnostic building blocks."""

from mp_toggles.kernel.errors import (
    ApplicationError,
    BaseError,
    DomainError,
    InfrastructureError,
    InvariantViolationError,
    SerializationError,
    StoreUnavailableError,
    ValidationError,
)
from mp_toggles.kernel.security import Principal

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "InfrastructureError",
    "InvariantViolationError",
    "Principal",
    "SerializationError",
    "StoreUnavailableError",
    "ValidationError",
]
