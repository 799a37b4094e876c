"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── InvariantViolationError
    │   └── ValidationError
    ├── ApplicationError         (application.py)
    └── InfrastructureError      (infrastructure.py)
        ├── StoreUnavailableError
        └── SerializationError
"""

from mp_toggles.kernel.errors.application import ApplicationError
from mp_toggles.kernel.errors.base import BaseError
from mp_toggles.kernel.errors.domain import (
    DomainError,
    InvariantViolationError,
    ValidationError,
)
from mp_toggles.kernel.errors.infrastructure import (
    InfrastructureError,
    SerializationError,
    StoreUnavailableError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "InfrastructureError",
    "InvariantViolationError",
    "SerializationError",
    "StoreUnavailableError",
    "ValidationError",
]
