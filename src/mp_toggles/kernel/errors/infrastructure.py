"""Infrastructure errors – store I/O failures and payload decoding."""

from __future__ import annotations

from typing import Any

from mp_toggles.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class StoreUnavailableError(InfrastructureError):
    """The toggle store could not be reached or rejected the operation.

    Callers must treat this as "unknown state", never as "disabled".
    """

    default_code = "store_unavailable"

    def __init__(
        self,
        store: str,
        message: str | None = None,
        *,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Toggle store '{store}' is unavailable", **kwargs)
        self.store = store
        self.operation = operation


class SerializationError(InfrastructureError):
    """Failed to serialize or deserialize a payload."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


__all__ = [
    "InfrastructureError",
    "SerializationError",
    "StoreUnavailableError",
]
