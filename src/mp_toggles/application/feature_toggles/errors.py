"""Feature toggles – declarative document validation errors."""
from __future__ import annotations

from typing import Any

from mp_toggles.kernel.errors import ValidationError


class DocumentValidationError(ValidationError):
    """A declarative toggle document violates the document grammar.

    ``index`` is the position of the offending record (``None`` for
    document-level problems) and ``key`` the offending record key, if any.
    """

    default_code = "invalid_toggle_document"

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        key: str | None = None,
        **kwargs: Any,
    ) -> None:
        if index is not None:
            message = f"record {index}: {message}"
        detail = {"index": index, "key": key}
        detail.update(kwargs.pop("detail", None) or {})
        super().__init__(
            message,
            errors=[{"index": index, "key": key, "code": self.default_code}],
            detail=detail,
            **kwargs,
        )
        self.index = index
        self.key = key


class InvalidDocumentError(DocumentValidationError):
    default_code = "invalid_document"


class InvalidRecordTypeError(DocumentValidationError):
    default_code = "invalid_record_type"


class UnknownKeyError(DocumentValidationError):
    default_code = "unknown_key"


class MissingFeatureError(DocumentValidationError):
    default_code = "missing_feature"


class InvalidFeatureTypeError(DocumentValidationError):
    default_code = "invalid_feature_type"


class EmptyFeatureError(DocumentValidationError):
    default_code = "empty_feature"


class DuplicateFeatureError(DocumentValidationError):
    default_code = "duplicate_feature"


class AmbiguousInputError(DocumentValidationError):
    """``enableAll`` was combined with ``users`` or ``regionalOffices``."""
    default_code = "ambiguous_input"


class MissingValuesError(DocumentValidationError):
    default_code = "missing_values"


class InvalidEnableAllError(DocumentValidationError):
    default_code = "invalid_enable_all"


class InvalidArrayTypeError(DocumentValidationError):
    default_code = "invalid_array_type"


class EmptyArrayError(DocumentValidationError):
    default_code = "empty_array"


class InvalidElementTypeError(DocumentValidationError):
    default_code = "invalid_element_type"


class EmptyElementError(DocumentValidationError):
    default_code = "empty_element"


__all__ = [
    "AmbiguousInputError",
    "DocumentValidationError",
    "DuplicateFeatureError",
    "EmptyArrayError",
    "EmptyElementError",
    "EmptyFeatureError",
    "InvalidArrayTypeError",
    "InvalidDocumentError",
    "InvalidElementTypeError",
    "InvalidEnableAllError",
    "InvalidFeatureTypeError",
    "InvalidRecordTypeError",
    "MissingFeatureError",
    "MissingValuesError",
    "UnknownKeyError",
]
