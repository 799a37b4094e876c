"""Feature toggles – declarative toggle documents.

A document is a JSON array of records::

    [
        {"feature": "search", "enableAll": true},
        {"feature": "reader", "users": ["CSS_ID_1"], "regionalOffices": ["RO01"]}
    ]

:func:`validate_document` checks every record before anything is written and
raises the first :class:`DocumentValidationError` it finds.
"""
from __future__ import annotations

import dataclasses
import json
import os
from pathlib import Path
from typing import Any, Mapping, Sequence

from mp_toggles.application.feature_toggles.errors import (
    AmbiguousInputError,
    DuplicateFeatureError,
    EmptyArrayError,
    EmptyElementError,
    EmptyFeatureError,
    InvalidArrayTypeError,
    InvalidDocumentError,
    InvalidElementTypeError,
    InvalidEnableAllError,
    InvalidFeatureTypeError,
    InvalidRecordTypeError,
    MissingFeatureError,
    MissingValuesError,
    UnknownKeyError,
)
from mp_toggles.application.feature_toggles.targeting import (
    REGIONAL_OFFICES_FIELD,
    USERS_FIELD,
    Targeting,
)

FEATURE_FIELD = "feature"
ENABLE_ALL_FIELD = "enableAll"
ALLOWED_KEYS = frozenset({FEATURE_FIELD, ENABLE_ALL_FIELD, USERS_FIELD, REGIONAL_OFFICES_FIELD})
_TARGET_KEYS = (ENABLE_ALL_FIELD, USERS_FIELD, REGIONAL_OFFICES_FIELD)


@dataclasses.dataclass(frozen=True)
class ToggleRecord:
    """One validated document record."""
    feature: str
    enable_all: bool = False
    users: tuple[str, ...] | None = None
    regional_offices: tuple[str, ...] | None = None

    def targeting(self) -> Targeting:
        if self.enable_all:
            return Targeting.everyone()
        return Targeting.scoped(
            users=self.users or (),
            regional_offices=self.regional_offices or (),
        )


def parse_document(text: str | bytes) -> Any:
    """Deserialize a JSON document without validating it."""
    try:
        return json.loads(text)
    except ValueError as exc:
        raise InvalidDocumentError(f"Toggle document is not valid JSON: {exc}", cause=exc) from exc


def load_document(source: str | bytes | os.PathLike[str]) -> Any:
    """Deserialize a JSON document from a file or from JSON text.

    A path-like *source*, or a string naming an existing file, is read from
    disk.  Any other string or bytes value is parsed as the document itself.
    """
    if isinstance(source, (str, bytes)) and not os.path.isfile(source):
        return parse_document(source)
    return parse_document(Path(os.fsdecode(source)).read_text(encoding="utf-8"))


def validate_document(document: Any) -> list[ToggleRecord]:
    """Validate a deserialized document and return its records in order."""
    if not isinstance(document, (list, tuple)):
        raise InvalidDocumentError(
            f"Toggle document must be an array of records, got {type(document).__name__}"
        )

    records: list[ToggleRecord] = []
    seen: dict[str, int] = {}
    for index, raw in enumerate(document):
        record = _validate_record(index, raw)
        if record.feature in seen:
            raise DuplicateFeatureError(
                f"feature {record.feature!r} is already declared by record {seen[record.feature]}",
                index=index,
                key=FEATURE_FIELD,
            )
        seen[record.feature] = index
        records.append(record)
    return records


def _validate_record(index: int, raw: Any) -> ToggleRecord:
    if not isinstance(raw, Mapping):
        raise InvalidRecordTypeError(
            f"record must be an object, got {type(raw).__name__}", index=index
        )

    for key in raw:
        if key not in ALLOWED_KEYS:
            raise UnknownKeyError(
                f"unknown key {key!r}; allowed keys are {sorted(ALLOWED_KEYS)}",
                index=index,
                key=str(key),
            )

    feature = _validate_feature(index, raw)

    for key in _TARGET_KEYS:
        if key in raw and raw[key] is None:
            raise MissingValuesError(f"{key!r} must have a value", index=index, key=key)
    if not any(key in raw for key in _TARGET_KEYS):
        raise MissingValuesError(
            f"declare {ENABLE_ALL_FIELD!r}, {USERS_FIELD!r} or {REGIONAL_OFFICES_FIELD!r}",
            index=index,
        )

    if ENABLE_ALL_FIELD in raw:
        if USERS_FIELD in raw or REGIONAL_OFFICES_FIELD in raw:
            raise AmbiguousInputError(
                f"{ENABLE_ALL_FIELD!r} cannot be combined with "
                f"{USERS_FIELD!r} or {REGIONAL_OFFICES_FIELD!r}",
                index=index,
                key=ENABLE_ALL_FIELD,
            )
        if raw[ENABLE_ALL_FIELD] is not True:
            raise InvalidEnableAllError(
                f"{ENABLE_ALL_FIELD!r} must be true", index=index, key=ENABLE_ALL_FIELD
            )
        return ToggleRecord(feature=feature, enable_all=True)

    return ToggleRecord(
        feature=feature,
        users=_validate_members(index, raw, USERS_FIELD),
        regional_offices=_validate_members(index, raw, REGIONAL_OFFICES_FIELD),
    )


def _validate_feature(index: int, raw: Mapping[str, Any]) -> str:
    if FEATURE_FIELD not in raw:
        raise MissingFeatureError(f"{FEATURE_FIELD!r} is required", index=index, key=FEATURE_FIELD)
    feature = raw[FEATURE_FIELD]
    if not isinstance(feature, str):
        raise InvalidFeatureTypeError(
            f"{FEATURE_FIELD!r} must be a string, got {type(feature).__name__}",
            index=index,
            key=FEATURE_FIELD,
        )
    if not feature:
        raise EmptyFeatureError(f"{FEATURE_FIELD!r} must not be empty", index=index, key=FEATURE_FIELD)
    return feature


def _validate_members(index: int, raw: Mapping[str, Any], key: str) -> tuple[str, ...] | None:
    if key not in raw:
        return None
    values = raw[key]
    if not isinstance(values, Sequence) or isinstance(values, (str, bytes)):
        raise InvalidArrayTypeError(
            f"{key!r} must be an array, got {type(values).__name__}", index=index, key=key
        )
    if not values:
        raise EmptyArrayError(f"{key!r} must not be empty", index=index, key=key)
    for position, value in enumerate(values):
        if not isinstance(value, str):
            raise InvalidElementTypeError(
                f"{key!r}[{position}] must be a string, got {type(value).__name__}",
                index=index,
                key=key,
            )
        if not value:
            raise EmptyElementError(f"{key!r}[{position}] must not be empty", index=index, key=key)
    return tuple(values)


__all__ = [
    "ALLOWED_KEYS",
    "ENABLE_ALL_FIELD",
    "FEATURE_FIELD",
    "ToggleRecord",
    "load_document",
    "parse_document",
    "validate_document",
]
