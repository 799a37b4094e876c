"""Application feature toggles – targeting, registry, mutation and sync."""
from mp_toggles.application.feature_toggles.document import (
    ToggleRecord,
    load_document,
    parse_document,
    validate_document,
)
from mp_toggles.application.feature_toggles.errors import (
    AmbiguousInputError,
    DocumentValidationError,
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
from mp_toggles.application.feature_toggles.in_memory import InMemoryToggleStore
from mp_toggles.application.feature_toggles.registry import FeatureRegistry
from mp_toggles.application.feature_toggles.service import FeatureToggleService
from mp_toggles.application.feature_toggles.store import StoreOperation, StoreTransaction, ToggleStore
from mp_toggles.application.feature_toggles.sync import SyncEngine, SyncReport
from mp_toggles.application.feature_toggles.targeting import Scope, Targeting

__all__ = [
    "AmbiguousInputError",
    "DocumentValidationError",
    "DuplicateFeatureError",
    "EmptyArrayError",
    "EmptyElementError",
    "EmptyFeatureError",
    "FeatureRegistry",
    "FeatureToggleService",
    "InMemoryToggleStore",
    "InvalidArrayTypeError",
    "InvalidDocumentError",
    "InvalidElementTypeError",
    "InvalidEnableAllError",
    "InvalidFeatureTypeError",
    "InvalidRecordTypeError",
    "MissingFeatureError",
    "MissingValuesError",
    "Scope",
    "StoreOperation",
    "StoreTransaction",
    "SyncEngine",
    "SyncReport",
    "Targeting",
    "ToggleRecord",
    "ToggleStore",
    "UnknownKeyError",
    "load_document",
    "parse_document",
    "validate_document",
]
