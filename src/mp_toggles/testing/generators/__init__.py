"""Testing generators – Hypothesis strategies for principals and documents."""
from mp_toggles.testing.generators.strategies import (
    document_strategy,
    feature_name_strategy,
    principal_strategy,
    record_strategy,
)

__all__ = [
    "document_strategy",
    "feature_name_strategy",
    "principal_strategy",
    "record_strategy",
]
