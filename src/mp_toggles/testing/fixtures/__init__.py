"""Testing fixtures – pytest fixtures for toggle tests.

Register them in a ``conftest.py``::

    pytest_plugins = ["mp_toggles.testing.fixtures"]
"""
from mp_toggles.testing.fixtures.principal import (
    other_principal,
    regional_principal,
    toggle_principal,
)
from mp_toggles.testing.fixtures.service import in_memory_store, toggle_service

__all__ = [
    "in_memory_store",
    "other_principal",
    "regional_principal",
    "toggle_principal",
    "toggle_service",
]
