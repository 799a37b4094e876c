"""Testing fakes – doubles for the ToggleStore port."""
from mp_toggles.application.feature_toggles.in_memory import InMemoryToggleStore
from mp_toggles.testing.fakes.toggle_store import UnavailableToggleStore

__all__ = ["InMemoryToggleStore", "UnavailableToggleStore"]
