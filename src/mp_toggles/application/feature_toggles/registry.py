"""Feature toggles – FeatureRegistry.

Key layout inside a :class:`ToggleStore`::

    feature_list_key        set of registered feature names
    feature:<name>          JSON targeting blob of one feature
"""
from __future__ import annotations

from mp_toggles.application.feature_toggles.store import StoreTransaction, ToggleStore
from mp_toggles.application.feature_toggles.targeting import Targeting

REGISTRY_KEY = "feature_list_key"
FEATURE_KEY_PREFIX = "feature:"


def feature_key(feature: str) -> str:
    return f"{FEATURE_KEY_PREFIX}{feature}"


class FeatureRegistry:
    """Registered feature names plus their persisted targeting."""

    def __init__(self, store: ToggleStore) -> None:
        self._store = store

    @property
    def store(self) -> ToggleStore:
        return self._store

    async def list(self) -> list[str]:
        return sorted(await self._store.members(REGISTRY_KEY))

    async def contains(self, feature: str) -> bool:
        return await self._store.is_member(REGISTRY_KEY, feature)

    async def add(self, feature: str) -> None:
        await self._store.add_member(REGISTRY_KEY, feature)

    async def remove(self, feature: str) -> None:
        """Unregister *feature* and drop its targeting in one transaction."""
        async with self._store.transaction() as tx:
            self.stage_removal(tx, feature)

    async def load(self, feature: str) -> Targeting | None:
        """Return the targeting of a registered feature, ``None`` otherwise."""
        if not await self.contains(feature):
            return None
        return Targeting.from_json(await self._store.get(feature_key(feature)))

    async def save(self, feature: str, targeting: Targeting) -> None:
        """Register *feature* (if needed) and persist *targeting*."""
        async with self._store.transaction() as tx:
            self.stage_save(tx, feature, targeting)

    # ------------------------------------------------------------------
    # Transaction staging
    # ------------------------------------------------------------------

    @staticmethod
    def stage_save(tx: StoreTransaction, feature: str, targeting: Targeting) -> None:
        tx.add_member(REGISTRY_KEY, feature)
        tx.set(feature_key(feature), targeting.to_json())

    @staticmethod
    def stage_removal(tx: StoreTransaction, feature: str) -> None:
        tx.remove_member(REGISTRY_KEY, feature)
        tx.delete(feature_key(feature))

    @staticmethod
    def stage_reset(tx: StoreTransaction) -> None:
        tx.delete(REGISTRY_KEY)


__all__ = ["FEATURE_KEY_PREFIX", "FeatureRegistry", "REGISTRY_KEY", "feature_key"]
