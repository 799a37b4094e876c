"""Feature toggles – FeatureToggleService.

Public entry point used by the rest of an application::

    service = FeatureToggleService(RedisToggleStore.from_settings(settings))

    await service.enable("search", regional_offices=["RO01", "RO02"])
    await service.is_enabled("search", Principal(id="CSS_ID", organizational_unit="RO01"))
    await service.disable("search", regional_offices=["RO01", "RO02"])
    await service.sync(document)

``enable`` and ``disable`` are read-modify-write sequences with no
compare-and-swap: concurrent writers to the same feature race and the last
write wins.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterable

from mp_toggles.application.feature_toggles.document import load_document
from mp_toggles.application.feature_toggles.registry import FeatureRegistry
from mp_toggles.application.feature_toggles.store import ToggleStore
from mp_toggles.application.feature_toggles.sync import SyncEngine, SyncReport
from mp_toggles.application.feature_toggles.targeting import Targeting, merge_members
from mp_toggles.config.settings.toggles import ToggleSettings
from mp_toggles.config.validation import MissingRequiredSettingError
from mp_toggles.kernel.security import Principal
from mp_toggles.kernel.security.principal import normalize_user_id
from mp_toggles.observability.logging import JsonLoggerFactory, get_logger

_log = get_logger(__name__)


def _values(criterion: Iterable[str | None] | str | None) -> tuple[str | None, ...]:
    if criterion is None:
        return ()
    if isinstance(criterion, str):
        return (criterion,)
    return tuple(criterion)


class FeatureToggleService:
    def __init__(
        self,
        store: ToggleStore,
        *,
        document_path: str | os.PathLike[str] | None = None,
    ) -> None:
        self._registry = FeatureRegistry(store)
        self._sync = SyncEngine(self._registry)
        self._document_path = document_path

    @classmethod
    def from_settings(cls, store: ToggleStore, settings: ToggleSettings) -> FeatureToggleService:
        """Configure JSON logging at ``settings.log_level`` and build a service
        that syncs from ``settings.document_path`` by default."""
        JsonLoggerFactory.configure(settings.log_level)
        return cls(store, document_path=settings.document_path)

    @property
    def registry(self) -> FeatureRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_features(self) -> list[str]:
        return await self._registry.list()

    async def is_enabled(self, feature: str, principal: Principal | None = None) -> bool:
        targeting = await self._registry.load(feature)
        if targeting is None:
            return False
        enabled = targeting.authorizes(principal)
        _log.debug(
            "feature_toggle.checked",
            feature=feature,
            scope=targeting.scope.value,
            enabled=enabled,
        )
        return enabled

    async def details_for(self, feature: str) -> dict[str, list[str]] | None:
        """``None`` when unregistered, ``{}`` when global, else the target lists."""
        targeting = await self._registry.load(feature)
        return None if targeting is None else targeting.as_details()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def enable(
        self,
        feature: str,
        *,
        users: Iterable[str | None] | None = None,
        regional_offices: Iterable[str | None] | None = None,
    ) -> None:
        """Enable *feature* for everyone, or widen it to more users/offices.

        Without criteria the feature becomes global and any previous scoping is
        cleared.  With criteria the values are merged into the stored sets; a
        global or unknown feature starts from empty sets.  Criteria with no
        usable values still register the feature and leave its stored state as
        it was.
        """
        if users is None and regional_offices is None:
            await self._registry.save(feature, Targeting.everyone())
            _log.info("feature_toggle.enabled", feature=feature, scope="global")
            return

        current = await self._registry.load(feature)
        base = current if current is not None and not current.is_global else None
        merged_users = merge_members(base.users if base else (), _values(users))
        merged_offices = merge_members(base.regional_offices if base else (), _values(regional_offices))
        if not merged_users and not merged_offices:
            # Registered with its stored state untouched: an unknown feature reads as global.
            await self._registry.add(feature)
            _log.info("feature_toggle.enabled", feature=feature, scope="unchanged")
            return

        targeting = Targeting.scoped(users=merged_users, regional_offices=merged_offices)
        await self._registry.save(feature, targeting)
        _log.info("feature_toggle.enabled", feature=feature, scope="scoped", **targeting.as_details())

    async def disable(
        self,
        feature: str,
        *,
        users: Iterable[str | None] | None = None,
        regional_offices: Iterable[str | None] | None = None,
    ) -> None:
        """Disable *feature* for everyone, or narrow it by users/offices.

        A feature left with no users and no offices is removed rather than
        falling back to global.
        """
        if users is None and regional_offices is None:
            await self._registry.remove(feature)
            _log.info("feature_toggle.disabled", feature=feature, scope="global")
            return

        current = await self._registry.load(feature)
        if current is None:
            return

        removed_users = {normalize_user_id(u) for u in _values(users) if u is not None}
        removed_offices = {o for o in _values(regional_offices) if o is not None}
        remaining_users = tuple(u for u in current.users if normalize_user_id(u) not in removed_users)
        remaining_offices = tuple(o for o in current.regional_offices if o not in removed_offices)

        if not remaining_users and not remaining_offices:
            await self._registry.remove(feature)
            _log.warning(
                "feature_toggle.collapsed",
                feature=feature,
                previous_scope=current.scope.value,
            )
            return

        targeting = Targeting.scoped(users=remaining_users, regional_offices=remaining_offices)
        if targeting != current:
            await self._registry.save(feature, targeting)
        _log.info("feature_toggle.disabled", feature=feature, scope="scoped", **targeting.as_details())

    # ------------------------------------------------------------------
    # Declarative sync
    # ------------------------------------------------------------------

    async def sync(self, document: Any) -> SyncReport:
        return await self._sync.sync(document)

    async def sync_from_path(self, path: str | os.PathLike[str] | None = None) -> SyncReport:
        """Load a JSON document from *path* (or the configured path) and sync it."""
        source = path or self._document_path
        if source is None:
            raise MissingRequiredSettingError("TOGGLES_DOCUMENT_PATH")
        return await self.sync(load_document(Path(source)))


__all__ = ["FeatureToggleService"]
