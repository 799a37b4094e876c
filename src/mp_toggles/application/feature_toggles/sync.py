"""Feature toggles – SyncEngine.

Reconciles the registry against a declarative document: every feature in the
document is registered and its targeting overwritten, every other feature is
removed, and all of it is committed in a single store transaction.

The current registry is read before that transaction starts.  A feature
enabled by another writer between the read and the commit is unregistered by
the reset, so it reads as disabled, but its ``feature:<name>`` blob stays
behind.  The blob is only reached again if the feature is re-registered.
"""
from __future__ import annotations

import dataclasses
from typing import Any

from mp_toggles.application.feature_toggles.document import validate_document
from mp_toggles.application.feature_toggles.errors import DocumentValidationError
from mp_toggles.application.feature_toggles.registry import FeatureRegistry
from mp_toggles.observability.logging import get_logger

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class SyncReport:
    """Feature names touched by one reconciliation."""
    added: tuple[str, ...] = ()
    updated: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return len(self.added) + len(self.updated) + len(self.removed)


class SyncEngine:
    def __init__(self, registry: FeatureRegistry) -> None:
        self._registry = registry

    async def sync(self, document: Any) -> SyncReport:
        """Replace all toggle state with *document*.

        Raises :class:`DocumentValidationError` before any write when the
        document is invalid.
        """
        try:
            records = validate_document(document)
        except DocumentValidationError as exc:
            _log.warning("feature_toggle.document.invalid", **exc.to_dict())
            raise

        target = {record.feature for record in records}
        current = set(await self._registry.list())
        stale = sorted(current - target)

        async with self._registry.store.transaction() as tx:
            FeatureRegistry.stage_reset(tx)
            for record in records:
                FeatureRegistry.stage_save(tx, record.feature, record.targeting())
            for feature in stale:
                FeatureRegistry.stage_removal(tx, feature)

        report = SyncReport(
            added=tuple(sorted(target - current)),
            updated=tuple(sorted(target & current)),
            removed=tuple(stale),
        )
        _log.info(
            "feature_toggle.sync.completed",
            added=list(report.added),
            updated=list(report.updated),
            removed=list(report.removed),
        )
        return report


__all__ = ["SyncEngine", "SyncReport"]
