"""Config settings – ToggleSettings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from mp_toggles.config.settings.base import Settings
from mp_toggles.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class ToggleSettings(Settings):
    """Settings read from ``TOGGLES_*`` environment variables."""

    _prefix: ClassVar[str] = "TOGGLES"

    redis_url: str = "redis://localhost:6379/0"
    namespace: str = "feature_toggle"
    log_level: str = "INFO"
    document_path: str | None = None

    def _validate(self) -> None:
        if not self.redis_url.startswith(("redis://", "rediss://", "unix://")):
            raise InvalidSettingValueError(
                "redis_url", self.redis_url, "must use the redis://, rediss:// or unix:// scheme"
            )
        if not self.namespace or ":" in self.namespace:
            raise InvalidSettingValueError(
                "namespace", self.namespace, "must be non-empty and must not contain ':'"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")


__all__ = ["ToggleSettings"]
