"""Kernel security – Principal."""
from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class Principal:
    """Requesting identity: a user id and the regional office it belongs to."""
    id: str | None = None
    organizational_unit: str | None = None

    @property
    def normalized_id(self) -> str | None:
        """User ids are compared trimmed and lower-cased."""
        return None if self.id is None else normalize_user_id(self.id)


def normalize_user_id(value: str) -> str:
    return value.strip().lower()


__all__ = ["Principal", "normalize_user_id"]
