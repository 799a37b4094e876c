"""Feature toggles – Targeting value object and decision function.

A registered feature is either enabled for everyone (:attr:`Scope.GLOBAL`) or
scoped to a set of users and/or regional offices (:attr:`Scope.SCOPED`).  The
scope is explicit so that "no restrictions" can never be inferred from an
emptied-out set.

Persisted form::

    {}                                             # global
    {"users": ["CSS_ID_1"], "regionalOffices": ["RO01"]}
"""
from __future__ import annotations

import dataclasses
import enum
import json
from typing import Any, Iterable

from mp_toggles.kernel.errors import InvariantViolationError, SerializationError
from mp_toggles.kernel.security import Principal
from mp_toggles.kernel.security.principal import normalize_user_id

USERS_FIELD = "users"
REGIONAL_OFFICES_FIELD = "regionalOffices"


class Scope(str, enum.Enum):
    GLOBAL = "global"
    SCOPED = "scoped"


def merge_members(existing: Iterable[str], added: Iterable[str | None]) -> tuple[str, ...]:
    """Ordered union; ``None`` entries and duplicates are dropped."""
    merged: list[str] = []
    for value in (*existing, *added):
        if value is not None and value not in merged:
            merged.append(value)
    return tuple(merged)


@dataclasses.dataclass(frozen=True)
class Targeting:
    """Activation policy of one feature.

    Use :meth:`everyone` and :meth:`scoped` rather than the constructor.
    """

    scope: Scope
    users: tuple[str, ...] = ()
    regional_offices: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.scope is Scope.GLOBAL and (self.users or self.regional_offices):
            raise InvariantViolationError("Global targeting cannot carry users or regional offices")
        if self.scope is Scope.SCOPED and not (self.users or self.regional_offices):
            raise InvariantViolationError(
                "Scoped targeting needs at least one user or regional office"
            )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def everyone(cls) -> "Targeting":
        return cls(scope=Scope.GLOBAL)

    @classmethod
    def scoped(
        cls,
        *,
        users: Iterable[str | None] = (),
        regional_offices: Iterable[str | None] = (),
    ) -> "Targeting":
        return cls(
            scope=Scope.SCOPED,
            users=merge_members((), users),
            regional_offices=merge_members((), regional_offices),
        )

    # ------------------------------------------------------------------
    # Decision
    # ------------------------------------------------------------------

    @property
    def is_global(self) -> bool:
        return self.scope is Scope.GLOBAL

    def authorizes(self, principal: Principal | None) -> bool:
        """Return ``True`` when *principal* may use the feature.

        User ids match case-insensitively; office codes match exactly.
        """
        if self.is_global:
            return True
        if principal is None:
            return False
        if self.users and principal.id is not None:
            wanted = principal.normalized_id
            if any(normalize_user_id(user) == wanted for user in self.users):
                return True
        if self.regional_offices and principal.organizational_unit is not None:
            return principal.organizational_unit in self.regional_offices
        return False

    # ------------------------------------------------------------------
    # Views and codec
    # ------------------------------------------------------------------

    def as_details(self) -> dict[str, list[str]]:
        details: dict[str, list[str]] = {}
        if self.users:
            details["users"] = list(self.users)
        if self.regional_offices:
            details["regional_offices"] = list(self.regional_offices)
        return details

    def to_payload(self) -> dict[str, list[str]]:
        payload: dict[str, list[str]] = {}
        if self.users:
            payload[USERS_FIELD] = list(self.users)
        if self.regional_offices:
            payload[REGIONAL_OFFICES_FIELD] = list(self.regional_offices)
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), separators=(",", ":"))

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Targeting":
        users = payload.get(USERS_FIELD) or ()
        offices = payload.get(REGIONAL_OFFICES_FIELD) or ()
        if not isinstance(users, (list, tuple)) or not isinstance(offices, (list, tuple)):
            raise SerializationError("Targeting sets must be arrays", payload_type="targeting")
        if not users and not offices:
            return cls.everyone()
        return cls.scoped(users=users, regional_offices=offices)

    @classmethod
    def from_json(cls, raw: str | bytes | None) -> "Targeting":
        """Decode a stored blob; a missing blob reads as global."""
        if raw is None:
            return cls.everyone()
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            raise SerializationError(
                "Stored targeting is not valid JSON", payload_type="targeting", cause=exc
            ) from exc
        if not isinstance(payload, dict):
            raise SerializationError("Stored targeting must be an object", payload_type="targeting")
        return cls.from_payload(payload)


__all__ = [
    "REGIONAL_OFFICES_FIELD",
    "Scope",
    "Targeting",
    "USERS_FIELD",
    "merge_members",
]
