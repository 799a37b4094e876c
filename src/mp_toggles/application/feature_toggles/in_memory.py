"""Feature toggles – InMemoryToggleStore."""

from __future__ import annotations

from mp_toggles.application.feature_toggles.store import StoreTransaction, ToggleStore


class InMemoryTransaction(StoreTransaction):
    def __init__(self, store: "InMemoryToggleStore") -> None:
        super().__init__()
        self._store = store

    async def commit(self) -> None:
        # Applied without awaiting, so no other task can observe a partial state.
        for op in self.operations:
            if op.kind == "set":
                self._store._values[op.key] = op.value  # noqa: SLF001
                self._store._sets.pop(op.key, None)  # noqa: SLF001
            elif op.kind == "delete":
                self._store._values.pop(op.key, None)  # noqa: SLF001
                self._store._sets.pop(op.key, None)  # noqa: SLF001
            elif op.kind == "add_member":
                self._store._sets.setdefault(op.key, set()).add(op.value)  # noqa: SLF001
            elif op.kind == "remove_member":
                self._store._discard(op.key, op.value)  # noqa: SLF001
            else:
                raise ValueError(f"Unknown store operation {op.kind!r}")
        self.operations.clear()


class InMemoryToggleStore(ToggleStore):
    """Dict-backed store for tests and single-process use."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}
        self._sets: dict[str, set[str]] = {}

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self._sets.pop(key, None)

    async def delete(self, key: str) -> None:
        self._values.pop(key, None)
        self._sets.pop(key, None)

    async def members(self, key: str) -> set[str]:
        return set(self._sets.get(key, ()))

    async def is_member(self, key: str, member: str) -> bool:
        return member in self._sets.get(key, ())

    async def add_member(self, key: str, member: str) -> None:
        self._sets.setdefault(key, set()).add(member)

    async def remove_member(self, key: str, member: str) -> None:
        self._discard(key, member)

    def transaction(self) -> StoreTransaction:
        return InMemoryTransaction(self)

    def _discard(self, key: str, member: str | None) -> None:
        members = self._sets.get(key)
        if members is None:
            return
        members.discard(member)  # type: ignore[arg-type]
        if not members:
            del self._sets[key]

    def snapshot(self) -> dict[str, object]:
        """Copy of every key, for asserting on persisted state in tests."""
        data: dict[str, object] = dict(self._values)
        data.update({key: frozenset(members) for key, members in self._sets.items()})
        return data

    def clear(self) -> None:
        self._values.clear()
        self._sets.clear()


__all__ = ["InMemoryToggleStore", "InMemoryTransaction"]
