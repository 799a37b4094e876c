"""Testing fakes – UnavailableToggleStore."""
from __future__ import annotations

from mp_toggles.application.feature_toggles.in_memory import InMemoryToggleStore, InMemoryTransaction
from mp_toggles.application.feature_toggles.store import StoreTransaction
from mp_toggles.kernel.errors import StoreUnavailableError


class _FailingTransaction(InMemoryTransaction):
    def __init__(self, store: "UnavailableToggleStore") -> None:
        super().__init__(store)
        self._failing_store = store

    async def commit(self) -> None:
        self._failing_store._fail("transaction")  # noqa: SLF001
        await super().commit()


class UnavailableToggleStore(InMemoryToggleStore):
    """In-memory store that can be switched into an outage.

    While :attr:`down` is ``True`` every operation raises
    :class:`StoreUnavailableError` and nothing is written::

        store = UnavailableToggleStore()
        await FeatureToggleService(store).enable("search")
        store.down = True
    """

    def __init__(self, *, down: bool = False) -> None:
        super().__init__()
        self.down = down
        self.failed_operations: list[str] = []

    def _fail(self, operation: str) -> None:
        if self.down:
            self.failed_operations.append(operation)
            raise StoreUnavailableError("fake", operation=operation)

    async def get(self, key: str) -> str | None:
        self._fail("get")
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        self._fail("set")
        await super().set(key, value)

    async def delete(self, key: str) -> None:
        self._fail("delete")
        await super().delete(key)

    async def members(self, key: str) -> set[str]:
        self._fail("members")
        return await super().members(key)

    async def is_member(self, key: str, member: str) -> bool:
        self._fail("is_member")
        return await super().is_member(key, member)

    async def add_member(self, key: str, member: str) -> None:
        self._fail("add_member")
        await super().add_member(key, member)

    async def remove_member(self, key: str, member: str) -> None:
        self._fail("remove_member")
        await super().remove_member(key, member)

    def transaction(self) -> StoreTransaction:
        return _FailingTransaction(self)


__all__ = ["UnavailableToggleStore"]
