"""Feature toggles – ToggleStore port and StoreTransaction unit of work."""
from __future__ import annotations

import abc
import dataclasses
from typing import Any


@dataclasses.dataclass(frozen=True)
class StoreOperation:
    """One queued write: ``set``, ``delete``, ``add_member`` or ``remove_member``."""
    kind: str
    key: str
    value: str | None = None


class StoreTransaction(abc.ABC):
    """Port: writes queued here are applied as one atomic unit.

    Used as an async context manager; the queue is committed on a clean exit
    and discarded when the block raises::

        async with store.transaction() as tx:
            tx.delete("feature_list_key")
            tx.add_member("feature_list_key", "search")
            tx.set("search", "{}")
    """

    def __init__(self) -> None:
        self.operations: list[StoreOperation] = []

    def set(self, key: str, value: str) -> "StoreTransaction":
        self.operations.append(StoreOperation("set", key, value))
        return self

    def delete(self, key: str) -> "StoreTransaction":
        self.operations.append(StoreOperation("delete", key))
        return self

    def add_member(self, key: str, member: str) -> "StoreTransaction":
        self.operations.append(StoreOperation("add_member", key, member))
        return self

    def remove_member(self, key: str, member: str) -> "StoreTransaction":
        self.operations.append(StoreOperation("remove_member", key, member))
        return self

    @abc.abstractmethod
    async def commit(self) -> None: ...

    async def rollback(self) -> None:
        self.operations.clear()

    async def __aenter__(self) -> "StoreTransaction":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()


class ToggleStore(abc.ABC):
    """Port: atomic key-value and set-membership operations.

    Implementations raise :class:`~mp_toggles.kernel.errors.StoreUnavailableError`
    for any backend failure.
    """

    @abc.abstractmethod
    async def get(self, key: str) -> str | None: ...

    @abc.abstractmethod
    async def set(self, key: str, value: str) -> None: ...

    @abc.abstractmethod
    async def delete(self, key: str) -> None: ...

    @abc.abstractmethod
    async def members(self, key: str) -> set[str]: ...

    @abc.abstractmethod
    async def is_member(self, key: str, member: str) -> bool: ...

    @abc.abstractmethod
    async def add_member(self, key: str, member: str) -> None: ...

    @abc.abstractmethod
    async def remove_member(self, key: str, member: str) -> None: ...

    @abc.abstractmethod
    def transaction(self) -> StoreTransaction: ...


__all__ = ["StoreOperation", "StoreTransaction", "ToggleStore"]
