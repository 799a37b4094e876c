"""Redis adapter – RedisToggleStore.

Every key is prefixed with the configured namespace (``<namespace>:<key>``)
so test and production toggles can share one Redis instance.
"""
from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, Any, Iterator

from mp_toggles.application.feature_toggles.store import StoreTransaction, ToggleStore
from mp_toggles.kernel.errors import StoreUnavailableError
from mp_toggles.observability.logging import get_logger

if TYPE_CHECKING:
    from mp_toggles.config.settings import ToggleSettings

_log = get_logger(__name__)


def _require_redis() -> Any:
    try:
        import redis
        import redis.asyncio  # noqa: F401
        import redis.exceptions  # noqa: F401
        return redis
    except ImportError as exc:
        raise ImportError("Install 'mp-toggles[redis]' to use the Redis adapter") from exc


def _text(value: Any) -> str:
    return value.decode() if isinstance(value, bytes) else value


class _RedisTransaction(StoreTransaction):
    def __init__(self, store: "RedisToggleStore") -> None:
        super().__init__()
        self._store = store

    async def commit(self) -> None:
        if not self.operations:
            return
        store = self._store
        with store._translate_errors("transaction"):  # noqa: SLF001
            async with store.client.pipeline(transaction=True) as pipe:
                for op in self.operations:
                    key = store.key(op.key)
                    if op.kind == "set":
                        pipe.set(key, op.value)
                    elif op.kind == "delete":
                        pipe.delete(key)
                    elif op.kind == "add_member":
                        pipe.sadd(key, op.value)
                    elif op.kind == "remove_member":
                        pipe.srem(key, op.value)
                    else:
                        raise ValueError(f"Unknown store operation {op.kind!r}")
                await pipe.execute()
        self.operations.clear()


class RedisToggleStore(ToggleStore):
    """Async :class:`ToggleStore` on top of ``redis.asyncio``.

    Redis failures surface as :class:`StoreUnavailableError`; connection
    timeouts and retries are configured on the client (``**kwargs``).
    """

    def __init__(self, url: str, *, namespace: str = "feature_toggle", **kwargs: Any) -> None:
        redis = _require_redis()
        kwargs.setdefault("decode_responses", True)
        self._redis_error: type[Exception] = redis.exceptions.RedisError
        self._client = redis.asyncio.from_url(url, **kwargs)
        self._namespace = namespace

    @classmethod
    def from_client(cls, client: Any, *, namespace: str = "feature_toggle") -> "RedisToggleStore":
        """Wrap an existing ``redis.asyncio.Redis`` client."""
        store = cls.__new__(cls)
        store._redis_error = _require_redis().exceptions.RedisError
        store._client = client
        store._namespace = namespace
        return store

    @classmethod
    def from_settings(cls, settings: "ToggleSettings", **kwargs: Any) -> "RedisToggleStore":
        return cls(settings.redis_url, namespace=settings.namespace, **kwargs)

    @property
    def client(self) -> Any:
        return self._client

    @property
    def namespace(self) -> str:
        return self._namespace

    def key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    @contextlib.contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except self._redis_error as exc:
            _log.error(
                "toggle_store.unavailable",
                namespace=self._namespace,
                operation=operation,
                error=str(exc),
            )
            raise StoreUnavailableError(
                "redis",
                f"Redis {operation} failed: {exc}",
                operation=operation,
                cause=exc,
            ) from exc

    async def get(self, key: str) -> str | None:
        with self._translate_errors("get"):
            value = await self._client.get(self.key(key))
        return None if value is None else _text(value)

    async def set(self, key: str, value: str) -> None:
        with self._translate_errors("set"):
            await self._client.set(self.key(key), value)

    async def delete(self, key: str) -> None:
        with self._translate_errors("delete"):
            await self._client.delete(self.key(key))

    async def members(self, key: str) -> set[str]:
        with self._translate_errors("smembers"):
            values = await self._client.smembers(self.key(key))
        return {_text(value) for value in values}

    async def is_member(self, key: str, member: str) -> bool:
        with self._translate_errors("sismember"):
            return bool(await self._client.sismember(self.key(key), member))

    async def add_member(self, key: str, member: str) -> None:
        with self._translate_errors("sadd"):
            await self._client.sadd(self.key(key), member)

    async def remove_member(self, key: str, member: str) -> None:
        with self._translate_errors("srem"):
            await self._client.srem(self.key(key), member)

    def transaction(self) -> StoreTransaction:
        return _RedisTransaction(self)

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["RedisToggleStore"]
