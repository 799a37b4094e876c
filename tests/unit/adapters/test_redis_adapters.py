"""Unit tests for the Redis toggle store – no running Redis required."""
from __future__ import annotations

import asyncio
import sys
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from mp_toggles.application.feature_toggles import FeatureToggleService
from mp_toggles.config.settings import ToggleSettings
from mp_toggles.kernel.errors import StoreUnavailableError


class FakeRedisError(Exception):
    pass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_pipeline_mock() -> MagicMock:
    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[])
    pipe.__aenter__ = AsyncMock(return_value=pipe)
    pipe.__aexit__ = AsyncMock(return_value=False)
    return pipe


def _make_store(namespace: str = "feature_toggle") -> tuple[Any, MagicMock, MagicMock]:
    """Return (RedisToggleStore, mock_client, mock_redis_module)."""
    mock_client = MagicMock()
    mock_client.get = AsyncMock(return_value=None)
    mock_client.set = AsyncMock()
    mock_client.delete = AsyncMock()
    mock_client.smembers = AsyncMock(return_value=set())
    mock_client.sismember = AsyncMock(return_value=0)
    mock_client.sadd = AsyncMock()
    mock_client.srem = AsyncMock()
    mock_client.aclose = AsyncMock()
    mock_client.pipeline = MagicMock(return_value=_make_pipeline_mock())

    import mp_toggles.adapters.redis.store as store_mod

    mock_redis = MagicMock()
    mock_redis.exceptions.RedisError = FakeRedisError
    mock_redis.asyncio.from_url = MagicMock(return_value=mock_client)

    with patch.object(store_mod, "_require_redis", return_value=mock_redis):
        from mp_toggles.adapters.redis import RedisToggleStore
        store = RedisToggleStore("redis://localhost:6379/0", namespace=namespace)

    return store, mock_client, mock_redis


def _pipe(client: MagicMock) -> MagicMock:
    return client.pipeline.return_value.__aenter__.return_value


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_from_url_decodes_responses(self) -> None:
        _, _, mock_redis = _make_store()
        mock_redis.asyncio.from_url.assert_called_once_with(
            "redis://localhost:6379/0", decode_responses=True
        )

    def test_from_settings(self) -> None:
        import mp_toggles.adapters.redis.store as store_mod

        mock_redis = MagicMock()
        mock_redis.exceptions.RedisError = FakeRedisError
        settings = ToggleSettings(redis_url="redis://cache:6380/2", namespace="feature_toggle_test")
        with patch.object(store_mod, "_require_redis", return_value=mock_redis):
            store = store_mod.RedisToggleStore.from_settings(settings, socket_timeout=1.0)
        mock_redis.asyncio.from_url.assert_called_once_with(
            "redis://cache:6380/2", socket_timeout=1.0, decode_responses=True
        )
        assert store.namespace == "feature_toggle_test"

    def test_from_client_wraps_existing_client(self) -> None:
        import mp_toggles.adapters.redis.store as store_mod

        mock_redis = MagicMock()
        mock_redis.exceptions.RedisError = FakeRedisError
        client = MagicMock()
        with patch.object(store_mod, "_require_redis", return_value=mock_redis):
            store = store_mod.RedisToggleStore.from_client(client, namespace="ns")
        assert store.client is client
        assert store.key("feature_list_key") == "ns:feature_list_key"

    def test_require_redis_error_mentions_extra(self) -> None:
        import mp_toggles.adapters.redis.store as store_mod

        with patch.dict(sys.modules, {"redis": None}):
            with pytest.raises(ImportError, match="mp-toggles\\[redis\\]"):
                store_mod._require_redis()


# ---------------------------------------------------------------------------
# Single-key operations
# ---------------------------------------------------------------------------


class TestRedisToggleStore:
    def test_get_uses_namespaced_key(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            client.get = AsyncMock(return_value='{"users": ["a"]}')
            assert await store.get("feature:search") == '{"users": ["a"]}'
            client.get.assert_awaited_once_with("feature_toggle:feature:search")
        asyncio.run(run())

    def test_get_decodes_bytes(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            client.get = AsyncMock(return_value=b"{}")
            assert await store.get("k") == "{}"
        asyncio.run(run())

    def test_get_miss(self) -> None:
        async def run() -> None:
            store, _, _ = _make_store()
            assert await store.get("k") is None
        asyncio.run(run())

    def test_set_and_delete(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store(namespace="ns")
            await store.set("k", "v")
            await store.delete("k")
            client.set.assert_awaited_once_with("ns:k", "v")
            client.delete.assert_awaited_once_with("ns:k")
        asyncio.run(run())

    def test_members(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            client.smembers = AsyncMock(return_value={b"search", "test"})
            assert await store.members("feature_list_key") == {"search", "test"}
            client.smembers.assert_awaited_once_with("feature_toggle:feature_list_key")
        asyncio.run(run())

    def test_is_member(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            client.sismember = AsyncMock(return_value=1)
            assert await store.is_member("feature_list_key", "search") is True
        asyncio.run(run())

    def test_add_and_remove_member(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            await store.add_member("s", "a")
            await store.remove_member("s", "a")
            client.sadd.assert_awaited_once_with("feature_toggle:s", "a")
            client.srem.assert_awaited_once_with("feature_toggle:s", "a")
        asyncio.run(run())

    def test_close_calls_aclose(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            await store.close()
            client.aclose.assert_awaited_once()
        asyncio.run(run())


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


class TestRedisTransaction:
    def test_commit_uses_multi_exec_pipeline(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store(namespace="ns")
            async with store.transaction() as tx:
                tx.delete("feature_list_key")
                tx.add_member("feature_list_key", "search")
                tx.set("feature:search", "{}")
                tx.remove_member("feature_list_key", "old")
            client.pipeline.assert_called_once_with(transaction=True)
            pipe = _pipe(client)
            pipe.delete.assert_called_once_with("ns:feature_list_key")
            pipe.sadd.assert_called_once_with("ns:feature_list_key", "search")
            pipe.set.assert_called_once_with("ns:feature:search", "{}")
            pipe.srem.assert_called_once_with("ns:feature_list_key", "old")
            pipe.execute.assert_awaited_once()
        asyncio.run(run())

    def test_empty_transaction_skips_pipeline(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            async with store.transaction():
                pass
            client.pipeline.assert_not_called()
        asyncio.run(run())

    def test_error_in_block_discards(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            with pytest.raises(RuntimeError):
                async with store.transaction() as tx:
                    tx.set("k", "v")
                    raise RuntimeError("boom")
            client.pipeline.assert_not_called()
        asyncio.run(run())


# ---------------------------------------------------------------------------
# Error translation
# ---------------------------------------------------------------------------


class TestStoreUnavailable:
    def test_get_failure_is_translated(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            client.get = AsyncMock(side_effect=FakeRedisError("connection refused"))
            with pytest.raises(StoreUnavailableError) as info:
                await store.get("k")
            assert info.value.operation == "get"
            assert isinstance(info.value.__cause__, FakeRedisError)
        asyncio.run(run())

    def test_transaction_failure_is_translated(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            _pipe(client).execute = AsyncMock(side_effect=FakeRedisError("EXECABORT"))
            with pytest.raises(StoreUnavailableError) as info:
                async with store.transaction() as tx:
                    tx.set("k", "v")
            assert info.value.operation == "transaction"
        asyncio.run(run())

    def test_is_enabled_surfaces_failure(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            client.sismember = AsyncMock(side_effect=FakeRedisError("timeout"))
            with pytest.raises(StoreUnavailableError):
                await FeatureToggleService(store).is_enabled("search")
        asyncio.run(run())

    def test_other_errors_propagate_unchanged(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            client.get = AsyncMock(side_effect=KeyError("x"))
            with pytest.raises(KeyError):
                await store.get("k")
        asyncio.run(run())


# ---------------------------------------------------------------------------
# Service wiring over Redis
# ---------------------------------------------------------------------------


class TestServiceOverRedis:
    def test_enable_writes_registry_and_blob_atomically(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            await FeatureToggleService(store).enable("search", regional_offices=["RO01"])
            pipe = _pipe(client)
            pipe.sadd.assert_called_once_with("feature_toggle:feature_list_key", "search")
            pipe.set.assert_called_once_with(
                "feature_toggle:feature:search", '{"regionalOffices":["RO01"]}'
            )
        asyncio.run(run())

    def test_is_enabled_reads_membership_then_blob(self) -> None:
        async def run() -> None:
            store, client, _ = _make_store()
            client.sismember = AsyncMock(return_value=1)
            client.get = AsyncMock(return_value='{"users": ["ABC"]}')
            from mp_toggles.kernel.security import Principal
            assert await FeatureToggleService(store).is_enabled("search", Principal(id="abc")) is True
            client.get.assert_awaited_once_with("feature_toggle:feature:search")
        asyncio.run(run())
