"""Tests for the class cache store and reconciliation policies."""

import json
import os

import pytest

from tailwindcss_patch.core.cache import CacheStore, reconcile, reconcile_sync
from tailwindcss_patch.core.options import normalize_options


def _store(tmp_path, enabled=True, strategy="merge"):
    cache = {"enabled": enabled, "dir": "cache", "file": "classes.json", "strategy": strategy}
    return CacheStore(normalize_options({"cwd": str(tmp_path), "cache": cache}).cache)


# =========================================================================
# CacheStore
# =========================================================================


class TestCacheStoreSync:
    def test_missing_file_reads_empty(self, tmp_path):
        assert _store(tmp_path).read_sync() == set()

    def test_write_then_read(self, tmp_path):
        store = _store(tmp_path)
        path = store.write_sync({"flex", "p-4", "flex"})

        assert path == os.path.join(str(tmp_path), "cache", "classes.json")
        with open(path, encoding="utf-8") as f:
            assert json.load(f) == ["flex", "p-4"]
        assert store.read_sync() == {"flex", "p-4"}

    def test_nested_cache_file(self, tmp_path):
        cache = {"dir": "cache", "file": "sub/classes.json"}
        store = CacheStore(normalize_options({"cwd": str(tmp_path), "cache": cache}).cache)

        path = store.write_sync({"flex"})

        assert path == os.path.join(str(tmp_path), "cache", "sub", "classes.json")
        assert store.read_sync() == {"flex"}
        assert os.listdir(os.path.join(str(tmp_path), "cache", "sub")) == ["classes.json"]

    def test_write_replaces(self, tmp_path):
        store = _store(tmp_path)
        store.write_sync({"a"})
        store.write_sync({"b"})
        assert store.read_sync() == {"b"}
        assert os.listdir(os.path.join(str(tmp_path), "cache")) == ["classes.json"]

    def test_corrupt_file_reads_empty(self, tmp_path):
        store = _store(tmp_path)
        os.makedirs(os.path.dirname(store.path))
        with open(store.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        assert store.read_sync() == set()

    def test_non_array_reads_empty(self, tmp_path):
        store = _store(tmp_path)
        os.makedirs(os.path.dirname(store.path))
        with open(store.path, "w", encoding="utf-8") as f:
            json.dump({"flex": True}, f)
        assert store.read_sync() == set()

    def test_disabled_store(self, tmp_path):
        store = _store(tmp_path, enabled=False)
        assert store.write_sync({"flex"}) is None
        assert store.read_sync() == set()
        assert not os.path.exists(store.path)


class TestCacheStoreAsync:
    @pytest.mark.asyncio
    async def test_round_trip(self, tmp_path):
        store = _store(tmp_path)
        await store.write(["text-sm", "font-bold"])
        assert await store.read() == {"text-sm", "font-bold"}
        assert store.read_sync() == {"text-sm", "font-bold"}


# =========================================================================
# Reconciliation
# =========================================================================


class TestReconcileMerge:
    def test_union_is_written(self, tmp_path):
        store = _store(tmp_path)
        store.write_sync({"a", "b"})

        assert reconcile_sync(store, {"b", "c"}, "merge") == {"a", "b", "c"}
        assert store.read_sync() == {"a", "b", "c"}

    def test_empty_observation_keeps_history(self, tmp_path):
        store = _store(tmp_path)
        store.write_sync({"a"})
        assert reconcile_sync(store, set(), "merge") == {"a"}

    @pytest.mark.asyncio
    async def test_async(self, tmp_path):
        store = _store(tmp_path)
        await store.write({"a"})
        assert await reconcile(store, {"z"}, "merge") == {"a", "z"}
        assert await store.read() == {"a", "z"}


class TestReconcileOverwrite:
    def test_observation_replaces(self, tmp_path):
        store = _store(tmp_path, strategy="overwrite")
        store.write_sync({"a", "b"})

        assert reconcile_sync(store, {"c"}, "overwrite") == {"c"}
        assert store.read_sync() == {"c"}

    def test_empty_observation_returns_persisted(self, tmp_path):
        store = _store(tmp_path, strategy="overwrite")
        store.write_sync({"a", "b"})

        assert reconcile_sync(store, set(), "overwrite") == {"a", "b"}
        assert store.read_sync() == {"a", "b"}

    @pytest.mark.asyncio
    async def test_async(self, tmp_path):
        store = _store(tmp_path, strategy="overwrite")
        await store.write({"a"})
        assert await reconcile(store, set(), "overwrite") == {"a"}
        assert await reconcile(store, {"b"}, "overwrite") == {"b"}


class TestReconcileDisabled:
    def test_passthrough(self, tmp_path):
        store = _store(tmp_path, enabled=False)
        observed = {"flex"}
        assert reconcile_sync(store, observed, "merge") == {"flex"}
        assert not os.path.exists(store.path)

    @pytest.mark.asyncio
    async def test_passthrough_async(self, tmp_path):
        store = _store(tmp_path, enabled=False)
        assert await reconcile(store, set(), "overwrite") == set()
