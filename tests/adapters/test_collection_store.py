"""Tests for JsonCollectionStore.

Uses a real temporary directory so file replacement and degraded loads are
exercised end to end.
"""

from __future__ import annotations

import asyncio
import json
import os
from unittest.mock import patch

import pytest

from taskflow.adapters.jsonfile import JsonCollectionStore
from taskflow.errors import StorageError


class TestEnsureLocation:
    def test_creates_missing_directory(self, tmp_path):
        store = JsonCollectionStore(tmp_path / "nested" / "data")
        store.ensure_location()
        assert (tmp_path / "nested" / "data").is_dir()

    def test_is_idempotent(self, store, data_dir):
        store.ensure_location()
        store.ensure_location()
        assert data_dir.is_dir()


class TestLoad:
    @pytest.mark.asyncio
    async def test_missing_collection_loads_empty(self, store):
        assert await store.load("projects") == []

    @pytest.mark.asyncio
    async def test_missing_directory_loads_empty(self, tmp_path):
        store = JsonCollectionStore(tmp_path / "does-not-exist")
        assert await store.load("tasks") == []

    @pytest.mark.asyncio
    async def test_corrupt_collection_loads_empty(self, store, data_dir):
        """Unparseable content is tolerated: it degrades to an empty collection."""
        data_dir.mkdir(parents=True)
        store.path_for("tasks").write_text("{not json", encoding="utf-8")

        assert await store.load("tasks") == []

    @pytest.mark.asyncio
    async def test_corrupt_collection_is_logged(self, store, data_dir, isolated_logger):
        data_dir.mkdir(parents=True)
        store.path_for("tasks").write_text("[{", encoding="utf-8")

        await store.load("tasks")

        log_text = (isolated_logger / "taskflow.log").read_text(encoding="utf-8")
        assert "collection tasks could not be read" in log_text

    @pytest.mark.asyncio
    async def test_non_list_collection_loads_empty(self, store, data_dir):
        data_dir.mkdir(parents=True)
        store.path_for("projects").write_text('{"id": "1"}', encoding="utf-8")

        assert await store.load("projects") == []

    @pytest.mark.asyncio
    async def test_loads_records_in_order(self, store, data_dir):
        data_dir.mkdir(parents=True)
        records = [{"id": "b"}, {"id": "a"}, {"id": "c"}]
        store.path_for("projects").write_text(json.dumps(records), encoding="utf-8")

        assert await store.load("projects") == records


class TestSave:
    @pytest.mark.asyncio
    async def test_save_then_load(self, store):
        records = [{"id": "1", "name": "One"}, {"id": "2", "name": "Two"}]
        await store.save("projects", records)

        assert await store.load("projects") == records

    @pytest.mark.asyncio
    async def test_save_creates_directory(self, store, data_dir):
        await store.save("tasks", [])
        assert store.path_for("tasks").exists()
        assert data_dir.is_dir()

    @pytest.mark.asyncio
    async def test_save_writes_indented_json(self, store):
        await store.save("projects", [{"id": "1"}])
        text = store.path_for("projects").read_text(encoding="utf-8")
        assert text == json.dumps([{"id": "1"}], indent=2)

    @pytest.mark.asyncio
    async def test_save_leaves_no_temporary_files(self, store, data_dir):
        await store.save("projects", [{"id": "1"}])
        await store.save("projects", [{"id": "2"}])

        assert sorted(p.name for p in data_dir.iterdir()) == ["projects.json"]

    @pytest.mark.asyncio
    async def test_failed_replace_keeps_previous_content(self, store, data_dir):
        await store.save("projects", [{"id": "old"}])

        with patch(
            "taskflow.adapters.jsonfile.collection_store.os.replace",
            side_effect=OSError("disk full"),
        ):
            with pytest.raises(StorageError, match="disk full"):
                await store.save("projects", [{"id": "new"}])

        assert await store.load("projects") == [{"id": "old"}]
        assert sorted(p.name for p in data_dir.iterdir()) == ["projects.json"]

    @pytest.mark.asyncio
    async def test_unserializable_record_raises_storage_error(self, store):
        with pytest.raises(StorageError):
            await store.save("projects", [{"id": object()}])

    @pytest.mark.asyncio
    async def test_replace_targets_collection_file(self, store):
        calls = []
        real_replace = os.replace

        def spy(src, dst):
            calls.append((src, dst))
            real_replace(src, dst)

        with patch("taskflow.adapters.jsonfile.collection_store.os.replace", side_effect=spy):
            await store.save("tasks", [{"id": "1"}])

        assert len(calls) == 1
        src, dst = calls[0]
        assert str(dst) == str(store.path_for("tasks"))
        assert str(src) != str(dst)


class TestLocks:
    def test_same_collection_shares_lock(self, store):
        assert store.lock("tasks") is store.lock("tasks")

    def test_collections_have_separate_locks(self, store):
        assert store.lock("tasks") is not store.lock("projects")

    @pytest.mark.asyncio
    async def test_locked_writers_do_not_lose_updates(self, store):
        async def append(n: int) -> None:
            async with store.lock("items"):
                records = await store.load("items")
                await asyncio.sleep(0)
                records.append({"id": str(n)})
                await store.save("items", records)

        await asyncio.gather(*(append(n) for n in range(20)))

        records = await store.load("items")
        assert sorted(int(r["id"]) for r in records) == list(range(20))
