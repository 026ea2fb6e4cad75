"""Tests for the key-value backends and the first-launch flag."""

import asyncio

import pytest

from spending_tracker.constants import FIRST_LAUNCH_KEY
from spending_tracker.models.audit import AuditEventType
from spending_tracker.services.onboarding import (
    check_first_launch,
    set_first_launch_complete,
)
from spending_tracker.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    StorageReadError,
    StorageWriteError,
)
from tests.conftest import FailingKeyValueStore


class TestInMemoryKeyValueStore:
    """Tests for the dict-backed store."""

    def test_get_set_remove(self):
        """Test the basic contract."""
        async def scenario():
            kv = InMemoryKeyValueStore()
            assert await kv.get("a") is None
            await kv.set("a", "1")
            assert await kv.get("a") == "1"
            await kv.remove("a")
            await kv.remove("a")
            assert await kv.get("a") is None

        asyncio.run(scenario())


class TestJsonFileKeyValueStore:
    """Tests for the file-backed store."""

    def test_missing_file_is_empty(self, tmp_path):
        """Test a store that was never written reads as empty."""
        kv = JsonFileKeyValueStore(tmp_path / "store.json")
        assert asyncio.run(kv.get("spendings")) is None

    def test_survives_reopen(self, tmp_path):
        """Test values written by one instance are read by another."""
        path = tmp_path / "nested" / "store.json"

        async def scenario():
            await JsonFileKeyValueStore(path).set("spendings", "[]")
            await JsonFileKeyValueStore(path).set("categories", '[{"id": "1"}]')
            reopened = JsonFileKeyValueStore(path)
            return await reopened.get("spendings"), await reopened.get("categories")

        spendings, categories = asyncio.run(scenario())
        assert spendings == "[]"
        assert categories == '[{"id": "1"}]'

    def test_remove(self, tmp_path):
        """Test removing a key leaves the others."""
        path = tmp_path / "store.json"

        async def scenario():
            kv = JsonFileKeyValueStore(path)
            await kv.set("a", "1")
            await kv.set("b", "2")
            await kv.remove("a")
            await kv.remove("missing")
            return await kv.get("a"), await kv.get("b")

        assert asyncio.run(scenario()) == (None, "2")

    def test_no_temp_files_left(self, tmp_path):
        """Test atomic writes clean up after themselves."""
        path = tmp_path / "store.json"

        async def scenario():
            kv = JsonFileKeyValueStore(path)
            await asyncio.gather(*(kv.set(f"k{i}", str(i)) for i in range(10)))
            return [await kv.get(f"k{i}") for i in range(10)]

        assert asyncio.run(scenario()) == [str(i) for i in range(10)]
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_corrupt_file(self, tmp_path):
        """Test a corrupt file raises on read and refuses to be overwritten."""
        path = tmp_path / "store.json"
        path.write_text("{broken", encoding="utf-8")
        kv = JsonFileKeyValueStore(path)

        with pytest.raises(StorageReadError):
            asyncio.run(kv.get("spendings"))
        with pytest.raises(StorageWriteError):
            asyncio.run(JsonFileKeyValueStore(path).set("spendings", "[]"))
        assert path.read_text(encoding="utf-8") == "{broken"

    def test_non_object_document(self, tmp_path):
        """Test a JSON array at the top level is treated as corrupt."""
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(StorageReadError):
            asyncio.run(JsonFileKeyValueStore(path).get("spendings"))

    def test_transient_write_error_is_retried(self, tmp_path, monkeypatch):
        """Test a write that fails once still lands on the next attempt."""
        path = tmp_path / "store.json"
        kv = JsonFileKeyValueStore(path, retry_attempts=3)
        real_replace = kv._replace_file
        calls = []

        def flaky_replace(document):
            calls.append(document)
            if len(calls) == 1:
                raise OSError("device busy")
            real_replace(document)

        monkeypatch.setattr(kv, "_replace_file", flaky_replace)
        asyncio.run(kv.set("spendings", "[]"))

        assert len(calls) == 2
        assert asyncio.run(JsonFileKeyValueStore(path).get("spendings")) == "[]"

    def test_persistent_write_error(self, tmp_path, monkeypatch):
        """Test a write that keeps failing gives up after the configured attempts."""
        kv = JsonFileKeyValueStore(tmp_path / "store.json", retry_attempts=2)
        calls = []

        def broken_replace(document):
            calls.append(document)
            raise OSError("disk full")

        monkeypatch.setattr(kv, "_replace_file", broken_replace)
        with pytest.raises(StorageWriteError):
            asyncio.run(kv.set("spendings", "[]"))
        assert len(calls) == 2
        assert not (tmp_path / "store.json").exists()

    def test_defaults_from_settings(self, tmp_path, monkeypatch):
        """Test the data path comes from SPENDING_STORAGE_DATA_PATH."""
        from spending_tracker.config import get_settings

        monkeypatch.setenv("SPENDING_STORAGE_DATA_PATH", str(tmp_path / "env.json"))
        get_settings.cache_clear()
        try:
            kv = JsonFileKeyValueStore()
            assert kv.path == tmp_path / "env.json"
        finally:
            get_settings.cache_clear()


class TestOnboarding:
    """Tests for the first-launch flag."""

    def test_first_launch_then_complete(self, kv, audit_logger):
        """Test the flag flips once onboarding is marked complete."""
        async def scenario():
            first = await check_first_launch(kv, audit_logger)
            await set_first_launch_complete(kv, audit_logger)
            second = await check_first_launch(kv, audit_logger)
            return first, second

        assert asyncio.run(scenario()) == (True, False)
        assert kv.snapshot()[FIRST_LAUNCH_KEY] == "true"

    def test_any_value_means_launched(self, audit_logger):
        """Test presence, not content, is what counts."""
        kv = InMemoryKeyValueStore({FIRST_LAUNCH_KEY: "no"})
        assert asyncio.run(check_first_launch(kv, audit_logger)) is False

    def test_read_failure_shows_onboarding(self, audit_logger):
        """Test an unreadable flag defaults to showing onboarding."""
        kv = FailingKeyValueStore(fail_reads=True)
        assert asyncio.run(check_first_launch(kv, audit_logger)) is True
        assert audit_logger.events[-1].event_type == AuditEventType.ONBOARDING_FLAG_FAILED

    def test_write_failure_is_swallowed(self, failing_kv, audit_logger):
        """Test a failed flag write is logged, not raised."""
        asyncio.run(set_first_launch_complete(failing_kv, audit_logger))
        assert audit_logger.events[-1].event_type == AuditEventType.ONBOARDING_FLAG_FAILED
