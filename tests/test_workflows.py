"""Tests for the shared workflow layer."""

from pathlib import Path

import pytest

from mindful.adapters.file_storage import FileKeyValueStore
from mindful.adapters.json_entries import CorruptStoreError
from mindful.adapters.memory_storage import InMemoryKeyValueStore
from mindful.config import DATA_DIR, Config
from mindful.core.entries import Mood
from mindful.workflows import get_entry_store, get_storage, open_journal


@pytest.fixture
def config(tmp_path):
    return Config(storage_dir=str(tmp_path))


class TestGetStorage:
    def test_uses_configured_dir(self, config, tmp_path):
        storage = get_storage(config)
        assert isinstance(storage, FileKeyValueStore)
        assert storage.storage_dir == tmp_path

    def test_expands_user_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        storage = get_storage(Config(storage_dir="~/some/journal"))
        assert "~" not in str(storage.storage_dir)
        assert storage.storage_dir == Path(tmp_path) / "some" / "journal"

    def test_falls_back_to_default(self, monkeypatch):
        created = []
        monkeypatch.setattr(Path, "mkdir", lambda self, **kwargs: created.append(self))

        storage = get_storage(Config(storage_dir=""))

        assert storage.storage_dir == DATA_DIR
        assert created == [DATA_DIR]

    def test_in_memory(self, config, tmp_path):
        storage = get_storage(config, in_memory=True)
        assert isinstance(storage, InMemoryKeyValueStore)


class TestGetEntryStore:
    def test_key_and_strict_from_config(self, tmp_path):
        store = get_entry_store(Config(storage_dir=str(tmp_path), storage_key="other", strict_load=True))
        assert store.key == "other"
        assert store.strict is True


class TestOpenJournal:
    def test_default_mood_from_config(self, tmp_path):
        journal = open_journal(Config(storage_dir=str(tmp_path), default_mood=Mood.ORANGE))
        assert journal.mood is Mood.ORANGE

    def test_entries_persist_between_sessions(self, config, tmp_path):
        open_journal(config).add("Feeling calm", mood="blue")

        reopened = open_journal(config)

        assert [e.text for e in reopened.entries] == ["Feeling calm"]
        assert (tmp_path / "mindful-entries.json").exists()

    def test_in_memory_writes_nothing(self, config, tmp_path):
        open_journal(config, in_memory=True).add("Gone soon")

        assert not (tmp_path / "mindful-entries.json").exists()
        assert open_journal(config).entries == ()

    def test_strict_corrupt_store_raises(self, tmp_path):
        (tmp_path / "mindful-entries.json").write_text("not json")
        with pytest.raises(CorruptStoreError):
            open_journal(Config(storage_dir=str(tmp_path), strict_load=True))

    def test_lenient_corrupt_store_starts_empty(self, config, tmp_path):
        (tmp_path / "mindful-entries.json").write_text("not json")

        journal = open_journal(config)

        assert journal.entries == ()
        assert journal.store.last_load_error is not None
        assert (tmp_path / "mindful-entries.corrupt.json").read_text() == "not json"
