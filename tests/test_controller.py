"""Tests for the journal controller."""

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from mindful.adapters.json_entries import STORAGE_KEY, JsonEntryStore
from mindful.adapters.memory_storage import InMemoryKeyValueStore
from mindful.controller import JournalController
from mindful.core.entries import Entry, InvalidMoodError, Mood


class FakeClock:
    """Returns a time one millisecond later on every call."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(milliseconds=1)
        return current


@pytest.fixture
def start():
    return datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def storage():
    return InMemoryKeyValueStore()


@pytest.fixture
def journal(storage, start):
    return JournalController(JsonEntryStore(storage), clock=FakeClock(start))


def stored_texts(storage) -> list[str]:
    return [item["text"] for item in json.loads(storage.get_item(STORAGE_KEY))]


class TestStartup:
    def test_empty_store(self, journal):
        assert journal.entries == ()
        assert journal.count == 0

    def test_loads_persisted_entries(self, storage, start):
        JsonEntryStore(storage).save([Entry(1, "Feeling calm", "💙", "Wednesday, January 15, 2025")])

        journal = JournalController(JsonEntryStore(storage), clock=FakeClock(start))

        assert [e.text for e in journal.entries] == ["Feeling calm"]

    def test_initial_fields(self, journal):
        assert journal.draft == ""
        assert journal.mood is Mood.GREEN

    def test_configured_default_mood(self, storage):
        journal = JournalController(JsonEntryStore(storage), default_mood="purple")
        assert journal.mood is Mood.PURPLE

    def test_invalid_default_mood(self, storage):
        with pytest.raises(InvalidMoodError):
            JournalController(JsonEntryStore(storage), default_mood="sunny")


class TestAdd:
    def test_add_prepends(self, journal):
        journal.add("Feeling calm")
        entry = journal.add("Great day")

        assert journal.count == 2
        assert journal.entries[0] is entry
        assert [e.text for e in journal.entries] == ["Great day", "Feeling calm"]

    def test_entry_fields(self, journal, start):
        journal.select_mood(Mood.BLUE)
        entry = journal.add("Feeling calm")

        assert entry.id == 1736933400000
        assert entry.mood == "💙"
        assert entry.date == "Wednesday, January 15, 2025"

    def test_add_uses_draft(self, journal):
        journal.set_draft("From the draft")
        entry = journal.add()

        assert entry.text == "From the draft"

    def test_add_clears_draft_keeps_mood(self, journal):
        journal.select_mood("orange")
        journal.set_draft("Something")
        journal.add()

        assert journal.draft == ""
        assert journal.mood is Mood.ORANGE

    def test_text_stored_untrimmed(self, journal):
        assert journal.add("  spaced out  ").text == "  spaced out  "

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_blank_is_noop(self, journal, text):
        journal.add("existing")
        before = journal.entries

        assert journal.add(text) is None
        assert journal.entries == before

    def test_blank_draft_is_kept(self, journal):
        journal.set_draft("   ")
        journal.add()
        assert journal.draft == "   "

    def test_blank_does_not_persist(self, start):
        store = MagicMock()
        store.load.return_value = []
        journal = JournalController(store, clock=FakeClock(start))

        journal.add("   ")

        store.save.assert_not_called()

    def test_explicit_mood_does_not_change_selection(self, journal):
        entry = journal.add("note", mood="red")

        assert entry.mood == "❤️"
        assert journal.mood is Mood.GREEN

    def test_explicit_invalid_mood(self, journal):
        with pytest.raises(InvalidMoodError):
            journal.add("note", mood="sunny")
        assert journal.count == 0

    def test_add_persists_full_collection(self, journal, storage):
        journal.add("Feeling calm")
        assert stored_texts(storage) == ["Feeling calm"]

        journal.add("Great day")
        assert stored_texts(storage) == ["Great day", "Feeling calm"]

    def test_saves_once_per_add(self, start):
        store = MagicMock()
        store.load.return_value = []
        journal = JournalController(store, clock=FakeClock(start))

        journal.add("one")
        journal.add("two")

        assert store.save.call_count == 2
        saved = store.save.call_args[0][0]
        assert [e.text for e in saved] == ["two", "one"]


class TestDelete:
    def test_delete_by_id(self, journal):
        first = journal.add("Feeling calm")
        journal.add("Great day")

        assert journal.delete(first.id) == 1
        assert [e.text for e in journal.entries] == ["Great day"]

    def test_delete_missing_is_noop(self, journal):
        journal.add("Feeling calm")
        before = journal.entries

        assert journal.delete(42) == 0
        assert journal.entries == before

    def test_delete_persists(self, journal, storage):
        entry = journal.add("Feeling calm")
        journal.delete(entry.id)

        assert stored_texts(storage) == []

    def test_delete_missing_still_resyncs(self, start):
        store = MagicMock()
        store.load.return_value = []
        journal = JournalController(store, clock=FakeClock(start))

        journal.delete(42)

        store.save.assert_called_once_with([])


class TestSelectMood:
    def test_select(self, journal):
        assert journal.select_mood("💜") is Mood.PURPLE
        assert journal.mood is Mood.PURPLE

    def test_invalid_keeps_selection(self, journal):
        journal.select_mood("blue")
        with pytest.raises(InvalidMoodError):
            journal.select_mood("sunny")
        assert journal.mood is Mood.BLUE

    def test_select_does_not_persist(self, start):
        store = MagicMock()
        store.load.return_value = []
        journal = JournalController(store, clock=FakeClock(start))

        journal.select_mood("red")
        journal.set_draft("typing...")

        store.save.assert_not_called()


class TestReload:
    def test_picks_up_external_writes(self, journal, storage, start):
        other = JournalController(JsonEntryStore(storage), clock=FakeClock(start + timedelta(seconds=5)))
        other.add("Written elsewhere")

        journal.reload()

        assert [e.text for e in journal.entries] == ["Written elsewhere"]

    def test_keeps_input_fields(self, journal):
        journal.select_mood("blue")
        journal.set_draft("half written")
        journal.reload()

        assert journal.mood is Mood.BLUE
        assert journal.draft == "half written"


class TestScenarios:
    def test_calm_then_great_day(self, journal, storage, start):
        assert journal.entries == ()

        journal.select_mood("💙")
        calm = journal.add("Feeling calm")
        assert [(e.text, e.mood) for e in journal.entries] == [("Feeling calm", "💙")]

        great = journal.add("Great day")
        assert journal.count == 2
        assert [e.text for e in journal.entries] == ["Great day", "Feeling calm"]

        journal.delete(great.id)
        assert journal.count == 1
        assert journal.entries[0] == calm

        reopened = JournalController(JsonEntryStore(storage), clock=FakeClock(start))
        assert reopened.entries == journal.entries

    def test_same_millisecond_ids_collide(self, storage, start):
        """Two adds in one millisecond share an id; deleting it removes both."""
        journal = JournalController(JsonEntryStore(storage), clock=lambda: start)

        first = journal.add("first")
        second = journal.add("second", mood="blue")

        assert first.id == second.id
        assert journal.count == 2
        assert journal.delete(first.id) == 2
        assert journal.count == 0
