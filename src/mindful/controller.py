"""Journal view-state controller.

Owns the in-memory collection and the input fields. The collection only
changes through add() and delete(), and each change rewrites the store.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from .core.entries import (
    DEFAULT_MOOD,
    Entry,
    Mood,
    is_blank,
    new_entry,
    parse_mood,
    prepend_entry,
    remove_entry,
)
from .ports.entry_store import EntryStore

logger = logging.getLogger(__name__)


@dataclass
class JournalState:
    """Current collection (newest first) plus the draft text and selected mood."""

    entries: list[Entry] = field(default_factory=list)
    draft: str = ""
    mood: Mood = DEFAULT_MOOD


class JournalController:
    """Create/delete entries and keep the store in sync."""

    def __init__(
        self,
        store: EntryStore,
        default_mood: Mood | str = DEFAULT_MOOD,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.clock = clock
        self._state = JournalState(entries=store.load(), mood=parse_mood(default_mood))

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._state.entries)

    @property
    def count(self) -> int:
        return len(self._state.entries)

    @property
    def draft(self) -> str:
        return self._state.draft

    @property
    def mood(self) -> Mood:
        return self._state.mood

    def set_draft(self, text: str) -> None:
        self._state.draft = text

    def select_mood(self, value: Mood | str) -> Mood:
        """Select the mood for the next entry. Raises InvalidMoodError for unknown moods."""
        self._state.mood = parse_mood(value)
        return self._state.mood

    def add(self, text: str | None = None, mood: Mood | str | None = None) -> Entry | None:
        """
        Save the draft (or `text`) as a new entry at the top of the collection.

        Blank text is ignored and returns None. On success the draft is
        cleared; the selected mood is kept.
        """
        text = self._state.draft if text is None else text
        if is_blank(text):
            logger.debug("Ignoring blank entry")
            return None

        selected = self._state.mood if mood is None else parse_mood(mood)
        entry = new_entry(text, selected, now=self.clock())
        self._state.entries = prepend_entry(self._state.entries, entry)
        self._state.draft = ""
        self._sync()
        logger.info(f"Added entry {entry.id} ({entry.mood})")
        return entry

    def delete(self, entry_id: int) -> int:
        """Remove every entry with this id. Returns how many were removed."""
        before = len(self._state.entries)
        self._state.entries = remove_entry(self._state.entries, entry_id)
        removed = before - len(self._state.entries)
        self._sync()
        if removed:
            logger.info(f"Deleted {removed} entry(ies) with id {entry_id}")
        else:
            logger.debug(f"No entry with id {entry_id} to delete")
        return removed

    def reload(self) -> None:
        """Re-read the collection from the store, keeping draft and mood."""
        self._state.entries = self.store.load()

    def _sync(self) -> None:
        self.store.save(self._state.entries)
