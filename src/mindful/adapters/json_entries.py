"""JSON entry collection adapter over a key/value slot."""

import json
import logging

from mindful.core.entries import Entry
from mindful.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "mindful-entries"


class CorruptStoreError(ValueError):
    """Persisted entry data could not be decoded."""


class JsonEntryStore:
    """
    Whole-collection JSON snapshot stored under one key.

    Implements EntryStore protocol. Every save rewrites the full array.
    When strict is False a malformed slot is backed up to "<key>.corrupt"
    (or the next free "<key>.corrupt.N") and loads as an empty collection.
    An empty slot reads the same as an absent one.
    """

    def __init__(self, storage: KeyValueStore, key: str = STORAGE_KEY, strict: bool = False):
        self.storage = storage
        self.key = key
        self.strict = strict
        self.last_load_error: CorruptStoreError | None = None
        self.last_backup_key: str | None = None

    @property
    def backup_key(self) -> str:
        """Slot for the first backup; later incidents get .corrupt.2, .corrupt.3, ..."""
        return f"{self.key}.corrupt"

    def load(self) -> list[Entry]:
        """Load the persisted collection, newest first. Empty if nothing (or "") is stored."""
        self.last_load_error = None
        self.last_backup_key = None
        raw = self.storage.get_item(self.key)
        if not raw:
            logger.debug(f"No entries stored under {self.key!r}")
            return []

        try:
            entries = decode_entries(raw)
        except CorruptStoreError as e:
            if self.strict:
                raise
            logger.warning(f"Stored entries under {self.key!r} are unreadable, starting empty: {e}")
            self.last_backup_key = self._backup(raw)
            logger.warning(f"Backed up unreadable entries to {self.last_backup_key!r}")
            self.last_load_error = e
            return []

        logger.debug(f"Loaded {len(entries)} entries from {self.key!r}")
        return entries

    def _backup(self, raw: str) -> str:
        """Copy raw into the first free backup slot. Never overwrites an earlier backup."""
        key = self.backup_key
        attempt = 1
        while True:
            existing = self.storage.get_item(key)
            if existing is None:
                self.storage.set_item(key, raw)
                return key
            if existing == raw:
                return key
            attempt += 1
            key = f"{self.backup_key}.{attempt}"

    def save(self, entries: list[Entry]) -> None:
        """Overwrite the persisted collection."""
        self.storage.set_item(self.key, encode_entries(entries))
        logger.debug(f"Saved {len(entries)} entries to {self.key!r}")


def encode_entries(entries: list[Entry]) -> str:
    """Serialize a collection to its JSON text."""
    return json.dumps([e.to_dict() for e in entries], ensure_ascii=False)


def decode_entries(raw: str) -> list[Entry]:
    """Parse JSON text into a collection. Raises CorruptStoreError on malformed data."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptStoreError(f"invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise CorruptStoreError(f"expected a JSON array, got {type(data).__name__}")

    entries = []
    for index, item in enumerate(data):
        try:
            entries.append(Entry.from_dict(item))
        except ValueError as e:
            raise CorruptStoreError(f"item {index}: {e}") from e
    return entries
