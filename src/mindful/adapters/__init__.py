"""Adapters - I/O implementations of ports."""

from .file_storage import FileKeyValueStore
from .memory_storage import InMemoryKeyValueStore
from .json_entries import JsonEntryStore, CorruptStoreError, STORAGE_KEY

__all__ = [
    "FileKeyValueStore",
    "InMemoryKeyValueStore",
    "JsonEntryStore",
    "CorruptStoreError",
    "STORAGE_KEY",
]
