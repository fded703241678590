"""Ports - interfaces/protocols for external dependencies."""

from .key_value_store import KeyValueStore
from .entry_store import EntryStore

__all__ = [
    "KeyValueStore",
    "EntryStore",
]
