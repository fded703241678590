"""Shared workflow layer between CLI and Telegram.

Builds the storage stack and the journal controller from a Config.
"""

from .adapters.file_storage import FileKeyValueStore
from .adapters.json_entries import JsonEntryStore
from .adapters.memory_storage import InMemoryKeyValueStore
from .config import Config
from .controller import JournalController
from .ports.key_value_store import KeyValueStore


def get_storage(config: Config, in_memory: bool = False) -> KeyValueStore:
    """Resolve the key/value slot from config."""
    if in_memory:
        return InMemoryKeyValueStore()
    return FileKeyValueStore(config.storage_path)


def get_entry_store(config: Config, in_memory: bool = False) -> JsonEntryStore:
    """JSON entry store over the configured slot."""
    return JsonEntryStore(
        get_storage(config, in_memory),
        key=config.storage_key,
        strict=config.strict_load,
    )


def open_journal(config: Config, in_memory: bool = False) -> JournalController:
    """Load the journal into a controller ready for add/delete."""
    store = get_entry_store(config, in_memory)
    return JournalController(store, default_mood=config.default_mood)
