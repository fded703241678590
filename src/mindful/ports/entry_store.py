"""Entry collection storage interface."""

from typing import Protocol

from mindful.core.entries import Entry


class EntryStore(Protocol):
    """Interface for loading and saving the whole entry collection."""

    def load(self) -> list[Entry]:
        """Load the persisted collection, newest first."""
        ...

    def save(self, entries: list[Entry]) -> None:
        """Overwrite the persisted collection."""
        ...
