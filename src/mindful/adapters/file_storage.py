"""File-based key/value storage adapter."""

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class FileKeyValueStore:
    """
    File-based key/value storage.

    Implements KeyValueStore protocol. Each key gets a UTF-8 JSON file.
    Writes go to a temp file in the same directory and are renamed into
    place, so a crash mid-write leaves the previous value intact.
    """

    def __init__(self, storage_dir: Path | str):
        self.storage_dir = Path(storage_dir).expanduser()
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a given key."""
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.storage_dir / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        """Read the value stored under key. Returns None if not found."""
        path = self._path_for_key(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        """Write/overwrite the value stored under key."""
        path = self._path_for_key(key)
        fd, tmp = tempfile.mkstemp(dir=self.storage_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(value)} chars to {path}")

    def remove_item(self, key: str) -> None:
        """Remove key if present."""
        path = self._path_for_key(key)
        if path.exists():
            path.unlink()

    def keys(self) -> list[str]:
        """List stored keys."""
        return sorted(path.stem for path in self.storage_dir.glob("*.json"))
