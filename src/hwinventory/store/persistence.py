"""Persistence adapters for the inventory record.

The store only needs to read and replace one opaque blob. Adapters raise
PersistenceError when the underlying medium fails.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from hwinventory.errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "hardware-inventory"


class PersistencePort(Protocol):
    """A single named durable record."""

    def read(self) -> bytes | None:
        """Return the stored bytes, or None if nothing has been stored yet."""
        ...

    def write(self, data: bytes) -> None:
        """Replace the stored bytes."""
        ...


class MemoryPersistence:
    """In-process record, used for tests and throwaway sessions."""

    def __init__(self, data: bytes | None = None):
        self.data = data
        self.writes = 0

    def read(self) -> bytes | None:
        return self.data

    def write(self, data: bytes) -> None:
        self.data = bytes(data)
        self.writes += 1


class JsonFilePersistence:
    """Record stored as ``<directory>/<key>.json``.

    Writes go to a temporary file in the same directory which is then renamed
    over the record, so a reader sees either the old or the new contents.
    """

    def __init__(self, directory: Path | str, key: str = DEFAULT_STORAGE_KEY):
        self.directory = Path(directory).expanduser()
        self.key = key

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def read(self) -> bytes | None:
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise PersistenceError(f"Cannot read {self.path}: {e}") from e

    def write(self, data: bytes) -> None:
        tmp_name = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.key}.", suffix=".tmp", dir=self.directory
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Cannot write {self.path}: {e}") from e
        logger.debug("Wrote %d bytes to %s", len(data), self.path)
