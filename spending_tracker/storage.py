"""Key-value persistence for the serialized collections.

The store only needs ``get(key) -> str | None`` and ``set(key, value)``.
:class:`JsonFileStore` keeps one ``<key>.json`` file per slot under a
directory; :class:`MemoryStore` keeps slots in a dict and is meant for
tests and throwaway sessions.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from .config import STORE_DIR, ensure_data_directories

logger = logging.getLogger(__name__)


class SpendingTrackerError(Exception):
    """Base class for spending tracker errors."""


class StorageError(SpendingTrackerError):
    """A key-value slot could not be read or written."""


class KeyValueStore(Protocol):
    """Anything that can get and set string values by key."""

    def get(self, key: str) -> Optional[str]:  # pragma: no cover - interface
        ...

    def set(self, key: str, value: str) -> None:  # pragma: no cover - interface
        ...


def safe_filename(name: str, default: str = 'slot') -> str:
    """Create a safe filename from a slot key.

    Keeps alphanumeric characters, underscores, and hyphens.

    Example:
        >>> safe_filename("spending-tracker-transactions")
        'spending-tracker-transactions'
        >>> safe_filename("../etc/passwd")
        'etcpasswd'
    """
    cleaned = ''.join(c for c in name if c.isalnum() or c in {'_', '-'})
    return cleaned or default


class JsonFileStore:
    """Stores each slot as a JSON text file inside ``directory``."""

    def __init__(self, directory: Optional[Path] = None):
        """Initialize file storage.

        Args:
            directory: Optional custom directory for slot files.
                       Defaults to STORE_DIR from config.
        """
        if directory is None:
            ensure_data_directories()
            directory = STORE_DIR
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def get_path(self, key: str) -> Path:
        return self.directory / f"{safe_filename(key)}.json"

    def get(self, key: str) -> Optional[str]:
        """Read a slot.

        Returns:
            The stored text, or None if the slot has never been written

        Raises:
            StorageError: If the file exists but cannot be read
        """
        target = self.get_path(key)
        if not target.exists():
            return None
        try:
            with target.open('r', encoding='utf-8') as handle:
                return handle.read()
        except OSError as e:
            raise StorageError(f"Failed to read {target}: {e}") from e

    def set(self, key: str, value: str) -> None:
        """Write a slot in full.

        The text goes to a temporary file next to the target which then
        replaces it, so readers see either the old or the new contents.

        Raises:
            StorageError: If the file cannot be written
        """
        target = self.get_path(key)
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                'w',
                encoding='utf-8',
                dir=self.directory,
                prefix=f".{target.stem}.",
                suffix='.tmp',
                delete=False,
            ) as handle:
                tmp_path = handle.name
                handle.write(value)
            os.replace(tmp_path, target)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(f"Failed to write {target}: {e}") from e
        logger.debug("Wrote %d bytes to %s", len(value), target)


class MemoryStore:
    """Dict-backed store; contents are lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._slots: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value
