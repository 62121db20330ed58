"""
Key-Value Storage
Local persistence backends for the builder's serialized state.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

from core import get_logger

logger = get_logger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


@runtime_checkable
class KeyValueStorage(Protocol):
    """String-to-string store, the shape of a browser's localStorage."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage, lost with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class FileStorage:
    """
    One file per key under a directory: ``<root>/<key>.json``.

    Writes go through a temporary file and ``os.replace`` so a crash never
    leaves a half-written value behind.
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.root / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        fd, tmp = tempfile.mkstemp(dir=self.root, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except OSError:
            Path(tmp).unlink(missing_ok=True)
            logger.error("storage_write_failed", key=key, path=str(path))
            raise

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


__all__ = ["KeyValueStorage", "MemoryStorage", "FileStorage"]
