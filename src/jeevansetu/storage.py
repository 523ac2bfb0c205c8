"""Local key/value persistence.

The stores hold plain string values under string keys, mirroring the
browser-local storage the client persists its session flags and profile
draft into.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol

from jeevansetu.exceptions import StorageError

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class MemoryStore:
    """In-process store; contents vanish with the instance."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class JsonFileStore:
    """Store backed by a single JSON object on disk.

    The file is read once on construction and rewritten atomically on
    every mutation. A missing file starts empty; an unreadable or
    non-object file is logged and treated as empty.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._data: dict[str, str] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError:
            _logger.warning("Could not read store file %s", self._path, exc_info=True)
            return {}

        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            _logger.warning("Store file %s is not valid JSON; starting empty", self._path)
            return {}
        if not isinstance(parsed, dict):
            _logger.warning("Store file %s does not hold a JSON object; starting empty", self._path)
            return {}
        return {str(k): str(v) for k, v in parsed.items() if v is not None}

    def _flush(self, data: dict[str, str]) -> None:
        """Write *data* to disk, then adopt it; memory is untouched on failure."""
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            raise StorageError(f"Could not write store file {self._path}: {exc}") from exc
        self._data = data

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._flush({**self._data, key: value})

    def remove(self, key: str) -> None:
        if key in self._data:
            self._flush({k: v for k, v in self._data.items() if k != key})


def open_store(path: str | os.PathLike[str] | None) -> KeyValueStore:
    """Return a file-backed store for *path*, or a memory store when ``None``."""
    if path is None:
        return MemoryStore()
    return JsonFileStore(path)
