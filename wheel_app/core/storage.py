"""Flat key-value persistence for wheels, sessions and settings.

Architecture note:
    The whole store is one JSON document on disk, mirroring how the first
    version of the app kept everything in a single settings file. Each
    ``set`` rewrites the document through a temporary file and ``os.replace``
    so a crash mid-write leaves the previous version intact. There are no
    transactions: every service writes its own keys and the last writer wins.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

from wheel_app.constants.storage_constants import DEFAULT_STORE_PATH, STORE_ENV_VAR

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the key-value store cannot be read or written."""


class KeyValueStore:
    """Interface for the persistence gateway: named JSON blobs."""

    def get(self, key: str) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """In-process store, used for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Any:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def as_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)


class JsonFileStore(KeyValueStore):
    """Store backed by a single JSON file."""

    def __init__(self, file_path: Path) -> None:
        self.file_path = Path(file_path)
        self._data: dict[str, Any] | None = None

    def get(self, key: str) -> Any:
        return copy.deepcopy(self._load().get(key))

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = copy.deepcopy(value)
        self._write(data)

    def _load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data
        if not self.file_path.exists():
            self._data = {}
            return self._data
        try:
            raw = self.file_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Could not read {self.file_path}: {exc}") from exc
        if not raw.strip():
            self._data = {}
            return self._data
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Invalid JSON in {self.file_path}: {exc}") from exc
        if not isinstance(parsed, dict):
            raise StorageError(f"Store file {self.file_path} must contain a JSON object.")
        self._data = parsed
        return self._data

    def _write(self, data: dict[str, Any]) -> None:
        temp_path = self.file_path.with_suffix(self.file_path.suffix + ".tmp")
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(temp_path, self.file_path)
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"Could not write {self.file_path}: {exc}") from exc


def resolve_store_path() -> Path:
    """Return the store location, honouring the environment override."""
    override = os.getenv(STORE_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_STORE_PATH


def open_default_store() -> JsonFileStore:
    path = resolve_store_path()
    logger.info("Using data store at %s", path)
    return JsonFileStore(path)
