"""
Application State Store

Explicit container for session and tab state with an injected persistence
adapter. Keys mirror the browser storage keys the dashboard uses so a
persisted file stays interchangeable with the web client's state.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

USER_KEY = "user"
PHARMA_ACTIVE_TAB_KEY = "pharmaActiveTab"
LAB_ACTIVE_TAB_KEY = "labActiveTab"
RADIOLOGY_ACTIVE_TAB_KEY = "radiologyActiveTab"

TAB_KEYS: tuple[str, ...] = (
    PHARMA_ACTIVE_TAB_KEY,
    LAB_ACTIVE_TAB_KEY,
    RADIOLOGY_ACTIVE_TAB_KEY,
)


@runtime_checkable
class StorageAdapter(Protocol):
    """Port for string key/value persistence."""

    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class InMemoryStorage:
    """Non-persistent storage, used by default and in tests."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileStorage:
    """
    Storage backed by a single JSON object on disk.

    The file is rewritten on every change. A missing or corrupt file is
    treated as empty.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable state file {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)


class AppStateStore:
    """
    Typed access to persisted UI state.

    Example:
        store = AppStateStore(JsonFileStorage("state.json"))
        store.set_active_tab(LAB_ACTIVE_TAB_KEY, "tests")
    """

    def __init__(self, storage: StorageAdapter | None = None):
        self._storage = storage or InMemoryStorage()

    @property
    def storage(self) -> StorageAdapter:
        return self._storage

    def get_json(self, key: str) -> Any | None:
        raw = self._storage.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding malformed JSON stored under '{key}'")
            self._storage.remove_item(key)
            return None

    def set_json(self, key: str, value: Any) -> None:
        self._storage.set_item(key, json.dumps(value))

    def remove(self, key: str) -> None:
        self._storage.remove_item(key)

    def get_active_tab(self, tab_key: str, default: str | None = None) -> str | None:
        if tab_key not in TAB_KEYS:
            raise KeyError(f"Unknown tab key: {tab_key}")
        return self._storage.get_item(tab_key) or default

    def set_active_tab(self, tab_key: str, tab: str) -> None:
        if tab_key not in TAB_KEYS:
            raise KeyError(f"Unknown tab key: {tab_key}")
        self._storage.set_item(tab_key, tab)

    def clear_session(self) -> None:
        """Remove the user session and every persisted tab selection."""
        self._storage.remove_item(USER_KEY)
        for key in TAB_KEYS:
            self._storage.remove_item(key)


def create_state_store(path: str | None = None) -> AppStateStore:
    """
    Build the store from settings: file-backed when STATE_FILE_PATH is set.
    """
    if path is None:
        from cura.config.settings import get_settings

        path = get_settings().STATE_FILE_PATH
    if path:
        return AppStateStore(JsonFileStorage(path))
    return AppStateStore(InMemoryStorage())
