"""
Unit tests for the application state store and its storage adapters.
"""

import json

import pytest

from cura.core.state_store import (
    LAB_ACTIVE_TAB_KEY,
    PHARMA_ACTIVE_TAB_KEY,
    USER_KEY,
    AppStateStore,
    InMemoryStorage,
    JsonFileStorage,
    StorageAdapter,
    create_state_store,
)


class TestInMemoryStorage:
    """Tests for InMemoryStorage."""

    def test_set_get_remove(self) -> None:
        storage = InMemoryStorage()
        storage.set_item("a", "1")

        assert storage.get_item("a") == "1"

        storage.remove_item("a")
        storage.remove_item("missing")

        assert storage.get_item("a") is None

    def test_implements_port(self) -> None:
        assert isinstance(InMemoryStorage(), StorageAdapter)


class TestJsonFileStorage:
    """Tests for JsonFileStorage."""

    def test_persists_between_instances(self, tmp_path) -> None:
        path = tmp_path / "state" / "session.json"
        JsonFileStorage(path).set_item(LAB_ACTIVE_TAB_KEY, "reports")

        assert JsonFileStorage(path).get_item(LAB_ACTIVE_TAB_KEY) == "reports"
        assert json.loads(path.read_text()) == {LAB_ACTIVE_TAB_KEY: "reports"}

    def test_missing_file_is_empty(self, tmp_path) -> None:
        assert JsonFileStorage(tmp_path / "nope.json").get_item(USER_KEY) is None

    def test_corrupt_file_is_empty(self, tmp_path) -> None:
        path = tmp_path / "session.json"
        path.write_text("{not json")

        storage = JsonFileStorage(path)

        assert storage.get_item(USER_KEY) is None
        storage.set_item(USER_KEY, "x")
        assert storage.get_item(USER_KEY) == "x"

    def test_remove_item(self, tmp_path) -> None:
        storage = JsonFileStorage(tmp_path / "session.json")
        storage.set_item("a", "1")
        storage.set_item("b", "2")

        storage.remove_item("a")

        assert storage.get_item("a") is None
        assert storage.get_item("b") == "2"


class TestAppStateStore:
    """Tests for AppStateStore."""

    def test_json_round_trip(self) -> None:
        store = AppStateStore()
        store.set_json(USER_KEY, {"username": "asha", "role": "laboratory"})

        assert store.get_json(USER_KEY) == {"username": "asha", "role": "laboratory"}

    def test_malformed_json_is_discarded(self) -> None:
        storage = InMemoryStorage({USER_KEY: "{broken"})
        store = AppStateStore(storage)

        assert store.get_json(USER_KEY) is None
        assert storage.get_item(USER_KEY) is None

    def test_active_tab_default(self) -> None:
        store = AppStateStore()

        assert store.get_active_tab(PHARMA_ACTIVE_TAB_KEY, "inventory") == "inventory"

        store.set_active_tab(PHARMA_ACTIVE_TAB_KEY, "billing")

        assert store.get_active_tab(PHARMA_ACTIVE_TAB_KEY) == "billing"

    def test_unknown_tab_key_rejected(self) -> None:
        store = AppStateStore()
        with pytest.raises(KeyError):
            store.set_active_tab("dentalActiveTab", "x")
        with pytest.raises(KeyError):
            store.get_active_tab("dentalActiveTab")

    def test_clear_session_removes_user_and_tabs(self) -> None:
        storage = InMemoryStorage({"other": "keep"})
        store = AppStateStore(storage)
        store.set_json(USER_KEY, {"username": "asha", "role": "pharmacy"})
        store.set_active_tab(PHARMA_ACTIVE_TAB_KEY, "billing")
        store.set_active_tab(LAB_ACTIVE_TAB_KEY, "tests")

        store.clear_session()

        assert storage.snapshot() == {"other": "keep"}


class TestCreateStateStore:
    """Tests for the settings-driven store factory."""

    def test_file_backed_when_path_given(self, tmp_path) -> None:
        store = create_state_store(str(tmp_path / "state.json"))
        assert isinstance(store.storage, JsonFileStorage)

    def test_in_memory_when_path_empty(self) -> None:
        store = create_state_store("")
        assert isinstance(store.storage, InMemoryStorage)
