from __future__ import annotations

import json

import pytest

from wheel_app.constants.storage_constants import DEFAULT_STORE_PATH, STORE_ENV_VAR
from wheel_app.core.storage import JsonFileStore, MemoryStore, StorageError, resolve_store_path


def test_memory_store_returns_copies():
    store = MemoryStore({"wheels": [{"id": "w1"}]})

    wheels = store.get("wheels")
    wheels.append({"id": "w2"})

    assert store.get("wheels") == [{"id": "w1"}]
    assert store.get("missing") is None


def test_json_store_round_trips_through_disk(tmp_path):
    path = tmp_path / "nested" / "store.json"
    store = JsonFileStore(path)

    store.set("activeWheelId", "w1")
    store.set("wheels", [{"id": "w1", "name": "Ünïcode 🎡"}])

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk["activeWheelId"] == "w1"
    assert JsonFileStore(path).get("wheels")[0]["name"] == "Ünïcode 🎡"
    assert not path.with_suffix(".json.tmp").exists()


def test_missing_or_blank_file_reads_as_empty(tmp_path):
    assert JsonFileStore(tmp_path / "absent.json").get("wheels") is None

    blank = tmp_path / "blank.json"
    blank.write_text("   ", encoding="utf-8")
    assert JsonFileStore(blank).get("wheels") is None


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_corrupt_file_raises_storage_error(tmp_path, content):
    path = tmp_path / "store.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(StorageError):
        JsonFileStore(path).get("wheels")


def test_store_path_honours_environment(monkeypatch, tmp_path):
    monkeypatch.delenv(STORE_ENV_VAR, raising=False)
    assert resolve_store_path() == DEFAULT_STORE_PATH

    monkeypatch.setenv(STORE_ENV_VAR, str(tmp_path / "custom.json"))
    assert resolve_store_path() == tmp_path / "custom.json"
