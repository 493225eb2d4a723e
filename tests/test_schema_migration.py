from __future__ import annotations

import logging

from wheel_app.constants.storage_constants import (
    KEY_LEGACY_CHALLENGES,
    KEY_SCHEMA_VERSION,
    KEY_WHEELS,
)
from wheel_app.core.schema_migration import (
    CURRENT_SCHEMA_VERSION,
    inline_legacy_challenges,
    strip_template_super_flags,
    upgrade_store,
)
from wheel_app.core.storage import MemoryStore
from wheel_app.core.wheel_manager import WheelManager

LEGACY_CHALLENGES = [
    {"id": "c1", "title": "Collect 10 coins", "image": "🪙", "type": "collect", "target": 10, "timeLimit": 180, "isSuper": True},
    {"id": "c2", "title": "Survive", "image": "⏰", "type": "survive", "target": 0, "timeLimit": 300, "isSuper": False},
]


def _legacy_store() -> MemoryStore:
    return MemoryStore(
        {
            KEY_LEGACY_CHALLENGES: LEGACY_CHALLENGES,
            KEY_WHEELS: [
                {"id": "w1", "name": "Main", "challenges": ["c1", "c2"], "isActive": True},
                {"id": "w2", "name": "Dangling", "challenges": ["c2", "missing"], "isActive": False},
            ],
        }
    )


def test_inline_replaces_ids_with_template_copies():
    store = _legacy_store()

    assert inline_legacy_challenges(store) is True

    wheels = store.get(KEY_WHEELS)
    assert [c["id"] for c in wheels[0]["challenges"]] == ["c1", "c2"]
    assert wheels[0]["challenges"][0]["title"] == "Collect 10 coins"
    assert [c["id"] for c in wheels[1]["challenges"]] == ["c2"]
    assert store.get(KEY_LEGACY_CHALLENGES) == []


def test_inline_logs_dropped_references(caplog):
    store = _legacy_store()

    with caplog.at_level(logging.WARNING, logger="wheel_app.core.schema_migration"):
        inline_legacy_challenges(store)

    warnings = [record.getMessage() for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "w2" in warnings[0]
    assert "missing" in warnings[0]


def test_inline_is_idempotent():
    store = _legacy_store()
    inline_legacy_challenges(store)
    snapshot = store.as_dict()

    assert inline_legacy_challenges(store) is False
    assert store.as_dict() == snapshot


def test_strip_super_flags():
    store = _legacy_store()
    inline_legacy_challenges(store)

    assert strip_template_super_flags(store) is True

    for wheel in store.get(KEY_WHEELS):
        for challenge in wheel["challenges"]:
            assert "isSuper" not in challenge
    assert strip_template_super_flags(store) is False


def test_upgrade_runs_all_steps_and_records_version():
    store = _legacy_store()

    assert upgrade_store(store) == CURRENT_SCHEMA_VERSION

    assert store.get(KEY_SCHEMA_VERSION) == CURRENT_SCHEMA_VERSION
    challenge = store.get(KEY_WHEELS)[0]["challenges"][0]
    assert challenge["id"] == "c1"
    assert "isSuper" not in challenge


def test_upgrade_of_current_store_writes_nothing():
    store = MemoryStore({KEY_SCHEMA_VERSION: CURRENT_SCHEMA_VERSION, KEY_WHEELS: []})
    snapshot = store.as_dict()

    assert upgrade_store(store) == CURRENT_SCHEMA_VERSION
    assert store.as_dict() == snapshot


def test_upgrade_of_empty_store_only_sets_version():
    store = MemoryStore()

    upgrade_store(store)

    assert store.as_dict() == {KEY_SCHEMA_VERSION: CURRENT_SCHEMA_VERSION}


def test_manager_loads_migrated_wheels(clock):
    manager = WheelManager(_legacy_store(), clock=clock)
    manager.load()

    wheels = manager.get_wheels()
    assert [w.id for w in wheels] == ["w1", "w2"]
    assert [c.title for c in wheels[0].challenges] == ["Collect 10 coins", "Survive"]
