from __future__ import annotations

import pytest

from wheel_app.constants.storage_constants import KEY_ACTIVE_WHEEL_ID, KEY_WHEELS
from wheel_app.core.models import ChallengeType
from wheel_app.core.services.wheel_registry import DEFAULT_WHEEL_NAME, WheelRegistry
from wheel_app.core.storage import MemoryStore, StorageError


@pytest.fixture
def registry(store) -> WheelRegistry:
    wheel_registry = WheelRegistry(store)
    wheel_registry.load()
    return wheel_registry


def test_default_wheel_seeded_on_first_run(registry, store):
    registry.ensure_default_wheel()

    wheels = registry.get_wheels()
    assert len(wheels) == 1
    assert wheels[0].name == DEFAULT_WHEEL_NAME
    assert [c.type for c in wheels[0].challenges] == [
        ChallengeType.COLLECT,
        ChallengeType.SURVIVE,
        ChallengeType.MAX,
    ]
    assert registry.get_active_wheel_id() == wheels[0].id
    assert store.get(KEY_ACTIVE_WHEEL_ID) == wheels[0].id


def test_default_wheel_not_reseeded_when_wheels_exist(registry):
    registry.create_wheel("Mine")
    registry.ensure_default_wheel()

    assert [w.name for w in registry.get_wheels()] == ["Mine"]


def test_first_wheel_becomes_active(registry):
    first = registry.create_wheel("First")
    registry.create_wheel("Second")

    assert registry.get_active_wheel_id() == first.id


def test_wheel_name_is_trimmed_and_required(registry):
    assert registry.create_wheel("  Boss fights ").name == "Boss fights"
    with pytest.raises(ValueError):
        registry.create_wheel("   ")


def test_rename_unknown_wheel_returns_false(registry):
    assert registry.update_wheel("nope", "Name") is False


def test_set_active_wheel_rejects_unknown_id(registry):
    registry.create_wheel("Only")
    with pytest.raises(ValueError):
        registry.set_active_wheel("nope")


def test_deleting_active_wheel_moves_active_to_first_remaining(registry):
    first = registry.create_wheel("First")
    second = registry.create_wheel("Second")
    registry.set_active_wheel(second.id)

    assert registry.delete_wheel(second.id) is True

    assert registry.get_active_wheel_id() == first.id


def test_deleting_last_wheel_clears_active(registry, store):
    only = registry.create_wheel("Only")

    registry.delete_wheel(only.id)

    assert registry.get_active_wheel() is None
    assert store.get(KEY_ACTIVE_WHEEL_ID) is None
    assert store.get(KEY_WHEELS) == []


def test_stale_active_id_falls_back_to_first_wheel(store):
    store.set(KEY_WHEELS, [{"id": "w1", "name": "One", "challenges": []}])
    store.set(KEY_ACTIVE_WHEEL_ID, "gone")
    registry = WheelRegistry(store)
    registry.load()

    assert registry.get_active_wheel().id == "w1"
    registry.ensure_default_wheel()
    assert store.get(KEY_ACTIVE_WHEEL_ID) == "w1"


def test_add_challenge_validates_and_persists(registry, store, make_draft):
    wheel = registry.create_wheel("Wheel")

    challenge_id = registry.add_challenge(wheel.id, make_draft(title="  Collect gems "))

    challenge = registry.get_challenge(wheel.id, challenge_id)
    assert challenge.title == "Collect gems"
    stored = store.get(KEY_WHEELS)[0]["challenges"][0]
    assert stored == {
        "id": challenge_id,
        "title": "Collect gems",
        "image": "💎",
        "type": "collect",
        "target": 5,
        "timeLimit": 60,
    }


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": "  "},
        {"image": ""},
        {"target": -1},
        {"time_limit": 29},
    ],
)
def test_add_challenge_rejects_invalid_input(registry, make_draft, overrides):
    wheel = registry.create_wheel("Wheel")
    with pytest.raises(ValueError):
        registry.add_challenge(wheel.id, make_draft(**overrides))
    assert registry.get_wheel(wheel.id).challenges == []


def test_survive_challenges_store_zero_target(registry, make_draft):
    wheel = registry.create_wheel("Wheel")
    challenge_id = registry.add_challenge(
        wheel.id, make_draft(challenge_type=ChallengeType.SURVIVE, target=9)
    )
    assert registry.get_challenge(wheel.id, challenge_id).target == 0


def test_add_challenge_to_unknown_wheel_returns_none(registry, make_draft):
    assert registry.add_challenge("nope", make_draft()) is None


def test_update_challenge_keeps_id(registry, make_draft):
    wheel = registry.create_wheel("Wheel")
    challenge_id = registry.add_challenge(wheel.id, make_draft())

    assert registry.update_challenge(wheel.id, challenge_id, make_draft(title="Renamed", target=8)) is True

    updated = registry.get_challenge(wheel.id, challenge_id)
    assert updated.id == challenge_id
    assert updated.title == "Renamed"
    assert updated.target == 8


def test_delete_challenge(registry, make_draft):
    wheel = registry.create_wheel("Wheel")
    keep = registry.add_challenge(wheel.id, make_draft(title="Keep"))
    drop = registry.add_challenge(wheel.id, make_draft(title="Drop"))

    assert registry.delete_challenge(wheel.id, drop) is True
    assert registry.delete_challenge(wheel.id, drop) is False
    assert [c.id for c in registry.get_wheel(wheel.id).challenges] == [keep]


def test_malformed_wheel_entries_are_skipped(store):
    store.set(KEY_WHEELS, [{"name": "no id"}, "junk", {"id": "ok", "name": "Fine", "challenges": []}])
    registry = WheelRegistry(store)
    registry.load()

    assert [w.id for w in registry.get_wheels()] == ["ok"]


def test_unreadable_challenge_does_not_drop_its_wheel(store):
    store.set(
        KEY_WHEELS,
        [
            {
                "id": "mine",
                "name": "Mine",
                "challenges": [
                    {"id": "c1", "title": "Collect 5 gems", "image": "💎", "type": "collect", "target": 5, "timeLimit": 60},
                    {"id": "c2", "title": "Bad type", "image": "", "type": "Collect", "target": 5, "timeLimit": 60},
                    {"title": "No id", "type": "collect", "target": 1, "timeLimit": 60},
                    "junk",
                ],
            }
        ],
    )
    store.set(KEY_ACTIVE_WHEEL_ID, "mine")
    registry = WheelRegistry(store)
    registry.load()
    registry.ensure_default_wheel()

    assert [w.name for w in registry.get_wheels()] == ["Mine"]
    assert [c.id for c in registry.get_wheel("mine").challenges] == ["c1"]
    assert [w["name"] for w in store.get(KEY_WHEELS)] == ["Mine"]


class FailingStore(MemoryStore):
    def set(self, key, value):
        raise StorageError("disk full")


def test_persistence_failure_keeps_in_memory_change():
    registry = WheelRegistry(FailingStore())
    registry.load()

    wheel = registry.create_wheel("Still here")

    assert registry.get_wheel(wheel.id) is not None
