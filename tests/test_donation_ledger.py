from __future__ import annotations

from datetime import datetime

import pytest

from wheel_app.constants.storage_constants import KEY_SESSIONS
from wheel_app.core.services.donation_ledger import DonationLedger
from wheel_app.core.storage import MemoryStore
from wheel_app.core.wheel_manager import WheelManager


@pytest.fixture
def ledger(store, clock) -> DonationLedger:
    donation_ledger = DonationLedger(store, clock=clock)
    donation_ledger.load()
    return donation_ledger


def test_first_donation_creates_today_session(ledger, store, clock):
    donation = ledger.add_donation("Collect 10 coins", 5)

    sessions = ledger.get_sessions()
    assert len(sessions) == 1
    assert sessions[0].date == clock.now
    assert sessions[0].donations == [donation]
    stored = store.get(KEY_SESSIONS)[0]["donations"][0]
    assert stored["challengeTitle"] == "Collect 10 coins"
    assert stored["amount"] == 5.0


def test_amount_is_rounded_to_cents(ledger):
    assert ledger.add_donation("Odd", 3.14159).amount == 3.14


def test_same_day_reuses_session(ledger, clock):
    ledger.add_donation("One", 1)
    clock.advance(hours=3)
    ledger.add_donation("Two", 2)

    assert len(ledger.get_sessions()) == 1
    assert ledger.session_stats.challenges == 2


def test_new_day_starts_new_session_and_resets_session_stats(ledger, clock):
    ledger.add_donation("Yesterday", 5)
    clock.advance(days=1)

    assert ledger.find_today_session() is None
    ledger.recompute_stats()
    assert ledger.session_stats.amount == 0.0
    assert ledger.total_stats.amount == 5.0

    ledger.add_donation("Today", 2.5)
    assert len(ledger.get_sessions()) == 2
    assert ledger.session_stats.amount == 2.5
    assert ledger.total_stats.amount == 7.5
    assert ledger.total_stats.challenges == 2


def test_delete_donation_updates_stats(ledger):
    keep = ledger.add_donation("Keep", 5)
    drop = ledger.add_donation("Drop", 10)

    assert ledger.delete_donation(drop.id) is True

    assert ledger.total_stats.amount == 5.0
    assert [d.id for d in ledger.get_sessions()[0].donations] == [keep.id]


def test_delete_unknown_donation_returns_false(ledger):
    ledger.add_donation("Keep", 5)
    assert ledger.delete_donation("missing") is False
    assert ledger.total_stats.challenges == 1


def test_delete_finds_donation_in_older_session(ledger, clock):
    old = ledger.add_donation("Old", 5)
    clock.advance(days=2)
    ledger.add_donation("New", 1)

    assert ledger.delete_donation(old.id) is True
    assert ledger.total_stats.amount == 1.0


def test_reset_session_clears_only_today(ledger, clock):
    ledger.add_donation("Old", 5)
    clock.advance(days=1)
    ledger.add_donation("Today", 3)

    ledger.reset_session()

    assert ledger.session_stats.amount == 0.0
    assert ledger.total_stats.amount == 5.0


def test_stats_are_recomputed_on_load(store, clock):
    store.set(
        KEY_SESSIONS,
        [
            {
                "id": "s1",
                "date": "2026-03-13T18:00:00",
                "donations": [{"id": "d1", "challengeTitle": "A", "amount": 5, "date": "2026-03-13T18:30:00"}],
            },
            {
                "id": "s2",
                "date": "2026-03-14T17:00:00",
                "donations": [
                    {"id": "d2", "challengeTitle": "B", "amount": 2.5, "date": "2026-03-14T17:10:00"},
                    {"id": "d3", "challengeTitle": "C", "amount": 2.5, "date": "2026-03-14T17:20:00"},
                ],
            },
        ],
    )
    ledger = DonationLedger(store, clock=clock)
    ledger.load()

    assert ledger.session_stats.to_dict() == {"amount": 5.0, "challenges": 2}
    assert ledger.total_stats.to_dict() == {"amount": 10.0, "challenges": 3}


def test_history_is_newest_first_with_session_date(ledger, clock):
    ledger.add_donation("First", 1)
    first_day = clock.now
    clock.advance(days=1)
    ledger.add_donation("Second", 2)

    rows = ledger.iter_history()

    assert [row.donation.challenge_title for row in rows] == ["Second", "First"]
    assert rows[1].session_date == first_day


def test_utc_timestamps_are_read_as_local_time(store, clock):
    store.set(
        KEY_SESSIONS,
        [{"id": "s1", "date": "2026-03-14T12:00:00.000Z", "donations": []}],
    )
    ledger = DonationLedger(store, clock=clock)
    ledger.load()

    session_date = ledger.get_sessions()[0].date
    assert session_date.tzinfo is None
    assert isinstance(session_date, datetime)


def test_malformed_session_entries_are_skipped(store, clock):
    store.set(
        KEY_SESSIONS,
        [
            "garbage",
            None,
            {"date": "2026-03-14T17:00:00"},
            {
                "id": "s1",
                "date": "2026-03-14T17:00:00",
                "donations": [{"id": "d1", "challengeTitle": "A", "amount": 5, "date": "2026-03-14T17:10:00"}],
            },
        ],
    )
    ledger = DonationLedger(store, clock=clock)
    ledger.load()

    assert [s.id for s in ledger.get_sessions()] == ["s1"]
    assert ledger.session_stats.to_dict() == {"amount": 5.0, "challenges": 1}


def test_manager_starts_with_garbage_sessions(clock):
    store = MemoryStore({"schemaVersion": 2, "sessions": ["garbage"]})
    manager = WheelManager(store, clock=clock)
    manager.load()

    assert manager.get_session_stats().to_dict() == {"amount": 0.0, "challenges": 0}
    assert manager.get_history() == []
