"""Service for grouping donations into daily sessions and totalling them."""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Callable
from uuid import uuid4

from wheel_app.constants.storage_constants import KEY_SESSIONS
from wheel_app.core.models import Donation, DonationStats, HistoryRow, Session
from wheel_app.core.storage import KeyValueStore, StorageError

logger = logging.getLogger(__name__)


class DonationLedger:
    """Tracks donation records per calendar day.

    Session and lifetime totals are derived from the records and recomputed
    after every load and mutation; they are never persisted.
    """

    def __init__(self, store: KeyValueStore, clock: Callable[[], datetime] = datetime.now) -> None:
        self._store = store
        self._clock = clock
        self._sessions: list[Session] = []
        self._session_stats = DonationStats()
        self._total_stats = DonationStats()

    def load(self) -> None:
        self._sessions = []
        for entry in self._store.get(KEY_SESSIONS) or []:
            if not isinstance(entry, dict):
                logger.warning("Skipping malformed session entry: %r", entry)
                continue
            try:
                self._sessions.append(Session.from_dict(entry))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping unreadable session entry: %s", exc)
        self.recompute_stats()
        logger.info("Loaded %d sessions", len(self._sessions))

    @property
    def session_stats(self) -> DonationStats:
        return self._session_stats

    @property
    def total_stats(self) -> DonationStats:
        return self._total_stats

    def get_sessions(self) -> list[Session]:
        return list(self._sessions)

    def find_today_session(self) -> Session | None:
        today = self._clock().date()
        return next((s for s in self._sessions if s.date.date() == today), None)

    def get_or_create_today_session(self) -> Session:
        session = self.find_today_session()
        if session is None:
            session = Session(id=uuid4().hex, date=self._clock())
            self._sessions.append(session)
            logger.info("Started new session %s", session.id)
            self._persist()
        return session

    def add_donation(self, challenge_title: str, amount: float) -> Donation:
        session = self.get_or_create_today_session()
        donation = Donation(
            id=uuid4().hex,
            challenge_title=challenge_title,
            amount=round(float(amount), 2),
            date=self._clock(),
        )
        session.donations.append(donation)
        self._persist()
        self.recompute_stats()
        logger.info("Donation added: %.2f for %r", donation.amount, challenge_title)
        return donation

    def delete_donation(self, donation_id: str) -> bool:
        removed = False
        for session in self._sessions:
            kept = [d for d in session.donations if d.id != donation_id]
            if len(kept) != len(session.donations):
                session.donations = kept
                removed = True
        if not removed:
            return False
        self._persist()
        self.recompute_stats()
        logger.info("Donation deleted: %s", donation_id)
        return True

    def reset_session(self) -> None:
        """Remove every donation booked today."""
        session = self.get_or_create_today_session()
        session.donations = []
        self._persist()
        self.recompute_stats()
        logger.info("Session %s reset", session.id)

    def recompute_stats(self) -> None:
        today = self.find_today_session()
        if today is None:
            self._session_stats = DonationStats()
        else:
            self._session_stats = _summarize(today.donations)
        self._total_stats = _summarize(
            [donation for session in self._sessions for donation in session.donations]
        )

    def iter_history(self) -> list[HistoryRow]:
        """All donations with their session date, newest first."""
        rows = [
            HistoryRow(donation=donation, session_date=session.date)
            for session in self._sessions
            for donation in session.donations
        ]
        rows.sort(key=lambda row: row.donation.date, reverse=True)
        return rows

    def _persist(self) -> None:
        try:
            self._store.set(KEY_SESSIONS, [session.to_dict() for session in self._sessions])
        except StorageError:
            logger.exception("Error saving sessions")


def _summarize(donations: list[Donation]) -> DonationStats:
    return DonationStats(
        amount=round(sum(d.amount for d in donations), 2),
        challenges=len(donations),
    )
