"""Business logic shared between the Qt UI, the engine and the overlay server."""

from __future__ import annotations

from datetime import datetime
import logging
from threading import Lock
from typing import Callable

from wheel_app.core.models import (
    Challenge,
    ChallengeDraft,
    Donation,
    DonationStats,
    HistoryRow,
    Settings,
    Wheel,
)
from wheel_app.core.schema_migration import upgrade_store
from wheel_app.core.services.donation_ledger import DonationLedger
from wheel_app.core.services.settings_service import SettingsService
from wheel_app.core.services.wheel_registry import WheelRegistry
from wheel_app.core.storage import KeyValueStore

logger = logging.getLogger(__name__)


class WheelManager:
    """Facade for wheel services: Registry, Ledger and Settings."""

    def __init__(self, store: KeyValueStore, clock: Callable[[], datetime] = datetime.now) -> None:
        self._lock = Lock()
        self._store = store

        # Services
        self._registry = WheelRegistry(store)
        self._ledger = DonationLedger(store, clock=clock)
        self._settings = SettingsService(store)

    def load(self) -> None:
        """Upgrade the stored schema, then read every service's data."""
        with self._lock:
            upgrade_store(self._store)
            self._registry.load()
            self._registry.ensure_default_wheel()
            self._ledger.load()
            self._settings.load()
        logger.info("Data loaded successfully")

    # --- Registry Delegation ---

    def get_wheels(self) -> list[Wheel]:
        with self._lock:
            return self._registry.get_wheels()

    def get_wheel(self, wheel_id: str | None) -> Wheel | None:
        with self._lock:
            return self._registry.get_wheel(wheel_id)

    def get_active_wheel(self) -> Wheel | None:
        with self._lock:
            return self._registry.get_active_wheel()

    def get_active_wheel_id(self) -> str | None:
        with self._lock:
            return self._registry.get_active_wheel_id()

    def set_active_wheel(self, wheel_id: str) -> None:
        with self._lock:
            self._registry.set_active_wheel(wheel_id)

    def create_wheel(self, name: str) -> Wheel:
        with self._lock:
            return self._registry.create_wheel(name)

    def rename_wheel(self, wheel_id: str, name: str) -> bool:
        with self._lock:
            return self._registry.update_wheel(wheel_id, name)

    def delete_wheel(self, wheel_id: str) -> bool:
        with self._lock:
            return self._registry.delete_wheel(wheel_id)

    def get_challenge(self, wheel_id: str, challenge_id: str) -> Challenge | None:
        with self._lock:
            return self._registry.get_challenge(wheel_id, challenge_id)

    def add_challenge(self, wheel_id: str, draft: ChallengeDraft) -> str | None:
        with self._lock:
            return self._registry.add_challenge(wheel_id, draft)

    def update_challenge(self, wheel_id: str, challenge_id: str, draft: ChallengeDraft) -> bool:
        with self._lock:
            return self._registry.update_challenge(wheel_id, challenge_id, draft)

    def delete_challenge(self, wheel_id: str, challenge_id: str) -> bool:
        with self._lock:
            return self._registry.delete_challenge(wheel_id, challenge_id)

    # --- Ledger Delegation ---

    def add_donation(self, challenge_title: str, amount: float) -> Donation:
        with self._lock:
            return self._ledger.add_donation(challenge_title, amount)

    def delete_donation(self, donation_id: str) -> bool:
        with self._lock:
            return self._ledger.delete_donation(donation_id)

    def reset_session(self) -> None:
        with self._lock:
            self._ledger.reset_session()

    def get_session_stats(self) -> DonationStats:
        with self._lock:
            return self._ledger.session_stats

    def get_total_stats(self) -> DonationStats:
        with self._lock:
            return self._ledger.total_stats

    def get_history(self) -> list[HistoryRow]:
        with self._lock:
            return self._ledger.iter_history()

    # --- Settings Delegation ---

    def get_settings(self) -> Settings:
        with self._lock:
            return self._settings.settings

    def save_settings(self, settings: Settings) -> None:
        with self._lock:
            self._settings.save(settings)

    def update_hotkeys(self, bindings: dict[str, str]) -> None:
        with self._lock:
            self._settings.update_hotkeys(bindings)
