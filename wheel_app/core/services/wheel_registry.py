"""Service for managing wheels and the challenges they own."""

from __future__ import annotations

import logging
from uuid import uuid4

from wheel_app.constants.challenge_constants import MIN_TIME_LIMIT_SECONDS
from wheel_app.constants.storage_constants import KEY_ACTIVE_WHEEL_ID, KEY_WHEELS
from wheel_app.core.models import Challenge, ChallengeDraft, ChallengeType, Wheel
from wheel_app.core.storage import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

DEFAULT_WHEEL_NAME = "Standard Challenges"
_DEFAULT_CHALLENGES = (
    ChallengeDraft(title="Collect 10 coins", image="🪙", type=ChallengeType.COLLECT, target=10, time_limit=180),
    ChallengeDraft(title="Survive 5 minutes", image="⏰", type=ChallengeType.SURVIVE, target=0, time_limit=300),
    ChallengeDraft(title="Maximum 3 deaths", image="☠️", type=ChallengeType.MAX, target=3, time_limit=600),
)


class WheelRegistry:
    """Owns the list of wheels and the id of the active one."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._wheels: list[Wheel] = []
        self._active_wheel_id: str | None = None

    def load(self) -> None:
        """Read wheels and the active wheel id from the store."""
        raw_wheels = self._store.get(KEY_WHEELS) or []
        self._wheels = []
        for entry in raw_wheels:
            if not isinstance(entry, dict) or "id" not in entry:
                logger.warning("Skipping malformed wheel entry: %r", entry)
                continue
            try:
                self._wheels.append(Wheel.from_dict(entry))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping unreadable wheel %s: %s", entry.get("id"), exc)
        active = self._store.get(KEY_ACTIVE_WHEEL_ID)
        self._active_wheel_id = str(active) if active else None
        logger.info("Loaded %d wheels (active: %s)", len(self._wheels), self._active_wheel_id)

    def ensure_default_wheel(self) -> None:
        """Seed a starter wheel on first run and repair a stale active id."""
        if not self._wheels:
            challenges = [self._prepare_challenge(draft) for draft in _DEFAULT_CHALLENGES]
            wheel = Wheel(id=_new_id(), name=DEFAULT_WHEEL_NAME, challenges=challenges)
            self._wheels.append(wheel)
            self._active_wheel_id = wheel.id
            logger.info("Created default wheel %s", wheel.id)
            self._persist()
            return

        if self.get_wheel(self._active_wheel_id) is None:
            self._active_wheel_id = self._wheels[0].id
            self._persist()

    # --- Wheels ---

    def get_wheels(self) -> list[Wheel]:
        return list(self._wheels)

    def get_wheel(self, wheel_id: str | None) -> Wheel | None:
        if wheel_id is None:
            return None
        return next((wheel for wheel in self._wheels if wheel.id == wheel_id), None)

    def get_active_wheel_id(self) -> str | None:
        active = self.get_active_wheel()
        return active.id if active else None

    def get_active_wheel(self) -> Wheel | None:
        """Return the active wheel, falling back to the first one if the id is stale."""
        wheel = self.get_wheel(self._active_wheel_id)
        if wheel is None and self._wheels:
            return self._wheels[0]
        return wheel

    def set_active_wheel(self, wheel_id: str) -> None:
        if self.get_wheel(wheel_id) is None:
            raise ValueError(f"Unknown wheel id {wheel_id!r}.")
        self._active_wheel_id = wheel_id
        logger.info("Active wheel set to %s", wheel_id)
        self._persist()

    def create_wheel(self, name: str, challenges: list[Challenge] | None = None) -> Wheel:
        wheel = Wheel(id=_new_id(), name=_validate_wheel_name(name), challenges=list(challenges or []))
        is_first_wheel = not self._wheels
        self._wheels.append(wheel)
        if is_first_wheel:
            self._active_wheel_id = wheel.id
        logger.info("Wheel added: %s (%s)", wheel.name, wheel.id)
        self._persist()
        return wheel

    def update_wheel(self, wheel_id: str, name: str) -> bool:
        wheel = self.get_wheel(wheel_id)
        if wheel is None:
            return False
        wheel.name = _validate_wheel_name(name)
        logger.info("Wheel updated: %s", wheel_id)
        self._persist()
        return True

    def delete_wheel(self, wheel_id: str) -> bool:
        wheel = self.get_wheel(wheel_id)
        if wheel is None:
            return False
        self._wheels.remove(wheel)
        if self._active_wheel_id == wheel_id:
            self._active_wheel_id = self._wheels[0].id if self._wheels else None
        logger.info("Wheel deleted: %s (active now %s)", wheel_id, self._active_wheel_id)
        self._persist()
        return True

    # --- Challenges ---

    def get_challenge(self, wheel_id: str, challenge_id: str) -> Challenge | None:
        wheel = self.get_wheel(wheel_id)
        if wheel is None:
            return None
        return next((c for c in wheel.challenges if c.id == challenge_id), None)

    def add_challenge(self, wheel_id: str, draft: ChallengeDraft) -> str | None:
        wheel = self.get_wheel(wheel_id)
        if wheel is None:
            return None
        challenge = self._prepare_challenge(draft)
        wheel.challenges.append(challenge)
        logger.info("Challenge added to wheel %s: %s", wheel_id, challenge.title)
        self._persist()
        return challenge.id

    def update_challenge(self, wheel_id: str, challenge_id: str, draft: ChallengeDraft) -> bool:
        wheel = self.get_wheel(wheel_id)
        if wheel is None:
            return False
        for index, existing in enumerate(wheel.challenges):
            if existing.id == challenge_id:
                # Preserve the original ID
                wheel.challenges[index] = self._prepare_challenge(draft, challenge_id=challenge_id)
                logger.info("Challenge updated in wheel %s: %s", wheel_id, challenge_id)
                self._persist()
                return True
        return False

    def delete_challenge(self, wheel_id: str, challenge_id: str) -> bool:
        wheel = self.get_wheel(wheel_id)
        if wheel is None:
            return False
        remaining = [c for c in wheel.challenges if c.id != challenge_id]
        if len(remaining) == len(wheel.challenges):
            return False
        wheel.challenges = remaining
        logger.info("Challenge deleted from wheel %s: %s", wheel_id, challenge_id)
        self._persist()
        return True

    def _prepare_challenge(self, draft: ChallengeDraft, challenge_id: str | None = None) -> Challenge:
        """Validate and normalize a challenge before storage."""
        title = draft.title.strip()
        if not title:
            raise ValueError("Please enter a challenge title.")
        image = draft.image.strip()
        if not image:
            raise ValueError("Please pick an emoji or icon for the challenge.")
        challenge_type = ChallengeType(draft.type)
        if not isinstance(draft.target, int) or draft.target < 0:
            raise ValueError("Target must be a non-negative whole number.")
        if not isinstance(draft.time_limit, int) or draft.time_limit < MIN_TIME_LIMIT_SECONDS:
            raise ValueError(
                f"Please enter a valid time limit (at least {MIN_TIME_LIMIT_SECONDS} seconds)."
            )
        target = 0 if challenge_type is ChallengeType.SURVIVE else draft.target
        return Challenge(
            id=challenge_id or _new_id(),
            title=title,
            image=image,
            type=challenge_type,
            target=target,
            time_limit=draft.time_limit,
        )

    def _persist(self) -> None:
        active_id = self._active_wheel_id
        try:
            self._store.set(KEY_WHEELS, [wheel.to_dict(wheel.id == active_id) for wheel in self._wheels])
            self._store.set(KEY_ACTIVE_WHEEL_ID, active_id)
        except StorageError:
            logger.exception("Error saving wheels")


def _validate_wheel_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError("Please enter a name for the wheel.")
    return cleaned


def _new_id() -> str:
    return uuid4().hex
