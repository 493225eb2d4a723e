"""Domain models for the challenge wheel."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import logging

from wheel_app.constants.challenge_constants import (
    DEFAULT_ANIMATION_DURATION,
    DEFAULT_DONATION_AMOUNT,
    DEFAULT_PROGRESS_SOUND,
    DEFAULT_SPIN_SOUND,
    DEFAULT_SUPER_CHANCE,
    DEFAULT_WARNING_SOUND,
)

logger = logging.getLogger(__name__)


class ChallengeType(Enum):
    """How progress is judged for a challenge."""

    COLLECT = "collect"
    SURVIVE = "survive"
    MAX = "max"

    @property
    def label(self) -> str:
        return _TYPE_LABELS[self]


_TYPE_LABELS = {
    ChallengeType.COLLECT: "Collect",
    ChallengeType.SURVIVE: "Survive",
    ChallengeType.MAX: "Maximum",
}


@dataclass(slots=True)
class Challenge:
    """Reusable challenge template owned by exactly one wheel."""

    id: str
    title: str
    image: str
    type: ChallengeType
    target: int
    time_limit: int

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "image": self.image,
            "type": self.type.value,
            "target": self.target,
            "timeLimit": self.time_limit,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Challenge":
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            image=str(data.get("image", "")),
            type=ChallengeType(data.get("type", ChallengeType.COLLECT.value)),
            target=int(data.get("target", 0) or 0),
            time_limit=int(data.get("timeLimit", 0) or 0),
        )


@dataclass(slots=True)
class ChallengeDraft:
    """User input for creating or editing a challenge, before validation."""

    title: str
    image: str
    type: ChallengeType
    target: int
    time_limit: int


@dataclass(slots=True)
class Wheel:
    """Named, ordered pool of challenges."""

    id: str
    name: str
    challenges: list[Challenge] = field(default_factory=list)

    def to_dict(self, is_active: bool = False) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "challenges": [challenge.to_dict() for challenge in self.challenges],
            "isActive": is_active,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Wheel":
        challenges: list[Challenge] = []
        for entry in data.get("challenges") or []:
            if not isinstance(entry, dict):
                logger.warning("Skipping malformed challenge in wheel %s: %r", data.get("id"), entry)
                continue
            try:
                challenges.append(Challenge.from_dict(entry))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning(
                    "Skipping unreadable challenge %s in wheel %s: %s", entry.get("id"), data.get("id"), exc
                )
        return cls(id=str(data["id"]), name=str(data.get("name", "")), challenges=challenges)


@dataclass(slots=True)
class ActiveChallenge:
    """The single live attempt of a challenge."""

    challenge: Challenge
    start_time: datetime
    time_remaining: int
    is_super: bool = False
    progress: int = 0
    is_paused: bool = False

    def snapshot(self) -> dict[str, object]:
        """Payload describing the live instance for presentation surfaces."""
        payload = self.challenge.to_dict()
        payload.update(
            {
                "isSuper": self.is_super,
                "startTime": self.start_time.isoformat(),
                "progress": self.progress,
                "isPaused": self.is_paused,
                "timeRemaining": self.time_remaining,
            }
        )
        return payload


@dataclass(frozen=True, slots=True)
class Donation:
    """Monetary penalty booked when a challenge attempt fails."""

    id: str
    challenge_title: str
    amount: float
    date: datetime

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "challengeTitle": self.challenge_title,
            "amount": self.amount,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Donation":
        return cls(
            id=str(data["id"]),
            challenge_title=str(data.get("challengeTitle", "")),
            amount=round(float(data.get("amount", 0.0)), 2),
            date=_parse_timestamp(data.get("date")),
        )


@dataclass(slots=True)
class Session:
    """Donation ledger for one calendar day."""

    id: str
    date: datetime
    donations: list[Donation] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "donations": [donation.to_dict() for donation in self.donations],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        donations = [
            Donation.from_dict(entry)
            for entry in data.get("donations") or []
            if isinstance(entry, dict)
        ]
        return cls(id=str(data["id"]), date=_parse_timestamp(data.get("date")), donations=donations)


@dataclass(frozen=True, slots=True)
class DonationStats:
    """Aggregated donation total and number of failed challenges."""

    amount: float = 0.0
    challenges: int = 0

    def to_dict(self) -> dict[str, object]:
        return {"amount": self.amount, "challenges": self.challenges}


@dataclass(frozen=True, slots=True)
class HistoryRow:
    """A donation joined with the date of the session that holds it."""

    donation: Donation
    session_date: datetime


@dataclass(slots=True)
class SoundSettings:
    spin_sound_type: str = DEFAULT_SPIN_SOUND
    progress_sound_type: str = DEFAULT_PROGRESS_SOUND
    warning_sound_type: str = DEFAULT_WARNING_SOUND

    def to_dict(self) -> dict[str, object]:
        return {
            "spinSoundType": self.spin_sound_type,
            "progressSoundType": self.progress_sound_type,
            "warningSoundType": self.warning_sound_type,
        }


@dataclass(slots=True)
class Settings:
    """Global application settings, persisted wholesale."""

    donation_amount: float = DEFAULT_DONATION_AMOUNT
    super_chance: int = DEFAULT_SUPER_CHANCE
    animation_duration: float = DEFAULT_ANIMATION_DURATION
    hotkeys: dict[str, str] = field(default_factory=dict)
    sounds: SoundSettings = field(default_factory=SoundSettings)

    def to_dict(self) -> dict[str, object]:
        return {
            "donationAmount": self.donation_amount,
            "superChance": self.super_chance,
            "animationDuration": self.animation_duration,
            "hotkeys": dict(self.hotkeys),
            "sounds": self.sounds.to_dict(),
        }


def _parse_timestamp(value: object) -> datetime:
    if isinstance(value, str) and value:
        # Stored timestamps may carry a trailing "Z" from older data.
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone().replace(tzinfo=None)
        return parsed
    return datetime.now()
