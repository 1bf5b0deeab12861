"""Session composition and session record models."""

from dataclasses import dataclass, replace
from datetime import datetime

from .exercises import Exercise

TARGET_EXERCISE_COUNT = 25
GRAVITY = 9.81
DEFAULT_DUMBBELL_MASS_KG = 10

# Recognised ranges for each setting, inclusive
SETTINGS_BOUNDS: dict[str, tuple[int, int]] = {
    "exercise_duration_sec": (10, 120),
    "rest_duration_sec": (3, 30),
    "extreme_duration_sec": (10, 180),
    "extreme_count": (0, 10),
}


@dataclass(frozen=True)
class SessionSettings:
    """Phase durations and extreme round count for a session."""

    exercise_duration_sec: int = 40
    rest_duration_sec: int = 5
    extreme_duration_sec: int = 60
    extreme_count: int = 2

    def validate(self) -> None:
        """Raise ValueError if any setting is outside its recognised range."""
        for name, (low, high) in SETTINGS_BOUNDS.items():
            value = getattr(self, name)
            if not low <= value <= high:
                raise ValueError(f"{name} must be between {low} and {high}, got {value}")

    def with_updates(self, **partial) -> "SessionSettings":
        """Return new settings with the given fields replaced."""
        unknown = set(partial) - set(SETTINGS_BOUNDS)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
        updated = replace(self, **{k: int(v) for k, v in partial.items() if v is not None})
        updated.validate()
        return updated

    def to_dict(self) -> dict:
        return {
            "exercise_duration_sec": self.exercise_duration_sec,
            "rest_duration_sec": self.rest_duration_sec,
            "extreme_duration_sec": self.extreme_duration_sec,
            "extreme_count": self.extreme_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionSettings":
        defaults = cls()
        return cls(
            exercise_duration_sec=data.get("exercise_duration_sec", defaults.exercise_duration_sec),
            rest_duration_sec=data.get("rest_duration_sec", defaults.rest_duration_sec),
            extreme_duration_sec=data.get("extreme_duration_sec", defaults.extreme_duration_sec),
            extreme_count=data.get("extreme_count", defaults.extreme_count),
        )


DEFAULT_SESSION_SETTINGS = SessionSettings()


@dataclass(frozen=True)
class SessionSlot:
    """One pick of an exercise in today's draft.

    Repeated picks of the same exercise get distinct slot ids so they can be
    moved or removed independently.
    """

    slot_id: str
    exercise: Exercise


@dataclass(frozen=True)
class SessionExercise:
    """Snapshot of an exercise plus its timing, taken when the session is built."""

    exercise_id: str
    name: str
    duration_sec: int
    is_extreme: bool
    order: int
    rom_cm: float
    reps_per_40s: float
    dumbbells_used: int
    vertical_factor: float

    def to_dict(self) -> dict:
        return {
            "exercise_id": self.exercise_id,
            "name": self.name,
            "duration_sec": self.duration_sec,
            "is_extreme": self.is_extreme,
            "order": self.order,
            "rom_cm": self.rom_cm,
            "reps_per_40s": self.reps_per_40s,
            "dumbbells_used": self.dumbbells_used,
            "vertical_factor": self.vertical_factor,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionExercise":
        return cls(
            exercise_id=data["exercise_id"],
            name=data["name"],
            duration_sec=data["duration_sec"],
            is_extreme=data.get("is_extreme", False),
            order=data["order"],
            rom_cm=data["rom_cm"],
            reps_per_40s=data["reps_per_40s"],
            dumbbells_used=data["dumbbells_used"],
            vertical_factor=data["vertical_factor"],
        )


@dataclass(frozen=True)
class Session:
    """A materialized workout session.

    Drafts are created by the session builder; once ``completed`` is set the
    record is history and is never changed again.
    """

    id: str
    date: datetime
    participants: tuple[str, ...]
    participant_names: tuple[str, ...]
    exercises: tuple[SessionExercise, ...]
    settings: SessionSettings
    completed: bool = False
    total_duration_sec: int = 0
    total_meters: float = 0.0
    total_work_kj: float = 0.0

    @property
    def planned_duration_sec(self) -> int:
        """Exercise time plus rests between exercises (no rest after the last one)."""
        if not self.exercises:
            return 0
        work = sum(ex.duration_sec for ex in self.exercises)
        return work + self.settings.rest_duration_sec * (len(self.exercises) - 1)

    def to_dict(self) -> dict:
        """Convert to the persisted JSON shape."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "participants": list(self.participants),
            "participant_names": list(self.participant_names),
            "exercises": [ex.to_dict() for ex in self.exercises],
            "settings": self.settings.to_dict(),
            "completed": self.completed,
            "total_duration_sec": self.total_duration_sec,
            "total_meters": self.total_meters,
            "total_work_kj": self.total_work_kj,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        return cls(
            id=data["id"],
            date=datetime.fromisoformat(data["date"]),
            participants=tuple(data.get("participants", [])),
            participant_names=tuple(data.get("participant_names", [])),
            exercises=tuple(SessionExercise.from_dict(ex) for ex in data.get("exercises", [])),
            settings=SessionSettings.from_dict(data.get("settings", {})),
            completed=data.get("completed", False),
            total_duration_sec=data.get("total_duration_sec", 0),
            total_meters=data.get("total_meters", 0.0),
            total_work_kj=data.get("total_work_kj", 0.0),
        )


@dataclass(frozen=True)
class PersonStats:
    """Gamification statistics derived from session history (never stored)."""

    person_id: str
    display_name: str
    total_sessions: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    total_points: int = 0
    last_session_date: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "person_id": self.person_id,
            "display_name": self.display_name,
            "total_sessions": self.total_sessions,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "total_points": self.total_points,
            "last_session_date": (
                self.last_session_date.isoformat() if self.last_session_date else None
            ),
        }
