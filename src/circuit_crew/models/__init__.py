"""Data models for circuit-crew."""

from .exercises import DEFAULT_EXERCISES, Exercise
from .people import Person
from .session import (
    DEFAULT_SESSION_SETTINGS,
    PersonStats,
    Session,
    SessionExercise,
    SessionSettings,
    SessionSlot,
)

__all__ = [
    "DEFAULT_EXERCISES",
    "DEFAULT_SESSION_SETTINGS",
    "Exercise",
    "Person",
    "PersonStats",
    "Session",
    "SessionExercise",
    "SessionSettings",
    "SessionSlot",
]
