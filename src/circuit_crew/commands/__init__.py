"""CLI commands for circuit-crew."""

from .exercises import exercises
from .history import history, stats
from .init import init
from .people import people
from .serve import serve
from .session import session
from .settings import settings

__all__ = [
    "exercises",
    "history",
    "init",
    "people",
    "serve",
    "session",
    "settings",
    "stats",
]
