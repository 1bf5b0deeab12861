"""circuit-crew: group dumbbell circuit sessions with streaks."""

__version__ = "0.1.0"
