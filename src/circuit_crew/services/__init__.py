"""Session composition, live execution and scoring services."""

from .arrangement import arrange_slots, prevent_consecutive_same
from .composer import SessionDraft, build_smart_session
from .cues import CueDispatcher, CueRecorder
from .extreme import pick_extreme_indices
from .library import ExerciseLibrary, ParticipantRoster
from .live import EngineSnapshot, LiveExecutionEngine, Phase
from .persistence import EventualWriter
from .physics import PhysicsResult, calculate_physics
from .scheduler import AsyncioScheduler, Scheduler, VirtualScheduler
from .session_builder import SessionBuilder
from .streaks import build_leaderboard, calculate_person_stats, summarize_history
from .workspace import Workspace

__all__ = [
    "arrange_slots",
    "AsyncioScheduler",
    "build_leaderboard",
    "build_smart_session",
    "calculate_person_stats",
    "calculate_physics",
    "CueDispatcher",
    "CueRecorder",
    "EngineSnapshot",
    "EventualWriter",
    "ExerciseLibrary",
    "LiveExecutionEngine",
    "ParticipantRoster",
    "Phase",
    "PhysicsResult",
    "pick_extreme_indices",
    "prevent_consecutive_same",
    "Scheduler",
    "SessionBuilder",
    "SessionDraft",
    "summarize_history",
    "VirtualScheduler",
    "Workspace",
]
