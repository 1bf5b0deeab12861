"""Materializing sessions and finalizing them into history."""

import random
from dataclasses import replace
from datetime import datetime
from typing import Callable, Sequence
from uuid import uuid4

from loguru import logger

from ..db.store import Store
from ..models.exercises import Exercise
from ..models.session import (
    DEFAULT_SESSION_SETTINGS,
    Session,
    SessionExercise,
    SessionSettings,
)
from .extreme import pick_extreme_indices
from .persistence import EventualWriter
from .physics import calculate_physics

SESSIONS = "sessions"
SETTINGS = "settings"
SETTINGS_DOC = "session"


def _with_physics(session: Session) -> Session:
    physics = calculate_physics(session.exercises)
    if (physics.total_meters, physics.total_work_kj) == (session.total_meters, session.total_work_kj):
        return session
    logger.warning(
        f"Session {session.id} stored {session.total_meters} m / {session.total_work_kj} kJ, "
        f"recomputed {physics.total_meters} m / {physics.total_work_kj} kJ"
    )
    return replace(session, total_meters=physics.total_meters, total_work_kj=physics.total_work_kj)


class SessionBuilder:
    """Owns the active session, the settings for new sessions and the history.

    ``complete_session`` is guarded by a latch: the first call finalizes and
    persists the active session, later calls for the same session do nothing.
    """

    def __init__(
        self,
        store: Store,
        writer: EventualWriter,
        owner_id: str,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.writer = writer
        self.owner_id = owner_id
        self.rng = rng or random.Random()
        self.clock = clock

        self._settings = DEFAULT_SESSION_SETTINGS
        self._current: Session | None = None
        self._completed_latch = False
        self._history: tuple[Session, ...] = ()

    @property
    def settings(self) -> SessionSettings:
        return self._settings

    @property
    def current_session(self) -> Session | None:
        return self._current

    @property
    def history(self) -> tuple[Session, ...]:
        return self._history

    async def load(self) -> tuple[Session, ...]:
        """Load saved settings and session history from the store.

        Stored distance and work totals are recomputed from each session's
        exercise snapshot.
        """
        saved = await self.store.get(self.owner_id, SETTINGS, SETTINGS_DOC)
        if saved is not None:
            self._settings = SessionSettings.from_dict(saved)

        rows = await self.store.fetch_all(self.owner_id, SESSIONS, "date")
        self._history = tuple(_with_physics(Session.from_dict(row)) for row in rows)
        return self._history

    def update_settings(self, **partial) -> SessionSettings:
        """Change settings for future sessions (validated, persisted in the background)."""
        self._settings = self._settings.with_updates(**partial)
        data = self._settings.to_dict()
        self.writer.submit(
            "session settings",
            lambda: self.store.save(self.owner_id, SETTINGS, SETTINGS_DOC, data),
        )
        return self._settings

    def create_session(
        self,
        participant_ids: Sequence[str],
        participant_names: Sequence[str],
        exercises: Sequence[Exercise],
        settings: SessionSettings | None = None,
        rng: random.Random | None = None,
    ) -> Session:
        """Build a draft session and make it the active one.

        Args:
            participant_ids: Ids of the people taking part
            participant_names: Display names, same order as the ids
            exercises: Ordered exercises, repeats allowed
            settings: Settings snapshot to use (defaults to the builder's)
            rng: Random source for the extreme picks (defaults to the builder's)

        Returns:
            The draft session
        """
        settings = settings or self._settings
        extreme = pick_extreme_indices(len(exercises), settings.extreme_count, rng or self.rng)

        session_exercises = tuple(
            SessionExercise(
                exercise_id=ex.id,
                name=ex.name,
                duration_sec=(
                    settings.extreme_duration_sec if i in extreme else settings.exercise_duration_sec
                ),
                is_extreme=i in extreme,
                order=i,
                rom_cm=ex.rom_cm,
                reps_per_40s=ex.reps_per_40s,
                dumbbells_used=ex.dumbbells_used,
                vertical_factor=ex.vertical_factor,
            )
            for i, ex in enumerate(exercises)
        )
        physics = calculate_physics(session_exercises)

        session = Session(
            id=str(uuid4()),
            date=self.clock(),
            participants=tuple(participant_ids),
            participant_names=tuple(participant_names),
            exercises=session_exercises,
            settings=settings,
            completed=False,
            total_duration_sec=0,
            total_meters=physics.total_meters,
            total_work_kj=physics.total_work_kj,
        )

        self._current = session
        self._completed_latch = False
        logger.debug(
            f"Created session {session.id}: {len(session_exercises)} exercises, "
            f"{len(extreme)} extreme"
        )
        return session

    def complete_session(self, total_duration_sec: int) -> Session | None:
        """Finalize the active session once; repeated calls are no-ops.

        The local transition and the history append always happen; the store
        write is best effort and never blocks the caller.

        Returns:
            The completed session, or None if there is no active session
        """
        if self._current is None:
            return None
        if self._completed_latch:
            return self._current
        self._completed_latch = True

        completed = replace(self._current, completed=True, total_duration_sec=int(total_duration_sec))
        self._current = completed
        self._history = self._history + (completed,)

        data = completed.to_dict()
        self.writer.submit(
            f"session {completed.id}",
            lambda: self.store.save(self.owner_id, SESSIONS, completed.id, data),
        )
        logger.info(
            f"Completed session {completed.id} in {completed.total_duration_sec}s "
            f"({completed.total_meters} m, {completed.total_work_kj} kJ)"
        )
        return completed
