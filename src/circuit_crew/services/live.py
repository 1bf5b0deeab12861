"""Live session clock: countdown, exercise and rest phases with pause/skip/finish."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from loguru import logger

from ..models.session import Session, SessionExercise
from .cues import CueDispatcher
from .physics import round_half_up
from .scheduler import Scheduler

COUNTDOWN_FROM = 3
OPENING_EXTREME_DELAY_SEC = 1.5
NEXT_EXTREME_DELAY_SEC = 1.2

EXTREME_PHRASE = "Extreme!"
NEXT_PHRASE = "Next exercise: {name}"
DONE_PHRASE = "Done! Great work!"


class Phase(str, Enum):
    """Phases of a live session."""

    COUNTDOWN = "countdown"
    EXERCISE = "exercise"
    REST = "rest"
    FINISHED = "finished"


@dataclass(frozen=True)
class EngineSnapshot:
    """What a display needs to render the current moment of a session."""

    phase: Phase
    index: int
    time_left: int
    paused: bool
    total: int
    current: SessionExercise | None
    upcoming: SessionExercise | None

    @property
    def progress(self) -> float:
        """Fraction of exercises reached, 0..1."""
        if self.phase is Phase.FINISHED:
            return 1.0
        if self.phase is Phase.COUNTDOWN or not self.total:
            return 0.0
        return (self.index + 1) / self.total


class LiveExecutionEngine:
    """Walks a session's exercises in real time.

    The engine owns all of its timing state. Deadlines are absolute, so a
    late frame never stretches a phase. Pausing freezes the seconds left and
    resuming sets a fresh deadline from them. ``on_finish`` receives the
    elapsed seconds every time ``finish()`` runs; the receiver is expected to
    complete the session at most once.
    """

    def __init__(
        self,
        session: Session,
        scheduler: Scheduler,
        cues: CueDispatcher,
        on_finish: Callable[[int], Any] | None = None,
        countdown_from: int = COUNTDOWN_FROM,
    ):
        if not session.exercises:
            raise ValueError("Cannot run a session without exercises")

        self.session = session
        self.scheduler = scheduler
        self.cues = cues
        self.on_finish = on_finish

        self.phase = Phase.COUNTDOWN
        self.index = 0
        self.time_left = countdown_from
        self.paused = False

        self._deadline = 0.0
        self._frozen = 0
        self._started = False
        self._session_start: float | None = None
        self._elapsed: int | None = None
        self._tick_handle: Any = None
        self._delayed: set[Any] = set()

    # -- queries -------------------------------------------------------------

    @property
    def exercises(self) -> tuple[SessionExercise, ...]:
        return self.session.exercises

    @property
    def current_exercise(self) -> SessionExercise | None:
        if self.phase is Phase.FINISHED:
            return None
        return self.exercises[self.index]

    @property
    def upcoming_exercise(self) -> SessionExercise | None:
        if self.phase is Phase.COUNTDOWN:
            return self.exercises[0]
        if self.phase is Phase.FINISHED or self.index + 1 >= len(self.exercises):
            return None
        return self.exercises[self.index + 1]

    @property
    def is_finished(self) -> bool:
        return self.phase is Phase.FINISHED

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            phase=self.phase,
            index=self.index,
            time_left=self.time_left,
            paused=self.paused,
            total=len(self.exercises),
            current=self.current_exercise,
            upcoming=self.upcoming_exercise,
        )

    # -- commands ------------------------------------------------------------

    def start(self) -> None:
        """Begin the countdown."""
        if self._started:
            return
        self._started = True

        now = self.scheduler.now()
        self._session_start = now
        self._deadline = now + 1
        logger.debug(f"Session {self.session.id} countdown from {self.time_left}")
        self.cues.countdown()
        self._arm()

    def pause(self) -> None:
        if self.paused or not self._started or self.phase is Phase.FINISHED:
            return

        self._frozen = self._seconds_left(self.scheduler.now())
        if self.phase is not Phase.COUNTDOWN:
            self.time_left = self._frozen
        self.paused = True
        self._cancel_tick()
        self.cues.duck()
        logger.debug(f"Paused in {self.phase.value} with {self._frozen}s left")

    def resume(self) -> None:
        if not self.paused:
            return

        self.paused = False
        self._deadline = self.scheduler.now() + self._frozen
        self.cues.unduck()
        logger.debug(f"Resumed {self.phase.value} with {self._frozen}s left")
        self._arm()

    def toggle_pause(self) -> bool:
        """Pause or resume; returns the new paused state."""
        if self.paused:
            self.resume()
        else:
            self.pause()
        return self.paused

    def skip(self) -> bool:
        """End the current exercise now. Only valid during an exercise."""
        if self.phase is not Phase.EXERCISE:
            return False

        logger.debug(f"Skipping exercise {self.index}")
        self._end_exercise(self.scheduler.now())

        if self.phase is not Phase.FINISHED:
            if self.paused:
                self._frozen = self.time_left
            else:
                self._arm()
        return True

    def finish(self) -> int:
        """End the session and hand the elapsed seconds to ``on_finish``."""
        if self._elapsed is None:
            now = self.scheduler.now()
            start = self._session_start if self._session_start is not None else now
            self._elapsed = max(0, int(round_half_up(now - start)))
            self._shutdown()
            logger.info(f"Session {self.session.id} finished after {self._elapsed}s")

        if self.on_finish is not None:
            self.on_finish(self._elapsed)
        return self._elapsed

    def close(self) -> None:
        """Tear down without completing (e.g. leaving the session screen)."""
        self._shutdown()

    # -- internals -----------------------------------------------------------

    def _seconds_left(self, now: float) -> int:
        return max(0, math.ceil(round(self._deadline - now, 6)))

    def _arm(self) -> None:
        self._cancel_tick()
        self._tick_handle = self.scheduler.schedule_tick(self._tick)

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self.scheduler.cancel(self._tick_handle)
            self._tick_handle = None

    def _shutdown(self) -> None:
        self._cancel_tick()
        for handle in self._delayed:
            self.scheduler.cancel(handle)
        self._delayed.clear()
        self.cues.stop()
        self.paused = False
        self.phase = Phase.FINISHED

    def _tick(self) -> None:
        self._tick_handle = None
        if self.paused or self.phase is Phase.FINISHED:
            return

        now = self.scheduler.now()
        if self.phase is Phase.COUNTDOWN:
            if self._seconds_left(now) <= 0:
                self.time_left -= 1
                if self.time_left > 0:
                    self._deadline += 1
                    self.cues.countdown()
                else:
                    self._begin(now)
        else:
            self.time_left = self._seconds_left(now)
            if self.time_left <= 0:
                if self.phase is Phase.EXERCISE:
                    self._end_exercise(now)
                else:
                    self.cues.go()
                    self._enter_exercise(self.index + 1, now)

        if not self.paused and self.phase is not Phase.FINISHED and self._tick_handle is None:
            self._arm()

    def _begin(self, now: float) -> None:
        self.cues.go()
        self._session_start = now
        self._enter_exercise(0, now)
        self._announce(self.exercises[0], OPENING_EXTREME_DELAY_SEC, "{name}")

    def _enter_exercise(self, index: int, now: float) -> None:
        exercise = self.exercises[index]
        self.index = index
        self.phase = Phase.EXERCISE
        self.time_left = exercise.duration_sec
        self._deadline = now + exercise.duration_sec
        logger.debug(f"Exercise {index}: {exercise.name} ({exercise.duration_sec}s)")

    def _end_exercise(self, now: float) -> None:
        self.cues.end()

        if self.index >= len(self.exercises) - 1:
            self.time_left = 0
            self._shutdown()
            self.cues.speak(DONE_PHRASE)
            self.finish()
            return

        rest = self.session.settings.rest_duration_sec
        self.phase = Phase.REST
        self.time_left = rest
        self._deadline = now + rest
        logger.debug(f"Rest {rest}s before exercise {self.index + 1}")
        self._announce(self.exercises[self.index + 1], NEXT_EXTREME_DELAY_SEC, NEXT_PHRASE)

    def _announce(self, exercise: SessionExercise, extreme_delay: float, template: str) -> None:
        if not exercise.is_extreme:
            self.cues.speak(template.format(name=exercise.name))
            return

        self.cues.speak(EXTREME_PHRASE)
        handle = None

        def say_name() -> None:
            self._delayed.discard(handle)
            if self.phase is not Phase.FINISHED:
                self.cues.speak(exercise.name)

        handle = self.scheduler.call_later(extreme_delay, say_name)
        self._delayed.add(handle)
