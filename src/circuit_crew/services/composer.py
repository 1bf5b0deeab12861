"""Composition of today's exercise list."""

import random
import uuid
from typing import Sequence

from ..models.exercises import Exercise
from ..models.session import TARGET_EXERCISE_COUNT, SessionSlot
from .arrangement import arrange_slots

MIN_UNIQUE = 3
MIN_REPEATS = 2
MAX_REPEATS = 3


def new_slot(exercise: Exercise, rng: random.Random) -> SessionSlot:
    """Wrap an exercise in a slot with an id drawn from ``rng``."""
    slot_id = uuid.UUID(int=rng.getrandbits(128), version=4)
    return SessionSlot(slot_id=str(slot_id), exercise=exercise)


def _repeat_counts(unique_count: int, target_total: int, rng: random.Random) -> list[int]:
    """Split ``target_total`` into 2-3 repetitions per unique exercise."""
    counts = []
    remaining = target_total

    for i in range(unique_count):
        picks_left = unique_count - i

        if picks_left == 1:
            counts.append(min(MAX_REPEATS, max(MIN_REPEATS, remaining)))
            break

        average = remaining / picks_left
        if average > 2.5:
            reps = MAX_REPEATS
        elif average == 2.5:
            reps = rng.choice((MIN_REPEATS, MAX_REPEATS))
        else:
            reps = MIN_REPEATS

        # Keep the rest of the budget reachable with 2-3 per remaining pick
        others = picks_left - 1
        reps = max(reps, remaining - MAX_REPEATS * others)
        reps = min(reps, remaining - MIN_REPEATS * others)
        reps = min(MAX_REPEATS, max(MIN_REPEATS, reps))

        counts.append(reps)
        remaining -= reps

    return counts


def build_smart_session(
    library: Sequence[Exercise],
    target_total: int = TARGET_EXERCISE_COUNT,
    rng: random.Random | None = None,
) -> list[SessionSlot]:
    """Build an arranged list of about ``target_total`` slots from the library.

    Roughly a third as many distinct exercises are drawn, each repeated two or
    three times, and the expanded list is passed through ``arrange_slots``.

    Args:
        library: Exercises to choose from
        target_total: Desired number of slots
        rng: Random source (a fresh unseeded one if omitted)

    Returns:
        Arranged slots; empty if the library is empty
    """
    if not library:
        return []

    rng = rng or random.Random()
    unique_count = min(max(round(target_total / 3), MIN_UNIQUE), len(library))
    picked = rng.sample(list(library), unique_count)

    slots = []
    for exercise, count in zip(picked, _repeat_counts(unique_count, target_total, rng)):
        slots.extend(new_slot(exercise, rng) for _ in range(count))

    return arrange_slots(slots, rng)


class SessionDraft:
    """The editable list of slots for today's session.

    Each command applies its change and returns the new snapshot.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()
        self._slots: tuple[SessionSlot, ...] = ()

    @property
    def slots(self) -> tuple[SessionSlot, ...]:
        return self._slots

    @property
    def exercises(self) -> list[Exercise]:
        return [slot.exercise for slot in self._slots]

    def __len__(self) -> int:
        return len(self._slots)

    def add(self, exercise: Exercise) -> tuple[SessionSlot, ...]:
        self._slots = self._slots + (new_slot(exercise, self._rng),)
        return self._slots

    def remove(self, slot_id: str) -> tuple[SessionSlot, ...]:
        self._slots = tuple(s for s in self._slots if s.slot_id != slot_id)
        return self._slots

    def remove_exercise(self, exercise_id: str) -> tuple[SessionSlot, ...]:
        """Drop every slot of an exercise (used when it leaves the library)."""
        self._slots = tuple(s for s in self._slots if s.exercise.id != exercise_id)
        return self._slots

    def add_all(self, library: Sequence[Exercise]) -> tuple[SessionSlot, ...]:
        self._slots = tuple(new_slot(ex, self._rng) for ex in library)
        return self._slots

    def clear(self) -> tuple[SessionSlot, ...]:
        self._slots = ()
        return self._slots

    def shuffle(self) -> tuple[SessionSlot, ...]:
        self._slots = tuple(arrange_slots(self._slots, self._rng))
        return self._slots

    def reorder(self, slot_ids: Sequence[str]) -> tuple[SessionSlot, ...]:
        """Put slots in the given order; ids must be a permutation of the current ones."""
        by_id = {s.slot_id: s for s in self._slots}
        if sorted(slot_ids) != sorted(by_id):
            raise ValueError("Reorder must list every slot exactly once")
        self._slots = tuple(by_id[slot_id] for slot_id in slot_ids)
        return self._slots

    def smart_fill(
        self, library: Sequence[Exercise], target_total: int = TARGET_EXERCISE_COUNT
    ) -> tuple[SessionSlot, ...]:
        self._slots = tuple(build_smart_session(library, target_total, self._rng))
        return self._slots
