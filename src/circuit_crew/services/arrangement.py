"""Ordering of session slots: floor block placement and back-to-back avoidance."""

import math
import random
from typing import Sequence

from ..models.session import SessionSlot


def _same(slots: list[SessionSlot], a: int, b: int) -> bool:
    """True if both positions exist and hold the same exercise."""
    if a < 0 or b < 0 or a >= len(slots) or b >= len(slots):
        return False
    return slots[a].exercise.id == slots[b].exercise.id


def _swap_is_clean(slots: list[SessionSlot], i: int, j: int) -> bool:
    """Check the neighbourhoods of two just-swapped positions for duplicates."""
    for pos in (i, j):
        if _same(slots, pos - 1, pos) or _same(slots, pos, pos + 1):
            return False
    return True


def _try_swap(slots: list[SessionSlot], i: int, candidates: range) -> bool:
    for j in candidates:
        if slots[j].exercise.id == slots[i].exercise.id:
            continue
        slots[i], slots[j] = slots[j], slots[i]
        if _swap_is_clean(slots, i, j):
            return True
        slots[i], slots[j] = slots[j], slots[i]
    return False


def prevent_consecutive_same(
    slots: Sequence[SessionSlot],
    rng: random.Random | None = None,
) -> list[SessionSlot]:
    """Shuffle slots, then repair back-to-back repeats of the same exercise.

    A single repair pass looks forward for a swap partner, then backward. A
    swap is only taken if it leaves no duplicate around either position. On
    lopsided inputs (one exercise filling half the list or more) some repeats
    may remain.
    """
    rng = rng or random.Random()
    result = list(slots)
    rng.shuffle(result)

    for i in range(1, len(result)):
        if not _same(result, i - 1, i):
            continue
        if _try_swap(result, i, range(i + 1, len(result))):
            continue
        _try_swap(result, i, range(i - 2, -1, -1))

    return result


def arrange_slots(
    slots: Sequence[SessionSlot],
    rng: random.Random | None = None,
) -> list[SessionSlot]:
    """Arrange slots so floor exercises form one block inside the standing ones.

    Both groups are shuffled and de-duplicated on their own. The floor block
    is inserted at an offset drawn from the middle half of the standing
    sequence, so it never opens or closes a session that has both kinds.
    """
    rng = rng or random.Random()
    floor = [s for s in slots if s.exercise.is_floor]
    standing = [s for s in slots if not s.exercise.is_floor]

    floor = prevent_consecutive_same(floor, rng)
    standing = prevent_consecutive_same(standing, rng)

    if not floor:
        return standing
    if not standing:
        return floor

    min_pos = max(1, math.ceil(len(standing) * 0.25))
    max_pos = max(min_pos, math.floor(len(standing) * 0.75))
    insert_at = rng.randint(min_pos, max_pos)

    return standing[:insert_at] + floor + standing[insert_at:]
