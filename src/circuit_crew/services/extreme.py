"""Selection of extreme (longer) rounds within a session."""

import random

from loguru import logger

MAX_ATTEMPTS = 100


def pick_extreme_indices(
    exercise_count: int,
    extreme_count: int,
    rng: random.Random | None = None,
) -> set[int]:
    """Pick the positions that run as extreme rounds.

    Tries random positions so that no two extremes are neighbours. When the
    attempt budget runs out first, the remaining picks are filled with the
    lowest unused indices and adjacency is no longer enforced.

    Args:
        exercise_count: Number of exercises in the session
        extreme_count: Requested number of extreme rounds
        rng: Random source (a fresh unseeded one if omitted)

    Returns:
        Set of ``min(extreme_count, exercise_count)`` indices, or an empty set
        for sessions of zero or one exercise
    """
    indices: set[int] = set()
    if exercise_count <= 1:
        return indices

    rng = rng or random.Random()
    target = max(0, min(extreme_count, exercise_count))

    attempts = 0
    while len(indices) < target and attempts < MAX_ATTEMPTS:
        idx = rng.randrange(exercise_count)
        if all(abs(existing - idx) > 1 for existing in indices):
            indices.add(idx)
        attempts += 1

    if len(indices) < target:
        logger.warning(
            f"Could not place {target} non-adjacent extremes in {exercise_count} exercises, "
            "filling the rest in order"
        )
        for i in range(exercise_count):
            if len(indices) >= target:
                break
            indices.add(i)

    return indices
