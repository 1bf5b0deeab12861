"""Distance and mechanical work estimates for a session."""

import math
from dataclasses import dataclass
from typing import Protocol, Sequence

from ..models.session import DEFAULT_DUMBBELL_MASS_KG, GRAVITY

REFERENCE_WINDOW_SEC = 40


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to `digits` places with ties going up (2.5 -> 3, 0.125 -> 0.13)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


class PhysicsInput(Protocol):
    """Fields the calculator reads from each exercise."""

    duration_sec: float
    reps_per_40s: float
    rom_cm: float
    dumbbells_used: int
    vertical_factor: float


@dataclass(frozen=True)
class ExercisePhysics:
    """Per-exercise result, already rounded."""

    name: str
    meters: float
    work_kj: float
    is_extreme: bool = False


@dataclass(frozen=True)
class PhysicsResult:
    total_meters: float
    total_work_kj: float
    per_exercise: tuple[ExercisePhysics, ...]


def estimate_exercise(exercise: PhysicsInput) -> tuple[float, float]:
    """Estimate (meters, kJ) for a single exercise, rounded to 2 and 3 places."""
    scale_factor = exercise.duration_sec / REFERENCE_WINDOW_SEC
    estimated_reps = exercise.reps_per_40s * scale_factor
    meters = (exercise.rom_cm / 100) * estimated_reps * exercise.dumbbells_used
    mass_kg = DEFAULT_DUMBBELL_MASS_KG * exercise.dumbbells_used
    work_j = mass_kg * GRAVITY * meters * exercise.vertical_factor
    return round_half_up(meters, 2), round_half_up(work_j / 1000, 3)


def calculate_physics(exercises: Sequence[PhysicsInput]) -> PhysicsResult:
    """Calculate distance moved and work done over a sequence of exercises.

    Totals are sums of the rounded per-exercise values, rounded again to the
    same precision.
    """
    per_exercise = []
    for exercise in exercises:
        meters, work_kj = estimate_exercise(exercise)
        per_exercise.append(
            ExercisePhysics(
                name=getattr(exercise, "name", ""),
                meters=meters,
                work_kj=work_kj,
                is_extreme=getattr(exercise, "is_extreme", False),
            )
        )

    total_meters = round_half_up(sum(p.meters for p in per_exercise), 2)
    total_work_kj = round_half_up(sum(p.work_kj for p in per_exercise), 3)

    return PhysicsResult(
        total_meters=total_meters,
        total_work_kj=total_work_kj,
        per_exercise=tuple(per_exercise),
    )
