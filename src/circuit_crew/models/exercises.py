"""Exercise definitions and the built-in circuit library."""

from dataclasses import dataclass, field, replace
from uuid import uuid4


@dataclass(frozen=True)
class Exercise:
    """A dumbbell circuit exercise with the metadata needed for physics estimates."""

    name: str
    rom_cm: float  # Range of motion per rep
    reps_per_40s: float  # Reps performed in a 40 second reference window
    dumbbells_used: int = 2  # 1 or 2
    vertical_factor: float = 0.5  # Fraction of rep distance that is vertical (0..1)
    is_floor: bool = False
    id: str = field(default_factory=lambda: str(uuid4()))

    def to_dict(self) -> dict:
        """Convert to dictionary for storage (id is the document key)."""
        return {
            "name": self.name,
            "rom_cm": self.rom_cm,
            "reps_per_40s": self.reps_per_40s,
            "dumbbells_used": self.dumbbells_used,
            "vertical_factor": self.vertical_factor,
            "is_floor": self.is_floor,
        }

    @classmethod
    def from_dict(cls, data: dict, id: str | None = None) -> "Exercise":
        """Create from dictionary."""
        return cls(
            id=id or data.get("id") or str(uuid4()),
            name=data["name"],
            rom_cm=data["rom_cm"],
            reps_per_40s=data["reps_per_40s"],
            dumbbells_used=data.get("dumbbells_used", 2),
            vertical_factor=data.get("vertical_factor", 0.5),
            is_floor=data.get("is_floor", False),
        )

    def with_updates(self, **changes) -> "Exercise":
        """Return a copy with the given fields replaced (id is kept)."""
        changes.pop("id", None)
        return replace(self, **changes)


# Seed library used when an owner has no exercises yet
DEFAULT_EXERCISES: list[Exercise] = [
    # Standing - upper body
    Exercise(name="Shoulder Press", rom_cm=50, reps_per_40s=14, vertical_factor=1.0),
    Exercise(name="Bicep Curl", rom_cm=45, reps_per_40s=16, vertical_factor=0.8),
    Exercise(name="Lateral Raise", rom_cm=55, reps_per_40s=14, vertical_factor=0.6),
    Exercise(name="Upright Row", rom_cm=40, reps_per_40s=15, vertical_factor=1.0),
    Exercise(name="Bent Over Row", rom_cm=35, reps_per_40s=16, vertical_factor=0.9),
    Exercise(name="Hammer Curl", rom_cm=45, reps_per_40s=16, vertical_factor=0.8),
    Exercise(name="Front Raise", rom_cm=60, reps_per_40s=12, vertical_factor=0.7),
    Exercise(
        name="Overhead Tricep Extension",
        rom_cm=40,
        reps_per_40s=14,
        dumbbells_used=1,
        vertical_factor=0.9,
    ),
    # Standing - lower body / full body
    Exercise(name="Goblet Squat", rom_cm=45, reps_per_40s=14, dumbbells_used=1, vertical_factor=1.0),
    Exercise(name="Romanian Deadlift", rom_cm=50, reps_per_40s=14, vertical_factor=0.9),
    Exercise(name="Walking Lunge", rom_cm=40, reps_per_40s=16, vertical_factor=0.6),
    Exercise(name="Squat to Press", rom_cm=90, reps_per_40s=12, vertical_factor=1.0),
    Exercise(name="Dumbbell Swing", rom_cm=80, reps_per_40s=18, dumbbells_used=1, vertical_factor=0.5),
    Exercise(name="Calf Raise", rom_cm=10, reps_per_40s=25, vertical_factor=1.0),
    # Floor
    Exercise(name="Floor Press", rom_cm=30, reps_per_40s=16, vertical_factor=1.0, is_floor=True),
    Exercise(name="Renegade Row", rom_cm=30, reps_per_40s=12, vertical_factor=0.9, is_floor=True),
    Exercise(name="Russian Twist", rom_cm=40, reps_per_40s=24, dumbbells_used=1, vertical_factor=0.2, is_floor=True),
    Exercise(name="Glute Bridge", rom_cm=25, reps_per_40s=18, dumbbells_used=1, vertical_factor=1.0, is_floor=True),
    Exercise(name="Dumbbell Pullover", rom_cm=60, reps_per_40s=12, dumbbells_used=1, vertical_factor=0.7, is_floor=True),
]
