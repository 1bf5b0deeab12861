"""Exercise library and participant roster services."""

from dataclasses import replace
from uuid import uuid4

from loguru import logger

from ..db.store import Store
from ..models.exercises import DEFAULT_EXERCISES, Exercise
from ..models.people import Person
from .persistence import EventualWriter

EXERCISES = "exercises"
PEOPLE = "people"


class ExerciseLibrary:
    """An owner's exercise library.

    Changes apply locally right away; the store write follows in the
    background through the ``EventualWriter``.
    """

    def __init__(self, store: Store, writer: EventualWriter, owner_id: str):
        self.store = store
        self.writer = writer
        self.owner_id = owner_id
        self._exercises: tuple[Exercise, ...] = ()

    async def load(self, seed_defaults: bool = True) -> tuple[Exercise, ...]:
        """Load the library, seeding the built-in exercises into an empty one."""
        rows = await self.store.fetch_all(self.owner_id, EXERCISES, "name")
        exercises = [Exercise.from_dict(row, id=row["id"]) for row in rows]

        if not exercises and seed_defaults:
            logger.info(f"Seeding {len(DEFAULT_EXERCISES)} default exercises for {self.owner_id}")
            for default in DEFAULT_EXERCISES:
                exercise = replace(default, id=str(uuid4()))
                self._persist(exercise)
                exercises.append(exercise)

        self._exercises = tuple(exercises)
        return self._exercises

    def list(self) -> tuple[Exercise, ...]:
        return self._exercises

    def get(self, exercise_id: str) -> Exercise:
        for exercise in self._exercises:
            if exercise.id == exercise_id:
                return exercise
        raise KeyError(f"Exercise {exercise_id} not found")

    def find(self, name_or_id: str) -> Exercise | None:
        """Look up by id, then by case-insensitive name."""
        wanted = name_or_id.strip().lower()
        for exercise in self._exercises:
            if exercise.id == name_or_id or exercise.name.lower() == wanted:
                return exercise
        return None

    def add(self, exercise: Exercise) -> tuple[Exercise, ...]:
        if any(ex.id == exercise.id for ex in self._exercises):
            raise ValueError(f"Exercise {exercise.id} already exists")
        self._exercises = self._exercises + (exercise,)
        self._persist(exercise)
        return self._exercises

    def update(self, exercise: Exercise) -> tuple[Exercise, ...]:
        self.get(exercise.id)
        self._exercises = tuple(exercise if ex.id == exercise.id else ex for ex in self._exercises)
        self._persist(exercise)
        return self._exercises

    def remove(self, exercise_id: str) -> tuple[Exercise, ...]:
        self.get(exercise_id)
        self._exercises = tuple(ex for ex in self._exercises if ex.id != exercise_id)
        self.writer.submit(
            f"removal of exercise {exercise_id}",
            lambda: self.store.remove(self.owner_id, EXERCISES, exercise_id),
        )
        return self._exercises

    def _persist(self, exercise: Exercise) -> None:
        data = exercise.to_dict()
        self.writer.submit(
            f"exercise {exercise.name}",
            lambda: self.store.save(self.owner_id, EXERCISES, exercise.id, data),
        )


class ParticipantRoster:
    """The people who can join a session."""

    def __init__(self, store: Store, writer: EventualWriter, owner_id: str):
        self.store = store
        self.writer = writer
        self.owner_id = owner_id
        self._people: tuple[Person, ...] = ()

    async def load(self) -> tuple[Person, ...]:
        rows = await self.store.fetch_all(self.owner_id, PEOPLE, "created_at")
        self._people = tuple(Person.from_dict(row, id=row["id"]) for row in rows)
        return self._people

    def list(self) -> tuple[Person, ...]:
        return self._people

    def find(self, name_or_id: str) -> Person | None:
        """Look up by id, display name or nickname (case-insensitive)."""
        wanted = name_or_id.strip().lower()
        for person in self._people:
            if person.id == name_or_id:
                return person
            if person.display_name.lower() == wanted:
                return person
            if person.nickname and person.nickname.lower() == wanted:
                return person
        return None

    def add_person(self, display_name: str, nickname: str | None = None) -> Person:
        display_name = display_name.strip()
        if not display_name:
            raise ValueError("Display name cannot be empty")

        person = Person(display_name=display_name, nickname=nickname or None)
        self._people = self._people + (person,)
        data = person.to_dict()
        self.writer.submit(
            f"person {display_name}",
            lambda: self.store.save(self.owner_id, PEOPLE, person.id, data),
        )
        return person

    def remove_person(self, person_id: str) -> tuple[Person, ...]:
        if not any(p.id == person_id for p in self._people):
            raise KeyError(f"Person {person_id} not found")
        self._people = tuple(p for p in self._people if p.id != person_id)
        self.writer.submit(
            f"removal of person {person_id}",
            lambda: self.store.remove(self.owner_id, PEOPLE, person_id),
        )
        return self._people
