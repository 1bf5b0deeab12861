"""Tests for the exercise library, participant roster and background writes."""

import asyncio

import pytest

from circuit_crew.models.exercises import DEFAULT_EXERCISES, Exercise
from circuit_crew.services.library import EXERCISES, PEOPLE, ExerciseLibrary, ParticipantRoster
from circuit_crew.services.persistence import EventualWriter


@pytest.fixture
def writer():
    return EventualWriter()


class TestExerciseLibrary:
    """Tests for ExerciseLibrary."""

    def test_seeds_defaults_into_empty_library(self, memory_store, writer):
        library = ExerciseLibrary(memory_store, writer, "tester")
        loaded = asyncio.run(library.load())
        asyncio.run(writer.flush())

        assert len(loaded) == len(DEFAULT_EXERCISES)
        assert len(memory_store.docs[("tester", EXERCISES)]) == len(DEFAULT_EXERCISES)
        assert {e.id for e in loaded}.isdisjoint({e.id for e in DEFAULT_EXERCISES})

    def test_no_seed(self, memory_store, writer):
        library = ExerciseLibrary(memory_store, writer, "tester")
        assert asyncio.run(library.load(seed_defaults=False)) == ()

    def test_add_update_remove(self, memory_store, writer):
        library = ExerciseLibrary(memory_store, writer, "tester")
        curl = Exercise(name="Curl", rom_cm=45, reps_per_40s=16, id="c1")

        library.add(curl)
        assert library.get("c1") == curl
        assert library.find("CURL") == curl

        library.update(curl.with_updates(reps_per_40s=18))
        assert library.get("c1").reps_per_40s == 18

        library.remove("c1")
        assert library.find("c1") is None
        asyncio.run(writer.flush())
        assert memory_store.docs[("tester", EXERCISES)] == {}

    def test_duplicate_and_missing(self, memory_store, writer):
        library = ExerciseLibrary(memory_store, writer, "tester")
        curl = Exercise(name="Curl", rom_cm=45, reps_per_40s=16, id="c1")
        library.add(curl)

        with pytest.raises(ValueError):
            library.add(curl)
        with pytest.raises(KeyError):
            library.remove("nope")

    def test_local_change_survives_failed_write(self, failing_store, writer):
        """Test a failed write is counted but not rolled back."""
        library = ExerciseLibrary(failing_store, writer, "tester")
        library.add(Exercise(name="Curl", rom_cm=45, reps_per_40s=16))
        asyncio.run(writer.flush())

        assert len(library.list()) == 1
        assert writer.failures == 1


class TestParticipantRoster:
    """Tests for ParticipantRoster."""

    def test_add_and_reload_in_creation_order(self, memory_store, writer):
        roster = ParticipantRoster(memory_store, writer, "tester")
        alex = roster.add_person("Alex", "Al")
        sam = roster.add_person("  Sam  ")
        asyncio.run(writer.flush())

        reloaded = ParticipantRoster(memory_store, EventualWriter(), "tester")
        people = asyncio.run(reloaded.load())

        assert [p.id for p in people] == [alex.id, sam.id]
        assert people[1].display_name == "Sam"

    def test_find_by_name_nickname_or_id(self, memory_store, writer):
        roster = ParticipantRoster(memory_store, writer, "tester")
        alex = roster.add_person("Alexandra", "Alex")

        assert roster.find("alexandra") == alex
        assert roster.find("ALEX") == alex
        assert roster.find(alex.id) == alex
        assert roster.find("Sam") is None

    def test_empty_name_rejected(self, memory_store, writer):
        roster = ParticipantRoster(memory_store, writer, "tester")
        with pytest.raises(ValueError):
            roster.add_person("   ")

    def test_remove(self, memory_store, writer):
        roster = ParticipantRoster(memory_store, writer, "tester")
        alex = roster.add_person("Alex")
        roster.remove_person(alex.id)
        asyncio.run(writer.flush())

        assert roster.list() == ()
        assert memory_store.docs[("tester", PEOPLE)] == {}
        with pytest.raises(KeyError):
            roster.remove_person(alex.id)


class TestEventualWriter:
    """Tests for EventualWriter."""

    def test_queues_without_loop(self, writer):
        calls = []

        async def write():
            calls.append("written")

        writer.submit("thing", write)
        assert writer.pending == 1
        assert calls == []

        asyncio.run(writer.flush())
        assert calls == ["written"]
        assert writer.pending == 0

    def test_runs_as_task_inside_loop(self, writer):
        calls = []

        async def write():
            calls.append("written")

        async def run():
            writer.submit("thing", write)
            await writer.flush()

        asyncio.run(run())
        assert calls == ["written"]
