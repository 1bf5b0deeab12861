"""Pytest configuration and fixtures."""

import random
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from circuit_crew.models.exercises import Exercise
from circuit_crew.models.session import SessionSettings
from circuit_crew.services.cues import CueDispatcher, CueRecorder
from circuit_crew.services.persistence import EventualWriter
from circuit_crew.services.scheduler import VirtualScheduler
from circuit_crew.services.session_builder import SessionBuilder


class MemoryStore:
    """In-memory document store with the same contract as SQLiteStore."""

    def __init__(self):
        self.docs: dict[tuple[str, str], dict[str, dict]] = {}
        self.saves = 0

    async def fetch_all(self, owner_id, collection, sort_key=None):
        docs = [{**data, "id": doc_id} for doc_id, data in self.docs.get((owner_id, collection), {}).items()]
        if sort_key:
            docs.sort(key=lambda d: d.get(sort_key))
        return docs

    async def get(self, owner_id, collection, doc_id):
        data = self.docs.get((owner_id, collection), {}).get(doc_id)
        return None if data is None else {**data, "id": doc_id}

    async def save(self, owner_id, collection, doc_id, data):
        self.saves += 1
        self.docs.setdefault((owner_id, collection), {})[doc_id] = {k: v for k, v in data.items() if k != "id"}

    async def remove(self, owner_id, collection, doc_id):
        self.docs.get((owner_id, collection), {}).pop(doc_id, None)


class FailingStore(MemoryStore):
    """Store whose writes always fail."""

    async def save(self, owner_id, collection, doc_id, data):
        raise ConnectionError("store unavailable")


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def sample_library():
    """Nine standing and three floor exercises with stable ids."""
    standing = [
        Exercise(name=f"Standing {i}", rom_cm=40, reps_per_40s=12, id=f"s{i}")
        for i in range(9)
    ]
    floor = [
        Exercise(name=f"Floor {i}", rom_cm=30, reps_per_40s=15, is_floor=True, id=f"f{i}")
        for i in range(3)
    ]
    return standing + floor


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def builder(memory_store, rng):
    """Session builder over an in-memory store with a fixed clock."""
    return SessionBuilder(
        memory_store,
        EventualWriter(),
        "tester",
        rng=rng,
        clock=lambda: datetime(2024, 3, 1, 7, 30),
    )


@pytest.fixture
def virtual_scheduler():
    return VirtualScheduler()


@pytest.fixture
def recorder():
    return CueRecorder()


@pytest.fixture
def cues(recorder):
    """Dispatcher whose three collaborators all record into ``recorder``."""
    return CueDispatcher(recorder, recorder, recorder)


@pytest.fixture
def short_settings():
    """Short phases to keep engine scenarios readable."""
    return SessionSettings(
        exercise_duration_sec=10,
        rest_duration_sec=5,
        extreme_duration_sec=20,
        extreme_count=0,
    )
