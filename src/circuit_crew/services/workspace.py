"""Wiring of store, writer and services for one owner."""

import random
from dataclasses import dataclass
from pathlib import Path

from ..db.store import SQLiteStore, Store
from .library import ExerciseLibrary, ParticipantRoster
from .persistence import EventualWriter
from .session_builder import SessionBuilder


@dataclass
class Workspace:
    """Everything a command or request needs for one owner's data."""

    owner_id: str
    store: Store
    writer: EventualWriter
    library: ExerciseLibrary
    roster: ParticipantRoster
    builder: SessionBuilder
    rng: random.Random

    @classmethod
    def create(
        cls,
        owner_id: str,
        store: Store | None = None,
        db_path: Path | None = None,
        rng: random.Random | None = None,
    ) -> "Workspace":
        store = store or SQLiteStore(db_path)
        writer = EventualWriter()
        rng = rng or random.Random()
        return cls(
            owner_id=owner_id,
            store=store,
            writer=writer,
            library=ExerciseLibrary(store, writer, owner_id),
            roster=ParticipantRoster(store, writer, owner_id),
            builder=SessionBuilder(store, writer, owner_id, rng=rng),
            rng=rng,
        )

    async def load(self, seed_defaults: bool = True) -> "Workspace":
        """Load library, roster, settings and history."""
        await self.library.load(seed_defaults=seed_defaults)
        await self.roster.load()
        await self.builder.load()
        return self

    async def flush(self) -> None:
        await self.writer.flush()
