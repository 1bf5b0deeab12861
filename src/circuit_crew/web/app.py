"""FastAPI application for the circuit-crew JSON API."""

import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from loguru import logger

from ..db.engine import get_db_path, init_db
from ..services.workspace import Workspace
from .routers import exercises, people, sessions, stats

DEFAULT_OWNER = "default"


def create_app(db_path: Path | None = None, owner_id: str | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Without arguments the database location and owner come from
    ``CIRCUIT_CREW_DATA_DIR`` and ``CIRCUIT_CREW_OWNER``.
    """
    if db_path is None:
        data_dir = os.environ.get("CIRCUIT_CREW_DATA_DIR")
        db_path = get_db_path(Path(data_dir) if data_dir else None)
    owner_id = owner_id or os.environ.get("CIRCUIT_CREW_OWNER", DEFAULT_OWNER)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize the database and load the owner's workspace."""
        await init_db(db_path)
        workspace = Workspace.create(owner_id, db_path=db_path)
        app.state.workspace = await workspace.load(seed_defaults=True)
        logger.info(f"API serving owner '{owner_id}' from {db_path}")
        yield
        await workspace.flush()

    app = FastAPI(
        title="circuit-crew",
        description="Group dumbbell circuit sessions with streaks",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(exercises.router)
    app.include_router(people.router)
    app.include_router(sessions.router)
    app.include_router(stats.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": "0.1.0"}

    return app
