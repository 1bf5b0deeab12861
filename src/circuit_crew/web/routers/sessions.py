"""Session composition and history routes."""

import random

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from ...models.session import TARGET_EXERCISE_COUNT
from ...services.composer import build_smart_session
from ..deps import get_workspace

router = APIRouter(prefix="/sessions", tags=["sessions"])


class ComposeRequest(BaseModel):
    target_total: int = Field(default=TARGET_EXERCISE_COUNT, ge=1, le=100)
    participant_ids: list[str] = Field(default_factory=list)
    seed: int | None = None
    exercise_duration_sec: int | None = None
    rest_duration_sec: int | None = None
    extreme_duration_sec: int | None = None
    extreme_count: int | None = None


@router.post("/compose")
async def compose_session(request: Request, payload: ComposeRequest):
    """Compose a smart session and return the draft without running it."""
    workspace = get_workspace(request)

    people = []
    for person_id in payload.participant_ids:
        person = workspace.roster.find(person_id)
        if person is None:
            raise HTTPException(status_code=404, detail=f"Person {person_id} not found")
        people.append(person)

    overrides = payload.model_dump(
        include={"exercise_duration_sec", "rest_duration_sec", "extreme_duration_sec", "extreme_count"},
        exclude_none=True,
    )
    try:
        settings = workspace.builder.settings.with_updates(**overrides)
    except ValueError as e:
        return {"error": str(e)}

    rng = random.Random(payload.seed)
    slots = build_smart_session(workspace.library.list(), payload.target_total, rng)
    if not slots:
        return {"error": "The exercise library is empty"}

    session = workspace.builder.create_session(
        [p.id for p in people],
        [p.display_name for p in people],
        [slot.exercise for slot in slots],
        settings,
        rng=rng,
    )
    return session.to_dict()


@router.get("")
async def list_sessions(request: Request, completed_only: bool = True):
    """Session history, newest first."""
    workspace = get_workspace(request)
    sessions = [s for s in workspace.builder.history if s.completed or not completed_only]
    sessions.sort(key=lambda s: s.date, reverse=True)
    return {"sessions": [s.to_dict() for s in sessions]}
