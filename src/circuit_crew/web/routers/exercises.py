"""Exercise library routes."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from ...models.exercises import Exercise
from ..deps import get_workspace

router = APIRouter(prefix="/exercises", tags=["exercises"])


class ExerciseIn(BaseModel):
    name: str = Field(min_length=1)
    rom_cm: float = Field(ge=0)
    reps_per_40s: float = Field(ge=0)
    dumbbells_used: int = Field(default=2, ge=1, le=2)
    vertical_factor: float = Field(default=0.5, ge=0, le=1)
    is_floor: bool = False


def _to_json(exercise: Exercise) -> dict:
    return {"id": exercise.id, **exercise.to_dict()}


@router.get("")
async def list_exercises(request: Request):
    """List the exercise library."""
    workspace = get_workspace(request)
    return {"exercises": [_to_json(ex) for ex in workspace.library.list()]}


@router.post("", status_code=201)
async def add_exercise(request: Request, payload: ExerciseIn):
    """Add an exercise; the write is persisted in the background."""
    workspace = get_workspace(request)
    if workspace.library.find(payload.name):
        raise HTTPException(status_code=409, detail=f"Exercise '{payload.name}' already exists")

    exercise = Exercise(**payload.model_dump())
    workspace.library.add(exercise)
    return _to_json(exercise)


@router.delete("/{exercise_id}")
async def delete_exercise(request: Request, exercise_id: str):
    """Remove an exercise from the library."""
    workspace = get_workspace(request)
    try:
        workspace.library.remove(exercise_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return {"status": "deleted"}
