"""Participant routes."""

from fastapi import APIRouter, Request

from ..deps import get_workspace

router = APIRouter(prefix="/people", tags=["people"])


@router.get("")
async def list_people(request: Request):
    """List the participants, oldest first."""
    workspace = get_workspace(request)
    return {"people": [{"id": p.id, **p.to_dict()} for p in workspace.roster.list()]}
