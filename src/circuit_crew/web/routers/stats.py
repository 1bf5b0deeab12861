"""Leaderboard routes."""

from fastapi import APIRouter, Request

from ...services.streaks import build_leaderboard, summarize_history
from ..deps import get_workspace

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("")
async def get_stats(request: Request):
    """Streak leaderboard plus totals over all completed sessions."""
    workspace = get_workspace(request)
    sessions = workspace.builder.history
    return {
        "leaderboard": [s.to_dict() for s in build_leaderboard(workspace.roster.list(), sessions)],
        "totals": summarize_history(sessions).to_dict(),
    }
