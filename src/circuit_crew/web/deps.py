"""Request helpers shared by the routers."""

from fastapi import Request

from ..services.workspace import Workspace


def get_workspace(request: Request) -> Workspace:
    """Get the loaded workspace from app state."""
    return request.app.state.workspace
