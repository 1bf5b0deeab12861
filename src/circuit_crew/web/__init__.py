"""JSON API for circuit-crew."""

from .app import create_app

__all__ = ["create_app"]
