"""Command line interface for the race analytics engine."""

from .commands import app

__all__ = ["app"]
