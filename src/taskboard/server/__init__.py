"""Companion HTTP service persisting the board in SQLite."""

from .app import create_app, run_server
from .db import BoardDatabase

__all__ = [
    "BoardDatabase",
    "create_app",
    "run_server",
]
