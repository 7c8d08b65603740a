"""Pure board transformations: reorder engine and mutation API."""

from .mutations import (
    add_column,
    create_task,
    delete_column,
    delete_task,
    rename_column,
    update_task,
)
from .reorder import move_column, move_task, reorder

__all__ = [
    "add_column",
    "create_task",
    "delete_column",
    "delete_task",
    "move_column",
    "move_task",
    "rename_column",
    "reorder",
    "update_task",
]
