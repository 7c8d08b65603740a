"""Utility functions."""

from .ids import generate_column_id, generate_task_id, slugify, slugify_column_id

__all__ = [
    "generate_column_id",
    "generate_task_id",
    "slugify",
    "slugify_column_id",
]
