"""Board state models."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..errors import BoardFormatError, InvariantViolationError
from .task import Task


class Column(BaseModel):
    """An ordered bucket of task ids with a title."""

    model_config = {"frozen": True, "populate_by_name": True}

    id: str = Field(..., min_length=1)
    title: str
    task_ids: tuple[str, ...] = Field(default=(), alias="taskIds")

    def to_json_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON shape."""
        return {"id": self.id, "title": self.title, "taskIds": list(self.task_ids)}


class Board(BaseModel):
    """Complete board state: task table, column table and column order.

    Boards are immutable values. Every change produces a new Board; the
    ordering of ``column_order`` and of each ``Column.task_ids`` is the only
    source of display order.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    tasks: dict[str, Task] = Field(default_factory=dict)
    columns: dict[str, Column] = Field(default_factory=dict)
    column_order: tuple[str, ...] = Field(default=(), alias="columnOrder")

    @classmethod
    def empty(cls) -> Board:
        """Create a board with no columns and no tasks."""
        return cls()

    @classmethod
    def from_columns(cls, columns: Iterable[tuple[str, str]]) -> Board:
        """Create an empty board from (column_id, title) pairs in display order."""
        table = {col_id: Column(id=col_id, title=title) for col_id, title in columns}
        return cls(columns=table, column_order=tuple(table))

    def find_column(self, task_id: str) -> str | None:
        """Find the id of the column holding a task, or None."""
        for column_id in self.column_order:
            column = self.columns.get(column_id)
            if column is not None and task_id in column.task_ids:
                return column_id
        # Columns missing from column_order still count for membership
        for column_id, column in self.columns.items():
            if task_id in column.task_ids:
                return column_id
        return None

    def ordered_columns(self) -> list[Column]:
        """Get columns in display order."""
        return [self.columns[col_id] for col_id in self.column_order if col_id in self.columns]

    def tasks_in(self, column_id: str) -> list[Task]:
        """Get the tasks of a column in display order."""
        column = self.columns.get(column_id)
        if column is None:
            return []
        return [self.tasks[task_id] for task_id in column.task_ids if task_id in self.tasks]

    # --- Serialization ---

    def to_json_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON shape."""
        return {
            "tasks": {key: task.to_json_dict() for key, task in self.tasks.items()},
            "columns": {key: column.to_json_dict() for key, column in self.columns.items()},
            "columnOrder": list(self.column_order),
        }

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_json_dict(), indent=indent)

    @classmethod
    def from_json_dict(cls, data: Any) -> Board:
        """Parse a board from its JSON shape.

        Raises:
            BoardFormatError: If the payload does not have the board shape.
                Invariants are not checked here; see ``validate``.
        """
        if not isinstance(data, dict):
            raise BoardFormatError(f"Expected a JSON object, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise BoardFormatError(f"Invalid board payload: {e}") from e

    @classmethod
    def from_json(cls, text: str | bytes) -> Board:
        """Parse a board from a JSON string."""
        try:
            data = json.loads(text)
        except ValueError as e:
            raise BoardFormatError(f"Invalid JSON: {e}") from e
        return cls.from_json_dict(data)


def validate(board: Board) -> list[str]:
    """Check a board against its structural invariants.

    Returns:
        One message per violated invariant; an empty list means the board
        is well formed.
    """
    violations: list[str] = []

    for key, task in board.tasks.items():
        if key != task.id:
            violations.append(f"task key {key!r} holds task {task.id!r}")

    owner: dict[str, str] = {}
    for key, column in board.columns.items():
        if key != column.id:
            violations.append(f"column key {key!r} holds column {column.id!r}")
        seen: set[str] = set()
        for task_id in column.task_ids:
            if task_id in seen:
                violations.append(f"column {key!r} lists task {task_id!r} more than once")
                continue
            seen.add(task_id)
            if task_id not in board.tasks:
                violations.append(f"column {key!r} lists unknown task {task_id!r}")
            if task_id in owner:
                violations.append(
                    f"task {task_id!r} appears in columns {owner[task_id]!r} and {key!r}"
                )
            else:
                owner[task_id] = key

    for task_id in board.tasks:
        if task_id not in owner:
            violations.append(f"task {task_id!r} is not in any column")

    listed: set[str] = set()
    for column_id in board.column_order:
        if column_id in listed:
            violations.append(f"column order lists {column_id!r} more than once")
            continue
        listed.add(column_id)
        if column_id not in board.columns:
            violations.append(f"column order lists unknown column {column_id!r}")

    for column_id in board.columns:
        if column_id not in listed:
            violations.append(f"column {column_id!r} is missing from column order")

    return violations


def ensure_valid(board: Board) -> Board:
    """Return the board unchanged, or raise if it violates an invariant.

    Raises:
        InvariantViolationError: With the full list of violations.
    """
    violations = validate(board)
    if violations:
        raise InvariantViolationError(violations)
    return board
