"""Move intents: requested reorders that have not been applied yet."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MoveColumn:
    """Move a column immediately before another one (or to the end)."""

    column_id: str
    before_column_id: str | None = None  # None = end of the board


@dataclass(frozen=True)
class MoveTask:
    """Move a task into a column, immediately before another task (or to the end).

    Covers both reordering within a column and moving across columns;
    the two only differ in whether the target is the task's current column.
    """

    task_id: str
    target_column_id: str
    before_task_id: str | None = None  # None = end of the column


Intent = MoveColumn | MoveTask
