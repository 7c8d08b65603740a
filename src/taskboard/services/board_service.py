"""Service for board state management."""

from __future__ import annotations

import logging
from typing import Any

from ..engine import (
    add_column,
    create_task,
    delete_column,
    delete_task,
    rename_column,
    update_task,
)
from ..errors import NotFoundError
from ..models import PRIORITIES, Board, MoveColumn, MoveTask, Task, TaskDraft
from ..models.taskboard_config import BoardConfig
from ..sync import SyncController

logger = logging.getLogger(__name__)


class BoardService:
    """Keyboard-level board actions on top of the sync controller.

    Each action computes a new board with the engine and commits it, so
    every change is persisted. Engine errors propagate to the caller.
    """

    def __init__(
        self,
        controller: SyncController,
        board_config: BoardConfig | None = None,
    ) -> None:
        self.controller = controller
        self._board_config = board_config or BoardConfig.default()

    @property
    def board(self) -> Board:
        """The current board."""
        return self.controller.board

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by ID."""
        return self.board.tasks.get(task_id)

    # --- Tasks ---

    def create_task(
        self,
        title: str,
        column_id: str | None = None,
        priority: str | None = None,
        division: str | None = None,
    ) -> str:
        """Create a task with config defaults and return its id."""
        draft = TaskDraft(
            title=title,
            priority=priority or self._board_config.default_priority,
            division=division if division is not None else self._board_config.default_division,
        )
        board, task_id = create_task(self.board, draft, column_id)
        self.controller.commit(board)
        return task_id

    def update_task(self, task_id: str, **changes: Any) -> Task:
        """Change fields of a task (title, priority, division, dates, attachments)."""
        task = self.get_task(task_id)
        if task is None:
            raise NotFoundError(f"Task not found: {task_id}")
        draft = TaskDraft.from_task(task, **changes)
        board = self.controller.commit(update_task(self.board, task_id, draft))
        return board.tasks[task_id]

    def cycle_priority(self, task_id: str) -> Task:
        """Raise a task's priority by one step, wrapping from urgent to low."""
        task = self.get_task(task_id)
        if task is None:
            raise NotFoundError(f"Task not found: {task_id}")
        next_idx = (PRIORITIES.index(task.priority) + 1) % len(PRIORITIES)
        return self.update_task(task_id, priority=PRIORITIES[next_idx])

    def delete_task(self, task_id: str) -> None:
        """Delete a task by ID."""
        logger.info("Deleting task: %s", task_id)
        self.controller.commit(delete_task(self.board, task_id))

    # --- Columns ---

    def add_column(self, title: str) -> str:
        """Append a column and return its id."""
        board, column_id = add_column(self.board, title)
        self.controller.commit(board)
        return column_id

    def rename_column(self, column_id: str, title: str) -> None:
        """Change the title of a column."""
        self.controller.commit(rename_column(self.board, column_id, title))

    def delete_column(self, column_id: str, cascade: bool = False) -> None:
        """Delete a column (empty unless cascade)."""
        self.controller.commit(delete_column(self.board, column_id, cascade))

    # --- Moves ---

    def move_task(
        self, task_id: str, column_id: str, before_task_id: str | None = None
    ) -> None:
        """Move a task into a column before another task (or to the end)."""
        self.controller.apply(MoveTask(task_id, column_id, before_task_id))

    def move_task_left(self, task_id: str) -> str | None:
        """Move task to the end of the previous column.

        Returns:
            The new column id, or None if already in the leftmost column.
        """
        return self._move_task_sideways(task_id, -1)

    def move_task_right(self, task_id: str) -> str | None:
        """Move task to the end of the next column.

        Returns:
            The new column id, or None if already in the rightmost column.
        """
        return self._move_task_sideways(task_id, 1)

    def reorder_task(self, task_id: str, delta: int) -> bool:
        """
        Reorder task within its column.

        Args:
            task_id: Task ID to reorder
            delta: -1 to move up, 1 to move down

        Returns:
            True if task was moved
        """
        column_id = self.board.find_column(task_id)
        if column_id is None:
            logger.debug("reorder_task: task not in any column: %s", task_id)
            return False

        task_ids = self.board.columns[column_id].task_ids
        current_idx = task_ids.index(task_id)
        new_idx = current_idx + delta

        # Check bounds
        if new_idx < 0 or new_idx >= len(task_ids):
            logger.debug("reorder_task: at boundary, cannot move: %s", task_id)
            return False

        anchor = _anchor_for(task_ids, current_idx, new_idx)
        self.controller.apply(MoveTask(task_id, column_id, anchor))
        direction = "up" if delta < 0 else "down"
        logger.debug(
            "Task reordered %s: %s (pos %d -> %d)", direction, task_id, current_idx, new_idx
        )
        return True

    def move_column(self, column_id: str, delta: int) -> bool:
        """
        Move a column left (-1) or right (1) on the board.

        Returns:
            True if the column was moved
        """
        order = self.board.column_order
        if column_id not in order:
            return False

        current_idx = order.index(column_id)
        new_idx = current_idx + delta
        if new_idx < 0 or new_idx >= len(order):
            return False

        self.controller.apply(MoveColumn(column_id, _anchor_for(order, current_idx, new_idx)))
        logger.debug("Column moved: %s (pos %d -> %d)", column_id, current_idx, new_idx)
        return True

    def _move_task_sideways(self, task_id: str, delta: int) -> str | None:
        column_id = self.board.find_column(task_id)
        if column_id is None:
            raise NotFoundError(f"Task not in any column: {task_id}")

        order = self.board.column_order
        new_idx = order.index(column_id) + delta
        if new_idx < 0 or new_idx >= len(order):
            return None

        target = order[new_idx]
        self.controller.apply(MoveTask(task_id, target))
        logger.info("Task moved: %s (%s -> %s)", task_id, column_id, target)
        return target


def _anchor_for(items: tuple[str, ...], current_idx: int, new_idx: int) -> str | None:
    """Anchor id that lands an item at new_idx once it is removed from current_idx.

    Moving up anchors on the item currently at new_idx; moving down anchors
    on the item after new_idx (None = end).
    """
    if new_idx < current_idx:
        return items[new_idx]
    after = new_idx + 1
    return items[after] if after < len(items) else None
