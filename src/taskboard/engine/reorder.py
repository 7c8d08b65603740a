"""Reorder engine: apply move intents to a board.

Every function here is pure. The input board is never modified; the
returned board shares every column and task the move did not touch, so a
caller can compare old and new values to roll back an optimistic update.
"""

from __future__ import annotations

import logging

from ..errors import InvalidTargetError, NotFoundError
from ..models import Board, Intent, MoveColumn, MoveTask

logger = logging.getLogger(__name__)


def reorder(board: Board, intent: Intent) -> Board:
    """Apply a move intent and return the resulting board.

    Raises:
        NotFoundError: MoveTask names a task that is in no column.
        InvalidTargetError: MoveTask targets a column that does not exist.
    """
    if isinstance(intent, MoveColumn):
        return move_column(board, intent.column_id, intent.before_column_id)
    if isinstance(intent, MoveTask):
        return move_task(board, intent.task_id, intent.target_column_id, intent.before_task_id)
    raise TypeError(f"Unknown intent: {intent!r}")


def move_column(board: Board, column_id: str, before_column_id: str | None = None) -> Board:
    """
    Move a column immediately before another column.

    Args:
        board: Board to start from
        column_id: Column to move
        before_column_id: Anchor column; None (or an unknown id) moves to the end

    Returns:
        The new board, or the identical board when the column is unknown
        or anchored on itself.
    """
    if column_id == before_column_id or column_id not in board.column_order:
        logger.debug("move_column: no-op for %s (before=%s)", column_id, before_column_id)
        return board

    order = [col_id for col_id in board.column_order if col_id != column_id]
    _insert_before(order, column_id, before_column_id)

    new_order = tuple(order)
    if new_order == board.column_order:
        return board

    logger.debug("Column moved: %s (before=%s)", column_id, before_column_id)
    return board.model_copy(update={"column_order": new_order})


def move_task(
    board: Board,
    task_id: str,
    target_column_id: str,
    before_task_id: str | None = None,
) -> Board:
    """
    Move a task into a column, immediately before another task.

    Reordering within a column and moving across columns share this path:
    the task is removed first and the insertion index is looked up in the
    post-removal sequence, so no index captured before removal is reused.

    Args:
        board: Board to start from
        task_id: Task to move
        target_column_id: Destination column (may be the current one)
        before_task_id: Anchor task; None, the task itself, or a task not in
            the destination column appends to the end

    Raises:
        NotFoundError: If the task is in no column
        InvalidTargetError: If the destination column does not exist
    """
    source_column_id = board.find_column(task_id)
    if source_column_id is None:
        raise NotFoundError(f"Task not in any column: {task_id}")
    if target_column_id not in board.columns:
        raise InvalidTargetError(f"Column not found: {target_column_id}")

    columns = dict(board.columns)

    source = columns[source_column_id]
    remaining = [tid for tid in source.task_ids if tid != task_id]
    columns[source_column_id] = source.model_copy(update={"task_ids": tuple(remaining)})

    target = columns[target_column_id]
    target_ids = list(target.task_ids)
    anchor = None if before_task_id == task_id else before_task_id
    _insert_before(target_ids, task_id, anchor)
    columns[target_column_id] = target.model_copy(update={"task_ids": tuple(target_ids)})

    logger.debug(
        "Task moved: %s (%s -> %s, before=%s)",
        task_id,
        source_column_id,
        target_column_id,
        anchor,
    )
    return board.model_copy(update={"columns": columns})


def _insert_before(items: list[str], item: str, anchor: str | None) -> None:
    """Insert item before anchor, or append when anchor is None or absent."""
    if anchor is not None and anchor in items:
        items.insert(items.index(anchor), item)
    else:
        items.append(item)
