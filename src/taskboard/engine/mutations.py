"""Task and column CRUD expressed as pure board transformations."""

from __future__ import annotations

import logging

from ..errors import ColumnNotEmptyError, InvalidTargetError, NoColumnsError, NotFoundError
from ..models import Board, Column, Task, TaskDraft
from ..utils import generate_column_id, generate_task_id

logger = logging.getLogger(__name__)


def create_task(
    board: Board,
    draft: TaskDraft,
    column_id: str | None = None,
) -> tuple[Board, str]:
    """
    Create a task and append it to a column.

    Args:
        board: Board to start from
        draft: Fields of the new task
        column_id: Destination column; defaults to the first column

    Returns:
        (new board, id of the created task)

    Raises:
        NoColumnsError: If the board has no columns
        InvalidTargetError: If column_id names an unknown column
    """
    if not board.column_order:
        raise NoColumnsError("Cannot create a task on a board without columns")
    if column_id is None:
        column_id = board.column_order[0]
    elif column_id not in board.columns:
        raise InvalidTargetError(f"Column not found: {column_id}")

    task_id = generate_task_id(draft.title, board.tasks)
    task = Task.from_draft(task_id, draft)

    column = board.columns[column_id]
    columns = {
        **board.columns,
        column_id: column.model_copy(update={"task_ids": (*column.task_ids, task_id)}),
    }
    tasks = {**board.tasks, task_id: task}

    logger.info("Task created: %s (column=%s)", task_id, column_id)
    return board.model_copy(update={"tasks": tasks, "columns": columns}), task_id


def update_task(board: Board, task_id: str, draft: TaskDraft) -> Board:
    """
    Replace the fields of a task.

    Column membership and position are unchanged.

    Raises:
        NotFoundError: If the task does not exist
    """
    if task_id not in board.tasks:
        raise NotFoundError(f"Task not found: {task_id}")

    tasks = {**board.tasks, task_id: Task.from_draft(task_id, draft)}
    logger.debug("Task updated: %s", task_id)
    return board.model_copy(update={"tasks": tasks})


def delete_task(board: Board, task_id: str) -> Board:
    """
    Delete a task and strip it from whichever column lists it.

    Deleting a task that does not exist returns the identical board.
    """
    column_id = board.find_column(task_id)
    if task_id not in board.tasks and column_id is None:
        return board

    tasks = {tid: task for tid, task in board.tasks.items() if tid != task_id}
    columns = dict(board.columns)
    if column_id is not None:
        column = columns[column_id]
        columns[column_id] = column.model_copy(
            update={"task_ids": tuple(tid for tid in column.task_ids if tid != task_id)}
        )

    logger.info("Task deleted: %s", task_id)
    return board.model_copy(update={"tasks": tasks, "columns": columns})


def add_column(board: Board, title: str) -> tuple[Board, str]:
    """
    Append a new, empty column to the end of the board.

    Returns:
        (new board, id of the created column)
    """
    column_id = generate_column_id(title, board.columns)
    column = Column(id=column_id, title=title)

    columns = {**board.columns, column_id: column}
    column_order = (*board.column_order, column_id)

    logger.info("Column added: %s", column_id)
    return board.model_copy(update={"columns": columns, "column_order": column_order}), column_id


def rename_column(board: Board, column_id: str, title: str) -> Board:
    """
    Change the title of a column.

    Raises:
        NotFoundError: If the column does not exist
    """
    column = board.columns.get(column_id)
    if column is None:
        raise NotFoundError(f"Column not found: {column_id}")

    renamed = Column(id=column.id, title=title, task_ids=column.task_ids)
    return board.model_copy(update={"columns": {**board.columns, column_id: renamed}})


def delete_column(board: Board, column_id: str, cascade: bool = False) -> Board:
    """
    Delete a column.

    Args:
        board: Board to start from
        column_id: Column to delete
        cascade: Also delete the tasks of a non-empty column

    Raises:
        NotFoundError: If the column does not exist
        ColumnNotEmptyError: If the column holds tasks and cascade is False
    """
    column = board.columns.get(column_id)
    if column is None:
        raise NotFoundError(f"Column not found: {column_id}")
    if column.task_ids and not cascade:
        raise ColumnNotEmptyError(
            f"Column {column_id} still holds {len(column.task_ids)} task(s)"
        )

    doomed = set(column.task_ids)
    tasks = {tid: task for tid, task in board.tasks.items() if tid not in doomed}
    columns = {cid: col for cid, col in board.columns.items() if cid != column_id}
    column_order = tuple(cid for cid in board.column_order if cid != column_id)

    logger.info("Column deleted: %s (%d task(s) removed)", column_id, len(doomed))
    return board.model_copy(
        update={"tasks": tasks, "columns": columns, "column_order": column_order}
    )
