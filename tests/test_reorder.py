"""Tests for the reorder engine."""

import pytest

from taskboard.engine import move_column, move_task, reorder
from taskboard.errors import InvalidTargetError, NotFoundError
from taskboard.models import Board, Column, MoveColumn, MoveTask, Task, validate


def make_board(**columns: tuple[str, ...]) -> Board:
    """Build a valid board from column id -> task ids (in keyword order)."""
    task_ids = [tid for ids in columns.values() for tid in ids]
    return Board(
        tasks={tid: Task(id=tid, title=f"Task {tid}") for tid in task_ids},
        columns={cid: Column(id=cid, title=cid.upper(), task_ids=ids) for cid, ids in columns.items()},
        column_order=tuple(columns),
    )


class TestMoveTask:
    """Tests for MoveTask intents."""

    def test_same_column_before_anchor(self):
        """[a,b,c] moving a before c yields [b,a,c]."""
        board = make_board(c1=("a", "b", "c"))
        result = reorder(board, MoveTask("a", "c1", "c"))
        assert result.columns["c1"].task_ids == ("b", "a", "c")

    def test_same_column_move_up(self):
        board = make_board(c1=("a", "b", "c"))
        result = reorder(board, MoveTask("c", "c1", "a"))
        assert result.columns["c1"].task_ids == ("c", "a", "b")

    def test_cross_column_to_end(self):
        """[a,b] / [] moving a to the end of c2 yields [b] / [a]."""
        board = make_board(c1=("a", "b"), c2=())
        result = reorder(board, MoveTask("a", "c2"))

        assert result.columns["c1"].task_ids == ("b",)
        assert result.columns["c2"].task_ids == ("a",)

    def test_cross_column_before_anchor(self):
        board = make_board(c1=("a", "b"), c2=("x", "y"))
        result = reorder(board, MoveTask("b", "c2", "y"))

        assert result.columns["c1"].task_ids == ("a",)
        assert result.columns["c2"].task_ids == ("x", "b", "y")

    def test_anchor_is_task_itself_appends(self):
        """beforeTaskId == taskId means no anchor: append."""
        board = make_board(c1=("a", "b", "c"))
        result = reorder(board, MoveTask("a", "c1", "a"))
        assert result.columns["c1"].task_ids == ("b", "c", "a")

    def test_anchor_not_in_target_appends(self):
        """An anchor that is not in the destination column appends."""
        board = make_board(c1=("a", "b"), c2=("x",))
        result = reorder(board, MoveTask("a", "c2", "b"))
        assert result.columns["c2"].task_ids == ("x", "a")

    def test_task_in_no_column_raises(self):
        board = make_board(c1=("a",))
        with pytest.raises(NotFoundError):
            reorder(board, MoveTask("ghost", "c1"))

    def test_unknown_target_raises(self):
        board = make_board(c1=("a",))
        with pytest.raises(InvalidTargetError):
            reorder(board, MoveTask("a", "nope"))

    def test_input_board_unchanged(self):
        """The engine returns a new board and leaves its input alone."""
        board = make_board(c1=("a", "b"), c2=())
        before = board.model_copy(deep=True)

        result = move_task(board, "a", "c2")

        assert result is not board
        assert board == before

    def test_untouched_columns_are_shared(self):
        board = make_board(c1=("a",), c2=(), c3=("z",))
        result = move_task(board, "a", "c2")

        assert result.columns["c3"] is board.columns["c3"]
        assert result.tasks is board.tasks

    def test_result_is_valid(self):
        board = make_board(c1=("a", "b", "c"), c2=("d",))
        result = reorder(board, MoveTask("d", "c1", "b"))
        assert validate(result) == []


class TestMoveColumn:
    """Tests for MoveColumn intents."""

    def test_move_before_first(self):
        """[c1,c2,c3] moving c3 before c1 yields [c3,c1,c2]."""
        board = make_board(c1=(), c2=(), c3=())
        result = reorder(board, MoveColumn("c3", "c1"))
        assert result.column_order == ("c3", "c1", "c2")

    def test_move_to_end(self):
        board = make_board(c1=(), c2=(), c3=())
        result = reorder(board, MoveColumn("c1"))
        assert result.column_order == ("c2", "c3", "c1")

    def test_anchor_is_self_returns_identical_board(self):
        board = make_board(c1=(), c2=())
        assert reorder(board, MoveColumn("c1", "c1")) is board

    def test_unknown_column_returns_identical_board(self):
        board = make_board(c1=(), c2=())
        assert reorder(board, MoveColumn("ghost", "c1")) is board

    def test_unchanged_order_returns_identical_board(self):
        """Moving c1 before c2 when it already is there changes nothing."""
        board = make_board(c1=(), c2=())
        assert move_column(board, "c1", "c2") is board

    def test_unknown_anchor_moves_to_end(self):
        board = make_board(c1=(), c2=(), c3=())
        result = move_column(board, "c1", "ghost")
        assert result.column_order == ("c2", "c3", "c1")

    def test_columns_and_tasks_shared(self):
        board = make_board(c1=("a",), c2=())
        result = move_column(board, "c2", "c1")

        assert result.columns is board.columns
        assert result.tasks is board.tasks


class TestReorderDispatch:
    """Tests for reorder() dispatch."""

    def test_unknown_intent_raises_type_error(self):
        board = make_board(c1=())
        with pytest.raises(TypeError):
            reorder(board, "move everything")  # type: ignore[arg-type]
