"""Unit tests for task and board models."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from taskboard.errors import BoardFormatError
from taskboard.models import Attachment, Board, Column, Task, TaskDraft, validate
from taskboard.models.task import PRIORITY_HIGH, PRIORITY_MEDIUM, _parse_date


def make_board() -> Board:
    """Two columns, three tasks, one attachment."""
    return Board(
        tasks={
            "a": Task(id="a", title="Write report", division="Ops", priority="high"),
            "b": Task(
                id="b",
                title="Call vendor",
                due_date=date(2024, 2, 1),
                attachments=(Attachment(name="quote.eml"),),
            ),
            "c": Task(id="c", title="Archive files", priority="low"),
        },
        columns={
            "todo": Column(id="todo", title="To Do", task_ids=("a", "b")),
            "done": Column(id="done", title="Done", task_ids=("c",)),
        },
        column_order=("todo", "done"),
    )


class TestTask:
    """Tests for Task parsing and defaults."""

    def test_defaults(self):
        """Division is empty, priority medium, no dates or attachments."""
        task = Task(id="t1", title="Something")

        assert task.division == ""
        assert task.priority == PRIORITY_MEDIUM
        assert task.start_date is None
        assert task.due_date is None
        assert task.attachments == ()

    def test_priority_is_case_insensitive(self):
        """Priorities stored as 'High' parse to 'high'."""
        task = Task.model_validate({"id": "t1", "title": "x", "priority": "High"})
        assert task.priority == PRIORITY_HIGH

    def test_unknown_priority_rejected(self):
        """Priorities outside the fixed set are rejected."""
        with pytest.raises(ValidationError):
            Task(id="t1", title="x", priority="critical")

    def test_blank_title_rejected(self):
        """Whitespace-only titles are rejected."""
        with pytest.raises(ValidationError):
            TaskDraft(title="   ")

    def test_empty_id_rejected(self):
        """Task ids cannot be empty."""
        with pytest.raises(ValidationError):
            Task(id="", title="x")

    def test_camel_case_aliases(self):
        """Wire keys startDate, dueDate and emails populate the fields."""
        task = Task.model_validate(
            {
                "id": "t1",
                "title": "x",
                "startDate": "2024-01-01",
                "dueDate": "2024-01-05",
                "emails": [{"name": "a.eml"}, {"name": "b.eml"}],
            }
        )

        assert task.start_date == date(2024, 1, 1)
        assert task.due_date == date(2024, 1, 5)
        assert [a.name for a in task.attachments] == ["a.eml", "b.eml"]

    def test_iso_datetime_truncated_to_date(self):
        """Timestamps from SQL drivers keep only the calendar date."""
        task = Task.model_validate(
            {"id": "t1", "title": "x", "dueDate": "2024-01-05T00:00:00.000Z"}
        )
        assert task.due_date == date(2024, 1, 5)

    def test_empty_date_string_is_none(self):
        """An empty date string means no date."""
        task = Task.model_validate({"id": "t1", "title": "x", "startDate": ""})
        assert task.start_date is None

    def test_tasks_are_immutable(self):
        """Assigning to a field raises."""
        task = Task(id="t1", title="x")
        with pytest.raises(ValidationError):
            task.title = "y"

    def test_to_json_dict_uses_wire_keys(self):
        """Serialized tasks use camelCase keys and omit unset dates."""
        task = Task(id="t1", title="x", due_date=date(2024, 3, 1))
        data = task.to_json_dict()

        assert list(data)[0] == "id"
        assert data["dueDate"] == "2024-03-01"
        assert "startDate" not in data
        assert data["emails"] == []

    def test_from_task_applies_changes(self):
        """from_task copies fields and overrides the given ones."""
        task = Task(id="t1", title="Old", division="Ops", priority="low")
        draft = TaskDraft.from_task(task, title="New")

        assert draft.title == "New"
        assert draft.division == "Ops"
        assert draft.priority == "low"


class TestParseDate:
    """Tests for _parse_date helper."""

    def test_none_and_empty(self):
        assert _parse_date(None) is None
        assert _parse_date("") is None

    def test_datetime_object(self):
        assert _parse_date(datetime(2024, 1, 2, 15, 30)) == date(2024, 1, 2)

    def test_plain_date_passes_through(self):
        assert _parse_date("2024-01-02") == "2024-01-02"


class TestBoard:
    """Tests for Board queries."""

    def test_find_column(self):
        board = make_board()
        assert board.find_column("b") == "todo"
        assert board.find_column("c") == "done"
        assert board.find_column("missing") is None

    def test_ordered_columns_follow_column_order(self):
        board = make_board().model_copy(update={"column_order": ("done", "todo")})
        assert [c.id for c in board.ordered_columns()] == ["done", "todo"]

    def test_tasks_in(self):
        board = make_board()
        assert [t.id for t in board.tasks_in("todo")] == ["a", "b"]
        assert board.tasks_in("nope") == []

    def test_from_columns(self):
        """from_columns builds empty columns in the given order."""
        board = Board.from_columns([("x", "X"), ("y", "Y")])

        assert board.column_order == ("x", "y")
        assert board.columns["y"].task_ids == ()
        assert board.tasks == {}

    def test_empty(self):
        board = Board.empty()
        assert board.column_order == ()
        assert board.columns == {}


class TestBoardSerialization:
    """Tests for the persisted JSON shape."""

    def test_round_trip(self):
        """parse(serialize(b)) == b."""
        board = make_board()
        assert Board.from_json(board.to_json()) == board

    def test_round_trip_preserves_order(self):
        """Task and column order survive serialization."""
        board = make_board().model_copy(update={"column_order": ("done", "todo")})
        parsed = Board.from_json(board.to_json(indent=2))

        assert parsed.column_order == ("done", "todo")
        assert parsed.columns["todo"].task_ids == ("a", "b")

    def test_json_dict_shape(self):
        data = make_board().to_json_dict()

        assert set(data) == {"tasks", "columns", "columnOrder"}
        assert data["columns"]["todo"] == {"id": "todo", "title": "To Do", "taskIds": ["a", "b"]}
        assert data["tasks"]["b"]["emails"] == [{"name": "quote.eml"}]

    def test_invalid_json_raises_format_error(self):
        with pytest.raises(BoardFormatError):
            Board.from_json("{not json")

    def test_non_object_raises_format_error(self):
        with pytest.raises(BoardFormatError):
            Board.from_json_dict([1, 2, 3])

    def test_empty_column_title_loads(self):
        """A stored board with an untitled column is still a board."""
        board = Board.from_json_dict(
            {
                "tasks": {},
                "columns": {"c": {"id": "c", "title": "", "taskIds": []}},
                "columnOrder": ["c"],
            }
        )

        assert board.columns["c"].title == ""
        assert validate(board) == []

    def test_wrong_shape_raises_format_error(self):
        with pytest.raises(BoardFormatError):
            Board.from_json_dict({"tasks": {"a": {"title": "no id"}}})
