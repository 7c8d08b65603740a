"""Task domain model."""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

# Priority constants, lowest first
PRIORITY_LOW = "low"
PRIORITY_MEDIUM = "medium"
PRIORITY_HIGH = "high"
PRIORITY_URGENT = "urgent"

PRIORITIES: tuple[str, ...] = (
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    PRIORITY_HIGH,
    PRIORITY_URGENT,
)

Priority = Literal["low", "medium", "high", "urgent"]


class Attachment(BaseModel):
    """Reference to an attached email, shown by display name."""

    model_config = {"frozen": True}

    name: str


class TaskDraft(BaseModel):
    """Editable task fields, everything except the identifier.

    Used as the payload for creating and updating tasks so callers never
    pick ids themselves.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    title: str = Field(..., min_length=1)
    division: str = ""
    priority: Priority = PRIORITY_MEDIUM
    start_date: date | None = Field(default=None, alias="startDate")
    due_date: date | None = Field(default=None, alias="dueDate")
    attachments: tuple[Attachment, ...] = Field(default=(), alias="emails")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Reject whitespace-only titles."""
        if not v.strip():
            raise ValueError("Task title cannot be blank")
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v: Any) -> Any:
        """Accept priorities in any case ("High" -> "high")."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("start_date", "due_date", mode="before")
    @classmethod
    def parse_calendar_date(cls, v: Any) -> Any:
        """Drop the time component of ISO datetimes returned by SQL drivers."""
        return _parse_date(v)

    @classmethod
    def from_task(cls, task: "Task", **changes: Any) -> "TaskDraft":
        """Build a draft from an existing task, applying field changes."""
        data = task.model_dump(exclude={"id"})
        data.update(changes)
        return cls.model_validate(data)


class Task(TaskDraft):
    """A unit of work on the board.

    Tasks do not know which column holds them; membership lives in
    ``Column.task_ids`` only.
    """

    id: str = Field(..., min_length=1)

    @classmethod
    def from_draft(cls, task_id: str, draft: TaskDraft) -> "Task":
        """Create a task with the given id from draft fields."""
        return cls.model_validate({**draft.model_dump(), "id": task_id})

    def to_json_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON shape (camelCase keys)."""
        data = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        data.pop("id")
        return {"id": self.id, **data}


def _parse_date(value: Any) -> Any:
    """Parse a calendar date from a date or datetime string, or pass through."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value
