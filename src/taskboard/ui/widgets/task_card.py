"""Task card widget."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Static

from ...models import Task


class TaskCard(Widget, can_focus=True):
    """A task card displayed in a column."""

    # Priority display mapping: (symbol, color)
    PRIORITY_DISPLAY: dict[str, tuple[str, str]] = {
        "low": ("●", "green"),
        "medium": ("●", "yellow"),
        "high": ("●", "dark_orange"),
        "urgent": ("▲", "red"),
    }

    def __init__(self, task_data: Task, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._task_data = task_data

    @property
    def task(self) -> Task:  # pyrefly: ignore[bad-override]
        """Get the task for this card."""
        return self._task_data

    def compose(self) -> ComposeResult:
        """Create card layout."""
        yield Static(self._truncate(self._task_data.title, 40), classes="task-title")

        with Horizontal(classes="task-meta"):
            yield Static(self._format_priority(), classes="task-priority")
            if self._task_data.division:
                yield Static(f"[dim]{self._task_data.division}[/]", classes="task-division")

        dates = self._format_dates()
        if dates:
            yield Static(dates, classes="task-dates")

        if self._task_data.attachments:
            count = len(self._task_data.attachments)
            label = "email" if count == 1 else "emails"
            yield Static(f"[dim]✉ {count} {label}[/]", classes="task-attachments")

    def _format_priority(self) -> str:
        symbol, color = self.PRIORITY_DISPLAY.get(self._task_data.priority, ("●", "white"))
        return f"[{color}]{symbol}[/] {self._task_data.priority}"

    def _format_dates(self) -> str:
        """Format start and due dates. Returns empty string if neither is set."""
        parts = []
        if self._task_data.start_date:
            parts.append(f"from {self._task_data.start_date.isoformat()}")
        if self._task_data.due_date:
            parts.append(f"due {self._task_data.due_date.isoformat()}")
        return f"[dim]{' '.join(parts)}[/]" if parts else ""

    def _truncate(self, text: str, max_len: int) -> str:
        """Truncate text with ellipsis."""
        if len(text) <= max_len:
            return text
        return text[: max_len - 1] + "…"
