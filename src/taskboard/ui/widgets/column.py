"""Kanban column widget."""

from textual.actions import SkipAction
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Static

from ...models import Column, Task
from .task_card import TaskCard


class TaskListScroll(VerticalScroll):
    """Scroll container for task lists.

    Raises SkipAction for navigation keys so they bubble up to the App
    for task navigation instead of being handled as scroll actions.
    """

    def action_scroll_up(self) -> None:
        raise SkipAction()

    def action_scroll_down(self) -> None:
        raise SkipAction()

    def action_scroll_home(self) -> None:
        raise SkipAction()

    def action_scroll_end(self) -> None:
        raise SkipAction()

    def action_page_up(self) -> None:
        raise SkipAction()

    def action_page_down(self) -> None:
        raise SkipAction()


class EmptyColumnMessage(Static):
    """Displayed when a column has no tasks."""

    pass


class KanbanColumn(Widget):
    """A single column in the kanban board.

    Columns are rebuilt from the board on every change, so the task list is
    fixed at construction.
    """

    def __init__(self, column: Column, tasks: list[Task], *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.column = column
        self._tasks = tasks

    def compose(self) -> ComposeResult:
        """Create column layout."""
        yield Static(self._header_text, classes="column-header")
        with TaskListScroll(classes="column-content"):
            if not self._tasks:
                yield EmptyColumnMessage("No tasks")
            for task in self._tasks:
                yield TaskCard(task)

    @property
    def _header_text(self) -> str:
        """Header text with styled task count."""
        return f"{self.column.title} [dim]({len(self._tasks)})[/]"

    @property
    def tasks(self) -> list[Task]:
        """Get the tasks in this column."""
        return self._tasks

    @property
    def task_count(self) -> int:
        """Get the number of tasks in this column."""
        return len(self._tasks)

    def set_current(self, current: bool) -> None:
        """Highlight this column as the one under the cursor."""
        self.set_class(current, "current")

    def focus_task(self, index: int) -> bool:
        """
        Focus the task at the given index.

        Returns:
            True if a task was focused, False otherwise
        """
        cards = list(self.query(TaskCard))
        if index < 0 or index >= len(cards):
            return False

        card = cards[index]
        card.focus()
        card.scroll_visible()
        return True

    def get_task(self, index: int) -> Task | None:
        """Get task at index."""
        if 0 <= index < len(self._tasks):
            return self._tasks[index]
        return None
