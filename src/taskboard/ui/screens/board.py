"""Main kanban board screen."""

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header

from ...models import Board, Task
from ..widgets.column import KanbanColumn


class BoardScreen(Screen):
    """Main kanban board screen with navigation.

    Columns are rebuilt from the current board on every refresh; the cursor
    is kept as (column index, task index) and re-applied afterwards.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._current_column = 0
        self._current_task = 0
        # Pending focus state for deferred focus after refresh
        self._pending_focus_task_id: str | None = None
        self._pending_focus_column_id: str | None = None

    @property
    def board(self) -> Board:
        """Get the current board from the app."""
        return self.app.board_service.board  # pyrefly: ignore[missing-attribute]

    @property
    def column_ids(self) -> list[str]:
        """Get list of column IDs in board order."""
        return list(self.board.column_order)

    @property
    def column_count(self) -> int:
        return len(self.board.column_order)

    def compose(self) -> ComposeResult:
        """Create the board layout; columns are mounted by refresh_board."""
        yield Header()
        with Container(id="board-container"):
            yield Horizontal(id="columns")
        yield Footer()

    def on_mount(self) -> None:
        """Build columns when screen mounts."""
        self.refresh_board()

    def refresh_board(
        self,
        focus_task_id: str | None = None,
        focus_column_id: str | None = None,
    ) -> None:
        """
        Refresh the board display.

        Args:
            focus_task_id: If provided, focus this task after refresh.
            focus_column_id: If provided (and no task is), move the cursor
                to this column.
                If neither is given, the current position is preserved.
        """
        self._pending_focus_task_id = focus_task_id
        self._pending_focus_column_id = focus_column_id
        self.call_after_refresh(self._rebuild_columns)

    async def _rebuild_columns(self) -> None:
        """Replace the column widgets with ones built from the current board."""
        container = self.query_one("#columns", Horizontal)
        await container.remove_children()

        board = self.board
        await container.mount_all(
            [KanbanColumn(column, board.tasks_in(column.id)) for column in board.ordered_columns()]
        )
        self.call_after_refresh(self._apply_pending_focus)

    def _apply_pending_focus(self) -> None:
        """Apply pending focus after the rebuild completes."""
        task_id = self._pending_focus_task_id
        column_id = self._pending_focus_column_id
        self._pending_focus_task_id = None
        self._pending_focus_column_id = None

        if task_id is not None:
            position = self._find_task_position(task_id)
            if position:
                self._current_column, self._current_task = position
                self._update_focus()
                return

        if column_id is not None and column_id in self.board.column_order:
            self._current_column = self.column_ids.index(column_id)
            self._current_task = 0

        # Clamp previous position to the valid range
        self._current_column = max(0, min(self._current_column, self.column_count - 1))
        count = self._task_count(self._current_column)
        self._current_task = min(self._current_task, count - 1) if count else 0
        self._update_focus()

    def _find_task_position(self, task_id: str) -> tuple[int, int] | None:
        """
        Find a task's position on the board.

        Returns:
            (column_index, task_index) or None if not found
        """
        board = self.board
        column_id = board.find_column(task_id)
        if column_id is None or column_id not in board.column_order:
            return None
        return (
            board.column_order.index(column_id),
            board.columns[column_id].task_ids.index(task_id),
        )

    def _task_count(self, column_index: int) -> int:
        if column_index < 0 or column_index >= self.column_count:
            return 0
        return len(self.board.columns[self.column_ids[column_index]].task_ids)

    def navigate_column(self, delta: int) -> None:
        """Navigate between columns."""
        if self.column_count == 0:
            return
        new_column = max(0, min(self._current_column + delta, self.column_count - 1))

        if new_column != self._current_column:
            self._current_column = new_column
            count = self._task_count(new_column)
            self._current_task = min(self._current_task, count - 1) if count else 0
            self._update_focus()

    def navigate_task(self, delta: int) -> None:
        """Navigate between tasks in current column."""
        count = self._task_count(self._current_column)
        if count == 0:
            return

        new_task = max(0, min(self._current_task + delta, count - 1))
        if new_task != self._current_task:
            self._current_task = new_task
            self._update_focus()

    def _get_columns(self) -> list[KanbanColumn]:
        return list(self.query(KanbanColumn))

    def _update_focus(self) -> None:
        """Highlight the current column and focus the current task."""
        columns = self._get_columns()
        for index, column in enumerate(columns):
            column.set_current(index == self._current_column)
        if 0 <= self._current_column < len(columns):
            columns[self._current_column].focus_task(self._current_task)

    def get_current_task(self) -> Task | None:
        """Get the task under the cursor."""
        column_id = self.current_column_id
        if column_id is None:
            return None
        task_ids = self.board.columns[column_id].task_ids
        if 0 <= self._current_task < len(task_ids):
            return self.board.tasks.get(task_ids[self._current_task])
        return None

    @property
    def current_column_id(self) -> str | None:
        """Get the id of the column under the cursor (None on an empty board)."""
        if 0 <= self._current_column < self.column_count:
            return self.column_ids[self._current_column]
        return None
