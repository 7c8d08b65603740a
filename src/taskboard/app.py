"""taskboard TUI Application."""

import logging

from textual.app import App
from textual.binding import Binding

from .config import Settings
from .errors import BoardError
from .repositories import HttpBoardRepository, build_repositories
from .services import BoardService, ConfigService
from .sync import SyncController, SyncState
from .ui.screens.board import BoardScreen
from .ui.widgets import ConfirmModal, TextPromptModal

logger = logging.getLogger(__name__)


class TaskboardApp(App):
    """taskboard - single-board task tracker."""

    TITLE = "taskboard"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        # Core bindings
        Binding("q", "quit", "Quit", show=True),
        # Navigation - vim style
        Binding("h", "nav_left", "← Column", show=False),
        Binding("j", "nav_down", "↓ Task", show=False),
        Binding("k", "nav_up", "↑ Task", show=False),
        Binding("l", "nav_right", "→ Column", show=False),
        # Navigation - arrow keys
        Binding("left", "nav_left", "← Column", show=False),
        Binding("down", "nav_down", "↓ Task", show=False),
        Binding("up", "nav_up", "↑ Task", show=False),
        Binding("right", "nav_right", "→ Column", show=False),
        # Task actions
        Binding("n", "new_task", "New", show=True),
        Binding("e", "edit_task", "Rename", show=True),
        Binding("p", "cycle_priority", "Priority", show=True),
        Binding("d", "delete_task", "Delete", show=True),
        Binding("H", "move_task_left", "Move ←", show=False),
        Binding("L", "move_task_right", "Move →", show=False),
        Binding("shift+left", "move_task_left", "Move ←", show=False),
        Binding("shift+right", "move_task_right", "Move →", show=False),
        Binding("K", "move_task_up", "Move ↑", show=False),
        Binding("J", "move_task_down", "Move ↓", show=False),
        Binding("shift+up", "move_task_up", "Move ↑", show=False),
        Binding("shift+down", "move_task_down", "Move ↓", show=False),
        # Column actions
        Binding("c", "add_column", "Column", show=True),
        Binding("r", "rename_column", "Rename column", show=False),
        Binding("less_than_sign", "move_column_left", "Column ←", show=False),
        Binding("greater_than_sign", "move_column_right", "Column →", show=False),
        Binding("X", "delete_column", "Delete column", show=False),
    ]

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self._init_services()

    def _init_services(self) -> None:
        """Initialize repository, sync controller and services."""
        self.config_service = ConfigService(self.settings.project_root)

        config = self.config_service.get_config()
        store = self.settings.resolve_store(config.store)
        self.repository, cache = build_repositories(store, self.config_service.project_root)
        self.controller = SyncController(self.repository, config.board.to_board(), cache)
        self.controller.add_listener(self._on_sync_change)
        self.board_service = BoardService(self.controller, config.board)

    async def on_mount(self) -> None:
        """Load the board, then show it."""
        if self.config_service.has_config_error:
            self.notify(self.config_service.config_error or "", severity="warning", timeout=8)
        await self.controller.start()
        self.push_screen(BoardScreen())

    def _on_sync_change(self, controller: SyncController) -> None:
        """Show sync state in the subtitle."""
        if controller.state is SyncState.SAVING:
            status = f"saving ({controller.pending_saves})"
        else:
            status = controller.state.value
        if controller.state is SyncState.READY and controller.has_unsaved_changes:
            status += " · not saved"
        self.sub_title = status

    async def action_quit(self) -> None:
        """Wait for in-flight saves, then exit."""
        if self.controller.pending_saves:
            self.notify("Saving…", timeout=2)
        await self.controller.drain()
        if isinstance(self.repository, HttpBoardRepository):
            await self.repository.aclose()
        self.exit()

    def _board_screen(self) -> BoardScreen | None:
        screen = self.screen
        return screen if isinstance(screen, BoardScreen) else None

    def _report(self, error: BoardError) -> None:
        logger.warning("Board action failed: %s", error)
        self.notify(str(error), severity="error")

    # Navigation actions
    def action_nav_left(self) -> None:
        """Navigate to previous column."""
        screen = self._board_screen()
        if screen:
            screen.navigate_column(-1)

    def action_nav_right(self) -> None:
        """Navigate to next column."""
        screen = self._board_screen()
        if screen:
            screen.navigate_column(1)

    def action_nav_up(self) -> None:
        """Navigate to previous task."""
        screen = self._board_screen()
        if screen:
            screen.navigate_task(-1)

    def action_nav_down(self) -> None:
        """Navigate to next task."""
        screen = self._board_screen()
        if screen:
            screen.navigate_task(1)

    # Task actions
    def action_new_task(self) -> None:
        """Prompt for a title and create a task in the current column."""
        screen = self._board_screen()
        if screen is None:
            return
        if screen.current_column_id is None:
            self.notify("Add a column first (c)", severity="warning")
            return
        self.push_screen(TextPromptModal("New task"), callback=self._handle_new_task)

    def _handle_new_task(self, title: str | None) -> None:
        screen = self._board_screen()
        if not title or screen is None:
            return
        try:
            task_id = self.board_service.create_task(title, screen.current_column_id)
        except BoardError as e:
            self._report(e)
            return
        screen.refresh_board(focus_task_id=task_id)
        self.notify("Task created", timeout=2)

    def action_edit_task(self) -> None:
        """Rename the current task."""
        screen = self._board_screen()
        task = screen.get_current_task() if screen else None
        if task is None:
            return
        self.push_screen(
            TextPromptModal("Task title", task.title),
            callback=lambda title: self._handle_rename_task(task.id, title),
        )

    def _handle_rename_task(self, task_id: str, title: str | None) -> None:
        screen = self._board_screen()
        if not title or screen is None:
            return
        try:
            self.board_service.update_task(task_id, title=title)
        except BoardError as e:
            self._report(e)
            return
        screen.refresh_board(focus_task_id=task_id)

    def action_cycle_priority(self) -> None:
        """Raise the current task's priority, wrapping around."""
        screen = self._board_screen()
        task = screen.get_current_task() if screen else None
        if screen is None or task is None:
            return
        try:
            updated = self.board_service.cycle_priority(task.id)
        except BoardError as e:
            self._report(e)
            return
        screen.refresh_board(focus_task_id=task.id)
        self.notify(f"Priority: {updated.priority}", timeout=2)

    def action_delete_task(self) -> None:
        """Delete the current task (with confirmation)."""
        screen = self._board_screen()
        task = screen.get_current_task() if screen else None
        if task is None:
            return
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            ConfirmModal(f"Delete '{task.title}'?"),
            callback=lambda confirmed: self._handle_delete_confirm(task.id, confirmed),
        )

    def _handle_delete_confirm(self, task_id: str, confirmed: bool) -> None:
        """Handle delete confirmation result."""
        screen = self._board_screen()
        if not confirmed or screen is None:
            return
        self.board_service.delete_task(task_id)
        screen.refresh_board()
        self.notify("Task deleted", timeout=2)

    def action_move_task_left(self) -> None:
        """Move current task to previous column."""
        self._move_task_sideways(-1)

    def action_move_task_right(self) -> None:
        """Move current task to next column."""
        self._move_task_sideways(1)

    def _move_task_sideways(self, delta: int) -> None:
        screen = self._board_screen()
        task = screen.get_current_task() if screen else None
        if screen is None or task is None:
            return
        try:
            if delta < 0:
                target = self.board_service.move_task_left(task.id)
            else:
                target = self.board_service.move_task_right(task.id)
        except BoardError as e:
            self._report(e)
            return
        if target is not None:
            screen.refresh_board(focus_task_id=task.id)
            self.notify(f"Moved to {self.board_service.board.columns[target].title}", timeout=2)

    def action_move_task_up(self) -> None:
        """Move current task up in column."""
        self._reorder_task(-1)

    def action_move_task_down(self) -> None:
        """Move current task down in column."""
        self._reorder_task(1)

    def _reorder_task(self, delta: int) -> None:
        screen = self._board_screen()
        task = screen.get_current_task() if screen else None
        if screen is None or task is None:
            return
        if self.board_service.reorder_task(task.id, delta):
            screen.refresh_board(focus_task_id=task.id)

    # Column actions
    def action_add_column(self) -> None:
        """Prompt for a title and append a column."""
        if self._board_screen() is None:
            return
        self.push_screen(TextPromptModal("New column"), callback=self._handle_add_column)

    def _handle_add_column(self, title: str | None) -> None:
        screen = self._board_screen()
        if not title or screen is None:
            return
        try:
            column_id = self.board_service.add_column(title)
        except BoardError as e:
            self._report(e)
            return
        screen.refresh_board(focus_column_id=column_id)

    def action_rename_column(self) -> None:
        """Rename the current column."""
        screen = self._board_screen()
        column_id = screen.current_column_id if screen else None
        if column_id is None:
            return
        title = self.board_service.board.columns[column_id].title
        self.push_screen(
            TextPromptModal("Column title", title),
            callback=lambda new_title: self._handle_rename_column(column_id, new_title),
        )

    def _handle_rename_column(self, column_id: str, title: str | None) -> None:
        screen = self._board_screen()
        if not title or screen is None:
            return
        try:
            self.board_service.rename_column(column_id, title)
        except BoardError as e:
            self._report(e)
            return
        screen.refresh_board(focus_column_id=column_id)

    def action_move_column_left(self) -> None:
        """Move the current column one place left."""
        self._move_column(-1)

    def action_move_column_right(self) -> None:
        """Move the current column one place right."""
        self._move_column(1)

    def _move_column(self, delta: int) -> None:
        screen = self._board_screen()
        column_id = screen.current_column_id if screen else None
        if screen is None or column_id is None:
            return
        if self.board_service.move_column(column_id, delta):
            screen.refresh_board(focus_column_id=column_id)

    def action_delete_column(self) -> None:
        """Delete the current column if it is empty (with confirmation)."""
        screen = self._board_screen()
        column_id = screen.current_column_id if screen else None
        if column_id is None:
            return
        column = self.board_service.board.columns[column_id]
        if column.task_ids:
            self.notify("Only empty columns can be deleted", severity="warning")
            return
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            ConfirmModal(f"Delete column '{column.title}'?"),
            callback=lambda confirmed: self._handle_delete_column(column_id, confirmed),
        )

    def _handle_delete_column(self, column_id: str, confirmed: bool) -> None:
        screen = self._board_screen()
        if not confirmed or screen is None:
            return
        try:
            self.board_service.delete_column(column_id)
        except BoardError as e:
            self._report(e)
            return
        screen.refresh_board()
        self.notify("Column deleted", timeout=2)


def run(settings: Settings | None = None) -> None:
    """Run the taskboard application."""
    app = TaskboardApp(settings)
    app.run()
