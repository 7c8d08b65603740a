"""Sync controller: owns the session board and persists it.

The controller loads the board once at startup and then saves a snapshot
after every committed change. Saves are fire-and-forget: the in-memory
board is replaced before any persistence is attempted, a failing store
never interrupts local editing, and overlapping saves may complete in any
order. A stale snapshot that lands last is followed by a fresh save of the
current board.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

from ..engine import reorder
from ..errors import BoardFormatError, RemoteUnavailableError
from ..models import Board, Intent, ensure_valid, validate

if TYPE_CHECKING:
    from ..repositories import BoardRepositoryProtocol, JsonFileRepository

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    """Lifecycle state of the sync controller."""

    UNINITIALIZED = "uninitialized"  # start() not called yet
    LOADING = "loading"  # Waiting for the initial load
    READY = "ready"  # No save in flight
    SAVING = "saving"  # At least one save in flight


Listener = Callable[["SyncController"], None]


class SyncController:
    """Single owner of the board for one session.

    All mutations go through ``commit()`` on the event loop thread, so they
    never interleave. Persistence runs as background asyncio tasks that
    each carry their own immutable snapshot.
    """

    def __init__(
        self,
        repository: BoardRepositoryProtocol,
        default_board: Board,
        cache: JsonFileRepository | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            repository: Store the board is loaded from and saved to
            default_board: Board used when nothing valid can be loaded
            cache: Optional local snapshot, written synchronously on every
                change and consulted at startup when the store yields nothing
        """
        self.repository = repository
        self._default_board = default_board
        self._cache = cache
        self._board = default_board
        self._state = SyncState.UNINITIALIZED
        self._generation = 0
        self._saved_generation = 0
        self._landed_generation = 0
        self._pending: dict[asyncio.Task[None], int] = {}
        self._listeners: list[Listener] = []

    @property
    def board(self) -> Board:
        """The current board."""
        return self._board

    @property
    def state(self) -> SyncState:
        """The current lifecycle state."""
        return self._state

    @property
    def pending_saves(self) -> int:
        """Number of saves still in flight."""
        return len(self._pending)

    @property
    def has_unsaved_changes(self) -> bool:
        """Whether the latest committed board has not been saved successfully."""
        return self._saved_generation < self._generation

    def add_listener(self, listener: Listener) -> None:
        """Register a callback invoked on state or save-status changes."""
        self._listeners.append(listener)

    # --- Startup ---

    async def start(self) -> Board:
        """Load the board and become ready.

        Tries the repository first, then the local cache, then falls back to
        the default board. Never raises for store failures.
        """
        if self._state is not SyncState.UNINITIALIZED:
            raise RuntimeError("SyncController.start() called twice")

        self._set_state(SyncState.LOADING)

        board = await self._load_from_repository()
        if board is None and self._cache is not None:
            board = self._load_from_cache(self._cache)
        if board is None:
            logger.info("No saved board, using default")
            board = self._default_board

        self._board = board
        self._set_state(SyncState.READY)
        return board

    async def _load_from_repository(self) -> Board | None:
        """Load from the repository, treating every failure as no board."""
        try:
            board = await self.repository.load()
        except (RemoteUnavailableError, BoardFormatError) as e:
            logger.warning("Board load failed: %s", e)
            return None
        except Exception:
            logger.exception("Unexpected error loading board")
            return None
        return self._accept(board, "repository")

    def _load_from_cache(self, cache: JsonFileRepository) -> Board | None:
        """Load the local snapshot, treating every failure as no board."""
        try:
            board = cache.read()
        except (RemoteUnavailableError, BoardFormatError) as e:
            logger.warning("Local snapshot unreadable: %s", e)
            return None
        return self._accept(board, "local snapshot")

    def _accept(self, board: Board | None, source: str) -> Board | None:
        """Return a loaded board if it passes validation."""
        if board is None:
            logger.debug("No board saved in %s", source)
            return None
        violations = validate(board)
        if violations:
            logger.warning(
                "Discarding invalid board from %s: %s", source, "; ".join(violations)
            )
            return None
        logger.info(
            "Loaded board from %s (%d columns, %d tasks)",
            source,
            len(board.columns),
            len(board.tasks),
        )
        return board

    # --- Mutations ---

    def commit(self, board: Board) -> Board:
        """
        Adopt a new board and schedule its persistence.

        The in-memory board is replaced immediately; the local snapshot is
        written next; the repository save runs in the background.

        Raises:
            RuntimeError: If called before start() has finished
            InvariantViolationError: If the board is malformed (the current
                board is kept)
        """
        if self._state in (SyncState.UNINITIALIZED, SyncState.LOADING):
            raise RuntimeError("SyncController.commit() called before start() finished")

        ensure_valid(board)
        if board is self._board:
            return board

        self._board = board
        self._generation += 1
        generation = self._generation

        self._write_cache(board)
        self._schedule_save(board, generation)
        return board

    def apply(self, intent: Intent) -> Board:
        """Apply a move intent to the current board and commit the result."""
        return self.commit(reorder(self._board, intent))

    def _write_cache(self, board: Board) -> None:
        """Best-effort write of the local snapshot."""
        if self._cache is None:
            return
        try:
            self._cache.write(board)
        except RemoteUnavailableError as e:
            logger.warning("Local snapshot not written: %s", e)

    def _schedule_save(self, snapshot: Board, generation: int) -> None:
        task = asyncio.get_running_loop().create_task(self._save(snapshot, generation))
        self._pending[task] = generation
        task.add_done_callback(self._on_save_done)
        self._set_state(SyncState.SAVING)

    async def _save(self, snapshot: Board, generation: int) -> None:
        """Persist one snapshot; failures are logged and swallowed.

        The store holds whichever snapshot landed last. When an older
        snapshot lands after a newer one and no newer save is still in
        flight, the current board is saved again so the store converges.
        """
        start_time = time.monotonic()
        try:
            await self.repository.save(snapshot)
        except RemoteUnavailableError as e:
            logger.warning("Save #%d failed: %s", generation, e)
            return
        except Exception:
            logger.exception("Save #%d failed unexpectedly", generation)
            return

        elapsed_ms = (time.monotonic() - start_time) * 1000
        overwrote_newer = generation < self._landed_generation
        self._landed_generation = max(self._landed_generation, generation)
        self._saved_generation = generation
        logger.debug("Save #%d done (%.0fms)", generation, elapsed_ms)

        newer_in_flight = any(g > generation for g in self._pending.values())
        if overwrote_newer and not newer_in_flight:
            logger.info("Save #%d landed after a newer one, saving again", generation)
            self._schedule_save(self._board, self._generation)

    def _on_save_done(self, task: asyncio.Task[None]) -> None:
        self._pending.pop(task, None)
        if not self._pending and self._state is SyncState.SAVING:
            self._set_state(SyncState.READY)
        else:
            self._notify()

    async def drain(self) -> None:
        """Wait until every in-flight save has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # --- Listeners ---

    def _set_state(self, state: SyncState) -> None:
        if state is not self._state:
            logger.debug("Sync state: %s -> %s", self._state.value, state.value)
        self._state = state
        self._notify()

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self)
