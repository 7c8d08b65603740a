"""Filesystem-based repository for board storage."""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from pathlib import Path

from ..errors import BoardFormatError, RemoteUnavailableError
from ..models import Board

logger = logging.getLogger(__name__)


class JsonFileRepository:
    """
    Repository for a board stored as a single JSON file.

    Serves both as a store in its own right (offline use) and as the local
    snapshot cache written on every change when the board lives on the
    companion service.
    """

    def __init__(self, path: Path) -> None:
        """
        Initialize repository.

        Args:
            path: Path to the board JSON file (e.g., .taskboard/board.json)
        """
        self.path = path
        # Saves run in worker threads; keep them in call order
        self._save_lock = asyncio.Lock()

    def ensure_directory(self) -> None:
        """Create the parent directory if it doesn't exist."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

    # --- Synchronous access ---

    def read(self) -> Board | None:
        """Read the board from disk.

        Returns:
            The stored board, or None if the file does not exist or holds null.

        Raises:
            RemoteUnavailableError: If the file cannot be read
            BoardFormatError: If the file is not a board
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No board file at %s", self.path)
            return None
        except OSError as e:
            raise RemoteUnavailableError(f"Cannot read {self.path}: {e}") from e

        if not text.strip() or text.strip() == "null":
            return None
        try:
            return Board.from_json(text)
        except BoardFormatError as e:
            raise BoardFormatError(f"{self.path}: {e}") from e

    def write(self, board: Board) -> None:
        """Write the board to disk atomically (temp file + rename).

        Raises:
            RemoteUnavailableError: If the file cannot be written
        """
        try:
            self.ensure_directory()
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(board.to_json(indent=2))
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise RemoteUnavailableError(f"Cannot write {self.path}: {e}") from e
        logger.debug("Board written to %s", self.path)

    # --- Repository protocol ---

    async def load(self) -> Board | None:
        """Load the board without blocking the event loop."""
        return await asyncio.to_thread(self.read)

    async def save(self, board: Board) -> None:
        """Save the board without blocking the event loop.

        Overlapping saves are written one at a time, in the order they were
        issued, so the file always ends up holding the last board saved.
        """
        async with self._save_lock:
            await asyncio.to_thread(self.write, board)
