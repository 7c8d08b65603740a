"""Repository protocol for board storage backends."""

from typing import Protocol

from ..models import Board


class BoardRepositoryProtocol(Protocol):
    """Interface for board storage backends.

    A repository persists the whole board at once. Implementations include:
    - A JSON file on disk (the local snapshot)
    - The companion HTTP service

    Failures are reported by raising ``RemoteUnavailableError`` (store could
    not be reached or refused the request) or ``BoardFormatError`` (stored
    payload is malformed). The sync controller treats both as non-fatal.
    """

    async def load(self) -> Board | None:
        """Load the saved board.

        Returns:
            The saved board, or None if nothing has been saved yet.
        """
        ...

    async def save(self, board: Board) -> None:
        """Persist the full board, replacing whatever was stored.

        Args:
            board: The board snapshot to persist.
        """
        ...
