"""HTTP repository talking to the companion board service."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from ..errors import BoardFormatError, RemoteUnavailableError
from ..models import Board

logger = logging.getLogger(__name__)


class HttpBoardRepository:
    """Board repository backed by ``GET /board`` and ``POST /board``.

    Provides a thin wrapper around the companion service with:
    - A shared async client with a request timeout
    - Error mapping to ``RemoteUnavailableError`` / ``BoardFormatError``
    - Request timing in the logs
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            base_url: Service root URL
            timeout: Per-request timeout in seconds
            client: Optional preconfigured client (tests inject a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self._board_url = f"{self.base_url}/board"
        self._client = client or httpx.AsyncClient(
            headers={"Accept": "application/json"},
            timeout=timeout,
        )

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> HttpBoardRepository:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def load(self) -> Board | None:
        """Fetch the saved board.

        Raises:
            RemoteUnavailableError: Transport failure or HTTP error status
            BoardFormatError: Response body is not a board
        """
        response = await self._request("GET", None)
        try:
            data = response.json()
        except ValueError as e:
            raise BoardFormatError(f"Invalid JSON response: {e}") from e
        if data is None:
            return None
        return Board.from_json_dict(data)

    async def save(self, board: Board) -> None:
        """Replace the saved board.

        Raises:
            RemoteUnavailableError: Transport failure or HTTP error status
        """
        await self._request("POST", board.to_json_dict())

    async def _request(self, method: str, payload: dict[str, Any] | None) -> httpx.Response:
        """Send a request and map failures to repository errors."""
        start_time = time.monotonic()
        try:
            response = await self._client.request(method, self._board_url, json=payload)
        except httpx.HTTPError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.warning("%s %s failed after %.0fms: %s", method, self._board_url, elapsed_ms, e)
            raise RemoteUnavailableError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(
                "%s %s: HTTP %d (%.0fms): %s",
                method,
                self._board_url,
                response.status_code,
                elapsed_ms,
                message,
            )
            raise RemoteUnavailableError(f"HTTP {response.status_code}: {message}")

        logger.debug(
            "%s %s: %d (%.0fms)", method, self._board_url, response.status_code, elapsed_ms
        )
        return response


def _error_message(response: httpx.Response) -> str:
    """Extract the ``{"error": ...}`` message from a failed response."""
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and "error" in data:
        return str(data["error"])
    return response.text
