"""Exceptions raised by the board model, engine and stores."""

from __future__ import annotations


class BoardError(Exception):
    """Base exception for board errors."""

    pass


class NotFoundError(BoardError):
    """A referenced task or column id is absent."""

    pass


class InvalidTargetError(BoardError):
    """A move or create references a column that does not exist."""

    pass


class NoColumnsError(BoardError):
    """A task was created on a board without columns."""

    pass


class ColumnNotEmptyError(BoardError):
    """A non-empty column was deleted without cascading."""

    pass


class InvariantViolationError(BoardError):
    """A board failed its structural invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__("; ".join(violations) or "invalid board")


class BoardFormatError(BoardError):
    """A persisted board payload could not be parsed."""

    pass


class RemoteUnavailableError(BoardError):
    """A store could not be reached or refused a request."""

    pass
