"""Validate command: check a saved board file against the board invariants."""

from pathlib import Path

from ..errors import BoardError
from ..models import validate
from ..repositories import JsonFileRepository
from .output import board_summary, error, report_problems, success


def run_validate(path: Path) -> int:
    """
    Parse a board JSON file and report every invariant violation.

    Returns:
        Exit code (0 = valid, 1 = missing, unreadable or invalid)
    """
    try:
        board = JsonFileRepository(path).read()
    except BoardError as e:
        error(str(e))
        return 1

    if board is None:
        error(f"No board saved in {path}")
        return 1

    violations = validate(board)
    if violations:
        report_problems(path, violations)
        return 1

    success(f"{path}: {board_summary(board)}, valid")
    return 0
