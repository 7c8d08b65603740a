"""Terminal output for the one-shot commands (--generate, --validate, --serve)."""

import sys
from typing import TextIO

from ..models import Board

RESET = "\033[0m"

# kind -> (mark, ANSI color)
MARKS = {
    "ok": ("✓", "\033[32m"),  # ✓ green
    "note": ("•", "\033[33m"),  # • yellow
    "fail": ("✗", "\033[31m"),  # ✗ red
}


def _mark(kind: str, stream: TextIO) -> str:
    symbol, color = MARKS[kind]
    if hasattr(stream, "isatty") and stream.isatty():
        return f"{color}{symbol}{RESET}"
    return symbol


def _emit(kind: str, message: str, stream: TextIO | None) -> None:
    # Resolve at call time so redirected stdout is honoured
    stream = stream or sys.stdout
    print(f"{_mark(kind, stream)} {message}", file=stream)


def success(message: str, stream: TextIO | None = None) -> None:
    _emit("ok", message, stream)


def info(message: str, stream: TextIO | None = None) -> None:
    _emit("note", message, stream)


def error(message: str, stream: TextIO | None = None) -> None:
    _emit("fail", message, stream)


def board_summary(board: Board) -> str:
    """One-line description of a board's size, e.g. "3 columns, 7 tasks"."""
    return f"{len(board.columns)} columns, {len(board.tasks)} tasks"


def report_problems(source: object, problems: list[str]) -> None:
    """Print each board problem on a numbered line, then the total."""
    width = len(str(len(problems)))
    for number, problem in enumerate(problems, start=1):
        error(f"{number:>{width}}. {problem}")
    info(f"{len(problems)} problem(s) in {source}")
