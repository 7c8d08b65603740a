"""
SQLite persistence for the companion board service.

The board is stored relationally (columns, tasks, attachments, each with a
position) and always replaced as a whole inside one transaction.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from ..models import Board

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS columns (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    position INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    division TEXT NOT NULL DEFAULT '',
    priority TEXT NOT NULL,
    start_date TEXT,
    due_date TEXT,
    column_id TEXT NOT NULL REFERENCES columns(id) ON DELETE CASCADE,
    position INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS email_attachments (
    task_id TEXT NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
    position INTEGER NOT NULL,
    name TEXT NOT NULL,
    PRIMARY KEY (task_id, position)
);
CREATE TABLE IF NOT EXISTS board_meta (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


def _connect(db_path: str) -> sqlite3.Connection:
    """Open a connection with FK enforcement."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


class BoardDatabase:
    """SQLite-backed store for a single board."""

    def __init__(self, db_path: str | Path) -> None:
        """Initialize store and create tables if needed."""
        self.db_path = str(db_path)
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _init_schema(self) -> None:
        """Create tables if they don't exist."""
        with _connect(self.db_path) as conn:
            conn.executescript(SCHEMA)

    def read_board(self) -> Board | None:
        """Rebuild the board from its rows.

        Returns:
            The board, or None if no board was ever written.
        """
        with _connect(self.db_path) as conn:
            saved = conn.execute("SELECT value FROM board_meta WHERE key = 'saved_at'").fetchone()
            if saved is None:
                return None

            column_rows = conn.execute(
                "SELECT id, title FROM columns ORDER BY position"
            ).fetchall()
            task_rows = conn.execute("SELECT * FROM tasks ORDER BY position").fetchall()
            attachment_rows = conn.execute(
                "SELECT task_id, name FROM email_attachments ORDER BY task_id, position"
            ).fetchall()

        attachments: dict[str, list[dict[str, str]]] = {}
        for row in attachment_rows:
            attachments.setdefault(row["task_id"], []).append({"name": row["name"]})

        tasks = {
            row["id"]: {
                "id": row["id"],
                "title": row["title"],
                "division": row["division"],
                "priority": row["priority"],
                "startDate": row["start_date"],
                "dueDate": row["due_date"],
                "emails": attachments.get(row["id"], []),
            }
            for row in task_rows
        }

        columns = {}
        column_order = []
        for row in column_rows:
            columns[row["id"]] = {
                "id": row["id"],
                "title": row["title"],
                "taskIds": [t["id"] for t in task_rows if t["column_id"] == row["id"]],
            }
            column_order.append(row["id"])

        return Board.from_json_dict(
            {"tasks": tasks, "columns": columns, "columnOrder": column_order}
        )

    def write_board(self, board: Board) -> None:
        """Replace the stored board in a single transaction.

        Raises:
            sqlite3.Error: On any database failure (nothing is written)
        """
        with _connect(self.db_path) as conn:
            conn.execute("DELETE FROM email_attachments")
            conn.execute("DELETE FROM tasks")
            conn.execute("DELETE FROM columns")

            for col_pos, column_id in enumerate(board.column_order):
                column = board.columns[column_id]
                conn.execute(
                    "INSERT INTO columns (id, title, position) VALUES (?, ?, ?)",
                    (column_id, column.title, col_pos),
                )
                for task_pos, task_id in enumerate(column.task_ids):
                    task = board.tasks[task_id]
                    conn.execute(
                        """INSERT INTO tasks (id, title, division, priority, start_date,
                           due_date, column_id, position) VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                        (
                            task.id,
                            task.title,
                            task.division,
                            task.priority,
                            task.start_date.isoformat() if task.start_date else None,
                            task.due_date.isoformat() if task.due_date else None,
                            column_id,
                            task_pos,
                        ),
                    )
                    conn.executemany(
                        "INSERT INTO email_attachments (task_id, position, name) VALUES (?, ?, ?)",
                        [(task.id, i, a.name) for i, a in enumerate(task.attachments)],
                    )

            conn.execute(
                "INSERT OR REPLACE INTO board_meta (key, value) "
                "VALUES ('saved_at', datetime('now'))"
            )

        logger.info(
            "Board written (%d columns, %d tasks)", len(board.columns), len(board.tasks)
        )
