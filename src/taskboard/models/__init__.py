"""Data models."""

from .board import Board, Column, ensure_valid, validate
from .intents import Intent, MoveColumn, MoveTask
from .task import (
    PRIORITIES,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    PRIORITY_URGENT,
    Attachment,
    Priority,
    Task,
    TaskDraft,
)
from .taskboard_config import (
    BoardConfig,
    ColumnConfig,
    ServerConfig,
    StoreConfig,
    TaskboardConfig,
)

__all__ = [
    "PRIORITIES",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "PRIORITY_URGENT",
    "Attachment",
    "Board",
    "BoardConfig",
    "Column",
    "ColumnConfig",
    "Intent",
    "MoveColumn",
    "MoveTask",
    "Priority",
    "ServerConfig",
    "StoreConfig",
    "Task",
    "TaskDraft",
    "TaskboardConfig",
    "ensure_valid",
    "validate",
]
