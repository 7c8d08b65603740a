"""Configuration models for taskboard.yml."""

from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator

from .board import Board
from .task import PRIORITY_MEDIUM, Priority


def _validate_identifier(value: str, name: str = "ID") -> str:
    """Validate an identifier is lowercase alphanumeric with underscores."""
    if not value:
        raise ValueError(f"{name} cannot be empty")
    if not value[0].isalpha():
        raise ValueError(f"{name} must start with a letter")
    if not all(c.isalnum() or c == "_" for c in value):
        raise ValueError(f"{name} must be alphanumeric with underscores only")
    if value != value.lower():
        raise ValueError(f"{name} must be lowercase")
    return value


def _validate_relative_path(value: str, name: str) -> str:
    """Validate a path is relative and stays inside the project directory."""
    path = Path(value)
    if path.is_absolute():
        raise ValueError(f"{name} must be a relative path")
    try:
        resolved = Path().resolve() / path
        resolved.resolve().relative_to(Path().resolve())
    except ValueError as err:
        raise ValueError(f"{name} must be within the project directory") from err
    return value


class ColumnConfig(BaseModel):
    """A column seeded into a fresh board."""

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate column ID is lowercase with underscores only."""
        return _validate_identifier(v, "Column ID")


class BoardConfig(BaseModel):
    """Seed columns and defaults for new tasks."""

    columns: list[ColumnConfig] = Field(..., min_length=1)
    default_priority: Priority = PRIORITY_MEDIUM
    default_division: str = ""

    @field_validator("columns")
    @classmethod
    def validate_columns(cls, v: list[ColumnConfig]) -> list[ColumnConfig]:
        """Validate column IDs are unique."""
        ids = [col.id for col in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Column IDs must be unique")
        return v

    @property
    def column_ids(self) -> list[str]:
        """List of column IDs in display order."""
        return [col.id for col in self.columns]

    def to_board(self) -> Board:
        """Build the default board used when no saved state exists."""
        return Board.from_columns((col.id, col.title) for col in self.columns)

    @classmethod
    def default(cls) -> "BoardConfig":
        """Return the default 3-column configuration."""
        return cls(
            columns=[
                ColumnConfig(id="todo", title="To Do"),
                ColumnConfig(id="in_progress", title="In Progress"),
                ColumnConfig(id="done", title="Done"),
            ],
        )


class StoreConfig(BaseModel):
    """Where the board is persisted."""

    backend: str = Field(default="file", description="Storage backend: file, http")
    path: str = Field(
        default=".taskboard/board.json",
        description="Board JSON file (file backend)",
    )
    url: str = Field(default="http://localhost:3001", description="Companion service URL")
    timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")
    cache: str | None = Field(
        default=".taskboard/cache.json",
        description="Local snapshot written on every change (http backend)",
    )

    VALID_BACKENDS: ClassVar[tuple[str, ...]] = ("file", "http")

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Validate backend is a supported value."""
        if v not in cls.VALID_BACKENDS:
            raise ValueError(
                f"Invalid backend '{v}'. Must be one of: {', '.join(cls.VALID_BACKENDS)}"
            )
        return v

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate path is relative to the project."""
        return _validate_relative_path(v, "store.path")

    @field_validator("cache")
    @classmethod
    def validate_cache(cls, v: str | None) -> str | None:
        """Validate cache path is relative to the project."""
        if v is None:
            return v
        return _validate_relative_path(v, "store.cache")


class ServerConfig(BaseModel):
    """Companion HTTP service settings."""

    host: str = "127.0.0.1"
    port: int = Field(default=3001, ge=1, le=65535)
    database: str = Field(default=".taskboard/board.db", description="SQLite database file")

    @field_validator("database")
    @classmethod
    def validate_database(cls, v: str) -> str:
        """Validate database path is relative to the project."""
        return _validate_relative_path(v, "server.database")


class TaskboardConfig(BaseModel):
    """Root configuration from taskboard.yml."""

    version: int = 1
    store: StoreConfig = Field(default_factory=StoreConfig)
    board: BoardConfig = Field(default_factory=BoardConfig.default)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @classmethod
    def default(cls) -> "TaskboardConfig":
        """Return default configuration."""
        return cls(board=BoardConfig.default())
