"""Repository layer for board persistence."""

from .factory import build_repositories
from .filesystem import JsonFileRepository
from .http import HttpBoardRepository
from .protocol import BoardRepositoryProtocol

__all__ = [
    "BoardRepositoryProtocol",
    "HttpBoardRepository",
    "JsonFileRepository",
    "build_repositories",
]
