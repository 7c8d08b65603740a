"""Board synchronization between the session and its store."""

from .controller import SyncController, SyncState

__all__ = [
    "SyncController",
    "SyncState",
]
