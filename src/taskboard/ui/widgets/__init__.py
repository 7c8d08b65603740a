"""Widget components."""

from .column import EmptyColumnMessage, KanbanColumn
from .modals import ConfirmModal, TextPromptModal
from .task_card import TaskCard

__all__ = [
    "ConfirmModal",
    "EmptyColumnMessage",
    "KanbanColumn",
    "TaskCard",
    "TextPromptModal",
]
