"""Widget components."""

from .command_bar import CommandBar
from .confirm_modal import ConfirmModal
from .task_card import TaskCard
from .task_form import FormError, TaskFormModal, build_payload
from .task_list import EmptyListMessage, TaskList

__all__ = [
    "CommandBar",
    "ConfirmModal",
    "EmptyListMessage",
    "FormError",
    "TaskCard",
    "TaskFormModal",
    "TaskList",
    "build_payload",
]
