"""UI components."""

from .screens.task_list import TaskListScreen
from .widgets.task_card import TaskCard
from .widgets.task_list import TaskList

__all__ = [
    "TaskCard",
    "TaskList",
    "TaskListScreen",
]
