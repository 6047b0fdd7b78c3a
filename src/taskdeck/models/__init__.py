"""Data models."""

from .filter import TaskFilter
from .task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Priority,
    Task,
    TaskCreate,
    TaskUpdate,
)

__all__ = [
    "DESCRIPTION_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
    "Priority",
    "Task",
    "TaskCreate",
    "TaskFilter",
    "TaskUpdate",
]
