"""Service layer for business logic."""

from .filter_service import FilterService
from .task_store import StoreListener, StoreState, TaskResourceStore

__all__ = [
    "FilterService",
    "StoreListener",
    "StoreState",
    "TaskResourceStore",
]
