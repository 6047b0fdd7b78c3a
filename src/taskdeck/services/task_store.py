"""Reactive store for the task list."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..api import TaskApiProtocol
from ..models import Task, TaskCreate, TaskFilter, TaskUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreState:
    """Snapshot of the store handed to listeners."""

    tasks: tuple[Task, ...] = ()
    is_loading: bool = False
    error: Exception | None = None
    filter: TaskFilter = field(default_factory=TaskFilter)


StoreListener = Callable[[StoreState], None]


class TaskResourceStore:
    """Holds the tasks matching the active filter, plus loading and error state.

    The task list only ever changes by being replaced with a fetch result:
    mutations go to the API and are followed by a full reload. Fetch failures
    are recorded in ``error`` and leave the previous list in place; mutation
    failures propagate to the caller and leave the state alone.

    Fetches are never cancelled or de-duplicated. When several overlap, the
    last response to arrive wins, and ``is_loading`` stays True until all of
    them have settled.
    """

    def __init__(self, api: TaskApiProtocol, initial_filter: TaskFilter | None = None) -> None:
        self._api = api
        self._tasks: tuple[Task, ...] = ()
        self._error: Exception | None = None
        self._filter = initial_filter or TaskFilter()
        self._in_flight = 0
        self._listeners: list[StoreListener] = []

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Tasks from the most recent successful fetch."""
        return self._tasks

    @property
    def is_loading(self) -> bool:
        """True while a fetch is in flight."""
        return self._in_flight > 0

    @property
    def error(self) -> Exception | None:
        """Failure of the last fetch, or None."""
        return self._error

    @property
    def filter(self) -> TaskFilter:
        """The active filter."""
        return self._filter

    @property
    def state(self) -> StoreState:
        """Current state as an immutable snapshot."""
        return StoreState(
            tasks=self._tasks,
            is_loading=self.is_loading,
            error=self._error,
            filter=self._filter,
        )

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a listener called with the new state after every change.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        state = self.state
        for listener in list(self._listeners):
            listener(state)

    async def set_filter(self, completed: bool | None = None, limit: int | None = None) -> None:
        """Replace the active filter and fetch with it.

        Setting the same filter again still fetches.

        Raises:
            ValueError: If limit is not a positive integer
        """
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")

        self._filter = TaskFilter(completed=completed, limit=limit)
        logger.debug("Filter set: completed=%s limit=%s", completed, limit)
        self._notify()
        await self._fetch()

    async def reload(self) -> None:
        """Fetch again with the active filter."""
        await self._fetch()

    async def create_task(self, data: TaskCreate) -> Task:
        """Create a task, then reload.

        Returns:
            The created task with its backend-assigned ID.
        """
        task = await self._api.create_task(data)
        logger.info("Task created: %s (%r)", task.id, task.title)
        await self.reload()
        return task

    async def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        """Replace a task, then reload.

        Returns:
            The task as stored by the backend.
        """
        task = await self._api.update_task(task_id, data)
        logger.info("Task updated: %s (completed=%s)", task_id, task.completed)
        await self.reload()
        return task

    async def delete_task(self, task_id: int) -> None:
        """Delete a task, then reload."""
        await self._api.delete_task(task_id)
        logger.info("Task deleted: %s", task_id)
        await self.reload()

    async def _fetch(self) -> None:
        """Run one fetch cycle with the filter active at its start."""
        filter_ = self._filter
        self._in_flight += 1
        self._error = None
        self._notify()

        try:
            tasks = await self._api.list_tasks(completed=filter_.completed, limit=filter_.limit)
        except Exception as e:
            logger.warning("Task fetch failed (%s): %s", filter_, e)
            self._error = e
        else:
            logger.debug("Fetched %d tasks (%s)", len(tasks), filter_)
            self._tasks = tuple(tasks)
        finally:
            self._in_flight -= 1
            self._notify()
