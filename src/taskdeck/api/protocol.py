"""Protocol for task API backends."""

from typing import Protocol

from ..models import Task, TaskCreate, TaskUpdate


class TaskApiProtocol(Protocol):
    """Interface the task store needs from an API client.

    TaskApiClient implements this against the REST backend; tests supply
    in-memory fakes. All methods raise on failure.
    """

    async def list_tasks(
        self, completed: bool | None = None, limit: int | None = None
    ) -> list[Task]:
        """Load tasks matching the filter.

        Args:
            completed: None for all, True for completed only, False for active only.
            limit: Maximum number of tasks, or None for no limit.

        Returns:
            Tasks in backend order.
        """
        ...

    async def create_task(self, data: TaskCreate) -> Task:
        """Create a task.

        Returns:
            The created task, including its assigned ID.
        """
        ...

    async def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        """Replace an existing task.

        Returns:
            The task as stored after the update.
        """
        ...

    async def delete_task(self, task_id: int) -> None:
        """Delete a task by ID."""
        ...
