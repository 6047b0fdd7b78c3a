"""Task list filter."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TaskFilter:
    """Criteria narrowing which tasks are fetched.

    completed: None for all tasks, True for completed only, False for active only.
    limit: Maximum number of tasks to return, or None for no limit.
    """

    completed: bool | None = None
    limit: int | None = None

    def to_params(self) -> dict[str, str]:
        """Convert to query parameters, omitting unset values."""
        params: dict[str, str] = {}
        if self.completed is not None:
            params["completed"] = "true" if self.completed else "false"
        if self.limit is not None:
            params["limit"] = str(self.limit)
        return params
