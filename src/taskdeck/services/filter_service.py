"""Service for parsing filter expressions into task filters."""

import re

from ..models import TaskFilter

_COMPLETED_VALUES = {
    "true": True,
    "yes": True,
    "done": True,
    "completed": True,
    "false": False,
    "no": False,
    "active": False,
    "open": False,
}


class FilterService:
    """Service for parsing filter expressions into task filters."""

    # Pattern for key:value tokens
    TOKEN_PATTERN = re.compile(r"(?:(completed|status|limit):)?(\S+)")

    def parse(self, expression: str) -> TaskFilter:
        """
        Parse a filter expression string.

        Syntax:
        - all / active / completed: completion status
        - completed:true / completed:false
        - status:all / status:active / status:completed
        - limit:N: at most N tasks (positive integers only)

        Later tokens win over earlier ones. Unknown tokens are ignored.
        """
        completed: bool | None = None
        limit: int | None = None

        for match in self.TOKEN_PATTERN.finditer(expression):
            key = match.group(1)
            value = match.group(2).lower()

            if key is None or key == "status":
                if value == "all":
                    completed = None
                elif value in ("active", "completed"):
                    completed = _COMPLETED_VALUES[value]

            elif key == "completed":
                if value in _COMPLETED_VALUES:
                    completed = _COMPLETED_VALUES[value]

            elif key == "limit":
                if value.isdigit() and int(value) > 0:
                    limit = int(value)

        return TaskFilter(completed=completed, limit=limit)

    def describe(self, filter_: TaskFilter) -> str:
        """Render a filter as a short label, e.g. ``active limit:10``."""
        if filter_.completed is None:
            label = "all"
        elif filter_.completed:
            label = "completed"
        else:
            label = "active"
        if filter_.limit is not None:
            label += f" limit:{filter_.limit}"
        return label
