"""Print the task list without starting the TUI."""

import asyncio
import logging

from ..api import TaskApiClient
from ..config import Settings
from ..services import FilterService, TaskResourceStore
from . import output

logger = logging.getLogger(__name__)


async def list_tasks(
    store: TaskResourceStore,
    completed: bool | None = None,
    limit: int | None = None,
) -> int:
    """Fetch once through the store and print the result.

    Returns:
        Exit code: 0 on success, 1 if the fetch failed
    """
    await store.set_filter(completed=completed, limit=limit)

    if store.error is not None:
        output.error(f"Could not load tasks: {store.error}")
        return 1

    label = FilterService().describe(store.filter)
    output.header(f"Tasks ({label}): {len(store.tasks)}")
    if not store.tasks:
        output.info("No tasks found.")
    for task in store.tasks:
        output.print_task(task)
    return 0


async def _run(settings: Settings, completed: bool | None) -> int:
    async with TaskApiClient.from_settings(settings) as client:
        store = TaskResourceStore(client)
        return await list_tasks(store, completed=completed, limit=settings.default_limit)


def run_list(settings: Settings, completed: bool | None = None) -> int:
    """Run the list command.

    Args:
        settings: Application settings (API URL, timeout, limit)
        completed: None for all tasks, True for completed only, False for active only

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    logger.debug("Listing tasks from %s", settings.api_base_url)
    return asyncio.run(_run(settings, completed))
