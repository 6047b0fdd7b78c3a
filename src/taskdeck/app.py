"""taskdeck TUI Application."""

from __future__ import annotations

import logging
from collections.abc import Coroutine
from functools import partial
from typing import Any

from pydantic import ValidationError
from textual.app import App
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import Input

from .api import TaskApiClient, TaskApiError, TaskApiProtocol
from .config import Settings
from .models import Task, TaskCreate, TaskFilter, TaskUpdate
from .services import FilterService, TaskResourceStore
from .ui.screens import HelpScreen, TaskListScreen
from .ui.widgets import CommandBar, ConfirmModal, TaskFormModal

logger = logging.getLogger(__name__)


class TaskManagerApp(App):
    """taskdeck - terminal task manager for a REST task API."""

    TITLE = "taskdeck"

    BINDINGS = [
        # Core bindings
        Binding("q", "quit", "Quit", show=True),
        Binding("?", "help", "Help", show=True),
        Binding("r", "reload", "Reload", show=True),
        # Navigation
        Binding("j", "nav_down", "↓ Task", show=False),
        Binding("k", "nav_up", "↑ Task", show=False),
        Binding("down", "nav_down", "↓ Task", show=False),
        Binding("up", "nav_up", "↑ Task", show=False),
        Binding("g", "nav_first", "First", show=False),
        Binding("G", "nav_last", "Last", show=False),
        Binding("home", "nav_first", "First", show=False),
        Binding("end", "nav_last", "Last", show=False),
        # Task actions
        Binding("n", "new_task", "New", show=True),
        Binding("e", "edit_task", "Edit", show=True),
        Binding("enter", "edit_task", "Edit", show=False),
        Binding("space", "toggle_completed", "Toggle", show=True),
        Binding("d", "delete_task", "Delete", show=True),
        # Filters
        Binding("1", "filter_all", "All", show=False),
        Binding("2", "filter_active", "Active", show=False),
        Binding("3", "filter_completed", "Completed", show=False),
        Binding("/", "enter_filter", "Filter", show=True),
        Binding("escape", "escape", "Back", show=False, priority=True),
    ]

    SCREENS = {
        "tasks": TaskListScreen,
    }

    def __init__(
        self, settings: Settings | None = None, api: TaskApiProtocol | None = None
    ) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self._init_services(api)

    def _init_services(self, api: TaskApiProtocol | None) -> None:
        """Create the API client and the task store for this session."""
        self._client: TaskApiClient | None = None
        if api is None:
            self._client = TaskApiClient.from_settings(self.settings)
            api = self._client
        self.store = TaskResourceStore(api, TaskFilter(limit=self.settings.default_limit))
        self.filter_service = FilterService()

    def on_mount(self) -> None:
        """Show the task list and load the initial filter."""
        self.sub_title = self.settings.api_base_url
        self.push_screen("tasks")
        self.show_filter(None)

    async def on_unmount(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    def _list_screen(self) -> TaskListScreen | None:
        screen = self.screen
        if isinstance(screen, TaskListScreen):
            return screen
        return None

    def _run_fetch(self, coro: Coroutine[Any, Any, None]) -> None:
        """Run a store fetch without blocking the UI; results arrive via the store."""
        self.run_worker(coro, group="fetch")

    # Filter and reload actions

    def show_filter(self, completed: bool | None, limit: int | None = None) -> None:
        """Switch the completion filter, keeping the current limit unless given."""
        if limit is None:
            limit = self.store.filter.limit
        self._run_fetch(self.store.set_filter(completed=completed, limit=limit))

    def action_reload(self) -> None:
        """Reload tasks with the current filter."""
        self._run_fetch(self.store.reload())

    def action_filter_all(self) -> None:
        self.show_filter(None)

    def action_filter_active(self) -> None:
        self.show_filter(False)

    def action_filter_completed(self) -> None:
        self.show_filter(True)

    def apply_filter_expression(self, expression: str) -> None:
        """Parse a typed filter expression and load with it.

        Without a limit: token the configured default limit applies.
        """
        filter_ = self.filter_service.parse(expression)
        limit = filter_.limit if filter_.limit is not None else self.settings.default_limit
        logger.debug("Filter expression %r -> %s limit=%s", expression, filter_, limit)
        self._run_fetch(self.store.set_filter(completed=filter_.completed, limit=limit))

    def action_help(self) -> None:
        """Show help screen."""
        self.push_screen(HelpScreen())

    # Navigation actions

    def action_nav_up(self) -> None:
        screen = self._list_screen()
        if screen:
            screen.navigate_task(-1)

    def action_nav_down(self) -> None:
        screen = self._list_screen()
        if screen:
            screen.navigate_task(1)

    def action_nav_first(self) -> None:
        screen = self._list_screen()
        if screen:
            screen.navigate_to_task(0)

    def action_nav_last(self) -> None:
        screen = self._list_screen()
        if screen:
            screen.navigate_to_task(-1)

    # Create

    def action_new_task(self) -> None:
        """Open the form for a new task."""
        if self._list_screen() is None:
            return
        self.push_screen(TaskFormModal(), callback=self._handle_create_form)

    def _handle_create_form(self, payload: TaskCreate | None) -> None:
        if payload is None:
            return
        self.run_worker(self._create_task(payload), group="mutation")

    async def _create_task(self, payload: TaskCreate) -> None:
        try:
            task = await self.store.create_task(payload)
        except TaskApiError as e:
            logger.warning("Create failed: %s", e)
            self.notify(f"Failed to create task: {e}", severity="error")
            # Reopen the form with what the user entered
            self.push_screen(TaskFormModal(draft=payload), callback=self._handle_create_form)
            return

        screen = self._list_screen()
        if screen:
            screen.focus_task_by_id(task.id)
        self.notify("Task created", timeout=2)

    # Edit

    def action_edit_task(self) -> None:
        """Open the form for the current task."""
        screen = self._list_screen()
        if screen is None:
            return
        task = screen.get_current_task()
        if task is None:
            return
        self.push_screen(TaskFormModal(task=task), callback=partial(self._handle_edit_form, task))

    def _handle_edit_form(self, task: Task, payload: TaskUpdate | None) -> None:
        if payload is None:
            return
        self.run_worker(self._update_task(task, payload), group="mutation")

    async def _update_task(self, task: Task, payload: TaskUpdate) -> None:
        try:
            await self.store.update_task(task.id, payload)
        except TaskApiError as e:
            logger.warning("Update of task %s failed: %s", task.id, e)
            self.notify(f"Failed to save task: {e}", severity="error")
            self.push_screen(
                TaskFormModal(task=task, draft=payload),
                callback=partial(self._handle_edit_form, task),
            )
            return
        self.notify("Task updated", timeout=2)

    def action_toggle_completed(self) -> None:
        """Flip the completed flag of the current task."""
        screen = self._list_screen()
        if screen is None:
            return
        task = screen.get_current_task()
        if task is None:
            return
        self.run_worker(self._toggle_completed(task), group="mutation")

    async def _toggle_completed(self, task: Task) -> None:
        try:
            payload = task.to_update(completed=not task.completed)
            updated = await self.store.update_task(task.id, payload)
        except ValidationError as e:
            # Records stored before the current length limits cannot be re-sent
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            logger.warning("Task %s cannot be saved as is: %s", task.id, e)
            self.notify(f"Failed to update task: {field}: {first['msg']}", severity="error")
            return
        except TaskApiError as e:
            logger.warning("Toggle of task %s failed: %s", task.id, e)
            self.notify(f"Failed to update task: {e}", severity="error")
            return
        self.notify("Marked completed" if updated.completed else "Marked active", timeout=2)

    # Delete

    def action_delete_task(self) -> None:
        """Delete the current task (with confirmation)."""
        screen = self._list_screen()
        if screen is None:
            return
        task = screen.get_current_task()
        if task is None:
            return
        self.push_screen(
            ConfirmModal(f"Delete '{task.title}'?"),
            callback=partial(self._handle_delete_confirm, task),
        )

    def _handle_delete_confirm(self, task: Task, confirmed: bool | None) -> None:
        if not confirmed:
            return
        self.run_worker(self._delete_task(task), group="mutation")

    async def _delete_task(self, task: Task) -> None:
        try:
            await self.store.delete_task(task.id)
        except TaskApiError as e:
            logger.warning("Delete of task %s failed: %s", task.id, e)
            self.notify(f"Failed to delete task: {e}", severity="error")
            return
        self.notify("Task deleted", timeout=2)

    # Filter bar

    def action_enter_filter(self) -> None:
        """Open the filter expression bar."""
        screen = self._list_screen()
        if screen is None:
            return
        screen.query_one(CommandBar).enter_filter_mode()

    def action_escape(self) -> None:
        """Dismiss a modal, close the filter bar, or reset to the default filter."""
        screen = self.screen

        if isinstance(screen, ModalScreen):
            screen.dismiss()
            return

        if not isinstance(screen, TaskListScreen):
            return

        command_bar = screen.query_one(CommandBar)
        if command_bar.is_visible:
            command_bar.exit_filter_mode()
            return

        default = TaskFilter(limit=self.settings.default_limit)
        if command_bar.expression or self.store.filter != default:
            command_bar.remember("")
            self._run_fetch(self.store.set_filter(completed=None, limit=default.limit))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Apply the filter bar expression."""
        if event.input.id != "filter-input":
            return
        screen = self._list_screen()
        if screen is None:
            return
        command_bar = screen.query_one(CommandBar)
        command_bar.remember(event.value)
        command_bar.exit_filter_mode()
        self.apply_filter_expression(event.value)


def run(settings: Settings | None = None) -> None:
    """Run the taskdeck application."""
    app = TaskManagerApp(settings)
    app.run()
