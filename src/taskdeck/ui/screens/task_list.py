"""Main task list screen."""

from __future__ import annotations

from collections.abc import Callable

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.events import DescendantFocus
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Static

from ...models import Task, TaskFilter
from ...services import StoreState
from ..widgets.command_bar import CommandBar
from ..widgets.task_card import TaskCard
from ..widgets.task_list import TaskList

FILTER_BUTTONS: dict[str, bool | None] = {
    "filter-all": None,
    "filter-active": False,
    "filter-completed": True,
}


def format_status(state: StoreState, filter_label: str) -> str:
    """Status line text: loading and error indicators plus the active filter.

    The error is shown alongside the task count of the last successful load,
    never instead of it.
    """
    parts = [f"[dim]Showing:[/] {filter_label} [dim]({len(state.tasks)})[/]"]
    if state.is_loading:
        parts.append("[cyan]Loading tasks...[/]")
    if state.error is not None:
        parts.append(f"[red]Error: {escape(str(state.error))}[/]")
    return "  ".join(parts)


class TaskListScreen(Screen):
    """Task list with filter buttons and a status line, bound to the task store."""

    LAYERS = ["base", "command"]

    DEFAULT_CSS = """
    TaskListScreen #filters {
        height: auto;
        padding: 0 1;
    }

    TaskListScreen #filters Button {
        margin-right: 1;
        min-width: 10;
    }

    TaskListScreen #filters Button.-active {
        text-style: bold reverse;
    }

    TaskListScreen #status {
        height: 1;
        padding: 0 1;
    }

    TaskListScreen TaskList {
        height: 1fr;
    }

    TaskListScreen TaskCard {
        height: auto;
        padding: 0 1;
        margin: 0 1 1 1;
        border: round $primary-darken-2;
    }

    TaskListScreen TaskCard:focus {
        border: round $accent;
    }

    TaskListScreen TaskCard.-completed {
        opacity: 70%;
    }

    TaskListScreen TaskCard .task-meta {
        height: 1;
    }

    TaskListScreen TaskCard .task-meta Static {
        width: auto;
        margin-right: 2;
    }

    TaskListScreen TaskCard .task-preview {
        color: $text-muted;
    }

    TaskListScreen EmptyListMessage {
        padding: 1 2;
        color: $text-muted;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._current_task = 0
        self._rendered_tasks: tuple[Task, ...] | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._pending_focus_id: int | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="filters"):
            yield Button("All", id="filter-all")
            yield Button("Active", id="filter-active")
            yield Button("Completed", id="filter-completed")
            yield Button("Refresh", id="refresh")
            yield Button("New Task", id="new-task", variant="success")
        yield Static("", id="status")
        yield TaskList(id="task-list")
        yield CommandBar()
        yield Footer()

    def on_mount(self) -> None:
        """Subscribe to the store and render its current state."""
        store = self.app.store  # pyrefly: ignore[missing-attribute]
        self._unsubscribe = store.subscribe(self.render_state)
        self.render_state(store.state)

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def render_state(self, state: StoreState) -> None:
        """Update status line, filter buttons and (when changed) the task list."""
        label = self.app.filter_service.describe(state.filter)  # pyrefly: ignore[missing-attribute]
        self.query_one("#status", Static).update(format_status(state, label))
        self._update_filter_buttons(state.filter)

        if state.tasks is not self._rendered_tasks:
            self._rendered_tasks = state.tasks
            self.query_one(TaskList).set_tasks(list(state.tasks))
            self.call_after_refresh(self._schedule_focus)

    def _update_filter_buttons(self, filter_: TaskFilter) -> None:
        for button_id, completed in FILTER_BUTTONS.items():
            button = self.query_one(f"#{button_id}", Button)
            button.set_class(filter_.completed is completed, "-active")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Route button presses to app actions."""
        button_id = event.button.id or ""
        if button_id in FILTER_BUTTONS:
            self.app.show_filter(FILTER_BUTTONS[button_id])  # pyrefly: ignore[missing-attribute]
        elif button_id == "refresh":
            self.app.action_reload()  # pyrefly: ignore[missing-attribute]
        elif button_id == "new-task":
            self.app.action_new_task()  # pyrefly: ignore[missing-attribute]

    # Focus handling

    def focus_task_by_id(self, task_id: int) -> None:
        """Focus a task once the list has rendered, if it is in the list."""
        self._pending_focus_id = task_id
        self.call_after_refresh(self._schedule_focus)

    def _schedule_focus(self) -> None:
        # Double-defer so the list has finished mounting its cards
        self.call_after_refresh(self._apply_focus)

    def _apply_focus(self) -> None:
        task_list = self.query_one(TaskList)
        if self._pending_focus_id is not None:
            index = task_list.index_of(self._pending_focus_id)
            if index is not None:
                self._current_task = index
            self._pending_focus_id = None
        if task_list.task_count:
            self._current_task = min(self._current_task, task_list.task_count - 1)
            task_list.focus_task(self._current_task)
        else:
            self._current_task = 0

    def on_descendant_focus(self, event: DescendantFocus) -> None:
        """Keep the cursor in sync when a card is focused by mouse."""
        if isinstance(event.widget, TaskCard):
            index = self.query_one(TaskList).index_of(event.widget.task.id)
            if index is not None:
                self._current_task = index

    def navigate_task(self, delta: int) -> None:
        """Move focus up or down the list."""
        task_list = self.query_one(TaskList)
        if task_list.task_count == 0:
            return
        new_task = max(0, min(self._current_task + delta, task_list.task_count - 1))
        if new_task != self._current_task:
            self._current_task = new_task
            task_list.focus_task(new_task)

    def navigate_to_task(self, index: int) -> None:
        """Focus a specific task index (-1 for last)."""
        task_list = self.query_one(TaskList)
        if task_list.task_count == 0:
            return
        if index < 0:
            index = task_list.task_count - 1
        self._current_task = min(index, task_list.task_count - 1)
        task_list.focus_task(self._current_task)

    def get_current_task(self) -> Task | None:
        """Get the task under the cursor."""
        return self.query_one(TaskList).get_task(self._current_task)
