"""Task list widget."""

from textual.actions import SkipAction
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.css.query import NoMatches
from textual.widget import Widget
from textual.widgets import Static

from ...models import Task
from .task_card import TaskCard

EMPTY_MESSAGE = "No tasks found. Create your first task!"


class TaskListScroll(VerticalScroll):
    """Scroll container for task cards.

    Raises SkipAction for navigation keys so they bubble up to the App
    for task navigation instead of being handled as scroll actions.
    """

    def action_scroll_up(self) -> None:
        raise SkipAction()

    def action_scroll_down(self) -> None:
        raise SkipAction()

    def action_scroll_home(self) -> None:
        raise SkipAction()

    def action_scroll_end(self) -> None:
        raise SkipAction()


class EmptyListMessage(Static):
    """Displayed when there are no tasks to show."""

    pass


class TaskList(Widget):
    """Scrollable list of task cards."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._tasks: list[Task] = []

    def compose(self) -> ComposeResult:
        yield TaskListScroll(id="task-list-content")

    def on_mount(self) -> None:
        self.call_after_refresh(self._refresh_tasks)

    def set_tasks(self, tasks: list[Task]) -> None:
        """Replace the displayed tasks."""
        self._tasks = tasks
        # Use call_after_refresh to ensure DOM is ready
        self.call_after_refresh(self._refresh_tasks)

    async def _refresh_tasks(self) -> None:
        """Rebuild the task cards."""
        try:
            content = self.query_one("#task-list-content", TaskListScroll)
        except NoMatches as e:
            self.log.error(f"Cannot find task list content: {e}")
            return

        await content.remove_children()

        if not self._tasks:
            await content.mount(EmptyListMessage(EMPTY_MESSAGE))
            return

        await content.mount_all(TaskCard(task, id=f"task-{task.id}") for task in self._tasks)

    @property
    def tasks(self) -> list[Task]:
        """Get the displayed tasks."""
        return self._tasks

    @property
    def task_count(self) -> int:
        """Get the number of displayed tasks."""
        return len(self._tasks)

    def focus_task(self, index: int) -> bool:
        """
        Focus the task at the given index.

        Returns:
            True if a task was focused, False otherwise
        """
        if not self._tasks or index < 0 or index >= len(self._tasks):
            return False

        task = self._tasks[index]
        try:
            card = self.query_one(f"#task-{task.id}", TaskCard)
        except NoMatches:
            return False
        card.focus()
        card.scroll_visible()
        return True

    def get_task(self, index: int) -> Task | None:
        """Get task at index."""
        if 0 <= index < len(self._tasks):
            return self._tasks[index]
        return None

    def index_of(self, task_id: int) -> int | None:
        """Get the index of a task by ID."""
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None
