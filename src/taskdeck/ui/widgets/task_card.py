"""Task card widget."""

from __future__ import annotations

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Static

from ...models import Priority, Task


class TaskCard(Widget, can_focus=True):
    """A single task in the task list."""

    # Priority display mapping: (symbol, color)
    PRIORITY_DISPLAY: dict[Priority, tuple[str, str]] = {
        Priority.LOW: ("●", "green"),
        Priority.MEDIUM: ("●", "yellow"),
        Priority.HIGH: ("▲", "red"),
    }

    def __init__(self, task_data: Task, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._task_data = task_data
        if task_data.completed:
            self.add_class("-completed")

    @property
    def task(self) -> Task:  # pyrefly: ignore[bad-override]
        """Get the task for this card."""
        return self._task_data

    def compose(self) -> ComposeResult:
        """Create card layout."""
        yield Static(self._format_title(), classes="task-title")

        with Horizontal(classes="task-meta"):
            yield Static(self._format_priority(), classes="task-priority")
            if self._task_data.due_date:
                yield Static(self._format_due_date(), classes="task-due")

        preview = self._get_description_preview()
        if preview:
            yield Static(escape(preview), classes="task-preview")

    def _format_title(self) -> str:
        """Title with completion marker; completed tasks are struck through."""
        title = escape(self._truncate(self._task_data.title, 60))
        if self._task_data.completed:
            return f"[green]✓[/] [strike dim]{title}[/]"
        return f"□ {title}"

    def _format_priority(self) -> str:
        symbol, color = self.PRIORITY_DISPLAY[self._task_data.priority]
        return f"[{color}]{symbol}[/] {self._task_data.priority.value}"

    def _format_due_date(self) -> str:
        due = self._task_data.due_date
        return f"[dim]Due:[/] {due.isoformat()}" if due else ""

    def _truncate(self, text: str, max_len: int) -> str:
        """Truncate text with ellipsis."""
        if len(text) <= max_len:
            return text
        return text[: max_len - 1] + "…"

    def _get_description_preview(self) -> str:
        """First non-empty line of the description."""
        for line in (self._task_data.description or "").split("\n"):
            line = line.strip()
            if line:
                return self._truncate(line, 70)
        return ""
