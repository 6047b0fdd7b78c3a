"""Task create/edit form modal."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Checkbox, Input, Label, Select, Static

from ...models import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Priority,
    Task,
    TaskCreate,
    TaskUpdate,
)

TaskPayload = TaskCreate | TaskUpdate


class FormError(ValueError):
    """Form input that cannot be turned into a task payload."""


def build_payload(values: dict[str, Any], editing: bool) -> TaskPayload:
    """Turn raw form values into a create or update payload.

    Args:
        values: Mapping with title, description, priority, due_date and
            (edit mode) completed, as read from the form widgets
        editing: Build a TaskUpdate instead of a TaskCreate

    Raises:
        FormError: With a message suitable for showing next to the form
    """
    title = (values.get("title") or "").strip()
    if not title:
        raise FormError("Title is required")

    data: dict[str, Any] = {
        "title": title,
        "description": values.get("description") or None,
        "priority": values.get("priority") or Priority.MEDIUM,
        "due_date": (values.get("due_date") or "").strip() or None,
    }
    if editing:
        data["completed"] = bool(values.get("completed"))

    model = TaskUpdate if editing else TaskCreate
    try:
        return model(**data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "input"
        raise FormError(f"{field.replace('_', ' ').capitalize()}: {first['msg']}") from e


class TaskFormModal(ModalScreen[TaskPayload | None]):
    """Form for creating a task or editing an existing one.

    Dismisses with a TaskCreate (new) or TaskUpdate (edit), or None when
    cancelled. A draft payload pre-fills the fields, e.g. to reopen the form
    after the backend rejected a submission.
    """

    DEFAULT_CSS = """
    TaskFormModal {
        align: center middle;
    }

    TaskFormModal > Vertical {
        width: 64;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    TaskFormModal .form-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    TaskFormModal .form-row {
        height: auto;
    }

    TaskFormModal .form-row > Vertical {
        width: 1fr;
        height: auto;
    }

    TaskFormModal #form-error {
        color: $error;
        height: auto;
    }

    TaskFormModal .form-actions {
        height: auto;
        align: right middle;
        margin-top: 1;
    }

    TaskFormModal Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "submit", "Save", show=False),
    ]

    def __init__(self, task: Task | None = None, draft: TaskPayload | None = None) -> None:
        super().__init__()
        self._edit_task = task
        self._draft = draft

    @property
    def editing(self) -> bool:
        return self._edit_task is not None

    def _initial_values(self) -> dict[str, Any]:
        source = self._draft or self._edit_task
        if source is None:
            return {
                "title": "",
                "description": "",
                "priority": Priority.MEDIUM,
                "due_date": "",
                "completed": False,
            }
        return {
            "title": source.title,
            "description": source.description or "",
            "priority": source.priority,
            "due_date": source.due_date.isoformat() if source.due_date else "",
            "completed": source.completed,
        }

    def compose(self) -> ComposeResult:
        values = self._initial_values()
        with Vertical():
            yield Label("Edit Task" if self.editing else "New Task", classes="form-title")

            yield Label("Title *")
            yield Input(
                values["title"],
                placeholder="Enter task title",
                max_length=TITLE_MAX_LENGTH,
                id="title",
            )

            yield Label("Description")
            yield Input(
                values["description"],
                placeholder="Enter task description",
                max_length=DESCRIPTION_MAX_LENGTH,
                id="description",
            )

            with Horizontal(classes="form-row"):
                with Vertical():
                    yield Label("Priority")
                    yield Select(
                        [(p.value.capitalize(), p) for p in Priority],
                        value=values["priority"],
                        allow_blank=False,
                        id="priority",
                    )
                with Vertical():
                    yield Label("Due Date")
                    yield Input(values["due_date"], placeholder="YYYY-MM-DD", id="due-date")

            if self.editing:
                yield Checkbox("Completed", values["completed"], id="completed")

            yield Static("", id="form-error")

            with Horizontal(classes="form-actions"):
                yield Button("Cancel", id="cancel")
                yield Button("Update" if self.editing else "Create", id="submit", variant="success")

    def on_mount(self) -> None:
        self.query_one("#title", Input).focus()

    def read_values(self) -> dict[str, Any]:
        """Collect the current widget values."""
        values: dict[str, Any] = {
            "title": self.query_one("#title", Input).value,
            "description": self.query_one("#description", Input).value,
            "priority": self.query_one("#priority", Select).value,
            "due_date": self.query_one("#due-date", Input).value,
        }
        if self.editing:
            values["completed"] = self.query_one("#completed", Checkbox).value
        return values

    def action_submit(self) -> None:
        try:
            payload = build_payload(self.read_values(), self.editing)
        except FormError as e:
            self.query_one("#form-error", Static).update(str(e))
            return
        self.dismiss(payload)

    def action_cancel(self) -> None:
        self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "submit":
            self.action_submit()
        else:
            self.action_cancel()
