"""Task domain model."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class Priority(str, Enum):
    """Task priority levels as the backend spells them."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class _WireModel(BaseModel):
    """Base for models exchanged with the REST backend (camelCase JSON)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self) -> dict:
        """Serialize to the JSON body the backend expects."""
        return self.model_dump(mode="json", by_alias=True)


def _parse_due_date(value: object) -> object:
    """Reduce a due date to its calendar date.

    The backend may report due dates as full ISO datetimes; only the date
    part is meaningful here.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


class Task(_WireModel):
    """A task as returned by the backend."""

    id: int
    title: str
    description: str | None = None
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("priority", mode="before")
    @classmethod
    def _default_priority(cls, value: object) -> object:
        # Older records may carry a null priority
        return Priority.MEDIUM if value is None else value

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date(cls, value: object) -> object:
        return _parse_due_date(value)

    def to_update(self, **changes: object) -> "TaskUpdate":
        """Build a full-record replace payload from this task.

        Keyword arguments override individual fields, e.g.
        ``task.to_update(completed=True)``.
        """
        data = {
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority,
            "due_date": self.due_date,
        }
        data.update(changes)
        return TaskUpdate(**data)


class _TaskFields(_WireModel):
    """Fields shared by create and update payloads."""

    # Report validation errors by field name, not wire name
    model_config = ConfigDict(loc_by_alias=False)

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _strip_description(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date(cls, value: object) -> object:
        return _parse_due_date(value)


class TaskCreate(_TaskFields):
    """Payload for creating a task."""


class TaskUpdate(_TaskFields):
    """Payload for replacing a task.

    Every field is sent; absent optional fields clear the stored value.
    """
