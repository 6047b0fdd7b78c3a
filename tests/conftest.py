"""Shared fixtures."""

import pytest

from taskdeck.api import TaskApiError
from taskdeck.models import Priority, Task

from .fakes import FakeTaskApi


@pytest.fixture
def sample_tasks() -> list[Task]:
    """Three tasks, one of them completed."""
    return [
        Task(id=1, title="Write report", priority=Priority.HIGH),
        Task(id=2, title="Water plants", completed=True, priority=Priority.LOW),
        Task(id=3, title="Call dentist", description="Ask about Tuesday"),
    ]


@pytest.fixture
def fake_api(sample_tasks: list[Task]) -> FakeTaskApi:
    """Fake API seeded with the sample tasks; next ID is 7."""
    return FakeTaskApi(sample_tasks, next_id=7)


@pytest.fixture
def api_error() -> TaskApiError:
    return TaskApiError("HTTP 500: Internal Server Error", status_code=500)
