"""Tests for the task REST API client."""

import json
from datetime import date

import httpx
import pytest

from taskdeck.api import (
    TaskApiClient,
    TaskApiError,
    TaskApiTransportError,
    TaskNotFoundError,
    TaskValidationError,
)
from taskdeck.config import Settings
from taskdeck.models import Priority, TaskCreate, TaskUpdate

BASE_URL = "http://tasks.test/api/v1"

TASK_JSON = {
    "id": 1,
    "title": "Write report",
    "description": None,
    "completed": False,
    "priority": "HIGH",
    "dueDate": "2025-03-01",
    "createdAt": "2025-02-01T09:00:00",
    "updatedAt": "2025-02-01T09:00:00",
}


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_client(handler) -> TaskApiClient:
    return TaskApiClient(BASE_URL, transport=httpx.MockTransport(handler))


class TestTaskApiClientInit:
    """Tests for client construction."""

    @pytest.mark.asyncio
    async def test_trailing_slash_removed(self):
        async with TaskApiClient(BASE_URL + "/") as client:
            assert client.base_url == BASE_URL

    @pytest.mark.asyncio
    async def test_from_settings(self):
        settings = Settings(api_base_url=BASE_URL, request_timeout=5)
        async with TaskApiClient.from_settings(settings) as client:
            assert client.base_url == BASE_URL
            assert client._client.timeout.read == 5


class TestListTasks:
    """Tests for GET /tasks."""

    @pytest.mark.asyncio
    async def test_list_all(self):
        """No filter sends no query parameters."""
        recorder = Recorder(httpx.Response(200, json=[TASK_JSON]))
        async with make_client(recorder) as client:
            tasks = await client.list_tasks()

        assert recorder.last.method == "GET"
        assert recorder.last.url.path == "/api/v1/tasks"
        assert recorder.last.url.query == b""
        assert len(tasks) == 1
        assert tasks[0].title == "Write report"
        assert tasks[0].priority == Priority.HIGH
        assert tasks[0].due_date == date(2025, 3, 1)

    @pytest.mark.asyncio
    async def test_list_with_filter(self):
        recorder = Recorder(httpx.Response(200, json=[]))
        async with make_client(recorder) as client:
            tasks = await client.list_tasks(completed=False, limit=10)

        assert tasks == []
        assert recorder.last.url.params["completed"] == "false"
        assert recorder.last.url.params["limit"] == "10"

    @pytest.mark.asyncio
    async def test_list_completed_only(self):
        recorder = Recorder(httpx.Response(200, json=[]))
        async with make_client(recorder) as client:
            await client.list_tasks(completed=True)

        assert dict(recorder.last.url.params) == {"completed": "true"}

    @pytest.mark.asyncio
    async def test_non_list_body_rejected(self):
        recorder = Recorder(httpx.Response(200, json={"items": []}))
        async with make_client(recorder) as client:
            with pytest.raises(TaskApiError, match="Expected a list"):
                await client.list_tasks()

    @pytest.mark.asyncio
    async def test_malformed_task_rejected(self):
        recorder = Recorder(httpx.Response(200, json=[{"title": "No id"}]))
        async with make_client(recorder) as client:
            with pytest.raises(TaskApiError, match="Malformed task"):
                await client.list_tasks()


class TestSingleTaskRequests:
    """Tests for GET, POST, PUT and DELETE on single tasks."""

    @pytest.mark.asyncio
    async def test_get_task(self):
        recorder = Recorder(httpx.Response(200, json=TASK_JSON))
        async with make_client(recorder) as client:
            task = await client.get_task(1)

        assert recorder.last.url.path == "/api/v1/tasks/1"
        assert task.id == 1

    @pytest.mark.asyncio
    async def test_create_task(self):
        """POST sends the camelCase payload and returns the stored task."""
        created = {**TASK_JSON, "id": 42, "title": "Buy milk", "priority": "MEDIUM"}
        recorder = Recorder(httpx.Response(201, json=created))
        async with make_client(recorder) as client:
            task = await client.create_task(TaskCreate(title="Buy milk"))

        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/api/v1/tasks"
        assert json.loads(recorder.last.content) == {
            "title": "Buy milk",
            "description": None,
            "completed": False,
            "priority": "MEDIUM",
            "dueDate": None,
        }
        assert task.id == 42

    @pytest.mark.asyncio
    async def test_update_task(self):
        """PUT sends every field."""
        updated = {**TASK_JSON, "completed": True}
        recorder = Recorder(httpx.Response(200, json=updated))
        data = TaskUpdate(
            title="Write report",
            completed=True,
            priority=Priority.HIGH,
            due_date=date(2025, 3, 1),
        )
        async with make_client(recorder) as client:
            task = await client.update_task(1, data)

        assert recorder.last.method == "PUT"
        assert recorder.last.url.path == "/api/v1/tasks/1"
        body = json.loads(recorder.last.content)
        assert body["completed"] is True
        assert body["dueDate"] == "2025-03-01"
        assert task.completed is True

    @pytest.mark.asyncio
    async def test_delete_task_no_content(self):
        recorder = Recorder(httpx.Response(204))
        async with make_client(recorder) as client:
            result = await client.delete_task(1)

        assert recorder.last.method == "DELETE"
        assert recorder.last.url.path == "/api/v1/tasks/1"
        assert result is None


class TestErrorMapping:
    """Tests for status code to exception mapping."""

    @pytest.mark.asyncio
    async def test_not_found(self):
        recorder = Recorder(httpx.Response(404))
        async with make_client(recorder) as client:
            with pytest.raises(TaskNotFoundError) as exc_info:
                await client.get_task(99)
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 422])
    async def test_validation_error(self, status: int):
        recorder = Recorder(httpx.Response(status, text="title must not be blank"))
        async with make_client(recorder) as client:
            with pytest.raises(TaskValidationError) as exc_info:
                await client.create_task(TaskCreate(title="x"))
        assert exc_info.value.status_code == status
        assert "title must not be blank" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_server_error(self):
        recorder = Recorder(httpx.Response(500, text="boom"))
        async with make_client(recorder) as client:
            with pytest.raises(TaskApiError) as exc_info:
                await client.list_tasks()
        assert type(exc_info.value) is TaskApiError
        assert exc_info.value.status_code == 500
        assert "HTTP 500" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transport_error(self):
        """Network failures surface as TaskApiTransportError without a status."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(TaskApiTransportError) as exc_info:
                await client.list_tasks()
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value, TaskApiError)

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        recorder = Recorder(httpx.Response(200, text="<html>not json</html>"))
        async with make_client(recorder) as client:
            with pytest.raises(TaskApiError, match="Invalid JSON"):
                await client.list_tasks()
