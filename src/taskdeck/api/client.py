"""Task REST API client."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from ..models import Task, TaskCreate, TaskFilter, TaskUpdate

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)


class TaskApiError(Exception):
    """Base exception for task API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TaskApiTransportError(TaskApiError):
    """The request never produced a response (network failure, timeout)."""


class TaskNotFoundError(TaskApiError):
    """Task does not exist."""


class TaskValidationError(TaskApiError):
    """Backend rejected the request payload."""


class TaskApiClient:
    """Async client for the task REST API.

    Provides a thin wrapper around the backend's ``/tasks`` resource with:
    - Typed request/response models
    - Status code to exception mapping
    - Request timing in the logs
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API base URL, e.g. ``http://localhost:8080/api/v1``
            timeout: Request timeout in seconds
            transport: Optional transport override (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> TaskApiClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    @classmethod
    def from_settings(cls, settings: Settings) -> TaskApiClient:
        """Create a client from application settings."""
        return cls(settings.api_base_url, timeout=settings.request_timeout)

    async def list_tasks(
        self, completed: bool | None = None, limit: int | None = None
    ) -> list[Task]:
        """List tasks, optionally filtered by completion and capped by limit."""
        params = TaskFilter(completed=completed, limit=limit).to_params()
        data = await self._request("GET", "/tasks", params=params)
        if not isinstance(data, list):
            raise TaskApiError("Expected a list of tasks")
        return [self._parse_task(item) for item in data]

    async def get_task(self, task_id: int) -> Task:
        """Get a single task by ID."""
        data = await self._request("GET", f"/tasks/{task_id}")
        return self._parse_task(data)

    async def create_task(self, data: TaskCreate) -> Task:
        """Create a task and return it with its assigned ID."""
        result = await self._request("POST", "/tasks", json=data.to_payload())
        return self._parse_task(result)

    async def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        """Replace every field of an existing task."""
        result = await self._request("PUT", f"/tasks/{task_id}", json=data.to_payload())
        return self._parse_task(result)

    async def delete_task(self, task_id: int) -> None:
        """Delete a task by ID."""
        await self._request("DELETE", f"/tasks/{task_id}")

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and decode the JSON response.

        Returns:
            Decoded JSON body, or None for empty responses (e.g. 204)

        Raises:
            TaskApiTransportError: Network failure or timeout
            TaskNotFoundError: 404 response
            TaskValidationError: 400/422 response
            TaskApiError: Other error status or undecodable body
        """
        logger.debug("%s %s: params=%s", method, path, params)

        start_time = time.monotonic()
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s %s failed after %.0fms: %s", method, path, elapsed_ms, e)
            raise TaskApiTransportError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000
        status = response.status_code

        if status == 404:
            logger.error("%s %s: 404 Not Found (%.0fms)", method, path, elapsed_ms)
            raise TaskNotFoundError(f"Task not found: {path}", status_code=status)
        if status in (400, 422):
            logger.error("%s %s: HTTP %d (%.0fms)", method, path, status, elapsed_ms)
            raise TaskValidationError(
                f"Invalid task data: {response.text or response.reason_phrase}",
                status_code=status,
            )
        if status >= 400:
            logger.error("%s %s: HTTP %d (%.0fms)", method, path, status, elapsed_ms)
            raise TaskApiError(f"HTTP {status}: {response.text}", status_code=status)

        logger.info("%s %s: %d (%.0fms)", method, path, status, elapsed_ms)

        if status == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error("%s %s: Invalid JSON response", method, path)
            raise TaskApiError(f"Invalid JSON response: {e}", status_code=status) from e

    @staticmethod
    def _parse_task(data: Any) -> Task:
        """Validate a task record from a response body."""
        try:
            return Task.model_validate(data)
        except ValidationError as e:
            raise TaskApiError(f"Malformed task in response: {e}") from e
