"""Task REST API access."""

from .client import (
    TaskApiClient,
    TaskApiError,
    TaskApiTransportError,
    TaskNotFoundError,
    TaskValidationError,
)
from .protocol import TaskApiProtocol

__all__ = [
    "TaskApiClient",
    "TaskApiError",
    "TaskApiProtocol",
    "TaskApiTransportError",
    "TaskNotFoundError",
    "TaskValidationError",
]
