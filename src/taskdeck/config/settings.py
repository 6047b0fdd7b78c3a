"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    api_base_url: str = Field(
        default="http://localhost:8080/api/v1",
        description="Base URL of the task REST API",
    )

    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )

    default_limit: int | None = Field(
        default=None,
        gt=0,
        description="Maximum number of tasks to load (None for all)",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "TASKDECK_",
    }
