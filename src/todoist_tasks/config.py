"""Runtime settings using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.todoist.com/api/v1"


class Settings(BaseSettings):
    """Settings shared by every task invocation.

    Values are read from `TODOIST_*` environment variables or a `.env` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TODOIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Todoist REST API base URL")
    timeout_seconds: PositiveFloat = Field(default=30.0, description="HTTP timeout per request")
    max_pages: PositiveInt = Field(
        default=10_000,
        description="Upper bound on pages fetched by one listing before it is aborted",
    )
    spill_dir: Path | None = Field(
        default=None,
        description="Directory for temporary spill files (system temp dir when unset)",
    )
