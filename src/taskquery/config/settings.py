"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings, overridable with TASKQUERY_* environment variables."""

    project_root: Path = Field(
        default=Path(),
        description="Directory holding taskquery.yml and the markdown documents",
    )

    tasks_file: Path | None = Field(
        default=None,
        description="Task file to search (default: <project_root>/tasks.yaml)",
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
        "env_prefix": "TASKQUERY_",
    }
