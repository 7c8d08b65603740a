"""Process-level settings, read from TASKBOARD_* environment variables.

Board layout and storage live in ``taskboard.yml``; these settings only say
where that file is, how loudly to log, and optionally which companion service
to talk to for this run.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from ..models import StoreConfig


class Settings(BaseSettings):
    """Settings for one taskboard process."""

    project_root: Path = Field(
        default=Path(),
        description="Directory holding taskboard.yml and the .taskboard/ data directory",
    )

    store_url: str | None = Field(
        default=None,
        description="Companion service URL; switches the store to the http backend",
    )

    verbose: int = Field(
        default=0,
        ge=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Write logs here as well as (or instead of) stderr",
    )

    model_config = {
        "env_prefix": "TASKBOARD_",
    }

    @field_validator("store_url")
    @classmethod
    def validate_store_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"store_url must be an http(s) URL, got '{v}'")
        return v

    def resolve_store(self, store: StoreConfig) -> StoreConfig:
        """Apply the store_url override to the configured store."""
        if self.store_url is None:
            return store
        return store.model_copy(update={"backend": "http", "url": self.store_url})
