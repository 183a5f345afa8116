"""Runtime configuration, read from ``ORDERHUB_*`` environment variables or ``.env``."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Relative to the working directory the tool is run from.
DEFAULT_DATA_DIR = Path("data")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ORDERHUB_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    database_url: str = Field(
        default=f"sqlite:///{(DEFAULT_DATA_DIR / 'orderhub.db').as_posix()}",
        description="SQLAlchemy URL of the order store",
    )
    echo_sql: bool = False
    log_level: str = "WARNING"
