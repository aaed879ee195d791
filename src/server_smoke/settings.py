"""Typed configuration backed by environment variables."""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path
from typing import ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_ENV_FILES: tuple[Path, ...] = (
    Path(".env"),
    Path("config/.env"),
)


class Settings(BaseSettings):
    """Harness configuration loaded from ``SERVER_SMOKE_*`` variables and optional `.env` files."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="SERVER_SMOKE_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    headless: str | None = Field(
        default=None,
        description="Value of the 'headless' process property consulted by CI detection.",
    )
    log_level: str = Field(default="INFO", description="Root log level for the harness.")
    log_dir: Path | None = Field(
        default=None,
        description="Directory for rotating log files. Console only when unset.",
    )
    json_logs: bool = Field(
        default=False,
        description="Also write structured JSON lines next to the plain log file.",
    )
    log_max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    log_backup_count: int = Field(default=5, ge=0)

    def process_properties(self) -> dict[str, str]:
        """Expose settings that act as process-level properties."""
        properties: dict[str, str] = {}
        if self.headless is not None:
            properties["headless"] = self.headless
        return properties


def _existing_env_files() -> list[str]:
    return [str(path) for path in _DEFAULT_ENV_FILES if path.exists()]


@lru_cache
def get_settings(_env_files: Sequence[str] | None = None) -> Settings:
    """Load settings once per process, respecting `.env` fallbacks."""
    env_files = list(_env_files) if _env_files is not None else _existing_env_files()
    if env_files:
        return Settings(_env_file=env_files)
    return Settings()


__all__ = ["Settings", "get_settings"]
