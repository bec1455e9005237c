"""Typed view of the ``config:`` section of config.yaml."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field, field_validator

Environment = Literal["development", "production", "test"]


class AppConfig(BaseModel):
    name: str = Field(default="supermarket", description="Application name")
    environment: Environment = Field(default="development", description="Deployment environment")


class LoggingConfig(BaseModel):
    """Loguru sinks: stderr always, plus an optional rotating file."""

    level: str = Field(default="INFO", description="Minimum level for every sink")
    format: Literal["json", "plain"] = Field(default="plain", description="File sink format")
    file: str | None = Field(default=None, description="Log file path; no file sink when empty")
    max_size_mb: int = Field(default=10, gt=0, description="Rotate the file at this size")
    backup_count: int = Field(default=5, ge=0, description="Rotated files to keep")

    @field_validator("level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("file")
    @classmethod
    def _blank_file_is_none(cls, value: str | None) -> str | None:
        return value or None


class DatabaseConfig(BaseModel):
    """Connection settings. Pool options only apply to server databases."""

    url: str = Field(default="sqlite:///./supermarket.db", description="SQLAlchemy database URL")
    echo: bool = Field(default=False, description="Echo SQL statements")
    pool_size: int = Field(default=5, ge=1)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout: int = Field(default=30, ge=0, description="Seconds to wait for a connection")
    pool_recycle: int = Field(default=1800, description="Seconds before a connection is recycled")

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def is_memory(self) -> bool:
        """SQLite database that lives only as long as its connection."""
        return self.is_sqlite and (":memory:" in self.url or self.url.rstrip("/") == "sqlite:")


class ConfigData(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
