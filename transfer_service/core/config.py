"""Application configuration using pydantic settings with structured sections."""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./transfer.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    create_tables: bool = True


class FeeSettings(BaseModel):
    """Rates applied by the transfer engine and the commission job."""

    fee_percentage: Decimal = Field(default=Decimal("0.005"), ge=0)
    commission_percentage: Decimal = Field(default=Decimal("0.2"), ge=0)
    fee_cap: Decimal = Field(default=Decimal("100"), ge=0)


class SchedulerSettings(BaseModel):
    enabled: bool = True
    timezone: str = "Africa/Lagos"
    commission_hour: int = Field(default=1, ge=0, le=23)
    summary_hour: int = Field(default=2, ge=0, le=23)

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value


class LoggingSettings(BaseModel):
    level: str = "INFO"
    file: Optional[Path] = None
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Transfer Service"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    fees: FeeSettings = FeeSettings()
    scheduler: SchedulerSettings = SchedulerSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def timezone(self) -> ZoneInfo:
        return ZoneInfo(self.scheduler.timezone)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
