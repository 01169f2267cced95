"""Configuration management using Pydantic settings."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class LogLevel(str, Enum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class PolicySettings(BaseSettings):
    """Policy source settings."""

    model_config = SettingsConfigDict(env_prefix="POLICY_")

    files: Annotated[list[Path], NoDecode] = Field(
        default_factory=list,
        description="Policy documents loaded in order at startup",
    )
    include_defaults: bool = Field(
        default=False,
        description="Prepend the built-in default policies",
    )

    @field_validator("files", mode="before")
    @classmethod
    def parse_files(cls, v: str | list[str] | list[Path]) -> list[Path]:
        """Parse policy files from comma-separated string or list."""
        if isinstance(v, str):
            return [Path(p.strip()) for p in v.split(",") if p.strip()]
        return [Path(p) for p in v]


class ObservabilitySettings(BaseSettings):
    """Observability settings."""

    model_config = SettingsConfigDict(env_prefix="OBSERVABILITY_")

    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: Literal["json", "console"] = Field(default="json")
    metrics_enabled: bool = Field(default=True)
    service_name: str = Field(default="abacpolicy")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ABACPOLICY_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production", "test"] = Field(
        default="development"
    )

    # Component settings
    policy: PolicySettings = Field(default_factory=PolicySettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def load(cls) -> Settings:
        """Load settings from environment."""
        return cls()


# Global settings instance (lazy loaded)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def configure_settings(settings: Settings | None) -> None:
    """Configure the global settings instance (for testing)."""
    global _settings
    _settings = settings
