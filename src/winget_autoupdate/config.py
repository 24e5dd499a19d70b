"""Configuration management for winget-autoupdate."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_PACKAGE_MANAGER = "winget"

DEFAULT_UPGRADE_ARGS: tuple[str, ...] = (
    "upgrade",
    "--all",
    "--accept-source-agreements",
    "--accept-package-agreements",
    "--silent",
)

DEFAULT_VERSION_ARGS: tuple[str, ...] = ("--version",)


def default_log_root() -> Path:
    """Return the machine-wide log directory, or a per-user one off Windows."""
    program_data = os.environ.get("ProgramData")
    if program_data:
        return Path(program_data) / "WingetAutoUpdate" / "logs"
    return Path.home() / ".winget-autoupdate" / "logs"


@dataclass(frozen=True)
class OrchestratorConfig:
    """Everything an update run needs to know, fixed for its lifetime."""

    log_root: Path
    package_manager: str = DEFAULT_PACKAGE_MANAGER
    upgrade_args: tuple[str, ...] = DEFAULT_UPGRADE_ARGS
    version_args: tuple[str, ...] = DEFAULT_VERSION_ARGS
    command_timeout: float | None = 3600
    version_timeout: float | None = 60


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WINGET_AUTOUPDATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Audit log
    log_root: Path = Field(
        default_factory=default_log_root, description="Directory for dated audit logs"
    )

    # Package manager
    package_manager: str = Field(
        default=DEFAULT_PACKAGE_MANAGER, description="Executable resolved on PATH"
    )
    upgrade_args: Annotated[
        list[str],
        NoDecode,
        Field(
            default_factory=lambda: list(DEFAULT_UPGRADE_ARGS),
            description="Arguments for the upgrade-all command",
        ),
    ]
    version_args: Annotated[
        list[str],
        NoDecode,
        Field(
            default_factory=lambda: list(DEFAULT_VERSION_ARGS),
            description="Arguments for the version query",
        ),
    ]
    command_timeout: float | None = Field(
        default=3600, gt=0, description="Upgrade timeout in seconds"
    )
    version_timeout: float | None = Field(
        default=60, gt=0, description="Version query timeout in seconds"
    )

    # Application
    environment: str = Field(default="production", description="Environment name")
    log_level: str = Field(default="INFO", description="Diagnostic logging level")

    @field_validator("upgrade_args", "version_args", mode="before")
    @classmethod
    def _split_args(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.split()
        return value

    @field_validator("package_manager")
    @classmethod
    def _require_executable(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("package_manager must not be empty")
        return value

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    def to_orchestrator_config(self) -> OrchestratorConfig:
        """Freeze the settings into the value the orchestrator runs with."""
        return OrchestratorConfig(
            log_root=self.log_root,
            package_manager=self.package_manager,
            upgrade_args=tuple(self.upgrade_args),
            version_args=tuple(self.version_args),
            command_timeout=self.command_timeout,
            version_timeout=self.version_timeout,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
