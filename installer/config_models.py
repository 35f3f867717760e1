# installer/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for installer configuration.

This module defines the structured settings for the installer, including
defaults, type annotations, and descriptions. Values can be overridden by
environment variables (``SYSCGO_`` prefix), a YAML file and the command line.
"""

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env/cli) ---
INSTALL_DIR_DEFAULT: Path = Path("/usr/local/bin")
GO_COMMAND_DEFAULT: str = "go"
TASK_DELAY_SECONDS_DEFAULT: float = 0.2
TICK_INTERVAL_SECONDS_DEFAULT: float = 0.1
LOG_LEVEL_DEFAULT: str = "INFO"
LOG_LEVELS: tuple = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
PROJECT_MARKER_FILE: str = "go.mod"

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "critical": "🔥",
    "sparkles": "✨",
    "debug": "🐛",
}


class BinarySpec(BaseModel):
    """A binary built from the Go module and copied into the install directory."""

    name: str = Field(description="Output file name, also the installed name.")
    package: str = Field(
        description="Go package path passed to `go build`, relative to the project root."
    )

    @field_validator("name")
    @classmethod
    def _name_is_plain_file_name(cls, value: str) -> str:
        if not value or "/" in value or value in (".", ".."):
            raise ValueError(
                f"binary name must be a plain file name, got {value!r}"
            )
        return value


def _default_binaries() -> List[BinarySpec]:
    return [
        BinarySpec(name="syscgo", package="./cmd/syscgo"),
        BinarySpec(name="syscgo-tui", package="./cmd/syscgo-tui"),
    ]


class AppSettings(BaseSettings):
    """Main installer settings."""

    model_config = SettingsConfigDict(env_prefix="SYSCGO_", extra="ignore")

    install_dir: Path = Field(
        default=INSTALL_DIR_DEFAULT,
        description="System directory the binaries are installed into.",
    )
    project_root: Optional[Path] = Field(
        default=None,
        description=f"Go module root to build from. Discovered via {PROJECT_MARKER_FILE} when unset.",
    )
    go_command: str = Field(
        default=GO_COMMAND_DEFAULT, description="Go toolchain executable."
    )
    binaries: List[BinarySpec] = Field(
        default_factory=_default_binaries,
        min_length=1,
        description="Binaries to build, install and remove, in pipeline order.",
    )
    task_delay_seconds: float = Field(
        default=TASK_DELAY_SECONDS_DEFAULT,
        ge=0,
        description="Pause before each task so progress stays visible.",
    )
    tick_interval_seconds: float = Field(
        default=TICK_INTERVAL_SECONDS_DEFAULT,
        gt=0,
        description="Interval of the busy indicator animation.",
    )
    log_level: str = Field(
        default=LOG_LEVEL_DEFAULT, description="Root logging level."
    )

    symbols: Dict[str, str] = Field(
        default_factory=lambda: SYMBOLS_DEFAULT.copy()
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{value}'"
            )
        return level

    @property
    def binary_names(self) -> List[str]:
        return [binary.name for binary in self.binaries]
