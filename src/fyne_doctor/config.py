"""
Consolidated configuration system for fyne-doctor.

This module provides the Pydantic-based settings (overridable through
FYNE_DOCTOR_* environment variables) and the immutable per-run configuration
built by the command line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.types import Category

# =============================================================================
# PROBE SETTINGS
# =============================================================================

class ProbeSettings(BaseModel):
    """Subprocess and version-rule settings for dependency probes."""

    default_timeout_sec: Annotated[float, Field(
        gt=0.0,
        description="Wall-clock limit for each probe subprocess in seconds"
    )] = 5.0

    min_wasm_go_version: Annotated[str, Field(
        min_length=1,
        description="Substring the Go version must contain for WebAssembly builds"
    )] = "go1.16"


# =============================================================================
# REPORT SETTINGS
# =============================================================================

class ReportSettings(BaseModel):
    """Layout of the rendered report tables."""

    description_width: Annotated[int, Field(
        ge=8,
        description="Descriptions longer than this are cut and end with '...'"
    )] = 35

    version_width: Annotated[int, Field(
        ge=4,
        description="Maximum width of the version column"
    )] = 11

    console_width: Annotated[int, Field(
        ge=60,
        description="Width used when rendering tables to text"
    )] = 120


# =============================================================================
# RUN CONFIGURATION
# =============================================================================

class DoctorConfig(BaseModel):
    """Per-run configuration accepted by the doctor entry point."""

    model_config = ConfigDict(frozen=True)

    verbose: bool = False
    json_output: bool = False
    categories: list[Category] = []
    timeout: Annotated[float, Field(gt=0.0)] = 5.0
    output_file: Path | None = None
    strict: bool = False

    @field_validator('categories')
    @classmethod
    def dedupe_categories(cls, v):
        """Drop repeated categories, keeping the first occurrence."""
        seen: list[Category] = []
        for category in v:
            if category not in seen:
                seen.append(category)
        return seen


# =============================================================================
# MAIN APPLICATION CONFIGURATION
# =============================================================================

class AppConfig(BaseSettings):
    """
    Main application configuration with environment variable support.

    All settings can be overridden via environment variables with FYNE_DOCTOR_ prefix.
    Example: FYNE_DOCTOR_PROBE__DEFAULT_TIMEOUT_SEC=10
    """

    model_config = SettingsConfigDict(
        env_prefix="FYNE_DOCTOR_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    probe: ProbeSettings = ProbeSettings()
    report: ReportSettings = ReportSettings()


# =============================================================================
# DEFAULT INSTANCE
# =============================================================================

app_config = AppConfig()

DEFAULT_TIMEOUT_SEC = app_config.probe.default_timeout_sec
MIN_WASM_GO_VERSION = app_config.probe.min_wasm_go_version
DESCRIPTION_WIDTH = app_config.report.description_width
VERSION_WIDTH = app_config.report.version_width
CONSOLE_WIDTH = app_config.report.console_width


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def create_config_from_env() -> AppConfig:
    """Create a new configuration instance from environment variables."""
    return AppConfig()
