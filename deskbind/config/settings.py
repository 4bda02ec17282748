"""Configuration management for deskbind."""

import sys
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def default_dll_name() -> str:
    """Pick the AutoItX3 build matching the interpreter's bitness."""
    if sys.maxsize > 2 ** 32:
        return "AutoItX3_x64.dll"
    return "AutoItX3.dll"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="DESKBIND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # AutoItX3 Configuration
    au3_dll_path: Path = Field(
        default_factory=lambda: Path(default_dll_name()),
        description="Path to AutoItX3.dll (or AutoItX3_x64.dll)",
    )
    au3_buffer_size: int = Field(
        default=8192,
        ge=256,
        description="Size in characters of output buffers passed to AutoItX3",
    )
    au3_title_match_mode: int = Field(
        default=1,
        ge=1,
        le=4,
        description="AutoIt WinTitleMatchMode applied when the library is loaded",
    )

    # X11 Tool Configuration
    xdotool_command: str = Field(default="xdotool", description="xdotool executable")
    xsel_command: str = Field(default="xsel", description="xsel executable")
    xwininfo_command: str = Field(default="xwininfo", description="xwininfo executable")
    xkill_command: str = Field(default="xkill", description="xkill executable")
    x_display: Optional[str] = Field(
        default=None,
        description="Override DISPLAY for X11 tools (e.g., ':1')",
    )
    tool_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for a single X11 tool invocation",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: str = Field(
        default="text",
        description="Log format (json or text)",
    )
    log_file: Optional[str] = Field(
        default=None, description="Log file path"
    )

    @field_validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("log_format")
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        if v not in ["json", "text"]:
            raise ValueError(f"Invalid log format: {v}")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    # Load .env file if it exists
    env_file = Path(".env")
    if env_file.exists():
        load_dotenv(env_file)

    return Settings()
