from __future__ import annotations

import sys

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DevModeSettings(BaseSettings):
    """
    The dev-mode flag alone.

    ``TEXTPOLICY_DEV_MODE`` turns it on; it is also on when the interpreter
    runs in dev mode (``-X dev`` or ``PYTHONDEVMODE``).
    """

    model_config = SettingsConfigDict(
        env_prefix="TEXTPOLICY_",
        case_sensitive=False,
        extra="ignore",
    )

    dev_mode: bool = Field(default=False, validate_default=True)

    @field_validator("dev_mode")
    @classmethod
    def _interpreter_dev_mode(cls, v: bool) -> bool:
        return v or bool(sys.flags.dev_mode)


class Settings(DevModeSettings):
    log_level: str = "INFO"
    capture_warnings: bool = True

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"unknown log level: {v!r}")
        return level
