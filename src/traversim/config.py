"""Configuration settings and loading."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from traversim.errors import ConfigValidationError, ErrorContext
from traversim.frontier import Strategy

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class SimulatorConfig(BaseSettings):
    """Configuration for the traversal simulator."""

    model_config = SettingsConfigDict(
        env_prefix="TRAVERSIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    step_interval: float = Field(default=1.0, description="Seconds between auto-play steps")
    default_strategy: str = "bfs"
    slot_count: int = 3
    slot_file: str | None = Field(default=None, description="JSON file backing the save slots")
    log_display_limit: int = 50
    log_level: str = "WARNING"

    @field_validator("step_interval")
    @classmethod
    def validate_step_interval(cls, v: float) -> float:
        if v <= 0:
            raise ConfigValidationError(
                message="step_interval must be greater than zero",
                field="step_interval",
                value=v,
            )
        return v

    @field_validator("default_strategy", mode="before")
    @classmethod
    def validate_strategy(cls, v: str) -> str:
        try:
            return Strategy.parse(v).value
        except ValueError:
            raise ConfigValidationError(
                message=f"Invalid default_strategy: {v!r}. Valid: bfs, dfs",
                field="default_strategy",
                value=v,
                context=ErrorContext(extra={"valid_strategies": ["bfs", "dfs"]}),
            ) from None

    @field_validator("slot_count")
    @classmethod
    def validate_slot_count(cls, v: int) -> int:
        if v < 1:
            raise ConfigValidationError(
                message="slot_count must be at least 1",
                field="slot_count",
                value=v,
            )
        return v

    @field_validator("log_display_limit")
    @classmethod
    def validate_log_display_limit(cls, v: int) -> int:
        if v < 0:
            raise ConfigValidationError(
                message="log_display_limit cannot be negative",
                field="log_display_limit",
                value=v,
            )
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                message=f"Invalid log_level: {v!r}. Valid: {sorted(VALID_LOG_LEVELS)}",
                field="log_level",
                value=v,
            )
        return level

    @property
    def strategy(self) -> Strategy:
        return Strategy.parse(self.default_strategy)

    def configure_logging(self) -> None:
        """Apply ``log_level`` to the root logger."""
        logging.basicConfig(
            level=getattr(logging, self.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def load_config(config_path: str | Path | None = None) -> SimulatorConfig:
    """Load configuration from file and environment.

    Priority: env vars > config file > defaults
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if config_path.exists():
            with open(config_path) as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ConfigValidationError(
                    message=f"Configuration must be a YAML mapping, got {type(loaded).__name__}",
                    context=ErrorContext(extra={"path": str(config_path)}),
                )
            config_data = loaded

    config_data.update(_get_env_overrides())

    return SimulatorConfig(**config_data)


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    env_mappings = {
        "TRAVERSIM_STEP_INTERVAL": ("step_interval", float),
        "TRAVERSIM_DEFAULT_STRATEGY": "default_strategy",
        "TRAVERSIM_SLOT_COUNT": ("slot_count", int),
        "TRAVERSIM_SLOT_FILE": "slot_file",
        "TRAVERSIM_LOG_DISPLAY_LIMIT": ("log_display_limit", int),
        "TRAVERSIM_LOG_LEVEL": "log_level",
    }

    for env_key, config_key in env_mappings.items():
        value = os.environ.get(env_key)
        if value is not None:
            if isinstance(config_key, tuple):
                key, converter = config_key
                overrides[key] = converter(value)
            else:
                overrides[config_key] = value

    return overrides


__all__ = ["SimulatorConfig", "load_config"]
