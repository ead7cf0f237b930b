"""Service settings, loaded from an optional JSON file plus environment overrides."""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_PATH_ENV = "DWZ_CONFIG"
LOG_LEVEL_ENV = "DWZ_LOG_LEVEL"
PORT_ENV = "DWZ_PORT"

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class ConfigurationError(Exception):
    """Raised when the settings file cannot be loaded or holds invalid values."""


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    service_name: str = "die-with-zero"
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="Origins allowed to call /api/* from a browser.",
    )
    log_level: str = Field("INFO", description="loguru level name.")
    log_file: Optional[str] = Field(
        None, description="Optional path of a rotating log file."
    )
    port: int = Field(5000, ge=1, le=65535)

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level '{v}'")
        return level


def load_config_from_json(file_path: str) -> Dict[str, Any]:
    """Loads and returns the settings dictionary from a JSON file."""
    if not os.path.exists(file_path):
        raise ConfigurationError(f"Configuration file not found at: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Error parsing JSON file '{file_path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration file '{file_path}' must contain a JSON object"
        )
    return data


def load_settings(
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build Settings from (in increasing priority):
      1) field defaults
      2) the JSON file at `path`, or at $DWZ_CONFIG when no path is given
      3) $DWZ_LOG_LEVEL and $DWZ_PORT
    """
    env = os.environ if environ is None else environ

    values: Dict[str, Any] = {}
    config_path = path or env.get(CONFIG_PATH_ENV)
    if config_path:
        logger.info(f"Loading settings from: {config_path}")
        values.update(load_config_from_json(config_path))

    if env.get(LOG_LEVEL_ENV):
        values["log_level"] = env[LOG_LEVEL_ENV]
    if env.get(PORT_ENV):
        values["port"] = env[PORT_ENV]

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
