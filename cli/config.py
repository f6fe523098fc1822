"""Configuration management.

Values come from ~/.archscan/config.json, overridden by ARCHSCAN_* environment
variables. The scan root is fixed and deliberately not configurable.
"""

import json
import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ValidationError, field_validator

CONFIG_DIR = Path.home() / ".archscan"
CONFIG_FILE = CONFIG_DIR / "config.json"

ENV_PREFIX = "ARCHSCAN_"

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Resolved CLI settings"""

    prober: Literal["file", "macho"] = "file"
    file_command: str = "file"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


class ConfigError(ValueError):
    pass


def load_config_file(path: Path = CONFIG_FILE) -> dict:
    """Load config from file."""
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    return data


def env_overrides() -> dict:
    overrides = {}
    for field_name in Settings.model_fields:
        value = os.environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        if value:
            overrides[field_name] = value
    return overrides


def get_settings(path: Optional[Path] = None) -> Settings:
    """Merge file and environment config into validated settings."""
    data = load_config_file(path or CONFIG_FILE)
    data.update(env_overrides())
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
