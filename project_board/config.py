"""Board settings loaded from YAML."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .drag_drop import PLAIN_TEXT
from .validation import Validatable

logger = logging.getLogger(__name__)

CONFIG_ENV = "PROJECT_BOARD_CONFIG"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(RuntimeError):
    """Raised when board settings cannot be read or do not validate."""


class FieldRules(BaseModel):
    """Constraints applied to one input form field."""

    model_config = ConfigDict(extra="forbid")

    required: bool = True
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None

    def validatable(self, name: str, value: Union[str, int, float]) -> Validatable:
        return Validatable(name=name, value=value, **self.model_dump())


class BoardSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: FieldRules = Field(default_factory=lambda: FieldRules(min_length=3))
    description: FieldRules = Field(default_factory=lambda: FieldRules(min_length=5))
    people: FieldRules = Field(default_factory=lambda: FieldRules(min_value=1, max_value=5))
    drag_media_type: str = PLAIN_TEXT
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{value}'. Expected one of: {', '.join(LOG_LEVELS)}.")
        return normalized


def _resolve_path(path: Optional[Union[str, Path]]) -> Optional[Path]:
    if path:
        return Path(path)
    env_value = os.getenv(CONFIG_ENV)
    if env_value:
        return Path(env_value)
    return None


def load_settings(path: Optional[Union[str, Path]] = None) -> BoardSettings:
    """Load settings from ``path`` or ``$PROJECT_BOARD_CONFIG``; defaults otherwise."""

    config_path = _resolve_path(path)
    if config_path is None:
        return BoardSettings()

    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read board config {config_path}: {exc}") from exc

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in board config {config_path}: {exc}") from exc

    if loaded is None:
        logger.debug("Board config %s is empty; using defaults", config_path)
        return BoardSettings()
    if not isinstance(loaded, dict):
        raise ConfigError(f"Board config {config_path} must be a mapping, got {type(loaded).__name__}.")

    try:
        settings = BoardSettings.model_validate(loaded)
    except ValidationError as exc:
        raise ConfigError(f"Board config {config_path} failed validation: {exc}") from exc

    logger.debug("Loaded board config from %s", config_path)
    return settings


__all__ = ["CONFIG_ENV", "LOG_LEVELS", "BoardSettings", "ConfigError", "FieldRules", "load_settings"]
