"""Configuration for error defaults and registry overrides."""

from __future__ import annotations

import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import pydantic
import yaml
from pydantic import BaseModel, Field

from .request_id import DEFAULT_LENGTH, MIN_LENGTH

CONFIG_ENV = "HTTP_ERRORS_CONFIG"


class ConfigurationError(ValueError):
    """Raised when the error configuration cannot be loaded."""

    def __init__(self, message: str, *, details: Any | None = None):
        super().__init__(message)
        self.details = details


class SchemaModel(BaseModel):
    """Strict base model for configuration sections."""

    model_config = pydantic.ConfigDict(extra="forbid", str_strip_whitespace=True)


class ErrorDefaults(SchemaModel):
    errno: int = 40000
    status: int = 400
    message: str = "UnknownError"
    request_id_length: int = Field(default=DEFAULT_LENGTH, ge=MIN_LENGTH)


class Settings(SchemaModel):
    defaults: ErrorDefaults = Field(default_factory=ErrorDefaults)
    status_codes: dict[int, str] = Field(default_factory=dict)
    errno_messages: dict[int, str] = Field(default_factory=dict)


# Shipped defaults; the effective ones are ``get_normalizer().defaults``.
DEFAULT_OPTIONS: Mapping[str, Any] = MappingProxyType(ErrorDefaults().model_dump())


def _config_path(path: str | Path | None) -> Path | None:
    if path is not None:
        return Path(path)
    configured = os.environ.get(CONFIG_ENV)
    if configured:
        return Path(configured)
    return None


def _load_yaml_config(path: Path | None) -> dict:
    if path is None or not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}") from exc


def parse_settings(payload: Mapping[str, Any] | None) -> Settings:
    payload = payload or {}
    try:
        return Settings.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ConfigurationError(
            "Invalid error configuration", details=exc.errors()
        ) from exc


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from ``path`` or the file named by ``$HTTP_ERRORS_CONFIG``.

    With neither set, or a missing file, the built-in defaults apply.
    """

    return parse_settings(_load_yaml_config(_config_path(path)))


__all__ = [
    "CONFIG_ENV",
    "ConfigurationError",
    "ErrorDefaults",
    "Settings",
    "DEFAULT_OPTIONS",
    "parse_settings",
    "load_settings",
]
