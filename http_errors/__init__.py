"""Normalize status codes, errnos, messages and exceptions into one API error."""

from __future__ import annotations

from .config import DEFAULT_OPTIONS, ConfigurationError, Settings, load_settings
from .errors import ApiError, abort, api_error, configure, get_normalizer
from .options import ErrorFields, OptionsNormalizer
from .registry import (
    DEFAULT_ERRNO_MESSAGES,
    HTTP_STATUS_CODES,
    ErrnoMessageRegistry,
    StatusCodeRegistry,
)
from .request_id import generate_request_id, random_string

__all__ = [
    "ApiError",
    "api_error",
    "abort",
    "configure",
    "get_normalizer",
    "ConfigurationError",
    "Settings",
    "load_settings",
    "DEFAULT_OPTIONS",
    "ErrorFields",
    "OptionsNormalizer",
    "HTTP_STATUS_CODES",
    "DEFAULT_ERRNO_MESSAGES",
    "StatusCodeRegistry",
    "ErrnoMessageRegistry",
    "generate_request_id",
    "random_string",
]
