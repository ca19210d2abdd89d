"""Logging helpers shared by the error package."""

from __future__ import annotations

import logging
from typing import Any

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
ROOT_LOGGER = "http_errors"


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    return logging.getLogger(name)


def error_context(error: Any) -> dict[str, Any]:
    """Return the ``extra`` fields attached to log records about ``error``."""

    return {
        "request_id": getattr(error, "request_id", "-"),
        "status": getattr(error, "status", None),
        "errno": getattr(error, "errno", None),
    }


__all__ = ["get_logger", "error_context"]
