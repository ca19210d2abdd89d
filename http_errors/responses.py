"""Flask glue turning :class:`ApiError` into JSON responses."""

from __future__ import annotations

from typing import Any

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from .errors import ApiError, render_cause
from .logging import error_context, get_logger

logger = get_logger(__name__)


def _http_status(error: ApiError) -> int:
    if 100 <= error.status <= 599:
        return error.status
    return 500


def _detailed_payload(error: ApiError) -> dict[str, Any]:
    payload = error.to_response_detailed()
    cause = payload["error"]["trackError"]
    if cause is not None:
        payload["error"]["trackError"] = render_cause(cause)
    return payload


def error_response(error: ApiError, *, detailed: bool = False) -> Response:
    """Return a JSON response for ``error``.

    The detailed body stringifies the cause; only use it for trusted clients.
    """

    payload = _detailed_payload(error) if detailed else error.to_response()
    response = jsonify(payload)
    response.status_code = _http_status(error)
    response.headers["X-Request-ID"] = error.request_id
    return response


def _log_error(error: ApiError) -> None:
    extra = {**error_context(error), "path": request.path, "method": request.method}
    if error.status >= 500:
        logger.error(error.diagnostic_string(), extra=extra, exc_info=error.track_error)
    else:
        logger.warning(error.diagnostic_string(), extra=extra)


def _wrap_exception(exc: Exception) -> ApiError:
    if isinstance(exc, ApiError):
        return exc
    if isinstance(exc, HTTPException) and exc.code:
        error = ApiError.new(exc.code)
    else:
        error = ApiError.new(500)
    return error.attach_cause(exc)


def install_error_handlers(
    app: Flask, *, detailed: bool | None = None, catch_all: bool = False
) -> None:
    """Register handlers rendering :class:`ApiError` on ``app``.

    With ``catch_all`` every other exception, routing errors included, is
    wrapped as an :class:`ApiError` with the original kept as its cause.
    """

    def _detailed() -> bool:
        if detailed is not None:
            return detailed
        return bool(app.config.get("HTTP_ERRORS_DETAILED", False))

    def _handle(exc: Exception) -> Response:
        error = _wrap_exception(exc)
        _log_error(error)
        return error_response(error, detailed=_detailed())

    app.register_error_handler(ApiError, _handle)
    if catch_all:
        app.register_error_handler(Exception, _handle)


__all__ = ["error_response", "install_error_handlers"]
