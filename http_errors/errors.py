"""The canonical API error and its factory helpers."""

from __future__ import annotations

from typing import Any, Mapping, NoReturn

from .config import ConfigurationError, Settings, load_settings
from .logging import get_logger
from .options import ErrorFields, OptionsNormalizer

logger = get_logger(__name__)

_normalizer: OptionsNormalizer | None = None


def get_normalizer() -> OptionsNormalizer:
    """Return the process-wide normalizer, building it from settings on first use.

    An unusable configuration file is logged and the built-in defaults are
    used instead, so signalling an error never fails on configuration.
    """

    global _normalizer
    if _normalizer is None:
        try:
            settings = load_settings()
        except ConfigurationError as exc:
            logger.error("%s, using built-in defaults", exc, extra={"details": exc.details})
            settings = Settings()
        _normalizer = OptionsNormalizer.from_settings(settings, canonical_type=ApiError)
    return _normalizer


def configure(
    settings: Settings | None = None,
    *,
    status_codes: Mapping[int, str] | None = None,
    errno_messages: Mapping[int, str] | None = None,
) -> OptionsNormalizer:
    """Rebuild the registries at application startup.

    ``status_codes`` and ``errno_messages`` extend whatever ``settings``
    (or the loaded configuration file) already declares.
    """

    global _normalizer
    settings = settings or load_settings()
    if status_codes or errno_messages:
        settings = settings.model_copy(
            update={
                "status_codes": {**settings.status_codes, **(status_codes or {})},
                "errno_messages": {**settings.errno_messages, **(errno_messages or {})},
            }
        )
    _normalizer = OptionsNormalizer.from_settings(settings, canonical_type=ApiError)
    return _normalizer


def render_cause(cause: Any) -> str:
    if isinstance(cause, BaseException):
        return f"{type(cause).__name__}: {cause}"
    return str(cause)


class ApiError(Exception):
    """Single error type carrying errno, HTTP status, message and request id.

    Accepts an HTTP status or errno ``int``, a message ``str``, a mapping of
    fields, a foreign exception, or another :class:`ApiError`. Prefer
    :meth:`new`, which returns an existing instance unchanged.
    """

    def __init__(self, options: Any = None) -> None:
        fields = get_normalizer().normalize(options, name=type(self).__name__)
        super().__init__(fields.message)
        self._fields = fields

    @classmethod
    def new(cls, options: Any = None) -> "ApiError":
        if isinstance(options, ApiError):
            return options
        return cls(options)

    @property
    def name(self) -> str:
        return self._fields.name

    @property
    def errno(self) -> int:
        return self._fields.errno

    @property
    def status(self) -> int:
        return self._fields.status

    @property
    def message(self) -> str:
        return self._fields.message

    @property
    def request_id(self) -> str:
        return self._fields.request_id

    @property
    def track_error(self) -> Any:
        return self._fields.track_error

    @property
    def fields(self) -> ErrorFields:
        return self._fields

    def attach_cause(self, cause: BaseException) -> "ApiError":
        """Replace the tracked cause; the only change allowed after construction."""

        self._fields = ErrorFields(
            errno=self.errno,
            status=self.status,
            message=self.message,
            name=self.name,
            request_id=self.request_id,
            track_error=cause,
        )
        return self

    def diagnostic_string(self) -> str:
        """Render the error for server-side logs, including the cause."""

        text = f"[{self.errno}] {self.name}: {self.message} - {self.status} - {self.request_id}"
        if self.track_error is not None:
            text += f"\n{render_cause(self.track_error)}"
        return text

    def __str__(self) -> str:
        return self.diagnostic_string()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(errno={self.errno}, status={self.status}, "
            f"message={self.message!r}, request_id={self.request_id!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Full field set, cause included. Not for client transmission."""

        return self._fields.to_dict()

    def to_response(self) -> dict[str, Any]:
        """Minimal client payload; never carries the cause."""

        return {
            "code": self.errno,
            "error": self.message,
            "request_id": self.request_id,
        }

    def to_response_detailed(self) -> dict[str, Any]:
        """Richer payload that does include ``trackError``.

        Callers sending this to untrusted clients must scrub the cause.
        """

        return {
            "request_id": self.request_id,
            "error": {
                "name": self.name,
                "errno": self.errno,
                "message": self.message,
                "trackError": self.track_error,
            },
        }


api_error = ApiError.new


def abort(options: Any = None, cause: Any = None) -> NoReturn:
    """Normalize ``options`` and raise the resulting :class:`ApiError`.

    ``cause`` replaces the tracked error only when it is an exception.
    """

    error = ApiError.new(options)
    if isinstance(cause, BaseException):
        error.attach_cause(cause)
    raise error


__all__ = [
    "ApiError",
    "api_error",
    "abort",
    "configure",
    "get_normalizer",
    "render_cause",
]
