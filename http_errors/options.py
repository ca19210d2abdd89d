"""Normalization of arbitrary error inputs into canonical error fields.

Every accepted input shape is first classified into one variant of
:data:`OptionsInput`, then resolved into candidate fields, and finally
assembled into :class:`ErrorFields` with defaults applied. Nothing on this
path raises: unusable input is logged and kept as the tracked cause.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

from .config import ErrorDefaults, Settings
from .logging import get_logger
from .registry import ErrnoMessageRegistry, StatusCodeRegistry, errno_status
from .request_id import generate_request_id

logger = get_logger(__name__)

# canonical field -> accepted alias
_ALIASES: dict[str, str] = {
    "errno": "code",
    "status": "status_code",
    "message": "error_msg",
    "trackError": "track_error",
}


@dataclass(frozen=True, slots=True)
class StatusCodeInput:
    status: int


@dataclass(frozen=True, slots=True)
class ErrnoInput:
    errno: int


@dataclass(frozen=True, slots=True)
class MessageInput:
    message: str


@dataclass(frozen=True, slots=True)
class CanonicalInput:
    error: Any


@dataclass(frozen=True, slots=True)
class CauseInput:
    cause: BaseException


@dataclass(frozen=True, slots=True)
class FieldsInput:
    fields: Mapping[Any, Any]


@dataclass(frozen=True, slots=True)
class UnrecognizedInput:
    value: Any


OptionsInput = Union[
    StatusCodeInput,
    ErrnoInput,
    MessageInput,
    CanonicalInput,
    CauseInput,
    FieldsInput,
    UnrecognizedInput,
]


@dataclass(frozen=True, slots=True)
class ErrorFields:
    """Canonical field set of an error entity."""

    errno: int
    status: int
    message: str
    name: str
    request_id: str
    track_error: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "errno": self.errno,
            "message": self.message,
            "trackError": self.track_error,
            "name": self.name,
            "request_id": self.request_id,
        }


def _first(*values: Any) -> Any:
    for value in values:
        if value:
            return value
    return None


def _as_int(value: Any, field: str) -> int | None:
    if value is None or value == "":
        return None
    if not isinstance(value, bool):
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            pass
    shown = value if isinstance(value, str) else type(value).__name__
    logger.warning("Ignoring non-numeric %s %r", field, shown)
    return None


def _as_str(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return str(value)


class OptionsNormalizer:
    """Map any error input onto :class:`ErrorFields` using injected registries."""

    def __init__(
        self,
        status_codes: StatusCodeRegistry | None = None,
        errno_messages: ErrnoMessageRegistry | None = None,
        defaults: ErrorDefaults | None = None,
        *,
        canonical_type: type | None = None,
    ) -> None:
        self.status_codes = status_codes if status_codes is not None else StatusCodeRegistry()
        self.errno_messages = (
            errno_messages if errno_messages is not None else ErrnoMessageRegistry()
        )
        self.defaults = defaults or ErrorDefaults()
        self.canonical_type = canonical_type

    @classmethod
    def from_settings(
        cls, settings: Settings, *, canonical_type: type | None = None
    ) -> "OptionsNormalizer":
        status_codes = StatusCodeRegistry(settings.status_codes)
        errno_messages = ErrnoMessageRegistry(
            settings.errno_messages, status_codes=status_codes
        )
        return cls(
            status_codes,
            errno_messages,
            settings.defaults,
            canonical_type=canonical_type,
        )

    def classify(self, options: Any) -> OptionsInput:
        if isinstance(options, bool):
            return UnrecognizedInput(options)
        if isinstance(options, int):
            if options in self.status_codes:
                return StatusCodeInput(options)
            return ErrnoInput(options)
        if isinstance(options, str):
            return MessageInput(options)
        if self.canonical_type is not None and isinstance(options, self.canonical_type):
            return CanonicalInput(options)
        if isinstance(options, BaseException):
            return CauseInput(options)
        if isinstance(options, Mapping):
            return FieldsInput(options)
        return UnrecognizedInput(options)

    def resolve(self, variant: OptionsInput) -> dict[Any, Any]:
        """Return the candidate fields for ``variant`` before defaults apply."""

        if isinstance(variant, StatusCodeInput):
            return {
                "status": variant.status,
                "errno": variant.status * 100,
                "message": self.status_codes.phrase(variant.status),
            }
        if isinstance(variant, ErrnoInput):
            status = errno_status(variant.errno)
            if status is None:
                logger.warning("Ignoring errno too large to render")
                return {}
            message = self.errno_messages.message(variant.errno)
            if message is None:
                message = self.status_codes.phrase(status)
            resolved: dict[Any, Any] = {"errno": variant.errno, "status": status}
            if message is not None:
                resolved["message"] = message
            return resolved
        if isinstance(variant, MessageInput):
            return {"message": variant.message}
        if isinstance(variant, CanonicalInput):
            return variant.error.to_dict()
        if isinstance(variant, CauseInput):
            return {"trackError": variant.cause}
        if isinstance(variant, FieldsInput):
            return dict(variant.fields)
        logger.warning("Unrecognized error options %r, keeping it as the cause", variant.value)
        return {"trackError": variant.value}

    def _candidate(self, resolved: Mapping[Any, Any], field: str) -> Any:
        alias = _ALIASES.get(field)
        return _first(resolved.get(field), resolved.get(alias) if alias else None)

    def assemble(self, resolved: Mapping[Any, Any], *, name: str) -> ErrorFields:
        defaults = self.defaults
        errno = _as_int(resolved.get("errno"), "errno")
        if not errno:
            errno = _as_int(resolved.get("code"), "code")
        status = _as_int(resolved.get("status"), "status")
        if not status:
            status = _as_int(resolved.get("status_code"), "status_code")
        request_id = _as_str(resolved.get("request_id"))
        return ErrorFields(
            errno=errno or defaults.errno,
            status=status or defaults.status,
            message=_as_str(self._candidate(resolved, "message")) or defaults.message,
            name=_as_str(resolved.get("name")) or name,
            request_id=request_id or generate_request_id(defaults.request_id_length),
            track_error=self._candidate(resolved, "trackError"),
        )

    def normalize(self, options: Any, *, name: str = "ApiError") -> ErrorFields:
        return self.assemble(self.resolve(self.classify(options)), name=name)


__all__ = [
    "StatusCodeInput",
    "ErrnoInput",
    "MessageInput",
    "CanonicalInput",
    "CauseInput",
    "FieldsInput",
    "UnrecognizedInput",
    "OptionsInput",
    "ErrorFields",
    "OptionsNormalizer",
]
