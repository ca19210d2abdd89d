"""Static lookup tables for HTTP status phrases and errno messages."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

from .logging import get_logger

logger = get_logger(__name__)

_HTTP_STATUS_CODES: dict[int, str] = {
    # 1xx informational
    100: "Continue",
    101: "Switching Protocols",
    102: "Processing",
    103: "Early Hints",  # RFC 8297
    # 2xx success
    200: "Ok",
    201: "Created",
    202: "Accepted",
    203: "Non Authoritative Information",
    204: "No Content",
    205: "Reset Content",
    206: "Partial Content",
    207: "Multi Status",
    208: "Already Reported",  # RFC 5842
    218: "This Is Fine",  # Apache, non-standard
    226: "Im Used",  # RFC 3229
    # 3xx redirection
    300: "Multiple Choices",
    301: "Moved Permanently",
    302: "Moved Temporarily",
    303: "See Other",
    304: "Not Modified",
    305: "Use Proxy",
    307: "Temporary Redirect",
    308: "Permanent Redirect",
    # 4xx client errors
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    407: "Proxy Authentication Required",
    408: "Request Timeout",
    409: "Conflict",
    410: "Gone",
    411: "Length Required",
    412: "Precondition Failed",
    413: "Request Too Long",
    414: "Request Uri Too Long",
    415: "Unsupported Media Type",
    416: "Requested Range Not Satisfiable",
    417: "Expectation Failed",
    418: "Im A Teapot",
    419: "Insufficient Space On Resource",
    420: "Method Failure",
    421: "Misdirected Request",
    422: "Unprocessable Entity",  # RFC 4918
    423: "Locked",  # RFC 4918
    424: "Failed Dependency",  # RFC 4918
    425: "Too Early",  # RFC 8470
    426: "Upgrade Required",  # RFC 2817
    428: "Precondition Required",
    429: "Too Many Requests",
    431: "Request Header Fields Too Large",
    449: "Retry With",  # Microsoft
    451: "Unavailable For Legal Reasons",  # RFC 7725
    # 5xx server errors
    500: "Internal Server Error",
    501: "Not Implemented",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
    505: "Http Version Not Supported",
    506: "Variant Also Negotiates",  # RFC 2295
    507: "Insufficient Storage",  # RFC 4918
    508: "Loop Detected",  # RFC 5842
    509: "Bandwidth Limit Exceeded",  # non-standard
    510: "Not Extended",  # RFC 2774
    511: "Network Authentication Required",
    600: "Unparseable Response Headers",  # non-standard
}

# The first three digits of an errno should equal its HTTP status.
_DEFAULT_ERRNO_MESSAGES: dict[int, str] = {
    40000: "Unknown Error",
    40005: "Invalid Http Request",
    40099: "Mysql Execute Error",
    40100: "User Require Login",
    40300: "User Forbidden/Unauthorized",
    40400: "Source Not Found",
    40900: "SqlError: You should not insert a duplicated item to database",
}

HTTP_STATUS_CODES: Mapping[int, str] = MappingProxyType(_HTTP_STATUS_CODES)
DEFAULT_ERRNO_MESSAGES: Mapping[int, str] = MappingProxyType(_DEFAULT_ERRNO_MESSAGES)


class _ReadOnlyRegistry(Mapping[int, str]):
    """Immutable ``int -> str`` table built once from defaults plus overrides."""

    def __init__(
        self,
        defaults: Mapping[int, str],
        overrides: Mapping[int, str] | None = None,
    ) -> None:
        table = dict(defaults)
        table.update(overrides or {})
        self._table: Mapping[int, str] = MappingProxyType(table)

    def __getitem__(self, key: int) -> str:
        return self._table[key]

    def __iter__(self) -> Iterator[int]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} entries)"


class StatusCodeRegistry(_ReadOnlyRegistry):
    """HTTP status code to reason phrase."""

    def __init__(self, overrides: Mapping[int, str] | None = None) -> None:
        super().__init__(_HTTP_STATUS_CODES, overrides)

    def phrase(self, status: int) -> str | None:
        return self.get(status)


class ErrnoMessageRegistry(_ReadOnlyRegistry):
    """Application errno to a message that overrides the generic status phrase."""

    def __init__(
        self,
        overrides: Mapping[int, str] | None = None,
        *,
        status_codes: Mapping[int, str] | None = None,
    ) -> None:
        super().__init__(_DEFAULT_ERRNO_MESSAGES, overrides)
        known = status_codes if status_codes is not None else _HTTP_STATUS_CODES
        for errno in overrides or {}:
            if errno_status(errno) not in known:
                logger.warning(
                    "errno %s does not start with a known HTTP status", errno
                )

    def message(self, errno: int) -> str | None:
        return self.get(errno)


def errno_status(errno: int) -> int | None:
    """Return the status encoded in the first three digits of ``errno``.

    ``None`` when ``errno`` has too many digits to render.
    """

    try:
        return int(str(errno)[:3])
    except ValueError:
        return None


__all__ = [
    "HTTP_STATUS_CODES",
    "DEFAULT_ERRNO_MESSAGES",
    "StatusCodeRegistry",
    "ErrnoMessageRegistry",
    "errno_status",
]
