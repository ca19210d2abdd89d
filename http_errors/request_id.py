"""Short timestamp-seeded identifiers for correlating errors with logs."""

from __future__ import annotations

import random
import string
from datetime import datetime

DEFAULT_LENGTH = 16
# "X" + MMDDHHMMSS + "T"
PREFIX_LENGTH = 12
MIN_LENGTH = PREFIX_LENGTH + 1

_LOWER_ALPHABET = string.digits + string.ascii_lowercase


def random_string(length: int = 6) -> str:
    """Return ``length`` random lowercase alphanumeric characters."""

    if length < 0:
        raise ValueError("length must not be negative")
    return "".join(random.choices(_LOWER_ALPHABET, k=length))


def _prefix(now: datetime) -> str:
    return now.strftime("X%m%d%H%M%ST")


def generate_request_id(
    length: int = DEFAULT_LENGTH, *, now: datetime | None = None
) -> str:
    """Return an identifier of exactly ``length`` characters.

    The first twelve characters encode the local time (``XMMDDHHMMSST``), the
    remainder is an uppercase alphanumeric random suffix. Not suitable as a
    security token.
    """

    if length < MIN_LENGTH:
        raise ValueError(f"request id length must be at least {MIN_LENGTH}")
    prefix = _prefix(now or datetime.now())
    return prefix + random_string(length - len(prefix)).upper()


__all__ = [
    "DEFAULT_LENGTH",
    "MIN_LENGTH",
    "random_string",
    "generate_request_id",
]
