"""
Time-based token status derived from the ``exp`` and ``nbf`` claims.

The current time is always passed in by the caller so the result is
deterministic for a given payload, instant and timezone.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum

__all__ = [
    "StatusKind",
    "TokenStatus",
    "format_timestamp",
    "token_status",
]


class StatusKind(str, Enum):
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"
    VALID = "valid"
    NO_EXPIRATION = "no_expiration"


@dataclass(frozen=True)
class TokenStatus:
    kind: StatusKind
    message: str


def format_timestamp(seconds: float, tz: tzinfo | None = None) -> str:
    """Render Unix *seconds* like ``Mar 1, 2024, 09:05:00 AM UTC``.

    Uses *tz* when given, otherwise the local timezone. Values the
    platform cannot represent as a date render as ``Invalid Date``.
    """
    try:
        if tz is None:
            dt = datetime.fromtimestamp(seconds).astimezone()
        else:
            dt = datetime.fromtimestamp(seconds, tz=tz)
    except (OverflowError, OSError, ValueError):
        return "Invalid Date"
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M:%S %p} {dt.tzname()}"


def _numeric_claim(payload: Mapping, name: str) -> float | None:
    # JSON booleans arrive as bool, which is an int subclass; they are not numbers here.
    value = payload.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def _to_seconds(now: float | datetime) -> int:
    if isinstance(now, datetime):
        now = now.timestamp()
    return math.floor(now)


def token_status(
    payload: Mapping,
    now: float | datetime,
    tz: tzinfo | None = None,
) -> TokenStatus:
    """Classify a decoded payload as expired, not yet valid, valid or open-ended.

    *now* is Unix seconds or a ``datetime`` and is floored to whole seconds
    once. ``exp`` wins over ``nbf``: a token that is both expired and not
    yet valid reports expired. ``now == exp`` counts as expired and
    ``now == nbf`` counts as valid. Missing or non-numeric claims are
    ignored, so this never raises for odd payloads.
    """
    current = _to_seconds(now)
    exp = _numeric_claim(payload, "exp")
    nbf = _numeric_claim(payload, "nbf")

    if exp is not None and current >= exp:
        return TokenStatus(
            StatusKind.EXPIRED,
            f"Token expired on {format_timestamp(exp, tz)}",
        )

    if nbf is not None and current < nbf:
        return TokenStatus(
            StatusKind.NOT_YET_VALID,
            f"Token not valid until {format_timestamp(nbf, tz)}",
        )

    if exp is not None:
        return TokenStatus(
            StatusKind.VALID,
            f"Token valid until {format_timestamp(exp, tz)}",
        )

    return TokenStatus(
        StatusKind.NO_EXPIRATION,
        "Token has no expiration (not recommended)",
    )
