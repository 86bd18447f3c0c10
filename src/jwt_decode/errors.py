"""
Exceptions raised while decoding a JWT token.

Every failure is a ``JWTError``; the subclass tells the caller which stage
rejected the token.
"""

from __future__ import annotations

__all__ = [
    "JWTError",
    "FormatError",
    "DecodeError",
    "ParseError",
]


class JWTError(Exception):
    """Raised when a JWT token cannot be decoded."""


class FormatError(JWTError):
    """The token is not three dot-separated segments with a header and payload."""


class DecodeError(JWTError):
    """A segment is not valid base64url, or its bytes are not valid UTF-8."""


class ParseError(JWTError):
    """A decoded segment is not a JSON object."""
