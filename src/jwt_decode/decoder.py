"""
Core JWT decoding logic.

Decodes a JWT token without signature verification and returns the
header, payload, and raw signature as structured data.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from .codec import decode_segment, split_token
from .errors import DecodeError, JWTError, ParseError

__all__ = [
    "RawSegments",
    "DecodedJWT",
    "DecodeResult",
    "decode_token",
    "try_decode",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawSegments:
    """The three segments exactly as they appeared in the token."""

    header: str
    payload: str
    signature: str

    @property
    def token(self) -> str:
        return f"{self.header}.{self.payload}.{self.signature}"


@dataclass(frozen=True)
class DecodedJWT:
    """Holds the decoded parts of a JWT token."""

    header: dict
    payload: dict
    signature: str
    raw: RawSegments


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of ``try_decode``: either a decoded token or the error."""

    value: DecodedJWT | None = None
    error: JWTError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def causes(self) -> list[str]:
        """Messages from the outermost error down to the root cause."""
        chain: list[str] = []
        exc: BaseException | None = self.error
        while exc is not None:
            chain.append(str(exc))
            exc = exc.__cause__
        return chain


def _reject_constant(name: str) -> None:
    raise ValueError(f"Invalid JSON constant: {name}")


def _parse_object(text: str, label: str) -> dict:
    """Parse decoded segment text, which must be a JSON object."""
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ParseError(f"Invalid JSON in {label}: {exc}") from exc

    if not isinstance(value, dict):
        raise ParseError(
            f"JWT {label} must be a JSON object, got {type(value).__name__}"
        )
    return value


def decode_token(token: str) -> DecodedJWT:
    """
    Decode a JWT token string into its components.

    The token is split on ``'.'`` and the header and payload segments are
    base64url-decoded and parsed as JSON objects. The signature stays in
    its encoded form. Signature verification is **not** performed; this is
    for inspection only.

    Raises:
        FormatError: If the token is not three segments with a non-empty
            header and payload.
        DecodeError: If a segment is not valid base64url or UTF-8.
        ParseError: If a segment is not a JSON object.
    """
    header_str, payload_str, signature = split_token(token)
    logger.debug(
        "Segment lengths: header=%d payload=%d signature=%d",
        len(header_str), len(payload_str), len(signature),
    )

    try:
        header = _parse_object(decode_segment(header_str), "header")
        payload = _parse_object(decode_segment(payload_str), "payload")
    except (DecodeError, ParseError) as exc:
        raise type(exc)(f"Failed to decode JWT: {exc}") from exc

    return DecodedJWT(
        header=header,
        payload=payload,
        signature=signature,
        raw=RawSegments(header=header_str, payload=payload_str, signature=signature),
    )


def try_decode(token: str) -> DecodeResult:
    """Decode *token*, returning the failure instead of raising it."""
    try:
        return DecodeResult(value=decode_token(token))
    except JWTError as exc:
        logger.debug("Token rejected: %s", exc)
        return DecodeResult(error=exc)
