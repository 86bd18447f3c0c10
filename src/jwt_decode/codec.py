"""
Base64url segment handling for compact JWT tokens.

Splits a token into its three segments and turns a single base64url
segment back into text. No JSON handling happens here.
"""

from __future__ import annotations

import base64
import binascii

from .errors import DecodeError, FormatError

__all__ = [
    "decode_segment",
    "encode_segment",
    "split_token",
]


def _add_base64_padding(data: str) -> str:
    """Add padding characters for base64 decoding."""
    padding = len(data) % 4
    if padding:
        data += "=" * (4 - padding)
    return data


def decode_segment(segment: str) -> str:
    """Decode a single base64url segment into UTF-8 text.

    The url-safe alphabet is mapped back to the standard one and the
    missing ``=`` padding is restored before decoding. Characters outside
    the base64 alphabet are rejected rather than silently skipped. A
    leading UTF-8 byte order mark is dropped.

    Raises:
        DecodeError: If the segment is not valid base64url or the decoded
            bytes are not valid UTF-8.
    """
    b64 = _add_base64_padding(segment.replace("-", "+").replace("_", "/"))
    try:
        raw = base64.b64decode(b64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Invalid Base64URL encoding: {exc}") from exc

    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Invalid UTF-8 in decoded segment: {exc}") from exc


def encode_segment(text: str) -> str:
    """Encode *text* as an unpadded base64url segment."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


def split_token(token: str) -> tuple[str, str, str]:
    """Split a token into its ``(header, payload, signature)`` segments.

    Surrounding whitespace is trimmed first. An empty signature segment is
    accepted; an empty header or payload is not.

    Raises:
        FormatError: If the token does not have exactly three segments or
            the header or payload segment is empty.
    """
    parts = token.strip().split(".")
    if len(parts) != 3:
        raise FormatError(
            "Invalid JWT format. Expected 3 parts separated by dots. "
            f"Got {len(parts)}."
        )

    header, payload, signature = parts
    if not header or not payload:
        raise FormatError("JWT header or payload is empty")

    return header, payload, signature
