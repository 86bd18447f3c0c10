"""JWT decoder and inspector (no signature verification)."""

from .codec import decode_segment, encode_segment, split_token
from .decoder import DecodedJWT, DecodeResult, RawSegments, decode_token, try_decode
from .errors import DecodeError, FormatError, JWTError, ParseError
from .status import StatusKind, TokenStatus, format_timestamp, token_status

__version__ = "1.1.0"

__all__ = [
    "DecodeError",
    "DecodeResult",
    "DecodedJWT",
    "FormatError",
    "JWTError",
    "ParseError",
    "RawSegments",
    "StatusKind",
    "TokenStatus",
    "decode_segment",
    "decode_token",
    "encode_segment",
    "format_timestamp",
    "split_token",
    "token_status",
    "try_decode",
]
