"""Tests for base64url segment decoding and token splitting."""

import base64
import binascii

import pytest

from jwt_decode.codec import decode_segment, encode_segment, split_token
from jwt_decode.errors import DecodeError, FormatError


def test_decode_segment_unpadded():
    """Segments without padding decode once '=' is restored."""
    assert decode_segment("eyJhbGciOiJIUzI1NiJ9") == '{"alg":"HS256"}'
    assert decode_segment("e30") == "{}"


def test_decode_segment_url_safe_alphabet():
    """'-' and '_' map back to '+' and '/'."""
    assert decode_segment("fn5-") == "~~~"
    assert decode_segment("Pz4_") == "?>?"


def test_decode_segment_multibyte_utf8():
    assert decode_segment(encode_segment('{"name":"Jürgen ✓"}')) == '{"name":"Jürgen ✓"}'


def test_decode_segment_rejects_invalid_characters():
    """Characters outside the alphabet are an error, not silently skipped."""
    with pytest.raises(DecodeError, match="Invalid Base64URL encoding") as excinfo:
        decode_segment("e30!")
    assert isinstance(excinfo.value.__cause__, binascii.Error)


def test_decode_segment_rejects_impossible_length():
    """A length of 1 mod 4 can never be valid base64."""
    with pytest.raises(DecodeError):
        decode_segment("eyJhb")


def test_decode_segment_rejects_invalid_utf8():
    segment = base64.urlsafe_b64encode(b"\xff\xfe\xfd").decode().rstrip("=")
    with pytest.raises(DecodeError, match="UTF-8") as excinfo:
        decode_segment(segment)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_encode_segment_strips_padding():
    assert encode_segment("{}") == "e30"
    assert "=" not in encode_segment("a")


def test_split_token_three_parts():
    assert split_token("aaa.bbb.ccc") == ("aaa", "bbb", "ccc")


def test_split_token_trims_whitespace():
    assert split_token("  aaa.bbb.ccc\n") == ("aaa", "bbb", "ccc")


def test_split_token_allows_empty_signature():
    assert split_token("aaa.bbb.") == ("aaa", "bbb", "")


@pytest.mark.parametrize("token", ["", "aaa", "aaa.bbb", "aaa.bbb.ccc.ddd", "a.b.c.d.e"])
def test_split_token_wrong_part_count(token):
    with pytest.raises(FormatError, match="Expected 3 parts"):
        split_token(token)


@pytest.mark.parametrize("token", [".bbb.ccc", "aaa..ccc", "..", "  ..sig  "])
def test_split_token_empty_header_or_payload(token):
    with pytest.raises(FormatError, match="header or payload is empty"):
        split_token(token)


def test_decode_segment_drops_utf8_bom():
    segment = base64.urlsafe_b64encode(b"\xef\xbb\xbf{}").decode().rstrip("=")
    assert decode_segment(segment) == "{}"


def test_split_token_error_keeps_fixed_wording():
    with pytest.raises(FormatError) as excinfo:
        split_token("aaa.bbb")
    assert str(excinfo.value) == "Invalid JWT format. Expected 3 parts separated by dots. Got 2."
