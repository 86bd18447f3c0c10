"""Shared fixtures for the jwt-decode tests."""

import json
import logging

import pytest

from jwt_decode import config
from jwt_decode.codec import encode_segment


def build_token(header: dict, payload: dict, signature: str = "sig") -> str:
    """Assemble an unsigned compact token from header and payload objects."""
    return ".".join([
        encode_segment(json.dumps(header, separators=(",", ":"))),
        encode_segment(json.dumps(payload, separators=(",", ":"))),
        signature,
    ])


@pytest.fixture
def make_token():
    """Factory fixture wrapping ``build_token``."""
    return build_token


@pytest.fixture
def no_default_config(monkeypatch, tmp_path):
    """Point the default config path at a file that does not exist."""
    monkeypatch.setattr(config, "DEFAULT_CONFIG_PATH", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv(config.ENV_TIMEZONE, raising=False)


@pytest.fixture
def restore_logging():
    """Put the root logger back the way it was after setup_logging() ran."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
