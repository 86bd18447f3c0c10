"""
CLI entry point for the JWT Decode tool.

Provides both interactive mode (prompt for token) and argument mode
(pass token directly or pipe via stdin).
"""

from __future__ import annotations

import argparse
import json
import logging
import re
import sys
import time

from .config import ConfigError, load_config, merge_cli_overrides
from .decoder import DecodedJWT, decode_token
from .errors import JWTError
from .logging_setup import setup_logging
from .status import TokenStatus, token_status

__all__ = ["main"]

logger = logging.getLogger(__name__)

_BEARER_RE = re.compile(r"^\s*bearer\s+", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------

def _dumps(data: dict, indent: int) -> str:
    """Serialise *data* for stdout, escaping non-ASCII if stdout cannot encode it.

    Lone surrogates (``"\\ud800"``) are valid JSON escapes but cannot be
    written to a UTF-8 stream, so they force the escaped form as well.
    """
    text = json.dumps(data, indent=indent, ensure_ascii=False)
    try:
        text.encode(getattr(sys.stdout, "encoding", None) or "utf-8")
    except (UnicodeEncodeError, LookupError):
        return json.dumps(data, indent=indent, ensure_ascii=True)
    return text


def _print_json(label: str, data: dict, indent: int) -> None:
    """Print a labelled JSON section."""
    print(f"\n{label}:")
    print(_dumps(data, indent))


def _print_result(result: DecodedJWT, status: TokenStatus, indent: int, show_raw: bool) -> None:
    """Pretty-print the decoded token parts."""
    _print_json("Header", result.header, indent)
    _print_json("Payload", result.payload, indent)
    print(f"\nSignature (base64url encoded):\n{result.signature}")
    if show_raw:
        print("\nRaw segments:")
        print(f"  header    : {result.raw.header}")
        print(f"  payload   : {result.raw.payload}")
        print(f"  signature : {result.raw.signature}")
    print(f"\nStatus: {status.kind.value} - {status.message}")


def _result_document(result: DecodedJWT, status: TokenStatus) -> dict:
    return {
        "header": result.header,
        "payload": result.payload,
        "signature": result.signature,
        "raw": {
            "header": result.raw.header,
            "payload": result.raw.payload,
            "signature": result.raw.signature,
        },
        "status": {"type": status.kind.value, "message": status.message},
    }


def _strip_bearer(token: str) -> str:
    """Drop a leading ``Bearer`` scheme copied from an Authorization header."""
    return _BEARER_RE.sub("", token, count=1)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="jwt-decode",
        description="Decode and inspect a JWT token without signature verification.",
        epilog="Examples:\n"
               "  %(prog)s                          # interactive prompt\n"
               "  %(prog)s <token>                   # pass token as argument\n"
               "  echo '<token>' | %(prog)s --stdin  # read from stdin\n"
               "  %(prog)s <token> --json --tz UTC   # machine-readable output\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "token",
        nargs="?",
        default=None,
        help="JWT token string (optional, prompts interactively if omitted)",
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        default=False,
        help="Read token from stdin (for piping)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML config file (default: config/config.yaml if present)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        dest="as_json",
        help="Print a single JSON document instead of labelled sections",
    )
    parser.add_argument(
        "--tz",
        default=None,
        metavar="ZONE",
        help="Timezone for status timestamps, e.g. UTC or Europe/Vienna (overrides config)",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        default=None,
        help="Also print the raw (still encoded) segments",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=False,
        help="Enable verbose (debug) logging",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        metavar="FILE",
        help="Also write debug logs to FILE",
    )
    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    setup_logging(verbose=args.verbose, log_file=args.log_file)

    # --- Config -------------------------------------------------------------
    try:
        cfg = merge_cli_overrides(
            load_config(args.config),
            timezone=args.tz,
            show_raw=args.raw,
        )
    except ConfigError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    # --- Resolve token input -----------------------------------------------
    if args.stdin:
        token = sys.stdin.read().strip()
        if not token:
            logger.error("No token received on stdin.")
            sys.exit(1)
    elif args.token:
        token = args.token
    else:
        # Interactive mode
        print("JWT Token Decoder")
        print("=================")
        try:
            token = input("Please enter your JWT token: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            sys.exit(130)

    if cfg.input.strip_bearer_prefix:
        token = _strip_bearer(token)

    # --- Decode -------------------------------------------------------------
    try:
        result = decode_token(token)
    except JWTError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    status = token_status(result.payload, time.time(), cfg.tz)
    logger.debug("Token status: %s", status.kind.value)

    if args.as_json:
        print(_dumps(_result_document(result, status), cfg.display.indent))
    else:
        _print_result(result, status, cfg.display.indent, cfg.display.show_raw)
