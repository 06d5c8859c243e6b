from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Mapping, Sequence

from .env import settings_from_env
from .logging_setup import setup_logging
from .settings import InspectSettings
from ..application.use_cases.inspect import TokenInspection
from ..domain.exceptions import DecodeError
from ..domain.value_objects import thaw_json
from ..integrations.common.inspect_factory import create_inspect_dependencies, strip_bearer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}") from exc
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="jwt-inspect",
        description="Decode and inspect a JWT without signature verification.",
        epilog="Examples:\n"
               "  %(prog)s                          # interactive prompt\n"
               "  %(prog)s <token>                  # pass token as argument\n"
               "  echo '<token>' | %(prog)s --stdin  # read from stdin\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "token",
        nargs="?",
        default=None,
        help="JWT string, optionally prefixed with 'Bearer ' (prompts if omitted)",
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read the token from stdin (for piping)",
    )
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        default=None,
        help="Print the inspection report as JSON (env JWT_INSPECT_JSON).",
    )
    parser.add_argument(
        "--indent",
        type=_non_negative_int,
        default=None,
        help="JSON indentation (env JWT_INSPECT_INDENT, default 4).",
    )
    parser.add_argument(
        "--no-signature",
        dest="show_signature",
        action="store_false",
        default=None,
        help="Do not print the signature part.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=None,
        help="Debug logging on stderr (env JWT_INSPECT_VERBOSE).",
    )
    return parser.parse_args(args=argv)


def _merge_settings(settings: InspectSettings, args: argparse.Namespace) -> InspectSettings:
    """CLI flags win over environment values."""
    if args.json_output is not None:
        settings.json_output = args.json_output
    if args.indent is not None:
        settings.indent = args.indent
    if args.show_signature is not None:
        settings.show_signature = args.show_signature
    if args.verbose is not None:
        settings.verbose = args.verbose
    return settings


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------

def _print_json(label: str, data: Mapping[str, Any], indent: int) -> None:
    print(f"\n{label}:")
    print(json.dumps(thaw_json(data), indent=indent))


def _print_report(report: TokenInspection, settings: InspectSettings) -> None:
    if settings.json_output:
        data = report.to_dict()
        if not settings.show_signature:
            data.pop("signature")
        json.dump(data, sys.stdout, indent=settings.indent)
        sys.stdout.write("\n")
        return

    rendered = report.to_dict()
    _print_json("Header", report.header, settings.indent)
    _print_json("Payload", report.payload, settings.indent)
    if settings.show_signature:
        print(f"\nSignature (base64url encoded):\n{report.signature or '<none>'}")

    if rendered["claims"]:
        _print_json("Registered claims", rendered["claims"], settings.indent)

    print()
    if report.unsigned:
        print("Warning: token is unsigned")
    if report.expires_in_seconds is None:
        print("Expiration: no 'exp' claim, token never expires")
    elif report.expired:
        print(f"Expiration: expired {-report.expires_in_seconds:.0f}s ago")
    else:
        print(f"Expiration: expires in {report.expires_in_seconds:.0f}s")
    if not report.expired and not report.active:
        print("Warning: token is not yet valid ('nbf' is in the future)")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def _read_token(args: argparse.Namespace) -> str:
    if args.stdin:
        return sys.stdin.read()
    if args.token:
        return args.token

    print("JWT Inspector")
    print("=============")
    try:
        return input("Please enter your JWT token: ")
    except (EOFError, KeyboardInterrupt):
        print()
        sys.exit(130)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        settings = _merge_settings(settings_from_env(), args)
    except RuntimeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    setup_logging(settings.verbose)

    token = strip_bearer(_read_token(args))
    if not token:
        print("Error: No token received.", file=sys.stderr)
        return 1

    inspector = create_inspect_dependencies()
    try:
        report = inspector.inspect(token)
    except DecodeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _print_report(report, settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
