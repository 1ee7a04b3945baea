"""Command-line interface for FGCClient."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console

from . import __version__
from .client import FGCClient
from .config import load_environment, load_settings
from .logging_utils import configure_logging
from .options import ALLOWED_METHODS

EXIT_OK = 0
EXIT_HTTP_ERROR = 1
EXIT_FAILURE = 2


def _timeout(value: str) -> int:
    seconds = int(value)
    if seconds <= 0:
        raise argparse.ArgumentTypeError("Timeout must be a positive number of seconds")
    return seconds


def _json_payload(value: str) -> object:
    try:
        return json.loads(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid JSON payload: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fgcclient",
        description="Send one HTTP request and print the response.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("method", type=str.lower, choices=ALLOWED_METHODS, help="HTTP verb")
    parser.add_argument("url", nargs="?", help="Target URL (defaults to FGC_BASE_URL)")
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        metavar="'Key: Value'",
        help="Request header, may be repeated",
    )
    body = parser.add_mutually_exclusive_group()
    body.add_argument("-d", "--data", help="Raw request body sent verbatim")
    body.add_argument("--json", dest="json_payload", type=_json_payload, help="JSON request body")
    parser.add_argument("--timeout", type=_timeout, help="Request timeout in seconds")
    parser.add_argument("-i", "--include", action="store_true", help="Print the status line and response headers")
    parser.add_argument("--log-json", action="store_true", help="Emit structured JSON logs to the log file")
    parser.add_argument("--log-file", type=Path, help="Write logs to the specified path")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("--quiet", action="store_true", help="Reduce logging output")
    return parser


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(list(argv) if argv is not None else None)


def configure_cli_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    configure_logging(level=level, json_logs=args.log_json, logfile=args.log_file)


def _render(client: FGCClient, console: Console, include: bool) -> None:
    if include:
        console.out(f"HTTP status: {client.get_http_status_code()}", highlight=False)
        for key, value in client.get_response_headers().items():
            console.out(f"{key}: {value}", highlight=False)
        console.out("")

    parsed = client.get_parsed_response()
    if parsed is not None:
        console.print_json(data=parsed)
        return
    raw = client.get_raw_response()
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if raw:
        console.out(str(raw), highlight=False)


def main(argv: Optional[Iterable[str]] = None) -> int:
    load_environment()
    args = parse_args(argv)

    configure_cli_logging(args)
    logger = logging.getLogger("fgcclient.cli")
    console = Console()

    try:
        settings = load_settings()
        client = FGCClient(settings.base_url)
        client.set_timeout(args.timeout or settings.timeout)
        client.set_headers_from_lines([f"User-Agent: {settings.user_agent}", *args.header])
        payload = args.data if args.data is not None else args.json_payload
        client.request(args.method, args.url, payload)
    # UsageError is a ValueError too.
    except ValueError as exc:
        logger.error("Invalid request: %s", exc)
        return EXIT_FAILURE

    with client:
        if client.get_error_code() is not None:
            logger.error(
                "Request failed (error %s): %s",
                client.get_error_code(),
                client.get_error_message(),
            )
            return EXIT_FAILURE

        _render(client, console, args.include)
        if client.get_http_status_code() >= 400:
            return EXIT_HTTP_ERROR
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
