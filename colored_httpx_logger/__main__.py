#!/usr/bin/env python3
"""
Send one HTTP request and pretty-print it with ColoredLogger.

Usage:
    python -m colored_httpx_logger https://jsonplaceholder.typicode.com/posts/1
    python -m colored_httpx_logger https://httpbin.org/post --method POST \\
        --json '{"title": "hello"}' --request-headers --request-body
"""

import argparse
import json
import logging
import sys
import typing

import httpx

from colored_httpx_logger.colors import Color
from colored_httpx_logger.logger import ColoredLogger
from colored_httpx_logger.logging_config import configure_logging, log_sink
from colored_httpx_logger.model import FilterArgs

logger = logging.getLogger("colored_httpx_logger")


def parse_header(value: str) -> typing.Tuple[str, str]:
    name, sep, content = value.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"Expected 'Name: value', got {value!r}")
    return name.strip(), content.strip()


def skip_binary_responses(request: typing.Optional[httpx.Request], args: FilterArgs) -> bool:
    return not args.is_response or not args.has_bytes_data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Send an HTTP request and pretty-print the exchange"
    )
    parser.add_argument("url", help="Target URL")
    parser.add_argument(
        "--method", "-X", default="GET", help="HTTP method (default: GET)"
    )
    parser.add_argument("--json", dest="json_body", help="JSON request body")
    parser.add_argument(
        "--header",
        "-H",
        action="append",
        default=[],
        type=parse_header,
        help="Request header as 'Name: value' (repeatable)",
    )
    parser.add_argument("--request-headers", action="store_true")
    parser.add_argument("--request-body", action="store_true")
    parser.add_argument("--response-headers", action="store_true")
    parser.add_argument("--no-response-body", action="store_true")
    parser.add_argument("--no-compact", action="store_true")
    parser.add_argument("--max-width", type=int, default=90)
    parser.add_argument(
        "--skip-binary",
        action="store_true",
        help="Do not print responses whose body is binary",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        help="Write through the logging module instead of print",
    )
    parser.add_argument(
        "--timeout", type=float, default=10.0, help="Timeout in seconds (default: 10)"
    )
    return parser


def main(
    argv: typing.Optional[typing.List[str]] = None,
    transport: typing.Optional[httpx.BaseTransport] = None,
) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    json_body = json.loads(args.json_body) if args.json_body is not None else None

    colored_logger = ColoredLogger(
        sink=log_sink(logger) if args.log else print,
        filter=skip_binary_responses if args.skip_binary else None,
        show_request_headers=args.request_headers,
        show_request_body=args.request_body,
        show_response_headers=args.response_headers,
        show_response_body=not args.no_response_body,
        compact=not args.no_compact,
        max_width=args.max_width,
        header_color=Color.YELLOW,
        response_color=Color.MAGENTA,
        response_status_color=Color.MAGENTA,
        error_color=Color.RED,
        request_color=Color.BLUE,
        body_color=Color.GREEN,
    )

    with colored_logger.client(timeout=args.timeout, transport=transport) as client:
        try:
            response = client.request(
                args.method.upper(),
                args.url,
                headers=dict(args.header),
                json=json_body,
            )
        except httpx.HTTPError as e:
            # Already printed by the logger
            logger.debug(f"Request failed: {e!r}")
            return 1
    return 1 if response.is_error else 0


if __name__ == "__main__":
    sys.exit(main())
