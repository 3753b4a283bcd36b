# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""fluenthttp CLI."""

import argparse
import json
import sys
from typing import Any

from ..config import load_http_settings
from ..errors import HttpRequestError, HttpStatusError
from ..http import BACKENDS, HttpResponse, close_shared_clients, create_builder
from ..http.media import SUPPORTED_METHODS
from ..log import setup_logging


def _key_value(raw: str, sep: str, what: str) -> tuple[str, str]:
    key, found, value = raw.partition(sep)
    if not found or not key.strip():
        raise argparse.ArgumentTypeError(f"invalid {what} {raw!r}; expected KEY{sep}VALUE")
    return key.strip(), value.strip() if sep == ":" else value


def _header_arg(raw: str) -> tuple[str, str]:
    return _key_value(raw, ":", "header")


def _pair_arg(raw: str) -> tuple[str, str]:
    return _key_value(raw, "=", "parameter")


def _positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {raw!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {raw!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fluenthttp", description="Send a single HTTP request and print the response")
    parser.add_argument("method", type=str.upper, choices=sorted(SUPPORTED_METHODS), metavar="METHOD", help="HTTP method")
    parser.add_argument("url", help="Target URL")
    parser.add_argument("-H", "--header", dest="headers", action="append", type=_header_arg, default=[], help="Header as 'Name: value' (repeatable)")
    parser.add_argument("-q", "--query", dest="query", action="append", type=_pair_arg, default=[], help="Query parameter as key=value (repeatable)")
    body = parser.add_mutually_exclusive_group()
    body.add_argument("-d", "--data", help="Raw request body")
    body.add_argument("--json-body", help="JSON request body")
    body.add_argument("--form", dest="form", action="append", type=_pair_arg, help="Form field as key=value (repeatable)")
    parser.add_argument("--backend", choices=sorted(BACKENDS), default="pooled", help="Request builder to use (default: pooled)")
    parser.add_argument("--connect-timeout", type=_positive_float, help="Connect timeout in seconds")
    parser.add_argument("--read-timeout", type=_positive_float, help="Read timeout in seconds")
    parser.add_argument("--write-timeout", type=_positive_float, help="Write timeout in seconds")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("-i", "--include", action="store_true", help="Print status line and response headers")
    parser.add_argument("--log-level", help="Logging level (default: $FLUENTHTTP_LOG_LEVEL or WARNING)")
    return parser


def _print_response(response: HttpResponse, *, include: bool) -> None:
    if include:
        print(f"HTTP {response.status_code} {response.reason}".rstrip())
        for name, value in sorted(response.headers.items()):
            print(f"{name}: {value}")
        print()
    text = response.text
    if "json" in response.content_type:
        try:
            text = json.dumps(response.json(), indent=2, sort_keys=True, ensure_ascii=False)
        except ValueError:
            pass
    sys.stdout.write(text)
    if text and not text.endswith("\n"):
        sys.stdout.write("\n")


def _json_body(parser: argparse.ArgumentParser, raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as exc:
        parser.error(f"--json-body is not valid JSON: {exc}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    builder = create_builder(args.url, HttpResponse, backend=args.backend, settings=load_http_settings())
    for name, value in args.headers:
        builder.header(name, value)
    for key, value in args.query:
        builder.query_param(key, value)

    if args.data is not None:
        builder.body(args.data)
    elif args.json_body is not None:
        builder.json_body(_json_body(parser, args.json_body))
    elif args.form:
        builder.form_body(dict(args.form))

    if args.connect_timeout:
        builder.connect_timeout(args.connect_timeout)
    if args.read_timeout:
        builder.read_timeout(args.read_timeout)
    if args.write_timeout:
        builder.write_timeout(args.write_timeout)
    builder.ignore_ssl(args.ignore_ssl_errors)

    try:
        response = builder.execute(args.method)
    except HttpStatusError as exc:
        print(f"HTTP {exc.status_code} {exc.reason}".rstrip(), file=sys.stderr)
        if exc.body:
            print(exc.body, file=sys.stderr)
        return 1
    except HttpRequestError as exc:
        print(f"error [{exc.category.value}]: {exc}", file=sys.stderr)
        return 1
    finally:
        close_shared_clients()

    _print_response(response, include=args.include)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
