# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error types raised by the request builders."""

import json
import socket
import ssl
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def _walk_causes(exc: BaseException):
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    httpx wraps the underlying socket/ssl failure, so the cause chain is
    inspected before falling back to the httpx exception class.
    """
    for item in _walk_causes(exc):
        if isinstance(item, (ssl.SSLError, ssl.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(item, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.HTTPStatusError):
        return ErrorCategory.HTTP_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (json.JSONDecodeError, UnicodeDecodeError, TypeError, ValueError)):
        return ErrorCategory.DECODE_ERROR

    return ErrorCategory.UNKNOWN_ERROR


class HttpRequestError(RuntimeError):
    """Raised when a built request cannot be executed or its response cannot be decoded."""

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        url: str | None = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
    ):
        super().__init__(message)
        self.method = method
        self.url = url
        self.category = category

    @classmethod
    def wrap(cls, exc: BaseException, *, method: str, url: str) -> "HttpRequestError":
        """Build a wrapper for ``exc``; callers raise it ``from exc``."""
        return cls(
            f"HTTP request failed: method={method}, url={url}, error={exc}",
            method=method,
            url=url,
            category=categorize_exception(exc),
        )


class HttpStatusError(HttpRequestError):
    """Raised for responses outside the 2xx range."""

    def __init__(
        self,
        *,
        method: str,
        url: str,
        status_code: int,
        reason: str = "",
        body: str = "",
    ):
        super().__init__(
            f"HTTP request failed: code={status_code}, message={reason}, body={body}",
            method=method,
            url=url,
            category=ErrorCategory.HTTP_ERROR,
        )
        self.status_code = status_code
        self.reason = reason
        self.body = body


__all__ = ["ErrorCategory", "HttpRequestError", "HttpStatusError", "categorize_exception"]
