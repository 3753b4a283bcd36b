# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Fluent request-builder surface shared by the template and pooled flavours.

A builder collects URL, headers, query parameters, body, timeouts and the TLS
policy, then executes exactly one request per ``get()``/``post()``/... call.
Subclasses decide which httpx client sends the request and how query
parameters are merged into the URL.
"""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import HttpStatusError
from .codec import encode_body
from .headers import header_value
from .media import APPLICATION_FORM_URLENCODED_UTF8, APPLICATION_JSON_UTF8, normalize_method

B = TypeVar("B", bound="BaseRequestBuilder")


def _validate_timeout(name: str, seconds: float) -> float:
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)) or seconds <= 0:
        raise ValueError(f"{name} must be a positive number of seconds, got {seconds!r}")
    return float(seconds)


class BaseRequestBuilder(ABC):
    """Common builder state and chainable setters."""

    default_content_type: str | None = None

    def __init__(self, url: str, response_type: Any = dict, *, settings: HttpSettings | None = None):
        if not isinstance(url, str) or not url.strip():
            raise ValueError("url must be a non-empty string")
        self.url = url.strip()
        self.response_type = response_type
        self.settings = settings or load_http_settings()

        self._headers: dict[str, str] = {}
        self._query: list[tuple[str, Any]] = []
        self._body: Any = None
        self._content_type: str | None = self.default_content_type
        self._connect_timeout = self.settings.connect_timeout
        self._read_timeout = self.settings.read_timeout
        self._write_timeout = self.settings.write_timeout
        self._ignore_ssl = False
        self._client: httpx.Client | None = None

    # -- headers ---------------------------------------------------------

    def _set_header(self, name: str, value: str) -> None:
        for existing in [key for key in self._headers if key.lower() == name.lower()]:
            del self._headers[existing]
        self._headers[name] = value

    def header(self: B, name: str, value: Any) -> B:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("header name must be a non-empty string")
        if name.strip().lower() == "content-type":
            self._content_type = None if value is None else str(value)
        else:
            self._set_header(name.strip(), "" if value is None else str(value))
        return self

    def headers(self: B, headers: Mapping[str, Any] | None) -> B:
        for name, value in (headers or {}).items():
            self.header(name, value)
        return self

    def content_type(self: B, media_type: str) -> B:
        self._content_type = media_type
        return self

    def accept(self: B, *media_types: str) -> B:
        if not media_types:
            raise ValueError("accept() needs at least one media type")
        self._set_header("Accept", media_types[0])
        return self

    def authorization(self: B, token: str) -> B:
        return self.header("Authorization", f"Bearer {token}")

    def basic_auth(self: B, username: str, password: str) -> B:
        credentials = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
        return self.header("Authorization", f"Basic {credentials}")

    # -- query -----------------------------------------------------------

    def query_param(self: B, key: str, value: Any) -> B:
        self._query.append((key, value))
        return self

    def query_params(self: B, params: Mapping[str, Any] | None) -> B:
        if params:
            self._query.extend(params.items())
        return self

    # -- body ------------------------------------------------------------

    def body(self: B, body: Any) -> B:
        self._body = body
        return self

    def json_body(self: B, body: Any) -> B:
        self._body = body
        self._content_type = APPLICATION_JSON_UTF8
        return self

    def form_body(self: B, form: Mapping[str, Any]) -> B:
        self._body = form
        self._content_type = APPLICATION_FORM_URLENCODED_UTF8
        return self

    # -- transport -------------------------------------------------------

    def connect_timeout(self: B, seconds: float) -> B:
        self._connect_timeout = _validate_timeout("connect_timeout", seconds)
        return self

    def read_timeout(self: B, seconds: float) -> B:
        self._read_timeout = _validate_timeout("read_timeout", seconds)
        return self

    def write_timeout(self: B, seconds: float) -> B:
        self._write_timeout = _validate_timeout("write_timeout", seconds)
        return self

    def ignore_ssl(self: B, ignore: bool = True) -> B:
        self._ignore_ssl = bool(ignore)
        return self

    def using(self: B, client: httpx.Client | None) -> B:
        """Send through ``client`` instead of the builder's own client (tests, custom transports)."""
        self._client = client
        return self

    @property
    def timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self._connect_timeout,
            read=self._read_timeout,
            write=self._write_timeout,
            pool=self.settings.pool_timeout,
        )

    def build_headers(self) -> dict[str, str]:
        """Headers sent with every request, excluding the body content type."""
        headers = dict(self._headers)
        if not header_value(headers, "user-agent"):
            headers["User-Agent"] = self.settings.user_agent
        return headers

    def encoded_body(self) -> tuple[bytes | None, str | None]:
        return encode_body(self._body, self._content_type)

    @abstractmethod
    def build_url(self) -> str:
        """Return the final URL including query parameters."""

    # -- execution -------------------------------------------------------

    def get(self) -> Any:
        return self.execute("GET")

    def post(self) -> Any:
        return self.execute("POST")

    def put(self) -> Any:
        return self.execute("PUT")

    def delete(self) -> Any:
        return self.execute("DELETE")

    def patch(self) -> Any:
        return self.execute("PATCH")

    def execute(self, method: str) -> Any:
        """Send the request with ``method`` and decode the response into ``response_type``."""
        return self._execute(normalize_method(method))

    @abstractmethod
    def _execute(self, method: str) -> Any: ...

    def is_error_status(self, status_code: int) -> bool:
        """Whether ``status_code`` fails the request; anything outside 2xx by default."""
        return not 200 <= status_code < 300

    def _raise_for_status(self, resp: httpx.Response, method: str, url: str) -> None:
        if not self.is_error_status(resp.status_code):
            return
        raise HttpStatusError(
            method=method,
            url=url,
            status_code=resp.status_code,
            reason=resp.reason_phrase,
            body=resp.text,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self.url!r}, response_type={self.response_type!r})"


__all__ = ["BaseRequestBuilder"]
