# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request builder backed by shared, connection-pooled httpx clients.

Two process-wide clients exist: one that verifies TLS certificates and host
names and one that does not. They are created on first use and reused by every
``PooledRequestBuilder``; per-request timeouts are passed on each call so the
pools are never rebuilt.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import HttpRequestError
from .base import BaseRequestBuilder
from .codec import decode_response
from .headers import masked_headers
from .media import APPLICATION_JSON_UTF8, BODY_REQUIRED_METHODS
from .url import add_query_params

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_shared_clients: dict[bool, httpx.Client] = {}

# Methods whose body is dropped rather than sent.
_BODYLESS_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


def create_pooled_client(settings: HttpSettings, *, verify: bool = True) -> httpx.Client:
    """Build a pooled client from ``settings``."""
    limits = httpx.Limits(
        max_keepalive_connections=settings.max_keepalive_connections,
        keepalive_expiry=settings.keepalive_expiry,
    )
    transport = httpx.HTTPTransport(
        verify=verify,
        limits=limits,
        retries=1 if settings.retry_on_connection_failure else 0,
    )
    return httpx.Client(
        transport=transport,
        timeout=httpx.Timeout(
            connect=settings.connect_timeout,
            read=settings.read_timeout,
            write=settings.write_timeout,
            pool=settings.pool_timeout,
        ),
        follow_redirects=settings.follow_redirects,
    )


def get_shared_client(*, ignore_ssl: bool = False, settings: HttpSettings | None = None) -> httpx.Client:
    """Return the shared client for the given TLS policy, creating it if needed."""
    with _lock:
        client = _shared_clients.get(ignore_ssl)
        if client is None or client.is_closed:
            client = create_pooled_client(settings or load_http_settings(), verify=not ignore_ssl)
            _shared_clients[ignore_ssl] = client
            logger.debug("Created pooled HTTP client (verify_ssl=%s)", not ignore_ssl)
        return client


def close_shared_clients() -> None:
    """Close both shared clients; the next request recreates them."""
    with _lock:
        clients = list(_shared_clients.values())
        _shared_clients.clear()
    for client in clients:
        client.close()


class PooledRequestBuilder(BaseRequestBuilder):
    """Builder that sends through the shared pooled clients."""

    # Only sent when the request carries a body.
    default_content_type = APPLICATION_JSON_UTF8

    def build_url(self) -> str:
        return add_query_params(self.url, self._query)

    def _request_content(self, method: str) -> tuple[bytes | None, str | None]:
        if method in _BODYLESS_METHODS:
            if self._body is not None:
                logger.debug("Ignoring request body for %s request", method)
            return None, None
        content, content_type = self.encoded_body()
        if content is None and method in BODY_REQUIRED_METHODS:
            return b"", None
        return content, content_type

    def _execute(self, method: str) -> Any:
        final_url = self.url
        try:
            final_url = self.build_url()
            headers = self.build_headers()
            content, content_type = self._request_content(method)
            if content_type:
                headers["Content-Type"] = content_type

            logger.info("Pooled HTTP request: method=%s, url=%s, headers=%s", method, final_url, masked_headers(headers))
            if self._body is not None:
                logger.debug("Request body: %s", self._body)

            client = self._client or get_shared_client(ignore_ssl=self._ignore_ssl, settings=self.settings)
            resp = client.request(method, final_url, headers=headers, content=content, timeout=self.timeout)
            self._raise_for_status(resp, method, final_url)
            logger.debug("Response body: %s", resp.text)
            return decode_response(resp, self.response_type)
        except HttpRequestError as exc:
            logger.error("HTTP request failed: method=%s, url=%s, error=%s", method, final_url, exc)
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("HTTP request failed: method=%s, url=%s, error=%s", method, final_url, exc, exc_info=True)
            raise HttpRequestError.wrap(exc, method=method, url=final_url) from exc


__all__ = ["PooledRequestBuilder", "close_shared_clients", "create_pooled_client", "get_shared_client"]
