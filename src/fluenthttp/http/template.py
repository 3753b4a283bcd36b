# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Blocking request builder that configures a fresh client for every call."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from ..errors import HttpRequestError
from .base import BaseRequestBuilder
from .codec import decode_response
from .headers import masked_headers
from .media import APPLICATION_JSON
from .url import append_query_string

logger = logging.getLogger(__name__)


class TemplateRequestBuilder(BaseRequestBuilder):
    """
    Single-use client per request.

    Each execution opens an ``httpx.Client`` configured with this builder's
    timeouts and TLS policy and closes it once the response has been read, so
    no connection is ever shared between builders. Requests default to
    ``Content-Type: application/json``.
    """

    default_content_type = APPLICATION_JSON

    def query_params(self, params: Mapping[str, Any] | None) -> TemplateRequestBuilder:
        """Replace all query parameters with ``params``."""
        self._query = list((params or {}).items())
        return self

    def build_url(self) -> str:
        return append_query_string(self.url, self._query)

    def is_error_status(self, status_code: int) -> bool:
        # 1xx and 3xx responses are handed back to the caller.
        return status_code >= 400

    def create_client(self) -> httpx.Client:
        return httpx.Client(
            verify=not self._ignore_ssl,
            timeout=self.timeout,
            follow_redirects=self.settings.follow_redirects,
        )

    def _execute(self, method: str) -> Any:
        final_url = self.build_url()
        headers = self.build_headers()
        content, body_content_type = self.encoded_body()
        content_type = body_content_type or self._content_type
        if content_type:
            headers["Content-Type"] = content_type

        logger.info(
            "Sending HTTP request: method=%s, url=%s, headers=%s, body=%s",
            method,
            final_url,
            masked_headers(headers),
            self._body,
        )

        try:
            if self._client is not None:
                resp = self._client.request(method, final_url, headers=headers, content=content, timeout=self.timeout)
            else:
                with self.create_client() as client:
                    resp = client.request(method, final_url, headers=headers, content=content)
            self._raise_for_status(resp, method, final_url)
            return decode_response(resp, self.response_type)
        except HttpRequestError as exc:
            logger.error("HTTP request failed: method=%s, url=%s, error=%s", method, final_url, exc)
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("HTTP request failed: method=%s, url=%s, error=%s", method, final_url, exc, exc_info=True)
            raise HttpRequestError.wrap(exc, method=method, url=final_url) from exc


__all__ = ["TemplateRequestBuilder"]
