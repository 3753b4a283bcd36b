# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP response model returned when callers ask for the whole exchange."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from .headers import header_value, normalize_headers

Headers = dict[str, str]


@dataclass
class HttpResponse:
    """Normalized HTTP response with status, headers and body."""

    status_code: int
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    reason: str = ""
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> str:
        return header_value(self.headers, "content-type")

    def json(self) -> Any:
        """Decode the body as JSON; an empty body yields ``None``."""
        if not self.text.strip():
            return None
        return json.loads(self.text)

    @classmethod
    def from_httpx(cls, resp: httpx.Response) -> HttpResponse:
        """Helper to snapshot an already-read httpx response."""
        try:
            elapsed = resp.elapsed.total_seconds()
        except RuntimeError:
            # elapsed is only set once the response stream has been closed
            elapsed = 0.0
        return cls(
            status_code=resp.status_code,
            headers=normalize_headers(resp.headers),
            text=resp.text,
            content=resp.content,
            url=str(resp.url),
            reason=resp.reason_phrase,
            elapsed=elapsed,
        )


__all__ = ["Headers", "HttpResponse"]
