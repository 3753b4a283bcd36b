# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
fluenthttp package entrypoint.

Two interchangeable fluent request builders on top of httpx: one that opens a
dedicated client per request and one that reuses shared connection pools.
Both handle JSON (de)serialization, headers, query parameters, timeouts and an
opt-out from TLS verification.
"""

from .config import HttpSettings, load_http_settings
from .errors import ErrorCategory, HttpRequestError, HttpStatusError
from .http import (
    HttpResponse,
    PooledRequestBuilder,
    TemplateRequestBuilder,
    close_shared_clients,
    create_builder,
    pooled_request,
    template_request,
)
from .log import setup_logging
from .version import __version__

__all__ = [
    "ErrorCategory",
    "HttpRequestError",
    "HttpResponse",
    "HttpSettings",
    "HttpStatusError",
    "PooledRequestBuilder",
    "TemplateRequestBuilder",
    "close_shared_clients",
    "create_builder",
    "load_http_settings",
    "pooled_request",
    "setup_logging",
    "template_request",
    "__version__",
]
