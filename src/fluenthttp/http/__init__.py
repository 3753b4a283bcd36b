# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP builder exports."""

from .base import BaseRequestBuilder
from .client import BACKENDS, create_builder, pooled_request, template_request
from .headers import header_value, normalize_headers
from .models import Headers, HttpResponse
from .pooled import PooledRequestBuilder, close_shared_clients, get_shared_client
from .template import TemplateRequestBuilder

__all__ = [
    "BACKENDS",
    "BaseRequestBuilder",
    "Headers",
    "HttpResponse",
    "PooledRequestBuilder",
    "TemplateRequestBuilder",
    "close_shared_clients",
    "create_builder",
    "get_shared_client",
    "header_value",
    "normalize_headers",
    "pooled_request",
    "template_request",
]
