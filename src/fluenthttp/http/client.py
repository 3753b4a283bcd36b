# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Builder entry points and backend factory."""

from typing import Any, Literal

from ..config import HttpSettings
from .base import BaseRequestBuilder
from .pooled import PooledRequestBuilder
from .template import TemplateRequestBuilder

Backend = Literal["template", "pooled"]

BACKENDS: dict[str, type[BaseRequestBuilder]] = {
    "template": TemplateRequestBuilder,
    "pooled": PooledRequestBuilder,
}


def template_request(url: str, response_type: Any = dict, *, settings: HttpSettings | None = None) -> TemplateRequestBuilder:
    """Start a request that runs on its own single-use client."""
    return TemplateRequestBuilder(url, response_type, settings=settings)


def pooled_request(url: str, response_type: Any = dict, *, settings: HttpSettings | None = None) -> PooledRequestBuilder:
    """Start a request that runs on the shared pooled clients."""
    return PooledRequestBuilder(url, response_type, settings=settings)


def create_builder(
    url: str,
    response_type: Any = dict,
    *,
    backend: Backend = "pooled",
    settings: HttpSettings | None = None,
) -> BaseRequestBuilder:
    """Factory for either builder flavour by name."""
    try:
        builder_cls = BACKENDS[backend]
    except KeyError:
        raise ValueError(f"Unknown backend {backend!r}; expected one of {sorted(BACKENDS)}") from None
    return builder_cls(url, response_type, settings=settings)


__all__ = ["BACKENDS", "Backend", "create_builder", "pooled_request", "template_request"]
