# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Media types and HTTP methods understood by the request builders."""

APPLICATION_JSON = "application/json"
APPLICATION_JSON_UTF8 = "application/json; charset=utf-8"
APPLICATION_FORM_URLENCODED = "application/x-www-form-urlencoded"
APPLICATION_FORM_URLENCODED_UTF8 = "application/x-www-form-urlencoded; charset=utf-8"
APPLICATION_OCTET_STREAM = "application/octet-stream"
TEXT_PLAIN = "text/plain"
ALL = "*/*"

SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"})

# Methods that always carry a body, even an empty one.
BODY_REQUIRED_METHODS = frozenset({"POST", "PUT", "PATCH"})


def base_media_type(content_type: str | None) -> str:
    """Return the lowercased media type without parameters (``charset`` etc.)."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_json(content_type: str | None) -> bool:
    base = base_media_type(content_type)
    return base == APPLICATION_JSON or base.endswith("+json")


def is_form(content_type: str | None) -> bool:
    return base_media_type(content_type) == APPLICATION_FORM_URLENCODED


def normalize_method(method: str) -> str:
    """Uppercase ``method`` and reject anything the builders cannot send."""
    normalized = str(method or "").strip().upper()
    if normalized not in SUPPORTED_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method!r}")
    return normalized


__all__ = [
    "ALL",
    "APPLICATION_FORM_URLENCODED",
    "APPLICATION_FORM_URLENCODED_UTF8",
    "APPLICATION_JSON",
    "APPLICATION_JSON_UTF8",
    "APPLICATION_OCTET_STREAM",
    "BODY_REQUIRED_METHODS",
    "SUPPORTED_METHODS",
    "TEXT_PLAIN",
    "base_media_type",
    "is_form",
    "is_json",
    "normalize_method",
]
