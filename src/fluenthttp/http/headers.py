# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header helpers shared by request builders and response models."""

from collections.abc import Mapping

_MASKED_HEADERS = frozenset({"authorization", "proxy-authorization"})


def _coerce_headers_mapping(headers: object) -> Mapping[object, object] | None:
    """
    Best-effort coercion of "dict-like" header containers into a Mapping.

    Accepts plain dicts, httpx.Headers and iterables of pairs.
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        return dict(items())

    return dict(headers)  # type: ignore[call-overload]


def normalize_headers(headers: object) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default
    lower = str(name).lower()
    for key, value in headers.items():
        if key is not None and str(key).lower() == lower:
            return default if value is None else str(value).strip()
    return default


def masked_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy of ``headers`` safe for logging (credentials replaced)."""
    return {key: ("***" if key.lower() in _MASKED_HEADERS else value) for key, value in headers.items()}


__all__ = ["header_value", "masked_headers", "normalize_headers"]
