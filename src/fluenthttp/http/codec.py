# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request body encoding and response body decoding.

Bodies are turned into bytes according to their Python type and the builder's
content type; responses are decoded according to the ``response_type`` the
caller asked for (``str``, ``bytes``, ``HttpResponse``, JSON containers or a
dataclass).
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, get_args, get_origin
from urllib.parse import urlencode
from uuid import UUID

import httpx

from .media import APPLICATION_JSON_UTF8, APPLICATION_OCTET_STREAM, TEXT_PLAIN, is_form, is_json
from .models import HttpResponse


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    # Plain objects serialize as their public attributes; attribute-less ones as {}.
    attributes = dict(getattr(value, "__dict__", {}))
    for klass in type(value).__mro__:
        slots = klass.__dict__.get("__slots__", ())
        for name in [slots] if isinstance(slots, str) else slots:
            if name not in attributes and hasattr(value, name):
                attributes[name] = getattr(value, name)
    return {k: v for k, v in attributes.items() if not k.startswith("_")}


def dumps(value: Any) -> str:
    """Serialize ``value`` to a JSON string."""
    return json.dumps(value, default=_json_default, ensure_ascii=False)


def encode_body(body: Any, content_type: str | None) -> tuple[bytes | None, str | None]:
    """
    Encode ``body`` for the wire.

    Returns ``(content, effective_content_type)``; ``(None, None)`` when there is
    no body. Strings and bytes are sent as-is, mappings are form-encoded when the
    content type asks for it, everything else becomes JSON.
    """
    if body is None:
        return None, None

    if isinstance(body, str):
        return body.encode("utf-8"), content_type or f"{TEXT_PLAIN}; charset=utf-8"

    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body), content_type or APPLICATION_OCTET_STREAM

    if isinstance(body, Mapping) and is_form(content_type):
        return urlencode(list(body.items()), doseq=True).encode("utf-8"), content_type

    effective = content_type if is_json(content_type) else APPLICATION_JSON_UTF8
    return dumps(body).encode("utf-8"), effective


def _build_dataclass(cls: type, data: Any) -> Any:
    if not isinstance(data, Mapping):
        raise TypeError(f"Cannot decode JSON {type(data).__name__} as {cls.__name__}")
    names = {f.name for f in dataclasses.fields(cls) if f.init}
    # Unknown keys are dropped rather than rejected.
    return cls(**{key: value for key, value in data.items() if key in names})


def _coerce(data: Any, response_type: Any) -> Any:
    if response_type is Any or response_type is object:
        return data

    origin = get_origin(response_type)
    if origin is list:
        if not isinstance(data, list):
            raise TypeError(f"Cannot decode JSON {type(data).__name__} as list")
        args = get_args(response_type)
        if args:
            return [_coerce(item, args[0]) for item in data]
        return data
    if origin is dict:
        if not isinstance(data, dict):
            raise TypeError(f"Cannot decode JSON {type(data).__name__} as dict")
        args = get_args(response_type)
        if len(args) == 2:
            return {key: _coerce(value, args[1]) for key, value in data.items()}
        return data

    if isinstance(response_type, type) and dataclasses.is_dataclass(response_type):
        return _build_dataclass(response_type, data)

    if response_type is float and isinstance(data, int) and not isinstance(data, bool):
        return float(data)

    if isinstance(response_type, type) and not isinstance(data, response_type):
        raise TypeError(f"Cannot decode JSON {type(data).__name__} as {response_type.__name__}")
    return data


def decode_response(resp: httpx.Response, response_type: Any) -> Any:
    """Convert an already-read response into ``response_type``."""
    if response_type is None or response_type is type(None):
        return None
    if response_type is HttpResponse:
        return HttpResponse.from_httpx(resp)
    if response_type is str:
        return resp.text
    if response_type is bytes:
        return resp.content

    text = resp.text
    if not text.strip():
        return None
    return _coerce(json.loads(text), response_type)


__all__ = ["decode_response", "dumps", "encode_body"]
