# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

import httpx
import pytest

from fluenthttp.http.codec import decode_response, dumps, encode_body
from fluenthttp.http.headers import header_value, masked_headers, normalize_headers
from fluenthttp.http.media import APPLICATION_FORM_URLENCODED_UTF8, APPLICATION_JSON, APPLICATION_JSON_UTF8, normalize_method
from fluenthttp.http.models import HttpResponse
from fluenthttp.http.url import add_query_params, append_query_string


@dataclass
class User:
    id: int
    name: str


class Color(Enum):
    RED = "red"


def _response(text: str, status_code: int = 200, **kwargs: Any) -> httpx.Response:
    return httpx.Response(status_code, text=text, request=httpx.Request("GET", "http://example/x"), **kwargs)


def test_append_query_string_without_params_returns_url():
    assert append_query_string("http://example/a", []) == "http://example/a"


def test_append_query_string_encodes_reserved_characters():
    url = append_query_string("http://example/a", [("q", "a b"), ("path", "1/2&3"), ("name", "中")])
    assert url == "http://example/a?q=a%20b&path=1%2F2%263&name=%E4%B8%AD"


@pytest.mark.parametrize(
    ("base", "expected"),
    [
        ("http://example/a?x=1", "http://example/a?x=1&y=2"),
        ("http://example/a?", "http://example/a?y=2"),
        ("http://example/a?x=1&", "http://example/a?x=1&y=2"),
    ],
)
def test_append_query_string_separator(base, expected):
    assert append_query_string(base, [("y", "2")]) == expected


def test_append_query_string_renders_none_and_bools():
    assert append_query_string("http://example", [("a", None), ("b", True)]) == "http://example?a=&b=true"


def test_add_query_params_keeps_existing_and_duplicates():
    url = add_query_params("http://example/a?x=1", [("a", "1"), ("a", "2")])
    assert url == "http://example/a?x=1&a=1&a=2"


def test_normalize_method():
    assert normalize_method("patch") == "PATCH"
    with pytest.raises(ValueError):
        normalize_method("TRACE")


def test_header_helpers():
    headers = normalize_headers(httpx.Headers({"X-Trace": "1", "Content-Type": "text/plain"}))
    assert headers == {"x-trace": "1", "content-type": "text/plain"}
    assert header_value({"Content-Type": " application/json "}, "content-type") == "application/json"
    assert header_value({}, "missing", "fallback") == "fallback"
    assert masked_headers({"Authorization": "Bearer t", "Accept": "*/*"}) == {"Authorization": "***", "Accept": "*/*"}


def test_encode_body_variants():
    assert encode_body(None, APPLICATION_JSON) == (None, None)
    assert encode_body('{"raw": true}', APPLICATION_JSON) == (b'{"raw": true}', APPLICATION_JSON)
    assert encode_body("plain", None) == (b"plain", "text/plain; charset=utf-8")
    assert encode_body(b"\x00\x01", None) == (b"\x00\x01", "application/octet-stream")

    form, form_type = encode_body({"a": 1, "b": "x y"}, APPLICATION_FORM_URLENCODED_UTF8)
    assert form == b"a=1&b=x+y"
    assert form_type == APPLICATION_FORM_URLENCODED_UTF8


def test_encode_body_falls_back_to_json_content_type():
    content, content_type = encode_body(User(id=1, name="ann"), "text/plain")
    assert json.loads(content) == {"id": 1, "name": "ann"}
    assert content_type == APPLICATION_JSON_UTF8

    content, content_type = encode_body({"a": 1}, APPLICATION_JSON)
    assert content_type == APPLICATION_JSON


def test_dumps_handles_common_types():
    payload = {
        "when": datetime(2025, 7, 15, 8, 30),
        "price": Decimal("1.10"),
        "id": UUID("12345678-1234-5678-1234-567812345678"),
        "color": Color.RED,
        "tags": {"only"},
    }
    assert json.loads(dumps(payload)) == {
        "when": "2025-07-15T08:30:00",
        "price": "1.10",
        "id": "12345678-1234-5678-1234-567812345678",
        "color": "red",
        "tags": ["only"],
    }


def test_dumps_renders_plain_objects_as_mappings():
    class Empty:
        pass

    class Point:
        def __init__(self):
            self.x = 1
            self._hidden = 2

    assert dumps(Empty()) == "{}"
    assert json.loads(dumps(Point())) == {"x": 1}


def test_decode_response_by_type():
    resp = _response('{"id": 1, "name": "ann", "extra": true}')
    assert decode_response(resp, None) is None
    assert decode_response(resp, str) == '{"id": 1, "name": "ann", "extra": true}'
    assert decode_response(resp, bytes) == b'{"id": 1, "name": "ann", "extra": true}'
    assert decode_response(resp, dict) == {"id": 1, "name": "ann", "extra": True}
    assert decode_response(resp, Any) == {"id": 1, "name": "ann", "extra": True}
    assert decode_response(resp, User) == User(id=1, name="ann")


def test_decode_response_generic_containers():
    resp = _response('[{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]')
    assert decode_response(resp, list[User]) == [User(1, "a"), User(2, "b")]
    assert decode_response(_response('{"a": {"id": 3, "name": "c"}}'), dict[str, User]) == {"a": User(3, "c")}


def test_decode_response_empty_body_is_none():
    assert decode_response(_response("  "), dict) is None


def test_decode_response_type_mismatch():
    with pytest.raises(TypeError):
        decode_response(_response("[1, 2]"), dict)
    with pytest.raises(json.JSONDecodeError):
        decode_response(_response("not json"), dict)
    assert decode_response(_response("3"), float) == 3.0


def test_decode_response_full_response():
    resp = _response("hello", status_code=201, headers={"X-Id": "7"})
    full = decode_response(resp, HttpResponse)
    assert isinstance(full, HttpResponse)
    assert full.status_code == 201
    assert full.ok is True
    assert full.reason == "Created"
    assert full.headers["x-id"] == "7"
    assert full.text == "hello"
    assert full.url == "http://example/x"
    assert full.elapsed == 0.0


def test_http_response_json_helper():
    assert HttpResponse(status_code=200, text='{"a": 1}').json() == {"a": 1}
    assert HttpResponse(status_code=204).json() is None
    assert HttpResponse(status_code=404).ok is False


def test_dumps_handles_slotted_and_bare_objects():
    class Slotted:
        __slots__ = ("x", "y", "_secret")

        def __init__(self):
            self.x = 1
            self._secret = "hidden"

    class Child(Slotted):
        __slots__ = "z"

        def __init__(self):
            super().__init__()
            self.z = 3

    assert dumps(object()) == "{}"
    assert json.loads(dumps(Slotted())) == {"x": 1}
    assert json.loads(dumps(Child())) == {"x": 1, "z": 3}
    assert json.loads(dumps({"nested": object()})) == {"nested": {}}
