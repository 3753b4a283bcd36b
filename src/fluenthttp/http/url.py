# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Query-string helpers for the request builders."""

from collections.abc import Iterable
from urllib.parse import quote

import httpx

QueryPairs = Iterable[tuple[str, object]]


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def append_query_string(url: str, params: QueryPairs) -> str:
    """
    Append percent-encoded ``params`` to ``url`` by plain string concatenation.

    The existing URL is left untouched: a ``?`` is added when it has no query yet,
    a ``&`` when it has one that does not already end in a separator. Every
    reserved character in keys and values is escaped.

    Example:
      http://host/a?x=1 + [("q", "a b")] -> http://host/a?x=1&q=a%20b
    """
    pairs = [f"{quote(_as_text(key), safe='')}={quote(_as_text(value), safe='')}" for key, value in params]
    if not pairs:
        return url

    if "?" not in url:
        separator = "?"
    elif url.endswith(("?", "&")):
        separator = ""
    else:
        separator = "&"
    return f"{url}{separator}{'&'.join(pairs)}"


def add_query_params(url: str, params: QueryPairs) -> str:
    """
    Parse ``url`` and add each pair as an extra query parameter.

    Existing parameters are preserved and repeated keys are kept, so
    ``[("a", 1), ("a", 2)]`` yields ``a=1&a=2``.
    """
    parsed = httpx.URL(url)
    for key, value in params:
        parsed = parsed.copy_add_param(_as_text(key), _as_text(value))
    return str(parsed)


__all__ = ["QueryPairs", "add_query_params", "append_query_string"]
