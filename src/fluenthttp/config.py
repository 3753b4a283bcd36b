# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for fluenthttp."""

import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from .version import __version__

DEFAULT_USER_AGENT = f"fluenthttp/{__version__}"

T = TypeVar("T")


def _env(name: str, default: T, parse: Callable[[str], T], valid: Callable[[T], bool] = lambda _: True) -> T:
    """Parse env var ``name``; missing, unparsable or invalid values yield ``default``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = parse(raw.strip())
    except ValueError:
        return default
    return value if valid(value) else default


def _parse_bool(raw: str) -> bool:
    return raw.lower() in {"1", "true", "yes", "on"}


def _positive(value: float) -> bool:
    return value > 0


@dataclass
class HttpSettings:
    """HTTP client defaults shared by both request builders."""

    connect_timeout: float = 15.0
    read_timeout: float = 15.0
    write_timeout: float = 15.0
    pool_timeout: float = 5.0
    max_keepalive_connections: int = 10
    keepalive_expiry: float = 300.0
    retry_on_connection_failure: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    follow_redirects: bool = True

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            connect_timeout=_env("FLUENTHTTP_CONNECT_TIMEOUT", cls.connect_timeout, float, _positive),
            read_timeout=_env("FLUENTHTTP_READ_TIMEOUT", cls.read_timeout, float, _positive),
            write_timeout=_env("FLUENTHTTP_WRITE_TIMEOUT", cls.write_timeout, float, _positive),
            pool_timeout=_env("FLUENTHTTP_POOL_TIMEOUT", cls.pool_timeout, float, _positive),
            max_keepalive_connections=_env("FLUENTHTTP_POOL_MAX_IDLE", cls.max_keepalive_connections, int, lambda n: n >= 0),
            keepalive_expiry=_env("FLUENTHTTP_POOL_KEEPALIVE", cls.keepalive_expiry, float, _positive),
            retry_on_connection_failure=_env(
                "FLUENTHTTP_RETRY_ON_CONNECTION_FAILURE", cls.retry_on_connection_failure, _parse_bool
            ),
            user_agent=os.getenv("FLUENTHTTP_USER_AGENT", cls.user_agent),
            follow_redirects=_env("FLUENTHTTP_REDIRECTS", cls.follow_redirects, _parse_bool),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
