# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
import logging
import socket
import ssl

import httpx

from fluenthttp import config
from fluenthttp.config import DEFAULT_USER_AGENT, HttpSettings
from fluenthttp.errors import ErrorCategory, HttpRequestError, HttpStatusError, categorize_exception
from fluenthttp.log import resolve_level, setup_logging


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_CONNECT_TIMEOUT", "3.5")
    monkeypatch.setenv("FLUENTHTTP_READ_TIMEOUT", "20")
    monkeypatch.setenv("FLUENTHTTP_WRITE_TIMEOUT", "7")
    monkeypatch.setenv("FLUENTHTTP_POOL_TIMEOUT", "1")
    monkeypatch.setenv("FLUENTHTTP_POOL_MAX_IDLE", "4")
    monkeypatch.setenv("FLUENTHTTP_POOL_KEEPALIVE", "60")
    monkeypatch.setenv("FLUENTHTTP_RETRY_ON_CONNECTION_FAILURE", "no")
    monkeypatch.setenv("FLUENTHTTP_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("FLUENTHTTP_REDIRECTS", "false")

    settings = config.load_http_settings()

    assert settings.connect_timeout == 3.5
    assert settings.read_timeout == 20.0
    assert settings.write_timeout == 7.0
    assert settings.pool_timeout == 1.0
    assert settings.max_keepalive_connections == 4
    assert settings.keepalive_expiry == 60.0
    assert settings.retry_on_connection_failure is False
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.follow_redirects is False


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_CONNECT_TIMEOUT", "not-a-number")
    monkeypatch.setenv("FLUENTHTTP_READ_TIMEOUT", "-3")
    monkeypatch.setenv("FLUENTHTTP_WRITE_TIMEOUT", "")
    monkeypatch.setenv("FLUENTHTTP_POOL_MAX_IDLE", "ten")

    settings = config.load_http_settings()

    assert settings.connect_timeout == HttpSettings.connect_timeout
    assert settings.read_timeout == HttpSettings.read_timeout
    assert settings.write_timeout == HttpSettings.write_timeout
    assert settings.max_keepalive_connections == HttpSettings.max_keepalive_connections
    assert DEFAULT_USER_AGENT in settings.user_agent


def test_load_http_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("FLUENTHTTP_READ_TIMEOUT", "7.7")
    assert config.load_http_settings().read_timeout == 7.7
    monkeypatch.setenv("FLUENTHTTP_READ_TIMEOUT", "8.8")
    assert config.load_http_settings().read_timeout == 8.8


def test_defaults_match_fifteen_second_timeouts():
    settings = HttpSettings()
    assert (settings.connect_timeout, settings.read_timeout, settings.write_timeout) == (15.0, 15.0, 15.0)
    assert settings.max_keepalive_connections == 10
    assert settings.keepalive_expiry == 300.0


def test_categorize_exception_maps_httpx_errors():
    assert categorize_exception(httpx.ReadTimeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ConnectionResetError()) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(json.JSONDecodeError("bad", "x", 0)) is ErrorCategory.DECODE_ERROR
    assert categorize_exception(KeyError("x")) is ErrorCategory.UNKNOWN_ERROR


def test_categorize_exception_inspects_cause_chain():
    tls = httpx.ConnectError("handshake failed")
    tls.__cause__ = ssl.SSLCertVerificationError("certificate verify failed")
    assert categorize_exception(tls) is ErrorCategory.SSL_ERROR

    dns = httpx.ConnectError("lookup failed")
    dns.__cause__ = socket.gaierror("Name or service not known")
    assert categorize_exception(dns) is ErrorCategory.DNS_ERROR


def test_http_request_error_wrap_keeps_context():
    cause = httpx.ConnectError("refused")
    err = HttpRequestError.wrap(cause, method="GET", url="http://example")
    assert isinstance(err, RuntimeError)
    assert err.method == "GET"
    assert err.url == "http://example"
    assert err.category is ErrorCategory.CONNECTION_ERROR
    assert "refused" in str(err)


def test_http_status_error_message_carries_response():
    err = HttpStatusError(method="POST", url="http://example", status_code=502, reason="Bad Gateway", body="upstream down")
    assert isinstance(err, HttpRequestError)
    assert err.category is ErrorCategory.HTTP_ERROR
    assert str(err) == "HTTP request failed: code=502, message=Bad Gateway, body=upstream down"


def test_resolve_level(monkeypatch):
    monkeypatch.delenv("FLUENTHTTP_LOG_LEVEL", raising=False)
    assert resolve_level() == logging.WARNING
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("nonsense") == logging.WARNING
    monkeypatch.setenv("FLUENTHTTP_LOG_LEVEL", "error")
    assert resolve_level() == logging.ERROR


def test_setup_logging_quiets_transport_loggers(monkeypatch):
    for name in ("httpx", "httpcore"):
        monkeypatch.setattr(logging.getLogger(name), "level", logging.NOTSET)

    assert setup_logging("info") == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING

    setup_logging("debug")
    assert logging.getLogger("httpcore").level == logging.DEBUG
