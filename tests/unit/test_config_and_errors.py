# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import ssl

import httpx
import pytest

from sniprobe import config
from sniprobe.config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from sniprobe.errors import (
    ErrorCategory,
    categorize_exception,
    error_category_to_reason,
    sanitize_message,
)


def test_probe_settings_defaults(monkeypatch):
    for name in ("SNIPROBE_TIMEOUT", "SNIPROBE_USER_AGENT", "SNIPROBE_VERIFY_SSL", "SNIPROBE_RESULTS_DIR"):
        monkeypatch.delenv(name, raising=False)
    settings = config.load_probe_settings()
    assert settings.timeout == DEFAULT_TIMEOUT == 5.0
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert "Chrome/78" in settings.user_agent
    assert settings.verify_ssl is True
    assert settings.results_dir == "result"


def test_probe_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("SNIPROBE_TIMEOUT", "2.5")
    monkeypatch.setenv("SNIPROBE_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("SNIPROBE_VERIFY_SSL", "0")
    monkeypatch.setenv("SNIPROBE_RESULTS_DIR", "out")
    monkeypatch.setenv("SNIPROBE_REQUEST_FILE", "targets.txt")

    settings = config.load_probe_settings()

    assert settings.timeout == 2.5
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.verify_ssl is False
    assert settings.results_dir == "out"
    assert settings.request_file == "targets.txt"


@pytest.mark.parametrize("value", ["not-a-number", "", "-1", "0"])
def test_probe_settings_invalid_timeout_falls_back(monkeypatch, value):
    monkeypatch.setenv("SNIPROBE_TIMEOUT", value)
    assert config.load_probe_settings().timeout == config.ProbeSettings.timeout


def test_categorize_exception_maps_httpx_and_stdlib_errors():
    request = httpx.Request("GET", "https://example.com/")
    assert categorize_exception(httpx.ConnectTimeout("slow", request=request)) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused", request=request)) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(httpx.RemoteProtocolError("bad", request=request)) is ErrorCategory.PROTOCOL_ERROR
    assert categorize_exception(ConnectionResetError()) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ValueError("x")) is ErrorCategory.UNKNOWN_ERROR


def test_categorize_exception_follows_cause_chain():
    request = httpx.Request("GET", "https://example.com/")
    try:
        try:
            raise ssl.SSLCertVerificationError("hostname mismatch")
        except ssl.SSLError as inner:
            raise httpx.ConnectError("failed", request=request) from inner
    except httpx.ConnectError as exc:
        assert categorize_exception(exc) is ErrorCategory.SSL_ERROR

    try:
        try:
            raise socket.gaierror(-2, "Name or service not known")
        except socket.gaierror as inner:
            raise httpx.ConnectError("failed", request=request) from inner
    except httpx.ConnectError as exc:
        assert categorize_exception(exc) is ErrorCategory.DNS_ERROR


def test_categorize_exception_reads_ssl_from_message():
    request = httpx.Request("GET", "https://example.com/")
    exc = httpx.ConnectError("[SSL: CERTIFICATE_VERIFY_FAILED] certificate verify failed", request=request)
    assert categorize_exception(exc) is ErrorCategory.SSL_ERROR


def test_sanitize_message_replaces_every_outbound_url():
    message = 'GET "https://1.2.3.4/a": EOF (https://1.2.3.4/a)'
    cleaned = sanitize_message(message, "https://1.2.3.4/a", "https://example.com/a")
    assert cleaned == 'GET "https://example.com/a": EOF (https://example.com/a)'
    assert sanitize_message("unchanged", None, "https://example.com/") == "unchanged"


def test_error_category_reason_strings():
    assert error_category_to_reason(ErrorCategory.TIMEOUT) == "Network timeout during probe"
    assert error_category_to_reason(ErrorCategory.NONE) == ""
    assert error_category_to_reason(None) == ""
