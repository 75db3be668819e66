# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class FailureKind(str, Enum):
    """Per-probe failure classes. None of them is fatal to a run."""

    MALFORMED_TARGET = "MALFORMED_TARGET"
    REQUEST_BUILD_FAILURE = "REQUEST_BUILD_FAILURE"
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"
    ARTIFACT_WRITE_FAILURE = "ARTIFACT_WRITE_FAILURE"


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class ProbeError(Exception):
    """Failure scoped to a single probe; converted into its outcome."""

    kind: FailureKind = FailureKind.TRANSPORT_FAILURE

    def __init__(self, message: str, *, category: ErrorCategory = ErrorCategory.NONE):
        super().__init__(message)
        self.message = message
        self.category = category


class MalformedTargetError(ProbeError):
    kind = FailureKind.MALFORMED_TARGET


class RequestBuildError(ProbeError):
    kind = FailureKind.REQUEST_BUILD_FAILURE


class TransportError(ProbeError):
    kind = FailureKind.TRANSPORT_FAILURE


class ArtifactWriteError(ProbeError):
    kind = FailureKind.ARTIFACT_WRITE_FAILURE


class SetupError(Exception):
    """Run-level failure raised before any probe is dispatched."""


class RequestFileError(SetupError):
    pass


class ResultsDirError(SetupError):
    pass


def _chain(exc: BaseException):
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    httpx wraps the underlying socket/ssl errors, so the cause chain is
    inspected before falling back to the httpx class itself.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    for item in _chain(exc):
        if isinstance(item, (ssl_module.SSLError, ssl_module.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(item, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR

    message = str(exc).lower()
    if "certificate_verify_failed" in message or "[ssl" in message or "handshake" in message:
        return ErrorCategory.SSL_ERROR
    if "name or service not known" in message or "nodename nor servname" in message:
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.RemoteProtocolError, httpx.LocalProtocolError)):
        return ErrorCategory.PROTOCOL_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def sanitize_message(message: str, outbound_url: str | None, base_url: str) -> str:
    """Rewrite the IP-bearing outbound URL back to the requested base URL."""
    if not outbound_url or outbound_url == base_url:
        return message
    return message.replace(outbound_url, base_url)


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout during probe",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.PROTOCOL_ERROR: "Malformed HTTP response",
        ErrorCategory.UNKNOWN_ERROR: "Network error during probe",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Probe failed due to network error")
