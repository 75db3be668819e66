# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Build requests that connect to a candidate IP while identifying as the original host.

The outbound URL is derived by replacing the *first* textual occurrence of the
identity host in the base URL with the connect address. This is a plain string
replacement, not a structured rewrite: a base URL that also embeds the host in
its userinfo gets that occurrence replaced instead of the authority.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable
from urllib.parse import urlsplit

import httpx

from ..errors import MalformedTargetError, RequestBuildError, sanitize_message
from ..models.probe import ProbeConfig, ProbeTarget

SUPPORTED_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True)
class ProbeRequestPlan:
    """Everything needed to issue one probe, before any I/O happens."""

    base_url: str
    scheme: str
    identity_host: str
    host_header: str
    sni_hostname: str
    connect_address: str
    outbound_url: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def extensions(self) -> dict[str, str]:
        if self.scheme != "https":
            return {}
        return {"sni_hostname": self.sni_hostname}

    def sanitize(self, message: str) -> str:
        return sanitize_message(message, self.outbound_url, self.base_url)


def identity_host(base_url: str) -> str:
    """
    Return the authority (host plus optional port) of `base_url`.

    Userinfo is dropped. Raises MalformedTargetError when the URL does not parse
    or carries no host.
    """
    try:
        parts = urlsplit(base_url)
        # Accessing .port validates the port component.
        _ = parts.port
    except ValueError as exc:
        raise MalformedTargetError(f'parse "{base_url}": {exc}') from exc
    authority = parts.netloc.rpartition("@")[2]
    if not authority or not parts.hostname:
        raise MalformedTargetError(f'parse "{base_url}": missing host')
    return authority


def sni_hostname(base_url: str) -> str:
    """
    Host name presented in the TLS handshake.

    Internationalized names are IDNA-encoded; port and IPv6 brackets are dropped.
    """
    try:
        hostname = httpx.URL(base_url).raw_host.decode("ascii")
    except httpx.InvalidURL as exc:
        raise MalformedTargetError(f'parse "{base_url}": {exc}') from exc
    if not hostname:
        raise MalformedTargetError(f'parse "{base_url}": missing host')
    return hostname


def host_header(base_url: str) -> str:
    """ASCII form of the identity host for the Host header, keeping an explicit port."""
    hostname = sni_hostname(base_url)
    if ":" in hostname:
        hostname = f"[{hostname}]"
    port = urlsplit(base_url).port
    return hostname if port is None else f"{hostname}:{port}"


def substitute_host(url: str, host: str, address: str) -> str:
    """Replace the first occurrence of `host` in `url` with `address`."""
    if not address or address == host:
        return url
    return url.replace(host, address, 1)


def build_headers(config: ProbeConfig, host: str) -> dict[str, str]:
    headers = {
        "Host": host,
        "User-Agent": config.effective_user_agent,
    }
    if config.cookie:
        headers["Cookie"] = config.cookie
    return headers


def plan_probe(config: ProbeConfig, target: ProbeTarget) -> ProbeRequestPlan:
    """Resolve identity, connect address and outbound URL for one target."""
    base_url = config.base_url
    host = identity_host(base_url)
    header_host = host_header(base_url)
    scheme = urlsplit(base_url).scheme.lower()
    address = host if target.is_baseline else target.ip
    outbound_url = substitute_host(base_url, host, address)

    plan = ProbeRequestPlan(
        base_url=base_url,
        scheme=scheme,
        identity_host=host,
        host_header=header_host,
        sni_hostname=sni_hostname(base_url),
        connect_address=address,
        outbound_url=outbound_url,
        headers=build_headers(config, header_host),
    )
    if scheme not in SUPPORTED_SCHEMES:
        raise RequestBuildError(plan.sanitize(f'unsupported protocol scheme "{scheme}" in "{outbound_url}"'))
    return plan


def build_probe_request(
    client: httpx.Client,
    plan: ProbeRequestPlan,
    *,
    trace: Callable[[str, dict[str, Any]], None] | None = None,
) -> httpx.Request:
    """Create the httpx request for `plan`; diagnostics never expose the outbound URL."""
    extensions: dict[str, Any] = dict(plan.extensions)
    if trace is not None:
        extensions["trace"] = trace
    try:
        return client.build_request(
            "GET",
            plan.outbound_url,
            headers=plan.headers,
            extensions=extensions,
        )
    except (httpx.InvalidURL, httpx.UnsupportedProtocol, ValueError, TypeError) as exc:
        raise RequestBuildError(plan.sanitize(f'build request for "{plan.outbound_url}": {exc}')) from exc


__all__ = [
    "ProbeRequestPlan",
    "SUPPORTED_SCHEMES",
    "build_headers",
    "build_probe_request",
    "host_header",
    "identity_host",
    "plan_probe",
    "sni_hostname",
    "substitute_host",
]
