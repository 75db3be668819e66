# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request-file parsing.

The file is line oriented::

    url: https://example.com/
    user-agent: Mozilla/5.0 ...
    cookie: session=abc
    header-output: true
    body-output: 0
    203.0.113.10
    203.0.113.11

Recognized option prefixes set the shared options; every other non-empty line is
one candidate IP. A file without IP lines yields a single baseline target.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path

from .config import ProbeSettings, load_probe_settings
from .errors import RequestFileError
from .models.probe import ProbeConfig, ProbeTarget


def to_bool(value: str) -> bool:
    """Empty, ``0`` and ``false`` (any case) are false; everything else is true."""
    value = value.strip()
    return not (value == "" or value == "0" or value.lower() == "false")


@dataclass
class RequestFile:
    config: ProbeConfig
    targets: list[ProbeTarget] = field(default_factory=list)


def parse_request_lines(lines: Iterable[str], settings: ProbeSettings | None = None) -> RequestFile:
    settings = settings or load_probe_settings()
    options = {
        "base_url": "",
        "user_agent": "",
        "cookie": "",
        "capture_headers": False,
        "capture_body": False,
    }
    targets: list[ProbeTarget] = []

    for raw in lines:
        text = raw.rstrip("\r\n")
        if text.startswith("url:"):
            options["base_url"] = text[len("url:"):].strip()
        elif text.startswith("user-agent:"):
            options["user_agent"] = text[len("user-agent:"):].strip()
        elif text.startswith("header-output:"):
            options["capture_headers"] = to_bool(text[len("header-output:"):])
        elif text.startswith("body-output:"):
            options["capture_body"] = to_bool(text[len("body-output:"):])
        elif text.startswith("cookie:"):
            options["cookie"] = text[len("cookie:"):].strip()
        elif text.strip():
            targets.append(ProbeTarget(ip=text.strip()))

    if not targets:
        targets.append(ProbeTarget())

    config = ProbeConfig(
        timeout=settings.timeout,
        default_user_agent=settings.user_agent,
        verify_ssl=settings.verify_ssl,
        **options,
    )
    return RequestFile(config=config, targets=targets)


def load_request_file(path: str | Path, settings: ProbeSettings | None = None) -> RequestFile:
    """Read and parse `path`; unreadable files raise RequestFileError."""
    try:
        with open(path, encoding="utf-8-sig") as handle:
            return parse_request_lines(handle, settings)
    except OSError as exc:
        raise RequestFileError(f"cannot read {path}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise RequestFileError(f"cannot decode {path}: {exc}") from exc


def override(request: RequestFile, *, url: str | None = None, ips: list[str] | None = None) -> RequestFile:
    """Apply command-line overrides on top of a parsed request file."""
    config = replace(request.config, base_url=url) if url else request.config
    targets = [ProbeTarget(ip=ip.strip()) for ip in ips] if ips else request.targets
    return RequestFile(config=config, targets=targets)


__all__ = ["RequestFile", "load_request_file", "override", "parse_request_lines", "to_bool"]
