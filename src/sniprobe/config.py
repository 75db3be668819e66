# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for sniprobe."""

import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; WOW64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/78.0.3904.108 Safari/537.36"
)
DEFAULT_TIMEOUT = 5.0
DEFAULT_RESULTS_DIR = "result"
DEFAULT_REQUEST_FILE = "request.txt"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ProbeSettings:
    """Process-wide probe defaults."""

    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    results_dir: str = DEFAULT_RESULTS_DIR
    request_file: str = DEFAULT_REQUEST_FILE

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("SNIPROBE_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            user_agent=os.getenv("SNIPROBE_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("SNIPROBE_VERIFY_SSL", cls.verify_ssl),
            results_dir=os.getenv("SNIPROBE_RESULTS_DIR", cls.results_dir),
            request_file=os.getenv("SNIPROBE_REQUEST_FILE", cls.request_file),
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()
