# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
sniprobe package entrypoint.

sniprobe requests one URL through a list of candidate IP addresses in parallel,
presenting the URL's own hostname as TLS SNI and Host header on every
connection, so an operator can tell which origin behind a CDN, load balancer or
DNS override actually serves the site.
"""

from .config import DEFAULT_USER_AGENT, ProbeSettings, load_probe_settings
from .errors import ErrorCategory, FailureKind, ProbeError, SetupError
from .log import setup_logging
from .models import ProbeConfig, ProbeFailure, ProbeOutcome, ProbeTarget
from .probe import ProbeDispatcher, dispatch, run_probe
from .request_file import load_request_file, parse_request_lines
from .results import prepare_results_dir
from .version import __version__

__all__ = [
    "DEFAULT_USER_AGENT",
    "ErrorCategory",
    "FailureKind",
    "ProbeConfig",
    "ProbeDispatcher",
    "ProbeError",
    "ProbeFailure",
    "ProbeOutcome",
    "ProbeSettings",
    "ProbeTarget",
    "SetupError",
    "__version__",
    "dispatch",
    "load_probe_settings",
    "load_request_file",
    "parse_request_lines",
    "prepare_results_dir",
    "run_probe",
    "setup_logging",
]
