# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP layer exports."""

from .builder import (
    ProbeRequestPlan,
    build_probe_request,
    host_header,
    identity_host,
    plan_probe,
    sni_hostname,
    substitute_host,
)
from .client import ClientFactory, create_probe_client
from .headers import format_header_artifact, format_header_block, status_line

__all__ = [
    "ClientFactory",
    "ProbeRequestPlan",
    "build_probe_request",
    "create_probe_client",
    "format_header_artifact",
    "format_header_block",
    "host_header",
    "identity_host",
    "plan_probe",
    "sni_hostname",
    "status_line",
    "substitute_host",
]
