# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-probe httpx client factory."""

from __future__ import annotations

from typing import Callable

import httpx

from ..models.probe import ProbeConfig

ClientFactory = Callable[[ProbeConfig], httpx.Client]


def create_probe_client(config: ProbeConfig) -> httpx.Client:
    """
    Build the client owned by a single probe.

    Redirects are never followed and the configured timeout bounds every single
    network operation. The overall budget is enforced by the runner's RequestDeadline.
    """
    return httpx.Client(
        follow_redirects=False,
        timeout=httpx.Timeout(config.timeout),
        verify=config.verify_ssl,
        trust_env=False,
    )


__all__ = ["ClientFactory", "create_probe_client"]
