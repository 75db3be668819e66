# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for sniprobe."""

from .probe import ProbeConfig, ProbeFailure, ProbeOutcome, ProbeTarget

__all__ = [
    "ProbeConfig",
    "ProbeFailure",
    "ProbeOutcome",
    "ProbeTarget",
]
