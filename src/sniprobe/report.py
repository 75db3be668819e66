# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Console rendering of probe outcomes."""

from __future__ import annotations

import json
import sys
from typing import TextIO

from .errors import error_category_to_reason
from .models.probe import ProbeOutcome

SEPARATOR = "-" * 34


def format_outcome(outcome: ProbeOutcome) -> str:
    lines = [f"Request IP: {outcome.ip}"]
    if outcome.failure is not None:
        lines.append(f"Request Error: {outcome.failure.message}")
        reason = error_category_to_reason(outcome.failure.category)
        if reason:
            lines.append(f"Reason: {reason}")
    else:
        lines.append(f"Response Status: {outcome.status}")
        lines.append(f"Response Time: {outcome.elapsed:.2f}s")
    lines.extend(["", SEPARATOR])
    return "\n".join(lines)


def print_outcome(outcome: ProbeOutcome, *, as_json: bool = False, stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    if as_json:
        out.write(json.dumps(outcome.to_dict(), sort_keys=True))
    else:
        out.write(format_outcome(outcome))
    out.write("\n")
    out.flush()


def print_header(base_url: str, stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    out.write("Sending requests, please wait...\n")
    out.write(f"Request URL: {base_url}\n")
    out.write(f"{SEPARATOR}\n")
    out.flush()


__all__ = ["SEPARATOR", "format_outcome", "print_header", "print_outcome"]
