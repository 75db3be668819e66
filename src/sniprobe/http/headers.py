# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Status line and raw header block rendering."""

from __future__ import annotations

import httpx


def status_line(response: httpx.Response) -> str:
    """Return e.g. ``"200 OK"``; HTTP/2 responses carry no reason phrase, so the standard one is used."""
    reason = response.reason_phrase or httpx.codes.get_reason_phrase(response.status_code)
    return f"{response.status_code} {reason}".rstrip()


def format_header_block(response: httpx.Response) -> bytes:
    """Render headers exactly as received (order, casing, duplicates), CRLF-terminated."""
    return b"".join(name + b": " + value + b"\r\n" for name, value in response.headers.raw)


def format_header_artifact(response: httpx.Response) -> bytes:
    """Status line followed by the raw header block."""
    return status_line(response).encode("latin-1", errors="replace") + b"\n" + format_header_block(response)


__all__ = ["format_header_artifact", "format_header_block", "status_line"]
