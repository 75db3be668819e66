# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Wall-clock budget for a single probe.

httpx timeouts bound each network operation separately, so a server that trickles
its response a byte at a time never trips them. RequestDeadline arms a timer when
the request is sent. On expiry it shuts the probe's socket down, which wakes any
blocked read or write, and every transport event reported afterwards aborts the
exchange.
"""

from __future__ import annotations

import logging
import socket
import threading
from contextlib import suppress
from typing import Any

logger = logging.getLogger(__name__)

_STREAM_EVENTS = (".connect_tcp.complete", ".start_tls.complete")
# Cleanup must still run after expiry.
_CLOSING_EVENT = ".response_closed."


class DeadlineExceeded(Exception):
    """Raised from the transport trace hook once the deadline has passed."""


class RequestDeadline:
    def __init__(self, timeout: float):
        self.timeout = timeout
        self._lock = threading.Lock()
        self._expired = False
        self._socket: socket.socket | None = None
        self._timer: threading.Timer | None = None

    @property
    def expired(self) -> bool:
        with self._lock:
            return self._expired

    def start(self) -> None:
        self._timer = threading.Timer(self.timeout, self._expire)
        self._timer.daemon = True
        self._timer.start()

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()

    def trace(self, event: str, info: dict[str, Any]) -> None:
        """httpcore `trace` extension hook: remembers the live socket and enforces expiry."""
        if event.endswith(_STREAM_EVENTS):
            stream = info.get("return_value")
            sock = stream.get_extra_info("socket") if stream is not None else None
            if sock is not None:
                with self._lock:
                    self._socket = sock
        if self.expired and _CLOSING_EVENT not in event:
            raise DeadlineExceeded(f"timeout exceeded after {self.timeout:g}s")

    def _expire(self) -> None:
        with self._lock:
            self._expired = True
            sock = self._socket
        logger.debug("Request deadline of %gs reached", self.timeout)
        if sock is None:
            return
        # socket.socket.shutdown is called directly: SSLSocket.shutdown would also
        # unwrap the TLS layer underneath a concurrent reader.
        with suppress(OSError):
            socket.socket.shutdown(sock, socket.SHUT_RDWR)

    def __enter__(self) -> "RequestDeadline":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.cancel()


__all__ = ["DeadlineExceeded", "RequestDeadline"]
