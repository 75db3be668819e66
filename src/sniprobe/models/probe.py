# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe configuration, target and outcome models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ..errors import ErrorCategory, FailureKind


@dataclass(frozen=True)
class ProbeConfig:
    """Options shared read-only by every probe of one run."""

    base_url: str
    user_agent: str = ""
    cookie: str = ""
    capture_headers: bool = False
    capture_body: bool = False
    timeout: float = DEFAULT_TIMEOUT
    default_user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True

    @property
    def effective_user_agent(self) -> str:
        return self.user_agent or self.default_user_agent

    @property
    def captures(self) -> bool:
        return self.capture_headers or self.capture_body


@dataclass(frozen=True)
class ProbeTarget:
    """One candidate address. An empty ip is the baseline probe against the hostname itself."""

    ip: str = ""

    @property
    def is_baseline(self) -> bool:
        return not self.ip


@dataclass(frozen=True)
class ProbeFailure:
    kind: FailureKind
    message: str
    category: ErrorCategory = ErrorCategory.NONE

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ProbeOutcome:
    """
    Result of one probe.

    Exactly one of (`status` + `elapsed`) or `failure` is populated.
    """

    ip: str
    status: str | None = None
    elapsed: float | None = None
    failure: ProbeFailure | None = None

    def __post_init__(self) -> None:
        succeeded = self.status is not None and self.elapsed is not None
        if succeeded == (self.failure is not None):
            raise ValueError("ProbeOutcome needs either status and elapsed, or a failure")
        if self.failure is not None and (self.status is not None or self.elapsed is not None):
            raise ValueError("A failed ProbeOutcome carries no status or elapsed time")

    @classmethod
    def success(cls, ip: str, status: str, elapsed: float) -> ProbeOutcome:
        return cls(ip=ip, status=status, elapsed=elapsed)

    @classmethod
    def failed(cls, ip: str, failure: ProbeFailure) -> ProbeOutcome:
        return cls(ip=ip, failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"ip": self.ip, "ok": self.ok}
        if self.failure is None:
            payload["status"] = self.status
            payload["elapsed"] = self.elapsed
        else:
            payload["failure"] = {
                "kind": self.failure.kind.value,
                "category": self.failure.category.value,
                "message": self.failure.message,
            }
        return payload
