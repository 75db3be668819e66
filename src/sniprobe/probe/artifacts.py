# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-candidate raw response artifacts (`<key>_header.txt`, `<key>_body.txt`)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

from ..errors import ArtifactWriteError, TransportError, categorize_exception
from ..http.builder import ProbeRequestPlan
from ..http.headers import format_header_artifact
from ..models.probe import ProbeConfig

logger = logging.getLogger(__name__)

HEADER_SUFFIX = "_header.txt"
BODY_SUFFIX = "_body.txt"


def artifact_key(address: str) -> str:
    """Filesystem-safe key for a connect address (IPv6 literals and host:port contain colons)."""
    return address.replace(":", ".")


@dataclass(frozen=True)
class ArtifactPaths:
    header: Path
    body: Path


def artifact_paths(results_dir: str | Path, address: str) -> ArtifactPaths:
    key = artifact_key(address)
    root = Path(results_dir)
    return ArtifactPaths(header=root / f"{key}{HEADER_SUFFIX}", body=root / f"{key}{BODY_SUFFIX}")


@dataclass(frozen=True)
class ArtifactWriter:
    """Writes captured responses below an already prepared results directory."""

    results_dir: Path

    def write(self, config: ProbeConfig, plan: ProbeRequestPlan, response: httpx.Response) -> ArtifactPaths:
        paths = artifact_paths(self.results_dir, plan.connect_address)
        if config.capture_headers:
            self._write_headers(paths.header, response)
        if config.capture_body:
            self._write_body(paths.body, plan, response)
        return paths

    def _write_headers(self, path: Path, response: httpx.Response) -> None:
        try:
            path.write_bytes(format_header_artifact(response))
        except OSError as exc:
            raise ArtifactWriteError(f"write {path}: {exc.strerror or exc}") from exc
        logger.debug("Wrote header artifact %s", path)

    def _write_body(self, path: Path, plan: ProbeRequestPlan, response: httpx.Response) -> None:
        try:
            handle = path.open("wb")
        except OSError as exc:
            raise ArtifactWriteError(f"open {path}: {exc.strerror or exc}") from exc
        with handle:
            try:
                # iter_raw yields the body exactly as sent, without content decoding.
                for chunk in response.iter_raw():
                    handle.write(chunk)
            except OSError as exc:
                raise ArtifactWriteError(f"write {path}: {exc.strerror or exc}") from exc
            except httpx.HTTPError as exc:
                detail = str(exc) or type(exc).__name__
                raise TransportError(
                    plan.sanitize(f'read body of "{plan.outbound_url}": {detail}'),
                    category=categorize_exception(exc),
                ) from exc
        logger.debug("Wrote body artifact %s", path)


__all__ = ["ArtifactPaths", "ArtifactWriter", "BODY_SUFFIX", "HEADER_SUFFIX", "artifact_key", "artifact_paths"]
