# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe execution: single-probe runner, parallel dispatcher and artifact capture."""

from .artifacts import ArtifactPaths, ArtifactWriter, artifact_key, artifact_paths
from .deadline import DeadlineExceeded, RequestDeadline
from .dispatcher import ProbeDispatcher, dispatch
from .runner import run_probe

__all__ = [
    "ArtifactPaths",
    "ArtifactWriter",
    "DeadlineExceeded",
    "ProbeDispatcher",
    "RequestDeadline",
    "artifact_key",
    "artifact_paths",
    "dispatch",
    "run_probe",
]
