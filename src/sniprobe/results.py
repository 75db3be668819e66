# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Results directory lifecycle: prepared once, before any probe is dispatched."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .errors import ResultsDirError

logger = logging.getLogger(__name__)


def prepare_results_dir(path: str | Path) -> Path:
    """
    Create `path` if missing, otherwise empty it.

    Raises ResultsDirError when `path` exists but is not a directory, or when it
    cannot be created or cleared.
    """
    root = Path(path)
    if not root.exists():
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ResultsDirError(f"cannot create results directory {root}: {exc.strerror or exc}") from exc
        return root

    if not root.is_dir():
        raise ResultsDirError(f"cannot create results directory {root}: path exists and is not a directory")

    try:
        for entry in root.iterdir():
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
    except OSError as exc:
        raise ResultsDirError(f"cannot clear results directory {root}: {exc.strerror or exc}") from exc
    logger.debug("Cleared results directory %s", root)
    return root


__all__ = ["prepare_results_dir"]
