# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fan out one probe per target and fan the outcomes back in as they complete."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path

from ..config import DEFAULT_RESULTS_DIR
from ..http.client import ClientFactory, create_probe_client
from ..models.probe import ProbeConfig, ProbeOutcome, ProbeTarget
from .artifacts import ArtifactWriter
from .runner import run_probe, unexpected_outcome

logger = logging.getLogger(__name__)


class ProbeDispatcher:
    """
    Runs every probe of a run in parallel.

    One worker thread is started per target (there is no pool cap), each owning its
    own httpx client. The shared ProbeConfig is frozen, so workers share no mutable
    state. Outcomes are yielded in completion order, exactly one per target.
    """

    def __init__(
        self,
        config: ProbeConfig,
        *,
        results_dir: str | Path = DEFAULT_RESULTS_DIR,
        client_factory: ClientFactory = create_probe_client,
    ):
        self.config = config
        self.artifacts = ArtifactWriter(Path(results_dir))
        self.client_factory = client_factory

    def _probe(self, target: ProbeTarget) -> ProbeOutcome:
        return run_probe(
            self.config,
            target,
            artifacts=self.artifacts,
            client_factory=self.client_factory,
        )

    def iter_outcomes(self, targets: Sequence[ProbeTarget]) -> Iterator[ProbeOutcome]:
        if not targets:
            return
        logger.debug("Dispatching %d probes for %s", len(targets), self.config.base_url)
        with ThreadPoolExecutor(max_workers=len(targets), thread_name_prefix="sniprobe") as executor:
            futures: dict[Future[ProbeOutcome], ProbeTarget] = {
                executor.submit(self._probe, target): target for target in targets
            }
            for future in as_completed(futures):
                yield self._collect(future, futures[future])

    def run(self, targets: Sequence[ProbeTarget]) -> list[ProbeOutcome]:
        return list(self.iter_outcomes(targets))

    def _collect(self, future: Future[ProbeOutcome], target: ProbeTarget) -> ProbeOutcome:
        try:
            return future.result()
        except Exception as exc:  # noqa: BLE001
            outcome = unexpected_outcome(self.config, target, exc)
            logger.warning("Probe %s raised unexpectedly: %s", outcome.ip or "<baseline>", outcome.failure.message)
            return outcome


def dispatch(
    config: ProbeConfig,
    targets: Sequence[ProbeTarget],
    *,
    results_dir: str | Path = DEFAULT_RESULTS_DIR,
    client_factory: ClientFactory = create_probe_client,
) -> list[ProbeOutcome]:
    """Run all probes and return their outcomes in completion order."""
    dispatcher = ProbeDispatcher(config, results_dir=results_dir, client_factory=client_factory)
    return dispatcher.run(targets)


__all__ = ["ProbeDispatcher", "dispatch"]
