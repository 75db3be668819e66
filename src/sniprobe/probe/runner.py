# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run a single probe: build the request, send it, capture artifacts, produce an outcome."""

from __future__ import annotations

import logging
import time

import httpx

from ..errors import (
    ArtifactWriteError,
    ErrorCategory,
    FailureKind,
    ProbeError,
    TransportError,
    categorize_exception,
)
from ..http.builder import ProbeRequestPlan, build_probe_request, plan_probe
from ..http.client import ClientFactory, create_probe_client
from ..http.headers import status_line
from ..models.probe import ProbeConfig, ProbeFailure, ProbeOutcome, ProbeTarget
from .artifacts import ArtifactWriter
from .deadline import RequestDeadline

logger = logging.getLogger(__name__)


def _failure(exc: ProbeError) -> ProbeFailure:
    return ProbeFailure(kind=exc.kind, message=exc.message, category=exc.category)


def _timeout_error(plan: ProbeRequestPlan, deadline: RequestDeadline) -> TransportError:
    return TransportError(
        plan.sanitize(f'GET "{plan.outbound_url}": timeout exceeded after {deadline.timeout:g}s'),
        category=ErrorCategory.TIMEOUT,
    )


def _send(
    client: httpx.Client,
    request: httpx.Request,
    plan: ProbeRequestPlan,
    deadline: RequestDeadline,
) -> httpx.Response:
    try:
        return client.send(request, stream=True, follow_redirects=False)
    except Exception as exc:
        if deadline.expired:
            raise _timeout_error(plan, deadline) from exc
        if not isinstance(exc, httpx.HTTPError):
            raise
        detail = str(exc) or type(exc).__name__
        raise TransportError(
            plan.sanitize(f'GET "{plan.outbound_url}": {detail}'),
            category=categorize_exception(exc),
        ) from exc


def unexpected_outcome(
    config: ProbeConfig,
    target: ProbeTarget,
    exc: BaseException,
    plan: ProbeRequestPlan | None = None,
) -> ProbeOutcome:
    """Outcome for an exception outside the failure taxonomy, with the outbound URL hidden."""
    if plan is None:
        try:
            plan = plan_probe(config, target)
        except ProbeError:
            plan = None
    ip = target.ip
    message = str(exc) or type(exc).__name__
    if plan is not None:
        ip = plan.connect_address
        message = plan.sanitize(message)
    failure = ProbeFailure(
        kind=FailureKind.TRANSPORT_FAILURE,
        message=message,
        category=ErrorCategory.UNKNOWN_ERROR,
    )
    return ProbeOutcome.failed(ip, failure)


def run_probe(
    config: ProbeConfig,
    target: ProbeTarget,
    *,
    artifacts: ArtifactWriter | None = None,
    client_factory: ClientFactory = create_probe_client,
) -> ProbeOutcome:
    """
    Execute one probe end to end.

    Every failure is converted into the outcome's failure. `config.timeout` caps the
    whole exchange from dispatch through the captured body; `elapsed` covers
    dispatch until the response headers arrived.
    """
    ip = target.ip
    plan: ProbeRequestPlan | None = None
    try:
        plan = plan_probe(config, target)
        ip = plan.connect_address
        deadline = RequestDeadline(config.timeout)
        with client_factory(config) as client:
            request = build_probe_request(client, plan, trace=deadline.trace)
            logger.debug("Probing %s via %s", plan.base_url, plan.connect_address)
            with deadline:
                started = time.perf_counter()
                response = _send(client, request, plan, deadline)
                elapsed = time.perf_counter() - started
                try:
                    status = status_line(response)
                    if config.captures and artifacts is not None:
                        artifacts.write(config, plan, response)
                except ArtifactWriteError:
                    raise
                except Exception as exc:
                    if deadline.expired:
                        raise _timeout_error(plan, deadline) from exc
                    raise
                finally:
                    response.close()
    except ProbeError as exc:
        logger.info("Probe %s failed (%s): %s", ip or "<baseline>", exc.kind.value, exc.message)
        return ProbeOutcome.failed(ip, _failure(exc))
    except Exception as exc:  # noqa: BLE001
        outcome = unexpected_outcome(config, target, exc, plan)
        logger.warning("Probe %s raised unexpectedly: %s", outcome.ip or "<baseline>", outcome.failure.message)
        return outcome

    return ProbeOutcome.success(ip, status, elapsed)


__all__ = ["run_probe", "unexpected_outcome"]
