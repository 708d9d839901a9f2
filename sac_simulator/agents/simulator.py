# sac_simulator/agents/simulator.py
"""
Simulation Agent

Purpose
-------
Request/response boundary in front of the amortization engine. It rebuilds
extra-payment schedules from their serialized records, invokes the engine,
and converts any failure into an error message so nothing is raised across
the boundary.

Design
------
- Deterministic: no external calls, no randomness.
- Delegates all math to sac_simulator.core.finance.calculate().
- The only place where simulation errors are caught.

Public API
----------
simulate(request) -> SimulationResult            (raises)
handle_request(payload) -> SimulationResponse    (never raises for bad input)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sac_simulator.core.finance import SIMULATION_ERRORS, calculate, from_record
from sac_simulator.core.finance.errors import error_message, simulation_error_guard
from sac_simulator.schemas.models import SimulationRequest, SimulationResponse, SimulationResult

logger = logging.getLogger(__name__)

RequestPayload = SimulationRequest | Mapping[str, Any] | str | bytes


def _coerce_request(payload: RequestPayload) -> SimulationRequest:
    if isinstance(payload, SimulationRequest):
        return payload
    with simulation_error_guard():
        if isinstance(payload, (str, bytes)):
            return SimulationRequest.model_validate_json(payload)
        return SimulationRequest.model_validate(payload)


def simulate(request: RequestPayload) -> SimulationResult:
    """
    Run one simulation.

    Args:
        request: SimulationRequest, its dict form, or a JSON string.

    Returns:
        SimulationResult from the engine.

    Raises:
        InvalidInputError, TableNotImplementedError, EmptyScheduleError.
    """
    req = _coerce_request(request)
    schedules = [from_record(rec) for rec in req.extra_payments]
    return calculate(req.parameters, schedules)


def handle_request(payload: RequestPayload) -> SimulationResponse:
    """
    Boundary handler: `{result}` on success, `{errorMessage}` on failure.
    """
    try:
        result = simulate(payload)
    except SIMULATION_ERRORS as exc:
        logger.warning("simulation rejected: %s", exc)
        return SimulationResponse(error_message=error_message(exc))
    except Exception as exc:  # noqa: BLE001
        logger.exception("unexpected failure while simulating")
        return SimulationResponse(error_message=error_message(exc))
    return SimulationResponse(result=result)
