# sac_simulator/core/finance/errors.py
"""
Typed errors + utilities for the amortization simulator.

Exports
-------
- SimulationError, InvalidInputError, TableNotImplementedError, EmptyScheduleError
- SIMULATION_ERRORS
- error_message(exc)
- simulation_error_guard()

The engine raises these and never catches them. Only the request/response
boundary converts them into a message string.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import ValidationError

# =========================
# Exception types
# =========================


class SimulationError(RuntimeError):
    """Base class for simulation failures."""


class InvalidInputError(SimulationError, ValueError):
    """Malformed schedule input, unknown amortization table, non-positive term or financed amount."""


class TableNotImplementedError(SimulationError, NotImplementedError):
    """A recognized amortization table without an implementation (PRICE)."""


class EmptyScheduleError(SimulationError):
    """The simulation produced no installment rows."""


# Selector tuple for grouped exception handling
SIMULATION_ERRORS = (
    InvalidInputError,
    TableNotImplementedError,
    EmptyScheduleError,
)

# =========================
# Helpers
# =========================


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}" if loc else str(err.get("msg", "invalid value")))
    return "invalid input: " + "; ".join(parts) if parts else "invalid input"


def error_message(exc: BaseException) -> str:
    """Stable, human-readable message for any failure crossing the boundary."""
    if isinstance(exc, ValidationError):
        return _describe_validation_error(exc)
    msg = str(exc).strip()
    return msg or type(exc).__name__


@contextmanager
def simulation_error_guard() -> Iterator[None]:
    """Normalize payload validation failures into InvalidInputError; pass ours through."""
    try:
        yield
    except SIMULATION_ERRORS:
        raise
    except ValidationError as exc:
        raise InvalidInputError(_describe_validation_error(exc)) from exc


__all__ = [
    "SimulationError",
    "InvalidInputError",
    "TableNotImplementedError",
    "EmptyScheduleError",
    "SIMULATION_ERRORS",
    "error_message",
    "simulation_error_guard",
]
