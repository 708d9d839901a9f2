# sac_simulator/orchestrators/worker.py
"""
Off-thread simulation runner.

Purpose
-------
Keep long simulations (hundreds of months, many extra-payment schedules)
off an interactive caller's thread. Requests go in, SimulationResponse
futures come out; the engine itself stays a plain synchronous function.

Design
------
- Message passing only: the worker calls `handle_request`, which never raises
  for simulation failures, so futures resolve to `{result}` or `{errorMessage}`.
- No cancellation inside the engine. Callers that no longer need an answer
  simply ignore the future.

Public API
----------
SimulationWorker(max_workers=1)
  .submit(payload) -> Future[SimulationResponse]
  .run(payload, timeout=None) -> SimulationResponse
  .close()
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from types import TracebackType

from sac_simulator.agents.simulator import RequestPayload, handle_request
from sac_simulator.schemas.models import SimulationResponse

logger = logging.getLogger(__name__)


class SimulationWorker:
    """Thread-pool backed request/response worker."""

    def __init__(self, max_workers: int = 1) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="sac-sim")
        self._closed = False

    def submit(self, payload: RequestPayload) -> Future[SimulationResponse]:
        if self._closed:
            raise RuntimeError("SimulationWorker is closed")
        logger.debug("submitting simulation request")
        return self._executor.submit(handle_request, payload)

    def run(self, payload: RequestPayload, timeout: float | None = None) -> SimulationResponse:
        """Submit and wait. Raises concurrent.futures.TimeoutError if `timeout` elapses."""
        return self.submit(payload).result(timeout=timeout)

    def close(self, wait: bool = True) -> None:
        if not self._closed:
            self._closed = True
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> SimulationWorker:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
