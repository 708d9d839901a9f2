# main.py
"""
Entry Point: SAC Mortgage Simulator

Purpose
-------
Run one amortization simulation end-to-end:
  1) Load a simulation request (built-in sample or --config JSON).
  2) Run it through the simulation worker (request → response).
  3) Print a short summary and optionally write the JSON response.

Usage
-----
    python main.py
    python main.py --config request.json --out result.json --log-level DEBUG

Environment
-----------
- SACSIM_OUT / SACSIM_LOG_LEVEL / SACSIM_WORKERS  (see sac_simulator/inputs/inputs.py)
- SACSIM_LOG_FILE  → also log to a rotating file
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from sac_simulator.inputs.inputs import AppInputs, InputsLoader, RunOptions
from sac_simulator.orchestrators.worker import SimulationWorker
from sac_simulator.schemas.models import ExtraPaymentRecord, LoanParameters, SimulationRequest

logger = logging.getLogger("sac_simulator")


def build_sample_request() -> SimulationRequest:
    """Return a demo request: 350k property, 180k down, 11.29% a.a., 35 years, 1k extra every month."""
    return SimulationRequest(
        parameters=LoanParameters(
            property_value=350_000.0,
            down_payment=180_000.0,
            annual_interest_rate=11.29,
            term_months=420,
            monthly_insurance_fee=43.0,
            monthly_admin_fee=25.0,
        ),
        extra_payments=[ExtraPaymentRecord(kind="Monthly", amount=1_000.0)],
    )


def configure_logging(level: str, log_file: str | None = None) -> None:
    """Console logging, plus a rotating file when `log_file` is set."""
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logging.getLogger().addHandler(handler)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for configurable runs."""
    p = argparse.ArgumentParser(description="SAC mortgage simulator")
    p.add_argument("--config", type=str, default=None, help="Path to JSON request (SimulationRequest or AppInputs).")
    p.add_argument("--out", type=str, default=None, help="Write the JSON response here (overrides config).")
    p.add_argument("--log-level", type=str, default=None, help="Logging level (overrides config).")
    p.add_argument("--workers", type=int, default=None, help="Worker threads (overrides config).")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run one simulation; exit code 1 when the response carries an error message."""
    args = parse_args(argv)
    loader = InputsLoader()

    if args.config:
        cfg: AppInputs = loader.load(args.config)
    else:
        cfg = loader.with_env_overrides(AppInputs(request=build_sample_request(), run=RunOptions()))
    cfg = loader.with_overrides(cfg, out=args.out, log_level=args.log_level, workers=args.workers)

    configure_logging(cfg.run.log_level, os.getenv("SACSIM_LOG_FILE"))

    with SimulationWorker(max_workers=cfg.run.workers) as worker:
        response = worker.run(cfg.request)

    if cfg.run.out:
        out = Path(cfg.run.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(response.to_wire(), indent=2), encoding="utf-8")
        logger.info("response written to %s", out)

    if response.result is None:
        print(f"Simulation failed: {response.error_message}", file=sys.stderr)
        return 1

    print(response.result.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
