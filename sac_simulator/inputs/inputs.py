# sac_simulator/inputs/inputs.py
"""
Inputs loader for the SAC simulator.

Goals
-----
- File-first inputs with validation via Pydantic.
- Accept a bare SimulationRequest JSON or a structured shape that also
  carries run options (output path, log level, worker count).
- Minimal environment-variable overrides for CI/CLI convenience.

Supported JSON shapes
---------------------
1) Bare (root = SimulationRequest)
   {
     "parameters": {"propertyValue": 350000, "termMonths": 420, ...},
     "extraPayments": [{"kind": "Monthly", "amount": 1000}]
   }

2) Structured (root = AppInputs)
   {
     "request": { ... SimulationRequest ... },
     "run": {"out": "result.json", "log_level": "DEBUG", "workers": 1}
   }

Environment overrides (optional)
--------------------------------
- SACSIM_OUT        -> AppInputs.run.out
- SACSIM_LOG_LEVEL  -> AppInputs.run.log_level
- SACSIM_WORKERS    -> AppInputs.run.workers (int)

Public API
----------
- class InputsLoader:
    - load(path: str | Path) -> AppInputs
    - load_json(text: str) -> AppInputs
    - with_overrides(**kwargs) -> AppInputs (non-destructive copies)
    - with_env_overrides(cfg) -> AppInputs (SACSIM_* only; load/load_json apply it already)
- function load_inputs(path: str | Path) -> AppInputs  (convenience)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, Field, ValidationError, field_validator

from sac_simulator.schemas.models import SimulationRequest

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# ----------------------------
# Pydantic models for structured inputs
# ----------------------------


class RunOptions(BaseModel):
    """Runtime (non-financial) options controlling a simulation run."""

    out: str | None = Field(None, description="Path to write the JSON response (stdout summary only when None).")
    log_level: str = Field("INFO", description="Logging level name.")
    workers: int = Field(1, ge=1, le=32, description="Threads used by the simulation worker.")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


class AppInputs(BaseModel):
    """
    Full input payload.

    Attributes:
        request: The validated SimulationRequest handed to the simulator.
        run:     Non-financial, runtime options for the current execution.
    """

    request: SimulationRequest
    run: RunOptions = RunOptions()


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first inputs loader with light env overrides.

    Responsibilities:
        - Read JSON from a file or string
        - Accept both the bare and structured shapes
        - Validate with Pydantic
        - Apply environment overrides for run options
    """

    env_prefix: str = "SACSIM_"

    # ---------- Public API ----------

    def load(self, path: str | Path) -> AppInputs:
        """Load inputs from a JSON file."""
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Inputs file not found: {p}")
        raw = self._read_json_file(p)
        return self._apply_env_overrides(self._parse_root(self._wrap_bare(raw)))

    def load_json(self, text: str) -> AppInputs:
        """Load inputs from a JSON string (bare or structured shape)."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Invalid JSON payload: root must be an object")
        return self._apply_env_overrides(self._parse_root(self._wrap_bare(raw)))

    def with_overrides(
        self,
        cfg: AppInputs,
        *,
        out: str | None = None,
        log_level: str | None = None,
        workers: int | None = None,
    ) -> AppInputs:
        """
        Return a *new* AppInputs with provided non-null overrides applied to RunOptions.
        Does not mutate the original instance.
        """
        updates: dict[str, Any] = {}
        if out is not None:
            updates["out"] = out
        if log_level is not None:
            updates["log_level"] = log_level
        if workers is not None:
            updates["workers"] = workers

        if not updates:
            return cfg

        # Re-validate so overrides obey the same constraints as file input
        run_new = RunOptions.model_validate({**cfg.run.model_dump(), **updates})
        return cfg.model_copy(update={"run": run_new})

    def with_env_overrides(self, cfg: AppInputs) -> AppInputs:
        """Apply SACSIM_* overrides to inputs that were not read from a file (e.g. built-in samples)."""
        return self._apply_env_overrides(cfg)

    # ---------- Internals ----------

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported inputs format for {p.name}; only .json is supported.")
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid JSON in {p}: root must be an object")
        return cast(dict[str, Any], data)

    def _wrap_bare(self, raw: dict[str, Any]) -> dict[str, Any]:
        if "request" in raw:
            return raw
        return {"request": raw}

    def _parse_root(self, data: dict[str, Any]) -> AppInputs:
        try:
            return AppInputs.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Inputs validation failed:\n{e}") from e

    def _apply_env_overrides(self, cfg: AppInputs) -> AppInputs:
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        out = os.getenv(f"{prefix}OUT")
        if out:
            updates["out"] = out

        level = os.getenv(f"{prefix}LOG_LEVEL")
        if level and level.strip().upper() in _LOG_LEVELS:
            updates["log_level"] = level.strip().upper()

        workers = os.getenv(f"{prefix}WORKERS")
        if workers:
            try:
                n = int(workers)
            except ValueError:
                logger.warning("ignoring %sWORKERS=%r (not an int)", prefix, workers)
            else:
                if 1 <= n <= 32:
                    updates["workers"] = n

        if not updates:
            return cfg

        run_new = cfg.run.model_copy(update=updates)
        return cfg.model_copy(update={"run": run_new})


# ----------------------------
# Convenience function
# ----------------------------


def load_inputs(path: str | Path) -> AppInputs:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)
