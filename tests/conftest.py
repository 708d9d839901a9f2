# tests/conftest.py
from __future__ import annotations

import logging

import pytest

from sac_simulator.core.finance import create


# -------- Environment hygiene --------
@pytest.fixture(autouse=True)
def _clear_sacsim_env(monkeypatch):
    """Keep SACSIM_* overrides from the developer's shell out of every test."""
    for name in ("SACSIM_OUT", "SACSIM_LOG_LEVEL", "SACSIM_WORKERS", "SACSIM_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    yield


# -------- Schedule fixtures --------
@pytest.fixture
def monthly_extra():
    """Callable building a fresh Monthly schedule for the reference term."""

    def _factory(amount: float = 1_000.0):
        return create("Monthly", 420, None, amount)

    return _factory


@pytest.fixture
def caplog_info(caplog):
    caplog.set_level(logging.INFO, logger="sac_simulator")
    return caplog


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks integration tests")
