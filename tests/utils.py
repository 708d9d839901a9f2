# tests/utils.py
"""
Single source of truth for test data, factories, and canonical payloads.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from typing import Any

from sac_simulator.schemas.models import ExtraPaymentRecord, LoanParameters, SimulationRequest

# -----------------------------
# Global defaults (edit once)
# -----------------------------

# Reference scenario: 350k property, 180k down, 11.29% a.a., 35 years, fees 43 + 25
DEFAULT_PROPERTY_VALUE = 350_000.0
DEFAULT_DOWN_PAYMENT = 180_000.0
DEFAULT_ANNUAL_RATE = 11.29
DEFAULT_TERM_MONTHS = 420
DEFAULT_INSURANCE_FEE = 43.0
DEFAULT_ADMIN_FEE = 25.0


# -----------------------------
# Factories
# -----------------------------


def make_loan_parameters(**overrides: Any) -> LoanParameters:
    """Reference-scenario LoanParameters; any field can be overridden by name."""
    base: dict[str, Any] = {
        "property_value": DEFAULT_PROPERTY_VALUE,
        "down_payment": DEFAULT_DOWN_PAYMENT,
        "annual_interest_rate": DEFAULT_ANNUAL_RATE,
        "term_months": DEFAULT_TERM_MONTHS,
        "monthly_insurance_fee": DEFAULT_INSURANCE_FEE,
        "monthly_admin_fee": DEFAULT_ADMIN_FEE,
        "amortization_system": "sac",
    }
    base.update(overrides)
    return LoanParameters(**base)


def make_simple_loan(property_value: float = 100_000.0, term_months: int = 1, **overrides: Any) -> LoanParameters:
    """No down payment, no interest, no fees: the arithmetic is easy to check by hand."""
    return make_loan_parameters(
        property_value=property_value,
        down_payment=overrides.pop("down_payment", 0.0),
        annual_interest_rate=overrides.pop("annual_interest_rate", 0.0),
        term_months=term_months,
        monthly_insurance_fee=overrides.pop("monthly_insurance_fee", 0.0),
        monthly_admin_fee=overrides.pop("monthly_admin_fee", 0.0),
        **overrides,
    )


def make_record(kind: str = "Monthly", amount: float = 1_000.0, **kwargs: Any) -> ExtraPaymentRecord:
    return ExtraPaymentRecord(kind=kind, amount=amount, **kwargs)


def make_request(extra: list[ExtraPaymentRecord] | None = None, **param_overrides: Any) -> SimulationRequest:
    return SimulationRequest(
        parameters=make_loan_parameters(**param_overrides),
        extra_payments=list(extra or []),
    )


def make_wire_request(**param_overrides: Any) -> dict[str, Any]:
    """camelCase dict, as it would arrive over the request boundary."""
    return make_request(**param_overrides).model_dump(by_alias=True, mode="json")
