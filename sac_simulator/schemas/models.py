# sac_simulator/schemas/models.py

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Transport payloads use camelCase keys; Python callers may use field names.
_WIRE = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AmortizationTable(str, Enum):
    """Amortization systems known to the simulator."""

    SAC = "sac"  # Sistema de Amortização Constante
    PRICE = "price"  # French system, recognized but not implemented


class RateAdjustment(str, Enum):
    """Interest-rate adjustment type. Carried through, not used by the SAC math."""

    FIXED = "pre"
    VARIABLE = "pos"


# =========================
# Core inputs
# =========================


class LoanParameters(BaseModel):
    """
    Loan parameters for one simulation run. All money amounts share the same currency.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)

    property_value: float = Field(..., gt=0, description="Total property price (currency units).")
    down_payment: float = Field(0.0, ge=0, description="Upfront payment subtracted from the property value.")
    annual_interest_rate: float = Field(
        ..., ge=0, description="Nominal annual interest rate as a percentage (e.g., 12 = 12%/year)."
    )
    term_months: int = Field(..., description="Number of scheduled monthly installments.")
    monthly_insurance_fee: float = Field(
        0.0, ge=0, description="Flat monthly insurance fee. Only added to the total charge, never to principal/interest."
    )
    monthly_admin_fee: float = Field(0.0, ge=0, description="Flat monthly administration fee (same treatment as insurance).")
    amortization_system: str = Field(
        AmortizationTable.SAC.value,
        description="Amortization table: 'sac' or 'price'. Other values are rejected by the engine.",
    )
    rate_adjustment: RateAdjustment = Field(
        RateAdjustment.FIXED, description="Rate adjustment type ('pre' fixed / 'pos' variable). Not used by SAC."
    )
    projected_rate: float = Field(0.0, description="Projected future annual rate. Not used by SAC.")

    @property
    def financed_amount(self) -> float:
        """Starting principal: property value minus down payment."""
        return self.property_value - self.down_payment


class ExtraPaymentRecord(BaseModel):
    """
    Plain, serializable descriptor of one extra-payment schedule.

    Shape on the wire: {kind, amount, termMonths?, rawIntervalInput?}
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)

    kind: str = Field(..., description="'Monthly', 'Annual', 'Biennial' or 'Custom'.")
    amount: float = Field(..., description="Extra principal paid whenever the schedule matches a month.")
    term_months: int | None = Field(None, description="Loan term bound used by 'Custom' schedules.")
    raw_interval_input: str | None = Field(
        None, description="Comma-separated months/ranges for 'Custom' schedules, e.g. '1,5-10'."
    )


# =========================
# Computed outputs
# =========================


class MonthlyBreakdown(BaseModel):
    """One row of the payment ledger."""

    model_config = _WIRE

    month: int = Field(..., description="Month index starting at 1.")
    payment: float = Field(..., description="Principal paid + interest for the month (fees excluded).")
    interest: float = Field(..., description="Interest portion of the month.")
    principal_paid: float = Field(..., description="Regular + extra principal, capped at the remaining balance.")
    remaining_balance: float = Field(..., ge=0, description="Balance after this month's principal payment.")
    total_charge: float = Field(..., description="payment + monthly insurance fee + monthly admin fee.")


class SimulationResult(BaseModel):
    """Full ledger plus summary statistics for one simulation run."""

    model_config = _WIRE

    financed_amount: float = Field(..., description="Property value minus down payment.")
    term_months: int = Field(..., description="Scheduled term; the ledger may be shorter after early payoff.")
    first_payment: float = Field(..., description="Payment (principal + interest) of the first month.")
    last_payment: float = Field(..., description="Payment (principal + interest) of the last month run.")
    total_effective_cost: float = Field(..., description="financed_amount + total_interest + total fees.")
    total_interest: float = Field(..., description="Sum of monthly interest.")
    total_principal_paid: float = Field(..., description="Sum of principal actually paid (regular + extra).")
    monthly_insurance_fee: float = Field(..., description="Monthly insurance fee echoed from the inputs.")
    monthly_admin_fee: float = Field(..., description="Monthly administration fee echoed from the inputs.")
    schedule: list[MonthlyBreakdown] = Field(..., description="Month-by-month ledger in order.")

    @property
    def months_run(self) -> int:
        return len(self.schedule)

    @property
    def total_fees(self) -> float:
        return (self.monthly_insurance_fee + self.monthly_admin_fee) * self.months_run

    @property
    def total_paid(self) -> float:
        """Everything that left the borrower's pocket: Σ total_charge."""
        return sum(row.total_charge for row in self.schedule)

    @property
    def paid_off_early(self) -> bool:
        return self.months_run < self.term_months

    def summary(self) -> str:
        return (
            f"[SimulationResult] financed {self.financed_amount:,.2f} | "
            f"months {self.months_run}/{self.term_months} | "
            f"first {self.first_payment:,.2f}, last {self.last_payment:,.2f} | "
            f"interest {self.total_interest:,.2f} | CET {self.total_effective_cost:,.2f}"
        )


# =========================
# Request / response boundary
# =========================


class SimulationRequest(BaseModel):
    """Inbound payload: loan parameters plus serialized extra-payment descriptors."""

    model_config = _WIRE

    parameters: LoanParameters
    extra_payments: list[ExtraPaymentRecord] = Field(default_factory=list)


class SimulationResponse(BaseModel):
    """Outbound payload: exactly one of `result` or `error_message` is set."""

    model_config = _WIRE

    result: SimulationResult | None = None
    error_message: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> SimulationResponse:
        if (self.result is None) == (self.error_message is None):
            raise ValueError("exactly one of result or error_message must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.result is not None

    def to_wire(self) -> dict[str, object]:
        """camelCase dict without the unset member."""
        return self.model_dump(by_alias=True, exclude_none=True)
