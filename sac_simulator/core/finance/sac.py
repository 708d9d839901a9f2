# sac_simulator/core/finance/sac.py
"""
SAC (Sistema de Amortização Constante) amortization engine.

Each month the borrower repays a constant slice of the financed principal,
plus any extra payments scheduled for that month, plus interest on the
outstanding balance. Interest therefore declines as the balance shrinks.

Values are carried at full float precision; rounding is a display concern.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from sac_simulator.schemas.models import AmortizationTable, LoanParameters, MonthlyBreakdown, SimulationResult

from .errors import EmptyScheduleError, InvalidInputError, TableNotImplementedError
from .extra_payments import ExtraPaymentSchedule

logger = logging.getLogger(__name__)


def effective_monthly_rate(annual_rate_pct: float) -> float:
    """
    Convert a nominal annual percentage into an effective monthly rate.

        i_m = (1 + i_a)^(1/12) - 1

    Compound conversion, not i_a / 12.
    """
    return (1.0 + annual_rate_pct / 100.0) ** (1.0 / 12.0) - 1.0


def extra_payment_for_month(schedules: Sequence[ExtraPaymentSchedule], month: int) -> float:
    """Sum of every schedule amount that applies to `month`."""
    return sum((s.amount for s in schedules if s.applies_to(month)), 0.0)


def sac_schedule(params: LoanParameters, extra_schedules: Sequence[ExtraPaymentSchedule] = ()) -> SimulationResult:
    """
    Run the month-by-month SAC simulation.

    Model:
        - fixed amortization = financed / term
        - interest = balance * monthly rate
        - principal paid = min(fixed + extras, balance), capped jointly so the loan is never overpaid
        - the loop stops early once the balance reaches zero

    Raises:
        InvalidInputError: term <= 0 or financed amount <= 0.
        EmptyScheduleError: no row was produced.
    """
    term = params.term_months
    if term <= 0:
        raise InvalidInputError("invalid term")

    financed = params.financed_amount
    if financed <= 0:
        raise InvalidInputError("invalid financed amount")

    fixed_amortization = financed / term
    rate = effective_monthly_rate(params.annual_interest_rate)
    fees = params.monthly_insurance_fee + params.monthly_admin_fee

    balance = financed
    total_interest = 0.0
    total_principal = 0.0
    rows: list[MonthlyBreakdown] = []

    month = 1
    while month <= term and balance > 0:
        interest = balance * rate
        extra = extra_payment_for_month(extra_schedules, month)
        principal_paid = min(fixed_amortization + extra, balance)
        payment = principal_paid + interest
        balance = max(0.0, balance - principal_paid)

        total_interest += interest
        total_principal += principal_paid
        rows.append(
            MonthlyBreakdown(
                month=month,
                payment=payment,
                interest=interest,
                principal_paid=principal_paid,
                remaining_balance=balance,
                total_charge=payment + fees,
            )
        )

        if balance <= 0 and month < term:
            logger.info("loan paid off at month %d of %d", month, term)
        month += 1

    if not rows:
        raise EmptyScheduleError("no installment generated")

    result = SimulationResult(
        financed_amount=financed,
        term_months=term,
        first_payment=rows[0].payment,
        last_payment=rows[-1].payment,
        total_effective_cost=financed + total_interest + fees * len(rows),
        total_interest=total_interest,
        total_principal_paid=total_principal,
        monthly_insurance_fee=params.monthly_insurance_fee,
        monthly_admin_fee=params.monthly_admin_fee,
        schedule=rows,
    )
    logger.debug("SAC run finished: %s", result.summary())
    return result


def _price_schedule(params: LoanParameters, extra_schedules: Sequence[ExtraPaymentSchedule] = ()) -> SimulationResult:
    raise TableNotImplementedError("amortization table not implemented")


ENGINES: dict[str, Callable[[LoanParameters, Sequence[ExtraPaymentSchedule]], SimulationResult]] = {
    AmortizationTable.SAC.value: sac_schedule,
    AmortizationTable.PRICE.value: _price_schedule,
}


def _table_key(table: object) -> str:
    if isinstance(table, AmortizationTable):
        return table.value
    return str(table).strip().lower()


def calculate(params: LoanParameters, extra_schedules: Sequence[ExtraPaymentSchedule] = ()) -> SimulationResult:
    """
    Compute the amortization ledger for `params` with the given extra payments.

    Pure and synchronous: identical inputs give identical results, and nothing
    is shared between calls.

    Raises:
        TableNotImplementedError: PRICE table selected.
        InvalidInputError: unknown table, term <= 0, financed amount <= 0.
        EmptyScheduleError: no row was produced.
    """
    engine = ENGINES.get(_table_key(params.amortization_system))
    if engine is None:
        raise InvalidInputError("invalid amortization table")
    return engine(params, extra_schedules)
