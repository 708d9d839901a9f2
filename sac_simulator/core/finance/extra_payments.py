# sac_simulator/core/finance/extra_payments.py
"""
Extra principal payment schedules ("amortizações extraordinárias").

A schedule is a tagged union over `kind`:
  - Monthly:  every month
  - Annual:   months 12, 24, 36, ...
  - Biennial: months 24, 48, 72, ...
  - Custom:   user-declared months/ranges such as "1,5-10", bounded by the loan term

Schedules are built once per simulation through `create` (or `from_record`
when crossing the request boundary) and only queried afterwards.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from sac_simulator.schemas.models import ExtraPaymentRecord

from .errors import InvalidInputError, simulation_error_guard

ExtraPaymentKind = Literal["Monthly", "Annual", "Biennial", "Custom"]

_MONTH_TOKEN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class MonthRange:
    """Closed range of 1-based months."""

    start: int
    end: int

    def contains(self, month: int) -> bool:
        return self.start <= month <= self.end


# =========================
# Variants
# =========================


class _ExtraPayment(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: float = Field(..., description="Extra principal applied in every matching month.")


class MonthlyExtraPayment(_ExtraPayment):
    kind: Literal["Monthly"] = "Monthly"

    def applies_to(self, month: int) -> bool:
        return True


class AnnualExtraPayment(_ExtraPayment):
    kind: Literal["Annual"] = "Annual"

    def applies_to(self, month: int) -> bool:
        return month % 12 == 0


class BiennialExtraPayment(_ExtraPayment):
    kind: Literal["Biennial"] = "Biennial"

    def applies_to(self, month: int) -> bool:
        return month % 24 == 0


class CustomExtraPayment(_ExtraPayment):
    """Applies to months inside any of `ranges`, never past `term_months`."""

    kind: Literal["Custom"] = "Custom"
    term_months: int
    raw_interval_input: str
    ranges: tuple[MonthRange, ...]

    def applies_to(self, month: int) -> bool:
        if month > self.term_months:
            return False
        return any(r.contains(month) for r in self.ranges)


ExtraPaymentSchedule = Annotated[
    Union[MonthlyExtraPayment, AnnualExtraPayment, BiennialExtraPayment, CustomExtraPayment],
    Field(discriminator="kind"),
]

# =========================
# Parsing
# =========================


def _positive_int(text: str) -> int | None:
    text = text.strip()
    if not _MONTH_TOKEN.fullmatch(text):
        return None
    value = int(text)
    return value if value > 0 else None


def parse_ranges(raw: str | None) -> list[MonthRange]:
    """
    Parse a custom interval string into month ranges.

    Accepted tokens (comma-separated, surrounding whitespace ignored):
      - "7"     → [7, 7]
      - "5-10"  → [5, 10]

    Raises:
        InvalidInputError: empty input, non-integer or non-positive months,
            or a range whose end precedes its start. The message names the token.
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        raise InvalidInputError("custom interval is required for 'Custom' extra payments")

    ranges: list[MonthRange] = []
    for part in trimmed.split(","):
        token = part.strip()
        if not token:
            continue

        if "-" in token:
            bounds = token.split("-")
            if len(bounds) != 2:
                raise InvalidInputError(f'invalid interval: "{token}"')
            start, end = _positive_int(bounds[0]), _positive_int(bounds[1])
            if start is None or end is None or start > end:
                raise InvalidInputError(f'invalid interval: "{token}"')
            ranges.append(MonthRange(start, end))
            continue

        month = _positive_int(token)
        if month is None:
            raise InvalidInputError(f'invalid month: "{token}"')
        ranges.append(MonthRange(month, month))

    return ranges


def validate_custom_interval(raw: str | None) -> None:
    """Validate a custom interval string without building a schedule."""
    parse_ranges(raw)


# =========================
# Factory + record round-trip
# =========================


def _custom(amount: float, term_months: int, raw: str | None) -> CustomExtraPayment:
    ranges = parse_ranges(raw)
    return CustomExtraPayment(
        amount=amount,
        term_months=term_months,
        raw_interval_input=(raw or "").strip(),
        ranges=tuple(ranges),
    )


_FACTORIES: dict[str, Callable[[float, int, str | None], ExtraPaymentSchedule]] = {
    "Monthly": lambda amount, _term, _raw: MonthlyExtraPayment(amount=amount),
    "Annual": lambda amount, _term, _raw: AnnualExtraPayment(amount=amount),
    "Biennial": lambda amount, _term, _raw: BiennialExtraPayment(amount=amount),
    "Custom": _custom,
}


def create(
    kind: ExtraPaymentKind | str,
    term_months: int | None,
    raw_interval_input: str | None,
    amount: float,
) -> ExtraPaymentSchedule:
    """
    Build the schedule variant for `kind`.

    `raw_interval_input` is only read for "Custom"; other kinds ignore it.
    A missing `term_months` counts as 0, so a Custom schedule never matches.

    Raises:
        InvalidInputError: unknown kind, negative/non-finite amount, or a bad custom interval.
    """
    factory = _FACTORIES.get(kind)
    if factory is None:
        raise InvalidInputError(f"invalid extra payment period: {kind}")
    if not math.isfinite(amount) or amount < 0:
        raise InvalidInputError(f"invalid extra payment amount: {amount}")
    term = int(term_months) if term_months is not None else 0
    return factory(float(amount), term, raw_interval_input)


def to_record(schedule: ExtraPaymentSchedule) -> ExtraPaymentRecord:
    """Plain record suitable for crossing the request boundary."""
    if isinstance(schedule, CustomExtraPayment):
        return ExtraPaymentRecord(
            kind=schedule.kind,
            amount=schedule.amount,
            term_months=schedule.term_months,
            raw_interval_input=schedule.raw_interval_input,
        )
    return ExtraPaymentRecord(kind=schedule.kind, amount=schedule.amount)


def from_record(record: ExtraPaymentRecord | Mapping[str, Any]) -> ExtraPaymentSchedule:
    """Rebuild a schedule through `create`, so the same validation applies."""
    if not isinstance(record, ExtraPaymentRecord):
        with simulation_error_guard():
            record = ExtraPaymentRecord.model_validate(record)
    return create(record.kind, record.term_months, record.raw_interval_input, record.amount)


__all__ = [
    "ExtraPaymentKind",
    "ExtraPaymentSchedule",
    "MonthRange",
    "MonthlyExtraPayment",
    "AnnualExtraPayment",
    "BiennialExtraPayment",
    "CustomExtraPayment",
    "parse_ranges",
    "validate_custom_interval",
    "create",
    "to_record",
    "from_record",
]
