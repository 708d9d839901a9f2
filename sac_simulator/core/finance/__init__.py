# sac_simulator/core/finance/__init__.py

from .errors import (
    SIMULATION_ERRORS,
    EmptyScheduleError,
    InvalidInputError,
    SimulationError,
    TableNotImplementedError,
)
from .extra_payments import (
    ExtraPaymentSchedule,
    MonthRange,
    create,
    from_record,
    parse_ranges,
    to_record,
    validate_custom_interval,
)
from .sac import calculate, effective_monthly_rate, sac_schedule

__all__ = [
    "calculate",
    "sac_schedule",
    "effective_monthly_rate",
    "ExtraPaymentSchedule",
    "MonthRange",
    "create",
    "from_record",
    "to_record",
    "parse_ranges",
    "validate_custom_interval",
    "SimulationError",
    "InvalidInputError",
    "TableNotImplementedError",
    "EmptyScheduleError",
    "SIMULATION_ERRORS",
]
