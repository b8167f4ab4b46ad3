"""Core types and value objects for amortizing-bond construction.

This module provides the enumerations, periods, dates and cash-flow variants
used throughout the jamort package.
"""

from jamort.core.cashflows import (
    CashFlow,
    FixedRateCoupon,
    Leg,
    PrincipalPayment,
    as_fixed_rate_coupon,
    is_coupon,
    sort_cashflows,
)
from jamort.core.period import Period, SubPeriodMatch, days_min_max, is_sub_period
from jamort.core.time import Date, add_period, parse_iso_date
from jamort.core.types import (
    # Type aliases
    Amount,
    # Enumerations
    BusinessDayConvention,
    Calendar,
    CashFlowType,
    DateGeneration,
    DayCountConvention,
    Frequency,
    Percentage,
    Rate,
    Tenor,
    TimeUnit,
)

__all__ = [
    # Type aliases
    "Amount",
    "Rate",
    "Percentage",
    "Tenor",
    # Enumerations
    "TimeUnit",
    "Frequency",
    "DayCountConvention",
    "BusinessDayConvention",
    "Calendar",
    "DateGeneration",
    "CashFlowType",
    # Periods
    "Period",
    "SubPeriodMatch",
    "days_min_max",
    "is_sub_period",
    # Dates
    "Date",
    "add_period",
    "parse_iso_date",
    # Cash flows
    "CashFlow",
    "FixedRateCoupon",
    "Leg",
    "PrincipalPayment",
    "as_fixed_rate_coupon",
    "is_coupon",
    "sort_cashflows",
]
