"""Utility functions for schedules, conventions, and mathematical operations."""

from jamort.utilities.calendars import (
    CustomCalendar,
    HolidayCalendar,
    MondayToFridayCalendar,
    NoHolidayCalendar,
    get_calendar,
)
from jamort.utilities.conventions import year_fraction
from jamort.utilities.math import (
    annuity_amount,
    sinking_fund_balance_vectorized,
    sinking_fund_balances,
)
from jamort.utilities.schedules import Schedule, generate_schedule

__all__ = [
    # Schedule generation
    "Schedule",
    "generate_schedule",
    # Day count conventions
    "year_fraction",
    # Calendars
    "HolidayCalendar",
    "NoHolidayCalendar",
    "MondayToFridayCalendar",
    "CustomCalendar",
    "get_calendar",
    # Financial math
    "annuity_amount",
    "sinking_fund_balance_vectorized",
    "sinking_fund_balances",
]
