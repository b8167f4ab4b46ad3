"""Day count convention implementations.

This module provides year fraction calculations according to the day count
conventions used to accrue bond coupons.

References:
    ISDA 2006 Definitions, Section 4.16
"""

from __future__ import annotations

import calendar

from jamort.core.time import Date
from jamort.core.types import DayCountConvention
from jamort.exceptions import ConventionError
from jamort.utilities.calendars import HolidayCalendar, MondayToFridayCalendar


def year_fraction(
    start: Date,
    end: Date,
    convention: DayCountConvention,
    calendar: HolidayCalendar | None = None,
) -> float:
    """Calculate year fraction between two dates using specified convention.

    Args:
        start: Start date
        end: End date
        convention: Day count convention to use
        calendar: Holiday calendar for BUS/252 convention. If None, defaults
            to MondayToFridayCalendar.

    Returns:
        Year fraction as a float (negative if end is before start)

    Raises:
        ConventionError: If the convention is not supported

    Example:
        >>> year_fraction(Date(2024, 1, 15), Date(2024, 7, 15), DayCountConvention.B30360)
        0.5
    """
    convention = _coerce_convention(convention)
    if end < start:
        return -year_fraction(end, start, convention, calendar)

    if convention == DayCountConvention.AA:
        return _year_fraction_aa(start, end)
    if convention == DayCountConvention.A360:
        return start.days_between(end) / 360.0
    if convention == DayCountConvention.A365:
        return start.days_between(end) / 365.0
    if convention == DayCountConvention.E30360:
        return _year_fraction_30e360(start, end)
    if convention == DayCountConvention.B30360:
        return _year_fraction_30360(start, end)
    return _year_fraction_bus252(start, end, calendar)


def _coerce_convention(convention: DayCountConvention | str) -> DayCountConvention:
    try:
        return DayCountConvention(convention)
    except ValueError as exc:
        raise ConventionError(
            "Unsupported day count convention",
            context={
                "convention": convention,
                "supported": [c.value for c in DayCountConvention],
            },
        ) from exc


def _year_fraction_aa(start: Date, end: Date) -> float:
    """Actual/Actual ISDA day count convention.

    Year fraction = Sum of (days in each year / days in that year)
    """
    if start >= end:
        return 0.0

    total_fraction = 0.0
    current = start

    while current.year < end.year:
        next_year = Date(current.year + 1, 1, 1)
        days_in_year = 366 if calendar.isleap(current.year) else 365
        total_fraction += current.days_between(next_year) / days_in_year
        current = next_year

    days_in_year = 366 if calendar.isleap(end.year) else 365
    total_fraction += current.days_between(end) / days_in_year
    return total_fraction


def _year_fraction_30e360(start: Date, end: Date) -> float:
    """30E/360 (Eurobond basis): both day-31s become 30."""
    d1 = min(start.day, 30)
    d2 = min(end.day, 30)
    days = (end.year - start.year) * 360 + (end.month - start.month) * 30 + (d2 - d1)
    return days / 360.0


def _year_fraction_30360(start: Date, end: Date) -> float:
    """30/360 US (Bond Basis).

    Adjustments:
    - If D1 = 31, then D1 = 30
    - If D1 = 30 or 31, and D2 = 31, then D2 = 30
    """
    d1, d2 = start.day, end.day
    if d1 == 31:
        d1 = 30
    if d1 >= 30 and d2 == 31:
        d2 = 30

    days = (end.year - start.year) * 360 + (end.month - start.month) * 30 + (d2 - d1)
    return days / 360.0


def _year_fraction_bus252(
    start: Date,
    end: Date,
    calendar: HolidayCalendar | None = None,
) -> float:
    """BUS/252: business days between the dates over 252."""
    if calendar is None:
        calendar = MondayToFridayCalendar()
    return calendar.business_days_between(start, end) / 252.0
