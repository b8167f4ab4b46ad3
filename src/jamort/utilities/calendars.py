"""Business day calendar implementations.

This module provides holiday calendar functionality for determining business
days, adjusting dates according to business day conventions and counting
settlement lags.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from jamort.core.time import Date
from jamort.core.types import BusinessDayConvention, Calendar
from jamort.exceptions import ConventionError


class HolidayCalendar(ABC):
    """Abstract base class for holiday calendars.

    A holiday calendar determines which dates are business days and provides
    navigation functions for working with business days.
    """

    name: str = "CUSTOM"

    @abstractmethod
    def is_business_day(self, date: Date) -> bool:
        """Check if a date is a business day.

        Example:
            >>> cal = MondayToFridayCalendar()
            >>> cal.is_business_day(Date(2024, 1, 15))  # Monday
            True
        """

    def is_holiday(self, date: Date) -> bool:
        """Check if a date is a holiday (not a business day)."""
        return not self.is_business_day(date)

    def next_business_day(self, date: Date) -> Date:
        """Get the next business day on or after the given date.

        Example:
            >>> cal = MondayToFridayCalendar()
            >>> cal.next_business_day(Date(2024, 1, 6))  # Saturday
            Date(year=2024, month=1, day=8)
        """
        current = date
        while not self.is_business_day(current):
            current = current.add_days(1)
        return current

    def previous_business_day(self, date: Date) -> Date:
        """Get the previous business day on or before the given date."""
        current = date
        while not self.is_business_day(current):
            current = current.add_days(-1)
        return current

    def adjust(
        self,
        date: Date,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
    ) -> Date:
        """Adjust a date to a business day according to the given convention.

        Modified conventions fall back to the opposite direction when the
        adjusted date would leave the original month.

        Example:
            >>> cal = MondayToFridayCalendar()
            >>> cal.adjust(Date(2024, 8, 31), BusinessDayConvention.MODIFIED_FOLLOWING)
            Date(year=2024, month=8, day=30)
        """
        if convention == BusinessDayConvention.UNADJUSTED or self.is_business_day(date):
            return date

        if convention in (BusinessDayConvention.FOLLOWING, BusinessDayConvention.MODIFIED_FOLLOWING):
            adjusted = self.next_business_day(date)
            if (
                convention == BusinessDayConvention.MODIFIED_FOLLOWING
                and adjusted.month != date.month
            ):
                return self.previous_business_day(date)
            return adjusted

        adjusted = self.previous_business_day(date)
        if convention == BusinessDayConvention.MODIFIED_PRECEDING and adjusted.month != date.month:
            return self.next_business_day(date)
        return adjusted

    def add_business_days(self, date: Date, days: int) -> Date:
        """Add a number of business days to a date.

        Args:
            date: Starting date
            days: Number of business days to add (can be negative)

        Example:
            >>> cal = MondayToFridayCalendar()
            >>> cal.add_business_days(Date(2024, 1, 5), 1)  # Friday
            Date(year=2024, month=1, day=8)
        """
        if days == 0:
            return self.next_business_day(date)

        current = date
        direction = 1 if days > 0 else -1
        remaining = abs(days)

        while remaining > 0:
            current = current.add_days(direction)
            if self.is_business_day(current):
                remaining -= 1

        return current

    def business_days_between(self, start: Date, end: Date, include_end: bool = False) -> int:
        """Count business days between two dates.

        Example:
            >>> cal = MondayToFridayCalendar()
            >>> cal.business_days_between(Date(2024, 1, 1), Date(2024, 1, 5))
            4
        """
        if start > end:
            return -self.business_days_between(end, start, include_end)

        count = 0
        current = start
        while current < end:
            if self.is_business_day(current):
                count += 1
            current = current.add_days(1)

        if include_end and self.is_business_day(end):
            count += 1

        return count


class NoHolidayCalendar(HolidayCalendar):
    """Calendar with no holidays - every day is a business day."""

    name = Calendar.NO_CALENDAR.value

    def is_business_day(self, date: Date) -> bool:  # noqa: ARG002
        return True


class MondayToFridayCalendar(HolidayCalendar):
    """Calendar with Monday-Friday as business days (no public holidays)."""

    name = Calendar.MONDAY_TO_FRIDAY.value

    def is_business_day(self, date: Date) -> bool:
        return date.weekday() < 5


class CustomCalendar(HolidayCalendar):
    """Calendar with custom holiday dates, optionally on top of weekends."""

    def __init__(self, holidays: list[Date] | None = None, include_weekends: bool = True):
        """Initialize custom calendar.

        Args:
            holidays: List of holiday dates (defaults to empty)
            include_weekends: Whether weekends are also holidays (default True)
        """
        self.holidays: set[Date] = set(holidays or [])
        self.include_weekends = include_weekends

    def add_holiday(self, date: Date) -> None:
        self.holidays.add(date)

    def remove_holiday(self, date: Date) -> None:
        self.holidays.discard(date)

    def is_business_day(self, date: Date) -> bool:
        """A business day is neither a listed holiday nor (optionally) a weekend."""
        if date in self.holidays:
            return False
        return not (self.include_weekends and date.weekday() >= 5)


def get_calendar(calendar: Calendar | str | HolidayCalendar) -> HolidayCalendar:
    """Factory function to get a calendar by name.

    HolidayCalendar instances are returned unchanged.

    Raises:
        ConventionError: If the calendar name is unknown

    Example:
        >>> get_calendar("MONDAY_TO_FRIDAY").is_business_day(Date(2024, 1, 6))
        False
    """
    if isinstance(calendar, HolidayCalendar):
        return calendar

    name = calendar.value if isinstance(calendar, Calendar) else str(calendar).upper()
    if name in ("NO_CALENDAR", "NONE"):
        return NoHolidayCalendar()
    if name in ("MONDAY_TO_FRIDAY", "MTF"):
        return MondayToFridayCalendar()
    if name == "CUSTOM":
        return CustomCalendar()
    raise ConventionError(
        "Unknown calendar",
        context={"calendar": calendar, "supported": ["NO_CALENDAR", "MONDAY_TO_FRIDAY", "CUSTOM"]},
    )
