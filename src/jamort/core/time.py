"""Date handling for bond schedules.

This module provides the Date class and utilities for parsing, advancing and
comparing calendar dates.

Key features:
- ISO 8601 date parsing
- Period arithmetic (e.g., adding ``3M`` to a date, or subtracting ``1Y``)
- Month-end handling and leap year support
- JAX pytree registration for functional programming
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta

import jax

from jamort.core.period import Period
from jamort.core.types import TimeUnit
from jamort.exceptions import DateTimeError


@dataclass(frozen=True, order=True)
class Date:
    """Immutable calendar date.

    Dates are ordered chronologically and can be shifted by a Period with
    ``+`` and ``-``.

    Attributes:
        year: Year (1-9999)
        month: Month (1-12)
        day: Day of month (1 to the last day of the month)

    Example:
        >>> Date(2024, 1, 31) + Period(1, TimeUnit.MONTHS)
        Date(year=2024, month=2, day=29)
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        """Validate date components."""
        if not 1 <= self.year <= 9999:
            raise ValueError(f"Year must be 1-9999, got {self.year}")
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be 1-12, got {self.month}")
        last_day = calendar.monthrange(self.year, self.month)[1]
        if not 1 <= self.day <= last_day:
            raise ValueError(
                f"Day must be 1-{last_day} for {self.year:04d}-{self.month:02d}, got {self.day}"
            )

    @classmethod
    def from_iso(cls, iso_string: str) -> Date:
        """Parse an ISO 8601 date string (``YYYY-MM-DD``).

        A trailing ``T00:00:00`` time component is accepted and ignored.

        Raises:
            DateTimeError: If string format is invalid
        """
        return parse_iso_date(iso_string)

    @classmethod
    def from_date(cls, value: date) -> Date:
        """Build from a standard library date."""
        return cls(value.year, value.month, value.day)

    def to_iso(self) -> str:
        """Convert to ISO 8601 string (YYYY-MM-DD)."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_date(self) -> date:
        """Convert to a standard library date."""
        return date(self.year, self.month, self.day)

    def weekday(self) -> int:
        """Day of the week, Monday=0 to Sunday=6."""
        return self.to_date().weekday()

    def is_end_of_month(self) -> bool:
        """Check if this date is the last day of its month.

        Example:
            >>> Date(2024, 2, 29).is_end_of_month()
            True
        """
        return self.day == calendar.monthrange(self.year, self.month)[1]

    def end_of_month(self) -> Date:
        """Last day of this date's month."""
        return Date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def add_days(self, days: int) -> Date:
        """Shift by a number of calendar days (can be negative)."""
        return Date.from_date(self.to_date() + timedelta(days=days))

    def advance(self, period: Period, end_of_month: bool = False) -> Date:
        """Shift this date by a period.

        Month and year shifts keep the day of month, clamped to the last day of
        the target month. When ``end_of_month`` is set and this date is a
        month end, month and year shifts land on the target month end.

        Example:
            >>> Date(2024, 2, 29).advance(Period(-1, TimeUnit.YEARS))
            Date(year=2023, month=2, day=28)
            >>> Date(2023, 4, 30).advance(Period(1, TimeUnit.MONTHS), end_of_month=True)
            Date(year=2023, month=5, day=31)
        """
        return add_period(self, period, end_of_month)

    def days_between(self, other: Date) -> int:
        """Actual days from this date to ``other`` (negative if other is earlier)."""
        return (other.to_date() - self.to_date()).days

    def __add__(self, other: Period) -> Date:
        if not isinstance(other, Period):
            return NotImplemented
        return self.advance(other)

    def __sub__(self, other: Period) -> Date:
        if not isinstance(other, Period):
            return NotImplemented
        return self.advance(-other)

    def __str__(self) -> str:
        return self.to_iso()


# Register Date as a JAX pytree for functional programming
def _date_flatten(value: Date) -> tuple[tuple[int, int, int], None]:
    """Flatten Date for JAX pytree registration."""
    return ((value.year, value.month, value.day), None)


def _date_unflatten(aux_data: None, children: tuple[int, int, int]) -> Date:
    """Unflatten Date for JAX pytree registration."""
    return Date(*children)


jax.tree_util.register_pytree_node(Date, _date_flatten, _date_unflatten)


_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:[T\s]00:00:00)?$")


def parse_iso_date(iso_string: str) -> Date:
    """Parse ISO 8601 date string into Date.

    Supports ``YYYY-MM-DD`` optionally followed by ``T00:00:00``.

    Raises:
        DateTimeError: If format is invalid or the date does not exist

    Example:
        >>> parse_iso_date("2024-01-15")
        Date(year=2024, month=1, day=15)
    """
    match = _ISO_DATE.match(iso_string.strip()) if isinstance(iso_string, str) else None
    if not match:
        raise DateTimeError(
            "Unable to parse ISO date string",
            context={"date_string": iso_string, "format": "YYYY-MM-DD"},
        )
    year, month, day = map(int, match.groups())
    try:
        return Date(year, month, day)
    except ValueError as exc:
        raise DateTimeError(str(exc), context={"date_string": iso_string}) from exc


def add_period(value: Date, period: Period, end_of_month: bool = False) -> Date:
    """Add a (possibly negative) period to a date.

    Args:
        value: Starting date
        period: Period to add
        end_of_month: Stick to month ends for month/year periods

    Returns:
        New date after adding the period
    """
    if period.unit == TimeUnit.DAYS:
        return value.add_days(period.length)
    if period.unit == TimeUnit.WEEKS:
        return value.add_days(7 * period.length)

    months_to_add = period.length * (12 if period.unit == TimeUnit.YEARS else 1)
    total_months = (value.year * 12 + value.month - 1) + months_to_add
    new_year, new_month = total_months // 12, total_months % 12 + 1
    if not 1 <= new_year <= 9999:
        raise DateTimeError(
            "Date arithmetic out of range",
            context={"date": value.to_iso(), "period": str(period)},
        )

    last_day = calendar.monthrange(new_year, new_month)[1]
    if end_of_month and value.is_end_of_month():
        return Date(new_year, new_month, last_day)
    return Date(new_year, new_month, min(value.day, last_day))
