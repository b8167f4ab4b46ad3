"""Schedule generation utilities.

This module generates the date schedules coupon legs accrue over. Dates are
rolled from one end of the schedule at a fixed tenor, either backward from
the termination date or forward from the effective date; a shorter stub
period appears at the opposite end when the tenor does not tile the span.
Rolled dates are then adjusted to business days on the schedule calendar.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from jamort.core.period import Period
from jamort.core.time import Date
from jamort.core.types import BusinessDayConvention, Calendar, DateGeneration
from jamort.exceptions import ScheduleGenerationError
from jamort.logging_config import get_logger
from jamort.utilities.calendars import HolidayCalendar, NoHolidayCalendar, get_calendar

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class Schedule:
    """Immutable, ordered sequence of schedule dates.

    Attributes:
        dates: Adjusted dates, strictly increasing
        tenor: Rolling period used to generate the dates
        calendar: Calendar used for business day adjustment
        convention: Adjustment applied to all dates but the last
        termination_convention: Adjustment applied to the last date
        rule: Generation direction
        end_of_month: Whether month-end dates roll to month ends
        is_regular: One flag per period; False for stub periods
    """

    dates: tuple[Date, ...]
    tenor: Period
    calendar: HolidayCalendar
    convention: BusinessDayConvention
    termination_convention: BusinessDayConvention
    rule: DateGeneration
    end_of_month: bool
    is_regular: tuple[bool, ...]

    @property
    def start_date(self) -> Date:
        return self.dates[0]

    @property
    def end_date(self) -> Date:
        return self.dates[-1]

    def periods(self) -> Iterator[tuple[Date, Date]]:
        """Iterate over consecutive (start, end) date pairs."""
        return zip(self.dates[:-1], self.dates[1:])

    def __len__(self) -> int:
        return len(self.dates)

    def __iter__(self) -> Iterator[Date]:
        return iter(self.dates)

    def __getitem__(self, index: int) -> Date:
        return self.dates[index]


def generate_schedule(
    start: Date,
    end: Date,
    tenor: Period,
    calendar: HolidayCalendar | Calendar | str | None = None,
    convention: BusinessDayConvention = BusinessDayConvention.UNADJUSTED,
    termination_convention: BusinessDayConvention | None = None,
    rule: DateGeneration = DateGeneration.BACKWARD,
    end_of_month: bool = False,
) -> Schedule:
    """Generate a regular schedule between two dates.

    Args:
        start: Effective date
        end: Termination date
        tenor: Rolling period (must be positive)
        calendar: Business day calendar (defaults to no holidays)
        convention: Adjustment for every date but the termination date
        termination_convention: Adjustment for the termination date
            (defaults to ``convention``)
        rule: Roll backward from ``end`` or forward from ``start``
        end_of_month: Keep month-end dates on month ends for month/year tenors

    Returns:
        Schedule with strictly increasing dates

    Raises:
        ScheduleGenerationError: If start is not before end or the tenor
            is not positive

    Example:
        >>> schedule = generate_schedule(
        ...     start=Date(2024, 1, 15),
        ...     end=Date(2025, 3, 15),
        ...     tenor=Period(6, TimeUnit.MONTHS),
        ... )
        >>> [d.to_iso() for d in schedule]
        ['2024-01-15', '2024-03-15', '2024-09-15', '2025-03-15']
    """
    if not start < end:
        raise ScheduleGenerationError(
            "Schedule start date must be before end date",
            context={"start": start.to_iso(), "end": end.to_iso()},
        )
    if tenor.length <= 0:
        raise ScheduleGenerationError(
            "Schedule tenor must be positive",
            context={"tenor": str(tenor), "start": start.to_iso()},
        )

    holiday_calendar = NoHolidayCalendar() if calendar is None else get_calendar(calendar)
    if termination_convention is None:
        termination_convention = convention

    if rule == DateGeneration.BACKWARD:
        rolled, regular = _roll(end, start, -tenor, end_of_month)
        rolled.reverse()
        regular.reverse()
    elif rule == DateGeneration.FORWARD:
        rolled, regular = _roll(start, end, tenor, end_of_month)
    else:
        raise ScheduleGenerationError("Unsupported date generation rule", context={"rule": rule})

    adjusted = [holiday_calendar.adjust(d, convention) for d in rolled[:-1]]
    adjusted.append(holiday_calendar.adjust(rolled[-1], termination_convention))

    # Adjustment can collapse neighbouring dates; keep the first of each run
    dates = [adjusted[0]]
    flags: list[bool] = []
    for d, flag in zip(adjusted[1:], regular, strict=True):
        if d > dates[-1]:
            dates.append(d)
            flags.append(flag)

    logger.debug(
        "Generated schedule",
        extra={"start": start.to_iso(), "end": end.to_iso(), "tenor": str(tenor), "size": len(dates)},
    )
    return Schedule(
        dates=tuple(dates),
        tenor=tenor,
        calendar=holiday_calendar,
        convention=convention,
        termination_convention=termination_convention,
        rule=rule,
        end_of_month=end_of_month,
        is_regular=tuple(flags),
    )


def _roll(seed: Date, exit_date: Date, step: Period, end_of_month: bool) -> tuple[list[Date], list[bool]]:
    """Roll from ``seed`` towards ``exit_date`` by whole steps.

    Each date is computed from the seed (``seed + k * step``) rather than
    from the previous date, so month-end clamping does not accumulate.
    Returns the dates in rolling order, with ``exit_date`` appended as a stub
    when it is not hit exactly, and one regularity flag per period.
    """
    forward = step.length > 0
    dates = [seed]
    regular: list[bool] = []
    k = 1
    while True:
        rolled = seed.advance(step * k, end_of_month)
        if (rolled > exit_date) if forward else (rolled < exit_date):
            break
        dates.append(rolled)
        regular.append(True)
        k += 1

    if dates[-1] != exit_date:
        dates.append(exit_date)
        regular.append(False)
    return dates, regular
