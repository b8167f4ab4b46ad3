"""Sinking-fund schedule, notional and redemption generators.

A sinking-fund bond retires its principal on every sinking date so that the
coupon on the declining balance plus the principal repaid is the same each
period, like a level-payment loan. Given the tenor and sinking frequency the
number of sinking periods is fixed by :func:`jamort.core.period.is_sub_period`;
the notional after each sinking date follows the annuity balance curve.
"""

from __future__ import annotations

import math

from jamort.core.period import Period, is_sub_period
from jamort.core.time import Date
from jamort.core.types import BusinessDayConvention, Calendar, DateGeneration, Frequency
from jamort.exceptions import (
    ContractValidationError,
    IncompatiblePeriodError,
    NumericDegeneracyError,
)
from jamort.logging_config import get_logger
from jamort.utilities.calendars import HolidayCalendar
from jamort.utilities.schedules import Schedule, generate_schedule

logger = get_logger(__name__)


def sinking_periods(tenor: Period, frequency: Frequency) -> int:
    """Number of sinking periods in ``tenor`` at the given frequency.

    Raises:
        IncompatiblePeriodError: If the frequency period does not evenly
            divide the tenor (or the frequency has no period)
    """
    frequency = Frequency(frequency)
    compatible, count = False, 0
    if frequency != Frequency.OTHER_FREQUENCY:
        compatible, count = is_sub_period(Period.from_frequency(frequency), tenor)

    if not compatible:
        raise IncompatiblePeriodError(
            "Bond frequency is incompatible with the maturity tenor",
            context={"frequency": frequency.name, "tenor": str(tenor)},
        )
    return count


def sinking_schedule(
    start_date: Date,
    tenor: Period,
    frequency: Frequency,
    calendar: HolidayCalendar | Calendar | str,
) -> Schedule:
    """Sinking dates from ``start_date`` to ``start_date + tenor``.

    Dates are rolled backward from maturity and left unadjusted, without
    end-of-month rolling.
    """
    return generate_schedule(
        start=start_date,
        end=start_date + tenor,
        tenor=Period.from_frequency(frequency),
        calendar=calendar,
        convention=BusinessDayConvention.UNADJUSTED,
        termination_convention=BusinessDayConvention.UNADJUSTED,
        rule=DateGeneration.BACKWARD,
        end_of_month=False,
    )


def sinking_notionals(
    start_date: Date,
    tenor: Period,
    frequency: Frequency,
    coupon_rate: float,
    initial_notional: float,
) -> list[float]:
    """Outstanding notional after each sinking date.

    Args:
        start_date: Accrual start of the bond
        tenor: Time to maturity
        frequency: Sinking frequency; its period must tile the tenor
        coupon_rate: Annual coupon rate (decimal)
        initial_notional: Face amount at issue

    Returns:
        ``n + 1`` notionals: the face amount, the balance after each of the
        first ``n - 1`` sinking dates, and exactly 0.0 at maturity.

    Raises:
        IncompatiblePeriodError: If the frequency does not tile the tenor
        ContractValidationError: If the initial notional is not positive
        NumericDegeneracyError: If there are fewer than two sinking periods,
            the per-period rate is zero, vanishes against 1.0 or is not
            above -100%, the growth factor overflows, or the curve is not
            finite

    Example:
        >>> notionals = sinking_notionals(
        ...     Date(2024, 1, 15), Period(5, TimeUnit.YEARS), Frequency.ANNUAL, 0.05, 1000.0
        ... )
        >>> [round(n, 2) for n in notionals]
        [1000.0, 819.03, 629.0, 429.48, 219.98, 0.0]
    """
    n_periods = sinking_periods(tenor, frequency)
    coupon = coupon_rate / int(frequency)
    context = {
        "start_date": start_date.to_iso(),
        "tenor": str(tenor),
        "frequency": Frequency(frequency).name,
        "coupon_rate": coupon_rate,
        "n_periods": n_periods,
    }

    if not initial_notional > 0.0:
        raise ContractValidationError(
            "Initial notional must be positive",
            context={**context, "initial_notional": initial_notional},
        )
    if n_periods < 2:
        raise NumericDegeneracyError("Sinking fund needs at least two periods", context=context)
    if coupon == 0.0:
        raise NumericDegeneracyError("Sinking fund coupon rate must be non-zero", context=context)
    if 1.0 + coupon <= 0.0:
        raise NumericDegeneracyError(
            "Per-period coupon rate must be greater than -100%", context=context
        )

    try:
        total_value = (1.0 + coupon) ** n_periods
    except OverflowError as exc:
        raise NumericDegeneracyError(
            "Sinking fund growth factor overflows", context=context
        ) from exc

    # 1 + c rounds to 1 for per-period rates below machine precision
    denominator = 1.0 - 1.0 / total_value
    if denominator == 0.0 or not math.isfinite(denominator):
        raise NumericDegeneracyError(
            "Sinking fund coupon rate is too small to amortize",
            context={**context, "total_value": total_value},
        )

    notionals = [0.0] * (n_periods + 1)
    notionals[0] = initial_notional
    compounded_interest = 1.0
    for i in range(n_periods - 1):
        compounded_interest *= 1.0 + coupon
        notionals[i + 1] = initial_notional * (
            compounded_interest - (compounded_interest - 1.0) / denominator
        )
    notionals[-1] = 0.0

    if not all(math.isfinite(n) for n in notionals):
        raise NumericDegeneracyError("Sinking fund notionals are not finite", context=context)

    logger.debug("Generated sinking notionals", extra=context)
    return notionals


def sinking_redemptions(
    start_date: Date,
    tenor: Period,
    frequency: Frequency,
    coupon_rate: float,
    initial_notional: float,
) -> list[float]:
    """Principal retired on each sinking date, in percent of the face amount.

    The percentages sum to 100. Raises the same errors as
    :func:`sinking_notionals`.

    Example:
        >>> redemptions = sinking_redemptions(
        ...     Date(2024, 1, 15), Period(5, TimeUnit.YEARS), Frequency.ANNUAL, 0.05, 1000.0
        ... )
        >>> round(sum(redemptions), 10)
        100.0
    """
    notionals = sinking_notionals(start_date, tenor, frequency, coupon_rate, initial_notional)
    return [
        (notionals[i] - notionals[i + 1]) / initial_notional * 100
        for i in range(len(notionals) - 1)
    ]
