"""Fixed-rate coupon legs and principal redemption attachment.

This module turns a schedule plus notionals and coupon rates into a leg of
fixed-rate coupons, reads the notional profile back from such a leg, and
appends the principal payments implied by every notional step.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import NamedTuple

from jamort.core.cashflows import (
    CashFlow,
    FixedRateCoupon,
    Leg,
    PrincipalPayment,
    is_coupon,
    sort_cashflows,
)
from jamort.core.time import Date
from jamort.core.types import BusinessDayConvention, CashFlowType, DayCountConvention
from jamort.exceptions import ContractValidationError, DegenerateScheduleError
from jamort.logging_config import get_logger
from jamort.utilities.conventions import year_fraction
from jamort.utilities.schedules import Schedule

logger = get_logger(__name__)

# Relative tolerance when deciding whether two coupon nominals differ
NOTIONAL_TOLERANCE = 1e-12


class NotionalProfile(NamedTuple):
    """Notional outstanding between amortization dates.

    ``notionals[i]`` is outstanding from ``dates[i]`` until ``dates[i + 1]``.
    ``dates[0]`` is None (outstanding since issue) and the last notional is 0.
    """

    dates: tuple[Date | None, ...]
    notionals: tuple[float, ...]


class RedeemedLeg(NamedTuple):
    """A leg with its principal payments attached."""

    cashflows: Leg
    redemptions: tuple[PrincipalPayment, ...]
    profile: NotionalProfile


def _nth(values: Sequence[float], i: int) -> float:
    """i-th entry, repeating the last one past the end."""
    return values[i] if i < len(values) else values[-1]


def fixed_rate_leg(
    schedule: Schedule,
    day_count: DayCountConvention,
    notionals: Sequence[float],
    coupon_rates: Sequence[float] | float,
    payment_convention: BusinessDayConvention = BusinessDayConvention.UNADJUSTED,
) -> Leg:
    """Build one fixed-rate coupon per schedule period.

    Period ``i`` accrues on ``notionals[i]`` at ``coupon_rates[i]``; when a
    list is shorter than the schedule its last entry is repeated. Empty
    notionals or rates give an empty leg.

    Args:
        schedule: Accrual schedule
        day_count: Day count convention for the accrual periods
        notionals: Nominal per period
        coupon_rates: Rate per period, or a single flat rate
        payment_convention: Adjustment of payment dates on the schedule calendar

    Returns:
        Tuple of FixedRateCoupon in payment order

    Example:
        >>> leg = fixed_rate_leg(schedule, DayCountConvention.B30360, [1000.0, 500.0], 0.05)
    """
    rates = [coupon_rates] if isinstance(coupon_rates, (int, float)) else list(coupon_rates)
    if not notionals or not rates:
        logger.debug(
            "Fixed-rate leg requested without notionals or coupon rates",
            extra={"n_notionals": len(notionals), "n_rates": len(rates)},
        )
        return ()

    coupons = []
    for i, (accrual_start, accrual_end) in enumerate(schedule.periods()):
        coupons.append(
            FixedRateCoupon(
                payment_date=schedule.calendar.adjust(accrual_end, payment_convention),
                nominal=float(_nth(notionals, i)),
                rate=float(_nth(rates, i)),
                accrual_start=accrual_start,
                accrual_end=accrual_end,
                day_count=day_count,
                accrual_period=year_fraction(
                    accrual_start, accrual_end, day_count, schedule.calendar
                ),
            )
        )
    return tuple(coupons)


def notional_profile(cashflows: Sequence[CashFlow]) -> NotionalProfile:
    """Read the notional steps off the coupons of a leg.

    A new step starts whenever a coupon nominal differs from the previous
    one; it takes effect on the payment date of the last coupon at the old
    nominal.

    Raises:
        ContractValidationError: If coupon nominals increase along the leg
        DegenerateScheduleError: If the leg carries no coupons
    """
    dates: list[Date | None] = [None]
    notionals: list[float] = []
    last_payment_date: Date | None = None

    for cashflow in cashflows:
        if not is_coupon(cashflow):
            continue
        nominal = cashflow.nominal
        if not notionals:
            notionals.append(nominal)
        elif not math.isclose(nominal, notionals[-1], rel_tol=NOTIONAL_TOLERANCE):
            if nominal > notionals[-1]:
                raise ContractValidationError(
                    "Increasing coupon notionals",
                    context={
                        "date": cashflow.date.to_iso(),
                        "previous": notionals[-1],
                        "nominal": nominal,
                    },
                )
            notionals.append(nominal)
            dates.append(last_payment_date)
        last_payment_date = cashflow.date

    if not notionals:
        raise DegenerateScheduleError("No coupons provided")

    notionals.append(0.0)
    dates.append(last_payment_date)
    return NotionalProfile(tuple(dates), tuple(notionals))


def add_redemptions(
    cashflows: Sequence[CashFlow],
    redemptions: Sequence[float] | None = None,
) -> RedeemedLeg:
    """Append a principal payment for every notional step of a leg.

    Step ``i`` pays ``R / 100 * (notional[i-1] - notional[i])`` where ``R`` is
    ``redemptions[i-1]``; past the end of the list its last entry is used,
    and 100 (par) when no list is given. Intermediate steps are amortizing
    payments, the final one is the redemption.

    Returns:
        RedeemedLeg with cash flows sorted by date (principal after the
        coupon paid on the same date)
    """
    profile = notional_profile(cashflows)
    prices = list(redemptions) if redemptions else [100.0]

    payments = []
    n_steps = len(profile.dates)
    for i in range(1, n_steps):
        price = _nth(prices, i - 1)
        amount = (price / 100.0) * (profile.notionals[i - 1] - profile.notionals[i])
        kind = CashFlowType.AMORTIZING_PAYMENT if i < n_steps - 1 else CashFlowType.REDEMPTION
        payments.append(PrincipalPayment(amount=amount, payment_date=profile.dates[i], kind=kind))

    return RedeemedLeg(
        cashflows=sort_cashflows(list(cashflows) + payments),
        redemptions=tuple(payments),
        profile=profile,
    )
