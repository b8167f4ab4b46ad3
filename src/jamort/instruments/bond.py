"""Amortizing fixed-rate bond.

This module assembles amortizing fixed-rate bonds in one of two modes:

- **Explicit**: the caller supplies the schedule, the notional outstanding in
  each period, the coupon rates and optionally the redemption prices.
- **Sinking fund**: the caller supplies start date, tenor, frequency, coupon
  and face amount; the notionals follow a level-payment sinking fund so that
  coupon plus principal is the same on every payment date.

Both modes build a fixed-rate coupon leg and attach one principal payment per
notional step. The resulting bond is immutable.

Example:
    >>> bond = build_sinking_fund_bond(
    ...     settlement_days=0,
    ...     calendar="NO_CALENDAR",
    ...     face_amount=1000.0,
    ...     start_date=Date(2024, 1, 15),
    ...     tenor=Period(5, TimeUnit.YEARS),
    ...     frequency=Frequency.ANNUAL,
    ...     coupon=0.05,
    ...     day_count=DayCountConvention.B30360,
    ...     payment_convention=BusinessDayConvention.UNADJUSTED,
    ... )
    >>> [round(n, 2) for n in bond.notionals]
    [1000.0, 819.03, 629.0, 429.48, 219.98, 0.0]
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from jamort.core.cashflows import (
    FixedRateCoupon,
    Leg,
    PrincipalPayment,
    as_fixed_rate_coupon,
    is_coupon,
)
from jamort.core.period import Period
from jamort.core.time import Date
from jamort.core.types import BusinessDayConvention, Calendar, DayCountConvention, Frequency
from jamort.exceptions import ContractValidationError, DegenerateScheduleError
from jamort.instruments.legs import add_redemptions, fixed_rate_leg
from jamort.instruments.sinking import sinking_notionals, sinking_schedule
from jamort.instruments.terms import SinkingFundTerms
from jamort.logging_config import get_logger
from jamort.utilities.calendars import HolidayCalendar
from jamort.utilities.schedules import Schedule

logger = get_logger(__name__)


@dataclass(frozen=True)
class AmortizingFixedRateBond:
    """Fixed-rate bond whose notional is repaid in steps.

    Attributes:
        settlement_days: Business days between trade and settlement
        calendar: Calendar for settlement and payment dates
        issue_date: Issue date, if known
        frequency: Coupon frequency
        day_count: Day count convention of the coupons
        maturity_date: Last accrual date
        face_amount: Notional outstanding at issue (nominal of the first coupon)
        cashflows: Coupons and principal payments sorted by date
        notional_schedule: Dates on which the notional steps down; the first
            slot is None (outstanding since issue)
        notionals: Notional outstanding after each step; the last is 0
        redemptions: Principal payments, one per notional step

    Example:
        >>> round(bond.notional(Date(2026, 6, 1)), 2)
        629.0
    """

    settlement_days: int
    calendar: HolidayCalendar
    issue_date: Date | None
    frequency: Frequency
    day_count: DayCountConvention
    maturity_date: Date
    face_amount: float
    cashflows: Leg
    notional_schedule: tuple[Date | None, ...]
    notionals: tuple[float, ...]
    redemptions: tuple[PrincipalPayment, ...]

    @classmethod
    def from_notionals(
        cls,
        settlement_days: int,
        notionals: Sequence[float],
        schedule: Schedule,
        coupons: Sequence[float] | float,
        day_count: DayCountConvention,
        payment_convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
        redemptions: Sequence[float] | None = None,
        issue_date: Date | None = None,
    ) -> AmortizingFixedRateBond:
        """Build a bond from an explicit notional profile.

        Args:
            settlement_days: Business days between trade and settlement
            notionals: Notional outstanding in each schedule period
            schedule: Accrual schedule
            coupons: Coupon rate per period, or a single flat rate
            day_count: Day count convention of the coupons
            payment_convention: Adjustment of coupon payment dates
            redemptions: Redemption price per notional step in percent of
                the amount repaid (defaults to par)
            issue_date: Optional issue date

        Raises:
            DegenerateScheduleError: If no coupon can be built (empty
                schedule, notionals or coupons)
            CashFlowShapeError: If the leg does not start with a fixed-rate coupon
            ContractValidationError: If the notionals increase
        """
        leg = fixed_rate_leg(schedule, day_count, notionals, coupons, payment_convention)
        if not leg:
            raise DegenerateScheduleError(
                "Bond has no cash flows",
                context={
                    "schedule_size": len(schedule),
                    "n_notionals": len(notionals),
                    "n_coupons": 1 if isinstance(coupons, (int, float)) else len(coupons),
                },
            )
        face_amount = as_fixed_rate_coupon(leg[0]).nominal

        bond = cls._assemble(
            leg=leg,
            redemptions=redemptions,
            settlement_days=settlement_days,
            calendar=schedule.calendar,
            issue_date=issue_date,
            frequency=schedule.tenor.frequency(),
            day_count=day_count,
            maturity_date=schedule.end_date,
            face_amount=face_amount,
        )
        logger.debug(
            "Built amortizing bond from explicit notionals",
            extra={"face_amount": face_amount, "n_cashflows": len(bond.cashflows)},
        )
        return bond

    @classmethod
    def from_sinking_fund(
        cls,
        settlement_days: int,
        calendar: HolidayCalendar | Calendar | str,
        face_amount: float,
        start_date: Date | str,
        tenor: Period | str,
        frequency: Frequency | str,
        coupon: float,
        day_count: DayCountConvention | str,
        payment_convention: BusinessDayConvention | str = BusinessDayConvention.FOLLOWING,
        issue_date: Date | str | None = None,
    ) -> AmortizingFixedRateBond:
        """Build a sinking-fund bond.

        The schedule runs backward from ``start_date + tenor`` at the
        frequency period, unadjusted; the notionals follow the sinking-fund
        balance curve and every step is redeemed at par.

        Raises:
            ContractValidationError: If the terms fail validation
            DegenerateScheduleError: If the tenor is not positive
            IncompatiblePeriodError: If the frequency does not tile the tenor
            NumericDegeneracyError: If the balance curve is degenerate
        """
        try:
            terms = SinkingFundTerms(
                settlement_days=settlement_days,
                calendar=calendar,
                face_amount=face_amount,
                start_date=start_date,
                tenor=tenor,
                frequency=frequency,
                coupon=coupon,
                day_count=day_count,
                payment_convention=payment_convention,
                issue_date=issue_date,
            )
        except ValidationError as exc:
            raise ContractValidationError(
                "Invalid sinking-fund terms",
                context={"errors": [err["msg"] for err in exc.errors()]},
            ) from exc
        return cls.from_terms(terms)

    @classmethod
    def from_terms(cls, terms: SinkingFundTerms) -> AmortizingFixedRateBond:
        """Build a sinking-fund bond from validated terms."""
        if terms.tenor.length <= 0:
            raise DegenerateScheduleError(
                "Bond has no cash flows",
                context={"tenor": str(terms.tenor), "start_date": terms.start_date.to_iso()},
            )

        notionals = sinking_notionals(
            terms.start_date, terms.tenor, terms.frequency, terms.coupon, terms.face_amount
        )
        schedule = sinking_schedule(terms.start_date, terms.tenor, terms.frequency, terms.calendar)
        leg = fixed_rate_leg(
            schedule, terms.day_count, notionals, [terms.coupon], terms.payment_convention
        )

        bond = cls._assemble(
            leg=leg,
            redemptions=None,
            settlement_days=terms.settlement_days,
            calendar=terms.calendar,
            issue_date=terms.issue_date,
            frequency=terms.frequency,
            day_count=terms.day_count,
            maturity_date=terms.maturity_date,
            face_amount=terms.face_amount,
        )
        logger.debug(
            "Built sinking-fund bond",
            extra={
                "face_amount": terms.face_amount,
                "tenor": str(terms.tenor),
                "frequency": terms.frequency.name,
                "n_periods": len(notionals) - 1,
            },
        )
        return bond

    @classmethod
    def _assemble(
        cls,
        leg: Leg,
        redemptions: Sequence[float] | None,
        **fields: Any,
    ) -> AmortizingFixedRateBond:
        redeemed = add_redemptions(leg, redemptions)
        if not redeemed.cashflows:
            raise DegenerateScheduleError("Bond has no cash flows")
        return cls(
            cashflows=redeemed.cashflows,
            notional_schedule=redeemed.profile.dates,
            notionals=redeemed.profile.notionals,
            redemptions=redeemed.redemptions,
            **fields,
        )

    # ========== Inspection ==========

    @property
    def start_date(self) -> Date:
        """Accrual start of the first coupon."""
        return self.coupons[0].accrual_start

    @property
    def coupons(self) -> tuple[FixedRateCoupon, ...]:
        return tuple(as_fixed_rate_coupon(cf) for cf in self.cashflows if is_coupon(cf))

    @property
    def redemption(self) -> PrincipalPayment:
        """The final principal payment."""
        return self.redemptions[-1]

    def notional(self, date: Date) -> float:
        """Notional outstanding on a date.

        On a notional step date the principal payment is considered made,
        so the lower notional applies. After the last step the notional is 0.
        """
        steps = self.notional_schedule[1:]
        return self.notionals[bisect_right(steps, date)]

    def settlement_date(self, date: Date) -> Date:
        """Trade date advanced by the settlement lag, not before issue."""
        settlement = self.calendar.add_business_days(date, self.settlement_days)
        if self.issue_date is not None and settlement < self.issue_date:
            return self.issue_date
        return settlement

    def is_tradable(self, date: Date) -> bool:
        """Whether notional is still outstanding at settlement of a trade on ``date``."""
        return self.notional(self.settlement_date(date)) != 0.0

    def cashflows_after(self, date: Date) -> Leg:
        """Cash flows paid strictly after ``date``."""
        return tuple(cf for cf in self.cashflows if cf.date > date)

    def payment_table(self) -> list[dict[str, Any]]:
        """One row per coupon date with interest, principal and their total.

        For a sinking-fund bond the ``total`` column is the same on every row.
        """
        principal: dict[Date, float] = {}
        for payment in self.redemptions:
            principal[payment.date] = principal.get(payment.date, 0.0) + payment.amount

        rows = []
        for coupon in self.coupons:
            repaid = principal.pop(coupon.date, 0.0)
            rows.append(
                {
                    "date": coupon.date.to_iso(),
                    "notional": coupon.nominal,
                    "interest": coupon.amount,
                    "principal": repaid,
                    "redemption_pct": repaid / self.face_amount * 100,
                    "total": coupon.amount + repaid,
                }
            )
        return rows

    def cashflow_table(self) -> list[dict[str, Any]]:
        """Cash flows as a list of dictionaries, in payment order."""
        return [cf.to_dict() for cf in self.cashflows]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "settlement_days": self.settlement_days,
            "calendar": self.calendar.name,
            "issue_date": self.issue_date.to_iso() if self.issue_date else None,
            "start_date": self.start_date.to_iso(),
            "maturity_date": self.maturity_date.to_iso(),
            "frequency": self.frequency.name,
            "day_count": self.day_count.value,
            "face_amount": self.face_amount,
            "notional_schedule": [d.to_iso() if d else None for d in self.notional_schedule],
            "notionals": list(self.notionals),
            "cashflows": self.cashflow_table(),
        }


def build_amortizing_bond(
    settlement_days: int,
    notionals: Sequence[float],
    schedule: Schedule,
    coupons: Sequence[float] | float,
    day_count: DayCountConvention,
    payment_convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
    redemptions: Sequence[float] | None = None,
    issue_date: Date | None = None,
) -> AmortizingFixedRateBond:
    """Build an amortizing bond from explicit notionals.

    See :meth:`AmortizingFixedRateBond.from_notionals`.
    """
    return AmortizingFixedRateBond.from_notionals(
        settlement_days=settlement_days,
        notionals=notionals,
        schedule=schedule,
        coupons=coupons,
        day_count=day_count,
        payment_convention=payment_convention,
        redemptions=redemptions,
        issue_date=issue_date,
    )


def build_sinking_fund_bond(
    settlement_days: int,
    calendar: HolidayCalendar | Calendar | str,
    face_amount: float,
    start_date: Date | str,
    tenor: Period | str,
    frequency: Frequency | str,
    coupon: float,
    day_count: DayCountConvention | str,
    payment_convention: BusinessDayConvention | str = BusinessDayConvention.FOLLOWING,
    issue_date: Date | str | None = None,
) -> AmortizingFixedRateBond:
    """Build a sinking-fund bond.

    See :meth:`AmortizingFixedRateBond.from_sinking_fund`.
    """
    return AmortizingFixedRateBond.from_sinking_fund(
        settlement_days=settlement_days,
        calendar=calendar,
        face_amount=face_amount,
        start_date=start_date,
        tenor=tenor,
        frequency=frequency,
        coupon=coupon,
        day_count=day_count,
        payment_convention=payment_convention,
        issue_date=issue_date,
    )

