"""Cash flow variants carried by a bond leg.

A bond leg holds two kinds of cash flows: fixed-rate coupons, which accrue
interest on a nominal over an accrual period, and principal payments, which
return part (amortizing payment) or the rest (redemption) of the face amount.
Each variant carries a ``kind`` tag so callers can branch on it without
isinstance chains; :func:`as_fixed_rate_coupon` extracts the coupon view and
fails loudly for any other variant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeAlias

from jamort.core.time import Date
from jamort.core.types import CashFlowType, DayCountConvention
from jamort.exceptions import CashFlowShapeError


@dataclass(frozen=True)
class FixedRateCoupon:
    """Interest payment at a fixed rate on a constant nominal.

    Attributes:
        payment_date: Date the coupon is paid (adjusted accrual end)
        nominal: Notional the coupon accrues on
        rate: Annual coupon rate (decimal)
        accrual_start: Start of the accrual period
        accrual_end: End of the accrual period
        day_count: Day count convention used for the accrual period
        accrual_period: Year fraction between accrual start and end

    Example:
        >>> coupon = FixedRateCoupon(
        ...     payment_date=Date(2025, 1, 15),
        ...     nominal=1000.0,
        ...     rate=0.05,
        ...     accrual_start=Date(2024, 1, 15),
        ...     accrual_end=Date(2025, 1, 15),
        ...     day_count=DayCountConvention.B30360,
        ...     accrual_period=1.0,
        ... )
        >>> coupon.amount
        50.0
    """

    payment_date: Date
    nominal: float
    rate: float
    accrual_start: Date
    accrual_end: Date
    day_count: DayCountConvention
    accrual_period: float
    kind: CashFlowType = field(default=CashFlowType.COUPON, init=False)

    @property
    def date(self) -> Date:
        return self.payment_date

    @property
    def amount(self) -> float:
        """Simple interest on the nominal over the accrual period."""
        return self.nominal * self.rate * self.accrual_period

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind.value,
            "date": self.payment_date.to_iso(),
            "amount": self.amount,
            "nominal": self.nominal,
            "rate": self.rate,
            "accrual_start": self.accrual_start.to_iso(),
            "accrual_end": self.accrual_end.to_iso(),
            "day_count": self.day_count.value,
        }


@dataclass(frozen=True)
class PrincipalPayment:
    """Repayment of principal on a given date.

    Attributes:
        amount: Cash amount repaid
        payment_date: Date of the repayment
        kind: AMORTIZING_PAYMENT for intermediate steps, REDEMPTION for the last
    """

    amount: float
    payment_date: Date
    kind: CashFlowType = CashFlowType.REDEMPTION

    def __post_init__(self) -> None:
        """Validate the variant tag."""
        if self.kind not in (CashFlowType.AMORTIZING_PAYMENT, CashFlowType.REDEMPTION):
            raise CashFlowShapeError(
                "Principal payment must be an amortizing payment or a redemption",
                context={"cashflow_type": self.kind},
            )

    @property
    def date(self) -> Date:
        return self.payment_date

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind.value,
            "date": self.payment_date.to_iso(),
            "amount": self.amount,
        }


CashFlow: TypeAlias = FixedRateCoupon | PrincipalPayment
Leg: TypeAlias = tuple[CashFlow, ...]


def is_coupon(cashflow: CashFlow) -> bool:
    """Whether the cash flow is an interest payment."""
    return cashflow.kind == CashFlowType.COUPON


def as_fixed_rate_coupon(cashflow: CashFlow) -> FixedRateCoupon:
    """Return the fixed-rate coupon view of a cash flow.

    Raises:
        CashFlowShapeError: If the cash flow is not a fixed-rate coupon
    """
    if cashflow.kind != CashFlowType.COUPON or not isinstance(cashflow, FixedRateCoupon):
        raise CashFlowShapeError(
            "Coupon input is not a fixed rate coupon",
            context={"cashflow_type": cashflow.kind.value, "date": cashflow.date.to_iso()},
        )
    return cashflow


def sort_cashflows(cashflows: list[CashFlow] | Leg) -> Leg:
    """Order cash flows by payment date.

    The sort is stable, so on a shared date principal payments appended after
    the coupons stay after them.
    """
    return tuple(sorted(cashflows, key=lambda cf: cf.date))
