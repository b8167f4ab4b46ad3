#!/usr/bin/env python3
"""
Amortizing and Sinking-Fund Bond Example
========================================

This example shows how to build amortizing fixed-rate bonds with JAMORT,
either from an explicit notional profile or as a sinking fund whose
principal is retired so that coupon plus principal is level on every
payment date.

What You'll Learn:
-----------------
1. How to build a sinking-fund bond from its terms
2. How to read the payment table and the notional schedule
3. How to build a bond from explicit notionals and redemption prices
4. How incompatible frequencies are reported
5. How to evaluate many sinking-fund curves at once with JAX

Example: $1,000,000 at 6% for 5 years, sinking quarterly
"""

import jax.numpy as jnp

from jamort import (
    IncompatiblePeriodError,
    build_amortizing_bond,
    build_sinking_fund_bond,
    is_sub_period,
)
from jamort.core.period import Period
from jamort.core.time import Date
from jamort.core.types import BusinessDayConvention, DayCountConvention, TimeUnit
from jamort.utilities.math import sinking_fund_balances
from jamort.utilities.schedules import generate_schedule


def example_1_sinking_fund_bond():
    """
    Example 1: Sinking-Fund Bond
    ----------------------------
    Build a 5-year quarterly sinking fund and print its payment table.

    Bond Details:
    - Face: $1,000,000
    - Coupon: 6% (0.06), paid quarterly
    - Day Count: 30/360
    - Calendar: Monday to Friday, payments on the following business day
    """
    print("=" * 80)
    print("Example 1: Sinking-Fund Bond - $1,000,000 at 6% for 5 years")
    print("=" * 80)

    bond = build_sinking_fund_bond(
        settlement_days=2,
        calendar="MONDAY_TO_FRIDAY",
        face_amount=1_000_000.0,
        start_date="2024-03-30",
        tenor="5Y",
        frequency="quarterly",
        coupon=0.06,
        day_count=DayCountConvention.B30360,
        payment_convention=BusinessDayConvention.FOLLOWING,
    )

    print(f"\nMaturity: {bond.maturity_date}")
    print(f"Sinking payments: {len(bond.redemptions)}")
    print(f"\n{'Date':<12} {'Notional':>14} {'Interest':>12} {'Principal':>12} {'Total':>12}")
    print("-" * 66)
    for row in bond.payment_table():
        print(
            f"{row['date']:<12} {row['notional']:>14,.2f} {row['interest']:>12,.2f} "
            f"{row['principal']:>12,.2f} {row['total']:>12,.2f}"
        )

    # Notional is looked up with the payment on a step date already made
    print(f"\nNotional on 2026-05-01: {bond.notional(Date(2026, 5, 1)):,.2f}")
    print(f"Settlement for a 2026-05-01 trade: {bond.settlement_date(Date(2026, 5, 1))}")
    print()


def example_2_explicit_notionals():
    """
    Example 2: Explicit Notional Profile
    ------------------------------------
    A 3-year annual bond stepping down from 300 to 100, with a premium on
    the first redemption.
    """
    print("=" * 80)
    print("Example 2: Explicit Notionals with Redemption Premium")
    print("=" * 80)

    schedule = generate_schedule(
        Date(2024, 1, 15),
        Date(2027, 1, 15),
        Period(1, TimeUnit.YEARS),
        calendar="MONDAY_TO_FRIDAY",
    )
    bond = build_amortizing_bond(
        settlement_days=1,
        notionals=[300.0, 200.0, 100.0],
        schedule=schedule,
        coupons=[0.03, 0.035, 0.04],
        day_count=DayCountConvention.B30360,
        payment_convention=BusinessDayConvention.FOLLOWING,
        redemptions=[101.0, 100.0],
    )

    print(f"\n{'Date':<12} {'Kind':<20} {'Amount':>10}")
    print("-" * 44)
    for cashflow in bond.cashflows:
        print(f"{cashflow.date.to_iso():<12} {cashflow.kind.value:<20} {cashflow.amount:>10.2f}")
    print()


def example_3_incompatible_frequency():
    """
    Example 3: Incompatible Frequency
    ---------------------------------
    A 7-month sinking period does not evenly divide 5 years.
    """
    print("=" * 80)
    print("Example 3: Incompatible Frequency")
    print("=" * 80)

    print(f"\n3M in 5Y: {is_sub_period(Period(3, TimeUnit.MONTHS), Period(5, TimeUnit.YEARS))}")
    print(f"7M in 5Y: {is_sub_period(Period(7, TimeUnit.MONTHS), Period(5, TimeUnit.YEARS))}")

    try:
        build_sinking_fund_bond(0, "NO_CALENDAR", 1000.0, "2024-01-15", "5Y", "7M", 0.05, "30360")
    except IncompatiblePeriodError as exc:
        print(f"Construction failed: {exc}")
    print()


def example_4_batch_curves():
    """
    Example 4: Batch Sinking-Fund Curves with JAX
    ---------------------------------------------
    Evaluate the 20-period balance curve for several coupon rates at once.
    """
    print("=" * 80)
    print("Example 4: Batch Sinking-Fund Curves")
    print("=" * 80)

    annual_rates = jnp.array([0.02, 0.04, 0.06, 0.08])
    curves = sinking_fund_balances(annual_rates / 4, jnp.full(4, 100.0), n_periods=20)

    print(f"\n{'Coupon':>8} {'After 1Y':>10} {'After 3Y':>10} {'Maturity':>10}")
    print("-" * 42)
    for rate, curve in zip(annual_rates, curves):
        print(f"{float(rate):>8.2%} {float(curve[4]):>10.2f} {float(curve[12]):>10.2f} "
              f"{float(curve[-1]):>10.2f}")
    print()


if __name__ == "__main__":
    example_1_sinking_fund_bond()
    example_2_explicit_notionals()
    example_3_incompatible_frequency()
    example_4_batch_curves()
