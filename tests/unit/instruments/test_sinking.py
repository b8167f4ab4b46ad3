"""Unit tests for the sinking-fund generators."""

import math

import pytest

from jamort.core.period import Period
from jamort.core.time import Date
from jamort.core.types import Frequency, TimeUnit
from jamort.exceptions import (
    ContractValidationError,
    IncompatiblePeriodError,
    NumericDegeneracyError,
)
from jamort.instruments.sinking import (
    sinking_notionals,
    sinking_periods,
    sinking_redemptions,
    sinking_schedule,
)
from jamort.utilities.math import annuity_amount


class TestSinkingPeriods:
    """Test resolution of the number of sinking periods."""

    @pytest.mark.parametrize(
        ("frequency", "count"),
        [
            (Frequency.ANNUAL, 5),
            (Frequency.SEMIANNUAL, 10),
            (Frequency.EVERY_FOURTH_MONTH, 15),
            (Frequency.QUARTERLY, 20),
            (Frequency.MONTHLY, 60),
        ],
    )
    def test_five_years(self, five_years, frequency, count):
        assert sinking_periods(five_years, frequency) == count

    @pytest.mark.parametrize(
        "frequency",
        [
            Frequency.WEEKLY,
            Frequency.BIWEEKLY,
            Frequency.DAILY,
            Frequency.ONCE,
            Frequency.OTHER_FREQUENCY,
        ],
    )
    def test_incompatible(self, five_years, frequency):
        with pytest.raises(IncompatiblePeriodError) as exc_info:
            sinking_periods(five_years, frequency)
        assert exc_info.value.context == {"frequency": frequency.name, "tenor": "5Y"}

    def test_quarterly_does_not_tile_thirteen_months(self):
        with pytest.raises(IncompatiblePeriodError, match="incompatible"):
            sinking_periods(Period(13, TimeUnit.MONTHS), Frequency.QUARTERLY)


class TestSinkingNotionals:
    """Test the sinking-fund notional curve."""

    def test_five_year_annual(self, start_date, five_years, sinking_curve):
        notionals = sinking_notionals(start_date, five_years, Frequency.ANNUAL, 0.05, 1000.0)
        assert len(notionals) == 6
        assert notionals[0] == 1000.0
        assert notionals[-1] == 0.0
        assert notionals == pytest.approx(sinking_curve, rel=1e-7)
        assert all(a > b for a, b in zip(notionals, notionals[1:]))

    def test_level_payments(self, start_date, five_years):
        """Interest on the balance plus principal repaid equals the annuity payment."""
        notionals = sinking_notionals(start_date, five_years, Frequency.QUARTERLY, 0.06, 1e6)
        payment = annuity_amount(1e6, 0.015, 20)
        for before, after in zip(notionals, notionals[1:]):
            assert before * 0.015 + (before - after) == pytest.approx(payment, rel=1e-10)

    def test_pure(self, start_date, five_years):
        first = sinking_notionals(start_date, five_years, Frequency.MONTHLY, 0.04, 500.0)
        second = sinking_notionals(start_date, five_years, Frequency.MONTHLY, 0.04, 500.0)
        assert first == second

    def test_negative_coupon(self, start_date, five_years):
        notionals = sinking_notionals(start_date, five_years, Frequency.ANNUAL, -0.02, 1000.0)
        assert all(math.isfinite(n) for n in notionals)
        assert notionals[-1] == 0.0

    def test_incompatible_frequency(self, start_date, five_years):
        with pytest.raises(IncompatiblePeriodError):
            sinking_notionals(start_date, five_years, Frequency.WEEKLY, 0.05, 1000.0)

    def test_single_period(self, start_date):
        with pytest.raises(NumericDegeneracyError, match="at least two periods"):
            sinking_notionals(
                start_date, Period(1, TimeUnit.YEARS), Frequency.ANNUAL, 0.05, 1000.0
            )

    def test_zero_coupon(self, start_date, five_years):
        with pytest.raises(NumericDegeneracyError, match="non-zero"):
            sinking_notionals(start_date, five_years, Frequency.ANNUAL, 0.0, 1000.0)

    def test_coupon_below_machine_precision(self, start_date, five_years):
        """A rate that vanishes against 1.0 is reported, not divided by."""
        with pytest.raises(NumericDegeneracyError, match="too small") as exc_info:
            sinking_notionals(start_date, five_years, Frequency.ANNUAL, 1e-17, 1000.0)
        assert exc_info.value.context["n_periods"] == 5
        assert exc_info.value.context["total_value"] == 1.0

    def test_growth_factor_overflow(self, start_date, five_years):
        with pytest.raises(NumericDegeneracyError, match="overflows"):
            sinking_notionals(start_date, five_years, Frequency.ANNUAL, 1e300, 1000.0)

    def test_coupon_at_or_below_minus_100_percent(self, start_date, five_years):
        with pytest.raises(NumericDegeneracyError, match="-100%"):
            sinking_notionals(start_date, five_years, Frequency.ANNUAL, -1.0, 1000.0)

    @pytest.mark.parametrize("face", [0.0, -1000.0])
    def test_non_positive_face(self, start_date, five_years, face):
        with pytest.raises(ContractValidationError, match="positive"):
            sinking_notionals(start_date, five_years, Frequency.ANNUAL, 0.05, face)


class TestSinkingRedemptions:
    """Test redemption percentages."""

    def test_sum_to_one_hundred(self, start_date, five_years):
        redemptions = sinking_redemptions(start_date, five_years, Frequency.ANNUAL, 0.05, 1000.0)
        assert len(redemptions) == 5
        assert sum(redemptions) == pytest.approx(100.0, rel=1e-12)
        assert redemptions[0] == pytest.approx(18.09747982, rel=1e-7)

    def test_increasing_principal(self, start_date, five_years):
        """With a positive coupon, later sinking payments retire more principal."""
        redemptions = sinking_redemptions(start_date, five_years, Frequency.SEMIANNUAL, 0.05, 1.0)
        assert all(a < b for a, b in zip(redemptions, redemptions[1:]))

    def test_reconstruct_notionals(self, start_date, five_years):
        notionals = sinking_notionals(start_date, five_years, Frequency.QUARTERLY, 0.03, 750.0)
        redemptions = sinking_redemptions(start_date, five_years, Frequency.QUARTERLY, 0.03, 750.0)
        balance = 750.0
        for expected, pct in zip(notionals[1:], redemptions):
            balance -= pct / 100 * 750.0
            assert balance == pytest.approx(expected, abs=1e-9)

    def test_inherits_errors(self, start_date, five_years):
        with pytest.raises(NumericDegeneracyError):
            sinking_redemptions(start_date, five_years, Frequency.ANNUAL, 0.0, 1000.0)


class TestSinkingSchedule:
    """Test the sinking-fund schedule builder."""

    def test_annual(self, start_date, five_years):
        schedule = sinking_schedule(start_date, five_years, Frequency.ANNUAL, "NO_CALENDAR")
        assert [d.year for d in schedule] == [2024, 2025, 2026, 2027, 2028, 2029]
        assert all(d.month == 1 and d.day == 15 for d in schedule)

    def test_unadjusted_on_weekends(self):
        # 2025-06-15 is a Sunday
        schedule = sinking_schedule(
            Date(2024, 6, 15), Period(2, TimeUnit.YEARS), Frequency.ANNUAL, "MONDAY_TO_FRIDAY"
        )
        assert schedule.dates == (Date(2024, 6, 15), Date(2025, 6, 15), Date(2026, 6, 15))

    def test_no_end_of_month_rolling(self):
        schedule = sinking_schedule(
            Date(2024, 1, 31), Period(1, TimeUnit.YEARS), Frequency.QUARTERLY, "NO_CALENDAR"
        )
        assert [d.to_iso() for d in schedule] == [
            "2024-01-31",
            "2024-04-30",
            "2024-07-31",
            "2024-10-31",
            "2025-01-31",
        ]
        assert schedule.end_of_month is False
