"""Tests for day count conventions."""

import pytest

from jamort.core.time import Date
from jamort.core.types import DayCountConvention
from jamort.exceptions import ConventionError
from jamort.utilities.calendars import MondayToFridayCalendar
from jamort.utilities.conventions import year_fraction


class TestYearFraction:
    """Test year_fraction for each convention."""

    def test_30360_half_year(self):
        assert year_fraction(Date(2024, 1, 15), Date(2024, 7, 15), DayCountConvention.B30360) == 0.5

    def test_30360_end_of_month_rules(self):
        """D2=31 only becomes 30 when D1 is 30 or 31."""
        assert year_fraction(
            Date(2024, 1, 30), Date(2024, 3, 31), DayCountConvention.B30360
        ) == pytest.approx(60 / 360)
        assert year_fraction(
            Date(2024, 1, 15), Date(2024, 3, 31), DayCountConvention.B30360
        ) == pytest.approx(76 / 360)

    def test_30e360(self):
        assert year_fraction(
            Date(2024, 1, 15), Date(2024, 3, 31), DayCountConvention.E30360
        ) == pytest.approx(75 / 360)
        assert year_fraction(
            Date(2024, 1, 31), Date(2024, 3, 31), DayCountConvention.E30360
        ) == pytest.approx(60 / 360)

    def test_actual_360(self):
        assert year_fraction(
            Date(2024, 1, 1), Date(2024, 7, 1), DayCountConvention.A360
        ) == pytest.approx(182 / 360)

    def test_actual_365(self):
        assert year_fraction(Date(2023, 1, 1), Date(2024, 1, 1), DayCountConvention.A365) == 1.0

    def test_actual_actual_full_year(self):
        assert year_fraction(Date(2024, 1, 1), Date(2025, 1, 1), DayCountConvention.AA) == 1.0

    def test_actual_actual_across_leap_year(self):
        expected = 184 / 365 + 182 / 366
        assert year_fraction(
            Date(2023, 7, 1), Date(2024, 7, 1), DayCountConvention.AA
        ) == pytest.approx(expected)

    def test_business_252(self):
        assert year_fraction(
            Date(2024, 1, 1), Date(2024, 1, 8), DayCountConvention.BUS252, MondayToFridayCalendar()
        ) == pytest.approx(5 / 252)

    def test_reversed_dates_are_negative(self):
        assert year_fraction(
            Date(2024, 7, 15), Date(2024, 1, 15), DayCountConvention.B30360
        ) == pytest.approx(-0.5)

    def test_same_date_is_zero(self):
        for convention in DayCountConvention:
            assert year_fraction(Date(2024, 3, 1), Date(2024, 3, 1), convention) == 0.0

    def test_accepts_value_string(self):
        assert year_fraction(Date(2024, 1, 15), Date(2025, 1, 15), "30360") == 1.0

    def test_unsupported_convention(self):
        with pytest.raises(ConventionError, match="Unsupported day count convention"):
            year_fraction(Date(2024, 1, 1), Date(2025, 1, 1), "ACT/999")
