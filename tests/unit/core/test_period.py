"""Unit tests for calendar periods and the sub-period resolver."""

import jax
import pytest

from jamort.core.period import Period, SubPeriodMatch, days_min_max, is_sub_period
from jamort.core.types import Frequency, TimeUnit
from jamort.exceptions import DateTimeError, PeriodComparisonError

D, W, M, Y = TimeUnit.DAYS, TimeUnit.WEEKS, TimeUnit.MONTHS, TimeUnit.YEARS


class TestPeriodParsing:
    """Test Period.parse."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("5Y", Period(5, Y)),
            ("6M", Period(6, M)),
            ("6m", Period(6, M)),
            ("2W", Period(2, W)),
            ("30D", Period(30, D)),
            ("1Q", Period(3, M)),
            ("2H", Period(12, M)),
            (" 3M ", Period(3, M)),
        ],
    )
    def test_parse_valid(self, text, expected):
        """Period notation is parsed into length and unit."""
        period = Period.parse(text)
        assert period.length == expected.length
        assert period.unit == expected.unit

    @pytest.mark.parametrize("text", ["", "Y", "5X", "1.5Y", "five years"])
    def test_parse_invalid(self, text):
        """Invalid notation raises DateTimeError."""
        with pytest.raises(DateTimeError):
            Period.parse(text)

    def test_str(self):
        assert str(Period(5, Y)) == "5Y"
        assert str(Period(-3, M)) == "-3M"

    def test_invalid_unit(self):
        with pytest.raises(ValueError, match="TimeUnit"):
            Period(1, "Y")


class TestPeriodFrequency:
    """Test conversions between periods and frequencies."""

    @pytest.mark.parametrize(
        ("frequency", "expected"),
        [
            (Frequency.ANNUAL, Period(1, Y)),
            (Frequency.SEMIANNUAL, Period(6, M)),
            (Frequency.EVERY_FOURTH_MONTH, Period(4, M)),
            (Frequency.QUARTERLY, Period(3, M)),
            (Frequency.BIMONTHLY, Period(2, M)),
            (Frequency.MONTHLY, Period(1, M)),
            (Frequency.EVERY_FOURTH_WEEK, Period(4, W)),
            (Frequency.BIWEEKLY, Period(2, W)),
            (Frequency.WEEKLY, Period(1, W)),
            (Frequency.DAILY, Period(1, D)),
        ],
    )
    def test_from_frequency_round_trip(self, frequency, expected):
        """Each standard frequency maps to its period and back."""
        period = Period.from_frequency(frequency)
        assert (period.length, period.unit) == (expected.length, expected.unit)
        assert period.frequency() == frequency

    def test_from_frequency_degenerate(self):
        """ONCE and NO_FREQUENCY map to zero-length periods."""
        assert Period.from_frequency(Frequency.ONCE).length == 0
        assert Period.from_frequency(Frequency.NO_FREQUENCY).length == 0

    def test_from_other_frequency_rejected(self):
        with pytest.raises(ValueError, match="OTHER_FREQUENCY"):
            Period.from_frequency(Frequency.OTHER_FREQUENCY)

    @pytest.mark.parametrize("period", [Period(5, M), Period(2, Y), Period(3, W), Period(2, D)])
    def test_non_standard_periods(self, period):
        assert period.frequency() == Frequency.OTHER_FREQUENCY

    def test_zero_period_frequency(self):
        assert Period(0, Y).frequency() == Frequency.ONCE
        assert Period(0, D).frequency() == Frequency.NO_FREQUENCY


class TestPeriodComparison:
    """Test exact and undecidable period comparisons."""

    def test_months_and_years_exact(self):
        assert Period(12, M) == Period(1, Y)
        assert Period(18, M) > Period(1, Y)
        assert Period(11, M) < Period(1, Y)

    def test_days_and_weeks_exact(self):
        assert Period(14, D) == Period(2, W)
        assert Period(13, D) < Period(2, W)

    def test_zero_lengths_compare_equal(self):
        """Zero periods are equal regardless of unit."""
        assert Period(0, D) == Period(0, Y)
        assert hash(Period(0, D)) == hash(Period(0, Y))

    def test_decidable_inexact(self):
        """Non-overlapping day spans can be ordered."""
        assert Period(1, M) < Period(40, D)
        assert Period(1, Y) > Period(50, W)
        assert Period(1, M).compare(Period(27, D)) == 1

    def test_undecidable_compare_returns_none(self):
        """1M spans 28-31 days, so it cannot be ordered against 30D."""
        assert Period(1, M).compare(Period(30, D)) is None
        assert Period(1, M).try_equals(Period(30, D)) is None

    def test_undecidable_strict_equality_raises(self):
        with pytest.raises(PeriodComparisonError):
            Period(1, M) == Period(30, D)  # noqa: B015

    def test_undecidable_ordering_raises(self):
        with pytest.raises(PeriodComparisonError):
            Period(1, Y) < Period(365, D)  # noqa: B015

    def test_equal_periods_hash_equal(self):
        assert hash(Period(24, M)) == hash(Period(2, Y))
        assert len({Period(12, M), Period(1, Y), Period(7, D), Period(1, W)}) == 2

    def test_not_equal_to_other_types(self):
        assert Period(1, Y) != "1Y"


class TestPeriodArithmetic:
    """Test multiplication and negation."""

    def test_multiply(self):
        assert Period(4, M) * 3 == Period(1, Y)
        assert 3 * Period(4, M) == Period(1, Y)

    def test_negate(self):
        assert -Period(3, M) == Period(-3, M)

    def test_multiply_by_float_rejected(self):
        with pytest.raises(TypeError):
            Period(3, M) * 1.5

    def test_normalized(self):
        assert Period(24, M).normalized().unit == Y
        assert Period(21, D).normalized().unit == W
        assert Period(5, M).normalized().unit == M


class TestPeriodPytree:
    """Test JAX pytree registration."""

    def test_leaves(self):
        assert jax.tree_util.tree_leaves(Period(3, M)) == [3]

    def test_tree_map_keeps_unit(self):
        doubled = jax.tree_util.tree_map(lambda x: x * 2, Period(3, M))
        assert doubled.unit == M
        assert doubled.length == 6


class TestDaysMinMax:
    """Test day-span estimates."""

    @pytest.mark.parametrize(
        ("period", "expected"),
        [
            (Period(3, D), (3, 3)),
            (Period(2, W), (14, 14)),
            (Period(2, M), (56, 62)),
            (Period(5, Y), (1825, 1830)),
        ],
    )
    def test_spans(self, period, expected):
        assert days_min_max(period) == expected


class TestIsSubPeriod:
    """Test the sub-period resolver."""

    @pytest.mark.parametrize(
        ("sub", "sup", "count"),
        [
            (Period(1, Y), Period(5, Y), 5),
            (Period(6, M), Period(5, Y), 10),
            (Period(3, M), Period(5, Y), 20),
            (Period(4, M), Period(1, Y), 3),
            (Period(4, M), Period(5, Y), 15),
            (Period(1, M), Period(1, Y), 12),
            (Period(1, W), Period(4, W), 4),
            (Period(1, D), Period(2, W), 14),
            (Period(5, Y), Period(5, Y), 1),
        ],
    )
    def test_compatible(self, sub, sup, count):
        assert is_sub_period(sub, sup) == SubPeriodMatch(True, count)

    @pytest.mark.parametrize(
        ("sub", "sup"),
        [
            (Period(5, M), Period(1, Y)),
            (Period(7, M), Period(5, Y)),
            (Period(1, W), Period(1, Y)),
            (Period(2, Y), Period(5, Y)),
            (Period(6, M), Period(3, M)),
        ],
    )
    def test_incompatible(self, sub, sup):
        compatible, count = is_sub_period(sub, sup)
        assert compatible is False
        assert count == 0

    def test_undecidable_candidates_are_not_matches(self):
        """1D against 1Y only meets undecidable comparisons, so no match."""
        assert is_sub_period(Period(1, D), Period(1, Y)) == (False, 0)
        assert is_sub_period(Period(2, W), Period(1, M)) == (False, 0)

    @pytest.mark.parametrize(
        ("sub", "sup"),
        [
            (Period(0, M), Period(1, Y)),
            (Period(3, M), Period(0, Y)),
            (Period(-3, M), Period(1, Y)),
            (Period(3, M), Period(-1, Y)),
        ],
    )
    def test_non_positive_periods(self, sub, sup):
        """Zero and negative lengths report incompatibility instead of failing."""
        assert is_sub_period(sub, sup) == (False, 0)

    def test_result_fields(self):
        result = is_sub_period(Period(3, M), Period(1, Y))
        assert result.compatible is True
        assert result.count == 4
