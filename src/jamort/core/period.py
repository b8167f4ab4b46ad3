"""Calendar periods and period arithmetic.

A period is a (length, unit) pair such as ``3M`` or ``5Y``. Periods expressed
in months or years have no fixed length in days, so two periods can only be
ordered exactly when their units are commensurable (months/years, days/weeks).
For any other pair the ordering is decided from the day-span estimates and
may be undecidable: ``1M`` and ``30D`` overlap and cannot be ordered.

This module also answers whether a short period tiles a longer one an exact
number of times, which is the precondition for generating a sinking-fund
notional curve.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import NamedTuple

import jax

from jamort.core.types import Frequency, TimeUnit
from jamort.exceptions import DateTimeError, PeriodComparisonError

_PERIOD_PATTERN = re.compile(r"^\s*(-?\d+)\s*([DWMQHY])\s*$")

# Quarter and half-year shorthands expand to months
_UNIT_ALIASES = {
    "D": (1, TimeUnit.DAYS),
    "W": (1, TimeUnit.WEEKS),
    "M": (1, TimeUnit.MONTHS),
    "Q": (3, TimeUnit.MONTHS),
    "H": (6, TimeUnit.MONTHS),
    "Y": (1, TimeUnit.YEARS),
}


@dataclass(frozen=True)
class Period:
    """Immutable calendar period.

    Attributes:
        length: Number of units (may be zero or negative)
        unit: Calendar unit

    Example:
        >>> Period(3, TimeUnit.MONTHS) * 4 == Period(1, TimeUnit.YEARS)
        True
        >>> Period.parse("2W") == Period(14, TimeUnit.DAYS)
        True
    """

    length: int
    unit: TimeUnit

    def __post_init__(self) -> None:
        """Validate the unit."""
        if not isinstance(self.unit, TimeUnit):
            raise ValueError(f"Period unit must be a TimeUnit, got {self.unit!r}")

    @classmethod
    def parse(cls, text: str) -> Period:
        """Parse period notation such as ``'5Y'``, ``'6M'``, ``'1Q'`` or ``'2W'``.

        Quarter (Q) and half-year (H) shorthands are expanded to months.

        Raises:
            DateTimeError: If the string is not valid period notation
        """
        match = _PERIOD_PATTERN.match(text.upper()) if isinstance(text, str) else None
        if not match:
            raise DateTimeError(
                "Invalid period format",
                context={"period": text, "expected": "N + one of D/W/M/Q/H/Y"},
            )
        number, unit_code = match.groups()
        multiplier, unit = _UNIT_ALIASES[unit_code]
        return cls(int(number) * multiplier, unit)

    @classmethod
    def from_frequency(cls, frequency: Frequency) -> Period:
        """Period between two events of the given frequency.

        Raises:
            ValueError: For ``Frequency.OTHER_FREQUENCY``, which has no period
        """
        frequency = Frequency(frequency)
        if frequency == Frequency.NO_FREQUENCY:
            return cls(0, TimeUnit.DAYS)
        if frequency == Frequency.ONCE:
            return cls(0, TimeUnit.YEARS)
        if frequency == Frequency.ANNUAL:
            return cls(1, TimeUnit.YEARS)
        if frequency in (
            Frequency.SEMIANNUAL,
            Frequency.EVERY_FOURTH_MONTH,
            Frequency.QUARTERLY,
            Frequency.BIMONTHLY,
            Frequency.MONTHLY,
        ):
            return cls(12 // frequency.value, TimeUnit.MONTHS)
        if frequency in (Frequency.EVERY_FOURTH_WEEK, Frequency.BIWEEKLY, Frequency.WEEKLY):
            return cls(52 // frequency.value, TimeUnit.WEEKS)
        if frequency == Frequency.DAILY:
            return cls(1, TimeUnit.DAYS)
        raise ValueError(f"Frequency {frequency.name} has no associated period")

    def frequency(self) -> Frequency:
        """Frequency whose event spacing equals this period.

        Returns ``Frequency.OTHER_FREQUENCY`` when no standard frequency fits.

        Example:
            >>> Period(3, TimeUnit.MONTHS).frequency()
            <Frequency.QUARTERLY: 4>
        """
        length = abs(self.length)
        if length == 0:
            return Frequency.ONCE if self.unit == TimeUnit.YEARS else Frequency.NO_FREQUENCY

        if self.unit == TimeUnit.YEARS:
            return Frequency.ANNUAL if length == 1 else Frequency.OTHER_FREQUENCY
        if self.unit == TimeUnit.MONTHS:
            if length <= 12 and 12 % length == 0:
                return Frequency(12 // length)
            return Frequency.OTHER_FREQUENCY
        if self.unit == TimeUnit.WEEKS:
            weekly = {1: Frequency.WEEKLY, 2: Frequency.BIWEEKLY, 4: Frequency.EVERY_FOURTH_WEEK}
            return weekly.get(length, Frequency.OTHER_FREQUENCY)
        return Frequency.DAILY if length == 1 else Frequency.OTHER_FREQUENCY

    def normalized(self) -> Period:
        """Equivalent period in the largest exact unit (``12M`` -> ``1Y``, ``14D`` -> ``2W``)."""
        if self.length == 0:
            return Period(0, TimeUnit.DAYS)
        if self.unit == TimeUnit.MONTHS and self.length % 12 == 0:
            return Period(self.length // 12, TimeUnit.YEARS)
        if self.unit == TimeUnit.DAYS and self.length % 7 == 0:
            return Period(self.length // 7, TimeUnit.WEEKS)
        return self

    def compare(self, other: Period) -> int | None:
        """Fallible three-way comparison.

        Returns:
            -1, 0 or 1 like a classic ``cmp``; None when the ordering is
            undecidable (e.g. ``1M`` against ``30D``).
        """
        less = _less_than(self, other)
        greater = _less_than(other, self)
        if less is None or greater is None:
            return None
        if less:
            return -1
        if greater:
            return 1
        return 0

    def try_equals(self, other: Period) -> bool | None:
        """Equality that reports undecidable comparisons as None instead of raising."""
        result = self.compare(other)
        if result is None:
            return None
        return result == 0

    def _strict_compare(self, other: Period) -> int:
        result = self.compare(other)
        if result is None:
            raise PeriodComparisonError(
                "Undecidable comparison between periods",
                context={"left": str(self), "right": str(other)},
            )
        return result

    def __eq__(self, other: object) -> bool:
        """Exact equality under period normalization.

        Raises:
            PeriodComparisonError: If the two periods cannot be compared
        """
        if not isinstance(other, Period):
            return NotImplemented
        return self._strict_compare(other) == 0

    def __lt__(self, other: Period) -> bool:
        return self._strict_compare(other) < 0

    def __le__(self, other: Period) -> bool:
        return self._strict_compare(other) <= 0

    def __gt__(self, other: Period) -> bool:
        return self._strict_compare(other) > 0

    def __ge__(self, other: Period) -> bool:
        return self._strict_compare(other) >= 0

    def __hash__(self) -> int:
        """Hash consistent with equality (equal periods share a normal form)."""
        normal = self.normalized()
        return hash((normal.length, normal.unit))

    def __mul__(self, n: int) -> Period:
        if not isinstance(n, int) or isinstance(n, bool):
            return NotImplemented
        return Period(self.length * n, self.unit)

    __rmul__ = __mul__

    def __neg__(self) -> Period:
        return Period(-self.length, self.unit)

    def __str__(self) -> str:
        return f"{self.length}{self.unit.value}"


# Register Period as a JAX pytree; the unit is static metadata
def _period_flatten(period: Period) -> tuple[tuple[int], TimeUnit]:
    """Flatten Period for JAX pytree registration."""
    return ((period.length,), period.unit)


def _period_unflatten(unit: TimeUnit, children: tuple[int]) -> Period:
    """Unflatten Period for JAX pytree registration."""
    return Period(children[0], unit)


jax.tree_util.register_pytree_node(Period, _period_flatten, _period_unflatten)


def days_min_max(period: Period) -> tuple[int, int]:
    """Closed interval of calendar days a period can span.

    Days -> [n, n], Weeks -> [7n, 7n], Months -> [28n, 31n], Years -> [365n, 366n].

    Example:
        >>> days_min_max(Period(2, TimeUnit.MONTHS))
        (56, 62)
    """
    n = period.length
    if period.unit == TimeUnit.DAYS:
        return n, n
    if period.unit == TimeUnit.WEEKS:
        return 7 * n, 7 * n
    if period.unit == TimeUnit.MONTHS:
        return 28 * n, 31 * n
    return 365 * n, 366 * n


def _less_than(p1: Period, p2: Period) -> bool | None:
    """Return whether p1 < p2, or None if that cannot be decided."""
    if p1.length == 0:
        return p2.length > 0
    if p2.length == 0:
        return p1.length < 0

    # Exact comparisons
    if p1.unit == p2.unit:
        return p1.length < p2.length
    if p1.unit == TimeUnit.MONTHS and p2.unit == TimeUnit.YEARS:
        return p1.length < 12 * p2.length
    if p1.unit == TimeUnit.YEARS and p2.unit == TimeUnit.MONTHS:
        return 12 * p1.length < p2.length
    if p1.unit == TimeUnit.DAYS and p2.unit == TimeUnit.WEEKS:
        return p1.length < 7 * p2.length
    if p1.unit == TimeUnit.WEEKS and p2.unit == TimeUnit.DAYS:
        return 7 * p1.length < p2.length

    # Inexact comparisons through the day spans
    p1_min, p1_max = sorted(days_min_max(p1))
    p2_min, p2_max = sorted(days_min_max(p2))
    if p1_max < p2_min:
        return True
    if p1_min > p2_max:
        return False
    return None


class SubPeriodMatch(NamedTuple):
    """Outcome of :func:`is_sub_period`; unpacks as ``(compatible, count)``."""

    compatible: bool
    count: int


def is_sub_period(sub_period: Period, super_period: Period) -> SubPeriodMatch:
    """Check whether an integer number of ``sub_period`` exactly tiles ``super_period``.

    The search range for the multiplier comes from the day-span estimates,
    which always contain the true answer when one exists. Each candidate is
    then checked with exact period equality. Incompatibility is a normal
    outcome and is reported, not raised.

    Args:
        sub_period: Short period, e.g. the sinking frequency ``3M``
        super_period: Long period, e.g. the bond tenor ``5Y``

    Returns:
        SubPeriodMatch(True, count) on an exact tiling, otherwise
        SubPeriodMatch(False, 0). Non-positive periods never tile.

    Example:
        >>> is_sub_period(Period(3, TimeUnit.MONTHS), Period(5, TimeUnit.YEARS))
        SubPeriodMatch(compatible=True, count=20)
        >>> is_sub_period(Period(5, TimeUnit.MONTHS), Period(1, TimeUnit.YEARS)).compatible
        False
    """
    if sub_period.length <= 0 or super_period.length <= 0:
        return SubPeriodMatch(False, 0)

    super_min, super_max = days_min_max(super_period)
    sub_min, sub_max = days_min_max(sub_period)

    low_ratio = math.floor(super_min / sub_max)
    high_ratio = math.ceil(super_max / sub_min)

    for i in range(low_ratio, high_ratio + 1):
        # An undecidable comparison (None) is not a match
        if (sub_period * i).try_equals(super_period):
            return SubPeriodMatch(True, i)

    return SubPeriodMatch(False, 0)
