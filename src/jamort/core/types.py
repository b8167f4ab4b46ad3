"""Type definitions and enumerations for amortizing-bond construction.

This module defines the enumerations and type aliases used throughout jamort.
String enumerations inherit from str for JSON serializability and easy
comparison; frequencies are integers because the per-period coupon rate is
the annual rate divided by the frequency value.
"""

from enum import Enum
from typing import TypeAlias

# Type aliases for clarity
Amount: TypeAlias = float  # Monetary amount
Rate: TypeAlias = float  # Interest rate (decimal, e.g., 0.05 for 5%)
Percentage: TypeAlias = float  # Percentage scaled by 100 (e.g., 25.0 for 25%)
Tenor: TypeAlias = str  # Period notation: N + unit (e.g., '5Y', '6M', '2W')


class TimeUnit(str, Enum):
    """Calendar units a period can be expressed in."""

    DAYS = "D"
    WEEKS = "W"
    MONTHS = "M"
    YEARS = "Y"


class Frequency(int, Enum):
    """Number of events per year.

    The integer value is used directly when converting an annual rate to a
    per-period rate (``rate / frequency``).
    """

    NO_FREQUENCY = -1  # null frequency
    ONCE = 0  # only once, e.g., a zero-coupon
    ANNUAL = 1  # once a year
    SEMIANNUAL = 2  # twice a year
    EVERY_FOURTH_MONTH = 3  # every fourth month
    QUARTERLY = 4  # every third month
    BIMONTHLY = 6  # every second month
    MONTHLY = 12  # once a month
    EVERY_FOURTH_WEEK = 13  # every fourth week
    BIWEEKLY = 26  # every second week
    WEEKLY = 52  # once a week
    DAILY = 365  # once a day
    OTHER_FREQUENCY = 999  # some other unknown frequency


class DayCountConvention(str, Enum):
    """Day count conventions for year fraction calculation.

    References:
        ISDA 2006 Definitions, Section 4.16
    """

    AA = "AA"  # Actual/Actual ISDA
    A360 = "A360"  # Actual/360
    A365 = "A365"  # Actual/365 Fixed
    E30360 = "30E360"  # 30E/360 (Eurobond basis)
    B30360 = "30360"  # 30/360 US (Bond Basis)
    BUS252 = "BUS252"  # Business/252


class BusinessDayConvention(str, Enum):
    """Business day adjustment conventions.

    Defines how dates are adjusted when they fall on non-business days.
    Modified conventions never cross a month boundary.
    """

    UNADJUSTED = "U"  # No adjustment
    FOLLOWING = "F"  # First business day after
    MODIFIED_FOLLOWING = "MF"  # Following unless it crosses into next month
    PRECEDING = "P"  # First business day before
    MODIFIED_PRECEDING = "MP"  # Preceding unless it crosses into previous month


class Calendar(str, Enum):
    """Business day calendar definitions.

    Defines which days are considered business days (non-holidays).
    """

    NO_CALENDAR = "NO_CALENDAR"  # No holidays (all days are business days)
    MONDAY_TO_FRIDAY = "MONDAY_TO_FRIDAY"  # Weekends only
    CUSTOM = "CUSTOM"  # User-defined calendar


class DateGeneration(str, Enum):
    """Direction in which schedule dates are generated."""

    BACKWARD = "BACKWARD"  # From termination date to effective date
    FORWARD = "FORWARD"  # From effective date to termination date


class CashFlowType(str, Enum):
    """Cash flow variants carried by a bond leg."""

    COUPON = "COUPON"  # Fixed-rate interest payment
    AMORTIZING_PAYMENT = "AMORTIZING_PAYMENT"  # Intermediate principal repayment
    REDEMPTION = "REDEMPTION"  # Final principal repayment
