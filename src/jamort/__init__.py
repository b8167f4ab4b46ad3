"""JAMORT: amortizing fixed-rate bond cash flows in Python and JAX.

This package builds amortizing fixed-rate bonds, either from an explicit
notional profile or as sinking-fund bonds whose principal is retired so that
coupon plus principal is level across payment dates. The sinking-fund
balance curves are also available as JIT-compiled JAX functions.

Basic usage:
    >>> import jamort
    >>> print(jamort.__version__)
    0.1.0
    >>> bond = jamort.build_sinking_fund_bond(
    ...     0, "NO_CALENDAR", 1000.0, "2024-01-15", "5Y", "annual", 0.05, "30360"
    ... )
    >>> len(bond.redemptions)
    5
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"

# Import core exceptions for convenient access
from jamort.exceptions import (
    CashFlowShapeError,
    ConfigurationError,
    ContractValidationError,
    ConventionError,
    DateTimeError,
    DegenerateScheduleError,
    IncompatiblePeriodError,
    JamortException,
    NumericDegeneracyError,
    PeriodComparisonError,
    ScheduleGenerationError,
)
from jamort.instruments import (
    AmortizingFixedRateBond,
    build_amortizing_bond,
    build_sinking_fund_bond,
    sinking_notionals,
    sinking_redemptions,
    sinking_schedule,
)
from jamort.core.period import is_sub_period
from jamort.logging_config import configure_logging, get_logger

# Public API
__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Exceptions
    "JamortException",
    "CashFlowShapeError",
    "ConfigurationError",
    "ContractValidationError",
    "ConventionError",
    "DateTimeError",
    "DegenerateScheduleError",
    "IncompatiblePeriodError",
    "NumericDegeneracyError",
    "PeriodComparisonError",
    "ScheduleGenerationError",
    # Construction
    "AmortizingFixedRateBond",
    "build_amortizing_bond",
    "build_sinking_fund_bond",
    "is_sub_period",
    "sinking_notionals",
    "sinking_redemptions",
    "sinking_schedule",
    # Logging
    "configure_logging",
    "get_logger",
]
