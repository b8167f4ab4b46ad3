"""Custom exception classes for amortizing-bond construction errors.

This module defines the exception hierarchy used throughout the jamort package.
All exceptions inherit from JamortException, which stores a context dictionary
describing the inputs that caused the failure.
"""

from typing import Any


class JamortException(Exception):
    """Base exception for all jamort errors.

    Attributes:
        message: Human-readable error description
        context: Additional context information about the error
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description
            context: Optional dictionary with additional error context
                    (e.g., tenor, frequency, coupon_rate)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class IncompatiblePeriodError(JamortException):
    """Exception raised when a sinking frequency does not tile the bond tenor.

    The context always carries the offending ``frequency`` and ``tenor`` so
    the caller can correct the input.

    Example:
        >>> raise IncompatiblePeriodError(
        ...     "Bond frequency is incompatible with the maturity tenor",
        ...     context={"frequency": "5M", "tenor": "1Y"}
        ... )
    """


class DegenerateScheduleError(JamortException):
    """Exception raised when a bond would be constructed without cash flows.

    This usually means the schedule is empty (zero-length tenor) or no
    notionals/coupon rates were supplied.
    """


class CashFlowShapeError(JamortException):
    """Exception raised when a cash flow is not of the expected variant.

    Example:
        >>> raise CashFlowShapeError(
        ...     "Coupon input is not a fixed rate coupon",
        ...     context={"cashflow_type": "REDEMPTION"}
        ... )
    """


class NumericDegeneracyError(JamortException):
    """Exception raised when the sinking-fund curve cannot be computed reliably.

    This exception should be raised when:
    - Fewer than two sinking periods are available
    - The per-period coupon rate is exactly zero
    - The per-period growth factor (1 + c) is not positive
    - A computed notional is NaN or infinite
    """


class PeriodComparisonError(JamortException):
    """Exception raised for strict comparisons between undecidable periods.

    A month has between 28 and 31 days, so e.g. ``1M`` and ``30D`` cannot be
    ordered. Use ``Period.compare``/``Period.try_equals`` for a fallible
    comparison instead.
    """


class ScheduleGenerationError(JamortException):
    """Exception raised for errors during schedule generation.

    This exception should be raised when:
    - Start date is not before end date
    - The schedule tenor is zero or negative
    - Generation rule is not supported

    Example:
        >>> raise ScheduleGenerationError(
        ...     "Schedule tenor must be positive",
        ...     context={"tenor": "0M", "start": "2024-01-01"}
        ... )
    """


class ContractValidationError(JamortException):
    """Exception raised for invalid instrument terms.

    This exception should be raised when:
    - Required terms are missing or out of range
    - Coupon notionals increase along the leg
    - Term combinations are inconsistent
    """


class DateTimeError(JamortException):
    """Exception raised for date or period parsing errors.

    Example:
        >>> raise DateTimeError(
        ...     "Unable to parse ISO date string",
        ...     context={"date_string": "2024-13-45", "format": "ISO8601"}
        ... )
    """


class ConventionError(JamortException):
    """Exception raised for day count or calendar convention errors.

    Example:
        >>> raise ConventionError(
        ...     "Unsupported day count convention",
        ...     context={"convention": "ACT/999", "supported": ["30360", "A365"]}
        ... )
    """


class ConfigurationError(JamortException):
    """Exception raised for configuration and initialization errors.

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid logging configuration",
        ...     context={"log_level": "INVALID", "valid_levels": ["DEBUG", "INFO"]}
        ... )
    """
