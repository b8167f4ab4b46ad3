"""Validated terms for sinking-fund bonds.

This module provides the SinkingFundTerms model, which collects and
validates the inputs of a sinking-fund bond using Pydantic. Inputs may be
given in their natural types or as strings (``"5Y"`` tenors, ISO dates,
frequency and convention names), as they arrive from configuration files or
the command line.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from jamort.core.period import Period
from jamort.core.time import Date
from jamort.core.types import BusinessDayConvention, DayCountConvention, Frequency
from jamort.exceptions import JamortException
from jamort.utilities.calendars import HolidayCalendar, NoHolidayCalendar, get_calendar


class SinkingFundTerms(BaseModel):
    """Terms of a sinking-fund bond.

    Example:
        >>> terms = SinkingFundTerms(
        ...     face_amount=1000.0,
        ...     start_date="2024-01-15",
        ...     tenor="5Y",
        ...     frequency="annual",
        ...     coupon=0.05,
        ... )
        >>> str(terms.maturity_date)
        '2029-01-15'
    """

    model_config = {"arbitrary_types_allowed": True, "validate_assignment": True}

    settlement_days: int = Field(0, ge=0, description="Business days from trade to settlement")
    calendar: HolidayCalendar = Field(
        default_factory=NoHolidayCalendar, description="Calendar for settlement and payments"
    )
    face_amount: float = Field(..., gt=0.0, description="Face amount at issue")
    start_date: Date = Field(..., description="Accrual start of the first period")
    tenor: Period = Field(..., description="Time to maturity, e.g. 5Y")
    frequency: Frequency = Field(..., description="Coupon and sinking frequency")
    coupon: float = Field(..., description="Annual coupon rate (decimal)")
    day_count: DayCountConvention = Field(
        DayCountConvention.AA, description="Day count for coupon accrual"
    )
    payment_convention: BusinessDayConvention = Field(
        BusinessDayConvention.FOLLOWING, description="Adjustment of coupon payment dates"
    )
    issue_date: Date | None = Field(None, description="Issue date (defaults to start date)")

    @field_validator("calendar", mode="before")
    @classmethod
    def parse_calendar(cls, v: Any) -> HolidayCalendar:
        """Resolve calendar names and enum values to calendar instances."""
        try:
            return get_calendar(v)
        except JamortException as exc:
            raise ValueError(exc.message) from exc

    @field_validator("start_date", "issue_date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        """Accept ISO strings and ``datetime.date`` values."""
        try:
            if isinstance(v, str):
                return Date.from_iso(v)
            if isinstance(v, date):
                return Date.from_date(v)
        except JamortException as exc:
            raise ValueError(exc.message) from exc
        return v

    @field_validator("tenor", mode="before")
    @classmethod
    def parse_tenor(cls, v: Any) -> Any:
        """Accept period notation such as ``'5Y'``."""
        if isinstance(v, str):
            try:
                return Period.parse(v)
            except JamortException as exc:
                raise ValueError(f"{exc.message}: {v!r}") from exc
        return v

    @field_validator("frequency", mode="before")
    @classmethod
    def parse_frequency(cls, v: Any) -> Any:
        """Accept frequency names (``'quarterly'``) and periods (``'3M'``)."""
        if isinstance(v, Period):
            return v.frequency()
        if isinstance(v, str):
            if v.strip().lstrip("-").isdigit():
                return int(v)
            name = v.strip().upper().replace("-", "_").replace(" ", "_")
            if name in Frequency.__members__:
                return Frequency[name]
            try:
                return Period.parse(v).frequency()
            except JamortException as exc:
                raise ValueError(f"Unknown frequency: {v!r}") from exc
        return v

    @field_validator("day_count", "payment_convention", mode="before")
    @classmethod
    def parse_convention(cls, v: Any, info: ValidationInfo) -> Any:
        """Accept enum member names as well as values."""
        enum_cls = DayCountConvention if info.field_name == "day_count" else BusinessDayConvention
        if isinstance(v, str) and v.upper() in enum_cls.__members__:
            return enum_cls[v.upper()]
        return v

    @field_validator("coupon")
    @classmethod
    def validate_coupon(cls, v: float) -> float:
        """Validate that the coupon rate is a finite number."""
        if not math.isfinite(v):
            raise ValueError(f"Coupon rate must be finite, got {v}")
        return v

    @model_validator(mode="after")
    def validate_dates(self) -> SinkingFundTerms:
        """Validate date ordering constraints.

        Tenor and frequency compatibility is left to the sinking-fund
        generators, which report it with a dedicated error.
        """
        if self.issue_date is not None and self.issue_date >= self.maturity_date:
            raise ValueError(
                f"Issue date {self.issue_date.to_iso()} "
                f"must be before maturity date {self.maturity_date.to_iso()}"
            )
        return self

    @property
    def maturity_date(self) -> Date:
        """Start date advanced by the tenor."""
        return self.start_date + self.tenor
