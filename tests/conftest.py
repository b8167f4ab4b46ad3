"""Pytest configuration and shared fixtures for jamort tests.

This module provides common fixtures and configuration for all tests.
"""

import logging
from typing import Any

import jax
import pytest

from jamort.core.period import Period
from jamort.core.time import Date
from jamort.core.types import (
    BusinessDayConvention,
    DayCountConvention,
    Frequency,
    TimeUnit,
)
from jamort.instruments.bond import AmortizingFixedRateBond, build_sinking_fund_bond
from jamort.logging_config import PACKAGE_LOGGER
from jamort.utilities.calendars import NoHolidayCalendar
from jamort.utilities.schedules import Schedule, generate_schedule


@pytest.fixture
def sinking_curve() -> list[float]:
    """Balance curve of a 5Y annual 5% sinking fund on a face of 1000."""
    return [1000.0, 819.0252018, 629.0016637, 429.4769487, 219.9759963, 0.0]


@pytest.fixture
def tolerance() -> dict[str, float]:
    """Provide numerical tolerance values for float comparisons.

    Returns:
        Dictionary with different tolerance levels
    """
    return {
        "rtol": 1e-5,  # Relative tolerance (float32 JAX arrays)
        "atol": 1e-3,  # Absolute tolerance on amounts
        "strict_rtol": 1e-10,  # Strict relative tolerance
        "strict_atol": 1e-9,  # Strict absolute tolerance
    }


@pytest.fixture(autouse=True)
def reset_jax_config() -> None:
    """Clear JAX compilation caches after each test."""
    yield
    jax.clear_caches()


@pytest.fixture
def restore_logging() -> None:
    """Restore the package logger after a test reconfigures it."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def start_date() -> Date:
    return Date(2024, 1, 15)


@pytest.fixture
def five_years() -> Period:
    return Period(5, TimeUnit.YEARS)


@pytest.fixture
def semiannual_schedule() -> Schedule:
    """Two-year semiannual schedule without holidays."""
    return generate_schedule(
        start=Date(2024, 1, 15),
        end=Date(2026, 1, 15),
        tenor=Period(6, TimeUnit.MONTHS),
        calendar=NoHolidayCalendar(),
    )


@pytest.fixture
def sinking_bond(start_date: Date, five_years: Period) -> AmortizingFixedRateBond:
    """5Y annual 5% sinking-fund bond on 30/360 with level payments."""
    return build_sinking_fund_bond(
        settlement_days=0,
        calendar=NoHolidayCalendar(),
        face_amount=1000.0,
        start_date=start_date,
        tenor=five_years,
        frequency=Frequency.ANNUAL,
        coupon=0.05,
        day_count=DayCountConvention.B30360,
        payment_convention=BusinessDayConvention.UNADJUSTED,
    )


# Configure pytest markers
def pytest_configure(config: Any) -> None:
    """Configure custom pytest markers.

    Args:
        config: Pytest configuration object
    """
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "property: mark test as property-based test")
