"""Unit tests for the exception hierarchy."""

import pytest

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


class TestJamortException:
    """Test the base exception."""

    def test_message_only(self):
        exc = JamortException("Something failed")
        assert str(exc) == "Something failed"
        assert exc.message == "Something failed"
        assert exc.context == {}

    def test_context_rendering(self):
        exc = JamortException(
            "Bond frequency is incompatible with the maturity tenor",
            context={"frequency": "WEEKLY", "tenor": "5Y"},
        )
        assert str(exc) == (
            "Bond frequency is incompatible with the maturity tenor "
            "(Context: frequency=WEEKLY, tenor=5Y)"
        )

    def test_context_is_copied_to_attribute(self):
        exc = JamortException("msg", context={"n_periods": 1})
        assert exc.context["n_periods"] == 1


@pytest.mark.parametrize(
    "exc_class",
    [
        IncompatiblePeriodError,
        DegenerateScheduleError,
        CashFlowShapeError,
        NumericDegeneracyError,
        PeriodComparisonError,
        ScheduleGenerationError,
        ContractValidationError,
        DateTimeError,
        ConventionError,
        ConfigurationError,
    ],
)
def test_hierarchy(exc_class):
    """Every error can be caught as a JamortException."""
    with pytest.raises(JamortException) as exc_info:
        raise exc_class("failure", context={"key": "value"})
    assert isinstance(exc_info.value, exc_class)
    assert exc_info.value.context == {"key": "value"}
