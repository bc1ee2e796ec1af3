"""
Unit tests for model state vectors.
"""

import math

import numpy as np
import pytest

from pyfishery.core.errors import ConfigurationError, NumericAnomaly
from pyfishery.core.state import (
    AgeState,
    DelayState,
    LogisticState,
    age_state,
    clamp_non_negative,
    delay_state,
    logistic_state,
)


class TestStateFactories:
    """Tests for building initial states from parameters."""

    def test_logistic_state(self, logistic_params):
        """Initial stock comes from the fishery record."""
        fishery, _ = logistic_params
        state = logistic_state(fishery)
        assert state.stock == 10000.0
        assert state.year == 0

    def test_delay_state(self, delay_params):
        """n comes from the fishery record, E and S from the industry record."""
        state = delay_state(*delay_params)
        assert (state.stock, state.effort, state.market_stock) == (0.4, 0.4, 0.1)
        assert state.time == 0.0

    def test_age_state_from_params(self, age_params):
        """Numbers at age are copied from initial_numbers."""
        fishery, _ = age_params
        state = age_state(fishery)
        assert state.max_age == 10
        np.testing.assert_allclose(state.numbers_at_age, fishery.initial_numbers)

    def test_age_state_length_mismatch(self, age_params):
        """A wrong-sized sequence is a configuration error."""
        fishery, _ = age_params
        with pytest.raises(ConfigurationError, match="max_age \\+ 1"):
            age_state(fishery, numbers=[1.0] * 4)

    def test_age_state_rejects_negative(self, age_params):
        """Negative numbers at age are rejected."""
        fishery, _ = age_params
        numbers = [1.0] * 11
        numbers[5] = -2.0
        with pytest.raises(ConfigurationError):
            age_state(fishery, numbers=numbers)

    def test_age_state_rejects_too_few_classes(self):
        """An age state needs at least a recruit class and a plus group."""
        with pytest.raises(ConfigurationError):
            AgeState(numbers_at_age=[5.0])


class TestCheckFinite:
    """Tests for NaN / infinity detection."""

    def test_finite_state_passes(self):
        """A normal state raises nothing."""
        LogisticState(stock=5.0).check_finite(1)
        DelayState(0.1, 0.2, 0.3).check_finite(1)
        AgeState(numbers_at_age=[1.0, 2.0, 3.0]).check_finite(1)

    def test_logistic_nan(self):
        """NaN stock is reported with the step number."""
        with pytest.raises(NumericAnomaly) as excinfo:
            LogisticState(stock=math.nan).check_finite(7)
        assert excinfo.value.step == 7
        assert excinfo.value.component == "stock"

    def test_delay_infinite_effort(self):
        """The offending component is named."""
        with pytest.raises(NumericAnomaly) as excinfo:
            DelayState(0.1, math.inf, 0.3).check_finite(3)
        assert excinfo.value.component == "effort"

    def test_age_nan_cohort(self):
        """The first non-finite age class is reported."""
        with pytest.raises(NumericAnomaly, match=r"numbers_at_age\[2\]"):
            AgeState(numbers_at_age=[1.0, 2.0, math.nan, math.inf]).check_finite(1)

    def test_numeric_anomaly_is_arithmetic_error(self):
        """NumericAnomaly can be caught as ArithmeticError."""
        with pytest.raises(ArithmeticError):
            LogisticState(stock=math.inf).check_finite(1)


class TestClamp:
    """Tests for clamp_non_negative."""

    def test_negative_scalar_clamped(self):
        assert clamp_non_negative(-3.0) == 0.0

    def test_positive_scalar_unchanged(self):
        assert clamp_non_negative(2.5) == 2.5

    def test_nan_passes_through(self):
        """NaN must stay visible to the finiteness check."""
        assert math.isnan(clamp_non_negative(math.nan))
        assert clamp_non_negative(-math.inf) == -math.inf

    def test_array(self):
        result = clamp_non_negative(np.array([-1.0, 2.0, math.nan]))
        assert result[0] == 0.0
        assert result[1] == 2.0
        assert math.isnan(result[2])


class TestSerialization:
    """States round-trip through plain dicts."""

    def test_logistic_round_trip(self):
        state = LogisticState(stock=1234.5678, year=4)
        assert LogisticState.from_dict(state.to_dict()) == state

    def test_delay_round_trip(self):
        state = DelayState(0.123456789, 0.9876, 0.05, time=3.21)
        assert DelayState.from_dict(state.to_dict()) == state

    def test_age_round_trip(self):
        state = AgeState(numbers_at_age=[1000.0, 818.7307530779818, 1.0e-3], year=9)
        restored = AgeState.from_dict(state.to_dict())
        np.testing.assert_array_equal(restored.numbers_at_age, state.numbers_at_age)
        assert restored.year == 9
