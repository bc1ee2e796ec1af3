"""
Unit tests for the simple logistic model.
"""

import pytest

from pyfishery.core.logistic import logistic_step, natural_growth
from pyfishery.core.noise import NoiseGenerator
from pyfishery.core.params import LogisticFisheryParams, LogisticIndustryParams
from pyfishery.core.state import LogisticState, logistic_state


@pytest.fixture
def noise():
    return NoiseGenerator(seed=0)


class TestNaturalGrowth:
    """Tests for the logistic growth term."""

    def test_zero_at_carrying_capacity(self):
        assert natural_growth(12000.0, 1.0, 12000.0) == 0.0

    def test_zero_at_empty_stock(self):
        assert natural_growth(0.0, 1.0, 12000.0) == 0.0

    def test_maximum_at_half_capacity(self):
        """Growth peaks at K/2 with value rK/4."""
        assert natural_growth(6000.0, 1.0, 12000.0) == pytest.approx(3000.0)


class TestLogisticStep:
    """Tests for one annual step."""

    def test_reference_first_year(self, logistic_params, noise):
        """Year 1 of the reference run: 10000 + 1666.667 - 2000."""
        fishery, industry = logistic_params
        state, growth = logistic_step(logistic_state(fishery), fishery, industry, noise)
        assert state.stock == pytest.approx(9666.6666667, abs=1e-3)
        assert growth == pytest.approx(-333.3333333, abs=1e-3)
        assert state.year == 1

    def test_overharvest_clamps_to_zero(self, noise):
        """Harvest larger than the stock leaves zero, never a negative stock."""
        fishery = LogisticFisheryParams(1.0, 12000.0, 100.0)
        industry = LogisticIndustryParams(harvest_rate=5000.0)
        state, growth = logistic_step(logistic_state(fishery), fishery, industry, noise)
        assert state.stock == 0.0
        assert growth < 0

    def test_zero_stock_stays_zero(self, noise):
        """No spontaneous generation without a harvest."""
        fishery = LogisticFisheryParams(1.0, 12000.0, 0.0)
        industry = LogisticIndustryParams(harvest_rate=0.0)
        state = logistic_state(fishery)
        for _ in range(10):
            state, _ = logistic_step(state, fishery, industry, noise)
        assert state.stock == 0.0

    def test_input_state_not_modified(self, logistic_params, noise):
        """Steps return a new state."""
        fishery, industry = logistic_params
        state = LogisticState(stock=10000.0)
        logistic_step(state, fishery, industry, noise)
        assert state.stock == 10000.0
        assert state.year == 0

    def test_deterministic_without_noise(self, logistic_params):
        """With zero noise the seed is irrelevant."""
        fishery, industry = logistic_params
        a, _ = logistic_step(logistic_state(fishery), fishery, industry, NoiseGenerator(1))
        b, _ = logistic_step(logistic_state(fishery), fishery, industry, NoiseGenerator(2))
        assert a.stock == b.stock

    def test_noise_perturbs_growth(self):
        """Reproduction noise changes the trajectory reproducibly."""
        fishery = LogisticFisheryParams(1.0, 12000.0, 5000.0, reproduction_std=0.3)
        quiet = LogisticFisheryParams(1.0, 12000.0, 5000.0)
        industry = LogisticIndustryParams(harvest_rate=1000.0)

        a, _ = logistic_step(logistic_state(fishery), fishery, industry, NoiseGenerator(5))
        b, _ = logistic_step(logistic_state(fishery), fishery, industry, NoiseGenerator(5))
        c, _ = logistic_step(logistic_state(quiet), quiet, industry, NoiseGenerator(5))
        assert a.stock == b.stock
        assert a.stock != c.stock

    def test_converges_to_stable_equilibrium(self, logistic_params, noise):
        """The reference run approaches K/2 + sqrt(K^2/4 - HK/r)."""
        fishery, industry = logistic_params
        state = logistic_state(fishery)
        for _ in range(50):
            state, _ = logistic_step(state, fishery, industry, noise)
        assert state.stock == pytest.approx(9464.1016, abs=1e-2)
