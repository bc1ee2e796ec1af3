"""
Tests for the reference configuration and logging setup.
"""

import logging

import numpy as np
import pytest

from pyfishery.config import (
    AgeDefaults,
    DelayDefaults,
    SimpleDefaults,
    reference_params,
    reference_scenario,
)
from pyfishery.core.age_structured import equilibrium_numbers
from pyfishery.core.errors import ConfigurationError
from pyfishery.logger import LOG_FORMAT, console_handler, get_logger, set_log_level


class TestReferenceParams:
    """Tests for the reference parameter sets."""

    def test_simple(self):
        fishery, industry = reference_params("simple")
        assert fishery.reproduction_rate == SimpleDefaults.reproduction_rate
        assert fishery.carrying_capacity == 12000.0
        assert industry.harvest_rate == 2000.0

    def test_delay(self):
        fishery, industry = reference_params("delay")
        assert fishery.catchability == 2.0
        assert industry.fish_price == DelayDefaults.fish_price
        assert industry.stock_return_rate == 2.0

    def test_age_starts_at_unfished_equilibrium(self):
        fishery, industry = reference_params("age")
        assert fishery.max_age == AgeDefaults.max_age
        np.testing.assert_allclose(fishery.initial_numbers, equilibrium_numbers(fishery))
        assert industry.fishing_mortality == 0.3

    def test_unknown(self):
        with pytest.raises(ConfigurationError):
            reference_params("ecosim")


class TestReferenceScenario:
    """Tests for reference_scenario."""

    @pytest.mark.parametrize("model,years", [("simple", 15), ("delay", 20), ("age", 25)])
    def test_default_horizon(self, model, years):
        scenario = reference_scenario(model)
        assert scenario.years == years
        assert scenario.name == f"{model}_reference"

    def test_overrides(self):
        scenario = reference_scenario("delay", years=3, steps_per_year=10, seed=5)
        assert scenario.n_steps == 30
        assert scenario.seed == 5


class TestLogger:
    """Tests for logger helpers."""

    def test_child_logger_name(self):
        assert get_logger("pyfishery.core.delay").name == "pyfishery.core.delay"
        assert get_logger("tools").name == "pyfishery.tools"

    def test_set_log_level(self):
        handler = console_handler
        previous = handler.level
        try:
            set_log_level("warning")
            assert handler.level == logging.WARNING
            set_log_level(logging.DEBUG)
            assert handler.level == logging.DEBUG
        finally:
            handler.setLevel(previous)

    def test_console_format(self):
        assert console_handler.formatter._fmt == LOG_FORMAT
        assert "%(filename)s:%(lineno)d" in LOG_FORMAT

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            set_log_level("chatty")
