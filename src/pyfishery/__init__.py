"""
pyfishery - harvested fish stock simulation

Three models of increasing structural complexity:
a discrete logistic model with constant harvest, a bioeconomic
delay-equation model of stock, effort and market inventory, and an
age-structured cohort model with stochastic recruitment.
"""

__version__ = "0.1.0"
__author__ = "PyFishery Development Team"

# Core imports
from pyfishery.core.errors import ConfigurationError, FisheryError, NumericAnomaly
from pyfishery.core.noise import NoiseGenerator
from pyfishery.core.params import (
    AgeFisheryParams,
    AgeIndustryParams,
    DelayFisheryParams,
    DelayIndustryParams,
    LogisticFisheryParams,
    LogisticIndustryParams,
)
from pyfishery.core.state import AgeState, DelayState, LogisticState
from pyfishery.core.models import create_model
from pyfishery.core.simulation import (
    FisheryScenario,
    SimulationOutput,
    fishery_scenario,
    run_ensemble,
    run_simulation,
)

__all__ = [
    # Version
    "__version__",
    "__author__",
    # Errors
    "FisheryError",
    "ConfigurationError",
    "NumericAnomaly",
    # Noise
    "NoiseGenerator",
    # Parameters
    "LogisticFisheryParams",
    "LogisticIndustryParams",
    "DelayFisheryParams",
    "DelayIndustryParams",
    "AgeFisheryParams",
    "AgeIndustryParams",
    # State
    "LogisticState",
    "DelayState",
    "AgeState",
    # Simulation
    "create_model",
    "FisheryScenario",
    "SimulationOutput",
    "fishery_scenario",
    "run_simulation",
    "run_ensemble",
]
