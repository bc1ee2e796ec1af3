"""
Core module for pyfishery.

Contains the three simulation engines, their parameter and state types,
the noise generator and the simulation driver.
"""

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
from pyfishery.core.state import (
    AgeState,
    DelayState,
    LogisticState,
    age_state,
    delay_state,
    logistic_state,
)
from pyfishery.core.logistic import logistic_step
from pyfishery.core.delay import delay_step
from pyfishery.core.age_structured import (
    age_step,
    spawning_stock_biomass,
    total_biomass,
)
from pyfishery.core.models import (
    AgeStructuredModel,
    DelayModel,
    FisheryModel,
    LogisticModel,
    create_model,
)
from pyfishery.core.simulation import (
    FisheryScenario,
    SimulationOutput,
    fishery_scenario,
    run_ensemble,
    run_simulation,
)

__all__ = [
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
    "logistic_state",
    "delay_state",
    "age_state",
    # Engines
    "logistic_step",
    "delay_step",
    "age_step",
    "total_biomass",
    "spawning_stock_biomass",
    # Models
    "FisheryModel",
    "LogisticModel",
    "DelayModel",
    "AgeStructuredModel",
    "create_model",
    # Simulation
    "FisheryScenario",
    "SimulationOutput",
    "fishery_scenario",
    "run_simulation",
    "run_ensemble",
]
