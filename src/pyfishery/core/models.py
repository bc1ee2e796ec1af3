"""
Model variants.

Each model pairs a state type with its engine step and with the values
reported to the time series. A model is selected once, when the scenario
is built, so the simulation loop never branches on the model type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from pyfishery.core.age_structured import (
    age_step,
    spawning_stock_biomass,
    total_biomass,
)
from pyfishery.core.constants import (
    DEFAULT_DELAY_STEPS_PER_YEAR,
    MODEL_AGE,
    MODEL_DELAY,
    MODEL_SIMPLE,
)
from pyfishery.core.delay import delay_step
from pyfishery.core.errors import ConfigurationError
from pyfishery.core.logistic import logistic_step
from pyfishery.core.noise import NoiseGenerator
from pyfishery.core.params import PARAMS_BY_MODEL
from pyfishery.core.state import (
    AgeState,
    DelayState,
    LogisticState,
    age_state,
    delay_state,
    logistic_state,
)


class FisheryModel(ABC):
    """Common capability of the three fishery models.

    Parameters
    ----------
    fishery : dataclass
        Biological parameter record of the model
    industry : dataclass
        Harvesting parameter record of the model
    """

    name: str = ""
    columns: Tuple[str, ...] = ()
    state_type: type = object

    def __init__(self, fishery, industry):
        fishery_type, industry_type = PARAMS_BY_MODEL[self.name]
        problems = []
        if not isinstance(fishery, fishery_type):
            problems.append(
                f"fishery must be {fishery_type.__name__}, got {type(fishery).__name__}"
            )
        if not isinstance(industry, industry_type):
            problems.append(
                f"industry must be {industry_type.__name__}, got {type(industry).__name__}"
            )
        if problems:
            raise ConfigurationError(f"Invalid parameters for the {self.name} model", problems)
        self.fishery = fishery
        self.industry = industry

    @property
    def steps_per_year(self) -> int:
        return 1

    @abstractmethod
    def initial_state(self):
        """Build the state at time zero from the parameters."""

    def validate_state(self, state) -> None:
        """Reject a state that does not belong to this model or cannot start a run.

        Raises
        ------
        ConfigurationError
            If the state has the wrong type or any component is negative
            or non-finite
        """
        if not isinstance(state, self.state_type):
            raise ConfigurationError(
                f"The {self.name} model expects {self.state_type.__name__}, "
                f"got {type(state).__name__}"
            )
        problems = state.value_problems()
        if problems:
            raise ConfigurationError(f"Invalid {self.name} model state", problems)

    @abstractmethod
    def step(self, state, noise: NoiseGenerator) -> Tuple[Any, Optional[float]]:
        """Advance one step, returning the new state and its step output."""

    @abstractmethod
    def observe(self, state, time: float, step_output: Optional[float]) -> Dict[str, float]:
        """Time-series row for ``state`` at ``time``."""

    @abstractmethod
    def stock_indicator(self, state) -> float:
        """Scalar stock size used for crash detection and summaries."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(fishery={self.fishery!r}, industry={self.industry!r})"


class LogisticModel(FisheryModel):
    """Discrete logistic growth with constant harvest, one step per year."""

    name = MODEL_SIMPLE
    columns = ("Year", "Stock", "Growth")
    state_type = LogisticState

    def initial_state(self) -> LogisticState:
        return logistic_state(self.fishery)

    def step(self, state: LogisticState, noise: NoiseGenerator):
        return logistic_step(state, self.fishery, self.industry, noise)

    def observe(self, state: LogisticState, time: float, step_output=None):
        growth = 0.0 if step_output is None else step_output
        return {"Year": int(round(time)), "Stock": state.stock, "Growth": growth}

    def stock_indicator(self, state: LogisticState) -> float:
        return state.stock


class DelayModel(FisheryModel):
    """Stock, effort and market inventory integrated with forward Euler.

    Parameters
    ----------
    fishery : DelayFisheryParams
    industry : DelayIndustryParams
    steps_per_year : int
        Euler sub-steps per simulated year (default 100)
    """

    name = MODEL_DELAY
    columns = ("Time", "Stock", "Effort", "MarketStock")
    state_type = DelayState

    def __init__(self, fishery, industry, steps_per_year: int = DEFAULT_DELAY_STEPS_PER_YEAR):
        super().__init__(fishery, industry)
        if isinstance(steps_per_year, bool) or not isinstance(steps_per_year, int) or steps_per_year < 1:
            raise ConfigurationError(
                f"steps_per_year must be a positive integer, got {steps_per_year!r}"
            )
        self._steps_per_year = steps_per_year
        self.dt = 1.0 / steps_per_year

    @property
    def steps_per_year(self) -> int:
        return self._steps_per_year

    def initial_state(self) -> DelayState:
        return delay_state(self.fishery, self.industry)

    def step(self, state: DelayState, noise: NoiseGenerator):
        return delay_step(state, self.fishery, self.industry, self.dt, noise), None

    def observe(self, state: DelayState, time: float, step_output=None):
        return {
            "Time": time,
            "Stock": state.stock,
            "Effort": state.effort,
            "MarketStock": state.market_stock,
        }

    def stock_indicator(self, state: DelayState) -> float:
        return state.stock


class AgeStructuredModel(FisheryModel):
    """Cohort model with natural and fishing mortality and a plus group."""

    name = MODEL_AGE
    columns = ("Year", "TotalBiomass", "SpawningBiomass", "TotalCatch")
    state_type = AgeState

    def initial_state(self) -> AgeState:
        return age_state(self.fishery)

    def validate_state(self, state) -> None:
        super().validate_state(state)
        if state.max_age != self.fishery.max_age:
            raise ConfigurationError(
                f"State has {state.max_age + 1} age classes, parameters expect "
                f"{self.fishery.max_age + 1}"
            )

    def step(self, state: AgeState, noise: NoiseGenerator):
        return age_step(state, self.fishery, self.industry, noise)

    def observe(self, state: AgeState, time: float, step_output=None):
        return {
            "Year": int(round(time)),
            "TotalBiomass": total_biomass(state, self.fishery),
            "SpawningBiomass": spawning_stock_biomass(state, self.fishery),
            "TotalCatch": 0.0 if step_output is None else step_output,
        }

    def stock_indicator(self, state: AgeState) -> float:
        return total_biomass(state, self.fishery)


MODEL_REGISTRY = {
    MODEL_SIMPLE: LogisticModel,
    MODEL_DELAY: DelayModel,
    MODEL_AGE: AgeStructuredModel,
}


def available_models() -> List[str]:
    """Names accepted by :func:`create_model`."""
    return list(MODEL_REGISTRY)


def create_model(
    name: str, fishery, industry, steps_per_year: Optional[int] = None
) -> FisheryModel:
    """Select and build a model variant.

    Parameters
    ----------
    name : str
        One of ``"simple"``, ``"delay"`` or ``"age"``
    fishery, industry : dataclass
        Parameter records matching the model
    steps_per_year : int, optional
        Sub-steps per year; only the delay model accepts values other than 1

    Returns
    -------
    FisheryModel
        The configured model
    """
    if name not in MODEL_REGISTRY:
        raise ConfigurationError(
            f"Unknown model '{name}'. Available: {', '.join(available_models())}"
        )
    if name == MODEL_DELAY:
        if steps_per_year is None:
            steps_per_year = DEFAULT_DELAY_STEPS_PER_YEAR
        return DelayModel(fishery, industry, steps_per_year=steps_per_year)
    if steps_per_year not in (None, 1):
        raise ConfigurationError(
            f"The {name} model advances one year per step; steps_per_year must be 1, "
            f"got {steps_per_year}"
        )
    return MODEL_REGISTRY[name](fishery, industry)
