"""
Simulation driver.

Builds a scenario (model + horizon + seed), steps the selected model for
``years * steps_per_year`` steps and collects the time series the
reporting layer reads. The driver owns the state and the noise generator
for the lifetime of a run.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from pyfishery.core.constants import CRASH_THRESHOLD
from pyfishery.core.errors import ConfigurationError, NumericAnomaly
from pyfishery.core.models import FisheryModel, create_model
from pyfishery.core.noise import NoiseGenerator
from pyfishery.logger import get_logger

logger = get_logger(__name__)


def _integer_problems(name: str, value, minimum: int) -> List[str]:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < minimum:
        return [f"{name} must be an integer >= {minimum}, got {value!r}"]
    return []


def _non_finite(row: Dict[str, float]):
    for column, value in row.items():
        if not math.isfinite(value):
            return column, value
    return None


@dataclass
class FisheryScenario:
    """Complete simulation scenario.

    Attributes
    ----------
    model : FisheryModel
        Selected model with its parameters
    years : int
        Simulation horizon in years
    seed : int, optional
        Noise seed; None draws a fresh seed at run time
    name : str
        Scenario label used in reports and file names
    """

    model: FisheryModel
    years: int
    seed: Optional[int] = None
    name: str = ""

    @property
    def model_name(self) -> str:
        return self.model.name

    @property
    def steps_per_year(self) -> int:
        return self.model.steps_per_year

    @property
    def n_steps(self) -> int:
        return self.years * self.steps_per_year


@dataclass
class SimulationOutput:
    """Results of one simulation run.

    Attributes
    ----------
    model_name : str
        ``"simple"``, ``"delay"`` or ``"age"``
    timeseries : pd.DataFrame
        One row per reported time; row 0 is the initial state
    start_state : object
        Copy of the initial state
    end_state : object
        State after the final step
    crash_year : int
        First year the stock indicator reached zero (-1 if never)
    seed : int
        Seed used by the noise generator
    scenario_name : str
        Label of the scenario
    params : dict
        Summary of the run configuration
    """

    model_name: str
    timeseries: pd.DataFrame
    start_state: Any
    end_state: Any
    crash_year: int
    seed: int
    scenario_name: str = ""
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def years(self) -> int:
        return int(self.params.get("years", 0))


def fishery_scenario(
    model_name: str,
    fishery,
    industry,
    years: int,
    steps_per_year: Optional[int] = None,
    seed: Optional[int] = None,
    name: str = "",
) -> FisheryScenario:
    """Create a scenario, validating everything before any step runs.

    Parameters
    ----------
    model_name : str
        ``"simple"``, ``"delay"`` or ``"age"``
    fishery, industry : dataclass
        Parameter records for the model
    years : int
        Number of years to simulate (>= 1)
    steps_per_year : int, optional
        Delay-model sub-steps per year (default 100)
    seed : int, optional
        Noise seed for reproducible runs
    name : str
        Scenario label

    Returns
    -------
    FisheryScenario
        Scenario ready for :func:`run_simulation`
    """
    problems = _integer_problems("years", years, 1)
    if seed is not None:
        problems += _integer_problems("seed", seed, 0)
    if problems:
        raise ConfigurationError("Invalid scenario", problems)

    model = create_model(model_name, fishery, industry, steps_per_year=steps_per_year)
    # Build the initial state once so that malformed state data fails here
    model.initial_state()
    return FisheryScenario(model=model, years=int(years), seed=seed, name=name or model_name)


def run_simulation(
    scenario: FisheryScenario,
    noise: Optional[NoiseGenerator] = None,
    record_substeps: bool = False,
    start_state: Optional[Any] = None,
) -> SimulationOutput:
    """Run a scenario over its full horizon.

    Parameters
    ----------
    scenario : FisheryScenario
        Scenario to simulate
    noise : NoiseGenerator, optional
        Noise source; by default one is created from ``scenario.seed``
    record_substeps : bool
        For the delay model, record every Euler sub-step instead of only
        year boundaries
    start_state : state, optional
        State to continue from (e.g. a reloaded checkpoint) instead of the
        initial state built from the parameters

    Returns
    -------
    SimulationOutput
        Time series and final state

    Raises
    ------
    ConfigurationError
        If ``start_state`` does not fit the model, or the initial state
        reports non-finite values
    NumericAnomaly
        If a step produces a NaN or infinite state component, step output
        or reported value
    """
    model = scenario.model
    if noise is None:
        noise = NoiseGenerator(scenario.seed)
    steps_per_year = model.steps_per_year

    logger.info(
        "Running %s model '%s' for %d years (%d steps per year, seed=%s)",
        model.name, scenario.name, scenario.years, steps_per_year, noise.seed,
    )

    if start_state is None:
        state = model.initial_state()
    else:
        model.validate_state(start_state)
        state = copy.deepcopy(start_state)
    start_state = copy.deepcopy(state)
    t0 = float(getattr(state, "time", getattr(state, "year", 0)))
    rows: List[Dict[str, float]] = [model.observe(state, t0, None)]
    bad = _non_finite(rows[0])
    if bad is not None:
        raise ConfigurationError(
            f"Initial {bad[0]} of the {model.name} model is not finite ({bad[1]!r}); "
            f"check the parameters"
        )

    crash_year = -1
    step_output = None
    year_output = 0.0
    for step in range(1, scenario.n_steps + 1):
        state, step_output = model.step(state, noise)
        state.check_finite(step)
        if step_output is not None:
            if not math.isfinite(step_output):
                raise NumericAnomaly(model.name, step, "step output", step_output)
            year_output = step_output

        at_year_end = step % steps_per_year == 0
        if record_substeps or at_year_end:
            time = t0 + step / steps_per_year
            row = model.observe(state, time, year_output)
            bad = _non_finite(row)
            if bad is not None:
                raise NumericAnomaly(model.name, step, *bad)
            rows.append(row)

        if crash_year < 0 and model.stock_indicator(state) <= CRASH_THRESHOLD:
            crash_year = int(t0) + (step - 1) // steps_per_year + 1
            logger.warning("Stock collapsed in year %d of '%s'", crash_year, scenario.name)

    timeseries = pd.DataFrame(rows, columns=list(model.columns))
    logger.info(
        "Finished '%s': final %s = %.6g",
        scenario.name, model.columns[1], timeseries.iloc[-1, 1],
    )

    return SimulationOutput(
        model_name=model.name,
        timeseries=timeseries,
        start_state=start_state,
        end_state=state,
        crash_year=crash_year,
        seed=noise.seed,
        scenario_name=scenario.name,
        params={
            "model": model.name,
            "years": scenario.years,
            "steps_per_year": steps_per_year,
            "n_steps": scenario.n_steps,
        },
    )


def run_ensemble(
    scenario: FisheryScenario, n_runs: int, seed: Optional[int] = None
) -> List[SimulationOutput]:
    """Run independent replicates of a stochastic scenario.

    Each replicate gets its own child noise stream spawned from ``seed``
    (or ``scenario.seed``), so replicates are independent and the whole
    ensemble is reproducible.
    """
    problems = _integer_problems("n_runs", n_runs, 1)
    if seed is not None:
        problems += _integer_problems("seed", seed, 0)
    if problems:
        raise ConfigurationError("Invalid ensemble", problems)
    master = NoiseGenerator(scenario.seed if seed is None else seed)
    return [run_simulation(scenario, noise=child) for child in master.spawn(n_runs)]
