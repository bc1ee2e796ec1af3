"""pyfishery reference configuration.

Centralized default parameter values for the reference run of each model,
used by the command line when no scenario file is given.
"""
from dataclasses import dataclass

from pyfishery.core.age_structured import equilibrium_numbers
from pyfishery.core.constants import (
    DEFAULT_AGE_YEARS,
    DEFAULT_DELAY_STEPS_PER_YEAR,
    DEFAULT_DELAY_YEARS,
    DEFAULT_SIMPLE_YEARS,
    MODEL_AGE,
    MODEL_DELAY,
    MODEL_SIMPLE,
)
from pyfishery.core.errors import ConfigurationError
from pyfishery.core.params import (
    AgeFisheryParams,
    AgeIndustryParams,
    DelayFisheryParams,
    DelayIndustryParams,
    LogisticFisheryParams,
    LogisticIndustryParams,
)
from pyfishery.core.simulation import FisheryScenario, fishery_scenario


@dataclass
class SimpleDefaults:
    """Simple logistic model reference run."""

    reproduction_rate: float = 1.0
    carrying_capacity: float = 12000.0   # tons
    initial_stock: float = 10000.0       # tons
    harvest_rate: float = 2000.0         # tons per year
    reproduction_std: float = 0.0
    years: int = DEFAULT_SIMPLE_YEARS


@dataclass
class DelayDefaults:
    """Delay-equation model reference run (sample bioeconomic parameters)."""

    reproduction_rate: float = 1.0
    catchability: float = 2.0
    initial_stock: float = 0.4
    catchability_std: float = 0.0
    fish_price: float = 7.0
    fishing_cost: float = 1.0
    stock_return_rate: float = 2.0      # delta
    catch_stocking_rate: float = 0.5    # eta
    effort: float = 0.4
    market_stock: float = 0.1
    years: int = DEFAULT_DELAY_YEARS
    steps_per_year: int = DEFAULT_DELAY_STEPS_PER_YEAR


@dataclass
class AgeDefaults:
    """Age-structured model reference run."""

    max_age: int = 10
    natural_mortality: float = 0.2
    vb_linf: float = 100.0      # cm
    vb_k: float = 0.2
    vb_t0: float = -0.5
    lw_a: float = 0.00001
    lw_b: float = 3.0
    maturity_a50: float = 3.0
    maturity_k: float = 1.5
    constant_recruitment: float = 1000.0
    recruitment_std: float = 0.0
    fishing_mortality: float = 0.3
    selectivity_a50: float = 2.5
    selectivity_k: float = 2.0
    years: int = DEFAULT_AGE_YEARS


def reference_params(model_name: str):
    """Parameter records of the reference run for ``model_name``.

    Returns
    -------
    tuple
        ``(fishery, industry)`` records
    """
    if model_name == MODEL_SIMPLE:
        d = SimpleDefaults()
        return (
            LogisticFisheryParams(
                reproduction_rate=d.reproduction_rate,
                carrying_capacity=d.carrying_capacity,
                initial_stock=d.initial_stock,
                reproduction_std=d.reproduction_std,
            ),
            LogisticIndustryParams(harvest_rate=d.harvest_rate),
        )
    if model_name == MODEL_DELAY:
        d = DelayDefaults()
        return (
            DelayFisheryParams(
                reproduction_rate=d.reproduction_rate,
                catchability=d.catchability,
                initial_stock=d.initial_stock,
                catchability_std=d.catchability_std,
            ),
            DelayIndustryParams(
                effort=d.effort,
                market_stock=d.market_stock,
                catch_stocking_rate=d.catch_stocking_rate,
                stock_return_rate=d.stock_return_rate,
                fish_price=d.fish_price,
                fishing_cost=d.fishing_cost,
            ),
        )
    if model_name == MODEL_AGE:
        d = AgeDefaults()
        biology = dict(
            max_age=d.max_age,
            natural_mortality=d.natural_mortality,
            vb_linf=d.vb_linf,
            vb_k=d.vb_k,
            vb_t0=d.vb_t0,
            lw_a=d.lw_a,
            lw_b=d.lw_b,
            maturity_a50=d.maturity_a50,
            maturity_k=d.maturity_k,
            constant_recruitment=d.constant_recruitment,
            recruitment_std=d.recruitment_std,
        )
        # Start from the unfished equilibrium
        unfished = AgeFisheryParams(initial_numbers=[0.0] * (d.max_age + 1), **biology)
        fishery = AgeFisheryParams(
            initial_numbers=equilibrium_numbers(unfished), **biology
        )
        industry = AgeIndustryParams(
            fishing_mortality=d.fishing_mortality,
            selectivity_a50=d.selectivity_a50,
            selectivity_k=d.selectivity_k,
        )
        return fishery, industry
    raise ConfigurationError(f"Unknown model: {model_name}")


def reference_scenario(model_name: str, years=None, steps_per_year=None, seed=None) -> FisheryScenario:
    """Reference scenario for ``model_name`` with optional overrides."""
    fishery, industry = reference_params(model_name)
    if years is None:
        years = {
            MODEL_SIMPLE: SimpleDefaults.years,
            MODEL_DELAY: DelayDefaults.years,
            MODEL_AGE: AgeDefaults.years,
        }[model_name]
    if model_name == MODEL_DELAY and steps_per_year is None:
        steps_per_year = DelayDefaults.steps_per_year
    return fishery_scenario(
        model_name,
        fishery,
        industry,
        years=years,
        steps_per_year=steps_per_year,
        seed=seed,
        name=f"{model_name}_reference",
    )
