"""
Age-structured operating model.

Tracks numbers at age 0..max_age, where ``max_age`` is a plus group that
accumulates every fish reaching or exceeding the maximum modeled age.
One call to :func:`age_step` advances a full year:

  - each cohort suffers total mortality Z = M + Fmax * sel(age)
  - survivors move up one age class; the plus group keeps its own
    survivors and receives the graduates of age max_age - 1
  - the catch of every cohort is computed with the Baranov equation
    (F / Z) * (1 - exp(-Z)) * N * W
  - age 0 is replaced by this year's recruitment R * eps

Individual growth follows von Bertalanffy length-at-age converted to
weight with a power length-weight relationship. Maturity and gear
selectivity are logistic ogives over age.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np
import pandas as pd

from pyfishery.core.constants import MIN_TOTAL_MORTALITY
from pyfishery.core.errors import ConfigurationError
from pyfishery.core.noise import NoiseGenerator
from pyfishery.core.params import AgeFisheryParams, AgeIndustryParams
from pyfishery.core.state import AgeState, clamp_non_negative

ArrayLike = Union[float, np.ndarray]


# =============================================================================
# BIOLOGICAL SCHEDULES
# =============================================================================


def logistic_curve(age: ArrayLike, a50: float, k: float) -> ArrayLike:
    """Logistic ogive 1 / (1 + exp(-k * (age - a50)))."""
    return 1.0 / (1.0 + np.exp(-k * (np.asarray(age, dtype=float) - a50)))


def length_at_age(age: ArrayLike, fishery: AgeFisheryParams) -> ArrayLike:
    """Von Bertalanffy length at age.

    L(a) = Linf * (1 - exp(-k * (a - t0)))

    Parameters
    ----------
    age : float or np.ndarray
        Age in years
    fishery : AgeFisheryParams
        Provides ``vb_linf``, ``vb_k`` and ``vb_t0``

    Returns
    -------
    float or np.ndarray
        Length at age
    """
    age = np.asarray(age, dtype=float)
    return fishery.vb_linf * (1.0 - np.exp(-fishery.vb_k * (age - fishery.vb_t0)))


def weight_at_age(age: ArrayLike, fishery: AgeFisheryParams) -> ArrayLike:
    """Weight at age, W(a) = a_lw * L(a) ** b_lw."""
    return fishery.lw_a * np.power(length_at_age(age, fishery), fishery.lw_b)


def maturity_at_age(age: ArrayLike, fishery: AgeFisheryParams) -> ArrayLike:
    """Proportion mature at age."""
    return logistic_curve(age, fishery.maturity_a50, fishery.maturity_k)


def selectivity_at_age(age: ArrayLike, industry: AgeIndustryParams) -> ArrayLike:
    """Proportion of fish at age retained by the fishing gear."""
    return logistic_curve(age, industry.selectivity_a50, industry.selectivity_k)


def fishing_mortality_at_age(age: ArrayLike, industry: AgeIndustryParams) -> ArrayLike:
    """F(a) = Fmax * sel(a)."""
    return industry.fishing_mortality * selectivity_at_age(age, industry)


def baranov_catch_fraction(f: ArrayLike, z: ArrayLike) -> ArrayLike:
    """Fraction of a cohort caught during the year.

    (F / Z) * (1 - exp(-Z)), evaluated with ``expm1`` for accuracy. As
    Z -> 0 the fraction tends to F, which is used below
    ``MIN_TOTAL_MORTALITY`` instead of dividing by zero.

    Parameters
    ----------
    f : float or np.ndarray
        Fishing mortality
    z : float or np.ndarray
        Total mortality M + F

    Returns
    -------
    float or np.ndarray
        Catch as a fraction of numbers at the start of the year
    """
    f = np.asarray(f, dtype=float)
    z = np.asarray(z, dtype=float)
    positive = z > MIN_TOTAL_MORTALITY
    z_safe = np.where(positive, z, 1.0)
    fraction = np.where(positive, f / z_safe * -np.expm1(-z_safe), f)
    return fraction if fraction.ndim else float(fraction)


def age_schedule(
    fishery: AgeFisheryParams, industry: Optional[AgeIndustryParams] = None
) -> pd.DataFrame:
    """Tabulate the biological and fishery schedules by age.

    Parameters
    ----------
    fishery : AgeFisheryParams
        Growth and maturity parameters
    industry : AgeIndustryParams, optional
        When given, selectivity and F at age are included

    Returns
    -------
    pd.DataFrame
        Indexed by ``Age`` with columns Length, Weight, Maturity and,
        optionally, Selectivity and F
    """
    ages = np.arange(fishery.max_age + 1)
    data = {
        "Length": length_at_age(ages, fishery),
        "Weight": weight_at_age(ages, fishery),
        "Maturity": maturity_at_age(ages, fishery),
    }
    if industry is not None:
        data["Selectivity"] = selectivity_at_age(ages, industry)
        data["F"] = fishing_mortality_at_age(ages, industry)
    df = pd.DataFrame(data, index=pd.Index(ages, name="Age"))
    return df


# =============================================================================
# DERIVED QUANTITIES
# =============================================================================


def total_biomass(state: AgeState, fishery: AgeFisheryParams) -> float:
    """Total biomass, sum of N(a) * W(a)."""
    ages = np.arange(state.max_age + 1)
    return float(np.sum(state.numbers_at_age * weight_at_age(ages, fishery)))


def spawning_stock_biomass(state: AgeState, fishery: AgeFisheryParams) -> float:
    """Spawning stock biomass, sum of N(a) * W(a) * mat(a)."""
    ages = np.arange(state.max_age + 1)
    return float(
        np.sum(
            state.numbers_at_age
            * weight_at_age(ages, fishery)
            * maturity_at_age(ages, fishery)
        )
    )


def equilibrium_numbers(
    fishery: AgeFisheryParams, industry: Optional[AgeIndustryParams] = None
) -> np.ndarray:
    """Deterministic steady-state numbers at age under constant recruitment.

    Useful to start a run at equilibrium. Without ``industry`` the
    unfished equilibrium is returned.

    Raises
    ------
    ConfigurationError
        If total mortality in the plus group is zero (no finite equilibrium).
    """
    ages = np.arange(fishery.max_age + 1)
    f = np.zeros(ages.size) if industry is None else fishing_mortality_at_age(ages, industry)
    survival = np.exp(-(fishery.natural_mortality + f))

    numbers = np.empty(ages.size)
    numbers[0] = fishery.constant_recruitment
    for a in range(1, fishery.max_age):
        numbers[a] = numbers[a - 1] * survival[a - 1]
    if survival[-1] >= 1.0:
        raise ConfigurationError(
            "Plus group has zero total mortality; no finite equilibrium exists"
        )
    numbers[-1] = numbers[-2] * survival[-2] / (1.0 - survival[-1])
    return numbers


# =============================================================================
# ANNUAL STEP
# =============================================================================


def age_step(
    state: AgeState,
    fishery: AgeFisheryParams,
    industry: AgeIndustryParams,
    noise: NoiseGenerator,
) -> Tuple[AgeState, float]:
    """Advance the age-structured model by one year.

    Parameters
    ----------
    state : AgeState
        Numbers at age at the start of the year (not modified)
    fishery : AgeFisheryParams
        Mortality, growth, maturity and recruitment
    industry : AgeIndustryParams
        Fishing mortality and selectivity
    noise : NoiseGenerator
        Source of the recruitment perturbation

    Returns
    -------
    tuple of (AgeState, float)
        Numbers at age at the start of the next year, and the total catch
        biomass taken during the year
    """
    max_age = fishery.max_age
    if state.max_age != max_age:
        raise ConfigurationError(
            f"State has {state.max_age + 1} age classes, parameters expect {max_age + 1}"
        )

    n_start = state.numbers_at_age
    ages = np.arange(max_age + 1)

    f = fishing_mortality_at_age(ages, industry)
    z = fishery.natural_mortality + f
    survival = np.exp(-z)

    # Every cohort, including both contributors to the plus group, is fished
    catch_numbers = baranov_catch_fraction(f, z) * n_start
    catch_biomass = float(np.sum(catch_numbers * weight_at_age(ages, fishery)))

    n_end = np.empty_like(n_start)
    n_end[1:max_age] = n_start[: max_age - 1] * survival[: max_age - 1]
    n_end[max_age] = (
        n_start[max_age - 1] * survival[max_age - 1]
        + n_start[max_age] * survival[max_age]
    )
    n_end[0] = fishery.constant_recruitment * noise.sample(fishery.recruitment_std)

    return AgeState(numbers_at_age=clamp_non_negative(n_end), year=state.year + 1), catch_biomass
