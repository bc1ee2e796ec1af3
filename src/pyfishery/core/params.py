"""
Parameter records for the fishery models.

Each model reads one fishery (biological) record and one industry
(harvesting) record. Records are frozen dataclasses: they are built once
from configuration, validated on construction, and never mutated by a
simulation step. Invalid values raise ``ConfigurationError`` listing
every problem found.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, fields
from typing import List, Sequence, Tuple

from pyfishery.core.errors import ConfigurationError


def _finite_problems(record) -> List[str]:
    problems = []
    for f in fields(record):
        value = getattr(record, f.name)
        values = value if isinstance(value, tuple) else (value,)
        for v in values:
            if not isinstance(v, numbers.Real) or isinstance(v, bool):
                problems.append(f"{f.name} must be numeric, got {v!r}")
                break
            if not math.isfinite(v):
                problems.append(f"{f.name} must be finite, got {v!r}")
                break
    return problems


def _non_negative(record, names: Sequence[str]) -> List[str]:
    return [
        f"{name} must be >= 0, got {getattr(record, name)}"
        for name in names
        if getattr(record, name) < 0
    ]


def _raise_if(record, problems: List[str]) -> None:
    if problems:
        raise ConfigurationError(f"Invalid {type(record).__name__}", problems)


# =============================================================================
# SIMPLE LOGISTIC MODEL
# =============================================================================


@dataclass(frozen=True)
class LogisticFisheryParams:
    """Biological parameters of the simple logistic model.

    Attributes
    ----------
    reproduction_rate : float
        Intrinsic annual reproduction rate r
    carrying_capacity : float
        Long-term unfished stock K (tons), must be > 0
    initial_stock : float
        Stock at year 0 (tons)
    reproduction_std : float
        Log-normal noise standard deviation on r (0 = deterministic)
    """

    reproduction_rate: float
    carrying_capacity: float
    initial_stock: float
    reproduction_std: float = 0.0

    def __post_init__(self):
        problems = _finite_problems(self)
        if not problems:
            problems += _non_negative(
                self, ("reproduction_rate", "initial_stock", "reproduction_std")
            )
            if self.carrying_capacity <= 0:
                problems.append(
                    f"carrying_capacity must be > 0, got {self.carrying_capacity}"
                )
        _raise_if(self, problems)


@dataclass(frozen=True)
class LogisticIndustryParams:
    """Harvesting side of the simple logistic model.

    Attributes
    ----------
    harvest_rate : float
        Constant harvest removed each year (tons)
    """

    harvest_rate: float

    def __post_init__(self):
        problems = _finite_problems(self)
        if not problems:
            problems += _non_negative(self, ("harvest_rate",))
        _raise_if(self, problems)


# =============================================================================
# DELAY-EQUATION (BIOECONOMIC) MODEL
# =============================================================================


@dataclass(frozen=True)
class DelayFisheryParams:
    """Biological parameters of the delay-equation model.

    Attributes
    ----------
    reproduction_rate : float
        Intrinsic growth rate r of the normalized stock
    catchability : float
        Catchability q (fraction of stock caught per unit effort)
    initial_stock : float
        Normalized stock n at t = 0, in [0, 1]
    catchability_std : float
        Log-normal noise standard deviation on q, drawn every sub-step
    """

    reproduction_rate: float
    catchability: float
    initial_stock: float
    catchability_std: float = 0.0

    def __post_init__(self):
        problems = _finite_problems(self)
        if not problems:
            problems += _non_negative(
                self,
                ("reproduction_rate", "catchability", "initial_stock", "catchability_std"),
            )
            if self.initial_stock > 1:
                problems.append(
                    f"initial_stock is normalized and must be <= 1, got {self.initial_stock}"
                )
        _raise_if(self, problems)


@dataclass(frozen=True)
class DelayIndustryParams:
    """Fleet and market parameters of the delay-equation model.

    Attributes
    ----------
    effort : float
        Fishing effort E at t = 0
    market_stock : float
        Market inventory S at t = 0
    catch_stocking_rate : float
        Fraction eta of the catch stored rather than sold, in [0, 1]
    stock_return_rate : float
        Rate delta at which stored fish are returned to the market
    fish_price : float
        Market price p
    fishing_cost : float
        Cost per unit effort c
    """

    effort: float
    market_stock: float
    catch_stocking_rate: float
    stock_return_rate: float
    fish_price: float
    fishing_cost: float

    def __post_init__(self):
        problems = _finite_problems(self)
        if not problems:
            problems += _non_negative(self, [f.name for f in fields(self)])
            if self.catch_stocking_rate > 1:
                problems.append(
                    f"catch_stocking_rate is a fraction and must be <= 1, "
                    f"got {self.catch_stocking_rate}"
                )
        _raise_if(self, problems)


# =============================================================================
# AGE-STRUCTURED MODEL
# =============================================================================


@dataclass(frozen=True)
class AgeFisheryParams:
    """Biological parameters of the age-structured model.

    Attributes
    ----------
    max_age : int
        Oldest age class; ``max_age`` is the plus group. Must be >= 1.
    natural_mortality : float
        Annual instantaneous natural mortality M
    vb_linf : float
        Von Bertalanffy asymptotic length
    vb_k : float
        Von Bertalanffy growth coefficient
    vb_t0 : float
        Theoretical age at zero length (<= 0)
    lw_a : float
        Length-weight scaling coefficient
    lw_b : float
        Length-weight exponent (>= 0)
    maturity_a50 : float
        Age at 50% maturity
    maturity_k : float
        Steepness of the maturity ogive
    constant_recruitment : float
        Mean number of recruits entering age 0 each year
    initial_numbers : tuple of float
        Numbers at age 0..max_age at year 0 (length max_age + 1)
    recruitment_std : float
        Log-normal noise standard deviation on recruitment
    """

    max_age: int
    natural_mortality: float
    vb_linf: float
    vb_k: float
    vb_t0: float
    lw_a: float
    lw_b: float
    maturity_a50: float
    maturity_k: float
    constant_recruitment: float
    initial_numbers: Tuple[float, ...]
    recruitment_std: float = 0.0

    def __post_init__(self):
        try:
            numbers_at_age = tuple(float(n) for n in self.initial_numbers)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"initial_numbers must be a sequence of numbers: {e}"
            ) from e
        object.__setattr__(self, "initial_numbers", numbers_at_age)
        problems = _finite_problems(self)
        if not isinstance(self.max_age, numbers.Integral) or isinstance(self.max_age, bool):
            problems.append(f"max_age must be an integer, got {self.max_age!r}")
        if not problems:
            problems += _non_negative(
                self,
                (
                    "natural_mortality",
                    "vb_k",
                    "lw_a",
                    "lw_b",
                    "maturity_k",
                    "constant_recruitment",
                    "recruitment_std",
                ),
            )
            if self.max_age < 1:
                problems.append(f"max_age must be >= 1, got {self.max_age}")
            if self.vb_linf <= 0:
                problems.append(f"vb_linf must be > 0, got {self.vb_linf}")
            if self.vb_t0 > 0:
                problems.append(
                    f"vb_t0 must be <= 0 so that length at age 0 is non-negative, "
                    f"got {self.vb_t0}"
                )
            if len(self.initial_numbers) != self.max_age + 1:
                problems.append(
                    f"initial_numbers must have max_age + 1 = {self.max_age + 1} "
                    f"entries, got {len(self.initial_numbers)}"
                )
            if any(n < 0 for n in self.initial_numbers):
                problems.append("initial_numbers must all be >= 0")
        _raise_if(self, problems)

    @property
    def n_ages(self) -> int:
        return self.max_age + 1


@dataclass(frozen=True)
class AgeIndustryParams:
    """Fishing parameters of the age-structured model.

    Attributes
    ----------
    fishing_mortality : float
        Fully selected annual fishing mortality Fmax
    selectivity_a50 : float
        Age at 50% gear selectivity
    selectivity_k : float
        Steepness of the selectivity curve
    """

    fishing_mortality: float
    selectivity_a50: float
    selectivity_k: float

    def __post_init__(self):
        problems = _finite_problems(self)
        if not problems:
            problems += _non_negative(self, ("fishing_mortality", "selectivity_k"))
        _raise_if(self, problems)


PARAMS_BY_MODEL = {
    "simple": (LogisticFisheryParams, LogisticIndustryParams),
    "delay": (DelayFisheryParams, DelayIndustryParams),
    "age": (AgeFisheryParams, AgeIndustryParams),
}
