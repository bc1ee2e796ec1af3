"""
State vectors for the fishery models.

A state is owned by the simulation driver and handed to one engine step
at a time; each step returns a new state rather than mutating its input.
States carry no hidden fields: ``to_dict``/``from_dict`` round-trip them
exactly, so a saved state reproduces the same subsequent trajectory.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from pyfishery.core.errors import ConfigurationError, NumericAnomaly
from pyfishery.core.params import (
    AgeFisheryParams,
    DelayFisheryParams,
    DelayIndustryParams,
    LogisticFisheryParams,
)


def _check_scalar(model: str, step: int, name: str, value: float) -> None:
    if not math.isfinite(value):
        raise NumericAnomaly(model, step, name, value)


def _scalar_problems(name: str, value: float) -> List[str]:
    if not math.isfinite(value):
        return [f"{name} must be finite, got {value!r}"]
    if value < 0:
        return [f"{name} must be >= 0, got {value!r}"]
    return []


@dataclass
class LogisticState:
    """State of the simple logistic model.

    Attributes
    ----------
    stock : float
        Fish stock biomass (tons), >= 0
    year : int
        Years simulated so far
    """

    stock: float
    year: int = 0

    def check_finite(self, step: int) -> None:
        _check_scalar("simple", step, "stock", self.stock)

    def value_problems(self) -> List[str]:
        """Reasons this state cannot start a run (empty when valid)."""
        return _scalar_problems("stock", self.stock)

    def to_dict(self) -> Dict[str, float]:
        return {"stock": float(self.stock), "year": int(self.year)}

    @classmethod
    def from_dict(cls, data: Dict) -> "LogisticState":
        return cls(stock=float(data["stock"]), year=int(data.get("year", 0)))


@dataclass
class DelayState:
    """State of the delay-equation model.

    Attributes
    ----------
    stock : float
        Normalized fish stock n
    effort : float
        Fishing effort E
    market_stock : float
        Market inventory S
    time : float
        Simulated time in years
    """

    stock: float
    effort: float
    market_stock: float
    time: float = 0.0

    def check_finite(self, step: int) -> None:
        for name in ("stock", "effort", "market_stock"):
            _check_scalar("delay", step, name, getattr(self, name))

    def value_problems(self) -> List[str]:
        """Reasons this state cannot start a run (empty when valid).

        The normalized stock must also be <= 1.
        """
        problems = []
        for name in ("stock", "effort", "market_stock"):
            problems += _scalar_problems(name, getattr(self, name))
        if not problems and self.stock > 1:
            problems.append(f"stock is normalized and must be <= 1, got {self.stock!r}")
        return problems

    def to_dict(self) -> Dict[str, float]:
        return {
            "stock": float(self.stock),
            "effort": float(self.effort),
            "market_stock": float(self.market_stock),
            "time": float(self.time),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "DelayState":
        return cls(
            stock=float(data["stock"]),
            effort=float(data["effort"]),
            market_stock=float(data["market_stock"]),
            time=float(data.get("time", 0.0)),
        )


@dataclass(eq=False)
class AgeState:
    """State of the age-structured model.

    Attributes
    ----------
    numbers_at_age : np.ndarray
        Numbers in each age class 0..max_age; the last entry is the plus group
    year : int
        Years simulated so far
    """

    numbers_at_age: np.ndarray = field(repr=False)
    year: int = 0

    def __post_init__(self):
        try:
            numbers = np.array(self.numbers_at_age, dtype=float)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"numbers_at_age must be numeric: {e}") from e
        if numbers.ndim != 1 or numbers.size < 2:
            raise ConfigurationError(
                f"numbers_at_age must be a 1-D sequence of at least 2 age classes, "
                f"got shape {numbers.shape}"
            )
        self.numbers_at_age = numbers

    @property
    def max_age(self) -> int:
        return self.numbers_at_age.size - 1

    def check_finite(self, step: int) -> None:
        bad = np.flatnonzero(~np.isfinite(self.numbers_at_age))
        if bad.size:
            age = int(bad[0])
            raise NumericAnomaly(
                "age", step, f"numbers_at_age[{age}]", float(self.numbers_at_age[age])
            )

    def value_problems(self) -> List[str]:
        """Reasons this state cannot start a run (empty when valid)."""
        numbers = self.numbers_at_age
        if not np.all(np.isfinite(numbers)):
            return ["numbers_at_age must all be finite"]
        if np.any(numbers < 0):
            return ["numbers_at_age must all be >= 0"]
        return []

    def to_dict(self) -> Dict:
        return {
            "numbers_at_age": [float(n) for n in self.numbers_at_age],
            "year": int(self.year),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "AgeState":
        return cls(
            numbers_at_age=np.asarray(data["numbers_at_age"], dtype=float),
            year=int(data.get("year", 0)),
        )

    def __repr__(self) -> str:
        return f"AgeState(year={self.year}, max_age={self.max_age})"


def logistic_state(fishery: LogisticFisheryParams) -> LogisticState:
    """Create the initial simple-model state from its parameters."""
    return LogisticState(stock=float(fishery.initial_stock))


def delay_state(
    fishery: DelayFisheryParams, industry: DelayIndustryParams
) -> DelayState:
    """Create the initial delay-model state.

    Parameters
    ----------
    fishery : DelayFisheryParams
        Provides the initial normalized stock
    industry : DelayIndustryParams
        Provides the initial effort and market stock

    Returns
    -------
    DelayState
        State at t = 0
    """
    return DelayState(
        stock=float(fishery.initial_stock),
        effort=float(industry.effort),
        market_stock=float(industry.market_stock),
    )


def age_state(
    fishery: AgeFisheryParams, numbers: Optional[Sequence[float]] = None
) -> AgeState:
    """Create an age-structured state.

    Parameters
    ----------
    fishery : AgeFisheryParams
        Model parameters; ``initial_numbers`` is used when ``numbers`` is None
    numbers : sequence of float, optional
        Explicit numbers at age 0..max_age

    Returns
    -------
    AgeState
        State at year 0

    Raises
    ------
    ConfigurationError
        If the sequence length is not ``max_age + 1`` or any entry is negative
        or non-finite. No default is substituted.
    """
    if numbers is None:
        numbers = fishery.initial_numbers
    try:
        numbers = np.array(numbers, dtype=float)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Initial numbers must be numeric: {e}") from e
    if numbers.ndim != 1 or numbers.size != fishery.max_age + 1:
        raise ConfigurationError(
            f"Initial numbers must have max_age + 1 = {fishery.max_age + 1} entries, "
            f"got shape {numbers.shape}"
        )
    if not np.all(np.isfinite(numbers)) or np.any(numbers < 0):
        raise ConfigurationError("Initial numbers must be finite and >= 0")
    return AgeState(numbers_at_age=numbers)


def clamp_non_negative(value):
    """Clamp finite negative values to zero.

    NaN and infinite values pass through unchanged so that the driver's
    finiteness check can report them.
    """
    if isinstance(value, np.ndarray):
        return np.where(np.isfinite(value) & (value < 0), 0.0, value)
    if math.isfinite(value) and value < 0:
        return 0.0
    return value
