"""
Simple logistic model: discrete annual logistic growth with constant harvest.

    growth = r * eps * N * (1 - N / K) - H
    N'     = max(0, N + growth)

where ``eps`` is a mean-1 log-normal factor (exactly 1 when the
reproduction noise is 0).
"""

from __future__ import annotations

from typing import Tuple

from pyfishery.core.noise import NoiseGenerator
from pyfishery.core.params import LogisticFisheryParams, LogisticIndustryParams
from pyfishery.core.state import LogisticState, clamp_non_negative
from pyfishery.logger import get_logger

logger = get_logger(__name__)


def natural_growth(stock: float, reproduction_rate: float, carrying_capacity: float) -> float:
    """Logistic growth r * N * (1 - N / K) for one year."""
    return reproduction_rate * stock * (1.0 - stock / carrying_capacity)


def logistic_step(
    state: LogisticState,
    fishery: LogisticFisheryParams,
    industry: LogisticIndustryParams,
    noise: NoiseGenerator,
) -> Tuple[LogisticState, float]:
    """Advance the simple model by one year.

    Parameters
    ----------
    state : LogisticState
        Current state (not modified)
    fishery : LogisticFisheryParams
        Reproduction rate, carrying capacity and reproduction noise
    industry : LogisticIndustryParams
        Constant harvest
    noise : NoiseGenerator
        Source of the reproduction-rate perturbation

    Returns
    -------
    tuple of (LogisticState, float)
        The next state and the net growth (natural growth minus harvest).
        Net growth is negative whenever harvest exceeds natural growth.
    """
    rate = fishery.reproduction_rate * noise.sample(fishery.reproduction_std)
    growth = natural_growth(state.stock, rate, fishery.carrying_capacity) - industry.harvest_rate

    if growth < 0:
        logger.debug(
            "Year %d: harvest %.4f exceeds natural growth, net growth %.4f",
            state.year + 1, industry.harvest_rate, growth,
        )

    # Stock cannot go negative
    new_stock = clamp_non_negative(state.stock + growth)
    return LogisticState(stock=new_stock, year=state.year + 1), growth
