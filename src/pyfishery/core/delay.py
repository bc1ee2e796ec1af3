"""
Bioeconomic delay-equation model.

Couples the normalized fish stock n, the fleet effort E and the market
inventory S:

    catch = q * n * E
    dn/dt = r * n * (1 - n) - catch
    dE/dt = p * ((1 - eta) * catch + delta * S) - c * E
    dS/dt = eta * catch - delta * S

The system is integrated with fixed-step forward Euler. Stability depends
on the step size and on the magnitude of the coefficients; the reference
configuration uses 100 sub-steps per year. A higher-order integrator
would change the numerical trajectories and is deliberately not used.
"""

from __future__ import annotations

from typing import Tuple

from pyfishery.core.noise import NoiseGenerator
from pyfishery.core.params import DelayFisheryParams, DelayIndustryParams
from pyfishery.core.state import DelayState, clamp_non_negative
from pyfishery.logger import get_logger

logger = get_logger(__name__)


def delay_derivatives(
    state: DelayState,
    fishery: DelayFisheryParams,
    industry: DelayIndustryParams,
    catchability: float,
) -> Tuple[float, float, float, float]:
    """Evaluate the right-hand side of the delay system.

    Parameters
    ----------
    state : DelayState
        Snapshot the derivatives are evaluated at
    fishery : DelayFisheryParams
        Reproduction rate
    industry : DelayIndustryParams
        Price, cost, stocking and return rates
    catchability : float
        Catchability q for this sub-step (already perturbed)

    Returns
    -------
    tuple of float
        ``(dn_dt, dE_dt, dS_dt, catch)``
    """
    n, effort, market = state.stock, state.effort, state.market_stock
    eta = industry.catch_stocking_rate
    delta = industry.stock_return_rate

    catch = catchability * n * effort
    dn_dt = fishery.reproduction_rate * n * (1.0 - n) - catch
    de_dt = (
        industry.fish_price * ((1.0 - eta) * catch + delta * market)
        - industry.fishing_cost * effort
    )
    ds_dt = eta * catch - delta * market
    return dn_dt, de_dt, ds_dt, catch


def delay_step(
    state: DelayState,
    fishery: DelayFisheryParams,
    industry: DelayIndustryParams,
    dt: float,
    noise: NoiseGenerator,
) -> DelayState:
    """Advance the delay model by one Euler sub-step of length ``dt``.

    All three variables are updated from the same pre-step snapshot and
    clamped at zero.

    Parameters
    ----------
    state : DelayState
        Current state (not modified)
    fishery : DelayFisheryParams
        Reproduction rate, catchability and catchability noise
    industry : DelayIndustryParams
        Fleet and market coefficients
    dt : float
        Sub-step length in years, > 0
    noise : NoiseGenerator
        Source of the catchability perturbation

    Returns
    -------
    DelayState
        State at ``state.time + dt``
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")

    q = fishery.catchability * noise.sample(fishery.catchability_std)
    dn_dt, de_dt, ds_dt, _ = delay_derivatives(state, fishery, industry, q)

    n = state.stock + dn_dt * dt
    effort = state.effort + de_dt * dt
    market = state.market_stock + ds_dt * dt
    if n < 0 or effort < 0 or market < 0:
        logger.debug(
            "t=%.4f: clamping negative Euler update (n=%.6g, E=%.6g, S=%.6g)",
            state.time + dt, n, effort, market,
        )

    return DelayState(
        stock=clamp_non_negative(n),
        effort=clamp_non_negative(effort),
        market_stock=clamp_non_negative(market),
        time=state.time + dt,
    )
