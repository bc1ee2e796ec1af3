"""
Analysis functions for simulation output.

This module provides:
- Run summaries (start/end/min/max/mean/CV of the stock indicator, catch)
- Reference points of the simple logistic model (MSY, fixed points)
- Comparison of scenarios
- Export of results to DataFrames
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from pyfishery.core.params import LogisticFisheryParams, LogisticIndustryParams
from pyfishery.core.simulation import SimulationOutput

# Column holding the stock indicator and the catch column, per model
STOCK_COLUMNS = {"simple": "Stock", "delay": "Stock", "age": "TotalBiomass"}
CATCH_COLUMNS = {"age": "TotalCatch"}


# =============================================================================
# RUN SUMMARY
# =============================================================================


@dataclass
class SimulationSummary:
    """Summary statistics for one simulation run.

    Attributes
    ----------
    model_name : str
        Model that produced the run
    years : int
        Number of years simulated
    indicator : str
        Name of the time-series column summarized

    Stock statistics
    ----------------
    stock_start : float
    stock_end : float
    stock_min : float
    stock_max : float
    stock_mean : float
    stock_cv : float
        Coefficient of variation of the stock indicator
    stock_change : float
        Relative change (end/start - 1)

    Catch statistics
    ----------------
    total_catch : float, optional
        Total catch over the run (age-structured model only)
    mean_annual_catch : float, optional
    crash_year : int
        First year the stock reached zero (-1 if never)
    """

    model_name: str = ""
    years: int = 0
    indicator: str = ""

    stock_start: float = 0.0
    stock_end: float = 0.0
    stock_min: float = 0.0
    stock_max: float = 0.0
    stock_mean: float = 0.0
    stock_cv: float = 0.0
    stock_change: float = 0.0

    total_catch: Optional[float] = None
    mean_annual_catch: Optional[float] = None
    crash_year: int = -1


def summarize_simulation(output: SimulationOutput) -> SimulationSummary:
    """Calculate summary statistics for a simulation run.

    Parameters
    ----------
    output : SimulationOutput
        Simulation results

    Returns
    -------
    SimulationSummary
        Summary statistics
    """
    ts = output.timeseries
    indicator = STOCK_COLUMNS[output.model_name]
    stock = ts[indicator].to_numpy(dtype=float)

    mean = float(np.mean(stock))
    std = float(np.std(stock))
    start, end = float(stock[0]), float(stock[-1])

    summary = SimulationSummary(
        model_name=output.model_name,
        years=output.years,
        indicator=indicator,
        stock_start=start,
        stock_end=end,
        stock_min=float(np.min(stock)),
        stock_max=float(np.max(stock)),
        stock_mean=mean,
        stock_cv=std / mean if mean > 0 else 0.0,
        stock_change=end / start - 1.0 if start > 0 else 0.0,
        crash_year=output.crash_year,
    )

    catch_column = CATCH_COLUMNS.get(output.model_name)
    if catch_column is not None:
        # Row 0 is the initial state and carries no catch
        catch = ts[catch_column].to_numpy(dtype=float)[1:]
        summary.total_catch = float(np.sum(catch))
        summary.mean_annual_catch = float(np.mean(catch)) if catch.size else 0.0

    return summary


def compare_scenarios(
    outputs: List[SimulationOutput], labels: Optional[List[str]] = None
) -> pd.DataFrame:
    """Tabulate summaries of several runs side by side.

    Parameters
    ----------
    outputs : list of SimulationOutput
        Runs to compare
    labels : list of str, optional
        Row labels (default: scenario names)

    Returns
    -------
    pd.DataFrame
        One row per run, one column per summary field
    """
    if labels is None:
        labels = [o.scenario_name or f"Run_{i + 1}" for i, o in enumerate(outputs)]
    if len(labels) != len(outputs):
        raise ValueError("labels and outputs must have the same length")

    records = [asdict(summarize_simulation(o)) for o in outputs]
    return pd.DataFrame(records, index=pd.Index(labels, name="Scenario"))


# =============================================================================
# LOGISTIC REFERENCE POINTS
# =============================================================================


def logistic_msy(fishery: LogisticFisheryParams) -> float:
    """Maximum sustainable yield r * K / 4 of the deterministic logistic model."""
    return fishery.reproduction_rate * fishery.carrying_capacity / 4.0


def logistic_equilibria(
    fishery: LogisticFisheryParams, industry: LogisticIndustryParams
) -> List[Dict[str, float]]:
    """Fixed points of the deterministic simple model.

    Solves r * x * (1 - x / K) = H. For the discrete map
    x' = x + r*x*(1 - x/K) - H the slope at a fixed point is
    1 + r * (1 - 2x/K); the point is stable when its magnitude is < 1.

    Parameters
    ----------
    fishery : LogisticFisheryParams
        Reproduction rate and carrying capacity
    industry : LogisticIndustryParams
        Constant harvest

    Returns
    -------
    list of dict
        Each with ``x``, ``slope`` and ``stability``. Empty when harvest
        exceeds MSY (no positive fixed point).
    """
    r = fishery.reproduction_rate
    k = fishery.carrying_capacity
    h = industry.harvest_rate

    if r == 0:
        return [] if h > 0 else [{"x": 0.0, "slope": 1.0, "stability": "neutral"}]

    discriminant = k * k / 4.0 - h * k / r
    if discriminant < 0:
        return []

    root = math.sqrt(discriminant)
    points = sorted({k / 2.0 + root, k / 2.0 - root}, reverse=True)
    equilibria = []
    for x in points:
        if x < 0:
            continue
        slope = 1.0 + r * (1.0 - 2.0 * x / k)
        if abs(slope) < 1:
            stability = "stable"
        elif abs(slope) > 1:
            stability = "unstable"
        else:
            stability = "neutral"
        equilibria.append({"x": x, "slope": slope, "stability": stability})
    return equilibria


# =============================================================================
# DATA EXPORT
# =============================================================================


def export_simulation_to_dataframe(output: SimulationOutput) -> Dict[str, pd.DataFrame]:
    """Export simulation results to DataFrames.

    Parameters
    ----------
    output : SimulationOutput
        Simulation results

    Returns
    -------
    dict
        Dictionary of DataFrames:
        - 'timeseries': the reported time series
        - 'summary': one-row summary statistics
        - 'end_state': numbers at age (age-structured model only)
    """
    summary = summarize_simulation(output)
    results = {
        "timeseries": output.timeseries.copy(),
        "summary": pd.DataFrame([asdict(summary)]),
    }
    numbers = getattr(output.end_state, "numbers_at_age", None)
    if numbers is not None:
        end_state = pd.DataFrame(
            {"Numbers": numbers}, index=pd.Index(range(len(numbers)), name="Age")
        )
        results["end_state"] = end_state
    return results
