"""
Plotting module for pyfishery.

Visualization of simulation results using matplotlib and optionally plotly:
- Stock / effort / biomass time series
- Catch time series (age-structured model)
- Numbers-at-age bar charts
- Interactive time series (plotly)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union

import numpy as np

import matplotlib.pyplot as plt

# Try to import plotly for interactive plots
try:
    import plotly.graph_objects as go
    HAS_PLOTLY = True
except ImportError:
    HAS_PLOTLY = False

from pyfishery.core.age_structured import weight_at_age
from pyfishery.core.params import AgeFisheryParams
from pyfishery.core.simulation import SimulationOutput
from pyfishery.core.state import AgeState

# Columns plotted by default for each model
DEFAULT_COLUMNS = {
    "simple": ["Stock"],
    "delay": ["Stock", "Effort", "MarketStock"],
    "age": ["TotalBiomass", "SpawningBiomass"],
}

Y_LABELS = {
    "simple": "Fish Stock (tons)",
    "delay": "Normalized value",
    "age": "Biomass",
}


def _time_axis(output: SimulationOutput) -> Tuple[np.ndarray, str]:
    ts = output.timeseries
    column = ts.columns[0]
    return ts[column].to_numpy(), column


def plot_timeseries(
    output: SimulationOutput,
    columns: Optional[Sequence[str]] = None,
    relative: bool = False,
    title: Optional[str] = None,
    figsize: Tuple[int, int] = (10, 5),
    ax: Optional[plt.Axes] = None,
) -> plt.Figure:
    """Plot time series from a simulation run.

    Parameters
    ----------
    output : SimulationOutput
        Simulation results
    columns : list of str, optional
        Time-series columns to plot (default depends on the model)
    relative : bool
        If True, plot relative to the initial value
    title : str, optional
        Plot title
    figsize : tuple
        Figure size
    ax : Axes, optional
        Matplotlib axes

    Returns
    -------
    matplotlib.Figure
    """
    ts = output.timeseries
    if columns is None:
        columns = DEFAULT_COLUMNS[output.model_name]
    missing = [c for c in columns if c not in ts.columns]
    if missing:
        raise KeyError(f"Columns not in time series: {missing}")

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    x, xlabel = _time_axis(output)
    for column in columns:
        y = ts[column].to_numpy(dtype=float)
        if relative and y[0] > 0:
            y = y / y[0]
        ax.plot(x, y, label=column, linewidth=1.5)

    ax.set_xlabel(xlabel, fontsize=11)
    ylabel = 'Relative to initial' if relative else Y_LABELS[output.model_name]
    ax.set_ylabel(ylabel, fontsize=11)
    ax.set_title(title or f"{output.scenario_name or output.model_name} simulation", fontsize=12)

    if relative:
        ax.axhline(y=1, color='k', linestyle='--', alpha=0.5)

    ax.legend(loc='best', fontsize=9)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    return fig


def plot_catch(
    output: SimulationOutput,
    title: str = "Catch Time Series",
    figsize: Tuple[int, int] = (10, 5),
    ax: Optional[plt.Axes] = None,
) -> plt.Figure:
    """Plot annual catch biomass of an age-structured run.

    Parameters
    ----------
    output : SimulationOutput
        Simulation results
    title : str
        Plot title
    figsize : tuple
        Figure size
    ax : Axes, optional
        Matplotlib axes

    Returns
    -------
    matplotlib.Figure
    """
    ts = output.timeseries

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    if "TotalCatch" not in ts.columns:
        ax.text(0.5, 0.5, 'No catch data', ha='center', va='center', transform=ax.transAxes)
        ax.set_title(title)
        return fig

    # Row 0 is the initial state
    years = ts["Year"].to_numpy()[1:]
    ax.bar(years, ts["TotalCatch"].to_numpy(dtype=float)[1:], color='steelblue', alpha=0.8)
    ax.set_xlabel('Year', fontsize=11)
    ax.set_ylabel('Catch biomass', fontsize=11)
    ax.set_title(title, fontsize=12)
    ax.grid(True, alpha=0.3, axis='y')

    plt.tight_layout()
    return fig


def plot_age_structure(
    state: AgeState,
    fishery: Optional[AgeFisheryParams] = None,
    by_biomass: bool = False,
    title: Optional[str] = None,
    figsize: Tuple[int, int] = (8, 5),
    ax: Optional[plt.Axes] = None,
) -> plt.Figure:
    """Bar chart of numbers (or biomass) at age.

    Parameters
    ----------
    state : AgeState
        State to plot
    fishery : AgeFisheryParams, optional
        Required when ``by_biomass`` is True
    by_biomass : bool
        Plot N(a) * W(a) instead of N(a)
    title : str, optional
        Plot title
    figsize : tuple
        Figure size
    ax : Axes, optional
        Matplotlib axes

    Returns
    -------
    matplotlib.Figure
    """
    ages = np.arange(state.max_age + 1)
    values = state.numbers_at_age
    if by_biomass:
        if fishery is None:
            raise ValueError("fishery parameters are required to plot biomass at age")
        values = values * weight_at_age(ages, fishery)

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    colors = ['steelblue'] * state.max_age + ['darkorange']
    ax.bar(ages, values, color=colors)
    labels = [str(a) for a in ages[:-1]] + [f"{ages[-1]}+"]
    ax.set_xticks(ages)
    ax.set_xticklabels(labels)
    ax.set_xlabel('Age', fontsize=11)
    ax.set_ylabel('Biomass at age' if by_biomass else 'Numbers at age', fontsize=11)
    ax.set_title(title or f"Age structure, year {state.year}", fontsize=12)
    ax.grid(True, alpha=0.3, axis='y')

    plt.tight_layout()
    return fig


def plot_timeseries_interactive(
    output: SimulationOutput,
    columns: Optional[Sequence[str]] = None,
    title: Optional[str] = None,
) -> Any:
    """Create interactive time-series plot with Plotly.

    Parameters
    ----------
    output : SimulationOutput
        Simulation results
    columns : list of str, optional
        Columns to plot
    title : str, optional
        Plot title

    Returns
    -------
    plotly.graph_objects.Figure
    """
    if not HAS_PLOTLY:
        raise ImportError("plotly is required for interactive plots. Install with: pip install plotly")

    ts = output.timeseries
    if columns is None:
        columns = DEFAULT_COLUMNS[output.model_name]
    x, xlabel = _time_axis(output)

    fig = go.Figure()
    for column in columns:
        fig.add_trace(go.Scatter(
            x=x,
            y=ts[column].to_numpy(dtype=float),
            mode='lines',
            name=column,
            hovertemplate=f'{xlabel}: %{{x}}<br>{column}: %{{y:.4f}}<extra></extra>'
        ))

    fig.update_layout(
        title=title or f"{output.scenario_name or output.model_name} simulation",
        xaxis_title=xlabel,
        yaxis_title=Y_LABELS[output.model_name],
        hovermode='x unified',
        template='plotly_white'
    )
    return fig


def save_plots(
    figures: Union[plt.Figure, List[plt.Figure]],
    filename: Union[str, Path],
    dpi: int = 150,
    format: str = 'png'
) -> List[Path]:
    """Save matplotlib figure(s) to file.

    A single figure is written to ``<filename>.<format>``; several figures
    are numbered ``<filename>_1.<format>``, ``<filename>_2.<format>``, ...
    Missing parent directories are created.

    Parameters
    ----------
    figures : Figure or list of Figure
        Figure(s) to save
    filename : str or Path
        Output path without extension
    dpi : int
        Resolution
    format : str
        Output format ('png', 'pdf', 'svg')

    Returns
    -------
    list of Path
        Files written, in figure order
    """
    if isinstance(figures, plt.Figure):
        figures = [figures]

    base = Path(filename)
    base.parent.mkdir(parents=True, exist_ok=True)
    if len(figures) == 1:
        paths = [base.with_name(f"{base.name}.{format}")]
    else:
        paths = [base.with_name(f"{base.name}_{i + 1}.{format}") for i in range(len(figures))]

    for fig, path in zip(figures, paths):
        fig.savefig(path, dpi=dpi, bbox_inches='tight')
    return paths
