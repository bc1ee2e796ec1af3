"""
Writing simulation results.

- CSV time series (one file per run, 8 decimal places)
- Fixed-width console tables, one layout per model
- JSON state checkpoints that reproduce a run exactly when reloaded
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from pyfishery.core.constants import CSV_DECIMAL_PLACES, TIMESTAMP_FORMAT
from pyfishery.core.errors import ConfigurationError
from pyfishery.core.simulation import SimulationOutput
from pyfishery.core.state import AgeState, DelayState, LogisticState

STATE_TYPES = {"simple": LogisticState, "delay": DelayState, "age": AgeState}

TABLE_TITLES = {
    "simple": "--- Simple Logistic Model Simulation ---",
    "delay": "--- Delay Equation Model Simulation ---",
    "age": "--- Age-Structured Model Simulation ---",
}


def timestamped_filename(prefix: str, suffix: str = ".csv", when: Optional[datetime] = None) -> str:
    """Build ``<prefix>_<YYYYmmdd_HHMMSS><suffix>``."""
    when = when or datetime.now()
    return f"{prefix}_{when.strftime(TIMESTAMP_FORMAT)}{suffix}"


def write_timeseries(
    output: SimulationOutput,
    path: Optional[Union[str, Path]] = None,
    directory: Union[str, Path] = ".",
) -> Path:
    """Write the time series of a run to CSV.

    Parameters
    ----------
    output : SimulationOutput
        Simulation results
    path : str or Path, optional
        Output file. When omitted, a timestamped name is created in
        ``directory``.
    directory : str or Path
        Directory for generated file names (created if missing)

    Returns
    -------
    Path
        The file written
    """
    if path is None:
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / timestamped_filename(output.scenario_name or output.model_name)
    path = Path(path)

    output.timeseries.to_csv(path, index=False, float_format=f"%.{CSV_DECIMAL_PLACES}f")
    return path


def format_timeseries(output: SimulationOutput) -> str:
    """Render the time series as a fixed-width console table."""
    ts = output.timeseries
    lines = [TABLE_TITLES[output.model_name]]

    if output.model_name == "simple":
        lines.append("Year | Fish Stock (tons)")
        lines.append("-" * 38)
        for row in ts.itertuples(index=False):
            lines.append(f"{int(row.Year):4d} | {row.Stock:f}")
    elif output.model_name == "delay":
        lines.append("Year | Population (n) | Effort (E) | Market Stock (S)")
        lines.append("-" * 58)
        for row in ts.itertuples(index=False):
            lines.append(
                f"{row.Time:4g} | {row.Stock:14.4f} | {row.Effort:10.4f} | {row.MarketStock:16.4f}"
            )
    else:
        lines.append("Year | Total Biomass | Spawning Biomass | Total Catch")
        lines.append("-" * 58)
        for row in ts.itertuples(index=False):
            lines.append(
                f"{int(row.Year):4d} | {row.TotalBiomass:13.4f} | "
                f"{row.SpawningBiomass:16.4f} | {row.TotalCatch:11.4f}"
            )
    return "\n".join(lines)


def save_state(state, model_name: str, path: Union[str, Path]) -> Path:
    """Write a state checkpoint to JSON."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump({"model": model_name, "state": state.to_dict()}, fh, indent=2)
    return path


def load_state(path: Union[str, Path]):
    """Read a state checkpoint written by :func:`save_state`.

    Returns
    -------
    tuple of (str, state)
        Model name and the restored state
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        model_name = data["model"]
        state = STATE_TYPES[model_name].from_dict(data["state"])
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Cannot load state checkpoint {path}: {e}") from e

    problems = state.value_problems()
    if problems:
        raise ConfigurationError(f"Invalid state in checkpoint {path}", problems)
    return model_name, state
