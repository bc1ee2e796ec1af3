"""
I/O module for pyfishery.

Contains functions for reading scenarios and writing results:
- JSON scenario files
- CSV time series
- Console tables
- JSON state checkpoints
"""

from pyfishery.io.config import (
    read_scenario_config,
    write_scenario_config,
    scenario_from_dict,
    scenario_to_dict,
)

from pyfishery.io.results import (
    write_timeseries,
    format_timeseries,
    save_state,
    load_state,
)

__all__ = [
    # Scenario files
    "read_scenario_config",
    "write_scenario_config",
    "scenario_from_dict",
    "scenario_to_dict",
    # Results
    "write_timeseries",
    "format_timeseries",
    "save_state",
    "load_state",
]
