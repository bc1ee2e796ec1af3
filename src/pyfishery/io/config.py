"""
JSON scenario files.

A scenario file holds the model name, the horizon, an optional seed and
the parameter records of the chosen model::

    {
        "model": "delay",
        "name": "reference",
        "years": 20,
        "steps_per_year": 100,
        "seed": 42,
        "fishery": {"reproduction_rate": 1.0, "catchability": 2.0, "initial_stock": 0.4},
        "industry": {"effort": 0.4, "market_stock": 0.1, ...}
    }

Everything is validated while loading; any problem raises
``ConfigurationError`` and no simulation is started.
"""

from __future__ import annotations

import json
from dataclasses import MISSING, asdict, fields
from pathlib import Path
from typing import Any, Dict, Union

from pyfishery.core.constants import MODEL_NAMES
from pyfishery.core.errors import ConfigurationError
from pyfishery.core.params import PARAMS_BY_MODEL
from pyfishery.core.simulation import FisheryScenario, fishery_scenario

SCENARIO_KEYS = {"model", "name", "years", "steps_per_year", "seed", "fishery", "industry"}
REQUIRED_KEYS = {"model", "years", "fishery", "industry"}


def build_record(record_type, data: Any, section: str):
    """Build a parameter record from a mapping, rejecting unknown or missing keys.

    Parameters
    ----------
    record_type : type
        Parameter dataclass to build
    data : dict
        Field values
    section : str
        Section name used in error messages

    Returns
    -------
    dataclass
        Validated parameter record
    """
    if not isinstance(data, dict):
        raise ConfigurationError(f"'{section}' must be an object, got {type(data).__name__}")

    names = {f.name for f in fields(record_type)}
    required = {
        f.name for f in fields(record_type)
        if f.default is MISSING and f.default_factory is MISSING
    }
    problems = [f"unknown key '{key}'" for key in sorted(set(data) - names)]
    problems += [f"missing key '{key}'" for key in sorted(required - set(data))]
    if problems:
        raise ConfigurationError(f"Invalid '{section}' section", problems)

    return record_type(**data)


def scenario_from_dict(data: Dict[str, Any]) -> FisheryScenario:
    """Create a scenario from a parsed configuration mapping."""
    if not isinstance(data, dict):
        raise ConfigurationError("Scenario configuration must be a JSON object")

    problems = [f"unknown key '{key}'" for key in sorted(set(data) - SCENARIO_KEYS)]
    problems += [f"missing key '{key}'" for key in sorted(REQUIRED_KEYS - set(data))]
    if problems:
        raise ConfigurationError("Invalid scenario configuration", problems)

    model_name = data["model"]
    if model_name not in MODEL_NAMES:
        raise ConfigurationError(
            f"Unknown model '{model_name}'. Available: {', '.join(MODEL_NAMES)}"
        )

    fishery_type, industry_type = PARAMS_BY_MODEL[model_name]
    fishery = build_record(fishery_type, data["fishery"], "fishery")
    industry = build_record(industry_type, data["industry"], "industry")

    return fishery_scenario(
        model_name,
        fishery,
        industry,
        years=data["years"],
        steps_per_year=data.get("steps_per_year"),
        seed=data.get("seed"),
        name=data.get("name", ""),
    )


def scenario_to_dict(scenario: FisheryScenario) -> Dict[str, Any]:
    """Serialize a scenario to a JSON-compatible mapping."""
    model = scenario.model
    data = {
        "model": model.name,
        "name": scenario.name,
        "years": scenario.years,
        "fishery": asdict(model.fishery),
        "industry": asdict(model.industry),
    }
    if model.name == "delay":
        data["steps_per_year"] = model.steps_per_year
    if scenario.seed is not None:
        data["seed"] = int(scenario.seed)
    if "initial_numbers" in data["fishery"]:
        data["fishery"]["initial_numbers"] = list(data["fishery"]["initial_numbers"])
    return data


def read_scenario_config(path: Union[str, Path]) -> FisheryScenario:
    """Read and validate a JSON scenario file.

    Parameters
    ----------
    path : str or Path
        Path to the JSON file

    Returns
    -------
    FisheryScenario
        Scenario ready to run

    Raises
    ------
    ConfigurationError
        If the file cannot be read, is not valid JSON, or holds invalid
        parameters
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

    return scenario_from_dict(data)


def write_scenario_config(scenario: FisheryScenario, path: Union[str, Path]) -> Path:
    """Write a scenario to a JSON file and return its path."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(scenario_to_dict(scenario), fh, indent=2)
    return path
