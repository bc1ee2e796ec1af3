"""
Command line driver for pyfishery.

Usage:
    pyfishery --model simple
    pyfishery --model delay --years 30 --output delay.csv
    pyfishery --config scenario.json --seed 7 --output-dir results --plot run.png
"""

import argparse
import sys

from pyfishery.config import reference_scenario
from pyfishery.core.constants import MODEL_NAMES
from pyfishery.core.errors import FisheryError
from pyfishery.core.simulation import fishery_scenario, run_simulation
from pyfishery.io.config import read_scenario_config
from pyfishery.io.results import format_timeseries, write_timeseries
from pyfishery.logger import get_logger, set_log_level

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyfishery",
        description="Simulate a harvested fish stock with a logistic, delay-equation or age-structured model",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--model", choices=MODEL_NAMES, default="simple",
                        help="Reference model to run (default: simple)")
    source.add_argument("--config", help="JSON scenario file")
    parser.add_argument("--years", type=int, help="Override the simulation horizon")
    parser.add_argument("--steps-per-year", type=int,
                        help="Euler sub-steps per year (delay model)")
    parser.add_argument("--seed", type=int, help="Noise seed for reproducible runs")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--output", help="CSV file for the time series")
    output.add_argument("--output-dir", help="Directory for a timestamped CSV file")
    parser.add_argument("--plot", help="Save a time-series plot to this image file")
    parser.add_argument("--quiet", action="store_true", help="Do not print the result table")
    parser.add_argument("--log-level", default="INFO", help="Console log level (default: INFO)")
    return parser


def _load_scenario(args):
    if args.config is None:
        return reference_scenario(
            args.model, years=args.years, steps_per_year=args.steps_per_year, seed=args.seed
        )

    scenario = read_scenario_config(args.config)
    if args.years is None and args.steps_per_year is None and args.seed is None:
        return scenario

    # Rebuild so overrides go through the same validation
    model = scenario.model
    steps_per_year = args.steps_per_year
    if steps_per_year is None and model.name == "delay":
        steps_per_year = model.steps_per_year
    return fishery_scenario(
        model.name,
        model.fishery,
        model.industry,
        years=scenario.years if args.years is None else args.years,
        steps_per_year=steps_per_year,
        seed=scenario.seed if args.seed is None else args.seed,
        name=scenario.name,
    )


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        set_log_level(args.log_level)
    except ValueError as e:
        parser.error(str(e))

    try:
        scenario = _load_scenario(args)
        output = run_simulation(scenario)
    except FisheryError as e:
        logger.error("%s", e)
        return 1

    if not args.quiet:
        print(format_timeseries(output))

    if args.output or args.output_dir:
        path = write_timeseries(output, path=args.output, directory=args.output_dir or ".")
        logger.info("Time series written to %s", path)

    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        from pyfishery.core.plotting import plot_timeseries

        fig = plot_timeseries(output)
        fig.savefig(args.plot, dpi=150, bbox_inches="tight")
        logger.info("Plot written to %s", args.plot)

    return 0


if __name__ == "__main__":
    sys.exit(main())
