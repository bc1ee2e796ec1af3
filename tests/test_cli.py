"""
Tests for the command line driver.
"""

import json

import pandas as pd
import pytest

from pyfishery.cli import build_parser, main
from pyfishery.config import reference_scenario
from pyfishery.io.config import scenario_to_dict
from pyfishery.logger import console_handler


@pytest.fixture(autouse=True)
def restore_log_level():
    previous = console_handler.level
    yield
    console_handler.setLevel(previous)


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.model == "simple"
        assert args.config is None
        assert not args.quiet

    def test_model_and_config_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--model", "delay", "--config", "x.json"])

    def test_unknown_model(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--model", "ecosim"])


class TestMain:
    """Tests for main()."""

    def test_prints_table(self, capsys):
        assert main(["--model", "simple", "--log-level", "WARNING"]) == 0
        out = capsys.readouterr().out
        assert "--- Simple Logistic Model Simulation ---" in out
        assert "   1 | 9666.666667" in out

    def test_writes_csv(self, tmp_path):
        path = tmp_path / "delay.csv"
        code = main(["--model", "delay", "--years", "4", "--output", str(path),
                     "--quiet", "--log-level", "WARNING"])
        assert code == 0
        assert len(pd.read_csv(path)) == 5

    def test_output_directory(self, tmp_path):
        code = main(["--model", "age", "--years", "3", "--output-dir", str(tmp_path),
                     "--quiet", "--log-level", "WARNING"])
        assert code == 0
        assert len(list(tmp_path.glob("age_reference_*.csv"))) == 1

    def test_config_file_with_overrides(self, tmp_path):
        config = tmp_path / "scenario.json"
        config.write_text(json.dumps(scenario_to_dict(reference_scenario("delay"))))
        output = tmp_path / "out.csv"
        code = main(["--config", str(config), "--years", "2", "--steps-per-year", "10",
                     "--output", str(output), "--quiet", "--log-level", "WARNING"])
        assert code == 0
        assert list(pd.read_csv(output)["Time"]) == [0.0, 1.0, 2.0]

    def test_plot(self, tmp_path):
        image = tmp_path / "run.png"
        code = main(["--model", "simple", "--plot", str(image), "--quiet",
                     "--log-level", "WARNING"])
        assert code == 0
        assert image.exists()

    def test_invalid_config_returns_error(self, tmp_path):
        config = tmp_path / "bad.json"
        config.write_text(json.dumps({"model": "simple", "years": 5}))
        assert main(["--config", str(config), "--quiet", "--log-level", "CRITICAL"]) == 1

    def test_sub_steps_rejected_for_simple(self):
        assert main(["--model", "simple", "--steps-per-year", "4", "--quiet",
                     "--log-level", "CRITICAL"]) == 1

    def test_bad_log_level(self):
        with pytest.raises(SystemExit):
            main(["--log-level", "chatty"])
