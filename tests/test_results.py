"""
Tests for result files and console tables.
"""

from datetime import datetime

import numpy as np
import pandas as pd
import pytest

from pyfishery.config import reference_scenario
from pyfishery.core.errors import ConfigurationError
from pyfishery.core.simulation import run_simulation
from pyfishery.io.results import (
    format_timeseries,
    load_state,
    save_state,
    timestamped_filename,
    write_timeseries,
)


@pytest.fixture(scope="module")
def outputs():
    return {model: run_simulation(reference_scenario(model)) for model in ("simple", "delay", "age")}


class TestWriteTimeseries:
    """Tests for CSV output."""

    def test_timestamped_filename(self):
        when = datetime(2024, 3, 5, 14, 7, 9)
        assert timestamped_filename("simple", when=when) == "simple_20240305_140709.csv"

    def test_explicit_path(self, outputs, tmp_path):
        path = write_timeseries(outputs["simple"], path=tmp_path / "simple.csv")
        df = pd.read_csv(path)
        assert list(df.columns) == ["Year", "Stock", "Growth"]
        assert len(df) == 16
        assert df["Stock"].iloc[1] == pytest.approx(9666.66666667, abs=1e-8)

    def test_eight_decimal_places(self, outputs, tmp_path):
        path = write_timeseries(outputs["delay"], path=tmp_path / "delay.csv")
        first_row = path.read_text().splitlines()[1]
        assert first_row.split(",")[1] == "0.40000000"

    def test_generated_name_in_new_directory(self, outputs, tmp_path):
        directory = tmp_path / "results" / "runs"
        path = write_timeseries(outputs["age"], directory=directory)
        assert path.parent == directory
        assert path.name.startswith("age_reference_")
        assert path.suffix == ".csv"


class TestFormatTimeseries:
    """Tests for the console tables."""

    def test_simple_table(self, outputs):
        lines = format_timeseries(outputs["simple"]).splitlines()
        assert lines[0] == "--- Simple Logistic Model Simulation ---"
        assert lines[1] == "Year | Fish Stock (tons)"
        assert lines[3] == "   0 | 10000.000000"
        assert lines[4] == "   1 | 9666.666667"
        assert len(lines) == 3 + 16

    def test_delay_table(self, outputs):
        lines = format_timeseries(outputs["delay"]).splitlines()
        assert lines[0] == "--- Delay Equation Model Simulation ---"
        assert len(lines) == 3 + 21
        assert lines[3].split("|")[1].strip() == "0.4000"

    def test_age_table(self, outputs):
        lines = format_timeseries(outputs["age"]).splitlines()
        assert lines[0] == "--- Age-Structured Model Simulation ---"
        assert "Total Catch" in lines[1]
        assert len(lines) == 3 + 26


class TestStateCheckpoint:
    """Tests for JSON state checkpoints."""

    @pytest.mark.parametrize("model", ["simple", "delay", "age"])
    def test_round_trip(self, outputs, tmp_path, model):
        state = outputs[model].end_state
        path = save_state(state, model, tmp_path / "state.json")
        loaded_model, loaded = load_state(path)
        assert loaded_model == model
        assert loaded.to_dict() == state.to_dict()

    def test_reloaded_state_continues_identically(self, outputs, tmp_path):
        scenario = reference_scenario("age")
        path = save_state(outputs["age"].end_state, "age", tmp_path / "age.json")
        _, state = load_state(path)
        a = run_simulation(scenario, start_state=outputs["age"].end_state)
        b = run_simulation(scenario, start_state=state)
        np.testing.assert_array_equal(a.end_state.numbers_at_age, b.end_state.numbers_at_age)

    def test_unknown_model(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"model": "ecosim", "state": {}}')
        with pytest.raises(ConfigurationError):
            load_state(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_state(tmp_path / "absent.json")

    @pytest.mark.parametrize(
        "text, reason",
        [
            ('{"model": "delay", "state": {"stock": NaN, "effort": 0.4, "market_stock": 0.1}}', "finite"),
            ('{"model": "simple", "state": {"stock": -250.0}}', "stock must be >= 0"),
            ('{"model": "delay", "state": {"stock": 1.5, "effort": 0.4, "market_stock": 0.1}}', "normalized"),
            ('{"model": "age", "state": {"numbers_at_age": [1.0, -2.0, 3.0]}}', "numbers_at_age"),
        ],
    )
    def test_invalid_checkpoint_values_rejected(self, tmp_path, text, reason):
        """A checkpoint edited by hand is checked before it can start a run."""
        path = tmp_path / "edited.json"
        path.write_text(text)
        with pytest.raises(ConfigurationError) as excinfo:
            load_state(path)
        assert any(reason in problem for problem in excinfo.value.problems)
