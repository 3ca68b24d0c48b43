"""Tests for trajectory and summary export."""

import json

import numpy as np
import polars as pl
import pytest

from rocketsim.dynamics.state import RigidBodyState
from rocketsim.errors import ExportError
from rocketsim.export import (
    TRAJECTORY_COLUMNS,
    NumpyEncoder,
    summary_document,
    trajectory_frame,
    write_summary_json,
    write_trajectory_csv,
)
from rocketsim.summary import FlightSummary
from rocketsim.vehicle import presets


@pytest.fixture
def mission():
    return presets.pathfinder()


@pytest.fixture
def states(mission):
    ignition = RigidBodyState.at_ignition(mission)
    climbing = RigidBodyState(
        time=1.0,
        position=np.array([0.0, 0.0, 50.0]),
        velocity=np.array([0.0, 0.0, 100.0]),
        attitude=np.array([1.0, 0.0, 0.0, 0.0]),
        angular_velocity=np.zeros(3),
        mass=75.0,
    )
    staged = RigidBodyState(
        time=2.0,
        position=np.array([0.0, 0.0, 150.0]),
        velocity=np.array([0.0, 0.0, 90.0]),
        attitude=np.array([1.0, 0.0, 0.0, 0.0]),
        angular_velocity=np.zeros(3),
        mass=14.0,
        active_stage_index=1,
    )
    return [ignition, climbing, staged]


class TestTrajectoryFrame:
    """Test the tabular trajectory."""

    def test_columns(self, states):
        df = trajectory_frame(states)
        assert tuple(df.columns) == TRAJECTORY_COLUMNS
        assert df.height == 3

    def test_dtypes(self, states):
        df = trajectory_frame(states)
        assert df.schema["stage_idx"] == pl.Int64
        assert df.schema["pos_z"] == pl.Float64

    def test_values(self, states):
        df = trajectory_frame(states)
        assert df["pos_z"].to_list() == [0.0, 50.0, 150.0]
        assert df["stage_idx"].to_list() == [0, 0, 1]
        assert df["pitch_deg"][0] == pytest.approx(90.0)
        assert df["quat_w"][0] == 1.0


class TestWriters:
    """Test writing files to disk."""

    def test_write_csv(self, tmp_path, states):
        path = write_trajectory_csv(tmp_path / "out" / "trajectory.csv", states)
        assert path.exists()

        df = pl.read_csv(path)
        assert df.height == 3
        assert df["mass"].to_list()[-1] == 14.0

    def test_write_json(self, tmp_path, mission, states):
        summary = FlightSummary.from_trajectory(states)
        path = write_summary_json(tmp_path / "summary.json", mission, summary)

        with open(path) as f:
            document = json.load(f)
        assert document["mission"] == {"name": "Pathfinder", "stages": 2}
        assert document["performance"]["apogee_m"] == 150.0

    def test_unwritable_directory(self, tmp_path, states):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(ExportError):
            write_trajectory_csv(blocker / "trajectory.csv", states)

    def test_unwritable_json(self, tmp_path, mission, states):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        summary = FlightSummary.from_trajectory(states)
        with pytest.raises(ExportError):
            write_summary_json(blocker / "summary.json", mission, summary)

    def test_summary_document(self, mission, states):
        summary = FlightSummary.from_trajectory(states)
        document = summary_document(mission, summary)
        assert document["performance"] == summary.to_dict()


class TestNumpyEncoder:
    """Test JSON encoding of numpy values."""

    def test_encodes_numpy(self):
        text = json.dumps(
            {"a": np.float64(1.5), "b": np.int64(2), "c": np.array([1.0, 2.0])},
            cls=NumpyEncoder,
        )
        assert json.loads(text) == {"a": 1.5, "b": 2, "c": [1.0, 2.0]}

    def test_rejects_unknown(self):
        with pytest.raises(TypeError):
            json.dumps({"a": object()}, cls=NumpyEncoder)
