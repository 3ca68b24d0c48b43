"""Data export utilities for rocket simulation.

- Trajectory table (one row per recorded state) as a polars DataFrame / CSV
- Flight summary as JSON
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path

import numpy as np
import polars as pl

from rocketsim.dynamics.state import RigidBodyState
from rocketsim.errors import ExportError
from rocketsim.summary import FlightSummary
from rocketsim.vehicle.mission import Mission

logger = logging.getLogger(__name__)

TRAJECTORY_COLUMNS = (
    "time",
    "pos_x", "pos_y", "pos_z",
    "vel_x", "vel_y", "vel_z",
    "quat_w", "quat_x", "quat_y", "quat_z",
    "omega_x", "omega_y", "omega_z",
    "mass",
    "stage_idx",
    "pitch_deg",
    "alpha_deg",
)


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder for NumPy arrays."""
    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


def _prepare_path(filepath: str | Path) -> Path:
    path = Path(filepath)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ExportError(f"Cannot create directory for {path}: {exc}") from exc
    return path


def trajectory_frame(states: Sequence[RigidBodyState]) -> pl.DataFrame:
    """Tabulate a trajectory, one row per state."""
    position = np.array([s.position for s in states]).reshape(-1, 3)
    velocity = np.array([s.velocity for s in states]).reshape(-1, 3)
    attitude = np.array([s.attitude for s in states]).reshape(-1, 4)
    omega = np.array([s.angular_velocity for s in states]).reshape(-1, 3)

    columns = {
        "time": [s.time for s in states],
        "pos_x": position[:, 0], "pos_y": position[:, 1], "pos_z": position[:, 2],
        "vel_x": velocity[:, 0], "vel_y": velocity[:, 1], "vel_z": velocity[:, 2],
        "quat_w": attitude[:, 0], "quat_x": attitude[:, 1],
        "quat_y": attitude[:, 2], "quat_z": attitude[:, 3],
        "omega_x": omega[:, 0], "omega_y": omega[:, 1], "omega_z": omega[:, 2],
        "mass": [s.mass for s in states],
        "stage_idx": [s.active_stage_index for s in states],
        "pitch_deg": [float(np.degrees(s.pitch)) for s in states],
        "alpha_deg": [float(np.degrees(s.angle_of_attack)) for s in states],
    }
    schema = {name: pl.Float64 for name in TRAJECTORY_COLUMNS}
    schema["stage_idx"] = pl.Int64
    return pl.DataFrame(columns, schema=schema)


def write_trajectory_csv(filepath: str | Path, states: Sequence[RigidBodyState]) -> Path:
    """Export a trajectory to CSV.

    Args:
        filepath: Destination file; parent directories are created
        states: Recorded states, in time order

    Returns:
        Path written

    Raises:
        ExportError: If the file cannot be written
    """
    path = _prepare_path(filepath)
    try:
        trajectory_frame(states).write_csv(path)
    except OSError as exc:
        raise ExportError(f"Failed to write trajectory to {path}: {exc}") from exc

    logger.info("Exported %d trajectory rows to %s", len(states), path)
    return path


def summary_document(mission: Mission, summary: FlightSummary) -> dict:
    """Mission identity plus performance block, ready for JSON."""
    return {
        "mission": {
            "name": mission.name,
            "stages": mission.num_stages,
        },
        "performance": summary.to_dict(),
    }


def write_summary_json(
    filepath: str | Path,
    mission: Mission,
    summary: FlightSummary,
) -> Path:
    """Export a flight summary to JSON.

    Raises:
        ExportError: If the file cannot be written
    """
    path = _prepare_path(filepath)
    try:
        with open(path, "w") as f:
            json.dump(summary_document(mission, summary), f, cls=NumpyEncoder, indent=2)
    except OSError as exc:
        raise ExportError(f"Failed to write summary to {path}: {exc}") from exc

    logger.info("Exported flight summary to %s", path)
    return path
