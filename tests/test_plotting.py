"""Smoke tests for plotting."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from rocketsim.plotting import plot_trajectory, plot_trajectory_profile  # noqa: E402
from rocketsim.simulation import SimConfig, simulate  # noqa: E402
from rocketsim.vehicle import presets  # noqa: E402


@pytest.fixture(scope="module")
def result():
    """Two-stage flight cut off shortly after staging."""
    return simulate(presets.pathfinder(), SimConfig(dt=0.01, max_time=15.0))


def test_plot_trajectory(result):
    fig = plot_trajectory(result)
    assert isinstance(fig, Figure)
    assert len(fig.axes) == 4
    plt.close(fig)


def test_plot_trajectory_title(result):
    fig = plot_trajectory(result, title="Custom")
    assert fig.get_suptitle() == "Custom"
    plt.close(fig)


def test_plot_trajectory_profile(result):
    fig = plot_trajectory_profile(result)
    assert isinstance(fig, Figure)
    assert fig.axes[0].get_xlabel() == "Downrange (km)"
    plt.close(fig)
