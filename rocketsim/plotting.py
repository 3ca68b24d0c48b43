"""Visualization module for rocketsim.

Provides plotting functions for:
- Flight history (altitude, speed, pitch, mass against time)
- Trajectory profile (downrange against altitude)

All plots use matplotlib with a consistent, professional style.
"""

import matplotlib.pyplot as plt
import numpy as np
from beartype import beartype
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from rocketsim.simulation.events import EventKind
from rocketsim.simulation.runner import SimulationResult

# =============================================================================
# Plot Style Configuration
# =============================================================================

# Professional color palette
COLORS = {
    "primary": "#2E86AB",  # Steel blue
    "secondary": "#A23B72",  # Berry
    "accent": "#F18F01",  # Orange
    "staging": "#E63946",  # Stage separation markers
    "grid": "#CCCCCC",  # Grid lines
    "text": "#333333",  # Text color
}

# Default figure size
DEFAULT_FIGSIZE = (12, 8)


def _setup_style() -> None:
    """Configure matplotlib style for consistent appearance."""
    plt.rcParams.update(
        {
            "font.family": "sans-serif",
            "font.sans-serif": ["Helvetica", "Arial", "DejaVu Sans"],
            "font.size": 11,
            "axes.titlesize": 14,
            "axes.labelsize": 12,
            "axes.linewidth": 1.2,
            "axes.edgecolor": COLORS["text"],
            "axes.labelcolor": COLORS["text"],
            "xtick.labelsize": 10,
            "ytick.labelsize": 10,
            "xtick.color": COLORS["text"],
            "ytick.color": COLORS["text"],
            "legend.fontsize": 10,
            "figure.titlesize": 16,
            "grid.alpha": 0.5,
            "grid.linewidth": 0.8,
        }
    )


def _mark_staging(ax: Axes, staging_times: list[float]) -> None:
    for i, t in enumerate(staging_times):
        ax.axvline(
            x=t,
            color=COLORS["staging"],
            linestyle="--",
            alpha=0.7,
            label="Staging" if i == 0 else None,
        )


# =============================================================================
# Flight History
# =============================================================================


@beartype
def plot_trajectory(
    result: SimulationResult,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
    title: str | None = None,
) -> Figure:
    """Plot the flight history of a simulation run.

    Four panels against time: altitude, speed, body pitch and mass, with
    stage separations marked.

    Args:
        result: Completed simulation
        figsize: Figure size
        title: Optional figure title (defaults to the mission name)

    Returns:
        matplotlib Figure with four subplots
    """
    _setup_style()

    t = result.time
    staging_times = [e.time for e in result.events_of(EventKind.STAGING)]

    fig, axes = plt.subplots(2, 2, figsize=figsize, sharex=True)
    ax_alt, ax_speed, ax_pitch, ax_mass = axes.flat

    ax_alt.plot(t, result.altitude / 1000.0, color=COLORS["primary"], linewidth=2)
    ax_alt.set_ylabel("Altitude (km)")
    ax_alt.set_title("Altitude")

    ax_speed.plot(t, result.speed, color=COLORS["accent"], linewidth=2)
    ax_speed.set_ylabel("Speed (m/s)")
    ax_speed.set_title("Speed")

    ax_pitch.plot(t, np.degrees(result.pitch), color=COLORS["secondary"], linewidth=2)
    ax_pitch.set_ylabel("Pitch (deg)")
    ax_pitch.set_title("Body Pitch")

    ax_mass.plot(t, result.mass, color=COLORS["primary"], linewidth=2)
    ax_mass.set_ylabel("Mass (kg)")
    ax_mass.set_title("Vehicle Mass")

    for ax in axes.flat:
        _mark_staging(ax, staging_times)
        ax.grid(True, alpha=0.3)
    for ax in axes[1]:
        ax.set_xlabel("Time (s)")
    if staging_times:
        ax_alt.legend()

    fig.suptitle(title or f"Flight History: {result.mission.name}", fontsize=14)
    fig.tight_layout()
    return fig


# =============================================================================
# Trajectory Profile
# =============================================================================


@beartype
def plot_trajectory_profile(
    result: SimulationResult,
    figsize: tuple[float, float] = (10, 6),
) -> Figure:
    """Plot altitude against horizontal downrange distance.

    Args:
        result: Completed simulation
        figsize: Figure size

    Returns:
        matplotlib Figure
    """
    _setup_style()

    position = result.position
    downrange_km = np.hypot(position[:, 0], position[:, 1]) / 1000.0
    altitude_km = position[:, 2] / 1000.0

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(downrange_km, altitude_km, color=COLORS["primary"], linewidth=2)

    apogee = result.apogee_state
    ax.scatter(
        [np.hypot(apogee.position[0], apogee.position[1]) / 1000.0],
        [apogee.altitude / 1000.0],
        c=COLORS["accent"], s=80, zorder=3,
        label=f"Apogee {apogee.altitude / 1000.0:.1f} km",
    )

    for event in result.events_of(EventKind.STAGING):
        p = event.state.position
        ax.scatter(
            [np.hypot(p[0], p[1]) / 1000.0], [p[2] / 1000.0],
            c=COLORS["staging"], marker="x", s=80, zorder=3,
            label="Staging",
        )

    ax.set_xlabel("Downrange (km)")
    ax.set_ylabel("Altitude (km)")
    ax.set_title(f"Trajectory Profile: {result.mission.name}")
    ax.grid(True, alpha=0.3)
    ax.legend()

    fig.tight_layout()
    return fig
