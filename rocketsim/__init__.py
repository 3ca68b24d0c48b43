"""rocketsim - 6DOF flight simulation for multi-stage rockets.

This package simulates a rocket from ignition to ground impact: rigid-body
dynamics, aerodynamics, gravity, staging and closed-loop thrust vector
control, plus orbital-mechanics and export utilities.

Example:
    >>> from rocketsim import SimConfig, simulate
    >>> from rocketsim.vehicle import presets
    >>>
    >>> result = simulate(presets.pathfinder(), SimConfig(dt=0.005, max_time=300.0))
    >>> summary = result.summary()
    >>> print(f"Apogee: {summary.apogee:.0f} m at t={summary.apogee_time:.1f} s")
"""

import logging

__version__ = "0.1.0"

# Dynamics
from rocketsim.dynamics import (
    AeroConfig,
    ForceTorqueModel,
    GuidanceCommand,
    RigidBodyState,
    StateDerivative,
    rk4_step,
    state_derivatives,
)

# Environment
from rocketsim.environment import Atmosphere, AtmosphereResult

# Errors
from rocketsim.errors import ConfigurationError, ExportError, RocketSimError

# Export
from rocketsim.export import trajectory_frame, write_summary_json, write_trajectory_csv

# Guidance, navigation and control
from rocketsim.gnc import (
    BangBangController,
    Controller,
    FunctionController,
    OpenLoopController,
    PIDController,
    PIDGains,
    PitchProgram,
    TVCController,
)

# Orbital mechanics
from rocketsim.orbital import (
    HohmannTransfer,
    KeplerianElements,
    OrbitalState,
    circular_velocity,
    escape_velocity,
    hohmann,
    propagate_orbit,
)

# Visualization
from rocketsim.plotting import plot_trajectory, plot_trajectory_profile

# Simulation
from rocketsim.simulation import (
    AltitudeDetector,
    ApogeeDetector,
    EventKind,
    SimConfig,
    SimEvent,
    SimulationResult,
    simulate,
    simulate_with,
)
from rocketsim.summary import FlightSummary

# Vehicle definition
from rocketsim.vehicle import Mission, MissionBuilder, Stage, StageBuilder, presets

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Errors
    "RocketSimError",
    "ConfigurationError",
    "ExportError",
    # Vehicle
    "Stage",
    "StageBuilder",
    "Mission",
    "MissionBuilder",
    "presets",
    # Dynamics
    "RigidBodyState",
    "StateDerivative",
    "GuidanceCommand",
    "ForceTorqueModel",
    "AeroConfig",
    "state_derivatives",
    "rk4_step",
    # Environment
    "Atmosphere",
    "AtmosphereResult",
    # GNC
    "Controller",
    "TVCController",
    "BangBangController",
    "OpenLoopController",
    "FunctionController",
    "PIDController",
    "PIDGains",
    "PitchProgram",
    # Simulation
    "SimConfig",
    "SimulationResult",
    "simulate",
    "simulate_with",
    "EventKind",
    "SimEvent",
    "ApogeeDetector",
    "AltitudeDetector",
    # Analysis and output
    "FlightSummary",
    "trajectory_frame",
    "write_trajectory_csv",
    "write_summary_json",
    "plot_trajectory",
    "plot_trajectory_profile",
    # Orbital
    "KeplerianElements",
    "HohmannTransfer",
    "OrbitalState",
    "hohmann",
    "circular_velocity",
    "escape_velocity",
    "propagate_orbit",
]
