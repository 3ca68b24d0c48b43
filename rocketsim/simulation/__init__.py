"""Simulation module for multi-stage rocket flights.

Closes the guidance/control loop around the RK4 integrator, applies stage
separation and records the trajectory with its events.

Example:
    >>> from rocketsim.simulation import SimConfig, simulate
    >>> from rocketsim.vehicle import presets
    >>>
    >>> result = simulate(presets.pathfinder(), SimConfig(dt=0.005, max_time=300.0))
    >>> for event in result.events:
    ...     print(f"{event.time:8.2f} s  {event.kind.name} {event.detail}")
"""

from rocketsim.simulation.events import (
    AltitudeDetector,
    ApogeeDetector,
    EventDetector,
    EventKind,
    SimEvent,
)
from rocketsim.simulation.runner import (
    SimConfig,
    SimulationResult,
    simulate,
    simulate_with,
)
from rocketsim.simulation.staging import check_staging, remaining_propellant

__all__ = [
    # Runner
    "SimConfig",
    "SimulationResult",
    "simulate",
    "simulate_with",
    # Staging
    "check_staging",
    "remaining_propellant",
    # Events
    "EventKind",
    "SimEvent",
    "EventDetector",
    "ApogeeDetector",
    "AltitudeDetector",
]
