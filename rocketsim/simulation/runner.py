"""Closed-loop flight simulation from ignition to ground impact.

The runner owns the loop. Each step it asks the controller for a gimbal
command, advances the truth state with RK4, applies stage separation and
checks for ground impact. Every recorded state has a matching command.

Example:
    >>> from rocketsim.simulation import SimConfig, simulate
    >>> from rocketsim.vehicle import presets
    >>>
    >>> result = simulate(presets.pathfinder(), SimConfig(dt=0.005, max_time=300.0))
    >>> print(f"Apogee: {result.altitude.max():.0f} m")
    >>> df = result.to_dataframe()
"""

import logging
import time as _time
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
import polars as pl
from beartype import beartype
from numpy.typing import NDArray

from rocketsim.dynamics.forces import ForceTorqueModel
from rocketsim.dynamics.rigid_body import rk4_step
from rocketsim.dynamics.state import GuidanceCommand, RigidBodyState
from rocketsim.environment.atmosphere import AtmosphereModel
from rocketsim.errors import ConfigurationError
from rocketsim.gnc.control.tvc import TVCController
from rocketsim.gnc.controller import Controller
from rocketsim.simulation.events import (
    ApogeeDetector,
    EventDetector,
    EventKind,
    SimEvent,
)
from rocketsim.simulation.staging import check_staging
from rocketsim.summary import FlightSummary
from rocketsim.vehicle.mission import Mission

logger = logging.getLogger(__name__)

# Altitude that must be exceeded before ground contact ends the run [m]
LAUNCH_ALTITUDE = 1.0

# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass
class SimConfig:
    """Simulation configuration.

    Attributes:
        dt: Fixed integration and control step [s]
        max_time: Run stops once simulated time reaches this [s]
    """
    dt: float = 0.005
    max_time: float = 600.0

    def __post_init__(self) -> None:
        """Validate inputs."""
        if self.dt <= 0:
            raise ConfigurationError(f"dt must be positive, got {self.dt}")
        if self.max_time <= 0:
            raise ConfigurationError(f"max_time must be positive, got {self.max_time}")


# =============================================================================
# Result
# =============================================================================


@dataclass
class SimulationResult:
    """Results from a completed simulation.

    Provides convenient access to trajectory data and analysis.
    ``states`` and ``commands`` are parallel: ``commands[i]`` produced
    ``states[i]`` (the ignition sample carries a zero command).
    ``atmosphere`` is the model the run was flown through; ``None`` means ISA.
    """
    mission: Mission
    config: SimConfig
    states: list[RigidBodyState]
    commands: list[GuidanceCommand]
    events: list[SimEvent] = field(default_factory=list)
    controller_name: str = "unnamed"
    atmosphere: AtmosphereModel | None = None

    def __len__(self) -> int:
        return len(self.states)

    @property
    def time(self) -> NDArray[np.float64]:
        """Time array [s]."""
        return np.array([s.time for s in self.states])

    @property
    def position(self) -> NDArray[np.float64]:
        """Position history [m], shape (N, 3)."""
        return np.array([s.position for s in self.states])

    @property
    def velocity(self) -> NDArray[np.float64]:
        """Velocity history [m/s], shape (N, 3)."""
        return np.array([s.velocity for s in self.states])

    @property
    def altitude(self) -> NDArray[np.float64]:
        """Altitude history [m]."""
        return np.array([s.altitude for s in self.states])

    @property
    def speed(self) -> NDArray[np.float64]:
        """Speed history [m/s]."""
        return np.array([s.speed for s in self.states])

    @property
    def mass(self) -> NDArray[np.float64]:
        """Mass history [kg]."""
        return np.array([s.mass for s in self.states])

    @property
    def stage_index(self) -> NDArray[np.int64]:
        """Active stage index history."""
        return np.array([s.active_stage_index for s in self.states], dtype=np.int64)

    @property
    def pitch(self) -> NDArray[np.float64]:
        """Body-axis pitch history [rad]."""
        return np.array([s.pitch for s in self.states])

    @property
    def apogee_state(self) -> RigidBodyState:
        """Recorded sample with the highest altitude."""
        return self.states[int(np.argmax(self.altitude))]

    @property
    def final_state(self) -> RigidBodyState:
        return self.states[-1]

    @property
    def max_stage_index(self) -> int:
        return max(s.active_stage_index for s in self.states)

    def events_of(self, kind: EventKind) -> list[SimEvent]:
        """Events of a single kind, in time order."""
        return [e for e in self.events if e.kind is kind]

    def summary(self) -> FlightSummary:
        """Key performance figures for this run, Mach taken from its atmosphere."""
        return FlightSummary.from_trajectory(self.states, self.atmosphere)

    def to_dataframe(self) -> pl.DataFrame:
        """Convert to Polars DataFrame."""
        return pl.DataFrame({
            "time": self.time,
            "altitude": self.altitude,
            "speed": self.speed,
            "mass": self.mass,
            "stage": self.stage_index,
            "pitch": self.pitch,
            "x": self.position[:, 0],
            "y": self.position[:, 1],
            "z": self.position[:, 2],
            "vx": self.velocity[:, 0],
            "vy": self.velocity[:, 1],
            "vz": self.velocity[:, 2],
            "gimbal_pitch": [c.pitch for c in self.commands],
            "gimbal_yaw": [c.yaw for c in self.commands],
        })


# =============================================================================
# Runner
# =============================================================================


def _record_event(
    events: list[SimEvent],
    kind: EventKind,
    state: RigidBodyState,
    detail: str = "",
) -> None:
    events.append(SimEvent(time=state.time, kind=kind, state=state, detail=detail))
    logger.debug("Event %s at t=%.3f s %s", kind.name, state.time, detail)


def _run_detectors(
    detectors: Sequence[EventDetector],
    events: list[SimEvent],
    prev: RigidBodyState,
    current: RigidBodyState,
) -> None:
    for detector in detectors:
        outcome = detector.check(prev, current)
        if outcome is None:
            continue
        if isinstance(outcome, EventKind):
            _record_event(events, outcome, current)
        else:
            _record_event(events, EventKind.CUSTOM, current, outcome)


@beartype
def simulate_with(
    mission: Mission,
    controller: Controller,
    config: SimConfig | None = None,
    model: ForceTorqueModel | None = None,
    detectors: Sequence[EventDetector] | None = None,
) -> SimulationResult:
    """Simulate a complete mission with the given controller.

    The controller is used as-is; call ``controller.reset()`` first to reuse
    one across runs.

    Args:
        mission: Vehicle to fly
        controller: Gimbal command source, queried once per step
        config: Step size and time limit
        model: Force/torque model (default ISA atmosphere, default aero)
        detectors: Passive event detectors (default: apogee)

    Returns:
        SimulationResult starting with the ignition sample
    """
    config = config or SimConfig()
    model = model or ForceTorqueModel()
    detectors = list(detectors) if detectors is not None else [ApogeeDetector()]
    dt = config.dt

    state = RigidBodyState.at_ignition(mission)
    states = [state]
    commands = [GuidanceCommand()]
    events: list[SimEvent] = []

    logger.info(
        "Starting '%s' with %s: %d stage(s), %.2f kg, dt=%g s, max_time=%g s",
        mission.name, controller.name(), mission.num_stages,
        mission.total_mass, dt, config.max_time,
    )
    wall_start = _time.perf_counter()

    launched = False
    while state.time < config.max_time:
        prev = state
        command = controller.control(state, mission, dt)

        state = rk4_step(state, mission, command, dt, model)

        if model.is_burning(prev.mass, prev.active_stage_index, mission) and not model.is_burning(
            state.mass, state.active_stage_index, mission
        ):
            stage_name = mission.stages[state.active_stage_index].name
            _record_event(events, EventKind.BURNOUT, state, stage_name)
            logger.info("Burnout of '%s' at t=%.3f s, alt=%.1f m", stage_name, state.time, state.altitude)

        staged = check_staging(state, mission)
        if staged.active_stage_index != state.active_stage_index:
            _record_event(
                events, EventKind.STAGING, staged,
                f"{state.active_stage_index} -> {staged.active_stage_index}",
            )
        state = staged

        if not launched and state.altitude > LAUNCH_ALTITUDE:
            launched = True
            _record_event(events, EventKind.LAUNCH, state)

        landed = launched and state.altitude <= 0.0
        if landed:
            state.position[2] = 0.0

        _run_detectors(detectors, events, prev, state)
        states.append(state)
        commands.append(command)

        if landed:
            _record_event(events, EventKind.LANDING, state, f"{state.speed:.1f} m/s")
            break

    result = SimulationResult(
        mission=mission,
        config=config,
        states=states,
        commands=commands,
        events=events,
        controller_name=controller.name(),
        atmosphere=model.atmosphere,
    )
    logger.info(
        "Finished '%s' at t=%.3f s after %d steps (%.2f s wall): apogee %.1f m",
        mission.name, state.time, len(states) - 1,
        _time.perf_counter() - wall_start, float(result.altitude.max()),
    )
    return result


@beartype
def simulate(mission: Mission, config: SimConfig | None = None) -> SimulationResult:
    """Simulate with the default TVCController."""
    return simulate_with(mission, TVCController(), config)
