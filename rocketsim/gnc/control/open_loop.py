"""Open-loop and externally supplied control laws.

- BangBangController: fixed gimbal kick inside a time window
- OpenLoopController: gimbal angles interpolated from a time table
- FunctionController: adapts any callable to the Controller interface

Example:
    >>> from rocketsim.gnc.control import BangBangController
    >>> from rocketsim.simulation import simulate_with
    >>>
    >>> result = simulate_with(mission, BangBangController())
"""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
from beartype import beartype

from rocketsim.dynamics.state import GuidanceCommand, RigidBodyState
from rocketsim.gnc.controller import Controller
from rocketsim.vehicle.mission import Mission

ControlFunction = Callable[[RigidBodyState, Mission, float], GuidanceCommand]


@beartype
@dataclass
class BangBangController(Controller):
    """Pitch-over by a constant gimbal kick, otherwise zero gimbal.

    Attributes:
        pitchover_start: Kick begins after this time [s]
        pitchover_end: Kick ends before this time [s]
        gimbal_kick: Kick magnitude [rad], applied nose-down
    """
    pitchover_start: float = 3.0
    pitchover_end: float = 8.0
    gimbal_kick: float = 0.08

    def control(
        self,
        state: RigidBodyState,
        mission: Mission,
        dt: float,
    ) -> GuidanceCommand:
        if self.pitchover_start < state.time < self.pitchover_end:
            return GuidanceCommand(pitch=-self.gimbal_kick)
        return GuidanceCommand()

    def name(self) -> str:
        return "BangBang"


@beartype
@dataclass
class OpenLoopController(Controller):
    """Gimbal profile tabulated against time.

    Angles are linearly interpolated and held at the end values outside
    the table.

    Attributes:
        times: Strictly increasing sample times [s]
        pitch: Pitch gimbal angle at each time [rad]
        yaw: Yaw gimbal angle at each time [rad], zeros if omitted
    """
    times: list[float]
    pitch: list[float]
    yaw: list[float] | None = None

    def __post_init__(self) -> None:
        """Validate inputs."""
        if len(self.times) < 2:
            raise ValueError("Need at least 2 points")
        if len(self.pitch) != len(self.times):
            raise ValueError("times and pitch must have same length")
        if self.yaw is not None and len(self.yaw) != len(self.times):
            raise ValueError("times and yaw must have same length")
        if np.any(np.diff(self.times) <= 0):
            raise ValueError("times must be strictly increasing")

    def control(
        self,
        state: RigidBodyState,
        mission: Mission,
        dt: float,
    ) -> GuidanceCommand:
        pitch = float(np.interp(state.time, self.times, self.pitch))
        yaw = float(np.interp(state.time, self.times, self.yaw)) if self.yaw else 0.0
        return GuidanceCommand(pitch=pitch, yaw=yaw)

    def name(self) -> str:
        return "OpenLoop"


class FunctionController(Controller):
    """Wrap a plain function ``fn(state, mission, dt) -> GuidanceCommand``.

    Args:
        fn: Control law
        label: Name reported by ``name()``
        on_reset: Optional callback invoked by ``reset()``
    """

    def __init__(
        self,
        fn: ControlFunction,
        label: str = "function",
        on_reset: Callable[[], None] | None = None,
    ) -> None:
        self._fn = fn
        self._label = label
        self._on_reset = on_reset

    def control(
        self,
        state: RigidBodyState,
        mission: Mission,
        dt: float,
    ) -> GuidanceCommand:
        return self._fn(state, mission, dt)

    def reset(self) -> None:
        if self._on_reset is not None:
            self._on_reset()

    def name(self) -> str:
        return self._label
