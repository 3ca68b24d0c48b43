"""Thrust Vector Control (TVC) controller.

Default flight controller: a pitch program supplies the desired pitch,
and two independent PID loops turn the pitch and yaw errors into gimbal
angles. Gimbal travel limits are applied by the force model, not here.

Example:
    >>> from rocketsim.gnc.control import TVCController, PIDGains
    >>>
    >>> tvc = TVCController(
    ...     pitch_gains=PIDGains(kp=2.0, ki=0.1, kd=0.5),
    ...     yaw_gains=PIDGains(kp=2.0, ki=0.1, kd=0.5),
    ... )
    >>> command = tvc.control(state, mission, dt=0.005)
"""

from dataclasses import dataclass, field

import numpy as np
from beartype import beartype

from rocketsim.dynamics.state import GuidanceCommand, RigidBodyState
from rocketsim.gnc.control.pid import PIDController, PIDGains
from rocketsim.gnc.controller import Controller
from rocketsim.gnc.guidance.pitch_program import PitchProgram
from rocketsim.vehicle.mission import Mission


@beartype
@dataclass
class TVCController(Controller):
    """Pitch-program guidance closed by pitch and yaw PID loops.

    Attributes:
        pitch_gains: PID gains for the pitch gimbal axis
        yaw_gains: PID gains for the yaw gimbal axis
        guidance: Desired pitch as a function of the state
    """
    # Tuned for a small sounding rocket (Ixx ~ 5 kg*m^2, nozzle ~ 1 m)
    pitch_gains: PIDGains = field(default_factory=lambda: PIDGains(kp=2.0, ki=0.1, kd=0.5))
    yaw_gains: PIDGains = field(default_factory=lambda: PIDGains(kp=2.0, ki=0.1, kd=0.5))
    guidance: PitchProgram = field(default_factory=PitchProgram)

    # Internal controllers
    _pitch_ctrl: PIDController = field(init=False, repr=False)
    _yaw_ctrl: PIDController = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialize internal controllers."""
        self._pitch_ctrl = PIDController.from_gains(self.pitch_gains)
        self._yaw_ctrl = PIDController.from_gains(self.yaw_gains)

    @beartype
    def reset(self) -> None:
        """Reset controller state."""
        self._pitch_ctrl.reset()
        self._yaw_ctrl.reset()

    def name(self) -> str:
        return "TvcController"

    @staticmethod
    def yaw_error(state: RigidBodyState) -> float:
        """Angle of the body axis out of the vertical North plane [rad]."""
        ax, ay, az = state.body_axis
        return float(-np.arctan2(ax, np.sqrt(ay * ay + az * az)))

    @beartype
    def control(
        self,
        state: RigidBodyState,
        mission: Mission,
        dt: float,
    ) -> GuidanceCommand:
        """Compute gimbal commands for the next step.

        Args:
            state: Current vehicle state
            mission: Mission being flown
            dt: Control step [s]

        Returns:
            Unclamped (pitch, yaw) gimbal command [rad]
        """
        pitch_error = self.guidance.pitch_command(state, mission) - state.pitch

        return GuidanceCommand(
            pitch=self._pitch_ctrl.update(pitch_error, dt),
            yaw=self._yaw_ctrl.update(self.yaw_error(state), dt),
        )
