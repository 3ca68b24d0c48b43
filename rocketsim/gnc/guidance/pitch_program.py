"""Pitch-program ascent guidance.

Three phases:
1. Vertical rise: commanded pitch is 90 degrees
2. Pitch-over: linear ramp from 90 degrees down to the target pitch
3. Gravity turn: commanded pitch follows the flight-path angle

Example:
    >>> from rocketsim.gnc.guidance import PitchProgram
    >>>
    >>> guidance = PitchProgram(vertical_time=2.0, pitchover_end=15.0)
    >>> pitch_cmd = guidance.pitch_command(state)  # rad above horizontal
"""

from dataclasses import dataclass

import numpy as np
from beartype import beartype

from rocketsim.dynamics.state import RigidBodyState
from rocketsim.vehicle.mission import Mission


@beartype
@dataclass
class PitchProgram:
    """Vertical rise, linear pitch-over, then velocity following.

    Attributes:
        vertical_time: End of the vertical rise [s]
        pitchover_end: End of the linear pitch-over [s]
        target_pitch: Pitch reached at the end of the pitch-over [rad]
        min_speed: Below this speed the gravity turn holds target_pitch [m/s]
    """
    vertical_time: float = 2.0
    pitchover_end: float = 15.0
    target_pitch: float = np.radians(45.0)
    min_speed: float = 5.0

    def __post_init__(self) -> None:
        """Validate inputs."""
        if self.pitchover_end <= self.vertical_time:
            raise ValueError("pitchover_end must be after vertical_time")

    @beartype
    def pitch_command(self, state: RigidBodyState, mission: Mission | None = None) -> float:
        """Get commanded pitch angle.

        Args:
            state: Current vehicle state
            mission: Mission being flown (unused by this program)

        Returns:
            Commanded pitch angle [rad] (0 = horizontal, pi/2 = vertical)
        """
        t = state.time

        if t < self.vertical_time:
            return np.pi / 2

        if t < self.pitchover_end:
            frac = (t - self.vertical_time) / (self.pitchover_end - self.vertical_time)
            return np.pi / 2 + frac * (self.target_pitch - np.pi / 2)

        speed = state.speed
        if speed > self.min_speed:
            return float(np.arcsin(np.clip(state.velocity[2] / speed, -1.0, 1.0)))
        return self.target_pitch
