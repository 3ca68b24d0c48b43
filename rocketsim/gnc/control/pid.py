"""PID controller implementation.

Provides a discrete PID controller with:
- Anti-windup clamp on the integral accumulator
- Backward-difference derivative on the error
- Optional output saturation

Each instance owns its accumulator (integral, previous error); the output
depends on the order of calls until ``reset()``.

Example:
    >>> from rocketsim.gnc.control import PIDController
    >>>
    >>> ctrl = PIDController(kp=2.0, ki=0.1, kd=0.5)
    >>> error = target_pitch - current_pitch
    >>> gimbal = ctrl.update(error, dt=0.005)
"""

from dataclasses import dataclass, field

import numpy as np
from beartype import beartype

# =============================================================================
# PID Gains
# =============================================================================


@beartype
@dataclass
class PIDGains:
    """PID controller gains.

    Attributes:
        kp: Proportional gain
        ki: Integral gain
        kd: Derivative gain
    """
    kp: float = 1.0
    ki: float = 0.0
    kd: float = 0.0


# =============================================================================
# PID Controller
# =============================================================================


@beartype
@dataclass
class PIDController:
    """Discrete PID controller.

    Implements the parallel PID form:
        u = kp * e + ki * integral(e) + kd * de/dt

    Attributes:
        kp: Proportional gain
        ki: Integral gain
        kd: Derivative gain
        integral_limits: (min, max) clamp on the integral accumulator
        output_limits: (min, max) output limits, None for unbounded
    """
    kp: float = 1.0
    ki: float = 0.0
    kd: float = 0.0
    integral_limits: tuple[float, float] | None = (-1.0, 1.0)
    output_limits: tuple[float, float] | None = None

    # Internal state
    _integral: float = field(default=0.0, init=False, repr=False)
    _prev_error: float = field(default=0.0, init=False, repr=False)

    @classmethod
    def from_gains(
        cls,
        gains: PIDGains,
        output_limits: tuple[float, float] | None = None,
    ) -> "PIDController":
        """Create controller from PIDGains object."""
        return cls(
            kp=gains.kp,
            ki=gains.ki,
            kd=gains.kd,
            output_limits=output_limits,
        )

    @beartype
    def reset(self) -> None:
        """Reset controller state (integral and previous error)."""
        self._integral = 0.0
        self._prev_error = 0.0

    @beartype
    def update(self, error: float, dt: float) -> float:
        """Compute PID control output.

        Args:
            error: Current error (setpoint - measurement)
            dt: Time step [s]; the derivative term is zero when dt <= 0

        Returns:
            Control output
        """
        p_term = self.kp * error

        self._integral += error * dt
        if self.integral_limits:
            self._integral = float(np.clip(
                self._integral,
                self.integral_limits[0],
                self.integral_limits[1],
            ))
        i_term = self.ki * self._integral

        derivative = (error - self._prev_error) / dt if dt > 0 else 0.0
        d_term = self.kd * derivative

        self._prev_error = error

        output = p_term + i_term + d_term

        if self.output_limits:
            output = np.clip(output, self.output_limits[0], self.output_limits[1])

        return float(output)

    @property
    def integral(self) -> float:
        """Current (clamped) integral accumulator."""
        return self._integral
