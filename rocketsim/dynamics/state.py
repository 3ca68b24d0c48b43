"""6DOF state representation for rocket flight simulation.

The state vector contains:
- Position (3): [x, y, z] in the launch-site East-North-Up frame, z = altitude
- Velocity (3): [vx, vy, vz] in the same frame
- Quaternion (4): [q0, q1, q2, q3] attitude (scalar-first convention)
- Angular velocity (3): [p, q, r] body rates in body frame
- Mass (1): current vehicle mass

Total: 14 state variables, plus time and the active stage index.

Coordinate frames:
- Inertial: flat, Earth-fixed East-North-Up frame with origin at the pad
- Body: Vehicle body frame, thrust axis along +Z

Quaternion convention:
- Scalar-first: q = [q0, q1, q2, q3] where q0 is the scalar part
- Represents rotation from body to inertial frame
"""

from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from rocketsim.vehicle.mission import Mission

STATE_SIZE = 14

# =============================================================================
# Quaternion Utilities
# =============================================================================


@beartype
def normalize_quaternion(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Normalize a quaternion to unit length."""
    norm = np.linalg.norm(q)
    if norm < 1e-10:
        return np.array([1.0, 0.0, 0.0, 0.0])
    return q / norm


@beartype
def quaternion_to_dcm(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert quaternion to Direction Cosine Matrix (DCM).

    Args:
        q: Quaternion [q0, q1, q2, q3] representing rotation from frame A to B

    Returns:
        3x3 DCM that transforms vectors from frame A to frame B
    """
    q = normalize_quaternion(q)
    q0, q1, q2, q3 = q

    return np.array([
        [1 - 2*(q2**2 + q3**2), 2*(q1*q2 - q0*q3), 2*(q1*q3 + q0*q2)],
        [2*(q1*q2 + q0*q3), 1 - 2*(q1**2 + q3**2), 2*(q2*q3 - q0*q1)],
        [2*(q1*q3 - q0*q2), 2*(q2*q3 + q0*q1), 1 - 2*(q1**2 + q2**2)],
    ])


# =============================================================================
# State Classes
# =============================================================================


@beartype
@dataclass
class RigidBodyState:
    """6DOF state of the vehicle at one instant.

    The attitude is normalized on construction so every stored sample is a
    unit quaternion.

    Attributes:
        time: Elapsed time since ignition [s]
        position: [x, y, z] position in inertial frame [m]
        velocity: [vx, vy, vz] velocity in inertial frame [m/s]
        attitude: [q0, q1, q2, q3] body-to-inertial quaternion (scalar-first)
        angular_velocity: [p, q, r] body angular rates [rad/s]
        mass: Current vehicle mass [kg]
        active_stage_index: Index of the firing (or last fired) stage
    """
    time: float
    position: NDArray[np.float64]
    velocity: NDArray[np.float64]
    attitude: NDArray[np.float64]
    angular_velocity: NDArray[np.float64]
    mass: float
    active_stage_index: int = 0

    def __post_init__(self) -> None:
        """Validate and normalize state."""
        self.position = np.asarray(self.position, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)
        self.attitude = normalize_quaternion(np.asarray(self.attitude, dtype=np.float64))
        self.angular_velocity = np.asarray(self.angular_velocity, dtype=np.float64)

        if self.position.shape != (3,):
            raise ValueError(f"Position must be shape (3,), got {self.position.shape}")
        if self.velocity.shape != (3,):
            raise ValueError(f"Velocity must be shape (3,), got {self.velocity.shape}")
        if self.attitude.shape != (4,):
            raise ValueError(f"Attitude must be shape (4,), got {self.attitude.shape}")
        if self.angular_velocity.shape != (3,):
            raise ValueError(f"Angular velocity must be shape (3,), got {self.angular_velocity.shape}")

    @classmethod
    def at_ignition(cls, mission: Mission) -> "RigidBodyState":
        """Vehicle on the pad: at rest, pointing up, fully fuelled."""
        return cls(
            time=0.0,
            position=np.zeros(3),
            velocity=np.zeros(3),
            attitude=np.array([1.0, 0.0, 0.0, 0.0]),
            angular_velocity=np.zeros(3),
            mass=mission.total_mass,
            active_stage_index=0,
        )

    def to_array(self) -> NDArray[np.float64]:
        """Convert state to flat array for integration."""
        return np.concatenate([
            self.position,
            self.velocity,
            self.attitude,
            self.angular_velocity,
            [self.mass],
        ])

    @classmethod
    def from_array(
        cls,
        arr: NDArray[np.float64],
        time: float = 0.0,
        active_stage_index: int = 0,
    ) -> "RigidBodyState":
        """Create state from flat array."""
        if arr.shape != (STATE_SIZE,):
            raise ValueError(f"State array must be shape ({STATE_SIZE},), got {arr.shape}")
        return cls(
            time=time,
            position=arr[0:3],
            velocity=arr[3:6],
            attitude=arr[6:10],
            angular_velocity=arr[10:13],
            mass=float(arr[13]),
            active_stage_index=active_stage_index,
        )

    def copy(self) -> "RigidBodyState":
        """Create a copy of this state."""
        return RigidBodyState(
            time=self.time,
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            attitude=self.attitude.copy(),
            angular_velocity=self.angular_velocity.copy(),
            mass=self.mass,
            active_stage_index=self.active_stage_index,
        )

    @property
    def dcm_body_to_inertial(self) -> NDArray[np.float64]:
        """Get DCM that transforms vectors from body to inertial frame."""
        return quaternion_to_dcm(self.attitude)

    @property
    def altitude(self) -> float:
        """Height above the pad [m]."""
        return float(self.position[2])

    @property
    def speed(self) -> float:
        """Get speed magnitude [m/s]."""
        return float(np.linalg.norm(self.velocity))

    @property
    def body_axis(self) -> NDArray[np.float64]:
        """Body +Z (thrust) axis expressed in the inertial frame."""
        return self.dcm_body_to_inertial[:, 2]

    @property
    def pitch(self) -> float:
        """Elevation of the body axis above the horizontal [rad]."""
        return float(np.arcsin(np.clip(self.body_axis[2], -1.0, 1.0)))

    @property
    def angle_of_attack(self) -> float:
        """Total angle between body axis and velocity [rad], zero below 1 m/s."""
        speed = self.speed
        if speed < 1.0:
            return 0.0
        cos_alpha = np.dot(self.velocity, self.body_axis) / speed
        return float(np.arccos(np.clip(cos_alpha, -1.0, 1.0)))

    def velocity_body(self) -> NDArray[np.float64]:
        """Get velocity in body frame [m/s]."""
        return self.dcm_body_to_inertial.T @ self.velocity


@beartype
@dataclass
class StateDerivative:
    """Time derivative of the state vector.

    Attributes:
        position_dot: d(position)/dt = velocity [m/s]
        velocity_dot: d(velocity)/dt = acceleration [m/s^2]
        attitude_dot: d(quaternion)/dt, not unit length
        angular_velocity_dot: d(omega)/dt = angular acceleration [rad/s^2]
        mass_dot: d(mass)/dt [kg/s] (negative for propellant consumption)
    """
    position_dot: NDArray[np.float64]
    velocity_dot: NDArray[np.float64]
    attitude_dot: NDArray[np.float64]
    angular_velocity_dot: NDArray[np.float64]
    mass_dot: float

    def to_array(self) -> NDArray[np.float64]:
        """Convert to flat array for integration."""
        return np.concatenate([
            self.position_dot,
            self.velocity_dot,
            self.attitude_dot,
            self.angular_velocity_dot,
            [self.mass_dot],
        ])

    @classmethod
    def from_array(cls, arr: NDArray[np.float64]) -> "StateDerivative":
        """Split a flat derivative vector into its fields."""
        return cls(
            position_dot=arr[0:3],
            velocity_dot=arr[3:6],
            attitude_dot=arr[6:10],
            angular_velocity_dot=arr[10:13],
            mass_dot=float(arr[13]),
        )


# =============================================================================
# Commands
# =============================================================================


@beartype
@dataclass(frozen=True)
class GuidanceCommand:
    """Gimbal deflection command for one control step.

    Attributes:
        pitch: Pitch-axis gimbal angle [rad]
        yaw: Yaw-axis gimbal angle [rad]
    """
    pitch: float = 0.0
    yaw: float = 0.0

    def clamped(self, max_gimbal: float) -> "GuidanceCommand":
        """Copy with both axes limited to +/- max_gimbal."""
        return GuidanceCommand(
            pitch=min(max(self.pitch, -max_gimbal), max_gimbal),
            yaw=min(max(self.yaw, -max_gimbal), max_gimbal),
        )
