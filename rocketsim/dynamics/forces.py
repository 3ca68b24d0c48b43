"""Force and torque model for the active stage.

Accumulates, for the stage currently firing:
- Gravity: inverse-square, along -z, no torque
- Thrust: rated thrust deflected by the clamped gimbal angles
- Drag: quadratic in speed, opposing the velocity
- Nozzle torque: gimbal lever arm behind the CG crossed with thrust
- Restoring torque: normal force acting at the center of pressure
- Damping torque: opposes the body rates

Net force is returned in the inertial frame, net torque in the body frame.
The arithmetic lives in a numba kernel; the Python layer resolves the
active stage, the burn state and the atmospheric density.

Example:
    >>> from rocketsim.dynamics import ForceTorqueModel, GuidanceCommand, RigidBodyState
    >>> from rocketsim.vehicle import presets
    >>>
    >>> mission = presets.sounding_rocket()
    >>> state = RigidBodyState.at_ignition(mission)
    >>> force, torque = ForceTorqueModel().compute(state, mission, GuidanceCommand())
"""

from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

from rocketsim.dynamics.state import GuidanceCommand, RigidBodyState
from rocketsim.environment.atmosphere import AtmosphereModel, get_atmosphere
from rocketsim.environment.gravity import _inverse_square_gravity, gravity_magnitude
from rocketsim.vehicle.mission import BURNOUT_THRESHOLD, Mission

# Below these speeds the aerodynamic terms are skipped
DRAG_SPEED_FLOOR = 1e-6  # [m/s]
MOMENT_SPEED_FLOOR = 1.0  # [m/s]
CP_OFFSET_EPSILON = 1e-6  # [m]

# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass
class AeroConfig:
    """Empirical coefficients of the closed-form aerodynamic moment model.

    Attributes:
        normal_force_coefficient: Normal force per radian of angle of attack,
            per unit dynamic pressure and reference area
        damping_coefficient: Damping torque per rad/s of body rate, per unit
            dynamic pressure and reference area
    """
    normal_force_coefficient: float = 2.0
    damping_coefficient: float = 0.5


# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _loads_core(
    # State
    vx: float, vy: float, vz: float,
    q0: float, q1: float, q2: float, q3: float,
    wx: float, wy: float, wz: float,
    mass: float,
    altitude: float,
    density: float,
    # Propulsion (thrust is zero when not burning)
    thrust: float,
    gimbal_pitch: float,
    gimbal_yaw: float,
    # Stage geometry
    cd: float,
    area: float,
    nozzle_offset: float,
    cp_offset: float,
    # Aerodynamic tunables
    normal_coeff: float,
    damping_coeff: float,
) -> tuple[float, float, float, float, float, float]:
    """Net inertial force and net body torque."""
    qnorm = np.sqrt(q0*q0 + q1*q1 + q2*q2 + q3*q3)
    if qnorm > 1e-10:
        q0 /= qnorm
        q1 /= qnorm
        q2 /= qnorm
        q3 /= qnorm

    # Body to inertial DCM
    r00 = 1 - 2*(q2*q2 + q3*q3)
    r01 = 2*(q1*q2 - q0*q3)
    r02 = 2*(q1*q3 + q0*q2)
    r10 = 2*(q1*q2 + q0*q3)
    r11 = 1 - 2*(q1*q1 + q3*q3)
    r12 = 2*(q2*q3 - q0*q1)
    r20 = 2*(q1*q3 - q0*q2)
    r21 = 2*(q2*q3 + q0*q1)
    r22 = 1 - 2*(q1*q1 + q2*q2)

    # Gravity
    fx = 0.0
    fy = 0.0
    fz = -_inverse_square_gravity(altitude) * mass

    # Thrust in body frame, nominal axis +Z
    tbx = thrust * np.sin(gimbal_yaw)
    tby = thrust * np.sin(gimbal_pitch)
    tbz = thrust * np.cos(gimbal_pitch) * np.cos(gimbal_yaw)

    fx += r00*tbx + r01*tby + r02*tbz
    fy += r10*tbx + r11*tby + r12*tbz
    fz += r20*tbx + r21*tby + r22*tbz

    # Nozzle lever arm [0, 0, -L] x thrust
    tx = nozzle_offset * tby
    ty = -nozzle_offset * tbx
    tz = 0.0

    speed = np.sqrt(vx*vx + vy*vy + vz*vz)
    qdyn = 0.5 * density * speed * speed

    if speed > DRAG_SPEED_FLOOR:
        drag_over_v = qdyn * cd * area / speed
        fx -= drag_over_v * vx
        fy -= drag_over_v * vy
        fz -= drag_over_v * vz

    if speed > MOMENT_SPEED_FLOOR:
        qa = qdyn * area

        if abs(cp_offset) > CP_OFFSET_EPSILON:
            # Velocity in body frame (transpose of DCM)
            vbx = r00*vx + r10*vy + r20*vz
            vby = r01*vx + r11*vy + r21*vz
            vbz = r02*vx + r12*vy + r22*vz

            alpha_y = np.arctan2(vby, vbz)
            alpha_z = np.arctan2(vbx, vbz)
            normal = qa * normal_coeff

            tx -= normal * alpha_y * cp_offset
            ty += normal * alpha_z * cp_offset

        damping = qa * damping_coeff
        tx -= wx * damping
        ty -= wy * damping
        tz -= wz * damping

    return (fx, fy, fz, tx, ty, tz)


# =============================================================================
# Force/Torque Model
# =============================================================================


@beartype
class ForceTorqueModel:
    """Loads acting on the vehicle, evaluated over the active stage only.

    Args:
        atmosphere: Any object with ``evaluate(altitude)``; defaults to the ISA
        aero: Aerodynamic moment coefficients
    """

    def __init__(
        self,
        atmosphere: AtmosphereModel | None = None,
        aero: AeroConfig | None = None,
    ) -> None:
        self.atmosphere = atmosphere or get_atmosphere()
        self.aero = aero or AeroConfig()

    @beartype
    def is_burning(self, mass: float, stage_index: int, mission: Mission) -> bool:
        """Whether the active stage still produces thrust at this mass."""
        stage = mission.active_stage(stage_index)
        if stage is None or stage.thrust <= 0:
            return False
        return mission.remaining_propellant(mass, stage_index) > BURNOUT_THRESHOLD

    @beartype
    def loads(
        self,
        y: NDArray[np.float64],
        stage_index: int,
        mission: Mission,
        command: GuidanceCommand,
    ) -> tuple[float, ...]:
        """Loads for a flat state vector.

        Args:
            y: 14-element state array (see ``RigidBodyState.to_array``)
            stage_index: Active stage index
            mission: Mission being flown
            command: Gimbal command, clamped here to the stage's travel

        Returns:
            (fx, fy, fz, tx, ty, tz, mass_rate); force inertial, torque body
        """
        mass = float(y[13])
        altitude = max(float(y[2]), 0.0)

        stage = mission.active_stage(stage_index)
        if stage is None:
            return (0.0, 0.0, -gravity_magnitude(altitude) * mass, 0.0, 0.0, 0.0, 0.0)

        burning = self.is_burning(mass, stage_index, mission)
        cmd = command.clamped(stage.max_gimbal)
        density = self.atmosphere.evaluate(altitude).density

        fx, fy, fz, tx, ty, tz = _loads_core(
            y[3], y[4], y[5],
            y[6], y[7], y[8], y[9],
            y[10], y[11], y[12],
            mass,
            altitude,
            density,
            stage.thrust if burning else 0.0,
            cmd.pitch,
            cmd.yaw,
            stage.drag_coefficient,
            stage.reference_area,
            stage.nozzle_offset,
            stage.cp_offset,
            self.aero.normal_force_coefficient,
            self.aero.damping_coefficient,
        )
        mass_rate = -stage.mass_flow if burning else 0.0

        return (fx, fy, fz, tx, ty, tz, mass_rate)

    @beartype
    def compute(
        self,
        state: RigidBodyState,
        mission: Mission,
        command: GuidanceCommand,
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Net force (inertial) [N] and net torque (body) [N*m]."""
        fx, fy, fz, tx, ty, tz, _ = self.loads(
            state.to_array(), state.active_stage_index, mission, command
        )
        return np.array([fx, fy, fz]), np.array([tx, ty, tz])
