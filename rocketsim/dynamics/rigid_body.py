"""6DOF rigid body equations of motion and RK4 integration.

Converts the loads from the force/torque model into the time derivative of
the full state and advances it with classical fourth-order Runge-Kutta.

The equations use:
- Newton's second law for translational motion: a = F / m
- Euler's equations for rotational motion with a diagonal inertia tensor
- Quaternion kinematics for attitude propagation: q_dot = 0.5 * q (x) [0, w]

The quaternion rate is not unit length; only the integrated result is
renormalized.

Example:
    >>> from rocketsim.dynamics import RigidBodyState, GuidanceCommand, rk4_step
    >>> from rocketsim.vehicle import presets
    >>>
    >>> mission = presets.sounding_rocket()
    >>> state = RigidBodyState.at_ignition(mission)
    >>> state = rk4_step(state, mission, GuidanceCommand(), dt=0.005)
"""

from collections.abc import Callable

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

from rocketsim.dynamics.forces import ForceTorqueModel
from rocketsim.dynamics.state import (
    STATE_SIZE,
    GuidanceCommand,
    RigidBodyState,
    StateDerivative,
    normalize_quaternion,
)
from rocketsim.vehicle.mission import Mission

# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _quaternion_derivative(
    q0: float, q1: float, q2: float, q3: float,
    p: float, q: float, r: float,
) -> tuple[float, float, float, float]:
    """Quaternion kinematics, 0.5 * q (x) [0, p, q, r]."""
    return (
        0.5 * (-p*q1 - q*q2 - r*q3),
        0.5 * (p*q0 + r*q2 - q*q3),
        0.5 * (q*q0 - r*q1 + p*q3),
        0.5 * (r*q0 + q*q1 - p*q2),
    )


@njit(cache=True, fastmath=True)
def _euler_rotational_dynamics(
    px: float, py: float, pz: float,
    mx: float, my: float, mz: float,
    Ixx: float, Iyy: float, Izz: float,
) -> tuple[float, float, float]:
    """Euler equations for a diagonal inertia tensor."""
    return (
        (mx - py * Izz * pz + pz * Iyy * py) / Ixx,
        (my - pz * Ixx * px + px * Izz * pz) / Iyy,
        (mz - px * Iyy * py + py * Ixx * px) / Izz,
    )


@njit(cache=True, fastmath=True)
def _derivative_core(
    # State
    vx: float, vy: float, vz: float,
    q0: float, q1: float, q2: float, q3: float,
    wx: float, wy: float, wz: float,
    mass: float,
    # Net force (inertial)
    fx: float, fy: float, fz: float,
    # Net torque (body)
    tx: float, ty: float, tz: float,
    # Mass rate
    mdot: float,
    # Inertia (diagonal)
    Ixx: float, Iyy: float, Izz: float,
) -> tuple[float, ...]:
    """Compute all state derivatives in one numba function."""
    dq0, dq1, dq2, dq3 = _quaternion_derivative(q0, q1, q2, q3, wx, wy, wz)
    dwx, dwy, dwz = _euler_rotational_dynamics(wx, wy, wz, tx, ty, tz, Ixx, Iyy, Izz)

    return (
        vx, vy, vz,
        fx / mass, fy / mass, fz / mass,
        dq0, dq1, dq2, dq3,
        dwx, dwy, dwz,
        mdot,
    )


# =============================================================================
# Rigid Body Dynamics
# =============================================================================


@beartype
def quaternion_derivative(
    q: NDArray[np.float64],
    omega: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Compute quaternion time derivative from angular velocity.

    Args:
        q: Current quaternion [q0, q1, q2, q3]
        omega: Angular velocity in body frame [p, q, r] [rad/s]

    Returns:
        Quaternion derivative dq/dt
    """
    return np.array(_quaternion_derivative(
        float(q[0]), float(q[1]), float(q[2]), float(q[3]),
        float(omega[0]), float(omega[1]), float(omega[2]),
    ))


@beartype
def euler_rotational_dynamics(
    omega: NDArray[np.float64],
    torque: NDArray[np.float64],
    inertia: tuple[float, float, float],
) -> NDArray[np.float64]:
    """Compute angular acceleration from Euler's equations.

    Args:
        omega: Angular velocity in body frame [p, q, r] [rad/s]
        torque: Applied torque in body frame [Mx, My, Mz] [N*m]
        inertia: Principal moments (Ixx, Iyy, Izz) [kg*m^2]

    Returns:
        Angular acceleration [p_dot, q_dot, r_dot] [rad/s^2]
    """
    return np.array(_euler_rotational_dynamics(
        float(omega[0]), float(omega[1]), float(omega[2]),
        float(torque[0]), float(torque[1]), float(torque[2]),
        *inertia,
    ))


@beartype
def derivative_vector(
    y: NDArray[np.float64],
    stage_index: int,
    mission: Mission,
    command: GuidanceCommand,
    model: ForceTorqueModel,
) -> NDArray[np.float64]:
    """Flat 14-element derivative of a flat state vector.

    Once the stage index runs past the last stage the vehicle is in free
    fall: gravity only, no torque, no mass flow.
    """
    fx, fy, fz, tx, ty, tz, mdot = model.loads(y, stage_index, mission, command)
    mass = float(y[13])

    stage = mission.active_stage(stage_index)
    if stage is None:
        d = np.zeros(STATE_SIZE)
        d[0:3] = y[3:6]
        d[5] = fz / mass
        return d

    return np.array(_derivative_core(
        y[3], y[4], y[5],
        y[6], y[7], y[8], y[9],
        y[10], y[11], y[12],
        mass,
        fx, fy, fz,
        tx, ty, tz,
        mdot,
        *stage.inertia,
    ))


@beartype
def state_derivatives(
    state: RigidBodyState,
    mission: Mission,
    command: GuidanceCommand,
    model: ForceTorqueModel | None = None,
) -> StateDerivative:
    """Compute state derivatives for 6DOF rigid body motion.

    Args:
        state: Current vehicle state
        mission: Mission being flown
        command: Gimbal command held for this evaluation
        model: Force/torque model (default ISA atmosphere, default aero)

    Returns:
        State derivatives for integration
    """
    model = model or ForceTorqueModel()
    return StateDerivative.from_array(
        derivative_vector(
            state.to_array(), state.active_stage_index, mission, command, model
        )
    )


# =============================================================================
# Integration
# =============================================================================


@beartype
def rk4_increment(
    f: Callable[[NDArray[np.float64]], NDArray[np.float64]],
    y: NDArray[np.float64],
    dt: float,
) -> NDArray[np.float64]:
    """Classical RK4 increment for an autonomous system y' = f(y).

    Returns:
        dt/6 * (k1 + 2*k2 + 2*k3 + k4)
    """
    k1 = f(y)
    k2 = f(y + dt/2 * k1)
    k3 = f(y + dt/2 * k2)
    k4 = f(y + dt * k3)

    return (dt / 6) * (k1 + 2*k2 + 2*k3 + k4)


@beartype
def rk4_step(
    state: RigidBodyState,
    mission: Mission,
    command: GuidanceCommand,
    dt: float,
    model: ForceTorqueModel | None = None,
) -> RigidBodyState:
    """Perform one RK4 integration step.

    The same command is used for all four derivative evaluations. Sub-stage
    states carry the raw quaternion; the combined result is renormalized and
    mass is floored at the structural mass of the active stack, so a step
    that straddles burnout cannot eat into dry mass.

    Args:
        state: Current state
        mission: Mission being flown
        command: Gimbal command for this step
        dt: Time step [s]
        model: Force/torque model

    Returns:
        State at t + dt (stage index unchanged)
    """
    model = model or ForceTorqueModel()
    stage_index = state.active_stage_index

    def f(y: NDArray[np.float64]) -> NDArray[np.float64]:
        return derivative_vector(y, stage_index, mission, command, model)

    y0 = state.to_array()
    y1 = y0 + rk4_increment(f, y0, dt)

    y1[6:10] = normalize_quaternion(y1[6:10])
    stage = mission.active_stage(stage_index)
    floor = stage.dry_mass + mission.upper_stages_mass(stage_index) if stage is not None else 0.0
    y1[13] = max(y1[13], floor)

    return RigidBodyState.from_array(
        y1, time=state.time + dt, active_stage_index=stage_index
    )
