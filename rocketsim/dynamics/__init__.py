"""Dynamics module for 6DOF rigid body simulation.

This module provides the state representation, the force/torque model and
the equations of motion with their RK4 integrator.

Example:
    >>> from rocketsim.dynamics import GuidanceCommand, RigidBodyState, rk4_step
    >>> from rocketsim.vehicle import presets
    >>>
    >>> mission = presets.sounding_rocket()
    >>> state = RigidBodyState.at_ignition(mission)
    >>> state = rk4_step(state, mission, GuidanceCommand(), dt=0.005)
"""

from rocketsim.dynamics.forces import (
    AeroConfig,
    ForceTorqueModel,
)
from rocketsim.dynamics.rigid_body import (
    derivative_vector,
    euler_rotational_dynamics,
    quaternion_derivative,
    rk4_increment,
    rk4_step,
    state_derivatives,
)
from rocketsim.dynamics.state import (
    GuidanceCommand,
    RigidBodyState,
    StateDerivative,
    normalize_quaternion,
    quaternion_to_dcm,
)

__all__ = [
    # State
    "RigidBodyState",
    "StateDerivative",
    "GuidanceCommand",
    # Quaternion utilities
    "quaternion_to_dcm",
    "normalize_quaternion",
    # Loads
    "ForceTorqueModel",
    "AeroConfig",
    # Rigid body dynamics
    "state_derivatives",
    "derivative_vector",
    "quaternion_derivative",
    "euler_rotational_dynamics",
    # Integration
    "rk4_increment",
    "rk4_step",
]
