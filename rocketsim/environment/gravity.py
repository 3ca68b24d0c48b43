"""Gravity models for rocket flight and orbital simulation.

Two families of models live here:
- Local-vertical inverse-square gravity for the launch frame (East-North-Up,
  z = altitude above a spherical Earth).
- Earth-centred inertial point-mass and J2 (oblateness) acceleration for
  orbit propagation.

Core functions are numba-compiled for performance.

Example:
    >>> from rocketsim.environment import Gravity, GravityModel
    >>>
    >>> g = gravity_magnitude(10000.0)  # m/s^2 at 10 km
    >>>
    >>> # Orbit propagation selects the inertial model
    >>> trajectory = propagate_orbit(initial, 10.0, 5400.0, gravity=Gravity(GravityModel.J2))
"""

from enum import Enum, auto

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

# =============================================================================
# Constants
# =============================================================================

# Standard gravity at sea level
G0: float = 9.80665  # [m/s^2]

# Mean Earth radius used by the launch-frame model
EARTH_RADIUS: float = 6371000.0  # [m]

# Earth parameters for orbital work
MU_EARTH: float = 3.986004418e14  # Gravitational parameter [m^3/s^2]
R_EARTH_EQ: float = 6378137.0  # Equatorial radius [m]
J2: float = 1.08263e-3  # Second zonal harmonic (oblateness)


# =============================================================================
# Gravity Model Enum
# =============================================================================


class GravityModel(Enum):
    """Available inertial gravity models."""

    POINT_MASS = auto()  # mu/r^2
    J2 = auto()          # Point mass + J2 oblateness


# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _inverse_square_gravity(
    altitude: float,
    g0: float = G0,
    radius: float = EARTH_RADIUS,
) -> float:
    """Gravity magnitude above a spherical Earth.

    g = g0 * (R / (R + h))^2
    """
    ratio = radius / (radius + altitude)
    return g0 * ratio * ratio


@njit(cache=True, fastmath=True)
def _point_mass_gravity(
    x: float, y: float, z: float,
    mu: float = MU_EARTH,
) -> tuple[float, float, float]:
    """Point-mass gravity, a = -mu/r^3 * r."""
    r_sq = x*x + y*y + z*z
    r = np.sqrt(r_sq)

    if r < 1.0:
        return (0.0, 0.0, 0.0)

    g_over_r = mu / (r_sq * r)

    return (-g_over_r * x, -g_over_r * y, -g_over_r * z)


@njit(cache=True, fastmath=True)
def _j2_gravity(
    x: float, y: float, z: float,
    mu: float = MU_EARTH,
    r_eq: float = R_EARTH_EQ,
    j2: float = J2,
) -> tuple[float, float, float]:
    """Point-mass gravity with the J2 oblateness perturbation."""
    r_sq = x*x + y*y + z*z
    r = np.sqrt(r_sq)

    if r < 1.0:
        return (0.0, 0.0, 0.0)

    r3 = r * r_sq

    Re_r = r_eq / r
    z_r_sq = z * z / r_sq

    factor = 1.5 * j2 * Re_r * Re_r
    common = mu / r3

    ax = -common * x * (1.0 + factor * (1.0 - 5.0 * z_r_sq))
    ay = -common * y * (1.0 + factor * (1.0 - 5.0 * z_r_sq))
    az = -common * z * (1.0 + factor * (3.0 - 5.0 * z_r_sq))

    return (ax, ay, az)


# =============================================================================
# Launch-Frame Gravity
# =============================================================================


@beartype
def gravity_magnitude(altitude: float) -> float:
    """Gravity magnitude at altitude above the spherical Earth [m/s^2].

    Negative altitudes are treated as sea level.
    """
    return _inverse_square_gravity(max(altitude, 0.0))


# =============================================================================
# Inertial Gravity
# =============================================================================


@beartype
def point_mass_acceleration(position: NDArray[np.float64]) -> NDArray[np.float64]:
    """Point-mass acceleration at an ECI position [m/s^2].

    Returns zero inside 1 m of the centre.
    """
    return np.array(_point_mass_gravity(
        float(position[0]), float(position[1]), float(position[2])
    ))


@beartype
def j2_acceleration(position: NDArray[np.float64]) -> NDArray[np.float64]:
    """J2-perturbed acceleration at an ECI position [m/s^2]."""
    return np.array(_j2_gravity(
        float(position[0]), float(position[1]), float(position[2])
    ))


@beartype
class Gravity:
    """Inertial gravity model selector.

    Example:
        >>> grav = Gravity(model=GravityModel.POINT_MASS)
        >>> a = grav.acceleration(np.array([6.778e6, 0.0, 0.0]))
    """

    def __init__(self, model: GravityModel = GravityModel.POINT_MASS) -> None:
        self.model = model

    @beartype
    def acceleration(
        self,
        position: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        """Compute gravitational acceleration at an ECI position.

        Args:
            position: Position vector [x, y, z] [m]

        Returns:
            Acceleration vector [ax, ay, az] [m/s^2]
        """
        if self.model == GravityModel.POINT_MASS:
            return point_mass_acceleration(position)
        if self.model == GravityModel.J2:
            return j2_acceleration(position)
        raise ValueError(f"Unknown gravity model: {self.model}")
