"""Environment models for rocket flight simulation.

Provides the standard atmosphere and the gravity models.

Example:
    >>> from rocketsim.environment import Atmosphere, gravity_magnitude
    >>>
    >>> atm = Atmosphere()
    >>> rho = atm.density(10000.0)  # kg/m^3
    >>> g = gravity_magnitude(10000.0)  # m/s^2
"""

from rocketsim.environment.atmosphere import (
    Atmosphere,
    AtmosphereModel,
    AtmosphereResult,
    get_atmosphere,
)
from rocketsim.environment.gravity import (
    EARTH_RADIUS,
    G0,
    J2,
    MU_EARTH,
    R_EARTH_EQ,
    Gravity,
    GravityModel,
    gravity_magnitude,
    j2_acceleration,
    point_mass_acceleration,
)

__all__ = [
    # Atmosphere
    "Atmosphere",
    "AtmosphereModel",
    "AtmosphereResult",
    "get_atmosphere",
    # Gravity
    "Gravity",
    "GravityModel",
    "gravity_magnitude",
    "point_mass_acceleration",
    "j2_acceleration",
    # Constants
    "G0",
    "EARTH_RADIUS",
    "MU_EARTH",
    "R_EARTH_EQ",
    "J2",
]
