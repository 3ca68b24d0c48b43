"""Stage definition for multi-stage vehicles.

A Stage is an immutable record of one propulsive element: its structure,
propellant load, engine, aerodynamic reference values and rigid-body
properties about its own center of gravity.

Example:
    >>> from rocketsim.vehicle import StageBuilder
    >>>
    >>> booster = (
    ...     StageBuilder("Booster")
    ...     .dry_mass(40.0)
    ...     .propellant_mass(25.0)
    ...     .thrust(5000.0)
    ...     .isp(220.0)
    ...     .build()
    ... )
    >>> print(f"Burn time: {booster.burn_time:.1f} s")
"""

from dataclasses import dataclass

import numpy as np
from beartype import beartype

from rocketsim.environment.gravity import G0
from rocketsim.errors import ConfigurationError

# =============================================================================
# Stage
# =============================================================================


@beartype
@dataclass(frozen=True)
class Stage:
    """One stage of a launch vehicle.

    Attributes:
        name: Display name
        dry_mass: Structural mass jettisoned at separation [kg]
        propellant_mass: Usable propellant [kg]
        thrust: Rated thrust [N]
        isp: Specific impulse [s]
        drag_coefficient: Axial drag coefficient [-]
        reference_area: Aerodynamic reference area [m^2]
        inertia: Principal moments of inertia (Ixx, Iyy, Izz) [kg*m^2]
        nozzle_offset: Distance from CG back to the gimbal point [m]
        cp_offset: Distance from CG forward to the center of pressure [m]
        max_gimbal: Maximum gimbal deflection per axis [rad]
    """
    name: str
    dry_mass: float
    propellant_mass: float
    thrust: float
    isp: float
    drag_coefficient: float
    reference_area: float
    inertia: tuple[float, float, float]
    nozzle_offset: float
    cp_offset: float
    max_gimbal: float

    def __post_init__(self) -> None:
        """Reject configurations the integrator cannot fly."""
        if self.dry_mass <= 0:
            raise ConfigurationError(
                f"Stage '{self.name}': dry mass must be positive, got {self.dry_mass}"
            )
        if self.propellant_mass < 0:
            raise ConfigurationError(
                f"Stage '{self.name}': propellant mass must be >= 0, got {self.propellant_mass}"
            )
        if self.thrust < 0:
            raise ConfigurationError(
                f"Stage '{self.name}': thrust must be >= 0, got {self.thrust}"
            )
        if self.propellant_mass > 0 and self.thrust <= 0:
            raise ConfigurationError(
                f"Stage '{self.name}': carries propellant but has no thrust"
            )
        if self.thrust > 0 and self.isp <= 0:
            raise ConfigurationError(
                f"Stage '{self.name}': isp must be positive, got {self.isp}"
            )
        if any(moment <= 0 for moment in self.inertia):
            raise ConfigurationError(
                f"Stage '{self.name}': principal inertias must be positive, got {self.inertia}"
            )
        if self.drag_coefficient < 0 or self.reference_area < 0:
            raise ConfigurationError(
                f"Stage '{self.name}': drag coefficient and reference area must be >= 0"
            )
        if self.max_gimbal < 0:
            raise ConfigurationError(
                f"Stage '{self.name}': max gimbal must be >= 0, got {self.max_gimbal}"
            )

    @property
    def mass_flow(self) -> float:
        """Propellant mass flow at rated thrust [kg/s]."""
        if self.thrust <= 0:
            return 0.0
        return self.thrust / (self.isp * G0)

    @property
    def total_mass(self) -> float:
        """Wet mass of this stage alone [kg]."""
        return self.dry_mass + self.propellant_mass

    @property
    def burn_time(self) -> float:
        """Time to exhaust the propellant at rated thrust [s]."""
        if self.thrust <= 0:
            return 0.0
        return self.propellant_mass / self.mass_flow

    @beartype
    def delta_v(self, payload_mass: float = 0.0) -> float:
        """Ideal rocket-equation velocity change carrying a payload [m/s]."""
        m0 = self.total_mass + payload_mass
        mf = self.dry_mass + payload_mass
        return float(self.isp * G0 * np.log(m0 / mf))

    @beartype
    def thrust_to_weight(self, payload_mass: float = 0.0) -> float:
        """Sea-level thrust-to-weight ratio at ignition."""
        return self.thrust / ((self.total_mass + payload_mass) * G0)


# =============================================================================
# Builder
# =============================================================================


class StageBuilder:
    """Fluent construction of a Stage with sensible defaults.

    Every setter returns the builder; ``build()`` validates and freezes.
    Values are stored exactly as supplied.
    """

    def __init__(self, name: str = "Stage") -> None:
        self._fields: dict[str, object] = {
            "name": name,
            "dry_mass": 10.0,
            "propellant_mass": 5.0,
            "thrust": 1000.0,
            "isp": 220.0,
            "drag_coefficient": 0.3,
            "reference_area": 0.01,
            "inertia": (5.0, 5.0, 0.5),
            "nozzle_offset": 1.0,
            "cp_offset": 0.3,
            "max_gimbal": 0.1,
        }

    def _set(self, key: str, value: object) -> "StageBuilder":
        self._fields[key] = value
        return self

    def name(self, name: str) -> "StageBuilder":
        return self._set("name", name)

    def dry_mass(self, kg: float) -> "StageBuilder":
        return self._set("dry_mass", kg)

    def propellant_mass(self, kg: float) -> "StageBuilder":
        return self._set("propellant_mass", kg)

    def thrust(self, newtons: float) -> "StageBuilder":
        return self._set("thrust", newtons)

    def isp(self, seconds: float) -> "StageBuilder":
        return self._set("isp", seconds)

    def drag_coefficient(self, cd: float) -> "StageBuilder":
        return self._set("drag_coefficient", cd)

    def reference_area(self, m2: float) -> "StageBuilder":
        return self._set("reference_area", m2)

    def inertia(self, ixx: float, iyy: float, izz: float) -> "StageBuilder":
        return self._set("inertia", (ixx, iyy, izz))

    def nozzle_offset(self, meters: float) -> "StageBuilder":
        return self._set("nozzle_offset", meters)

    def cp_offset(self, meters: float) -> "StageBuilder":
        return self._set("cp_offset", meters)

    def max_gimbal(self, radians: float) -> "StageBuilder":
        return self._set("max_gimbal", radians)

    def build(self) -> Stage:
        """Create the Stage, raising ConfigurationError if it is invalid."""
        return Stage(**self._fields)
