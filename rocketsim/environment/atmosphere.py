"""International Standard Atmosphere model.

Provides temperature, pressure, density and speed of sound as functions of
geometric altitude. The seven standard layers are modelled up to 86 km,
above which pressure decays exponentially from the 86 km value.

The model divides the atmosphere into layers with different lapse rates:
- Troposphere (0-11 km): -6.5 K/km lapse rate
- Tropopause (11-20 km): isothermal at 216.65 K
- Stratosphere (20-32 km): +1.0 K/km
- Stratosphere (32-47 km): +2.8 K/km
- Stratopause (47-51 km): isothermal at 270.65 K
- Mesosphere (51-71 km): -2.8 K/km
- Mesosphere (71-86 km): -2.0 K/km

Negative altitudes are clamped to sea level.

Example:
    >>> from rocketsim.environment import Atmosphere
    >>>
    >>> atm = Atmosphere()
    >>> result = atm.evaluate(10000.0)  # 10 km
    >>> print(f"Density: {result.density:.4f} kg/m^3")
    >>> print(f"Speed of sound: {result.speed_of_sound:.1f} m/s")
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

# =============================================================================
# Constants
# =============================================================================

# Sea level conditions
T0 = 288.15  # Temperature [K]
P0 = 101325.0  # Pressure [Pa]

# Physical constants
R_AIR = 287.05287  # Specific gas constant for dry air [J/(kg·K)]
GAMMA_AIR = 1.4  # Ratio of specific heats for air
G0 = 9.80665  # Standard gravity [m/s^2]

# Upper limit of the layered model and the thermosphere tail above it
H_TOP = 86000.0  # [m]
T_TOP = 186.87  # [K]
P_TOP = 0.3734  # [Pa]
TAIL_DECAY = 1.5e-4  # [1/m]


# Layer definitions: (base_altitude_km, base_temp_K, lapse_rate_K_per_km)
LAYERS = [
    (0.0, 288.15, -6.5),      # Troposphere
    (11.0, 216.65, 0.0),      # Tropopause
    (20.0, 216.65, 1.0),      # Stratosphere 1
    (32.0, 228.65, 2.8),      # Stratosphere 2
    (47.0, 270.65, 0.0),      # Stratopause
    (51.0, 270.65, -2.8),     # Mesosphere 1
    (71.0, 214.65, -2.0),     # Mesosphere 2
]


# =============================================================================
# Result Classes
# =============================================================================


@beartype
@dataclass(frozen=True)
class AtmosphereResult:
    """Atmospheric conditions at a given altitude.

    Attributes:
        altitude: Geometric altitude after clamping [m]
        temperature: Static temperature [K]
        pressure: Static pressure [Pa]
        density: Air density [kg/m^3]
        speed_of_sound: Speed of sound [m/s]
    """
    altitude: float
    temperature: float
    pressure: float
    density: float
    speed_of_sound: float

    @property
    def is_vacuum(self) -> bool:
        """Check if conditions are effectively vacuum (< 1e-3 Pa)."""
        return self.pressure < 1e-3


@runtime_checkable
class AtmosphereModel(Protocol):
    """Anything that maps altitude to atmospheric conditions."""

    def evaluate(self, altitude: float) -> AtmosphereResult:
        """Return conditions at a geometric altitude [m]."""
        ...


# =============================================================================
# Atmosphere Model
# =============================================================================


@beartype
class Atmosphere:
    """Layered ISA model with an exponential tail above 86 km.

    Pure function of altitude; one instance can be shared freely.

    Example:
        >>> atm = Atmosphere()
        >>> rho = atm.density(10000.0)
        >>> a = atm.speed_of_sound(30000.0)
        >>> result = atm.evaluate(50000.0)
    """

    def __init__(self) -> None:
        self._base_pressures = self._compute_base_pressures()

    def _compute_base_pressures(self) -> list[float]:
        """Compute pressure at the base of each layer."""
        pressures = [P0]

        for i in range(len(LAYERS) - 1):
            h0, T0_layer, lapse = LAYERS[i]
            h1, _, _ = LAYERS[i + 1]

            dh = (h1 - h0) * 1000  # Convert km to m

            if abs(lapse) < 1e-10:
                p = pressures[-1] * np.exp(-G0 * dh / (R_AIR * T0_layer))
            else:
                lapse_m = lapse / 1000  # K/m
                T1 = T0_layer + lapse_m * dh
                p = pressures[-1] * (T1 / T0_layer) ** (-G0 / (R_AIR * lapse_m))

            pressures.append(float(p))

        return pressures

    @staticmethod
    def _find_layer(h_km: float) -> int:
        """Find the atmospheric layer index for a given altitude."""
        for i in range(len(LAYERS) - 1, -1, -1):
            if h_km >= LAYERS[i][0]:
                return i
        return 0

    def _temperature_pressure(self, altitude: float) -> tuple[float, float]:
        """Temperature [K] and pressure [Pa] at a clamped altitude."""
        h = max(altitude, 0.0)
        if h > H_TOP:
            return T_TOP, float(P_TOP * np.exp(-TAIL_DECAY * (h - H_TOP)))

        layer_idx = self._find_layer(h / 1000)
        h0, T0_layer, lapse = LAYERS[layer_idx]
        p0 = self._base_pressures[layer_idx]
        dh = h - h0 * 1000  # m above layer base

        if abs(lapse) < 1e-10:
            return T0_layer, float(p0 * np.exp(-G0 * dh / (R_AIR * T0_layer)))

        lapse_m = lapse / 1000
        T = T0_layer + lapse_m * dh
        return T, float(p0 * (T / T0_layer) ** (-G0 / (R_AIR * lapse_m)))

    @beartype
    def temperature(self, altitude: float) -> float:
        """Temperature [K] at geometric altitude [m]."""
        return self._temperature_pressure(altitude)[0]

    @beartype
    def pressure(self, altitude: float) -> float:
        """Pressure [Pa] at geometric altitude [m]."""
        return self._temperature_pressure(altitude)[1]

    @beartype
    def density(self, altitude: float) -> float:
        """Density [kg/m^3] at geometric altitude [m]."""
        T, p = self._temperature_pressure(altitude)
        return p / (R_AIR * T)

    @beartype
    def speed_of_sound(self, altitude: float) -> float:
        """Speed of sound [m/s] at geometric altitude [m]."""
        T = self.temperature(altitude)
        return float(np.sqrt(GAMMA_AIR * R_AIR * T))

    @beartype
    def evaluate(self, altitude: float) -> AtmosphereResult:
        """Get all atmospheric properties at altitude.

        Args:
            altitude: Geometric altitude [m], clamped to >= 0

        Returns:
            AtmosphereResult with all properties
        """
        T, p = self._temperature_pressure(altitude)
        return AtmosphereResult(
            altitude=max(altitude, 0.0),
            temperature=T,
            pressure=p,
            density=p / (R_AIR * T),
            speed_of_sound=float(np.sqrt(GAMMA_AIR * R_AIR * T)),
        )

    @beartype
    def dynamic_pressure(self, altitude: float, velocity: float) -> float:
        """Dynamic pressure q = 0.5 * rho * v^2 [Pa]."""
        return 0.5 * self.density(altitude) * velocity ** 2

    @beartype
    def profile(
        self,
        altitudes: NDArray[np.float64] | list[float],
    ) -> dict[str, NDArray[np.float64]]:
        """Get atmospheric properties over a range of altitudes.

        Returns:
            Dictionary with arrays of temperature, pressure, density, speed_of_sound
        """
        altitudes = np.asarray(altitudes, dtype=np.float64)
        results = [self.evaluate(float(h)) for h in altitudes]

        return {
            "altitude": altitudes,
            "temperature": np.array([r.temperature for r in results]),
            "pressure": np.array([r.pressure for r in results]),
            "density": np.array([r.density for r in results]),
            "speed_of_sound": np.array([r.speed_of_sound for r in results]),
        }


# =============================================================================
# Convenience Functions
# =============================================================================


# Singleton instance
_default_atmosphere = Atmosphere()


@beartype
def get_atmosphere() -> Atmosphere:
    """Get the default atmosphere model instance."""
    return _default_atmosphere


@beartype
def density_at_altitude(altitude: float) -> float:
    """Quick density lookup at altitude [m]."""
    return _default_atmosphere.density(altitude)
