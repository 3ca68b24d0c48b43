"""Orbital mechanics utilities with numba optimization.

Two-body analysis tools that sit beside the flight simulator:
- KeplerianElements: classical elements <-> ECI state vectors
- hohmann: two-impulse transfer between circular orbits
- propagate_orbit: RK4 orbit propagation under a selectable gravity model

Example:
    >>> from rocketsim.environment import Gravity, GravityModel
    >>> from rocketsim.orbital import KeplerianElements, OrbitalState, hohmann, propagate_orbit
    >>>
    >>> leo = KeplerianElements.circular(400e3, np.radians(51.6))
    >>> print(f"Period: {leo.period / 60:.1f} min")
    >>>
    >>> transfer = hohmann(R_EARTH_EQ + 400e3, 42_164e3)
    >>> print(f"Total dv: {transfer.total_dv:.0f} m/s")
    >>>
    >>> initial = OrbitalState.from_elements(leo)
    >>> trajectory = propagate_orbit(initial, 1.0, leo.period, gravity=Gravity(GravityModel.J2))
"""

from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

from rocketsim.dynamics.rigid_body import rk4_increment
from rocketsim.environment.gravity import (
    MU_EARTH,
    R_EARTH_EQ,
    Gravity,
)

# =============================================================================
# Core Numba Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _clamp(x: float, lo: float, hi: float) -> float:
    """Clamp scalar to range [lo, hi]."""
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


@njit(cache=True, fastmath=True)
def _elements_from_state_core(
    rx: float, ry: float, rz: float,
    vx: float, vy: float, vz: float,
    mu: float,
) -> tuple[float, float, float, float, float, float]:
    """Classical elements from an ECI state.

    Returns tuple of:
        (sma, ecc, inc, raan, argp, true_anom)
    """
    r = np.sqrt(rx*rx + ry*ry + rz*rz)
    v = np.sqrt(vx*vx + vy*vy + vz*vz)
    rdotv = rx*vx + ry*vy + rz*vz

    # Angular momentum vector h = r x v
    hx = ry * vz - rz * vy
    hy = rz * vx - rx * vz
    hz = rx * vy - ry * vx
    h = np.sqrt(hx*hx + hy*hy + hz*hz)

    # Node vector n = k x h (k = [0, 0, 1])
    nx = -hy
    ny = hx
    n = np.sqrt(nx*nx + ny*ny)

    # Eccentricity vector e = ((v^2 - mu/r) r - (r.v) v) / mu
    c1 = v*v - mu / r
    ex = (c1 * rx - rdotv * vx) / mu
    ey = (c1 * ry - rdotv * vy) / mu
    ez = (c1 * rz - rdotv * vz) / mu
    ecc = np.sqrt(ex*ex + ey*ey + ez*ez)

    energy = 0.5 * v*v - mu / r
    if ecc < 1.0 - 1e-10:
        sma = -mu / (2.0 * energy)
    else:
        # Parabolic/hyperbolic: semi-latus rectum based
        sma = h*h / (mu * abs(1.0 - ecc*ecc))

    inc = np.arccos(_clamp(hz / h, -1.0, 1.0)) if h > 1e-10 else 0.0

    if n > 1e-10:
        raan = np.arccos(_clamp(nx / n, -1.0, 1.0))
        if ny < 0:
            raan = 2.0 * np.pi - raan
    else:
        raan = 0.0

    if n > 1e-10 and ecc > 1e-10:
        argp = np.arccos(_clamp((nx * ex + ny * ey) / (n * ecc), -1.0, 1.0))
        if ez < 0:
            argp = 2.0 * np.pi - argp
    else:
        argp = 0.0

    if ecc > 1e-10:
        true_anom = np.arccos(_clamp((ex * rx + ey * ry + ez * rz) / (ecc * r), -1.0, 1.0))
        if rdotv < 0:
            true_anom = 2.0 * np.pi - true_anom
    else:
        # Circular: anomaly undefined, reported as zero
        true_anom = 0.0

    return (sma, ecc, inc, raan, argp, true_anom)


@njit(cache=True, fastmath=True)
def _circular_velocity(radius: float, mu: float) -> float:
    """Circular orbital velocity at radius."""
    return np.sqrt(mu / radius)


@njit(cache=True, fastmath=True)
def _escape_velocity(radius: float, mu: float) -> float:
    """Escape velocity at radius."""
    return np.sqrt(2.0 * mu / radius)


# =============================================================================
# Keplerian Elements
# =============================================================================


@beartype
@dataclass(frozen=True)
class KeplerianElements:
    """Classical orbital elements.

    Attributes:
        sma: Semi-major axis [m]
        ecc: Eccentricity [-] (0 = circular)
        inc: Inclination [rad]
        raan: Right ascension of ascending node [rad]
        argp: Argument of periapsis [rad]
        true_anom: True anomaly [rad]
    """
    sma: float
    ecc: float
    inc: float
    raan: float
    argp: float
    true_anom: float

    @classmethod
    def circular(cls, altitude: float, inclination: float = 0.0) -> "KeplerianElements":
        """Circular orbit at an altitude above the equatorial radius."""
        return cls(
            sma=R_EARTH_EQ + altitude,
            ecc=0.0,
            inc=inclination,
            raan=0.0,
            argp=0.0,
            true_anom=0.0,
        )

    @classmethod
    def from_state_vector(
        cls,
        position: NDArray[np.float64],
        velocity: NDArray[np.float64],
        mu: float = MU_EARTH,
    ) -> "KeplerianElements":
        """Compute elements from ECI position [m] and velocity [m/s]."""
        sma, ecc, inc, raan, argp, true_anom = _elements_from_state_core(
            float(position[0]), float(position[1]), float(position[2]),
            float(velocity[0]), float(velocity[1]), float(velocity[2]),
            mu,
        )
        return cls(
            sma=float(sma),
            ecc=float(ecc),
            inc=float(inc),
            raan=float(raan),
            argp=float(argp),
            true_anom=float(true_anom),
        )

    def to_state_vector(
        self,
        mu: float = MU_EARTH,
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """ECI position [m] and velocity [m/s] for these elements.

        Position and velocity are built in the perifocal (PQW) frame and
        rotated by RAAN, inclination and argument of periapsis.
        """
        p = self.sma * (1.0 - self.ecc**2)  # semi-latus rectum
        cos_nu, sin_nu = np.cos(self.true_anom), np.sin(self.true_anom)
        r = p / (1.0 + self.ecc * cos_nu)

        r_pqw = np.array([r * cos_nu, r * sin_nu, 0.0])
        sqrt_mu_p = np.sqrt(mu / p)
        v_pqw = np.array([-sqrt_mu_p * sin_nu, sqrt_mu_p * (self.ecc + cos_nu), 0.0])

        return self.perifocal_to_eci @ r_pqw, self.perifocal_to_eci @ v_pqw

    @property
    def perifocal_to_eci(self) -> NDArray[np.float64]:
        """Rotation matrix from the perifocal (PQW) frame to ECI."""
        cO, sO = np.cos(self.raan), np.sin(self.raan)
        cw, sw = np.cos(self.argp), np.sin(self.argp)
        ci, si = np.cos(self.inc), np.sin(self.inc)

        return np.array([
            [cO*cw - sO*sw*ci, -cO*sw - sO*cw*ci, sO*si],
            [sO*cw + cO*sw*ci, -sO*sw + cO*cw*ci, -cO*si],
            [sw*si, cw*si, ci],
        ])

    @property
    def period(self) -> float:
        """Orbital period [s] (elliptical orbits)."""
        return float(2.0 * np.pi * np.sqrt(self.sma**3 / MU_EARTH))

    @property
    def apoapsis_altitude(self) -> float:
        """Apoapsis altitude above the equatorial radius [m]."""
        return self.sma * (1.0 + self.ecc) - R_EARTH_EQ

    @property
    def periapsis_altitude(self) -> float:
        """Periapsis altitude above the equatorial radius [m]."""
        return self.sma * (1.0 - self.ecc) - R_EARTH_EQ


# =============================================================================
# Maneuvers
# =============================================================================


@beartype
@dataclass(frozen=True)
class HohmannTransfer:
    """Two-impulse transfer between coplanar circular orbits.

    Attributes:
        dv1: First burn, raises the apoapsis [m/s]
        dv2: Second burn, circularizes [m/s]
        total_dv: dv1 + dv2 [m/s]
        transfer_time: Half the transfer-orbit period [s]
        r1: Initial orbit radius [m]
        r2: Final orbit radius [m]
    """
    dv1: float
    dv2: float
    total_dv: float
    transfer_time: float
    r1: float
    r2: float


@beartype
def hohmann(r1: float, r2: float, mu: float = MU_EARTH) -> HohmannTransfer:
    """Compute a Hohmann transfer between two circular orbits.

    Args:
        r1: Initial orbit radius (not altitude) [m]
        r2: Final orbit radius [m]
        mu: Gravitational parameter [m^3/s^2]

    Returns:
        HohmannTransfer with burn magnitudes and transfer time
    """
    a_transfer = (r1 + r2) / 2.0

    v_circ1 = np.sqrt(mu / r1)
    v_circ2 = np.sqrt(mu / r2)
    v_transfer_1 = np.sqrt(mu * (2.0 / r1 - 1.0 / a_transfer))
    v_transfer_2 = np.sqrt(mu * (2.0 / r2 - 1.0 / a_transfer))

    dv1 = float(abs(v_transfer_1 - v_circ1))
    dv2 = float(abs(v_circ2 - v_transfer_2))

    return HohmannTransfer(
        dv1=dv1,
        dv2=dv2,
        total_dv=dv1 + dv2,
        transfer_time=float(np.pi * np.sqrt(a_transfer**3 / mu)),
        r1=r1,
        r2=r2,
    )


@beartype
def circular_velocity(radius: float, mu: float = MU_EARTH) -> float:
    """Circular orbital velocity at a radius [m/s]."""
    return float(_circular_velocity(radius, mu))


@beartype
def escape_velocity(radius: float, mu: float = MU_EARTH) -> float:
    """Escape velocity at a radius [m/s]."""
    return float(_escape_velocity(radius, mu))


# =============================================================================
# Propagation
# =============================================================================


@beartype
@dataclass
class OrbitalState:
    """Translational ECI state (no attitude).

    Attributes:
        time: Time [s]
        position: ECI position [m]
        velocity: ECI velocity [m/s]
    """
    time: float
    position: NDArray[np.float64]
    velocity: NDArray[np.float64]

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)
        if self.position.shape != (3,) or self.velocity.shape != (3,):
            raise ValueError("Position and velocity must be shape (3,)")

    @classmethod
    def from_elements(cls, elements: KeplerianElements, time: float = 0.0) -> "OrbitalState":
        position, velocity = elements.to_state_vector()
        return cls(time=time, position=position, velocity=velocity)

    @property
    def altitude(self) -> float:
        """Height above the equatorial radius [m]."""
        return float(np.linalg.norm(self.position)) - R_EARTH_EQ

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    @property
    def elements(self) -> KeplerianElements:
        return KeplerianElements.from_state_vector(self.position, self.velocity)


@beartype
def propagate_orbit(
    initial: OrbitalState,
    dt: float,
    duration: float,
    gravity: Gravity | None = None,
) -> list[OrbitalState]:
    """Propagate an orbit with RK4.

    Samples are spaced by ``dt``; when ``duration`` is not a whole number of
    steps a final shorter step places the last sample exactly at
    ``initial.time + duration``.

    Args:
        initial: Starting state
        dt: Step size [s]
        duration: Propagation span [s]
        gravity: Inertial gravity model (default point mass)

    Returns:
        Trajectory including the initial state
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")
    if duration < 0:
        raise ValueError(f"duration must be non-negative, got {duration}")

    gravity = gravity or Gravity()

    def f(y: NDArray[np.float64]) -> NDArray[np.float64]:
        return np.concatenate([y[3:6], gravity.acceleration(y[0:3])])

    n_steps = int(np.floor(duration / dt + 1e-9))
    remainder = duration - n_steps * dt
    steps = [dt] * n_steps
    if remainder > 1e-9 * dt:
        steps.append(remainder)

    y = np.concatenate([initial.position, initial.velocity])
    trajectory = [initial]
    for i, h in enumerate(steps):
        y = y + rk4_increment(f, y, h)
        t = initial.time + (duration if i == len(steps) - 1 else (i + 1) * dt)
        trajectory.append(OrbitalState(time=t, position=y[0:3].copy(), velocity=y[3:6].copy()))

    return trajectory
