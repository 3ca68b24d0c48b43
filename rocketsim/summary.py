"""Flight performance summary computed from a recorded trajectory."""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from beartype import beartype

from rocketsim.dynamics.state import RigidBodyState
from rocketsim.environment.atmosphere import AtmosphereModel, get_atmosphere
from rocketsim.environment.gravity import G0


@beartype
@dataclass(frozen=True)
class FlightSummary:
    """Key performance figures of one flight.

    Attributes:
        apogee: Highest recorded altitude [m]
        apogee_time: Time of the apogee sample [s]
        max_speed: Peak speed [m/s]
        max_mach: Peak Mach number, sound speed at max(z, 0) [-]
        max_accel: Peak finite-difference acceleration |dv|/dt [m/s^2]
        max_accel_g: max_accel in standard gravities [-]
        flight_time: Time of the last sample [s]
        impact_speed: Speed at the last sample [m/s]
    """
    apogee: float
    apogee_time: float
    max_speed: float
    max_mach: float
    max_accel: float
    max_accel_g: float
    flight_time: float
    impact_speed: float

    @classmethod
    def from_trajectory(
        cls,
        states: Sequence[RigidBodyState],
        atmosphere: AtmosphereModel | None = None,
    ) -> "FlightSummary":
        """Compute summary from trajectory data.

        Raises:
            ValueError: If the trajectory is empty
        """
        if len(states) == 0:
            raise ValueError("Cannot summarize an empty trajectory")
        atmosphere = atmosphere or get_atmosphere()

        time = np.array([s.time for s in states])
        altitude = np.array([s.altitude for s in states])
        velocity = np.array([s.velocity for s in states])
        speed = np.linalg.norm(velocity, axis=1)

        sound_speed = np.array([
            atmosphere.evaluate(max(z, 0.0)).speed_of_sound for z in altitude
        ])

        max_accel = 0.0
        if len(states) > 1:
            dt = np.diff(time)
            dv = np.linalg.norm(np.diff(velocity, axis=0), axis=1)
            accel = np.where(dt > 0, dv / np.where(dt > 0, dt, 1.0), 0.0)
            max_accel = float(accel.max())

        i_apogee = int(np.argmax(altitude))
        return cls(
            apogee=float(altitude[i_apogee]),
            apogee_time=float(time[i_apogee]),
            max_speed=float(speed.max()),
            max_mach=float((speed / sound_speed).max()),
            max_accel=max_accel,
            max_accel_g=max_accel / G0,
            flight_time=float(time[-1]),
            impact_speed=float(speed[-1]),
        )

    def to_dict(self) -> dict[str, float]:
        """Performance block with unit-suffixed keys."""
        return {
            "apogee_m": round(self.apogee, 2),
            "apogee_time_s": round(self.apogee_time, 2),
            "max_speed_ms": round(self.max_speed, 2),
            "max_mach": round(self.max_mach, 3),
            "max_accel_ms2": round(self.max_accel, 2),
            "max_accel_g": round(self.max_accel_g, 2),
            "flight_time_s": round(self.flight_time, 2),
            "impact_speed_ms": round(self.impact_speed, 2),
        }
