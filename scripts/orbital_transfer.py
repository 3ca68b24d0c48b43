#!/usr/bin/env python
"""Example: Hohmann transfer budget and J2 orbit propagation.

1. Delta-v and transfer time from a 200 km LEO to GEO
2. Three orbits of an ISS-like 400 km, 51.6 deg orbit with J2, showing the
   nodal regression

Usage:
    uv run python scripts/orbital_transfer.py
"""

import numpy as np

from rocketsim.environment.gravity import R_EARTH_EQ, Gravity, GravityModel
from rocketsim.orbital import KeplerianElements, OrbitalState, hohmann, propagate_orbit

R_GEO = 42_164_000.0  # GEO radius [m]


def run_hohmann():
    print("=" * 60)
    print("HOHMANN TRANSFER: LEO -> GEO")
    print("=" * 60)

    r_leo = R_EARTH_EQ + 200e3
    transfer = hohmann(r_leo, R_GEO)

    print(f"\n  LEO altitude: {(r_leo - R_EARTH_EQ) / 1000:.0f} km")
    print(f"  GEO altitude: {(R_GEO - R_EARTH_EQ) / 1000:.0f} km")
    print(f"\n  Delta-v 1 (raise apoapsis): {transfer.dv1:.1f} m/s")
    print(f"  Delta-v 2 (circularize):    {transfer.dv2:.1f} m/s")
    print(f"  Total delta-v:              {transfer.total_dv:.1f} m/s")
    print(f"  Transfer time:              {transfer.transfer_time / 3600:.2f} hours")


def run_j2_propagation(n_orbits: int = 3):
    print("\n" + "=" * 60)
    print("LEO ORBIT PROPAGATION (WITH J2)")
    print("=" * 60)

    orbit = KeplerianElements.circular(400e3, np.radians(51.6))
    initial = OrbitalState.from_elements(orbit)
    period = orbit.period

    print(f"\n  Orbit: 400 km, {np.degrees(orbit.inc):.1f} deg inclination")
    print(f"  Period: {period / 60:.1f} min")
    print(f"  Orbital speed: {initial.speed:.1f} m/s")

    dt = 1.0
    trajectory = propagate_orbit(initial, dt, n_orbits * period, gravity=Gravity(GravityModel.J2))
    print(f"\n  Propagated {n_orbits} orbits ({n_orbits * period:.0f} s, {len(trajectory)} samples)")

    steps_per_orbit = int(period / dt)
    for i in range(n_orbits + 1):
        state = trajectory[min(i * steps_per_orbit, len(trajectory) - 1)]
        elements = state.elements
        print(
            f"  Orbit {i}: alt={state.altitude / 1000:.1f} km, ecc={elements.ecc:.6f}, "
            f"inc={np.degrees(elements.inc):.3f} deg, RAAN={np.degrees(elements.raan):.3f} deg"
        )

    print("\n  J2 regresses the node westward (about -5 deg/day at this inclination)")


if __name__ == "__main__":
    run_hohmann()
    run_j2_propagation()
