#!/usr/bin/env python
"""Example: Fly the two-stage Pathfinder rocket and export the results.

Runs the default TVC controller from ignition to ground impact, prints the
flight summary and writes:
- outputs/pathfinder_trajectory.csv (one row per step)
- outputs/pathfinder_summary.json
- outputs/pathfinder_flight.png

Usage:
    uv run python scripts/pathfinder.py
"""

import logging

import matplotlib

matplotlib.use("Agg")

from rocketsim.export import write_summary_json, write_trajectory_csv
from rocketsim.plotting import plot_trajectory, plot_trajectory_profile
from rocketsim.simulation import SimConfig, simulate
from rocketsim.vehicle import presets


def run_pathfinder():
    """Simulate the Pathfinder mission and report its performance."""
    print("=" * 60)
    print("PATHFINDER FLIGHT SIMULATION")
    print("=" * 60)

    mission = presets.pathfinder()
    config = SimConfig(dt=0.005, max_time=600.0)

    print("\nVehicle:")
    for i, stage in enumerate(mission.stages):
        payload = mission.upper_stages_mass(i)
        print(f"  Stage {i} '{stage.name}':")
        print(f"    Wet mass: {stage.total_mass:.1f} kg, burn time: {stage.burn_time:.1f} s")
        print(f"    T/W: {stage.thrust_to_weight(payload):.2f}, ideal dv: {stage.delta_v(payload):.0f} m/s")
    print(f"  Total ideal delta-v: {mission.total_delta_v:.0f} m/s")

    print(f"\nSimulating {mission.name} ...")
    result = simulate(mission, config)
    summary = result.summary()

    print("\nEvents:")
    for event in result.events:
        print(f"  {event.time:8.2f} s  {event.kind.name:<8} {event.detail}")

    print("\nPerformance:")
    print(f"  Apogee: {summary.apogee / 1000:.2f} km at t={summary.apogee_time:.1f} s")
    print(f"  Max speed: {summary.max_speed:.1f} m/s (Mach {summary.max_mach:.2f})")
    print(f"  Max acceleration: {summary.max_accel:.1f} m/s^2 ({summary.max_accel_g:.1f} g)")
    print(f"  Flight time: {summary.flight_time:.1f} s")
    print(f"  Impact speed: {summary.impact_speed:.1f} m/s")

    return mission, result, summary


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    mission, result, summary = run_pathfinder()

    print("\n" + "=" * 60)
    print("EXPORTING")
    print("=" * 60)

    csv_path = write_trajectory_csv("outputs/pathfinder_trajectory.csv", result.states)
    json_path = write_summary_json("outputs/pathfinder_summary.json", mission, summary)

    fig = plot_trajectory(result)
    fig.savefig("outputs/pathfinder_flight.png", dpi=150, bbox_inches="tight")
    profile = plot_trajectory_profile(result)
    profile.savefig("outputs/pathfinder_profile.png", dpi=150, bbox_inches="tight")

    print("\nGenerated files:")
    print(f"  • {csv_path}")
    print(f"  • {json_path}")
    print("  • outputs/pathfinder_flight.png")
    print("  • outputs/pathfinder_profile.png")
