#!/usr/bin/env python
"""Example: Plug custom control laws into the simulation runner.

Flies the same single-stage rocket three times:
1. BangBangController - fixed gimbal kick between 3 s and 8 s
2. A plain function wrapped in FunctionController (proportional pitch hold)
3. The default TVC controller for comparison

Usage:
    uv run python scripts/custom_controller.py
"""

import logging

import numpy as np

from rocketsim.dynamics import GuidanceCommand
from rocketsim.gnc import BangBangController, FunctionController, TVCController
from rocketsim.simulation import SimConfig, simulate_with
from rocketsim.vehicle import MissionBuilder, StageBuilder

HOLD_PITCH = np.radians(80.0)  # Pitch held by the function controller [rad]


def pitch_hold(state, mission, dt):
    """Proportional hold of a fixed pitch after a 2 s vertical rise."""
    if state.time < 2.0:
        return GuidanceCommand()
    return GuidanceCommand(pitch=1.5 * (HOLD_PITCH - state.pitch))


def build_mission():
    stage = (
        StageBuilder("Main")
        .dry_mass(20.0)
        .propellant_mass(10.0)
        .thrust(2000.0)
        .isp(220.0)
        .drag_coefficient(0.3)
        .reference_area(0.008)
        .inertia(5.0, 5.0, 0.5)
        .nozzle_offset(1.0)
        .cp_offset(0.3)
        .max_gimbal(0.15)
        .build()
    )
    return MissionBuilder("BangBang Demo").stage(stage).build()


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)

    print("=" * 60)
    print("CUSTOM CONTROLLER COMPARISON")
    print("=" * 60)

    mission = build_mission()
    config = SimConfig(dt=0.005, max_time=300.0)

    controllers = [
        BangBangController(pitchover_start=3.0, pitchover_end=8.0, gimbal_kick=0.08),
        FunctionController(pitch_hold, label="PitchHold"),
        TVCController(),
    ]

    print(f"\n{'Controller':<14} {'Apogee (km)':>12} {'Downrange (m)':>14} {'Time (s)':>9} {'Points':>8}")
    print("-" * 62)
    for controller in controllers:
        result = simulate_with(mission, controller, config)
        final = result.final_state
        downrange = float(np.hypot(final.position[0], final.position[1]))
        print(
            f"{result.controller_name:<14} {result.altitude.max() / 1000:>12.2f} "
            f"{downrange:>14.0f} {final.time:>9.1f} {len(result):>8d}"
        )
