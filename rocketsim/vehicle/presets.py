"""Reference vehicles used by the examples and regression tests."""

from rocketsim.vehicle.mission import Mission, MissionBuilder
from rocketsim.vehicle.stage import StageBuilder


def pathfinder() -> Mission:
    """Two-stage sub-orbital test vehicle (booster + sustainer)."""
    booster = (
        StageBuilder("S1-Booster")
        .dry_mass(40.0)
        .propellant_mass(25.0)
        .thrust(5000.0)
        .isp(220.0)
        .drag_coefficient(0.35)
        .reference_area(0.02)
        .inertia(20.0, 20.0, 2.0)
        .nozzle_offset(1.5)
        .cp_offset(0.4)
        .max_gimbal(0.1)
        .build()
    )
    sustainer = (
        StageBuilder("S2-Sustainer")
        .dry_mass(8.0)
        .propellant_mass(6.0)
        .thrust(1200.0)
        .isp(250.0)
        .drag_coefficient(0.28)
        .reference_area(0.008)
        .inertia(2.0, 2.0, 0.2)
        .nozzle_offset(0.6)
        .cp_offset(0.25)
        .max_gimbal(0.08)
        .build()
    )
    return MissionBuilder("Pathfinder").stage(booster).stage(sustainer).build()


def sounding_rocket() -> Mission:
    """Single-stage sounding rocket."""
    main = (
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
        .max_gimbal(0.1)
        .build()
    )
    return MissionBuilder("Sounding Rocket").stage(main).build()
