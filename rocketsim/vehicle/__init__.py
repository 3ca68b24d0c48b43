"""Vehicle configuration: stages, missions and reference presets.

Example:
    >>> from rocketsim.vehicle import StageBuilder, MissionBuilder
    >>>
    >>> stage = StageBuilder("Main").dry_mass(20.0).propellant_mass(10.0).build()
    >>> mission = MissionBuilder("Hop").stage(stage).build()
    >>> print(f"Wet mass: {mission.total_mass:.1f} kg")
"""

from rocketsim.vehicle import presets
from rocketsim.vehicle.mission import Mission, MissionBuilder
from rocketsim.vehicle.stage import Stage, StageBuilder

__all__ = [
    "Stage",
    "StageBuilder",
    "Mission",
    "MissionBuilder",
    "presets",
]
