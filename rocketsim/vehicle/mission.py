"""Mission definition: an ordered stack of stages.

Stage 0 fires first; each stage's payload is everything above it.

Example:
    >>> from rocketsim.vehicle import MissionBuilder, StageBuilder
    >>>
    >>> mission = (
    ...     MissionBuilder("Two Stage")
    ...     .stage(StageBuilder("Booster").thrust(5000.0).build())
    ...     .stage(StageBuilder("Sustainer").build())
    ...     .build()
    ... )
    >>> print(f"Ideal delta-v: {mission.total_delta_v:.0f} m/s")
"""

from dataclasses import dataclass

from beartype import beartype

from rocketsim.errors import ConfigurationError
from rocketsim.vehicle.stage import Stage

# Propellant below this is treated as exhausted [kg]
BURNOUT_THRESHOLD: float = 0.01


@beartype
@dataclass(frozen=True)
class Mission:
    """Named, ordered, non-empty sequence of stages.

    Attributes:
        name: Mission name
        stages: Stages in firing order
    """
    name: str
    stages: tuple[Stage, ...]

    def __post_init__(self) -> None:
        if not self.stages:
            raise ConfigurationError(f"Mission '{self.name}' has no stages")

    @property
    def num_stages(self) -> int:
        return len(self.stages)

    @property
    def total_mass(self) -> float:
        """Wet mass of the full stack at ignition [kg]."""
        return sum((s.total_mass for s in self.stages), 0.0)

    @property
    def total_delta_v(self) -> float:
        """Sum of stage-by-stage ideal delta-v [m/s]."""
        return sum(
            (stage.delta_v(self.upper_stages_mass(i)) for i, stage in enumerate(self.stages)),
            0.0,
        )

    def active_stage(self, index: int) -> Stage | None:
        """Stage at ``index``, or None once every stage is spent."""
        if 0 <= index < len(self.stages):
            return self.stages[index]
        return None

    def upper_stages_mass(self, index: int) -> float:
        """Total mass of every stage above ``index`` [kg]."""
        return sum((s.total_mass for s in self.stages[index + 1:]), 0.0)

    def remaining_propellant(self, mass: float, index: int) -> float:
        """Propellant left in stage ``index`` for a vehicle of ``mass`` [kg].

        Zero once every stage is spent.
        """
        stage = self.active_stage(index)
        if stage is None:
            return 0.0
        return mass - stage.dry_mass - self.upper_stages_mass(index)


class MissionBuilder:
    """Fluent assembly of a Mission, one stage at a time."""

    def __init__(self, name: str = "Mission") -> None:
        self._name = name
        self._stages: list[Stage] = []

    def name(self, name: str) -> "MissionBuilder":
        self._name = name
        return self

    def stage(self, stage: Stage) -> "MissionBuilder":
        self._stages.append(stage)
        return self

    def build(self) -> Mission:
        return Mission(name=self._name, stages=tuple(self._stages))
