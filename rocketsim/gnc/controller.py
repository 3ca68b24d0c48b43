"""Controller interface used by the simulation runner.

The runner depends only on this capability, so any control law (PID
attitude loops, bang-bang, open-loop profiles, external policies) can be
flown by subclassing ``Controller``.

Example:
    >>> class HoldVertical(Controller):
    ...     def control(self, state, mission, dt):
    ...         return GuidanceCommand()
"""

from abc import ABC, abstractmethod

from rocketsim.dynamics.state import GuidanceCommand, RigidBodyState
from rocketsim.vehicle.mission import Mission


class Controller(ABC):
    """Guidance and attitude control law.

    ``control`` is called once per outer simulation step; the returned
    command is held for every integrator sub-stage of that step.
    """

    @abstractmethod
    def control(
        self,
        state: RigidBodyState,
        mission: Mission,
        dt: float,
    ) -> GuidanceCommand:
        """Produce the gimbal command for the next step."""

    def reset(self) -> None:
        """Clear internal state between runs. Stateless laws need nothing."""

    def name(self) -> str:
        """Short label used in logs and reports."""
        return "unnamed"
