"""Discrete flight events and passive event detectors.

Detectors inspect consecutive recorded states and report when something
happened (apogee, an altitude crossing, ...). They never change the state.

Example:
    >>> from rocketsim.simulation import AltitudeDetector, ApogeeDetector, simulate_with
    >>>
    >>> detectors = [ApogeeDetector(), AltitudeDetector(10000.0, ascending=True)]
    >>> result = simulate_with(mission, controller, detectors=detectors)
    >>> for event in result.events:
    ...     print(event.time, event.kind, event.detail)
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol, runtime_checkable

from beartype import beartype

from rocketsim.dynamics.state import RigidBodyState


class EventKind(Enum):
    """Kinds of simulation events."""

    LAUNCH = auto()
    BURNOUT = auto()
    STAGING = auto()
    APOGEE = auto()
    LANDING = auto()
    CUSTOM = auto()


@beartype
@dataclass(frozen=True)
class SimEvent:
    """A discrete event that occurred during a run.

    Attributes:
        time: Event time [s]
        kind: Event category
        state: Recorded state at the event
        detail: Human-readable description
    """
    time: float
    kind: EventKind
    state: RigidBodyState = field(repr=False, compare=False)
    detail: str = ""


@runtime_checkable
class EventDetector(Protocol):
    """Inspect two consecutive states and report an event, if any.

    ``check`` returns the event kind, a description (reported as
    ``EventKind.CUSTOM``), or None.
    """

    def check(
        self,
        prev: RigidBodyState,
        current: RigidBodyState,
    ) -> EventKind | str | None:
        ...


class ApogeeDetector:
    """Vertical velocity changes sign from up to down above ``min_altitude``."""

    def __init__(self, min_altitude: float = 100.0) -> None:
        self.min_altitude = min_altitude

    def check(
        self,
        prev: RigidBodyState,
        current: RigidBodyState,
    ) -> EventKind | str | None:
        if (
            prev.velocity[2] > 0.0
            and current.velocity[2] <= 0.0
            and current.altitude > self.min_altitude
        ):
            return EventKind.APOGEE
        return None


class AltitudeDetector:
    """Altitude crosses a threshold in one direction. Fires at most once."""

    def __init__(self, altitude: float, ascending: bool = True) -> None:
        self.altitude = altitude
        self.ascending = ascending
        self._fired = False

    def check(
        self,
        prev: RigidBodyState,
        current: RigidBodyState,
    ) -> EventKind | str | None:
        if self._fired:
            return None
        if self.ascending:
            crossed = prev.altitude < self.altitude <= current.altitude
        else:
            crossed = prev.altitude > self.altitude >= current.altitude
        if not crossed:
            return None
        self._fired = True
        direction = "ascending" if self.ascending else "descending"
        return f"Altitude {self.altitude:.0f} m ({direction})"
