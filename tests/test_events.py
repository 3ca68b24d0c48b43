"""Unit tests for event detectors."""

import numpy as np

from rocketsim.dynamics.state import RigidBodyState
from rocketsim.simulation.events import (
    AltitudeDetector,
    ApogeeDetector,
    EventDetector,
    EventKind,
    SimEvent,
)


def make_state(altitude, vz, time=0.0):
    return RigidBodyState(
        time=time,
        position=np.array([0.0, 0.0, altitude]),
        velocity=np.array([0.0, 0.0, vz]),
        attitude=np.array([1.0, 0.0, 0.0, 0.0]),
        angular_velocity=np.zeros(3),
        mass=100.0,
    )


class TestApogeeDetector:
    """Test apogee detection."""

    def test_apogee_detected(self):
        det = ApogeeDetector()
        assert det.check(make_state(5000.0, 10.0), make_state(5005.0, -1.0)) is EventKind.APOGEE

    def test_still_climbing(self):
        det = ApogeeDetector()
        assert det.check(make_state(5000.0, 10.0), make_state(5005.0, 5.0)) is None

    def test_ignored_near_ground(self):
        """Vertical velocity reversals below 100 m are not an apogee."""
        det = ApogeeDetector()
        assert det.check(make_state(50.0, 1.0), make_state(50.1, -0.5)) is None

    def test_satisfies_protocol(self):
        assert isinstance(ApogeeDetector(), EventDetector)


class TestAltitudeDetector:
    """Test altitude threshold crossings."""

    def test_ascending_fires_once(self):
        det = AltitudeDetector(1000.0, ascending=True)
        prev, curr = make_state(900.0, 100.0), make_state(1050.0, 100.0)

        detail = det.check(prev, curr)
        assert detail == "Altitude 1000 m (ascending)"
        # Should not fire again
        assert det.check(prev, curr) is None

    def test_descending(self):
        det = AltitudeDetector(1000.0, ascending=False)
        assert det.check(make_state(900.0, 100.0), make_state(1050.0, 100.0)) is None
        assert det.check(make_state(1050.0, -100.0), make_state(950.0, -100.0)) is not None

    def test_landing_exactly_on_threshold(self):
        det = AltitudeDetector(1000.0)
        assert det.check(make_state(990.0, 10.0), make_state(1000.0, 0.0)) is not None


class TestSimEvent:
    """Test the event record."""

    def test_fields(self):
        state = make_state(10.0, 0.0, time=3.0)
        event = SimEvent(time=3.0, kind=EventKind.CUSTOM, state=state, detail="note")
        assert event.time == 3.0
        assert event.kind is EventKind.CUSTOM
        assert event.state is state
        assert "note" in repr(event)
