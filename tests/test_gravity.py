"""Tests for the gravity models."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from rocketsim.environment.gravity import (
    EARTH_RADIUS,
    G0,
    MU_EARTH,
    R_EARTH_EQ,
    Gravity,
    GravityModel,
    gravity_magnitude,
    j2_acceleration,
    point_mass_acceleration,
)


class TestLaunchFrameGravity:
    """Test inverse-square gravity above a spherical Earth."""

    def test_sea_level(self):
        assert gravity_magnitude(0.0) == pytest.approx(G0)

    def test_inverse_square(self):
        assert gravity_magnitude(EARTH_RADIUS) == pytest.approx(G0 / 4.0)

    def test_decreases_with_altitude(self):
        assert gravity_magnitude(10e3) < gravity_magnitude(0.0)

    def test_negative_altitude_clamped(self):
        assert gravity_magnitude(-500.0) == pytest.approx(G0)


class TestInertialGravity:
    """Test ECI point-mass and J2 gravity."""

    def test_point_mass_magnitude(self):
        r = R_EARTH_EQ + 400e3
        a = point_mass_acceleration(np.array([r, 0.0, 0.0]))
        assert_allclose(a, [-MU_EARTH / r**2, 0.0, 0.0], rtol=1e-10)

    def test_zero_at_centre(self):
        assert_allclose(point_mass_acceleration(np.zeros(3)), np.zeros(3))
        assert_allclose(j2_acceleration(np.array([0.5, 0.0, 0.0])), np.zeros(3))

    def test_j2_stronger_at_equator(self):
        position = np.array([R_EARTH_EQ + 400e3, 0.0, 0.0])
        pm = np.linalg.norm(point_mass_acceleration(position))
        j2 = np.linalg.norm(j2_acceleration(position))
        assert j2 > pm
        assert j2 == pytest.approx(pm, rel=2e-3)

    def test_j2_weaker_over_pole(self):
        position = np.array([0.0, 0.0, R_EARTH_EQ + 400e3])
        pm = np.linalg.norm(point_mass_acceleration(position))
        j2 = np.linalg.norm(j2_acceleration(position))
        assert j2 < pm

    def test_gravity_selector(self):
        position = np.array([7000e3, 0.0, 1000e3])
        assert_allclose(
            Gravity(GravityModel.J2).acceleration(position), j2_acceleration(position)
        )
        assert np.linalg.norm(Gravity().acceleration(position)) == pytest.approx(
            MU_EARTH / np.dot(position, position)
        )
