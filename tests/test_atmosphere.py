"""Tests for the standard atmosphere."""

import numpy as np
import pytest

from rocketsim.environment.atmosphere import (
    H_TOP,
    P0,
    P_TOP,
    T0,
    T_TOP,
    TAIL_DECAY,
    Atmosphere,
    AtmosphereModel,
    AtmosphereResult,
    density_at_altitude,
    get_atmosphere,
)


@pytest.fixture
def atm():
    return Atmosphere()


class TestAtmosphere:
    """Test the layered ISA model."""

    def test_sea_level(self, atm):
        result = atm.evaluate(0.0)
        assert result.temperature == pytest.approx(T0)
        assert result.pressure == pytest.approx(P0)
        assert result.density == pytest.approx(1.225, rel=1e-3)
        assert result.speed_of_sound == pytest.approx(340.29, rel=1e-4)

    def test_tropopause(self, atm):
        assert atm.temperature(11000.0) == pytest.approx(216.65)
        assert atm.pressure(11000.0) == pytest.approx(22632.0, rel=1e-3)
        # Isothermal layer
        assert atm.temperature(15000.0) == pytest.approx(216.65)

    def test_density_decreases(self, atm):
        altitudes = np.linspace(0.0, 85e3, 171)
        density = atm.profile(altitudes)["density"]
        assert np.all(np.diff(density) < 0.0)

    def test_density_decreases_in_tail(self, atm):
        density = atm.profile(np.linspace(87e3, 150e3, 64))["density"]
        assert np.all(np.diff(density) < 0.0)
        assert density[0] < 1e-5

    def test_exponential_tail(self, atm):
        result = atm.evaluate(100e3)
        assert result.temperature == T_TOP
        assert result.pressure == pytest.approx(P_TOP * np.exp(-TAIL_DECAY * (100e3 - H_TOP)))
        assert result.is_vacuum is False
        assert atm.evaluate(200e3).is_vacuum

    def test_negative_altitude_clamped(self, atm):
        below = atm.evaluate(-100.0)
        assert below == atm.evaluate(0.0)
        assert below.altitude == 0.0

    def test_dynamic_pressure(self, atm):
        q = atm.dynamic_pressure(0.0, 100.0)
        assert q == pytest.approx(0.5 * atm.density(0.0) * 100.0**2)

    def test_profile_keys(self, atm):
        profile = atm.profile([0.0, 1000.0, 2000.0])
        assert set(profile) == {"altitude", "temperature", "pressure", "density", "speed_of_sound"}
        assert len(profile["pressure"]) == 3

    def test_satisfies_protocol(self, atm):
        assert isinstance(atm, AtmosphereModel)
        assert isinstance(atm.evaluate(500.0), AtmosphereResult)

    def test_default_instance(self):
        assert get_atmosphere() is get_atmosphere()
        assert density_at_altitude(5000.0) == pytest.approx(get_atmosphere().density(5000.0))
