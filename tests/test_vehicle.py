"""Unit tests for stage and mission definitions."""

import numpy as np
import pytest

from rocketsim.environment.gravity import G0
from rocketsim.errors import ConfigurationError
from rocketsim.vehicle import Mission, MissionBuilder, StageBuilder, presets

# =============================================================================
# Stage Tests
# =============================================================================

class TestStageBuilder:
    """Test fluent stage construction."""

    def test_roundtrip_exact_values(self):
        """Builder returns exactly the supplied values."""
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
        assert stage.name == "Main"
        assert stage.dry_mass == 20.0
        assert stage.propellant_mass == 10.0
        assert stage.thrust == 2000.0
        assert stage.isp == 220.0
        assert stage.drag_coefficient == 0.3
        assert stage.reference_area == 0.008
        assert stage.inertia == (5.0, 5.0, 0.5)
        assert stage.nozzle_offset == 1.0
        assert stage.cp_offset == 0.3
        assert stage.max_gimbal == 0.15

    def test_defaults(self):
        """Unset fields take the builder defaults."""
        stage = StageBuilder().build()
        assert stage.name == "Stage"
        assert stage.dry_mass == 10.0
        assert stage.propellant_mass == 5.0
        assert stage.thrust == 1000.0
        assert stage.isp == 220.0
        assert stage.inertia == (5.0, 5.0, 0.5)
        assert stage.max_gimbal == 0.1

    def test_rename(self):
        assert StageBuilder("A").name("B").build().name == "B"


class TestStage:
    """Test stage derived quantities and validation."""

    @pytest.fixture
    def stage(self):
        return presets.sounding_rocket().stages[0]

    def test_mass_flow(self, stage):
        assert stage.mass_flow == pytest.approx(2000.0 / (220.0 * G0))

    def test_burn_time(self, stage):
        assert stage.burn_time == pytest.approx(10.0 * 220.0 * G0 / 2000.0)

    def test_total_mass(self, stage):
        assert stage.total_mass == 30.0

    def test_delta_v(self, stage):
        """Rocket equation, with and without payload."""
        assert stage.delta_v() == pytest.approx(220.0 * G0 * np.log(30.0 / 20.0))
        assert stage.delta_v(10.0) == pytest.approx(220.0 * G0 * np.log(40.0 / 30.0))

    def test_thrust_to_weight(self, stage):
        assert stage.thrust_to_weight() == pytest.approx(2000.0 / (30.0 * G0))

    def test_unpowered_stage(self):
        """A stage without propellant may have no engine."""
        stage = StageBuilder("Payload").propellant_mass(0.0).thrust(0.0).build()
        assert stage.mass_flow == 0.0
        assert stage.burn_time == 0.0

    @pytest.mark.parametrize("setter, value", [
        ("dry_mass", 0.0),
        ("dry_mass", -1.0),
        ("propellant_mass", -1.0),
        ("thrust", -5.0),
        ("isp", 0.0),
        ("drag_coefficient", -0.1),
        ("reference_area", -0.01),
        ("max_gimbal", -0.1),
    ])
    def test_invalid_values_rejected(self, setter, value):
        """Invalid stage parameters fail at construction."""
        builder = getattr(StageBuilder("Bad"), setter)(value)
        with pytest.raises(ConfigurationError):
            builder.build()

    def test_propellant_without_thrust_rejected(self):
        with pytest.raises(ConfigurationError, match="no thrust"):
            StageBuilder("Bad").thrust(0.0).build()

    def test_nonpositive_inertia_rejected(self):
        with pytest.raises(ConfigurationError, match="inertia"):
            StageBuilder("Bad").inertia(1.0, 0.0, 1.0).build()

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            StageBuilder("Bad").dry_mass(-1.0).build()


# =============================================================================
# Mission Tests
# =============================================================================

class TestMission:
    """Test stage stacking."""

    def test_pathfinder_masses(self):
        mission = presets.pathfinder()
        assert mission.num_stages == 2
        assert mission.total_mass == pytest.approx(79.0)
        assert mission.upper_stages_mass(0) == pytest.approx(14.0)
        assert mission.upper_stages_mass(1) == 0.0

    def test_total_delta_v_carries_upper_stages(self):
        """Each stage's payload is everything above it."""
        mission = presets.pathfinder()
        booster, sustainer = mission.stages
        expected = booster.delta_v(sustainer.total_mass) + sustainer.delta_v()
        assert mission.total_delta_v == pytest.approx(expected)

    def test_active_stage(self):
        mission = presets.pathfinder()
        assert mission.active_stage(0).name == "S1-Booster"
        assert mission.active_stage(1).name == "S2-Sustainer"
        assert mission.active_stage(2) is None

    def test_remaining_propellant(self):
        mission = presets.pathfinder()
        assert mission.remaining_propellant(79.0, 0) == pytest.approx(25.0)
        assert mission.remaining_propellant(14.0, 1) == pytest.approx(6.0)
        assert mission.remaining_propellant(8.0, 2) == 0.0

    def test_empty_mission_rejected(self):
        with pytest.raises(ConfigurationError):
            Mission(name="Empty", stages=())
        with pytest.raises(ConfigurationError):
            MissionBuilder("Empty").build()

    def test_builder(self):
        stage = StageBuilder("Only").build()
        mission = MissionBuilder().name("Solo").stage(stage).build()
        assert mission.name == "Solo"
        assert mission.stages == (stage,)

    def test_sounding_rocket_preset(self):
        mission = presets.sounding_rocket()
        assert mission.num_stages == 1
        assert mission.total_mass == 30.0
