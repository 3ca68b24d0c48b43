"""Unit tests for guidance and control laws."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from rocketsim.dynamics.state import GuidanceCommand, RigidBodyState
from rocketsim.gnc import (
    BangBangController,
    Controller,
    FunctionController,
    OpenLoopController,
    PIDController,
    PIDGains,
    PitchProgram,
    TVCController,
)
from rocketsim.vehicle import presets


def state_at(time, velocity=(0.0, 0.0, 0.0), attitude=(1.0, 0.0, 0.0, 0.0)):
    return RigidBodyState(
        time=time,
        position=np.array([0.0, 0.0, 100.0]),
        velocity=np.array(velocity, dtype=float),
        attitude=np.array(attitude, dtype=float),
        angular_velocity=np.zeros(3),
        mass=25.0,
    )


@pytest.fixture
def mission():
    return presets.sounding_rocket()


# =============================================================================
# PID Controller Tests
# =============================================================================

class TestPIDController:
    """Test PID controller."""

    def test_proportional_only(self):
        """P-only controller should give kp * error."""
        pid = PIDController(kp=2.0, ki=0.0, kd=0.0)
        assert pid.update(0.3, 0.01) == pytest.approx(0.6)

    def test_integral_accumulates(self):
        """I-only controller should give ki * sum(e * dt)."""
        pid = PIDController(kp=0.0, ki=2.0, kd=0.0)
        for _ in range(5):
            output = pid.update(1.0, 0.1)
        assert pid.integral == pytest.approx(0.5)
        assert output == pytest.approx(1.0)

    def test_integral_clamped(self):
        """Integral accumulator is limited to +/- 1 by default."""
        pid = PIDController(kp=0.0, ki=1.0, kd=0.0)
        for _ in range(50):
            output = pid.update(1.0, 0.1)
        assert output == pytest.approx(1.0)

        for _ in range(50):
            output = pid.update(-1.0, 0.1)
        assert output == pytest.approx(-1.0)

    def test_derivative_from_zero(self):
        """Previous error starts at zero."""
        pid = PIDController(kp=0.0, ki=0.0, kd=1.0)
        assert pid.update(0.5, 0.1) == pytest.approx(5.0)
        assert pid.update(0.5, 0.1) == pytest.approx(0.0)

    def test_derivative_zero_dt(self):
        pid = PIDController(kp=0.0, ki=0.0, kd=1.0)
        assert pid.update(0.5, 0.0) == 0.0

    def test_output_limits(self):
        pid = PIDController(kp=10.0, output_limits=(-1.0, 1.0))
        assert pid.update(5.0, 0.1) == 1.0

    def test_reset(self):
        """Reset should clear integral and previous error."""
        pid = PIDController(kp=0.0, ki=1.0, kd=1.0)
        pid.update(1.0, 0.1)
        pid.reset()
        assert pid.integral == 0.0
        assert pid.update(0.0, 0.1) == 0.0

    def test_from_gains(self):
        pid = PIDController.from_gains(PIDGains(kp=1.0, ki=2.0, kd=3.0), output_limits=(-0.5, 0.5))
        assert (pid.kp, pid.ki, pid.kd) == (1.0, 2.0, 3.0)
        assert pid.output_limits == (-0.5, 0.5)


# =============================================================================
# Guidance Tests
# =============================================================================

class TestPitchProgram:
    """Test the three-phase pitch program."""

    def test_vertical_rise(self):
        assert PitchProgram().pitch_command(state_at(1.0)) == pytest.approx(np.pi / 2)

    def test_linear_pitchover(self):
        """Halfway through the pitch-over: halfway from 90 to 45 degrees."""
        pitch = PitchProgram().pitch_command(state_at(8.5))
        assert pitch == pytest.approx(np.radians(67.5))

    def test_gravity_turn_follows_velocity(self):
        pitch = PitchProgram().pitch_command(state_at(20.0, velocity=(0.0, 100.0, 100.0)))
        assert pitch == pytest.approx(np.pi / 4)

    def test_gravity_turn_descending(self):
        pitch = PitchProgram().pitch_command(state_at(80.0, velocity=(0.0, 100.0, -100.0)))
        assert pitch == pytest.approx(-np.pi / 4)

    def test_slow_vehicle_holds_target(self):
        program = PitchProgram(target_pitch=np.radians(60.0))
        pitch = program.pitch_command(state_at(20.0, velocity=(0.0, 1.0, 1.0)))
        assert pitch == pytest.approx(np.radians(60.0))

    def test_invalid_schedule(self):
        with pytest.raises(ValueError):
            PitchProgram(vertical_time=10.0, pitchover_end=5.0)


# =============================================================================
# Controller Tests
# =============================================================================

class TestTVCController:
    """Test the default thrust vector controller."""

    def test_name(self):
        assert TVCController().name() == "TvcController"

    def test_no_command_when_on_profile(self, mission):
        cmd = TVCController().control(state_at(0.0), mission, 0.005)
        assert cmd == GuidanceCommand(pitch=0.0, yaw=0.0)

    def test_pitchover_commands_negative_gimbal(self, mission):
        """Commanded pitch below current pitch drives the gimbal negative."""
        cmd = TVCController().control(state_at(8.5), mission, 0.005)
        assert cmd.pitch < 0.0
        assert cmd.yaw == 0.0

    def test_outputs_not_clamped(self, mission):
        """Limits are applied by the force model, not here."""
        cmd = TVCController().control(state_at(14.9), mission, 0.005)
        assert abs(cmd.pitch) > mission.stages[0].max_gimbal

    def test_yaw_error(self):
        """Tilting the body axis toward +x gives negative yaw error."""
        q = (np.cos(0.1), 0.0, np.sin(0.1), 0.0)
        assert_allclose(TVCController.yaw_error(state_at(0.0, attitude=q)), -0.2)

    def test_reset(self, mission):
        """After reset the controller repeats its first output."""
        tvc = TVCController()
        first = tvc.control(state_at(8.5), mission, 0.005)
        tvc.control(state_at(9.0), mission, 0.005)
        tvc.reset()
        assert tvc.control(state_at(8.5), mission, 0.005) == first

    def test_custom_gains(self, mission):
        tvc = TVCController(pitch_gains=PIDGains(kp=1.0, ki=0.0, kd=0.0))
        cmd = tvc.control(state_at(8.5), mission, 0.005)
        assert cmd.pitch == pytest.approx(np.radians(67.5) - np.pi / 2)


class TestOpenLoopControllers:
    """Test bang-bang, tabulated and function controllers."""

    def test_bang_bang_window(self, mission):
        ctrl = BangBangController()
        assert ctrl.control(state_at(2.0), mission, 0.005).pitch == 0.0
        assert ctrl.control(state_at(3.0), mission, 0.005).pitch == 0.0
        assert ctrl.control(state_at(5.0), mission, 0.005).pitch == -0.08
        assert ctrl.control(state_at(8.0), mission, 0.005).pitch == 0.0
        assert ctrl.name() == "BangBang"

    def test_open_loop_interpolates(self, mission):
        ctrl = OpenLoopController(times=[0.0, 10.0], pitch=[0.0, -0.1], yaw=[0.0, 0.02])
        cmd = ctrl.control(state_at(5.0), mission, 0.005)
        assert cmd.pitch == pytest.approx(-0.05)
        assert cmd.yaw == pytest.approx(0.01)
        assert ctrl.control(state_at(20.0), mission, 0.005).pitch == pytest.approx(-0.1)

    def test_open_loop_validation(self):
        with pytest.raises(ValueError):
            OpenLoopController(times=[0.0], pitch=[0.0])
        with pytest.raises(ValueError):
            OpenLoopController(times=[0.0, 1.0], pitch=[0.0])
        with pytest.raises(ValueError):
            OpenLoopController(times=[1.0, 0.0], pitch=[0.0, 0.0])

    def test_function_controller(self, mission):
        calls = []

        def law(state, mission, dt):
            calls.append(state.time)
            return GuidanceCommand(pitch=0.01)

        resets = []
        ctrl = FunctionController(law, label="custom", on_reset=lambda: resets.append(True))
        assert ctrl.control(state_at(1.0), mission, 0.005).pitch == 0.01
        ctrl.reset()
        assert calls == [1.0]
        assert resets == [True]
        assert ctrl.name() == "custom"

    def test_controller_defaults(self, mission):
        """Subclasses only need control()."""

        class Hold(Controller):
            def control(self, state, mission, dt):
                return GuidanceCommand()

        ctrl = Hold()
        ctrl.reset()
        assert ctrl.name() == "unnamed"

    def test_controller_is_abstract(self):
        with pytest.raises(TypeError):
            Controller()
