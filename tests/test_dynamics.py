"""
Tests for the single-step pot dynamics.

These tests verify the core update step behaves correctly, maintains the
clamping invariants and reproduces the reference scenarios.
"""

import pytest

from bloompot import dynamics, watering
from bloompot.config import SensorData, SimulationState
from bloompot.environment import EnvironmentConfig, compute_samples


def make_test_sensor(
    temperature_c: float = 22.0,
    humidity_pct: float = 60.0,
    light_lux: float = 800.0,
    dt_hours: float = 1.0,
) -> SensorData:
    """Create a sample in the comfortable range by default."""
    return SensorData(
        temperature_c=temperature_c,
        humidity_pct=humidity_pct,
        light_lux=light_lux,
        dt_hours=dt_hours,
    )


class TestScenarios:
    """Reference scenarios."""

    def test_wilted_plant_is_watered(self, profile) -> None:
        state = SimulationState.initial(
            profile, moisture=profile.theta_wp - 0.05, reservoir=5.0
        )
        out = dynamics.step(state, make_test_sensor(), profile)

        assert out.pump_on is True
        assert "emergency" in out.reason.lower()
        assert out.next_state.moisture > state.moisture
        assert out.next_state.reservoir == pytest.approx(5.0 - profile.q)

    def test_empty_reservoir(self, profile) -> None:
        state = SimulationState.initial(profile, moisture=0.1, reservoir=0.0)
        out = dynamics.step(state, make_test_sensor(), profile)

        assert out.pump_on is False
        assert out.reason == "Reservoir is empty – pump off."
        assert out.next_state.reservoir == 0.0

    def test_healthy_steady_state(self, profile) -> None:
        mid = (profile.theta_crit + profile.theta_fc) / 2
        state = SimulationState.initial(profile, moisture=mid)

        for _ in range(5):
            out = dynamics.step(state, make_test_sensor(), profile)
            assert out.pump_on is False
            state = out.next_state

        assert out.advice.overall == "Plant is happy and healthy."
        assert state.total_stress == pytest.approx(0.0)


class TestStateInvariants:
    """Clamping invariants hold for every reachable state."""

    @pytest.mark.parametrize(
        "climate",
        [EnvironmentConfig.indoor, EnvironmentConfig.heatwave, EnvironmentConfig.dim_room],
    )
    def test_states_remain_valid(self, profile, climate) -> None:
        state = SimulationState.initial(profile)
        for sample in compute_samples(climate(), num_steps=200):
            state = dynamics.step(state, sample, profile).next_state
            assert state.is_valid(profile)

    def test_extreme_conditions_stay_clamped(self, profile) -> None:
        """A freezing, dark, bone-dry pot saturates at the stress cap."""
        state = SimulationState.initial(profile, moisture=0.0, reservoir=0.0)
        sample = make_test_sensor(temperature_c=-30.0, light_lux=0.0, dt_hours=5.0)
        for _ in range(50):
            state = dynamics.step(state, sample, profile).next_state
            assert state.is_valid(profile)
        assert state.total_stress == profile.s_max

    def test_pump_never_runs_dry(self, profile) -> None:
        state = SimulationState.initial(profile, moisture=0.05, reservoir=0.12)
        for _ in range(10):
            out = dynamics.step(state, make_test_sensor(), profile)
            if state.reservoir <= 0:
                assert out.pump_on is False
            state = out.next_state
        assert state.reservoir == 0.0

    def test_input_state_unchanged(self, profile) -> None:
        state = SimulationState.initial(profile, moisture=0.2)
        snapshot = tuple(state)
        dynamics.step(state, make_test_sensor(), profile)
        assert tuple(state) == snapshot


class TestStressDecay:
    """With favorable conditions every channel relaxes toward zero."""

    def test_monotonic_decay(self, profile) -> None:
        state = SimulationState(
            moisture=0.35,
            reservoir=0.0,
            water_stress=2.0,
            temperature_stress=1.5,
            light_stress=1.0,
            total_stress=4.5,
            waterlogged_duration=0.0,
        )
        sample = make_test_sensor()
        for _ in range(10):
            nxt = dynamics.step(state, sample, profile).next_state
            assert 0 < nxt.water_stress < state.water_stress
            assert 0 < nxt.temperature_stress < state.temperature_stress
            assert 0 < nxt.light_stress < state.light_stress
            assert nxt.total_stress < state.total_stress
            state = nxt


class TestWaterlogging:
    """Sustained saturation adds water stress until the soil drains."""

    def test_activation_and_reset(self, make_profile) -> None:
        # No ET keeps the pot pinned at field capacity
        profile = make_profile(e_max=0.0, tau_sat=3.0, k_sat=0.2)
        state = SimulationState.initial(profile, moisture=profile.theta_fc, reservoir=1.0)
        sample = make_test_sensor()

        stresses = []
        durations = []
        for _ in range(4):
            out = dynamics.step(state, sample, profile)
            assert out.pump_on is False
            assert watering.FIELD_CAPACITY in out.reason
            state = out.next_state
            stresses.append(state.water_stress)
            durations.append(state.waterlogged_duration)

        assert durations == [1.0, 2.0, 3.0, 4.0]
        assert stresses[0] == 0.0
        assert stresses[1] == 0.0
        assert stresses[2] == pytest.approx(profile.k_sat)
        assert stresses[3] == pytest.approx(profile.k_sat * (1 - profile.k_rw) + profile.k_sat)

        drained = state._replace(moisture=0.40)
        out = dynamics.step(drained, sample, profile)
        assert out.next_state.waterlogged_duration == 0.0
        assert out.next_state.water_stress == pytest.approx(stresses[3] * (1 - profile.k_rw))


class TestStepOutput:
    """Tests for the output envelope."""

    def test_status_echoes_environment(self, profile) -> None:
        sample = make_test_sensor(temperature_c=24.5, humidity_pct=48.0, light_lux=640.0)
        out = dynamics.step(SimulationState.initial(profile), sample, profile)
        assert out.status.env.temperature_c == 24.5
        assert out.status.env.humidity_pct == 48.0
        assert out.status.env.light_lux == 640.0
        assert out.status.moisture == out.next_state.moisture
        assert out.status.stress.total == out.next_state.total_stress

    def test_zero_length_step_changes_nothing(self, profile) -> None:
        state = SimulationState.initial(profile)._replace(water_stress=1.0, total_stress=1.0)
        out = dynamics.step(state, make_test_sensor(dt_hours=0.0), profile)
        assert out.next_state.moisture == state.moisture
        assert out.next_state.water_stress == state.water_stress

    def test_to_dict(self, profile) -> None:
        out = dynamics.step(SimulationState.initial(profile), make_test_sensor(), profile)
        data = out.to_dict()
        assert set(data) == {"pump_on", "reason", "status", "advice", "next_state"}
        assert set(data["status"]["stress"]) == {"total", "water", "temperature", "light"}
        assert set(data["advice"]) == {"water", "light", "temperature", "overall"}
        assert data["next_state"]["moisture"] == out.next_state.moisture

    def test_deterministic(self, profile) -> None:
        state = SimulationState.initial(profile, moisture=0.2)
        sample = make_test_sensor(temperature_c=31.0, light_lux=300.0)
        assert dynamics.step(state, sample, profile) == dynamics.step(state, sample, profile)

    def test_steps_must_be_chained(self, profile) -> None:
        """Re-using a stale state loses the previous step's effect."""
        state = SimulationState.initial(profile)
        sample = make_test_sensor()
        first = dynamics.step(state, sample, profile)
        chained = dynamics.step(first.next_state, sample, profile)
        stale = dynamics.step(state, sample, profile)
        assert chained.next_state.moisture < stale.next_state.moisture
