"""
Tests for the stress channels and the waterlogging counter.

Each channel is a leaky integrator: it grows from its own deficit,
decays toward zero otherwise, and never goes negative.
"""

import pytest

from bloompot import stress


class TestWaterlogging:
    """Tests for saturated-hours tracking."""

    def test_duration_accumulates_at_field_capacity(self, profile) -> None:
        term, duration = stress.waterlogging_term(profile.theta_fc, 5.0, profile, 1.0)
        assert duration == 6.0
        assert term == 0.0

    def test_duration_resets_below_field_capacity(self, profile) -> None:
        term, duration = stress.waterlogging_term(0.4, 30.0, profile, 1.0)
        assert duration == 0.0
        assert term == 0.0

    def test_term_applies_once_threshold_reached(self, profile) -> None:
        term, duration = stress.waterlogging_term(
            profile.theta_fc, profile.tau_sat - 1.0, profile, 1.0
        )
        assert duration == profile.tau_sat
        assert term == profile.k_sat

    def test_term_keeps_applying_past_threshold(self, profile) -> None:
        term, _ = stress.waterlogging_term(profile.theta_fc, 100.0, profile, 1.0)
        assert term == profile.k_sat


class TestWaterStress:
    """Tests for the moisture deficit channel."""

    def test_no_drive_above_critical(self, profile) -> None:
        assert stress.water_stress_drive(0.3, profile) == 0.0

    def test_no_drive_at_critical(self, profile) -> None:
        assert stress.water_stress_drive(profile.theta_crit, profile) == 0.0

    def test_drive_is_nonlinear_in_deficit(self, profile) -> None:
        drive = stress.water_stress_drive(profile.theta_crit - 0.05, profile)
        assert drive == pytest.approx(profile.k_w * 0.05**profile.p)

    def test_decay_without_deficit(self, profile) -> None:
        sw = stress.update_water_stress(1.0, 0.35, profile, 1.0)
        assert sw == pytest.approx(1.0 - profile.k_rw)

    def test_grows_when_dry(self, profile) -> None:
        sw = stress.update_water_stress(0.0, 0.1, profile, 1.0)
        assert sw > 0

    def test_waterlogging_adds_to_rate(self, profile) -> None:
        base = stress.update_water_stress(0.5, 0.45, profile, 1.0)
        logged = stress.update_water_stress(0.5, 0.45, profile, 1.0, profile.k_sat)
        assert logged == pytest.approx(base + profile.k_sat)


class TestTemperatureStress:
    """Tests for the temperature deviation channel."""

    def test_comfortable_window_has_no_deviation(self) -> None:
        assert stress.temperature_deviation(10.0) == 0.0
        assert stress.temperature_deviation(22.0) == 0.0
        assert stress.temperature_deviation(30.0) == 0.0

    def test_heat_and_cold_deviate_symmetrically(self) -> None:
        assert stress.temperature_deviation(35.0) == pytest.approx(5.0)
        assert stress.temperature_deviation(5.0) == pytest.approx(5.0)

    def test_grows_when_hot(self, profile) -> None:
        st = stress.update_temperature_stress(0.0, 35.0, profile, 1.0)
        assert st == pytest.approx(profile.k_t * 5.0)

    def test_floored_at_zero(self, profile) -> None:
        """A long step with strong decay cannot overshoot below zero."""
        st = stress.update_temperature_stress(1.0, 22.0, profile, 20.0)
        assert st == 0.0


class TestLightStress:
    """Tests for the light deficit channel."""

    def test_grows_in_low_light(self, profile) -> None:
        sl = stress.update_light_stress(0.0, 100.0, profile, 1.0)
        assert sl == pytest.approx(profile.k_l * (profile.l_min - 100.0))

    def test_decays_in_good_light(self, profile) -> None:
        sl = stress.update_light_stress(1.0, 800.0, profile, 1.0)
        assert sl == pytest.approx(1.0 - profile.k_rl)


class TestTotalStress:
    """Tests for the capped total."""

    def test_sum_of_channels(self, profile) -> None:
        assert stress.total_stress(1.0, 2.0, 0.5, profile) == pytest.approx(3.5)

    def test_capped_at_s_max(self, profile) -> None:
        assert stress.total_stress(8.0, 5.0, 3.0, profile) == profile.s_max
