"""Shared fixtures for the plant vitals tests."""

from collections.abc import Callable

import pytest

from bloompot.config import PlantProfile

BASE_PROFILE = dict(
    common_name="Test Monstera",
    scientific_name="Monstera deliciosa",
    category="tropical",
    light_preference=1000.0,
    water_preference="evenly_moist",
    theta_wp=0.12,
    theta_crit=0.25,
    theta_fc=0.45,
    w_min=0.2,
    l_min=500.0,
    k_w=2.0,
    k_rw=0.1,
    p=1.5,
    k_t=0.05,
    k_rt=0.1,
    k_l=0.0005,
    k_rl=0.1,
    alpha_evap=0.5,
    e_max=0.01,
    n_retention=1.5,
    c_t=0.03,
    c_h=0.01,
    s_max=10.0,
    k_sat=0.2,
    tau_sat=24.0,
    q=0.05,
    w_init=0.35,
    r_init=2.0,
)


@pytest.fixture
def make_profile() -> Callable[..., PlantProfile]:
    """Factory for test profiles with selected fields overridden."""

    def _make(**overrides: float | str) -> PlantProfile:
        return PlantProfile(**{**BASE_PROFILE, **overrides})

    return _make


@pytest.fixture
def profile(make_profile: Callable[..., PlantProfile]) -> PlantProfile:
    return make_profile()
