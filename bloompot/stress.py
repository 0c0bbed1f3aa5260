"""
Plant stress dynamics.

Three independent leaky integrators, one per stressor:

    dSW/dt = kW * (theta_crit - W)_+^p - kRW * SW + waterlogging
    dST/dt = kT * [(T - Tmax)_+ + (Tmin - T)_+] - kRT * ST
    dSL/dt = kL * (Lmin - L)_+ - kRL * SL

Each channel is advanced with a forward Euler step and floored at zero.
Total stress is the sum of the channels, capped at s_max.

Waterlogging: hours spent at or above field capacity accumulate; once
they reach tau_sat, kSat is added to dSW/dt on every step until the soil
drops below field capacity again, which resets the counter.
"""

from bloompot.config import TEMP_MAX, TEMP_MIN, PlantProfile
from bloompot.moisture import clamp, pos


def waterlogging_term(
    moisture: float,
    waterlogged_duration: float,
    profile: PlantProfile,
    dt_hours: float,
) -> tuple[float, float]:
    """
    Track saturation time and compute the extra water-stress gain.

    Args:
        moisture: Soil moisture after this step's update
        waterlogged_duration: Saturated hours accumulated so far
        profile: Species parameters
        dt_hours: Step length

    Returns:
        Tuple of (term added to dSW/dt, new saturated duration)
    """
    if moisture >= profile.theta_fc:
        duration = waterlogged_duration + dt_hours
    else:
        duration = 0.0

    term = profile.k_sat if duration >= profile.tau_sat else 0.0
    return term, duration


def water_stress_drive(moisture: float, profile: PlantProfile) -> float:
    """Deficit-driven gain kW * (theta_crit - W)_+^p."""
    return profile.k_w * pos(profile.theta_crit - moisture) ** profile.p


def temperature_deviation(temperature_c: float) -> float:
    """Degrees outside the comfortable [TEMP_MIN, TEMP_MAX] window."""
    return pos(temperature_c - TEMP_MAX) + pos(TEMP_MIN - temperature_c)


def update_water_stress(
    water_stress: float,
    moisture: float,
    profile: PlantProfile,
    dt_hours: float,
    waterlogged: float = 0.0,
) -> float:
    """Advance the water stress channel by one step."""
    rate = (
        water_stress_drive(moisture, profile)
        - profile.k_rw * water_stress
        + waterlogged
    )
    return max(0.0, water_stress + rate * dt_hours)


def update_temperature_stress(
    temperature_stress: float,
    temperature_c: float,
    profile: PlantProfile,
    dt_hours: float,
) -> float:
    """Advance the temperature stress channel by one step."""
    rate = (
        profile.k_t * temperature_deviation(temperature_c)
        - profile.k_rt * temperature_stress
    )
    return max(0.0, temperature_stress + rate * dt_hours)


def update_light_stress(
    light_stress: float,
    light_lux: float,
    profile: PlantProfile,
    dt_hours: float,
) -> float:
    """Advance the light stress channel by one step."""
    rate = profile.k_l * pos(profile.l_min - light_lux) - profile.k_rl * light_stress
    return max(0.0, light_stress + rate * dt_hours)


def total_stress(
    water_stress: float,
    temperature_stress: float,
    light_stress: float,
    profile: PlantProfile,
) -> float:
    """Sum of the three channels, clamped to [0, s_max]."""
    return clamp(water_stress + temperature_stress + light_stress, 0.0, profile.s_max)
