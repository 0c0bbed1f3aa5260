"""
Soil moisture and evapotranspiration model.

Water balance for one pot over a step of dt hours:

    dW/dt = I(t) - ET(t)
    ET(t) = EMax * eta(T, H) * [alpha * Wavail^n + (1 - alpha) * Ks]
    I(t)  = Q / Vpot while the pump runs and the reservoir is not empty

Wavail ramps from the wilting point to field capacity, Ks (the FAO style
water stress coefficient) ramps from the wilting point to the critical
point. Both are clamped to [0, 1]; ET is never negative.
"""

from bloompot.config import HUMIDITY_REF, POT_VOLUME, TEMP_OPT, PlantProfile


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp x into [lo, hi]."""
    return max(lo, min(hi, x))


def pos(x: float) -> float:
    """Positive part, (x)_+."""
    return x if x > 0 else 0.0


def water_availability(moisture: float, profile: PlantProfile) -> float:
    """
    Fraction of plant-available water.

    0 at or below the wilting point, 1 at field capacity, linear between.

    Args:
        moisture: Soil moisture index
        profile: Species parameters

    Returns:
        Availability in [0, 1]
    """
    if moisture <= profile.theta_wp:
        return 0.0
    denom = profile.theta_fc - profile.theta_wp
    if denom <= 0:
        return 0.0
    return clamp((moisture - profile.theta_wp) / denom, 0.0, 1.0)


def stress_coefficient(moisture: float, profile: PlantProfile) -> float:
    """
    Water stress coefficient Ks.

    0 at or below the wilting point, 1 at or above the critical point,
    linear between.

    Args:
        moisture: Soil moisture index
        profile: Species parameters

    Returns:
        Ks in [0, 1]
    """
    if moisture <= profile.theta_wp:
        return 0.0
    if moisture >= profile.theta_crit:
        return 1.0
    denom = profile.theta_crit - profile.theta_wp
    if denom <= 0:
        return 0.0
    return clamp((moisture - profile.theta_wp) / denom, 0.0, 1.0)


def environmental_scaling(
    temperature_c: float,
    humidity_pct: float,
    profile: PlantProfile,
) -> float:
    """
    Temperature and humidity multiplier on evapotranspiration.

    eta = max(0, 1 + cT (T - Topt)) * max(0, 1 + cH (Href - H))

    Warm, dry air raises demand; cold, humid air lowers it. Each factor
    floors at zero.
    """
    eta_t = max(0.0, 1.0 + profile.c_t * (temperature_c - TEMP_OPT))
    eta_h = max(0.0, 1.0 + profile.c_h * (HUMIDITY_REF - humidity_pct))
    return eta_t * eta_h


def evapotranspiration(
    moisture: float,
    temperature_c: float,
    humidity_pct: float,
    profile: PlantProfile,
) -> float:
    """
    Water lost from soil and plant per hour.

    Args:
        moisture: Soil moisture index at the start of the step
        temperature_c: Air temperature (°C)
        humidity_pct: Relative humidity (%)
        profile: Species parameters

    Returns:
        Nonnegative ET rate (moisture index per hour)
    """
    availability = water_availability(moisture, profile)
    ks = stress_coefficient(moisture, profile)
    eta = environmental_scaling(temperature_c, humidity_pct, profile)

    soil_component = profile.alpha_evap * availability**profile.n_retention
    plant_component = (1.0 - profile.alpha_evap) * ks
    bracket = max(soil_component + plant_component, 0.0)

    return max(0.0, profile.e_max * eta * bracket)


def irrigation_input(pump_on: bool, reservoir: float, profile: PlantProfile) -> float:
    """Moisture delivered per hour by the pump, I = Q / Vpot."""
    if pump_on and reservoir > 0:
        return profile.q / POT_VOLUME
    return 0.0


def update_moisture(
    moisture: float,
    irrigation: float,
    et: float,
    dt_hours: float,
    profile: PlantProfile,
) -> float:
    """Integrate the water balance and clamp to [0, theta_fc]."""
    return clamp(moisture + (irrigation - et) * dt_hours, 0.0, profile.theta_fc)


def update_reservoir(
    reservoir: float,
    pump_on: bool,
    dt_hours: float,
    profile: PlantProfile,
) -> float:
    """Drain Q per pump-hour from the reservoir, never below zero."""
    drawn = profile.q * dt_hours if pump_on else 0.0
    return max(0.0, reservoir - drawn)
