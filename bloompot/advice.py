"""
Care recommendations derived from the final state of a step.

Each builder is a pure threshold classifier returning one fixed sentence.
"""

from typing import NamedTuple

from bloompot.config import TEMP_MAX, TEMP_MIN, PlantProfile, SimulationState
from bloompot.moisture import clamp


class Advice(NamedTuple):
    """Four short hints shown next to the plant's vitals."""

    water: str
    light: str
    temperature: str
    overall: str


def build_water_advice(moisture: float, profile: PlantProfile) -> str:
    if moisture <= profile.theta_wp:
        return "Soil is extremely dry. Water immediately."
    if moisture < profile.theta_crit:
        return "Soil is slightly too dry. Watering soon is recommended."
    if moisture >= profile.theta_fc * 0.95:
        return "Soil is very wet. Avoid watering until it dries out a bit."
    return "Soil moisture is in a healthy range."


def build_light_advice(light_lux: float, profile: PlantProfile) -> str:
    ideal = profile.light_preference or profile.l_min

    if light_lux < 0.5 * profile.l_min:
        return "Light is far below the ideal level. Move the plant to a brighter spot."
    if light_lux < profile.l_min:
        return "Light is a bit low. Slightly brighter location would help."
    if light_lux > 2 * ideal:
        return "Light level is very high. Consider moving out of direct intense sun."
    return "Light level is good for this plant."


def build_temperature_advice(temperature_c: float) -> str:
    if temperature_c < TEMP_MIN:
        return "It is too cold for this plant. Move it to a warmer location."
    if temperature_c > TEMP_MAX:
        return "It is too hot for this plant. Provide some cooling or shade."
    return "Temperature is within a comfortable range."


def build_overall_advice(total_stress: float, profile: PlantProfile) -> str:
    """Classify normalized stress S / s_max into four bands."""
    s_norm = clamp(total_stress / profile.s_max, 0.0, 1.0)

    if s_norm < 0.2:
        return "Plant is happy and healthy."
    if s_norm < 0.5:
        return "Plant has mild stress. Keep an eye on moisture, light, and temperature."
    if s_norm < 0.8:
        return "Plant is stressed and needs attention soon."
    return "Plant is in critical condition. Adjust care immediately."


def build_advice(
    state: SimulationState,
    temperature_c: float,
    light_lux: float,
    profile: PlantProfile,
) -> Advice:
    """
    Build all four hints for a state and the environment it was reached in.

    Args:
        state: Final state of the step
        temperature_c: Air temperature of the sample (°C)
        light_lux: Light of the sample (lux)
        profile: Species parameters

    Returns:
        Advice tuple
    """
    return Advice(
        water=build_water_advice(state.moisture, profile),
        light=build_light_advice(light_lux, profile),
        temperature=build_temperature_advice(temperature_c),
        overall=build_overall_advice(state.total_stress, profile),
    )
