"""
Watering decision policy.

Two controllers run side by side against the state *before* the step:

- Autonomous controller: emergency (below wilting point), critical
  (below critical point) or forecast (within 3 hours of EMax drying of
  the critical point). Suppressed at or above field capacity.
- Sensor controller: fires whenever moisture is below the profile's
  sensor threshold w_min.

The pump runs if either controller fires. The field capacity guard only
clears the autonomous controller, so a profile with w_min > theta_fc can
still pump into saturated soil.
"""

from typing import NamedTuple

from bloompot.config import PlantProfile

FORECAST_HOURS = 3.0

RESERVOIR_EMPTY = "Reservoir is empty – pump off."
EMERGENCY = "Soil below wilting point (emergency watering)."
CRITICAL = "Soil moisture below critical threshold."
FORECAST = "Forecasted moisture will fall below critical soon."
FIELD_CAPACITY = "Soil near or above field capacity – skipping water."
SENSOR_LOW = "Sensor detects low moisture (below sensor threshold)."
ACCEPTABLE = "Moisture is in acceptable range – no watering needed."


class WateringDecision(NamedTuple):
    """Pump command plus the reasons that produced it."""

    pump_on: bool
    reason: str
    autonomous: bool = False
    sensor_triggered: bool = False


def compute_watering_decision(
    moisture: float,
    reservoir: float,
    profile: PlantProfile,
) -> WateringDecision:
    """
    Decide whether to run the pump this step.

    Args:
        moisture: Soil moisture at the start of the step
        reservoir: Reservoir level at the start of the step
        profile: Species parameters

    Returns:
        WateringDecision with pump command and space-joined reasons
    """
    if reservoir <= 0:
        return WateringDecision(pump_on=False, reason=RESERVOIR_EMPTY)

    reasons: list[str] = []
    autonomous = False
    sensor_triggered = False

    if moisture < profile.theta_wp:
        autonomous = True
        reasons.append(EMERGENCY)

    if not autonomous and moisture < profile.theta_crit:
        autonomous = True
        reasons.append(CRITICAL)

    # Crude lookahead: will FORECAST_HOURS of peak ET cross theta_crit?
    if not autonomous and moisture - profile.theta_crit < FORECAST_HOURS * profile.e_max:
        autonomous = True
        reasons.append(FORECAST)

    if moisture >= profile.theta_fc:
        autonomous = False
        reasons.append(FIELD_CAPACITY)

    if moisture < profile.w_min:
        sensor_triggered = True
        reasons.append(SENSOR_LOW)

    pump_on = autonomous or sensor_triggered

    if not pump_on and not reasons:
        reasons.append(ACCEPTABLE)

    return WateringDecision(
        pump_on=pump_on,
        reason=" ".join(reasons),
        autonomous=autonomous,
        sensor_triggered=sensor_triggered,
    )
