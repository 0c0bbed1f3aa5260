"""
Pot dynamics - the core simulation step.

This module advances one pot by one sensor sample. The update follows
this sequence:

1. Watering decision on the previous state
2. Evapotranspiration from the previous moisture
3. Irrigation input (pump on and reservoir not empty)
4. Soil moisture update, clamped to [0, theta_fc]
5. Reservoir update
6. Waterlogging counter and term (on the new moisture)
7. Water, temperature and light stress channels
8. Total stress, capped at s_max
9. Care advice on the final state

The step is a pure function: it never mutates its inputs and keeps no
state between calls. Steps for the same pot must be applied in order,
feeding each output's next_state into the following call; different pots
are fully independent.
"""

import logging
from typing import Any, NamedTuple

from bloompot import moisture as soil
from bloompot import stress, watering
from bloompot.advice import Advice, build_advice
from bloompot.config import PlantProfile, SensorData, SimulationState

logger = logging.getLogger(__name__)


class StressBreakdown(NamedTuple):
    total: float
    water: float
    temperature: float
    light: float


class Environment(NamedTuple):
    temperature_c: float
    humidity_pct: float
    light_lux: float


class Status(NamedTuple):
    """Snapshot of the pot after the step, for display."""

    moisture: float
    reservoir: float
    stress: StressBreakdown
    env: Environment


class StepOutput(NamedTuple):
    """
    Everything produced by one step.

    pump_on/reason drive the actuator and its explanation, status and
    advice feed the UI, and next_state must be persisted by the caller.
    """

    pump_on: bool
    reason: str
    status: Status
    advice: Advice
    next_state: SimulationState

    def to_dict(self) -> dict[str, Any]:
        """Nested plain-dict form for persistence or JSON encoding."""
        return {
            "pump_on": self.pump_on,
            "reason": self.reason,
            "status": {
                "moisture": self.status.moisture,
                "reservoir": self.status.reservoir,
                "stress": self.status.stress._asdict(),
                "env": self.status.env._asdict(),
            },
            "advice": self.advice._asdict(),
            "next_state": self.next_state._asdict(),
        }


def step(
    state: SimulationState,
    sensor: SensorData,
    profile: PlantProfile,
) -> StepOutput:
    """
    Advance one pot by one sensor sample.

    Args:
        state: State persisted after the previous step
        sensor: Decoded environment sample, dt_hours is the step length
        profile: Species parameters

    Returns:
        StepOutput with pump command, status, advice and next state
    """
    dt = sensor.dt_hours
    temperature_c = sensor.temperature_c
    humidity_pct = sensor.humidity_pct
    light_lux = sensor.light_lux

    # 1. Decide on the state the pump actually sees
    decision = watering.compute_watering_decision(
        state.moisture, state.reservoir, profile
    )
    pump_on = decision.pump_on

    # 2-3. Water balance terms
    et = soil.evapotranspiration(state.moisture, temperature_c, humidity_pct, profile)
    irrigation = soil.irrigation_input(pump_on, state.reservoir, profile)

    # 4-5. Integrate moisture and reservoir
    moisture_next = soil.update_moisture(state.moisture, irrigation, et, dt, profile)
    reservoir_next = soil.update_reservoir(state.reservoir, pump_on, dt, profile)

    # 6. Waterlogging
    waterlogged, duration = stress.waterlogging_term(
        moisture_next, state.waterlogged_duration, profile, dt
    )

    # 7. Stress channels
    water_stress = stress.update_water_stress(
        state.water_stress, moisture_next, profile, dt, waterlogged
    )
    temperature_stress = stress.update_temperature_stress(
        state.temperature_stress, temperature_c, profile, dt
    )
    light_stress = stress.update_light_stress(
        state.light_stress, light_lux, profile, dt
    )

    # 8. Total stress
    total = stress.total_stress(water_stress, temperature_stress, light_stress, profile)

    next_state = SimulationState(
        moisture=moisture_next,
        reservoir=reservoir_next,
        water_stress=water_stress,
        temperature_stress=temperature_stress,
        light_stress=light_stress,
        total_stress=total,
        waterlogged_duration=duration,
    )

    # 9. Advice
    advice = build_advice(next_state, temperature_c, light_lux, profile)

    logger.debug(
        "%s: W %.3f -> %.3f, R %.3f -> %.3f, ET=%.4f, pump=%s, S=%.3f",
        profile.common_name,
        state.moisture,
        moisture_next,
        state.reservoir,
        reservoir_next,
        et,
        pump_on,
        total,
    )

    return StepOutput(
        pump_on=pump_on,
        reason=decision.reason,
        status=Status(
            moisture=moisture_next,
            reservoir=reservoir_next,
            stress=StressBreakdown(
                total=total,
                water=water_stress,
                temperature=temperature_stress,
                light=light_stress,
            ),
            env=Environment(
                temperature_c=temperature_c,
                humidity_pct=humidity_pct,
                light_lux=light_lux,
            ),
        ),
        advice=advice,
        next_state=next_state,
    )
