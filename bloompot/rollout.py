"""
Multi-step simulation of one or more pots.

The engine itself is a single pure step. This module folds it over a
sequence of sensor samples, keeping every intermediate state and output
so trajectories can be inspected, summarized or plotted.

Each pot is advanced strictly in order (state_k+1 feeds step k+2).
Independent pots share nothing and can be advanced in any order.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import jax.numpy as jnp
from jax import Array

from bloompot import dynamics
from bloompot.config import PlantProfile, SensorData, SimulationState
from bloompot.dynamics import StepOutput


@dataclass
class Trajectory:
    """
    Complete record of a simulated run for one pot.

    Contains:
    - states: SimulationState at each timestep (including initial)
    - outputs: StepOutput of each step
    - samples: SensorData fed to each step
    """

    profile: PlantProfile
    states: list[SimulationState]
    outputs: list[StepOutput]
    samples: list[SensorData]

    @property
    def final_state(self) -> SimulationState:
        return self.states[-1]

    def hours(self) -> Array:
        """Elapsed hours at each state, starting from 0."""
        dts = [0.0] + [s.dt_hours for s in self.samples]
        return jnp.cumsum(jnp.array(dts))

    def get_state_arrays(self) -> dict[str, Array]:
        """Convert state history to arrays for plotting."""
        return {
            "moisture": jnp.array([s.moisture for s in self.states]),
            "reservoir": jnp.array([s.reservoir for s in self.states]),
            "water_stress": jnp.array([s.water_stress for s in self.states]),
            "temperature_stress": jnp.array(
                [s.temperature_stress for s in self.states]
            ),
            "light_stress": jnp.array([s.light_stress for s in self.states]),
            "total_stress": jnp.array([s.total_stress for s in self.states]),
            "waterlogged_duration": jnp.array(
                [s.waterlogged_duration for s in self.states]
            ),
        }

    def pump_history(self) -> list[bool]:
        return [output.pump_on for output in self.outputs]

    def pump_hours(self) -> float:
        """Total hours the pump ran."""
        return sum(
            sample.dt_hours
            for sample, output in zip(self.samples, self.outputs)
            if output.pump_on
        )

    def get_scalar_summary(self) -> dict[str, float]:
        """
        Compute scalar diagnostic summary of the run.

        Returns a dictionary with key metrics:
        - Hours: Simulated time
        - PumpHours / PumpEvents: Irrigation effort
        - Final/Min/Max moisture and final reservoir
        - PeakStress / FinalStress: Total stress extremes
        - HoursWaterlogged: Time at or above field capacity
        """
        total = self.get_state_arrays()["total_stress"]

        pumps = self.pump_history()
        # A pump event is a transition from off to on
        events = sum(
            1 for i, on in enumerate(pumps) if on and (i == 0 or not pumps[i - 1])
        )
        waterlogged_hours = sum(
            sample.dt_hours
            for sample, state in zip(self.samples, self.states[1:])
            if state.moisture >= self.profile.theta_fc
        )
        final = self.final_state

        return {
            "Hours": float(sum(s.dt_hours for s in self.samples)),
            "PumpHours": float(self.pump_hours()),
            "PumpEvents": events,
            "FinalMoisture": final.moisture,
            "MinMoisture": min(s.moisture for s in self.states),
            "MaxMoisture": max(s.moisture for s in self.states),
            "FinalReservoir": final.reservoir,
            "PeakStress": float(jnp.max(total)),
            "FinalStress": final.total_stress,
            "HoursWaterlogged": float(waterlogged_hours),
        }

    def print_summary(self) -> None:
        """Print a formatted summary table to stdout."""
        summary = self.get_scalar_summary()
        print("\n" + "=" * 40)
        print(f"SIMULATION SUMMARY: {self.profile.common_name}")
        print("=" * 40)
        for key, value in summary.items():
            if key == "PumpEvents":
                print(f"{key:20s}: {int(value):>10d}")
            else:
                print(f"{key:20s}: {value:>10.3f}")
        print("=" * 40)
        if self.outputs:
            advice = self.outputs[-1].advice
            print(f"Water:       {advice.water}")
            print(f"Light:       {advice.light}")
            print(f"Temperature: {advice.temperature}")
            print(f"Overall:     {advice.overall}")


def run_trajectory(
    profile: PlantProfile,
    samples: Iterable[SensorData],
    initial_state: SimulationState | None = None,
) -> Trajectory:
    """
    Run one pot through a sequence of samples.

    Args:
        profile: Species parameters
        samples: Sensor samples, applied in order
        initial_state: Optional starting state (defaults to the profile's)

    Returns:
        Trajectory containing full simulation history
    """
    if initial_state is None:
        state = SimulationState.initial(profile)
    else:
        state = initial_state

    states: list[SimulationState] = [state]
    outputs: list[StepOutput] = []
    history: list[SensorData] = []

    for sample in samples:
        output = dynamics.step(state, sample, profile)
        state = output.next_state
        states.append(state)
        outputs.append(output)
        history.append(sample)

    return Trajectory(profile=profile, states=states, outputs=outputs, samples=history)


def run_plants(
    plants: Mapping[str, tuple[PlantProfile, SimulationState]],
    samples: Mapping[str, SensorData],
) -> dict[str, StepOutput]:
    """
    Advance several independent pots by one sample each.

    Args:
        plants: Plant id -> (profile, current state)
        samples: Plant id -> sample for this tick; pots without a sample
            are skipped

    Returns:
        Plant id -> StepOutput; callers persist each next_state
    """
    results = {}
    for plant_id, (profile, state) in plants.items():
        sample = samples.get(plant_id)
        if sample is None:
            continue
        results[plant_id] = dynamics.step(state, sample, profile)
    return results
