"""
Synthetic diurnal sensor feed.

Generates deterministic environment samples for offline simulation and
demos. Each channel (temperature, humidity, light) follows a daily sine:

    signal(t) = offset + amplitude * sin(2π t / period + phase)

Humidity is clipped to [0, 100] % and light floored at 0 lux, so the
light channel reads zero at night.
"""

import math
from dataclasses import dataclass

import jax.numpy as jnp
from jax import Array

from bloompot.config import DEFAULT_DT_HOURS, SensorData


@dataclass(frozen=True)
class SignalParams:
    """
    Parameters for one sinusoidal channel.

    t is measured in hours since the start of the simulation.
    """

    offset: float  # baseline value
    amplitude: float  # swing magnitude
    period_hours: float = 24.0
    phase: float = 0.0  # radians

    def __post_init__(self) -> None:
        if self.amplitude < 0:
            raise ValueError("Amplitude must be nonnegative")
        if self.period_hours <= 0:
            raise ValueError("Period must be positive")


@dataclass(frozen=True)
class EnvironmentConfig:
    """Configuration for the three environment channels."""

    temperature: SignalParams  # °C
    humidity: SignalParams  # %
    light: SignalParams  # lux

    @classmethod
    def indoor(cls) -> "EnvironmentConfig":
        """A bright living room: mild temperatures, daylight peaking at noon."""
        return cls(
            temperature=SignalParams(offset=22.0, amplitude=3.0, phase=-math.pi / 2),
            humidity=SignalParams(offset=55.0, amplitude=10.0, phase=math.pi / 2),
            light=SignalParams(offset=600.0, amplitude=900.0, phase=-math.pi / 2),
        )

    @classmethod
    def heatwave(cls) -> "EnvironmentConfig":
        """A hot, dry window sill in summer."""
        return cls(
            temperature=SignalParams(offset=33.0, amplitude=4.0, phase=-math.pi / 2),
            humidity=SignalParams(offset=30.0, amplitude=8.0, phase=math.pi / 2),
            light=SignalParams(offset=2000.0, amplitude=2500.0, phase=-math.pi / 2),
        )

    @classmethod
    def dim_room(cls) -> "EnvironmentConfig":
        """A north-facing room that never gets much light."""
        return cls(
            temperature=SignalParams(offset=20.0, amplitude=2.0, phase=-math.pi / 2),
            humidity=SignalParams(offset=60.0, amplitude=5.0, phase=math.pi / 2),
            light=SignalParams(offset=100.0, amplitude=150.0, phase=-math.pi / 2),
        )


def compute_signal(params: SignalParams, t: float | Array) -> Array:
    """
    Raw (unclipped) channel value at time t.

    Args:
        params: Channel parameters
        t: Hours since start (scalar or array)

    Returns:
        Signal value(s)
    """
    omega = 2.0 * jnp.pi / params.period_hours
    return params.offset + params.amplitude * jnp.sin(omega * t + params.phase)


def compute_sample(
    config: EnvironmentConfig,
    hour: float,
    dt_hours: float = DEFAULT_DT_HOURS,
) -> SensorData:
    """
    Environment sample at a given hour.

    Args:
        config: Environment configuration
        hour: Hours since start
        dt_hours: Step length attached to the sample

    Returns:
        SensorData with clipped humidity and light
    """
    return SensorData.from_raw(
        temperature_c=float(compute_signal(config.temperature, hour)),
        humidity_pct=float(compute_signal(config.humidity, hour)),
        light_lux=float(compute_signal(config.light, hour)),
        dt_hours=dt_hours,
    )


def compute_samples(
    config: EnvironmentConfig,
    num_steps: int,
    dt_hours: float = DEFAULT_DT_HOURS,
) -> list[SensorData]:
    """
    Samples for consecutive steps starting at hour 0.

    Evaluates every channel over the whole time axis at once.

    Args:
        config: Environment configuration
        num_steps: Number of samples
        dt_hours: Spacing between samples (and their step length)

    Returns:
        List of num_steps samples
    """
    t = jnp.arange(num_steps, dtype=jnp.float32) * dt_hours

    temperature = compute_signal(config.temperature, t)
    humidity = jnp.clip(compute_signal(config.humidity, t), 0.0, 100.0)
    light = jnp.maximum(compute_signal(config.light, t), 0.0)

    return [
        SensorData(
            temperature_c=float(temperature[i]),
            humidity_pct=float(humidity[i]),
            light_lux=float(light[i]),
            dt_hours=dt_hours,
        )
        for i in range(num_steps)
    ]
