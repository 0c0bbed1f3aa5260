"""
Configuration and type definitions for the plant vitals engine.

This module defines the fixed environmental constants, the static plant
profile, the per-pot simulation state and the sensor sample consumed by
each step.

State Vector:
    W:  Soil moisture (normalized, [0, theta_fc])
    R:  Reservoir water remaining
    SW: Water stress
    ST: Temperature stress
    SL: Light stress
    S:  Total stress, capped at s_max
    waterlogged_duration: Hours spent at or above field capacity

All quantities are nonnegative and continuous.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple

# Generic defaults shared by every houseplant profile
TEMP_OPT = 22.0  # °C, optimal indoor temperature
TEMP_MIN = 10.0  # °C, too cold below this
TEMP_MAX = 30.0  # °C, too hot above this
HUMIDITY_REF = 60.0  # % relative humidity reference
POT_VOLUME = 1.0  # normalized pot volume for I = Q / Vpot
DEFAULT_DT_HOURS = 1.0


@dataclass(frozen=True)
class PlantProfile:
    """
    Static per-species parameters.

    Moisture fields live on the normalized soil moisture index scale
    [0, 1] and must satisfy theta_wp < theta_crit <= theta_fc.
    Profiles are loaded once from the species catalog and never mutated.
    """

    # Identity
    common_name: str
    scientific_name: str
    category: str

    # Environmental preferences
    light_preference: float  # lux, 0 means "use l_min"
    water_preference: str

    # Moisture thresholds
    theta_wp: float  # wilting point
    theta_crit: float  # critical point
    theta_fc: float  # field capacity
    w_min: float  # sensor trigger threshold

    # Light threshold
    l_min: float  # lux

    # Water stress: dSW/dt = k_w * (theta_crit - W)_+^p - k_rw * SW
    k_w: float
    k_rw: float
    p: float

    # Temperature stress
    k_t: float
    k_rt: float

    # Light stress
    k_l: float
    k_rl: float

    # Evapotranspiration
    alpha_evap: float  # soil vs plant demand blend
    e_max: float  # maximum ET rate per hour
    n_retention: float

    # Environmental scaling of ET
    c_t: float
    c_h: float

    # Stress cap
    s_max: float

    # Waterlogging
    k_sat: float  # extra water-stress gain once saturated for tau_sat hours
    tau_sat: float  # hours

    # Pump / reservoir
    q: float  # water delivered per pump-hour
    w_init: float
    r_init: float

    def __post_init__(self) -> None:
        if not self.theta_wp < self.theta_crit <= self.theta_fc:
            raise ValueError(
                f"{self.common_name}: thresholds must satisfy "
                f"theta_wp < theta_crit <= theta_fc "
                f"(got {self.theta_wp}, {self.theta_crit}, {self.theta_fc})"
            )
        for name in ("theta_wp", "theta_crit", "theta_fc", "w_min", "w_init"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{self.common_name}: {name} must be in [0, 1]")
        if self.w_init > self.theta_fc:
            raise ValueError(
                f"{self.common_name}: w_init must not exceed theta_fc"
            )
        for name in (
            "k_w", "k_rw", "k_t", "k_rt", "k_l", "k_rl",
            "e_max", "n_retention", "k_sat", "tau_sat", "q",
            "l_min", "light_preference", "r_init",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{self.common_name}: {name} must be nonnegative")
        if not 0.0 <= self.alpha_evap <= 1.0:
            raise ValueError(f"{self.common_name}: alpha_evap must be in [0, 1]")
        if self.p <= 0:
            raise ValueError(f"{self.common_name}: p must be positive")
        if self.s_max <= 0:
            raise ValueError(f"{self.common_name}: s_max must be positive")


class SimulationState(NamedTuple):
    """
    Complete state of one pot at a given timestep.

    Owned by the caller and replaced (never mutated) on every step.
    """

    moisture: float  # W: soil moisture index
    reservoir: float  # R: reservoir water
    water_stress: float  # SW
    temperature_stress: float  # ST
    light_stress: float  # SL
    total_stress: float  # S
    waterlogged_duration: float  # hours with W >= theta_fc

    @classmethod
    def initial(
        cls,
        profile: PlantProfile,
        moisture: float | None = None,
        reservoir: float | None = None,
    ) -> "SimulationState":
        """Create the starting state for a freshly potted plant.

        Args:
            profile: Species parameters supplying w_init and r_init
            moisture: Optional measured moisture to start from instead
                (e.g. a live reading converted from percent)
            reservoir: Optional measured reservoir level

        Overrides are clamped into the valid state ranges: moisture to
        [0, theta_fc] and reservoir floored at 0.
        """
        if moisture is None:
            moisture = profile.w_init
        if reservoir is None:
            reservoir = profile.r_init
        return cls(
            moisture=max(0.0, min(profile.theta_fc, moisture)),
            reservoir=max(0.0, reservoir),
            water_stress=0.0,
            temperature_stress=0.0,
            light_stress=0.0,
            total_stress=0.0,
            waterlogged_duration=0.0,
        )

    def is_valid(self, profile: PlantProfile) -> bool:
        """Check that every value is finite and inside its clamped range."""
        if not all(math.isfinite(v) for v in self):
            return False
        return (
            0.0 <= self.moisture <= profile.theta_fc
            and self.reservoir >= 0
            and self.water_stress >= 0
            and self.temperature_stress >= 0
            and self.light_stress >= 0
            and 0.0 <= self.total_stress <= profile.s_max
            and self.waterlogged_duration >= 0
        )

    def stress_fraction(self, profile: PlantProfile) -> float:
        """Total stress normalized by the profile's cap, in [0, 1]."""
        return max(0.0, min(1.0, self.total_stress / profile.s_max))


@dataclass(frozen=True)
class SensorData:
    """
    One decoded environment sample.

    Values arrive already decoded from the transport layer. Non-finite
    values are rejected here so the numeric core never sees NaN.
    """

    temperature_c: float
    humidity_pct: float
    light_lux: float
    dt_hours: float = DEFAULT_DT_HOURS

    def __post_init__(self) -> None:
        for name in ("temperature_c", "humidity_pct", "light_lux", "dt_hours"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite")
        if self.dt_hours < 0:
            raise ValueError("dt_hours must be nonnegative")

    @classmethod
    def from_raw(
        cls,
        temperature_c: float,
        humidity_pct: float,
        light_lux: float,
        dt_hours: float | None = None,
    ) -> "SensorData":
        """Build a sample from raw readings, clipping humidity and light.

        Humidity is clipped to [0, 100] and light floored at 0. A missing
        step length falls back to one hour. NaN passes through unclipped
        and is rejected by the constructor.
        """
        humidity = float(humidity_pct)
        light = float(light_lux)
        if math.isfinite(humidity):
            humidity = max(0.0, min(100.0, humidity))
        if math.isfinite(light):
            light = max(0.0, light)
        return cls(
            temperature_c=float(temperature_c),
            humidity_pct=humidity,
            light_lux=light,
            dt_hours=DEFAULT_DT_HOURS if dt_hours is None else float(dt_hours),
        )
