"""
BloomPot Plant Vitals Module

A deterministic soil moisture, stress and irrigation model for a
self-watering pot, with plain-language care advice.

Modules:
    config: Constants, plant profile, simulation state, sensor sample
    moisture: Water availability, evapotranspiration, water balance
    stress: Water/temperature/light stress channels and waterlogging
    watering: Pump decision policy
    advice: Care recommendations
    dynamics: The single-step state update
    profiles: Species profile catalog
    environment: Synthetic diurnal sensor feed
    rollout: Multi-step trajectories
    visualization: Trajectory plots
"""

from bloompot.advice import Advice, build_advice
from bloompot.config import PlantProfile, SensorData, SimulationState
from bloompot.dynamics import StepOutput, step
from bloompot.environment import EnvironmentConfig, SignalParams, compute_samples
from bloompot.profiles import (
    ProfileCatalog,
    ProfileCatalogError,
    default_catalog,
    find_plant_profile_by_common_name,
    load_profiles,
    search_plant_profiles,
)
from bloompot.rollout import Trajectory, run_plants, run_trajectory
from bloompot.watering import WateringDecision, compute_watering_decision

__all__ = [
    # Config
    "PlantProfile",
    "SensorData",
    "SimulationState",
    # Engine
    "Advice",
    "StepOutput",
    "WateringDecision",
    "build_advice",
    "compute_watering_decision",
    "step",
    # Profiles
    "ProfileCatalog",
    "ProfileCatalogError",
    "default_catalog",
    "find_plant_profile_by_common_name",
    "load_profiles",
    "search_plant_profiles",
    # Simulation
    "EnvironmentConfig",
    "SignalParams",
    "Trajectory",
    "compute_samples",
    "run_plants",
    "run_trajectory",
]
