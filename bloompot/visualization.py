"""
Plots of simulated trajectories.

Three stacked panels share the time axis:
- Soil moisture with the wilting, critical and field capacity lines,
  shaded where the pump ran
- Reservoir level
- Stress channels stacked, with the s_max cap
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from bloompot.config import PlantProfile
from bloompot.rollout import Trajectory


def plot_trajectory(
    trajectory: Trajectory,
    profile: PlantProfile | None = None,
    axes=None,
):
    """
    Plot moisture, reservoir and stress over time.

    Args:
        trajectory: Output of run_trajectory
        profile: Profile for threshold lines (defaults to the trajectory's)
        axes: Sequence of three matplotlib axes (optional)

    Returns:
        The three axes
    """
    profile = profile or trajectory.profile
    if axes is None:
        _, axes = plt.subplots(3, 1, figsize=(10, 8), sharex=True)
    ax_w, ax_r, ax_s = axes

    hours = np.asarray(trajectory.hours())
    arrays = {k: np.asarray(v) for k, v in trajectory.get_state_arrays().items()}

    # Moisture
    ax_w.plot(hours, arrays["moisture"], linewidth=2, color="tab:blue", label="W")
    ax_w.axhline(profile.theta_wp, color="red", linestyle="--", alpha=0.6, label="wilting")
    ax_w.axhline(
        profile.theta_crit, color="orange", linestyle="--", alpha=0.6, label="critical"
    )
    ax_w.axhline(
        profile.theta_fc, color="green", linestyle="--", alpha=0.6, label="field capacity"
    )
    for start, sample, output in zip(hours[:-1], trajectory.samples, trajectory.outputs):
        if output.pump_on:
            end = start + sample.dt_hours
            ax_w.axvspan(start, end, color="tab:cyan", alpha=0.15, linewidth=0)
    ax_w.set_ylabel("Soil moisture")
    ax_w.set_title(profile.common_name)
    ax_w.legend(loc="upper right", fontsize=8)
    ax_w.grid(True, alpha=0.3)

    # Reservoir
    ax_r.plot(hours, arrays["reservoir"], linewidth=2, color="tab:purple")
    ax_r.set_ylabel("Reservoir")
    ax_r.grid(True, alpha=0.3)

    # Stress
    ax_s.stackplot(
        hours,
        arrays["water_stress"],
        arrays["temperature_stress"],
        arrays["light_stress"],
        labels=["water", "temperature", "light"],
        colors=["tab:blue", "tab:red", "gold"],
        alpha=0.7,
    )
    ax_s.axhline(profile.s_max, color="gray", linestyle="--", alpha=0.5)
    ax_s.set_xlabel("Hours")
    ax_s.set_ylabel("Stress")
    ax_s.legend(loc="upper left", fontsize=8)
    ax_s.grid(True, alpha=0.3)

    return axes


def save_trajectory_plot(
    trajectory: Trajectory,
    path: str | Path,
    profile: PlantProfile | None = None,
    dpi: int = 120,
) -> Path:
    """Render plot_trajectory to an image file and close the figure."""
    fig, axes = plt.subplots(3, 1, figsize=(10, 8), sharex=True)
    plot_trajectory(trajectory, profile, axes=axes)
    fig.tight_layout()
    out = Path(path)
    fig.savefig(out, dpi=dpi)
    plt.close(fig)
    return out
