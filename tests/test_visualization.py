"""
Smoke tests for trajectory plotting.
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from bloompot import rollout, visualization  # noqa: E402
from bloompot.config import SimulationState  # noqa: E402
from bloompot.environment import EnvironmentConfig, compute_samples  # noqa: E402


def make_trajectory(profile) -> rollout.Trajectory:
    samples = compute_samples(EnvironmentConfig.indoor(), num_steps=24)
    start = SimulationState.initial(profile, moisture=0.27)
    return rollout.run_trajectory(profile, samples, initial_state=start)


class TestPlots:
    def test_plot_returns_three_axes(self, profile) -> None:
        axes = visualization.plot_trajectory(make_trajectory(profile))
        assert len(axes) == 3
        assert axes[0].get_title() == profile.common_name
        plt.close("all")

    def test_save_plot(self, profile, tmp_path) -> None:
        path = visualization.save_trajectory_plot(
            make_trajectory(profile), tmp_path / "run.png"
        )
        assert path.exists()
        assert path.stat().st_size > 0
