"""
BloomPot - Plant Vitals Simulation Demo

Runs a pot through a few simulated days of a synthetic indoor
environment:
1. Looks up the species profile in the bundled catalog
2. Generates hourly sensor samples from a diurnal environment preset
3. Folds the single-step engine over the samples
4. Prints the pump decisions, final advice and a run summary
"""

import argparse
import logging

from bloompot.config import SimulationState
from bloompot.environment import EnvironmentConfig, compute_samples
from bloompot.profiles import default_catalog
from bloompot.rollout import run_trajectory

PRESETS = {
    "indoor": EnvironmentConfig.indoor,
    "heatwave": EnvironmentConfig.heatwave,
    "dim": EnvironmentConfig.dim_room,
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate a BloomPot")
    parser.add_argument("--species", default=None, help="Common name of the plant")
    parser.add_argument("--days", type=int, default=3)
    parser.add_argument("--dt", type=float, default=1.0, help="Step length (hours)")
    parser.add_argument("--env", choices=sorted(PRESETS), default="indoor")
    parser.add_argument("--moisture", type=float, default=None,
                        help="Starting moisture reading in percent")
    parser.add_argument("--plot", default=None, help="Save a trajectory plot here")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args()


def report_interval(dt_hours: float, hours: float = 6.0) -> int:
    """Number of steps between status lines, at least one."""
    if dt_hours <= 0:
        return 1
    return max(1, round(hours / dt_hours))


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    catalog = default_catalog()
    if args.species is None:
        profile = catalog.default()
    else:
        profile = catalog.find_by_common_name(args.species)
        if profile is None:
            matches = [p.common_name for p in catalog.search(args.species)]
            print(f"Unknown species {args.species!r}.")
            if matches:
                print("Did you mean: " + ", ".join(matches))
            return

    print("\n" + "=" * 60)
    print(f"  BLOOMPOT: {profile.common_name} ({profile.scientific_name})")
    print("=" * 60)

    moisture = None if args.moisture is None else args.moisture / 100.0
    initial = SimulationState.initial(profile, moisture=moisture)

    num_steps = int(round(args.days * 24 / args.dt))
    samples = compute_samples(PRESETS[args.env](), num_steps, dt_hours=args.dt)
    trajectory = run_trajectory(profile, samples, initial_state=initial)

    every = report_interval(args.dt)
    hour = 0.0
    for index, (sample, output) in enumerate(
        zip(trajectory.samples, trajectory.outputs), start=1
    ):
        hour += sample.dt_hours
        if output.pump_on or index % every == 0:
            status = output.status
            print(
                f"  t={hour:6.1f}h  W={status.moisture:.3f}  R={status.reservoir:.2f}  "
                f"S={status.stress.total:.2f}  pump={'ON ' if output.pump_on else 'off'}  "
                f"{output.reason}"
            )

    trajectory.print_summary()

    if args.plot:
        from bloompot.visualization import save_trajectory_plot

        path = save_trajectory_plot(trajectory, args.plot)
        print(f"\nPlot saved to {path}")


if __name__ == "__main__":
    main()
