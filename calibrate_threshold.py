"""Calibrate the cheat threshold by simulating fair and loaded players."""

import argparse
import math
import os
from datetime import datetime

import matplotlib.pyplot as plt

from parameters import (
    CHEAT_THRESHOLD,
    LOADED_FACE,
    LOADED_WEIGHT,
    NUM_CALIBRATION_PLAYERS,
    NUM_CALIBRATION_ROLLS,
)
from d20audit.simulation import RollSimulation, flag_rate


def calibrate(
    num_players: int = NUM_CALIBRATION_PLAYERS,
    num_rolls: int = NUM_CALIBRATION_ROLLS,
    loaded_face: int = LOADED_FACE,
    loaded_weight: float = LOADED_WEIGHT,
    threshold: float = CHEAT_THRESHOLD,
    seed: int | None = None,
) -> dict:
    """Score simulated fair and loaded players against a threshold.

    Every player's table is exactly num_rolls long so all rolls are counted.

    Args:
        num_players: Players simulated per population
        num_rolls: Rolls per player
        loaded_face: Face favoured by the loaded die
        loaded_weight: Weight of the loaded face relative to the others
        threshold: Suspicion score at which a player is flagged
        seed: Seed for reproducible runs

    Returns:
        Dictionary with both score lists and the flag rates
    """
    fair = RollSimulation(table_size=num_rolls, seed=seed)
    loaded = RollSimulation(
        table_size=num_rolls,
        loaded_face=loaded_face,
        loaded_weight=loaded_weight,
        seed=None if seed is None else seed + 1,
    )

    fair_scores = fair.simulate_scores(num_players, num_rolls)
    loaded_scores = loaded.simulate_scores(num_players, num_rolls)

    return {
        "fair_scores": fair_scores,
        "loaded_scores": loaded_scores,
        "false_positive_rate": flag_rate(fair_scores, threshold),
        "detection_rate": flag_rate(loaded_scores, threshold),
    }


def plot_score_distributions(fair_scores, loaded_scores, threshold, output_dir):
    """Plot and save histograms of log10(suspicion score).

    Args:
        fair_scores: Scores of fair players
        loaded_scores: Scores of loaded players
        threshold: Threshold drawn as a vertical line
        output_dir: Directory to save plots

    Returns:
        Path of the saved plot
    """
    os.makedirs(output_dir, exist_ok=True)

    # Infinite scores are drawn at the right edge
    finite = [s for s in fair_scores + loaded_scores if not math.isinf(s)]
    ceiling = math.log10(max(finite + [threshold])) + 1

    def to_log(scores):
        return [ceiling if math.isinf(s) else math.log10(s) for s in scores]

    fig, ax = plt.subplots(figsize=(10, 6))
    bins = 40
    ax.hist(to_log(fair_scores), bins=bins, alpha=0.5, label="Fair die")
    ax.hist(to_log(loaded_scores), bins=bins, alpha=0.5, label="Loaded die")
    ax.axvline(
        x=math.log10(threshold),
        color="r",
        linestyle="--",
        alpha=0.7,
        label=f"Threshold ({threshold})",
    )
    ax.set_xlabel("log10(suspicion score)")
    ax.set_ylabel("Players")
    ax.set_title("Suspicion Score Distribution")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    plot_path = os.path.join(output_dir, f"score_distribution_{timestamp}.png")
    plt.savefig(plot_path, dpi=150)
    print(f"Score distribution saved to {plot_path}")

    plt.close(fig)
    return plot_path


def main():
    parser = argparse.ArgumentParser(
        description="Estimate false positive and detection rates of the cheat check"
    )
    parser.add_argument(
        "--players",
        type=int,
        default=NUM_CALIBRATION_PLAYERS,
        help="Simulated players per population",
    )
    parser.add_argument(
        "--rolls",
        type=int,
        default=NUM_CALIBRATION_ROLLS,
        help="Rolls per simulated player",
    )
    parser.add_argument(
        "--loaded-face",
        type=int,
        default=LOADED_FACE,
        help="Face favoured by the loaded die",
    )
    parser.add_argument(
        "--loaded-weight",
        type=float,
        default=LOADED_WEIGHT,
        help="Weight of the loaded face relative to the others",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=CHEAT_THRESHOLD,
        help="Suspicion score at which a player is flagged",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="calibration",
        help="Output directory for plots",
    )
    parser.add_argument(
        "--no-plot",
        action="store_true",
        default=False,
        help="Skip the histogram",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Cheat Threshold Calibration")
    print("=" * 60)
    print(f"Players per population: {args.players}")
    print(f"Rolls per player: {args.rolls}")
    print(f"Loaded face: {args.loaded_face} (weight {args.loaded_weight})")
    print(f"Threshold: {args.threshold}")
    print("=" * 60)

    results = calibrate(
        num_players=args.players,
        num_rolls=args.rolls,
        loaded_face=args.loaded_face,
        loaded_weight=args.loaded_weight,
        threshold=args.threshold,
        seed=args.seed,
    )

    print(f"False positive rate (fair players flagged): {results['false_positive_rate']:.2%}")
    print(f"Detection rate (loaded players flagged): {results['detection_rate']:.2%}")

    if not args.no_plot:
        plot_score_distributions(
            results["fair_scores"],
            results["loaded_scores"],
            args.threshold,
            args.output_dir,
        )


if __name__ == "__main__":
    main()
