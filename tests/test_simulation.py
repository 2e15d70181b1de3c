"""Tests for d20audit.simulation and the calibration script."""

import matplotlib

matplotlib.use("Agg")

import pytest

from calibrate_threshold import calibrate, plot_score_distributions
from d20audit.simulation import RollSimulation, flag_rate


def test_roll_dice_in_range():
    rolls = RollSimulation(seed=3).roll_dice(500)
    assert len(rolls) == 500
    assert all(1 <= r <= 20 for r in rolls)


def test_same_seed_same_rolls():
    assert RollSimulation(seed=7).roll_dice(50) == RollSimulation(seed=7).roll_dice(50)


def test_simulate_player_fills_table():
    history = RollSimulation(table_size=30, seed=1).simulate_player(45, "Vova")
    assert history.name == "Vova"
    assert history.capacity == 30
    assert history.total_rolls() == 30
    assert history.write_cursor == 15


def test_heavily_loaded_die_favours_face():
    sim = RollSimulation(table_size=100, loaded_face=20, loaded_weight=1000, seed=5)
    counts = sim.simulate_player(100).face_counts()
    assert counts[19] > 90


@pytest.mark.parametrize(
    "kwargs", [{"loaded_face": 0}, {"loaded_face": 21}, {"loaded_weight": 0}]
)
def test_invalid_configuration(kwargs):
    with pytest.raises(ValueError):
        RollSimulation(**kwargs)


def test_simulate_scores():
    scores = RollSimulation(table_size=20, seed=2).simulate_scores(10, 20)
    assert len(scores) == 10
    assert all(score >= 1.0 for score in scores)


def test_flag_rate():
    assert flag_rate([], 10) == 0.0
    assert flag_rate([1.0, 5.0, 10.0, 50.0], 10) == 0.5


def test_calibrate_separates_populations():
    results = calibrate(
        num_players=20, num_rolls=40, loaded_weight=50, threshold=1000, seed=11
    )
    assert len(results["fair_scores"]) == 20
    assert len(results["loaded_scores"]) == 20
    assert results["detection_rate"] == 1.0
    assert results["false_positive_rate"] < results["detection_rate"]


def test_plot_score_distributions(tmp_path):
    plot_path = plot_score_distributions(
        [1.2, 3.5, 20.0], [5000.0, float("inf")], 1000, str(tmp_path / "plots")
    )
    assert plot_path.endswith(".png")
    assert (tmp_path / "plots").exists()
    assert len(list((tmp_path / "plots").glob("*.png"))) == 1
