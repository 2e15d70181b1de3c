"""Roll simulation for fair and loaded d20 players."""

import random

from parameters import DEFAULT_TABLE_SIZE, NUM_FACES
from d20audit.cheat_evaluator import suspicion_score
from d20audit.roll_history import RollHistory


class RollSimulation:
    """Simulates players rolling a d20, optionally loaded towards one face."""

    def __init__(
        self,
        table_size: int = DEFAULT_TABLE_SIZE,
        loaded_face: int | None = None,
        loaded_weight: float = 1.0,
        seed: int | None = None,
    ):
        """
        Args:
            table_size: Table size of each simulated player
            loaded_face: Face favoured by the die, or None for a fair die
            loaded_weight: Weight of the loaded face relative to the others
            seed: Seed for reproducible runs
        """
        if loaded_face is not None and not 1 <= loaded_face <= NUM_FACES:
            raise ValueError(f"Loaded face must be in 1..{NUM_FACES}")
        if loaded_weight <= 0:
            raise ValueError("Loaded weight must be positive")

        self.table_size = table_size
        self.loaded_face = loaded_face
        self.loaded_weight = loaded_weight
        self.rng = random.Random(seed)

        self.faces = list(range(1, NUM_FACES + 1))
        self.weights = [1.0] * NUM_FACES
        if loaded_face is not None:
            self.weights[loaded_face - 1] = loaded_weight

    def roll_dice(self, num_dice: int) -> list[int]:
        """Roll N dice."""
        return self.rng.choices(self.faces, weights=self.weights, k=num_dice)

    def simulate_player(self, num_rolls: int, name: str = "simulated") -> RollHistory:
        """Record num_rolls rolls into a fresh table."""
        history = RollHistory(self.table_size, name)
        for value in self.roll_dice(num_rolls):
            history.record_roll(value)
        return history

    def simulate_scores(self, num_players: int, num_rolls: int) -> list[float]:
        """Suspicion scores of num_players independent simulated players."""
        return [
            suspicion_score(self.simulate_player(num_rolls, f"player_{i}").face_counts())
            for i in range(num_players)
        ]


def flag_rate(scores: list[float], threshold: float) -> float:
    """Fraction of scores at or above the threshold."""
    if not scores:
        return 0.0
    return sum(1 for score in scores if score >= threshold) / len(scores)
