"""Cheat detection on a player's recent d20 rolls."""

import math

from parameters import CHEAT_THRESHOLD
from d20audit.probability import two_tailed_probability
from d20audit.roll_history import RollHistory


def suspicion_score(face_counts: list[int]) -> float:
    """
    Reciprocal of the rarest two-tailed probability across all faces.

    total = sum of counts
    P_min = min(1, min over faces f of TWO_TAILED(count_f, total))
    score = 1 / P_min

    Faces with a zero count take part too, so a face that never shows up in
    many rolls is as suspicious as one that shows up too often.

    Special cases:
    - total = 0: every tail is 1, score is 1 (insufficient data)
    - P_min underflows to 0.0: score is infinite

    Args:
        face_counts: Occurrences of faces 1..20 (index 0 is face 1)

    Returns:
        Suspicion score >= 1; higher is less plausible under fair play
    """
    total = sum(face_counts)

    min_probability = 1.0
    for count in face_counts:
        min_probability = min(two_tailed_probability(count, total), min_probability)

    if min_probability == 0.0:
        return math.inf
    return 1 / min_probability


def is_cheating(face_counts: list[int], threshold: float = CHEAT_THRESHOLD) -> bool:
    """True if the suspicion score reaches the threshold."""
    return suspicion_score(face_counts) >= threshold


class CheatVerdict:
    """Outcome of a cheat check: (score, threshold, total_rolls, is_cheating)."""

    def __init__(self, score: float, threshold: float, total_rolls: int):
        self.score = score
        self.threshold = threshold
        self.total_rolls = total_rolls
        self.is_cheating = score >= threshold

    def __str__(self) -> str:
        label = "SUSPICIOUS" if self.is_cheating else "fair"
        return (
            f"suspicion score {self.score:.2f} over {self.total_rolls} rolls "
            f"(threshold {self.threshold}) -> {label}"
        )


class CheatEvaluator:
    """Evaluates roll histories against a suspicion threshold p."""

    def __init__(self, threshold: float = CHEAT_THRESHOLD):
        self.threshold = threshold

    def score(self, history: RollHistory) -> float:
        return suspicion_score(history.face_counts())

    def evaluate(self, history: RollHistory) -> CheatVerdict:
        """Score a history and compare it with the threshold.

        Args:
            history: The player's roll history

        Returns:
            CheatVerdict with the score and the decision
        """
        counts = history.face_counts()
        return CheatVerdict(
            score=suspicion_score(counts),
            threshold=self.threshold,
            total_rolls=sum(counts),
        )

    def is_cheating(self, history: RollHistory) -> bool:
        return is_cheating(history.face_counts(), self.threshold)
