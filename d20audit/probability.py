"""Binomial probability calculations for fair d20 rolls."""

import math
from functools import lru_cache

from parameters import NUM_FACES


def binomial_coefficient(n: int, k: int) -> int:
    """
    C(n, k) by the multiplicative formula.

    C(n, k) = prod_{i=1}^{k} (n - k + i) / i, iterating over min(k, n - k)
    factors. Every partial product is itself a binomial coefficient, so the
    integer division is exact.

    Returns 0 when k < 0 or k > n.
    """
    if k < 0 or k > n:
        return 0
    if k > n - k:
        k = n - k

    b = 1
    m = n
    for i in range(1, k + 1):
        b = b * m // i
        m -= 1
    return b


@lru_cache(maxsize=4096)
def exact_probability(successes: int, trials: int) -> float:
    """
    Probability that a given face shows exactly `successes` times in
    `trials` rolls of a fair d20.

    P(X = k) = C(n, k) * (1/20)^k * (19/20)^(n-k),  X ~ Binomial(n, p=1/20)

    Note that n is the total number of rolls of the player, for every face.

    C(n, k) passes the float range once n is above about 1030, so the term is
    built in log space; terms too small for a float come out as 0.0.

    Args:
        successes: Occurrences of the face (k)
        trials: Total rolls (n)

    Returns:
        Probability (0.0 to 1.0)
    """
    p = 1 / NUM_FACES
    q = (NUM_FACES - 1) / NUM_FACES
    coefficient = binomial_coefficient(trials, successes)
    if coefficient == 0:
        return 0.0
    return math.exp(
        math.log(coefficient)
        + successes * math.log(p)
        + (trials - successes) * math.log(q)
    )


def two_tailed_probability(amount: int, total: int) -> float:
    """
    Smaller of the two tail probabilities around an observed face count.

    P_upper = sum_{i=amount}^{total} P(X = i)
    P_lower = sum_{i=0}^{amount} P(X = i)

    Both tails include the observed count itself. A small result means the
    count is extreme in one direction or the other.

    Sums run in ascending order of i so results are reproducible.

    Args:
        amount: Observed occurrences of the face
        total: Total rolls

    Returns:
        min(P_upper, P_lower)
    """
    probability_equal_or_more = 0.0
    for i in range(amount, total + 1):
        probability_equal_or_more += exact_probability(i, total)

    probability_equal_or_less = 0.0
    for i in range(0, amount + 1):
        probability_equal_or_less += exact_probability(i, total)

    return min(probability_equal_or_more, probability_equal_or_less)
