"""Monte Carlo clash simulation.

An alternative to the exact memoized solve. Plays clashes coin by coin
and tallies who wins and in which end state.

Useful for:
1. Validating exact computation
2. Sanity-checking odd parameter combinations (negative coins, paralysis)
"""

import random
from collections import Counter

from clashcalc.engine import analyze
from clashcalc.skill import Skill


def _roll(skill: Skill, rng: random.Random) -> int:
    heads = sum(1 for _ in range(skill.coins_flipped) if rng.random() < skill.head_prob)
    return max(0, skill.base_coin + skill.coin_val * heads)


def play_clash(left: Skill, right: Skill, rng: random.Random, max_rounds: int = 1000):
    """Play one clash to the end.

    Returns (winner, end_key, rounds) where winner is "left", "right" or
    None if max_rounds ran out (e.g. a clash that can only ever draw).
    end_key is the winner's (coin_count, paralyze, opp_paralyze).
    """
    rounds = 0
    while True:
        if left.coin_count == 0:
            return "right", (right.coin_count, right.paralyze, left.paralyze), rounds
        if right.coin_count == 0:
            return "left", (left.coin_count, left.paralyze, right.paralyze), rounds
        if rounds >= max_rounds:
            return None, None, rounds

        left_power = _roll(left, rng)
        right_power = _roll(right, rng)
        rounds += 1

        if left_power > right_power:
            left, right = left.after_win(), right.after_lose()
        elif left_power < right_power:
            left, right = left.after_lose(), right.after_win()
        elif left.paralyze == 0 and right.paralyze == 0:
            # Unparalyzed draws are re-flipped.
            continue
        else:
            left, right = left.after_win(), right.after_win()


def simulate_clash(
    left: Skill,
    right: Skill,
    *,
    num_simulations: int = 10000,
    seed: int | None = None,
    max_rounds: int = 1000,
) -> dict:
    """Estimate clash outcomes by simulation and compare with the exact solve.

    Returns dict with:
        - left_win_sim / right_win_sim / unresolved_sim: empirical rates
        - left_win_exact / right_win_exact: exact totals from analyze()
        - left_outcome_sim / right_outcome_sim: end_key -> empirical rate
        - num_simulations: actual simulation count
        - mean_rounds: average rounds per clash
        - error: largest absolute gap between simulated and exact win rates
    """
    rng = random.Random(seed)
    exact = analyze(left, right)

    winners = Counter()
    left_ends = Counter()
    right_ends = Counter()
    total_rounds = 0

    for _ in range(num_simulations):
        winner, end_key, rounds = play_clash(left, right, rng, max_rounds)
        winners[winner] += 1
        if winner == "left":
            left_ends[end_key] += 1
        elif winner == "right":
            right_ends[end_key] += 1
        total_rounds += rounds

    if num_simulations <= 0:
        return {
            "left_win_sim": 0.0,
            "right_win_sim": 0.0,
            "unresolved_sim": 0.0,
            "left_win_exact": exact.left_win,
            "right_win_exact": exact.right_win,
            "left_outcome_sim": {},
            "right_outcome_sim": {},
            "num_simulations": 0,
            "mean_rounds": 0,
            "error": 0.0,
        }

    n = num_simulations
    left_win_sim = winners["left"] / n
    right_win_sim = winners["right"] / n

    return {
        "left_win_sim": left_win_sim,
        "right_win_sim": right_win_sim,
        "unresolved_sim": winners[None] / n,
        "left_win_exact": exact.left_win,
        "right_win_exact": exact.right_win,
        "left_outcome_sim": {k: c / n for k, c in sorted(left_ends.items())},
        "right_outcome_sim": {k: c / n for k, c in sorted(right_ends.items())},
        "num_simulations": n,
        "mean_rounds": total_rounds / n,
        "error": max(abs(left_win_sim - exact.left_win), abs(right_win_sim - exact.right_win)),
    }
