"""Single-round clash odds between two skills."""

from __future__ import annotations

from clashcalc.skill import Skill


def single_clash_prob(left: Skill, right: Skill) -> tuple[float, float, float]:
    """Return (p_left_win, p_draw, p_right_win) for one round of flips.

    Strictly higher power wins the round; equal power is a draw.
    """
    left_win = 0.0
    draw = 0.0
    right_win = 0.0

    right_dict = right.prob_dict
    for power, prob in left.sorted_prob_items:
        less_than = right.prob_below(power)
        equal = right_dict.get(power, 0.0)
        greater = max(0.0, 1.0 - (less_than + equal))

        left_win += prob * less_than
        draw += prob * equal
        right_win += prob * greater

    return (left_win, draw, right_win)
