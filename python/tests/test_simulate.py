"""Monte Carlo clash simulation should agree with the exact solver."""

import sys
import os
import random

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from clashcalc.simulate import play_clash, simulate_clash
from clashcalc.skill import Skill


def test_play_clash_forced_outcome():
    winner, end_key, rounds = play_clash(Skill(10, 0, 1), Skill(0, 1, 2, paralyze=5), random.Random(0))
    assert winner == "left"
    assert end_key == (1, 0, 2)
    assert rounds == 2


def test_play_clash_finishing_on_last_round_is_resolved():
    winner, end_key, rounds = play_clash(
        Skill(10, 0, 1), Skill(0, 1, 2, paralyze=5), random.Random(0), max_rounds=2
    )
    assert (winner, end_key, rounds) == ("left", (1, 0, 2), 2)


def test_play_clash_round_limit_stops_unfinished_clash():
    winner, end_key, rounds = play_clash(
        Skill(10, 0, 1), Skill(0, 1, 2, paralyze=5), random.Random(0), max_rounds=1
    )
    assert (winner, end_key, rounds) == (None, None, 1)


def test_play_clash_already_over():
    winner, end_key, rounds = play_clash(Skill(1, 1, 0), Skill(2, 2, 3), random.Random(0))
    assert (winner, end_key, rounds) == ("right", (3, 0, 0), 0)


def test_simulate_reference_clash():
    result = simulate_clash(Skill(3, 2, 2), Skill(2, 2, 2), num_simulations=20000, seed=42)
    assert result["num_simulations"] == 20000
    assert result["unresolved_sim"] == 0.0
    assert result["error"] < 0.02, f"error {result['error']:.4f} too high"
    assert result["left_outcome_sim"][(2, 0, 0)] == pytest.approx(0.6875 * 0.875, abs=0.02)


def test_simulate_with_paralysis():
    result = simulate_clash(
        Skill(5, 3, 4, sanity=10, paralyze=3),
        Skill(7, 2, 3, sanity=-5, paralyze=1),
        num_simulations=20000,
        seed=7,
    )
    assert result["error"] < 0.02, f"error {result['error']:.4f} too high"
    assert result["left_win_sim"] + result["right_win_sim"] == pytest.approx(1.0)


def test_simulate_all_draw_clash_never_resolves():
    result = simulate_clash(Skill(0, 0, 2), Skill(0, 0, 2), num_simulations=50, seed=1, max_rounds=20)
    assert result["unresolved_sim"] == 1.0
    assert result["left_win_exact"] == 0.0
    assert result["right_win_exact"] == 0.0


def test_simulate_is_reproducible():
    a = simulate_clash(Skill(3, 2, 3), Skill(2, 2, 3), num_simulations=500, seed=3)
    b = simulate_clash(Skill(3, 2, 3), Skill(2, 2, 3), num_simulations=500, seed=3)
    assert a == b


def test_simulate_zero_runs():
    result = simulate_clash(Skill(3, 2, 3), Skill(2, 2, 3), num_simulations=0)
    assert result["num_simulations"] == 0
    assert result["left_win_exact"] > 0.5
