"""Exact clash resolution over the (coin_count, paralyze) state space.

A clash repeats single rounds until one side runs out of coins. The loser
of a round drops a coin; paralysis on both sides decays after every round.
`win_probability` walks this state graph with memoized recursion and
returns, for each side, the distribution of states it finishes the clash
in when it wins.
"""

from __future__ import annotations
import logging
from collections import defaultdict
from dataclasses import dataclass

from clashcalc.clash import single_clash_prob
from clashcalc.skill import Skill


logger = logging.getLogger(__name__)

StateKey = tuple[int, int, int, int]
Outcome = tuple["ProbResult", ...]
Cache = dict[StateKey, tuple[Outcome, Outcome]]


class Config:
    def __init__(self, check_mass=True, mass_tolerance=1e-9):
        self.check_mass = check_mass
        self.mass_tolerance = mass_tolerance


@dataclass(frozen=True)
class ProbResult:
    """Probability that a side wins the clash ending in this state."""
    probability: float
    coin_count: int
    paralyze: int
    opp_paralyze: int

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.coin_count, self.paralyze, self.opp_paralyze)


def _state_key(left: Skill, right: Skill) -> StateKey:
    # base_coin, coin_val and sanity are fixed per side for a whole solve.
    return (left.coin_count, left.paralyze, right.coin_count, right.paralyze)


def _to_outcome(acc: dict[tuple[int, int, int], float]) -> Outcome:
    return tuple(ProbResult(prob, *key) for key, prob in sorted(acc.items()))


def win_probability(left: Skill, right: Skill, cache: Cache) -> tuple[Outcome, Outcome]:
    """Resolve a clash from (left, right) onward.

    Returns (left_outcome, right_outcome): each side's winning end states,
    sorted by (coin_count, paralyze, opp_paralyze). The cache is consulted
    before any recursion and filled before returning.
    """
    key = _state_key(left, right)
    if key in cache:
        return cache[key]

    if left.coin_count == 0:
        res = ((), (ProbResult(1.0, right.coin_count, right.paralyze, left.paralyze),))
        cache[key] = res
        return res

    if right.coin_count == 0:
        res = ((ProbResult(1.0, left.coin_count, left.paralyze, right.paralyze),), ())
        cache[key] = res
        return res

    left_win, draw, right_win = single_clash_prob(left, right)

    if left.paralyze == 0 and right.paralyze == 0:
        # Without paralysis a draw just replays the same state, so fold it away.
        total = left_win + right_win
        if total <= 0.0:
            logger.debug(f"[CLASH] Degenerate all-draw state {key}, no outcome")
            res = ((), ())
            cache[key] = res
            return res
        left_win = min(1.0, left_win / total)
        right_win = min(1.0, right_win / total)
        draw = 0.0

    branches = []
    if left_win > 0:
        branches.append((left_win, win_probability(left.after_win(), right.after_lose(), cache)))
    if draw > 0:
        branches.append((draw, win_probability(left.after_win(), right.after_win(), cache)))
    if right_win > 0:
        branches.append((right_win, win_probability(left.after_lose(), right.after_win(), cache)))

    left_acc: dict[tuple[int, int, int], float] = defaultdict(float)
    right_acc: dict[tuple[int, int, int], float] = defaultdict(float)
    for case_prob, (sub_left, sub_right) in branches:
        for r in sub_left:
            left_acc[r.key] += case_prob * r.probability
        for r in sub_right:
            right_acc[r.key] += case_prob * r.probability

    res = (_to_outcome(left_acc), _to_outcome(right_acc))
    cache[key] = res
    return res


def solve(
    left: Skill,
    right: Skill,
    cache: Cache | None = None,
    config: Config | None = None,
) -> tuple[Outcome, Outcome]:
    """Full outcome distributions for a clash between `left` and `right`.

    A cache may be passed in to reuse work across solves, but only between
    solves whose sides share base_coin, coin_val and sanity.
    """
    if config is None:
        config = Config()
    if cache is None:
        cache = {}

    left_res, right_res = win_probability(left, right, cache)

    total = sum(r.probability for r in left_res) + sum(r.probability for r in right_res)
    logger.debug(
        f"[CLASH] Solved {left} vs {right}: "
        f"{len(cache)} cached states, total mass={total:.12f}"
    )
    if config.check_mass and total > 1.0 + config.mass_tolerance:
        raise RuntimeError(f"Bug in outcome merging: total probability={total:.12f}")

    return left_res, right_res


@dataclass
class ClashAnalysis:
    """Summary of a solved clash."""
    left: Outcome
    right: Outcome
    left_win: float = 0.0
    right_win: float = 0.0
    unresolved: float = 0.0
    left_expected_coins: float = 0.0  # given left wins
    right_expected_coins: float = 0.0  # given right wins
    num_states: int = 0


def _expected_coins(outcome: Outcome, total: float) -> float:
    if total <= 0.0:
        return 0.0
    return sum(r.probability * r.coin_count for r in outcome) / total


def analyze(left: Skill, right: Skill, config: Config | None = None) -> ClashAnalysis:
    """Solve a clash and summarize who wins and with how many coins left."""
    cache: Cache = {}
    left_res, right_res = solve(left, right, cache=cache, config=config)

    left_win = sum(r.probability for r in left_res)
    right_win = sum(r.probability for r in right_res)

    return ClashAnalysis(
        left=left_res,
        right=right_res,
        left_win=left_win,
        right_win=right_win,
        unresolved=max(0.0, 1.0 - left_win - right_win),
        left_expected_coins=_expected_coins(left_res, left_win),
        right_expected_coins=_expected_coins(right_res, right_win),
        num_states=len(cache),
    )
