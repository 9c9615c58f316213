"""Skill — one side of a clash and its coin-power distribution.

A skill flips `coin_count - paralyze` coins per round. Each head adds
`coin_val` to `base_coin`; the total is floored at 0. Heads land with
probability (50 + sanity) / 100.

Skills are immutable: winning or losing a round produces a new Skill,
so instances (and their cached distributions) can be shared freely
across the memoized solver.
"""

from __future__ import annotations
from bisect import bisect_left
from dataclasses import dataclass
from functools import cached_property
from math import comb


MIN_SANITY = -50
MAX_SANITY = 50


class InvalidParameter(ValueError):
    """Raised when a Skill is built from parameters outside its domain."""


def _binomial_term(n: int, k: int, p: float) -> float:
    """P(exactly k heads in n flips) computed in floating point."""
    return float(comb(n, k)) * (p ** k) * ((1.0 - p) ** (n - k))


@dataclass(frozen=True)
class Skill:
    """Immutable skill state.

    Only `coin_count` and `paralyze` change over a clash; `base_coin`,
    `coin_val` and `sanity` stay fixed for an actor.
    """
    base_coin: int
    coin_val: int
    coin_count: int
    sanity: int = 0
    paralyze: int = 0

    def __post_init__(self):
        for name in ("base_coin", "coin_val", "coin_count", "sanity", "paralyze"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidParameter(f"{name} must be an int, got {value!r}")
        if self.coin_count < 0:
            raise InvalidParameter(f"coin_count must be >= 0, got {self.coin_count}")
        if self.paralyze < 0:
            raise InvalidParameter(f"paralyze must be >= 0, got {self.paralyze}")
        if not MIN_SANITY <= self.sanity <= MAX_SANITY:
            raise InvalidParameter(
                f"sanity {self.sanity} gives head probability outside [0, 1] "
                f"(allowed range {MIN_SANITY}..{MAX_SANITY})"
            )

    @property
    def coins_flipped(self) -> int:
        return max(0, self.coin_count - self.paralyze)

    @cached_property
    def head_prob(self) -> float:
        return (50 + self.sanity) / 100

    @cached_property
    def prob_dict(self) -> dict[int, float]:
        """Total power -> probability for one round of flips.

        Powers clamped to 0 collide, so masses are summed.
        """
        flips = self.coins_flipped
        result: dict[int, float] = {}
        for heads in range(flips + 1):
            power = max(0, self.base_coin + self.coin_val * heads)
            result[power] = result.get(power, 0.0) + _binomial_term(flips, heads, self.head_prob)
        return result

    @cached_property
    def sorted_prob_items(self) -> list[tuple[int, float]]:
        return sorted(self.prob_dict.items())

    @cached_property
    def cumulative_prob(self) -> list[tuple[int, float]]:
        """Running (power, P(power' <= power)) over sorted_prob_items."""
        result = []
        acc = 0.0
        for power, prob in self.sorted_prob_items:
            acc += prob
            result.append((power, acc))
        return result

    @cached_property
    def _cdf_powers(self) -> list[int]:
        return [power for power, _ in self.cumulative_prob]

    def prob_below(self, power: int) -> float:
        """P(this skill rolls strictly less than `power`), clamped to [0, 1]."""
        idx = bisect_left(self._cdf_powers, power)
        if idx == 0:
            return 0.0
        return min(1.0, max(0.0, self.cumulative_prob[idx - 1][1]))

    def after_win(self) -> Skill:
        return Skill(
            self.base_coin, self.coin_val, self.coin_count, self.sanity,
            max(0, self.paralyze - self.coin_count),
        )

    def after_lose(self) -> Skill:
        # Paralysis decays by the coin count held before the loss.
        return Skill(
            self.base_coin, self.coin_val, self.coin_count - 1, self.sanity,
            max(0, self.paralyze - self.coin_count),
        )

    def __str__(self) -> str:
        return (
            f"{self.base_coin}+{self.coin_val}x{self.coin_count} "
            f"SP:{self.sanity} PZ:{self.paralyze}"
        )
