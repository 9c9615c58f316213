"""Clash calculator — exact outcome odds for coin-flip skill clashes."""

from .skill import Skill, InvalidParameter
from .clash import single_clash_prob
from .engine import analyze, solve, win_probability, ClashAnalysis, Config, ProbResult

__all__ = [
    "Skill", "InvalidParameter", "single_clash_prob",
    "analyze", "solve", "win_probability", "ClashAnalysis", "Config", "ProbResult",
]
