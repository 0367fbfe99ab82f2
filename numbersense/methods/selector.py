"""
Method suitability scoring.

Ranks the registered solving methods for a problem, first by how well each
method fits the numbers, then (optionally) blended with the learner's comfort
with each method:

    user_score = suitability + comfort bonus + accuracy * 20 + min(uses * 2, 20)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from loguru import logger

from numbersense.methods.base import ArithmeticProblem, Solution
from numbersense.methods.registry import MethodRegistry


class ComfortLevel(str, Enum):
    """How comfortable a learner is with a solving method."""

    NOVICE = "novice"
    PRACTISING = "practising"
    CONFIDENT = "confident"
    EXPERT = "expert"

    @property
    def bonus(self) -> int:
        """Points added to a method's score for this comfort level."""
        return {
            ComfortLevel.NOVICE: 0,
            ComfortLevel.PRACTISING: 15,
            ComfortLevel.CONFIDENT: 30,
            ComfortLevel.EXPERT: 40,
        }[self]

    @property
    def color(self) -> str:
        return {
            ComfortLevel.NOVICE: "dim",
            ComfortLevel.PRACTISING: "yellow",
            ComfortLevel.CONFIDENT: "cyan",
            ComfortLevel.EXPERT: "green",
        }[self]


@dataclass(frozen=True)
class MethodComfort:
    """A learner's history with one method."""

    comfort_level: ComfortLevel = ComfortLevel.NOVICE
    accuracy: float = 0.0  # 0..1
    times_used: int = 0

    @property
    def bonus(self) -> float:
        return self.comfort_level.bonus + self.accuracy * 20 + min(self.times_used * 2, 20)


@dataclass(frozen=True)
class MethodCandidate:
    """A method that applies to a problem, with its scores."""

    method_id: str
    suitability_score: int
    user_score: float | None = None


class MethodSuitabilityScorer:
    """Scores registered methods against a problem."""

    def __init__(self, registry: MethodRegistry):
        self.registry = registry

    def applicable_methods(self, problem: ArithmeticProblem) -> list[MethodCandidate]:
        """
        Every method whose predicate accepts the problem, best fit first.

        Equal scores keep registration order. Returns an empty list when no
        method applies.
        """
        a, op, b = problem.a, problem.operator, problem.b
        candidates = [
            MethodCandidate(method.method_id, method.score(a, op, b))
            for method in self.registry
            if method.can_apply(a, op, b)
        ]
        candidates.sort(key=lambda c: c.suitability_score, reverse=True)
        logger.debug(
            f"Methods for {problem}: "
            + ", ".join(f"{c.method_id}={c.suitability_score}" for c in candidates)
        )
        return candidates

    def personalize(
        self,
        candidates: list[MethodCandidate],
        comfort_map: dict[str, MethodComfort],
    ) -> list[MethodCandidate]:
        """
        Blend suitability with learner comfort and re-sort.

        Methods missing from comfort_map count as novice, never used.
        """
        default = MethodComfort()
        scored = [
            replace(c, user_score=c.suitability_score + comfort_map.get(c.method_id, default).bonus)
            for c in candidates
        ]
        scored.sort(key=lambda c: c.user_score, reverse=True)
        return scored

    def recommend(self, problem: ArithmeticProblem) -> MethodCandidate | None:
        candidates = self.applicable_methods(problem)
        return candidates[0] if candidates else None

    def preferred(
        self,
        problem: ArithmeticProblem,
        comfort_map: dict[str, MethodComfort],
    ) -> MethodCandidate | None:
        candidates = self.personalize(self.applicable_methods(problem), comfort_map)
        return candidates[0] if candidates else None

    def solve(self, problem: ArithmeticProblem, method_id: str) -> Solution:
        """
        Worked solution using a specific method.

        Raises:
            UnknownMethodError: if method_id is not registered
        """
        method = self.registry.get(method_id)
        return method.solve(problem.a, problem.operator, problem.b)
