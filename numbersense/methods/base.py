"""
Base protocol and types for solving methods.

Each method (compensation, column, ...) has its own module with:
- can_apply(): pure applicability predicate
- score(): pure suitability heuristic in [0, 100]
- solve(): step-by-step worked solution
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class Operator(str, Enum):
    """Supported arithmetic operators."""

    ADD = "+"
    SUBTRACT = "-"

    def apply(self, a: int, b: int) -> int:
        return a + b if self is Operator.ADD else a - b

    @property
    def verb(self) -> str:
        return "Add" if self is Operator.ADD else "Subtract"


_PROBLEM_PATTERN = re.compile(r"^\s*(\d+)\s*([+\-−])\s*(\d+)\s*(=\s*\??\s*)?$")


@dataclass(frozen=True)
class ArithmeticProblem:
    """An addition or subtraction problem `a op b`."""

    a: int
    operator: Operator
    b: int

    @classmethod
    def parse(cls, text: str) -> ArithmeticProblem:
        """
        Parse "58 + 39", "502 - 498" or "502 − 498 = ?".

        Raises:
            ValueError: if the text is not a two-operand +/- problem
        """
        match = _PROBLEM_PATTERN.match(text)
        if not match:
            raise ValueError(f"Not an addition or subtraction problem: {text!r}")
        symbol = "-" if match.group(2) == "−" else match.group(2)
        return cls(int(match.group(1)), Operator(symbol), int(match.group(3)))

    @property
    def answer(self) -> int:
        return self.operator.apply(self.a, self.b)

    def __str__(self) -> str:
        return f"{self.a} {self.operator.value} {self.b}"


@dataclass(frozen=True)
class SolutionStep:
    """One step of a worked solution."""

    description: str
    detail: str
    note: str | None = None
    value: int | None = None


@dataclass
class Solution:
    """Worked solution produced by a method."""

    method_id: str
    problem: str
    steps: list[SolutionStep] = field(default_factory=list)
    answer: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class UnknownMethodError(KeyError):
    """Raised when a method id is not registered."""


class SolvingMethod(Protocol):
    """Protocol for solving methods."""

    method_id: str
    name: str
    description: str
    kind: str  # 'mental' or 'written'

    def can_apply(self, a: int, op: Operator, b: int) -> bool:
        """Whether the method works for this problem."""
        ...

    def score(self, a: int, op: Operator, b: int) -> int:
        """Suitability 0-100 (only meaningful when can_apply is True)."""
        ...

    def solve(self, a: int, op: Operator, b: int) -> Solution:
        """Step-by-step solution."""
        ...


def band_score(distance: int, bands: tuple[int, int, int, int]) -> int:
    """
    Score a distance against the <=5 / <=10 / <=20 / else bands.

    Args:
        distance: Non-negative distance
        bands: Scores for (<=5, <=10, <=20, otherwise)
    """
    if distance <= 5:
        return bands[0]
    if distance <= 10:
        return bands[1]
    if distance <= 20:
        return bands[2]
    return bands[3]


def digit_count(a: int, b: int) -> int:
    """Digits in the longer operand."""
    return max(len(str(abs(a))), len(str(abs(b))))
