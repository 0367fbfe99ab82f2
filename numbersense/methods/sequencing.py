"""
Sequencing: start at the first number and jump by each place value of the
second, largest first.
"""

from __future__ import annotations

from numbersense.methods.base import Operator, Solution, SolutionStep, digit_count
from numbersense.methods.rounding import place_values

MIN_OPERAND = 10
MAX_OPERAND = 9999


class Sequencing:
    method_id = "sequencing"
    name = "Sequencing"
    description = "Start at one number and jump by place values"
    kind = "mental"

    def can_apply(self, a: int, op: Operator, b: int) -> bool:
        if op not in (Operator.ADD, Operator.SUBTRACT):
            return False
        return MIN_OPERAND <= a <= MAX_OPERAND and MIN_OPERAND <= b <= MAX_OPERAND

    def score(self, a: int, op: Operator, b: int) -> int:
        digits = digit_count(a, b)
        if digits == 2:
            return 80
        if digits == 3:
            return 70
        return 60

    def solve(self, a: int, op: Operator, b: int) -> Solution:
        steps = [SolutionStep("Start at", str(a), value=a)]
        running = a
        for place, value in place_values(b):
            running = op.apply(running, value)
            steps.append(
                SolutionStep(
                    description=f"{op.verb} {place}",
                    detail=f"{op.value} {value} -> {running}",
                    value=running,
                )
            )
        return Solution(self.method_id, f"{a} {op.value} {b}", steps, running)
