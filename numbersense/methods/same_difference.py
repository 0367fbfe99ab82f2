"""
Same difference (subtraction): shift both numbers by the same amount so the
subtrahend becomes round. The gap between them does not change.

Example: 83 - 29 -> 84 - 30 = 54.
"""

from __future__ import annotations

from numbersense.methods.base import Operator, Solution, SolutionStep, band_score
from numbersense.methods.rounding import near_round, rounding_target

MAX_SHIFT = 20


class SameDifference:
    method_id = "same_difference"
    name = "Same Difference"
    description = "Shift both numbers equally (subtraction)"
    kind = "mental"

    def can_apply(self, a: int, op: Operator, b: int) -> bool:
        if op is not Operator.SUBTRACT:
            return False
        return rounding_target(b).adjustment <= MAX_SHIFT

    def score(self, a: int, op: Operator, b: int) -> int:
        return band_score(near_round(b), (90, 80, 65, 50))

    def solve(self, a: int, op: Operator, b: int) -> Solution:
        target = rounding_target(b)
        shift = target.signed_adjustment
        direction = "Add {} to" if shift >= 0 else "Subtract {} from"
        new_minuend = a + shift
        answer = new_minuend - target.rounded

        steps = [
            SolutionStep("Goal", f"Make {b} into a round number to subtract easily"),
            SolutionStep(
                description="Adjustment",
                detail=f"{direction.format(abs(shift))} both numbers ({b} -> {target.rounded})",
                note="Shifting both numbers by the same amount keeps the difference the same",
                value=abs(shift),
            ),
            SolutionStep("New problem", f"{new_minuend} - {target.rounded}", value=new_minuend),
            SolutionStep(
                "Easy subtraction",
                f"{new_minuend} - {target.rounded} = {answer}",
                value=answer,
            ),
        ]
        return Solution(self.method_id, f"{a} {op.value} {b}", steps, answer)
