"""
Compensation: round one operand to a near round number, then adjust.

Example: 58 + 39 -> 58 + 40 = 98, added 1 too many -> 97.
"""

from __future__ import annotations

from numbersense.methods.base import Operator, Solution, SolutionStep, band_score
from numbersense.methods.rounding import near_round, rounding_target

MAX_ADJUSTMENT = 20


class Compensation:
    method_id = "compensation"
    name = "Compensation"
    description = "Round to easier number, then adjust"
    kind = "mental"

    def can_apply(self, a: int, op: Operator, b: int) -> bool:
        if op not in (Operator.ADD, Operator.SUBTRACT):
            return False
        return (
            rounding_target(a).adjustment <= MAX_ADJUSTMENT
            or rounding_target(b).adjustment <= MAX_ADJUSTMENT
        )

    def score(self, a: int, op: Operator, b: int) -> int:
        return band_score(min(near_round(a), near_round(b)), (95, 85, 70, 50))

    def solve(self, a: int, op: Operator, b: int) -> Solution:
        a_round = rounding_target(a)
        b_round = rounding_target(b)

        # Round whichever operand is closer; ties round the second
        first = a_round.adjustment < b_round.adjustment
        target, other = (a, b) if first else (b, a)
        rnd = a_round if first else b_round
        up = rnd.direction == "up"

        steps = [
            SolutionStep(
                description="Identify near-round number",
                detail=f"{target} is close to {rnd.rounded} ({rnd.adjustment} {'more' if up else 'less'})",
            )
        ]

        if op is Operator.ADD:
            rounded_problem = f"{other} + {rnd.rounded}"
            rounded_result = other + rnd.rounded
            # Rounded up means we added too much
            sign = -1 if up else 1
            note = (
                f"We added {rnd.adjustment} too many, subtract it back"
                if up
                else f"We added {rnd.adjustment} too few, add it back"
            )
        elif first:
            rounded_problem = f"{rnd.rounded} - {other}"
            rounded_result = rnd.rounded - other
            sign = -1 if up else 1
            note = (
                f"We started {rnd.adjustment} higher, subtract it"
                if up
                else f"We started {rnd.adjustment} lower, add it"
            )
        else:
            rounded_problem = f"{other} - {rnd.rounded}"
            rounded_result = other - rnd.rounded
            sign = 1 if up else -1
            note = (
                f"We subtracted {rnd.adjustment} too many, add it back"
                if up
                else f"We subtracted {rnd.adjustment} too few, subtract more"
            )

        steps.append(
            SolutionStep(
                description="Use the round number",
                detail=f"{rounded_problem} = {rounded_result}",
                value=rounded_result,
            )
        )

        answer = rounded_result + sign * rnd.adjustment
        steps.append(SolutionStep(description="Adjust for the rounding", detail=note))
        steps.append(
            SolutionStep(
                description="Final answer",
                detail=f"{rounded_result} {'+' if sign > 0 else '-'} {rnd.adjustment} = {answer}",
                value=answer,
            )
        )

        return Solution(self.method_id, f"{a} {op.value} {b}", steps, answer)
