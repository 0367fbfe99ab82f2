"""
Partitioning: split both numbers into place values, operate on each place,
then recombine.
"""

from __future__ import annotations

from numbersense.methods.base import Operator, Solution, SolutionStep, digit_count
from numbersense.methods.rounding import place_name, place_values


class Partitioning:
    method_id = "partitioning"
    name = "Partitioning"
    description = "Split into place values"
    kind = "mental"

    def can_apply(self, a: int, op: Operator, b: int) -> bool:
        if op not in (Operator.ADD, Operator.SUBTRACT):
            return False
        return a >= 10 and b >= 10

    def score(self, a: int, op: Operator, b: int) -> int:
        digits = digit_count(a, b)
        if digits == 2:
            return 75
        if digits == 3:
            return 70
        return 65

    def solve(self, a: int, op: Operator, b: int) -> Solution:
        a_parts = place_values(a)
        b_parts = place_values(b)
        steps = [
            SolutionStep("Split into place values", f"{a} = {' + '.join(str(v) for _, v in a_parts)}"),
            SolutionStep("Split into place values", f"{b} = {' + '.join(str(v) for _, v in b_parts)}"),
        ]

        a_map = dict(a_parts)
        b_map = dict(b_parts)
        places = [
            place_name(i)
            for i in reversed(range(digit_count(a, b)))
            if place_name(i) in a_map or place_name(i) in b_map
        ]

        results = []
        for place in places:
            a_val = a_map.get(place, 0)
            b_val = b_map.get(place, 0)
            result = op.apply(a_val, b_val)
            results.append(result)
            steps.append(
                SolutionStep(
                    description=f"{op.verb} {place}",
                    detail=f"{a_val} {op.value} {b_val} = {result}",
                    value=result,
                )
            )

        total = sum(results)
        note = None
        if len(results) > 2:
            last_two = results[-2] + results[-1]
            head = " + ".join(str(r) for r in results[:-2])
            note = f"{results[-2]} + {results[-1]} = {last_two}, then {head} + {last_two} = {total}"
        steps.append(
            SolutionStep(
                description="Combine",
                detail=f"{' + '.join(str(r) for r in results)} = {total}",
                note=note,
                value=total,
            )
        )
        return Solution(self.method_id, f"{a} {op.value} {b}", steps, total)
