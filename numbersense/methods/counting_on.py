"""
Counting on (subtraction): count up from the subtrahend to the minuend.

Best when the difference is small, e.g. 502 - 498: 498 -> 500 -> 502, jumps 2 + 2.
"""

from __future__ import annotations

from numbersense.methods.base import Operator, Solution, SolutionStep, band_score
from numbersense.methods.rounding import ROUND_BASES

MAX_DIFFERENCE = 20
MAX_RELATIVE_DIFFERENCE = 0.1


def next_round_number(n: int, limit: int) -> int:
    """First round number above n that does not pass limit (else limit)."""
    for base in ROUND_BASES:
        candidate = -(-n // base) * base
        if n < candidate <= limit:
            return candidate
    return limit


class CountingOn:
    method_id = "counting_on"
    name = "Counting On"
    description = "Count up to find the difference"
    kind = "mental"

    def can_apply(self, a: int, op: Operator, b: int) -> bool:
        if op is not Operator.SUBTRACT or b >= a:
            return False
        diff = a - b
        return diff < MAX_DIFFERENCE or diff / max(a, 1) < MAX_RELATIVE_DIFFERENCE

    def score(self, a: int, op: Operator, b: int) -> int:
        return band_score(a - b, (95, 85, 70, 50))

    def jumps(self, a: int, b: int) -> list[tuple[int, int]]:
        """(from, to) hops from b up to a via round numbers."""
        hops = []
        current = b
        while current < a:
            nxt = next_round_number(current, a)
            hops.append((current, nxt))
            current = nxt
        return hops

    def solve(self, a: int, op: Operator, b: int) -> Solution:
        problem = f"{a} {op.value} {b}"
        if b >= a:
            return Solution(
                self.method_id,
                problem,
                [SolutionStep("Error", "Cannot count on - result would be zero or negative")],
                answer=a - b,
                error="Subtrahend is not smaller than the minuend",
            )

        steps = [
            SolutionStep(
                description="Start counting from",
                detail=f"Begin at {b} and count up to {a}",
                note="Track each jump to find the total difference",
            )
        ]
        sizes = []
        for start, end in self.jumps(a, b):
            sizes.append(end - start)
            steps.append(
                SolutionStep(
                    description=f"Jump to {end}",
                    detail=f"{start} -> {end} = +{end - start}",
                    value=end - start,
                )
            )

        answer = sum(sizes)
        if len(sizes) > 1:
            steps.append(
                SolutionStep(
                    description="Add all jumps",
                    detail=f"{' + '.join(str(s) for s in sizes)} = {answer}",
                    note="The total of all jumps is the difference",
                    value=answer,
                )
            )
        else:
            steps.append(
                SolutionStep(description="Total difference", detail=f"The jump is {answer}", value=answer)
            )

        return Solution(self.method_id, problem, steps, answer)
