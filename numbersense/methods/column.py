"""
Column method: the written algorithm, column by column with carrying or
borrowing. Works for any problem with a multi-digit operand.
"""

from __future__ import annotations

from numbersense.methods.base import Operator, Solution, SolutionStep
from numbersense.methods.rounding import digits_of, place_name


class ColumnMethod:
    method_id = "column"
    name = "Column Method"
    description = "Traditional written algorithm"
    kind = "written"

    def can_apply(self, a: int, op: Operator, b: int) -> bool:
        return op in (Operator.ADD, Operator.SUBTRACT) and (a >= 10 or b >= 10)

    def score(self, a: int, op: Operator, b: int) -> int:
        return 60

    def solve(self, a: int, op: Operator, b: int) -> Solution:
        problem = f"{a} {op.value} {b}"
        if op is Operator.ADD:
            return self._solve_addition(a, b, problem)
        return self._solve_subtraction(a, b, problem)

    def _solve_addition(self, a: int, b: int, problem: str) -> Solution:
        digits_a, digits_b = digits_of(a), digits_of(b)
        width = max(len(digits_a), len(digits_b))
        steps = []
        written = []
        carry = 0
        i = 0

        while i < width or carry:
            d_a = digits_a[i] if i < len(digits_a) else 0
            d_b = digits_b[i] if i < len(digits_b) else 0
            total = d_a + d_b + carry
            carry_text = f" + {carry} (carry)" if carry else ""
            carry = total // 10
            written.append(total % 10)
            steps.append(
                SolutionStep(
                    description=f"{place_name(i).capitalize()} column",
                    detail=f"{d_a} + {d_b}{carry_text} = {total}",
                    note=f"Write {total % 10}, carry {carry}" if carry else None,
                    value=total % 10,
                )
            )
            i += 1

        answer = int("".join(str(d) for d in reversed(written)))
        return Solution(self.method_id, problem, steps, answer)

    def _solve_subtraction(self, a: int, b: int, problem: str) -> Solution:
        if b > a:
            return Solution(
                self.method_id,
                problem,
                [SolutionStep("Error", "Cannot borrow - result would be negative")],
                answer=None,
                error="Cannot subtract - first number is smaller",
            )

        working = digits_of(a)
        digits_b = digits_of(b)
        steps = []
        written = []

        for i in range(len(working)):
            d_b = digits_b[i] if i < len(digits_b) else 0
            if working[i] < d_b:
                # Borrow from the next non-zero column, turning zeros into 9s
                j = i + 1
                while working[j] == 0:
                    working[j] = 9
                    j += 1
                working[j] -= 1
                before = working[i]
                working[i] += 10
                steps.append(
                    SolutionStep(
                        description=f"Borrow from {place_name(j)}",
                        detail=f"{place_name(i)}: {before} -> {working[i]}",
                        note="Borrow through the zeros" if j > i + 1 else f"Borrow 1 from {place_name(j)}",
                    )
                )

            diff = working[i] - d_b
            written.append(diff)
            steps.append(
                SolutionStep(
                    description=f"{place_name(i).capitalize()} column",
                    detail=f"{working[i]} - {d_b} = {diff}",
                    value=diff,
                )
            )

        answer = int("".join(str(d) for d in reversed(written)))
        return Solution(self.method_id, problem, steps, answer)
