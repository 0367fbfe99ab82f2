"""
Round-number helpers shared by the rounding-based methods.
"""

from __future__ import annotations

from dataclasses import dataclass

ROUND_BASES = (10, 100, 1000, 10000)

PLACE_NAMES = ("ones", "tens", "hundreds", "thousands", "ten-thousands")


@dataclass(frozen=True)
class RoundingTarget:
    """Nearest round number to n and how far away it is."""

    rounded: int
    adjustment: int  # always >= 0
    direction: str  # 'up' or 'down'

    @property
    def signed_adjustment(self) -> int:
        """rounded - n."""
        return self.adjustment if self.direction == "up" else -self.adjustment


def rounding_target(n: int) -> RoundingTarget:
    """
    Closest multiple of 10/100/1000/10000 to n.

    Rounding down to 0 is not allowed; on equal distance the first
    candidate found (smaller base, lower side) wins.
    """
    best: RoundingTarget | None = None
    for base in ROUND_BASES:
        lower = (n // base) * base
        upper = -(-n // base) * base
        if lower > 0 and (best is None or n - lower < best.adjustment):
            best = RoundingTarget(rounded=lower, adjustment=n - lower, direction="down")
        if best is None or upper - n < best.adjustment:
            best = RoundingTarget(rounded=upper, adjustment=upper - n, direction="up")
    return best


def near_round(n: int) -> int:
    """Distance from n to the nearest multiple of any round base."""
    n = abs(n)
    return min(min(n % base, base - n % base) for base in ROUND_BASES)


def place_values(n: int) -> list[tuple[str, int]]:
    """
    Non-zero place-value parts of n, largest first.

    >>> place_values(3405)
    [('thousands', 3000), ('hundreds', 400), ('ones', 5)]
    """
    parts = []
    remaining = abs(n)
    multiplier = 1
    index = 0
    while remaining > 0:
        digit = remaining % 10
        if digit:
            parts.append((place_name(index), digit * multiplier))
        remaining //= 10
        multiplier *= 10
        index += 1
    parts.reverse()
    return parts


def digits_of(n: int) -> list[int]:
    """Digits of n, ones first."""
    return [int(d) for d in reversed(str(abs(n)))]


def place_name(index: int) -> str:
    """Name of the column `index` places left of the ones column."""
    if index < len(PLACE_NAMES):
        return PLACE_NAMES[index]
    return f"10^{index}"
