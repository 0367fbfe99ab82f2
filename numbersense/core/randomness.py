"""
Random-source capability and the "pick one of the top N" policy.

Selections only need a uniform draw over a small index range; the source is
injected so tests can force a choice.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")

TOP_CANDIDATES = 3


class RandomSource(Protocol):
    """Uniform draw over [0, upper)."""

    def randbelow(self, upper: int) -> int:
        ...


class SystemRandomSource:
    """Non-cryptographic source backed by random.Random."""

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def randbelow(self, upper: int) -> int:
        return self._random.randrange(upper)


def pick_from_top(
    scored: Sequence[tuple[T, float]],
    rng: RandomSource,
    top_n: int = TOP_CANDIDATES,
) -> T:
    """
    Sort by score descending and pick uniformly among the best top_n.

    Sorting is stable, so equal scores keep their input order.

    Raises:
        ValueError: if scored is empty
    """
    if not scored:
        raise ValueError("cannot pick from an empty candidate list")

    ranked = sorted(scored, key=lambda item: item[1], reverse=True)
    top = ranked[: min(top_n, len(ranked))]
    return top[rng.randbelow(len(top))][0]
