"""
Method registry.

Methods are registered on an explicit registry instance rather than a
module-level table, so the scorer and the CLI share whatever set of methods
they are handed.

Example:
    registry = build_default_registry()
    method = registry.get("compensation")
    solution = method.solve(58, Operator.ADD, 39)
"""

from __future__ import annotations

from collections.abc import Iterator

from loguru import logger

from numbersense.methods.base import SolvingMethod, UnknownMethodError
from numbersense.methods.column import ColumnMethod
from numbersense.methods.compensation import Compensation
from numbersense.methods.counting_on import CountingOn
from numbersense.methods.partitioning import Partitioning
from numbersense.methods.same_difference import SameDifference
from numbersense.methods.sequencing import Sequencing


class MethodRegistry:
    """Ordered mapping of method id -> solving method."""

    def __init__(self, methods: list[SolvingMethod] | None = None):
        self._methods: dict[str, SolvingMethod] = {}
        for method in methods or []:
            self.register(method)

    def register(self, method: SolvingMethod) -> SolvingMethod:
        """
        Register a method. Registration order is the tie-break order
        when two methods score the same.

        Raises:
            ValueError: if the id is already registered
        """
        if method.method_id in self._methods:
            raise ValueError(f"Method already registered: {method.method_id}")
        self._methods[method.method_id] = method
        logger.debug(f"Registered method: {method.method_id} -> {type(method).__name__}")
        return method

    def get(self, method_id: str) -> SolvingMethod:
        if method_id not in self._methods:
            raise UnknownMethodError(method_id)
        return self._methods[method_id]

    def __contains__(self, method_id: object) -> bool:
        return method_id in self._methods

    def __iter__(self) -> Iterator[SolvingMethod]:
        return iter(self._methods.values())

    def __len__(self) -> int:
        return len(self._methods)

    @property
    def method_ids(self) -> list[str]:
        return list(self._methods)


def build_default_registry() -> MethodRegistry:
    """All built-in methods, in their canonical order."""
    return MethodRegistry(
        [
            Partitioning(),
            Sequencing(),
            Compensation(),
            SameDifference(),
            ColumnMethod(),
            CountingOn(),
        ]
    )
