"""
Question sources.

Fact generators are black boxes keyed by skill id: given a difficulty
level (1-5) they return a concrete question. GeneratorRegistry is the
explicit lookup object built at startup and handed to the practice service.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from numbersense.core.skills import UnknownSkillError


@dataclass(frozen=True)
class Question:
    """A generated practice question."""

    question_text: str
    answer: Any
    hint: str = ""
    meta: dict[str, Any] = field(default_factory=dict)

    def is_correct(self, user_answer: Any) -> bool:
        """Compare answers as trimmed strings so 12 and '12' match."""
        return str(user_answer).strip() == str(self.answer).strip()


class QuestionSource(Protocol):
    """Produces a question for a skill at a difficulty level."""

    def generate(self, skill_id: str, level: int) -> Question:
        ...


Generator = Callable[[int], Question]


class GeneratorRegistry:
    """Mapping from skill id to generator function."""

    def __init__(self, generators: dict[str, Generator] | None = None):
        self._generators: dict[str, Generator] = dict(generators or {})

    def register(self, skill_id: str, generator: Generator) -> None:
        self._generators[skill_id] = generator

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._generators

    def generate(self, skill_id: str, level: int) -> Question:
        try:
            generator = self._generators[skill_id]
        except KeyError:
            raise UnknownSkillError(skill_id) from None
        return generator(level)
