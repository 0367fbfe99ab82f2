"""
Skill descriptors and the skill catalog.

A skill (strategy) may name a prerequisite skill; it becomes selectable once
the prerequisite reaches the unlock mastery threshold.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from loguru import logger


UNLOCK_MASTERY = 50


class UnknownSkillError(KeyError):
    """Raised when a skill id is not in the catalog."""


@dataclass(frozen=True)
class SkillDescriptor:
    """A practicable arithmetic strategy."""

    id: str
    name: str = ""
    unlock_requires: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.id.replace("_", " ").title()


DEFAULT_SKILLS: tuple[SkillDescriptor, ...] = (
    SkillDescriptor("one_more_one_less", "One More, One Less"),
    SkillDescriptor("know_about_zero", "Know About Zero"),
    SkillDescriptor("two_more_two_less", "Two More, Two Less", unlock_requires="one_more_one_less"),
    SkillDescriptor("five_and_a_bit", "Five and a Bit"),
    SkillDescriptor("number_neighbours", "Number Neighbours", unlock_requires="two_more_two_less"),
    SkillDescriptor("doubles", "Doubles & Near Doubles"),
    SkillDescriptor("number_10_facts", "Number 10 Facts", unlock_requires="five_and_a_bit"),
    SkillDescriptor("seven_tree_nine_square", "7 Tree & 9 Square", unlock_requires="doubles"),
    SkillDescriptor("swap_it", "Swap It"),
    SkillDescriptor("ten_and_a_bit", "Ten and a Bit", unlock_requires="number_10_facts"),
    SkillDescriptor("make_ten_then", "Make Ten, Then...", unlock_requires="number_10_facts"),
    SkillDescriptor("adjust_it", "Adjust It", unlock_requires="ten_and_a_bit"),
)


class SkillCatalog:
    """Ordered, id-indexed collection of skills."""

    def __init__(self, skills: Iterable[SkillDescriptor]):
        self._skills: dict[str, SkillDescriptor] = {}
        for skill in skills:
            if skill.id in self._skills:
                raise ValueError(f"Duplicate skill id: {skill.id}")
            self._skills[skill.id] = skill

        for skill in self._skills.values():
            if skill.unlock_requires and skill.unlock_requires not in self._skills:
                raise ValueError(
                    f"Skill {skill.id} requires unknown skill {skill.unlock_requires}"
                )

    @classmethod
    def default(cls) -> SkillCatalog:
        return cls(DEFAULT_SKILLS)

    @classmethod
    def from_file(cls, path: Path) -> SkillCatalog:
        """
        Load a catalog from JSON.

        Expected shape: [{"id": "...", "name": "...", "unlock_requires": "..."}, ...]
        """
        with open(path, "r", encoding="utf-8") as f:
            entries = json.load(f)
        catalog = cls(
            SkillDescriptor(
                id=entry["id"],
                name=entry.get("name", ""),
                unlock_requires=entry.get("unlock_requires"),
            )
            for entry in entries
        )
        logger.debug(f"Loaded {len(catalog)} skills from {path}")
        return catalog

    def get(self, skill_id: str) -> SkillDescriptor:
        try:
            return self._skills[skill_id]
        except KeyError:
            raise UnknownSkillError(skill_id) from None

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._skills

    def __iter__(self) -> Iterator[SkillDescriptor]:
        return iter(self._skills.values())

    def __len__(self) -> int:
        return len(self._skills)

    @property
    def skills(self) -> list[SkillDescriptor]:
        return list(self._skills.values())
