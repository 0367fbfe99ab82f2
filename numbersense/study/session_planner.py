"""
Session Planner.

Builds the ordered question slots for one practice session:
- Warm-up: the first slots are fresh selector picks (only when no skill was requested)
- Flagged retries: previously missed questions for the focus skill
- Focus: everything else targets the main skill

With the default shape (10 slots, 2 warm-up, up to 2 retries) at least six
questions always target the focus skill.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from loguru import logger

from config import Settings
from numbersense.core.records import FlaggedQuestion
from numbersense.core.skills import SkillDescriptor
from numbersense.storage.progress_store import ProgressStore
from numbersense.study.skill_selector import SkillSelector


@dataclass(frozen=True)
class QuestionSlot:
    """One question position in a session."""

    skill_id: str
    is_flagged_retry: bool = False


@dataclass
class SessionPlan:
    """Ordered slots for a practice session."""

    primary_skill_id: str
    slots: list[QuestionSlot] = field(default_factory=list)
    # Missed questions captured at planning time, one per retry slot
    flagged_questions: list[FlaggedQuestion] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.slots)

    @property
    def skill_ids(self) -> list[str]:
        return [slot.skill_id for slot in self.slots]

    @property
    def flagged_retry_count(self) -> int:
        return sum(1 for slot in self.slots if slot.is_flagged_retry)

    @property
    def focus_count(self) -> int:
        """Slots targeting the primary skill (retries included)."""
        return sum(1 for slot in self.slots if slot.skill_id == self.primary_skill_id)

    def get_summary(self) -> dict:
        """Get summary of the session plan."""
        return {
            "primary_skill_id": self.primary_skill_id,
            "total_slots": len(self.slots),
            "focus_slots": self.focus_count,
            "flagged_retries": self.flagged_retry_count,
            "warmup_skills": sorted(set(self.skill_ids) - {self.primary_skill_id}),
        }


class SessionPlanner:
    """Assemble session plans around a focus skill."""

    def __init__(self, store: ProgressStore, selector: SkillSelector, settings: Settings):
        self.store = store
        self.selector = selector
        self.settings = settings

    def plan(
        self,
        player: str,
        skills: Sequence[SkillDescriptor],
        explicit_skill: SkillDescriptor | None = None,
        now: datetime | None = None,
    ) -> SessionPlan:
        """
        Build a session plan.

        Args:
            player: Player id
            skills: All skills (unlock gating is applied by the selector)
            explicit_skill: Skill the learner asked for; disables warm-up
            now: Instant every selector pick is ranked at (read once when omitted)

        Returns:
            SessionPlan with settings.session_length slots

        Raises:
            NoEligibleSkillError: if a selector pick is needed and nothing is unlocked
        """
        now = now or self.selector.clock.now()
        main = explicit_skill or self.selector.select_next(player, skills, now=now)
        flagged = self.store.get_flagged_questions(player, main.id)
        max_retries = min(self.settings.max_flagged_retries, len(flagged))

        plan = SessionPlan(primary_skill_id=main.id, flagged_questions=flagged[:max_retries])
        retries = 0

        for i in range(self.settings.session_length):
            if i < self.settings.warmup_slots and explicit_skill is None:
                warmup = self.selector.select_next(player, skills, now=now)
                plan.slots.append(QuestionSlot(skill_id=warmup.id))
            elif retries < max_retries:
                plan.slots.append(QuestionSlot(skill_id=main.id, is_flagged_retry=True))
                retries += 1
            else:
                plan.slots.append(QuestionSlot(skill_id=main.id))

        logger.info(
            f"Planned session for {player}: focus {main.id}, "
            f"{plan.focus_count}/{len(plan)} focus slots, {retries} retries"
        )
        return plan
