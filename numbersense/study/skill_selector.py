"""
Skill Selection for Adaptive Practice.

Chooses the next skill to practise from the unlocked skills:
- Spaced repetition on: pick among the most urgent reviews
- Otherwise: weight by mastery deficit plus staleness

Both paths pick uniformly from the top 3 so the learner does not always
see the single worst skill.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from loguru import logger

from config import Settings
from numbersense.core.clock import Clock, SystemClock, calculate_days_since
from numbersense.core.randomness import RandomSource, SystemRandomSource, pick_from_top
from numbersense.core.records import MasteryRecord
from numbersense.core.skills import UNLOCK_MASTERY, SkillDescriptor
from numbersense.storage.progress_store import ProgressStore
from numbersense.study.spaced_repetition import SpacedRepetitionScheduler


class NoEligibleSkillError(Exception):
    """Raised when no skill is unlocked for the player."""


class SkillSelector:
    """
    Select the next skill for a player.

    Weighting (spaced repetition off):
        mastery_weight = max(0, 100 - mastery)
        recency_weight = min(days_since_practice * 5, 50)   (30 days if never)
        weight = mastery_weight + recency_weight
    """

    RECENCY_PER_DAY = 5.0
    MAX_RECENCY_WEIGHT = 50.0

    def __init__(
        self,
        store: ProgressStore,
        settings: Settings,
        scheduler: SpacedRepetitionScheduler | None = None,
        clock: Clock | None = None,
        rng: RandomSource | None = None,
    ):
        self.store = store
        self.settings = settings
        self.clock = clock or SystemClock()
        self.rng = rng or SystemRandomSource()
        self.scheduler = scheduler or SpacedRepetitionScheduler(clock=self.clock, rng=self.rng)

    def _mastery(self, player: str, skill_id: str) -> MasteryRecord:
        return self.store.get_mastery_record(player, skill_id) or MasteryRecord.initial(skill_id)

    def is_unlocked(
        self,
        player: str,
        skill: SkillDescriptor,
        overrides: set[str] | None = None,
    ) -> bool:
        """A skill is open with no prerequisite, a prerequisite at 50+, or a manual unlock."""
        if not skill.unlock_requires:
            return True
        if overrides is None:
            overrides = self.store.get_unlock_overrides(player)
        if skill.id in overrides:
            return True
        return self._mastery(player, skill.unlock_requires).mastery >= UNLOCK_MASTERY

    def unlocked_skills(self, player: str, skills: Iterable[SkillDescriptor]) -> list[SkillDescriptor]:
        """Filter skills to those the player may practise, preserving order."""
        overrides = self.store.get_unlock_overrides(player)
        return [s for s in skills if self.is_unlocked(player, s, overrides)]

    def weight(self, record: MasteryRecord, now: datetime) -> float:
        """Deficit-plus-staleness weight for one skill."""
        mastery_weight = max(0, 100 - record.mastery)
        days_since = calculate_days_since(record.last_practiced_at, now)
        recency_weight = min(days_since * self.RECENCY_PER_DAY, self.MAX_RECENCY_WEIGHT)
        return mastery_weight + recency_weight

    def rank(
        self,
        player: str,
        skills: Sequence[SkillDescriptor],
        now: datetime | None = None,
    ) -> list[tuple[SkillDescriptor, float]]:
        """
        Score every unlocked skill with the active policy.

        Returns:
            (skill, score) pairs sorted by score descending; score is
            urgency when spaced repetition is enabled, weight otherwise
        """
        now = now or self.clock.now()
        unlocked = self.unlocked_skills(player, skills)

        if self.settings.is_spaced_repetition_enabled():
            scored = [
                (s, self.scheduler.urgency(self.store.get_repetition_record(player, s.id), now))
                for s in unlocked
            ]
        else:
            scored = [(s, self.weight(self._mastery(player, s.id), now)) for s in unlocked]

        return sorted(scored, key=lambda item: item[1], reverse=True)

    def select_next(
        self,
        player: str,
        skills: Sequence[SkillDescriptor],
        now: datetime | None = None,
    ) -> SkillDescriptor:
        """
        Choose the skill to practise next.

        Callers making several picks for one operation pass the same `now`.

        Raises:
            NoEligibleSkillError: if none of the skills is unlocked
        """
        now = now or self.clock.now()
        scored = self.rank(player, skills, now)

        if not scored:
            raise NoEligibleSkillError(
                f"No unlocked skill for player {player} among {len(skills)} skills"
            )

        if self.settings.is_spaced_repetition_enabled():
            choice = self.scheduler.select_among(scored)
        else:
            choice = pick_from_top(scored, self.rng)

        logger.debug(f"Selected {choice.id} for {player} from top of {[s.id for s, _ in scored[:3]]}")
        return choice
