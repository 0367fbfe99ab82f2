"""
SM-2 Spaced Repetition Scheduler.

Schedules skill reviews with the SuperMemo 2 algorithm. Answer quality is
derived from correctness and speed; review urgency ranks skills for
selection when spaced repetition is enabled.

Quality scale used here (1-5, 0 is never produced):
    1 - Incorrect
    2 - Correct but very slow (> 15s)
    3 - Correct, slow (<= 15s)
    4 - Correct, hesitant (<= 8s)
    5 - Correct and fast (<= 3s)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import datetime, timedelta

from loguru import logger

from numbersense.core.clock import Clock, SystemClock, days_between
from numbersense.core.randomness import RandomSource, SystemRandomSource, pick_from_top
from numbersense.core.records import MIN_EASE_FACTOR, RepetitionRecord, round_half_up
from numbersense.core.skills import SkillDescriptor


PASS_QUALITY = 3

MAX_URGENCY = 100.0
OVERDUE_BASE = 50.0
OVERDUE_PER_DAY = 10.0
UPCOMING_BASE = 20.0
UPCOMING_DECAY_PER_DAY = 5.0


class SpacedRepetitionScheduler:
    """
    SM-2 (SuperMemo 2) scheduler for skills.

    Passing reviews grow the interval 1 -> 6 -> interval * ease factor;
    a failed review resets to a 1-day interval. The ease factor moves with
    quality and never drops below 1.3.
    """

    FAST_TIME_MS = 3000
    OK_TIME_MS = 8000
    SLOW_TIME_MS = 15000

    def __init__(self, clock: Clock | None = None, rng: RandomSource | None = None):
        self.clock = clock or SystemClock()
        self.rng = rng or SystemRandomSource()

    @classmethod
    def quality_of(cls, correct: bool, time_ms: int) -> int:
        """Map an answer to an SM-2 quality score (1-5)."""
        if not correct:
            return 1
        if time_ms <= cls.FAST_TIME_MS:
            return 5
        if time_ms <= cls.OK_TIME_MS:
            return 4
        if time_ms <= cls.SLOW_TIME_MS:
            return 3
        return 2

    @staticmethod
    def next_ease_factor(ease_factor: float, quality: int) -> float:
        """Standard SM-2 ease adjustment, floored at MIN_EASE_FACTOR."""
        miss = 5 - quality
        return max(MIN_EASE_FACTOR, ease_factor + (0.1 - miss * (0.08 + miss * 0.02)))

    def update(
        self,
        record: RepetitionRecord,
        quality: int,
        now: datetime | None = None,
    ) -> RepetitionRecord:
        """
        Calculate the next schedule from a review quality.

        Args:
            record: Current repetition state
            quality: Review quality (1-5, see module docstring)
            now: Time snapshot (defaults to the scheduler's clock)

        Returns:
            Updated RepetitionRecord
        """
        now = now or self.clock.now()

        if quality >= PASS_QUALITY:
            if record.repetitions == 0:
                interval = 1
            elif record.repetitions == 1:
                interval = 6
            else:
                interval = round_half_up(record.interval_days * record.ease_factor)
            repetitions = record.repetitions + 1
        else:
            # Failed recall - reset
            repetitions = 0
            interval = 1

        updated = replace(
            record,
            ease_factor=self.next_ease_factor(record.ease_factor, quality),
            interval_days=interval,
            repetitions=repetitions,
            last_reviewed_at=now,
            next_due_at=now + timedelta(days=interval),
        )
        logger.debug(
            f"{record.skill_id}: q={quality} interval {record.interval_days}->{interval}d "
            f"ease {record.ease_factor:.2f}->{updated.ease_factor:.2f}"
        )
        return updated

    def urgency(self, record: RepetitionRecord | None, now: datetime | None = None) -> float:
        """
        Review urgency (0-100, higher = more overdue).

        - never reviewed: 100
        - overdue: 50 + 10 per day overdue, capped at 100
        - not yet due: 20 decaying by 5 per day until due, floored at 0
        """
        if record is None or record.next_due_at is None:
            return MAX_URGENCY

        now = now or self.clock.now()
        days_past = days_between(record.next_due_at, now)

        if days_past > 0:
            return OVERDUE_BASE + min(days_past * OVERDUE_PER_DAY, MAX_URGENCY - OVERDUE_BASE)
        return max(0.0, UPCOMING_BASE - abs(days_past) * UPCOMING_DECAY_PER_DAY)

    def select_among(self, scored: Sequence[tuple[SkillDescriptor, float]]) -> SkillDescriptor:
        """Pick uniformly from the three most urgent skills."""
        return pick_from_top(scored, self.rng)

    def due_skills(
        self,
        records: Iterable[RepetitionRecord],
        now: datetime | None = None,
    ) -> list[str]:
        """Skill ids whose review date has passed, most overdue first."""
        now = now or self.clock.now()
        due = [r for r in records if r.next_due_at is not None and r.next_due_at <= now]
        due.sort(key=lambda r: r.next_due_at)
        return [r.skill_id for r in due]
