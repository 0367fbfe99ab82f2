"""
Core Mastery Module.

Owns the state machine for one skill's mastery score (0-100) and difficulty
level (1-5). Each answer moves mastery by an amount that depends on
correctness, speed and streak; crossing the promote/demote thresholds moves
the level and resets mastery to a mid value for the new level.

Design:
- AssessmentOutcome: what the UI needs after an answer
- MasteryTracker: pure assess() over an always-present record
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from loguru import logger

from numbersense.core.clock import Clock, SystemClock
from numbersense.core.records import (
    MAX_LEVEL,
    MAX_MASTERY,
    MIN_LEVEL,
    MIN_MASTERY,
    AssessmentNote,
    MasteryRecord,
    round_half_up,
)


@dataclass(frozen=True)
class AssessmentOutcome:
    """Result of assessing one answer."""

    correct: bool
    new_mastery: int
    new_level: int
    assessment_note: AssessmentNote
    should_show_hint: bool
    should_show_visual: bool
    leveled_up: bool = False
    leveled_down: bool = False


class MasteryTracker:
    """
    Mastery and level transitions driven by answer correctness and latency.

    Gains:
        <= FAST_TIME_MS: 8, <= OK_TIME_MS: 4, slower: 2, +2 on a streak of 5+
    Losses:
        8 per wrong answer

    Levels:
        promote at 80 (mastery reset to 60), demote at 30 (reset to 50)
    """

    # Answer-time bands (ms)
    FAST_TIME_MS = 3000
    OK_TIME_MS = 8000
    SLOW_TIME_MS = 15000

    # Mastery deltas
    FAST_GAIN = 8
    OK_GAIN = 4
    SLOW_GAIN = 2
    STREAK_BONUS = 2
    STREAK_BONUS_AT = 5
    WRONG_PENALTY = 8

    # Level transitions
    MASTERY_PROMOTE = 80
    MASTERY_DEMOTE = 30
    PROMOTE_RESET = 60
    DEMOTE_RESET = 50

    # Running-mean bootstrap when no time has been recorded yet
    DEFAULT_AVG_TIME_MS = 5000

    VISUAL_BELOW_MASTERY = 40
    TEACHING_BELOW_MASTERY = 20

    def __init__(self, clock: Clock | None = None):
        self.clock = clock or SystemClock()

    def gain_for(self, time_ms: int, streak: int) -> int:
        """Mastery gained by a correct answer, given the streak after it."""
        if time_ms <= self.FAST_TIME_MS:
            delta = self.FAST_GAIN
        elif time_ms <= self.OK_TIME_MS:
            delta = self.OK_GAIN
        else:
            delta = self.SLOW_GAIN

        if streak >= self.STREAK_BONUS_AT:
            delta += self.STREAK_BONUS
        return delta

    def assess(
        self,
        record: MasteryRecord,
        correct: bool,
        time_ms: int,
        now: datetime | None = None,
    ) -> tuple[MasteryRecord, AssessmentOutcome]:
        """
        Apply one answer to a mastery record.

        Args:
            record: Current record (use MasteryRecord.initial for new skills)
            correct: Whether the answer was right
            time_ms: Answer latency in milliseconds (caller guarantees >= 0)
            now: Time snapshot (defaults to the tracker's clock)

        Returns:
            Tuple of (updated record, outcome)
        """
        now = now or self.clock.now()

        total_attempts = record.total_attempts + 1
        total_correct = record.total_correct
        best_streak = record.best_streak
        level = record.level
        leveled_up = leveled_down = False

        if correct:
            total_correct += 1
            streak = record.streak + 1
            best_streak = max(best_streak, streak)
            mastery = min(MAX_MASTERY, record.mastery + self.gain_for(time_ms, streak))

            if mastery >= self.MASTERY_PROMOTE and level < MAX_LEVEL:
                level += 1
                mastery = self.PROMOTE_RESET
                leveled_up = True
        else:
            streak = 0
            mastery = max(MIN_MASTERY, record.mastery - self.WRONG_PENALTY)

            if mastery <= self.MASTERY_DEMOTE and level > MIN_LEVEL:
                level -= 1
                mastery = self.DEMOTE_RESET
                leveled_down = True

        prev_avg = record.avg_time_ms if record.avg_time_ms is not None else self.DEFAULT_AVG_TIME_MS
        prev_count = record.total_attempts
        avg_time_ms = round_half_up((prev_avg * prev_count + time_ms) / (prev_count + 1))

        note = AssessmentNote.from_performance(total_correct / total_attempts, avg_time_ms)

        updated = replace(
            record,
            mastery=mastery,
            level=level,
            total_attempts=total_attempts,
            total_correct=total_correct,
            streak=streak,
            best_streak=best_streak,
            avg_time_ms=avg_time_ms,
            last_practiced_at=now,
            assessment_note=note,
        )

        if leveled_up:
            logger.info(f"{record.skill_id}: level up {record.level} -> {level}")
        elif leveled_down:
            logger.info(f"{record.skill_id}: level down {record.level} -> {level}")

        outcome = AssessmentOutcome(
            correct=correct,
            new_mastery=mastery,
            new_level=level,
            assessment_note=note,
            should_show_hint=not correct or time_ms > self.SLOW_TIME_MS,
            should_show_visual=not correct or mastery < self.VISUAL_BELOW_MASTERY,
            leveled_up=leveled_up,
            leveled_down=leveled_down,
        )
        return updated, outcome

    def should_show_teaching(self, record: MasteryRecord | None) -> bool:
        """Show the strategy explanation before practising a new or weak skill."""
        if record is None:
            return True
        return record.total_attempts == 0 or record.mastery < self.TEACHING_BELOW_MASTERY
