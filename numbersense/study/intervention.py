"""
Strategy intervention trigger.

Counts consecutive wrong answers per skill within a session. Two in a row
means the learner should see the strategy explanation again.
"""

from __future__ import annotations


class InterventionTracker:
    """Per-session consecutive-wrong counter."""

    TRIGGER_THRESHOLD = 2

    def __init__(self, threshold: int = TRIGGER_THRESHOLD):
        self.threshold = threshold
        self.consecutive_wrong: dict[str, int] = {}

    def reset(self) -> None:
        self.consecutive_wrong = {}

    def record_answer(self, skill_id: str, correct: bool) -> bool:
        """Record an answer; returns True if an intervention should trigger."""
        if correct:
            self.consecutive_wrong[skill_id] = 0
            return False
        self.consecutive_wrong[skill_id] = self.consecutive_wrong.get(skill_id, 0) + 1
        return self.consecutive_wrong[skill_id] >= self.threshold
