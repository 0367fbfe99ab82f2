"""
Progress records owned by a single player.

Records are immutable values: the tracker and scheduler return updated
copies, and only the progress store persists them.

Design:
- AssessmentNote: Enum for the qualitative label derived after each answer
- MasteryRecord: mastery score and difficulty level for one skill
- RepetitionRecord: SM-2 scheduling state for one skill
- FlaggedQuestion: a missed question queued for a later retry
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from numbersense.core.clock import ensure_aware


MIN_MASTERY = 0
MAX_MASTERY = 100
MIN_LEVEL = 1
MAX_LEVEL = 5

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3, not 2)."""
    return int(math.floor(value + 0.5))


def _dump_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _load_datetime(value: str | None) -> datetime | None:
    return ensure_aware(datetime.fromisoformat(value)) if value else None


class AssessmentNote(str, Enum):
    """
    Qualitative assessment of a learner on one skill.

    Derived from overall accuracy and average answer time.
    """

    MASTERED = "mastered"
    BUILDING_FLUENCY = "building fluency"
    DEVELOPING = "developing, needs scaffolding"
    STRUGGLING = "struggling, needs visual aids"

    @classmethod
    def from_performance(cls, accuracy: float, avg_time_ms: int) -> AssessmentNote:
        """
        Pick the note for an accuracy (0-1) and average time.

        Precedence: mastered, building fluency, developing, struggling.
        """
        if accuracy >= 0.9 and avg_time_ms < 3000:
            return cls.MASTERED
        elif accuracy >= 0.75:
            return cls.BUILDING_FLUENCY
        elif accuracy >= 0.5:
            return cls.DEVELOPING
        else:
            return cls.STRUGGLING

    @property
    def color(self) -> str:
        """Rich color for CLI display."""
        return {
            AssessmentNote.MASTERED: "green",
            AssessmentNote.BUILDING_FLUENCY: "cyan",
            AssessmentNote.DEVELOPING: "yellow",
            AssessmentNote.STRUGGLING: "red",
        }[self]


@dataclass(frozen=True)
class MasteryRecord:
    """Mastery state for one player on one skill."""

    skill_id: str
    mastery: int = 0  # 0-100
    level: int = 1  # 1-5
    total_attempts: int = 0
    total_correct: int = 0
    streak: int = 0
    best_streak: int = 0
    avg_time_ms: int | None = None  # None until the first answer
    last_practiced_at: datetime | None = None
    assessment_note: AssessmentNote | None = None

    @classmethod
    def initial(cls, skill_id: str) -> MasteryRecord:
        """Lazy default for a skill the player has never touched."""
        return cls(skill_id=skill_id)

    @property
    def accuracy(self) -> float:
        """Fraction of attempts answered correctly (0 with no attempts)."""
        if self.total_attempts == 0:
            return 0.0
        return self.total_correct / self.total_attempts

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["last_practiced_at"] = _dump_datetime(self.last_practiced_at)
        data["assessment_note"] = self.assessment_note.value if self.assessment_note else None
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MasteryRecord:
        """Create from dictionary."""
        fields = dict(data)
        fields["last_practiced_at"] = _load_datetime(fields.get("last_practiced_at"))
        note = fields.get("assessment_note")
        fields["assessment_note"] = AssessmentNote(note) if note else None
        return cls(**fields)


@dataclass(frozen=True)
class RepetitionRecord:
    """SM-2 scheduling state for one player on one skill."""

    skill_id: str
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval_days: int = 0
    repetitions: int = 0
    last_reviewed_at: datetime | None = None
    next_due_at: datetime | None = None

    @classmethod
    def initial(cls, skill_id: str) -> RepetitionRecord:
        """Lazy default for a skill that was never reviewed."""
        return cls(skill_id=skill_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["last_reviewed_at"] = _dump_datetime(self.last_reviewed_at)
        data["next_due_at"] = _dump_datetime(self.next_due_at)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RepetitionRecord:
        """Create from dictionary."""
        fields = dict(data)
        fields["last_reviewed_at"] = _load_datetime(fields.get("last_reviewed_at"))
        fields["next_due_at"] = _load_datetime(fields.get("next_due_at"))
        return cls(**fields)


@dataclass(frozen=True)
class FlaggedQuestion:
    """A question the player got wrong, queued for a forced retry."""

    skill_id: str
    question_text: str
    correct_answer: Any
    user_answer: Any = None
    flagged_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["flagged_at"] = _dump_datetime(self.flagged_at)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FlaggedQuestion:
        fields = dict(data)
        fields["flagged_at"] = _load_datetime(fields.get("flagged_at"))
        return cls(**fields)
