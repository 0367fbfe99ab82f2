"""
Core Module - Shared domain models and capabilities.

Components:
- clock: injected time source (SystemClock, FixedClock)
- randomness: injected random source and the top-N pick policy
- records: MasteryRecord, RepetitionRecord, FlaggedQuestion
- skills: SkillDescriptor and SkillCatalog
- mastery: MasteryTracker state machine

Domain modules (study/, methods/, storage/) import shared concepts from here.
"""

from numbersense.core.clock import Clock, FixedClock, SystemClock
from numbersense.core.mastery import AssessmentOutcome, MasteryTracker
from numbersense.core.randomness import RandomSource, SystemRandomSource, pick_from_top
from numbersense.core.records import (
    AssessmentNote,
    FlaggedQuestion,
    MasteryRecord,
    RepetitionRecord,
)
from numbersense.core.skills import SkillCatalog, SkillDescriptor, UnknownSkillError

__all__ = [
    # Capabilities
    "Clock",
    "SystemClock",
    "FixedClock",
    "RandomSource",
    "SystemRandomSource",
    "pick_from_top",
    # Records
    "AssessmentNote",
    "MasteryRecord",
    "RepetitionRecord",
    "FlaggedQuestion",
    # Skills
    "SkillDescriptor",
    "SkillCatalog",
    "UnknownSkillError",
    # Mastery
    "MasteryTracker",
    "AssessmentOutcome",
]
