"""
Study Module for adaptive arithmetic practice.

Provides:
- Spaced repetition scheduling (SM-2)
- Skill selection (urgency or mastery/recency weighting)
- Session planning (warm-up, flagged retries, focus)
- Intervention triggers and the practice-session facade
"""

from numbersense.study.intervention import InterventionTracker
from numbersense.study.practice_service import AnswerFeedback, PracticeService
from numbersense.study.questions import GeneratorRegistry, Question, QuestionSource
from numbersense.study.session_planner import QuestionSlot, SessionPlan, SessionPlanner
from numbersense.study.skill_selector import NoEligibleSkillError, SkillSelector
from numbersense.study.spaced_repetition import SpacedRepetitionScheduler

__all__ = [
    "SpacedRepetitionScheduler",
    "SkillSelector",
    "NoEligibleSkillError",
    "SessionPlanner",
    "SessionPlan",
    "QuestionSlot",
    "InterventionTracker",
    "PracticeService",
    "AnswerFeedback",
    "Question",
    "QuestionSource",
    "GeneratorRegistry",
]
