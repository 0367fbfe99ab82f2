"""
Practice Service.

Session-runner facade used by the UI and CLI. It wires the progress store,
question source and the adaptive components together:

    select/plan -> generate question -> learner answers ->
    assess mastery + SM-2 update -> flag/unflag -> persist
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from config import Settings
from numbersense.core.clock import Clock, SystemClock
from numbersense.core.mastery import AssessmentOutcome, MasteryTracker
from numbersense.core.randomness import RandomSource, SystemRandomSource
from numbersense.core.records import FlaggedQuestion, MasteryRecord, RepetitionRecord
from numbersense.core.skills import SkillCatalog, SkillDescriptor
from numbersense.storage.progress_store import ProgressStore
from numbersense.study.intervention import InterventionTracker
from numbersense.study.questions import Question, QuestionSource
from numbersense.study.session_planner import SessionPlan, SessionPlanner
from numbersense.study.skill_selector import SkillSelector
from numbersense.study.spaced_repetition import SpacedRepetitionScheduler


@dataclass(frozen=True)
class AnswerFeedback:
    """Everything the UI needs after recording an answer."""

    outcome: AssessmentOutcome
    mastery: MasteryRecord
    repetition: RepetitionRecord | None = None
    quality: int | None = None
    flagged: bool = False
    intervene: bool = False


class PracticeService:
    """
    Orchestrates practice for one player at a time.

    Components are built from the injected clock and random source so a
    whole session can be replayed deterministically.
    """

    def __init__(
        self,
        store: ProgressStore,
        settings: Settings,
        catalog: SkillCatalog | None = None,
        questions: QuestionSource | None = None,
        clock: Clock | None = None,
        rng: RandomSource | None = None,
    ):
        self.store = store
        self.settings = settings
        self.catalog = catalog or SkillCatalog.default()
        self.questions = questions
        self.clock = clock or SystemClock()
        self.rng = rng or SystemRandomSource()

        self.tracker = MasteryTracker(clock=self.clock)
        self.scheduler = SpacedRepetitionScheduler(clock=self.clock, rng=self.rng)
        self.selector = SkillSelector(
            store, settings, scheduler=self.scheduler, clock=self.clock, rng=self.rng
        )
        self.planner = SessionPlanner(store, self.selector, settings)
        self.intervention = InterventionTracker()

    # =========================================================================
    # Selection & planning
    # =========================================================================

    def mastery_record(self, player: str, skill_id: str) -> MasteryRecord:
        """Stored record, or the lazy default for an untouched skill."""
        return self.store.get_mastery_record(player, skill_id) or MasteryRecord.initial(skill_id)

    def select_next(self, player: str) -> SkillDescriptor:
        return self.selector.select_next(player, self.catalog.skills)

    def start_session(self, player: str, skill_id: str | None = None) -> SessionPlan:
        """Plan a new session and reset per-session intervention counters."""
        explicit = self.catalog.get(skill_id) if skill_id else None
        self.intervention.reset()
        return self.planner.plan(player, self.catalog.skills, explicit_skill=explicit)

    def should_show_teaching(self, player: str, skill_id: str) -> bool:
        return self.tracker.should_show_teaching(self.store.get_mastery_record(player, skill_id))

    def progress(self, player: str) -> list[MasteryRecord]:
        """Mastery records for every catalog skill, in catalog order."""
        return [self.mastery_record(player, skill.id) for skill in self.catalog]

    # =========================================================================
    # Questions
    # =========================================================================

    def next_question(self, player: str, plan: SessionPlan, index: int) -> Question:
        """
        Produce the question for slot `index` of a plan.

        Flagged-retry slots re-serve the missed question captured when the
        plan was built, so answering one retry never shifts the next.

        Raises:
            RuntimeError: if a fresh question is needed and no question source is configured
        """
        slot = plan.slots[index]

        if slot.is_flagged_retry:
            ordinal = sum(1 for s in plan.slots[:index] if s.is_flagged_retry)
            if ordinal < len(plan.flagged_questions):
                missed = plan.flagged_questions[ordinal]
                return Question(
                    question_text=missed.question_text,
                    answer=missed.correct_answer,
                    hint="You missed this one last time - try again",
                    meta={"flagged_retry": True, "strategy": slot.skill_id},
                )

        if self.questions is None:
            raise RuntimeError("PracticeService has no question source configured")

        level = self.mastery_record(player, slot.skill_id).level
        return self.questions.generate(slot.skill_id, level)

    # =========================================================================
    # Answers
    # =========================================================================

    def record_answer(
        self,
        player: str,
        skill_id: str,
        correct: bool,
        time_ms: int,
        question: Question | None = None,
        user_answer: object = None,
    ) -> AnswerFeedback:
        """
        Assess an answer, update schedules and persist.

        Wrong answers flag the question for a later retry; a right answer to
        a flagged question clears the flag.
        """
        now = self.clock.now()

        record, outcome = self.tracker.assess(
            self.mastery_record(player, skill_id), correct, time_ms, now=now
        )
        self.store.put_mastery_record(player, skill_id, record)

        repetition = quality = None
        if self.settings.is_spaced_repetition_enabled():
            quality = self.scheduler.quality_of(correct, time_ms)
            current = self.store.get_repetition_record(player, skill_id) or RepetitionRecord.initial(
                skill_id
            )
            repetition = self.scheduler.update(current, quality, now=now)
            self.store.put_repetition_record(player, skill_id, repetition)

        flagged = False
        if question is not None:
            if not correct:
                self.store.flag_question(
                    player,
                    FlaggedQuestion(
                        skill_id=skill_id,
                        question_text=question.question_text,
                        correct_answer=question.answer,
                        user_answer=user_answer,
                        flagged_at=now,
                    ),
                )
                flagged = True
            elif self.store.unflag_question(player, skill_id, question.question_text):
                logger.debug(f"Cleared flag on '{question.question_text}' for {player}")

        intervene = self.intervention.record_answer(skill_id, correct)
        if intervene:
            logger.info(f"Intervention triggered for {player} on {skill_id}")

        return AnswerFeedback(
            outcome=outcome,
            mastery=record,
            repetition=repetition,
            quality=quality,
            flagged=flagged,
            intervene=intervene,
        )
