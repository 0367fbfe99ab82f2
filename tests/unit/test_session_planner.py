"""
Unit tests for SessionPlanner slot layout.
"""

import pytest

from config import Settings
from numbersense.core.clock import FixedClock
from numbersense.core.records import FlaggedQuestion
from numbersense.core.skills import SkillDescriptor
from numbersense.study.session_planner import SessionPlanner
from numbersense.study.skill_selector import NoEligibleSkillError, SkillSelector

PLAYER = "sam"


class CountingClock(FixedClock):
    """FixedClock that counts how often it is read."""

    def __init__(self, instant):
        super().__init__(instant)
        self.reads = 0

    def now(self):
        self.reads += 1
        return super().now()


def flag(store, skill_id: str, count: int) -> None:
    for i in range(count):
        store.flag_question(
            PLAYER,
            FlaggedQuestion(skill_id=skill_id, question_text=f"{i} + {i}", correct_answer=2 * i),
        )


@pytest.fixture
def selector(store, settings, clock, rng):
    return SkillSelector(store, settings, clock=clock, rng=rng)


@pytest.fixture
def planner(store, selector, settings):
    return SessionPlanner(store, selector, settings)


class TestExplicitSkill:
    def test_three_flagged_gives_two_retries_then_focus(self, planner, store, small_catalog):
        flag(store, "swap_it", 3)

        plan = planner.plan(PLAYER, small_catalog.skills, explicit_skill=small_catalog.get("swap_it"))

        assert len(plan) == 10
        assert plan.skill_ids == ["swap_it"] * 10
        assert [slot.is_flagged_retry for slot in plan.slots] == [True, True] + [False] * 8
        assert plan.flagged_retry_count == 2

    def test_retries_limited_by_flagged_pool(self, planner, store, small_catalog):
        flag(store, "swap_it", 1)

        plan = planner.plan(PLAYER, small_catalog.skills, explicit_skill=small_catalog.get("swap_it"))

        assert plan.flagged_retry_count == 1
        assert plan.slots[0].is_flagged_retry is True

    def test_flags_for_other_skills_are_ignored(self, planner, store, small_catalog):
        flag(store, "doubles", 3)

        plan = planner.plan(PLAYER, small_catalog.skills, explicit_skill=small_catalog.get("swap_it"))

        assert plan.flagged_retry_count == 0

    def test_explicit_skill_skips_selector(self, planner, small_catalog, rng):
        planner.plan(PLAYER, small_catalog.skills, explicit_skill=small_catalog.get("swap_it"))
        assert rng.calls == []


class TestSelectedSkill:
    def test_warmup_slots_come_from_selector(self, planner, store, small_catalog, rng):
        # Draw 0 always takes the first of the tied never-practised skills
        flag(store, "doubles", 2)

        plan = planner.plan(PLAYER, small_catalog.skills)

        assert plan.primary_skill_id == "doubles"
        assert len(rng.calls) == 3  # focus pick + two warm-up picks
        assert [slot.is_flagged_retry for slot in plan.slots[:4]] == [False, False, True, True]
        assert plan.flagged_retry_count == 2

    def test_warmup_can_differ_from_focus(self, store, settings, small_catalog, clock, make_rng):
        selector = SkillSelector(store, settings, clock=clock, rng=make_rng([0, 1, 1]))
        plan = SessionPlanner(store, selector, settings).plan(PLAYER, small_catalog.skills)

        assert plan.primary_skill_id == "doubles"
        assert plan.skill_ids[:2] == ["swap_it", "swap_it"]
        assert plan.skill_ids[2:] == ["doubles"] * 8
        assert plan.get_summary() == {
            "primary_skill_id": "doubles",
            "total_slots": 10,
            "focus_slots": 8,
            "flagged_retries": 0,
            "warmup_skills": ["swap_it"],
        }

    def test_clock_read_once_per_plan(self, store, settings, small_catalog, clock, rng):
        counting = CountingClock(clock.now())
        selector = SkillSelector(store, settings, clock=counting, rng=rng)

        SessionPlanner(store, selector, settings).plan(PLAYER, small_catalog.skills)

        assert len(rng.calls) == 3
        assert counting.reads == 1

    def test_flagged_questions_captured_on_plan(self, planner, store, small_catalog):
        flag(store, "swap_it", 3)

        plan = planner.plan(PLAYER, small_catalog.skills, explicit_skill=small_catalog.get("swap_it"))

        assert [q.question_text for q in plan.flagged_questions] == ["0 + 0", "1 + 1"]

    def test_nothing_unlocked_raises(self, planner):
        with pytest.raises(NoEligibleSkillError):
            planner.plan(PLAYER, [SkillDescriptor("gated", unlock_requires="missing")])


class TestConfiguredShape:
    def test_session_length_and_retry_cap_from_settings(self, store, clock, rng, tmp_path, small_catalog):
        settings = Settings(
            spaced_repetition_enabled=False,
            session_length=5,
            max_flagged_retries=3,
            data_dir=tmp_path,
        )
        selector = SkillSelector(store, settings, clock=clock, rng=rng)
        flag(store, "swap_it", 4)

        plan = SessionPlanner(store, selector, settings).plan(
            PLAYER, small_catalog.skills, explicit_skill=small_catalog.get("swap_it")
        )

        assert len(plan) == 5
        assert plan.flagged_retry_count == 3
