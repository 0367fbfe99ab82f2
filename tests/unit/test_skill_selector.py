"""
Unit tests for SkillSelector: unlock gating, weighting and the two
selection policies.
"""

from dataclasses import replace
from datetime import timedelta

import pytest

from numbersense.core.records import MasteryRecord, RepetitionRecord
from numbersense.core.skills import SkillDescriptor
from numbersense.study.skill_selector import NoEligibleSkillError, SkillSelector

PLAYER = "sam"


def mastery(skill_id: str, value: int, **kwargs) -> MasteryRecord:
    return replace(MasteryRecord.initial(skill_id), mastery=value, **kwargs)


@pytest.fixture
def selector(store, settings, clock, rng):
    return SkillSelector(store, settings, clock=clock, rng=rng)


@pytest.fixture
def sr_selector(store, sr_settings, clock, rng):
    return SkillSelector(store, sr_settings, clock=clock, rng=rng)


class TestUnlocking:
    def test_skill_without_prerequisite_is_open(self, selector, small_catalog):
        assert selector.is_unlocked(PLAYER, small_catalog.get("doubles")) is True

    def test_gated_skill_locked_until_prerequisite_reaches_fifty(self, selector, store, small_catalog):
        gated = small_catalog.get("near_doubles")
        assert selector.is_unlocked(PLAYER, gated) is False

        store.put_mastery_record(PLAYER, "doubles", mastery("doubles", 49))
        assert selector.is_unlocked(PLAYER, gated) is False

        store.put_mastery_record(PLAYER, "doubles", mastery("doubles", 50))
        assert selector.is_unlocked(PLAYER, gated) is True

    def test_manual_unlock_overrides_prerequisite(self, selector, store, small_catalog):
        store.unlock_skill(PLAYER, "near_doubles")
        assert selector.is_unlocked(PLAYER, small_catalog.get("near_doubles")) is True

    def test_unlocks_are_per_player(self, selector, store, small_catalog):
        store.unlock_skill("alex", "near_doubles")
        assert selector.is_unlocked(PLAYER, small_catalog.get("near_doubles")) is False

    def test_unlocked_skills_preserve_order(self, selector, small_catalog):
        unlocked = selector.unlocked_skills(PLAYER, small_catalog.skills)
        assert [s.id for s in unlocked] == ["doubles", "swap_it"]


class TestWeight:
    def test_never_practised_counts_as_thirty_days(self, selector, clock):
        assert selector.weight(MasteryRecord.initial("doubles"), clock.now()) == 150

    def test_deficit_plus_staleness(self, selector, clock):
        record = mastery("doubles", 60, last_practiced_at=clock.now() - timedelta(days=2))
        assert selector.weight(record, clock.now()) == pytest.approx(50)

    def test_staleness_is_capped(self, selector, clock):
        record = mastery("doubles", 100, last_practiced_at=clock.now() - timedelta(days=400))
        assert selector.weight(record, clock.now()) == pytest.approx(50)


class TestWeightedSelection:
    def test_rank_orders_by_weight(self, selector, store, small_catalog, clock):
        store.put_mastery_record(
            PLAYER, "doubles", mastery("doubles", 90, last_practiced_at=clock.now())
        )
        ranked = selector.rank(PLAYER, small_catalog.skills)

        # 90 mastery on doubles also unlocks near_doubles
        assert [s.id for s, _ in ranked] == ["swap_it", "near_doubles", "doubles"]
        assert ranked[-1][1] == pytest.approx(10)

    def test_select_next_takes_draw_from_top(self, store, settings, small_catalog, clock, make_rng):
        store.put_mastery_record(
            PLAYER, "doubles", mastery("doubles", 90, last_practiced_at=clock.now())
        )

        first = SkillSelector(store, settings, clock=clock, rng=make_rng([0]))
        third = SkillSelector(store, settings, clock=clock, rng=make_rng([2]))

        assert first.select_next(PLAYER, small_catalog.skills).id == "swap_it"
        assert third.select_next(PLAYER, small_catalog.skills).id == "doubles"


class TestSpacedRepetitionSelection:
    def test_unreviewed_skill_is_most_urgent(self, sr_selector, store, small_catalog, clock):
        store.put_repetition_record(
            PLAYER,
            "doubles",
            replace(
                RepetitionRecord.initial("doubles"),
                repetitions=1,
                interval_days=6,
                next_due_at=clock.now() + timedelta(days=3),
            ),
        )

        ranked = sr_selector.rank(PLAYER, small_catalog.skills)
        assert [s.id for s, _ in ranked] == ["swap_it", "doubles"]
        assert ranked[0][1] == 100
        assert ranked[1][1] == pytest.approx(5)

        assert sr_selector.select_next(PLAYER, small_catalog.skills).id == "swap_it"

    def test_uses_urgency_not_mastery(self, store, sr_settings, small_catalog, clock):
        # Weighting would favour doubles (no mastery); urgency favours unreviewed swap_it
        store.put_mastery_record(PLAYER, "swap_it", mastery("swap_it", 99, last_practiced_at=clock.now()))
        store.put_repetition_record(
            PLAYER,
            "doubles",
            replace(RepetitionRecord.initial("doubles"), next_due_at=clock.now() + timedelta(days=5)),
        )
        selector = SkillSelector(store, sr_settings, clock=clock)

        ranked = selector.rank(PLAYER, small_catalog.skills)
        assert ranked[0][0].id == "swap_it"
        assert ranked[1][1] == 0


class TestNoEligibleSkill:
    def test_empty_skill_list(self, selector):
        with pytest.raises(NoEligibleSkillError):
            selector.select_next(PLAYER, [])

    def test_everything_locked(self, selector):
        skills = [SkillDescriptor("gated", unlock_requires="elsewhere")]
        with pytest.raises(NoEligibleSkillError):
            selector.select_next(PLAYER, skills)
