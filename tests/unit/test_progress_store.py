"""
Unit tests for the progress stores.

Both implementations run the same contract tests; the JSON store also gets
persistence and corrupt-file checks.
"""

import json
from dataclasses import replace
from datetime import timedelta

import pytest

from numbersense.core.records import (
    AssessmentNote,
    FlaggedQuestion,
    MasteryRecord,
    RepetitionRecord,
)
from numbersense.storage.progress_store import InMemoryProgressStore, JsonProgressStore

PLAYER = "sam"


@pytest.fixture(params=["memory", "json"])
def any_store(request, tmp_path):
    if request.param == "memory":
        return InMemoryProgressStore()
    return JsonProgressStore(tmp_path / "progress")


def flagged(text: str, skill_id: str = "doubles") -> FlaggedQuestion:
    return FlaggedQuestion(skill_id=skill_id, question_text=text, correct_answer=12)


class TestStoreContract:
    def test_missing_records_are_none(self, any_store):
        assert any_store.get_mastery_record(PLAYER, "doubles") is None
        assert any_store.get_repetition_record(PLAYER, "doubles") is None
        assert any_store.get_flagged_questions(PLAYER, "doubles") == []
        assert any_store.get_unlock_overrides(PLAYER) == set()

    def test_mastery_round_trip(self, any_store, clock):
        record = replace(
            MasteryRecord.initial("doubles"),
            mastery=42,
            level=2,
            total_attempts=7,
            total_correct=5,
            avg_time_ms=3100,
            last_practiced_at=clock.now(),
            assessment_note=AssessmentNote.DEVELOPING,
        )
        any_store.put_mastery_record(PLAYER, "doubles", record)

        assert any_store.get_mastery_record(PLAYER, "doubles") == record
        assert any_store.mastery_records(PLAYER) == {"doubles": record}

    def test_repetition_round_trip(self, any_store, clock):
        record = replace(
            RepetitionRecord.initial("doubles"),
            ease_factor=2.36,
            interval_days=6,
            repetitions=2,
            last_reviewed_at=clock.now(),
            next_due_at=clock.now() + timedelta(days=6),
        )
        any_store.put_repetition_record(PLAYER, "doubles", record)

        assert any_store.get_repetition_record(PLAYER, "doubles") == record

    def test_flags_are_per_skill(self, any_store):
        any_store.flag_question(PLAYER, flagged("6 + 6"))
        any_store.flag_question(PLAYER, flagged("3 + 5", skill_id="swap_it"))

        assert [q.question_text for q in any_store.get_flagged_questions(PLAYER, "doubles")] == ["6 + 6"]

    def test_reflagging_keeps_one_entry(self, any_store):
        any_store.flag_question(PLAYER, flagged("6 + 6"))
        any_store.flag_question(PLAYER, replace(flagged("6 + 6"), user_answer=11))

        questions = any_store.get_flagged_questions(PLAYER, "doubles")
        assert len(questions) == 1
        assert questions[0].user_answer == 11

    def test_unflag(self, any_store):
        any_store.flag_question(PLAYER, flagged("6 + 6"))

        assert any_store.unflag_question(PLAYER, "doubles", "6 + 6") is True
        assert any_store.unflag_question(PLAYER, "doubles", "6 + 6") is False
        assert any_store.get_flagged_questions(PLAYER, "doubles") == []

    def test_same_text_under_two_skills(self, any_store):
        any_store.flag_question(PLAYER, flagged("6 + 6"))
        any_store.flag_question(PLAYER, flagged("6 + 6", skill_id="swap_it"))

        assert len(any_store.get_flagged_questions(PLAYER, "doubles")) == 1
        assert len(any_store.get_flagged_questions(PLAYER, "swap_it")) == 1

        assert any_store.unflag_question(PLAYER, "swap_it", "6 + 6") is True
        assert len(any_store.get_flagged_questions(PLAYER, "doubles")) == 1
        assert any_store.get_flagged_questions(PLAYER, "swap_it") == []

    def test_unlock_overrides(self, any_store):
        any_store.unlock_skill(PLAYER, "adjust_it")
        any_store.unlock_skill(PLAYER, "adjust_it")

        assert any_store.get_unlock_overrides(PLAYER) == {"adjust_it"}
        assert any_store.get_unlock_overrides("alex") == set()


class TestJsonProgressStore:
    def test_survives_new_instance(self, tmp_path):
        JsonProgressStore(tmp_path).put_mastery_record(
            PLAYER, "doubles", replace(MasteryRecord.initial("doubles"), mastery=30)
        )

        assert JsonProgressStore(tmp_path).get_mastery_record(PLAYER, "doubles").mastery == 30

    def test_file_layout(self, tmp_path):
        store = JsonProgressStore(tmp_path)
        store.unlock_skill("sam/../x", "doubles")

        files = list(tmp_path.glob("*.json"))
        assert [f.name for f in files] == ["sam_.._x.json"]
        data = json.loads(files[0].read_text(encoding="utf-8"))
        assert data["unlocked"] == ["doubles"]

    def test_corrupt_file_is_treated_as_empty(self, tmp_path):
        (tmp_path / f"{PLAYER}.json").write_text("{not json", encoding="utf-8")
        store = JsonProgressStore(tmp_path)

        assert store.get_mastery_record(PLAYER, "doubles") is None

        store.put_mastery_record(PLAYER, "doubles", MasteryRecord.initial("doubles"))
        assert store.get_mastery_record(PLAYER, "doubles") == MasteryRecord.initial("doubles")
