"""
Unit tests for the skill catalog and the clock/random capabilities.
"""

import json
from datetime import datetime, timedelta

import pytest

from numbersense.core.clock import FixedClock, calculate_days_since
from numbersense.core.randomness import SystemRandomSource, pick_from_top
from numbersense.core.skills import SkillCatalog, SkillDescriptor, UnknownSkillError


class TestSkillCatalog:
    def test_default_catalog(self):
        catalog = SkillCatalog.default()

        assert len(catalog) == 12
        assert "doubles" in catalog
        assert catalog.get("adjust_it").unlock_requires == "ten_and_a_bit"
        # Every chain starts from an open skill
        assert any(skill.unlock_requires is None for skill in catalog)

    def test_unknown_skill(self):
        with pytest.raises(UnknownSkillError):
            SkillCatalog.default().get("times_tables")

    def test_rejects_duplicates_and_dangling_prerequisites(self):
        with pytest.raises(ValueError):
            SkillCatalog([SkillDescriptor("a"), SkillDescriptor("a")])
        with pytest.raises(ValueError):
            SkillCatalog([SkillDescriptor("a", unlock_requires="b")])

    def test_display_name_falls_back_to_id(self):
        assert SkillDescriptor("make_ten_then").display_name == "Make Ten Then"

    def test_from_file(self, tmp_path):
        path = tmp_path / "skills.json"
        path.write_text(
            json.dumps(
                [
                    {"id": "bonds", "name": "Number Bonds"},
                    {"id": "bridging", "unlock_requires": "bonds"},
                ]
            ),
            encoding="utf-8",
        )

        catalog = SkillCatalog.from_file(path)

        assert [s.id for s in catalog] == ["bonds", "bridging"]
        assert catalog.get("bridging").unlock_requires == "bonds"


class TestClock:
    def test_fixed_clock_advances(self, clock):
        start = clock.now()
        assert clock.advance(days=2) == start + timedelta(days=2)
        assert clock.now() == start + timedelta(days=2)

    def test_naive_instants_are_utc(self):
        assert FixedClock(datetime(2025, 1, 1)).now().tzinfo is not None

    def test_days_since(self, clock):
        assert calculate_days_since(None, clock.now()) == 30
        assert calculate_days_since(clock.now() - timedelta(hours=36), clock.now()) == pytest.approx(1.5)


class TestPickFromTop:
    def test_empty_raises(self, rng):
        with pytest.raises(ValueError):
            pick_from_top([], rng)

    def test_seeded_source_stays_in_top_three(self):
        scored = [("a", 1.0), ("b", 9.0), ("c", 5.0), ("d", 7.0), ("e", 3.0)]
        source = SystemRandomSource(seed=7)

        picks = {pick_from_top(scored, source) for _ in range(200)}

        assert picks == {"b", "d", "c"}
