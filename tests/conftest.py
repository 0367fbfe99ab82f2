"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Settings  # noqa: E402
from numbersense.core.clock import FixedClock  # noqa: E402
from numbersense.core.skills import SkillCatalog, SkillDescriptor  # noqa: E402
from numbersense.storage.progress_store import InMemoryProgressStore  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


class ScriptedRandom:
    """RandomSource that replays fixed draws (wrapped into range) and records bounds."""

    def __init__(self, draws=None):
        self.draws = list(draws or [0])
        self.calls: list[int] = []

    def randbelow(self, upper: int) -> int:
        self.calls.append(upper)
        value = self.draws[(len(self.calls) - 1) % len(self.draws)]
        return value % upper


START = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def clock():
    """Clock frozen at 2025-03-01 09:00 UTC."""
    return FixedClock(START)


@pytest.fixture
def rng():
    """Random source that always picks the first candidate."""
    return ScriptedRandom([0])


@pytest.fixture
def store():
    return InMemoryProgressStore()


@pytest.fixture
def settings(tmp_path):
    """Settings with spaced repetition off (weight-based selection)."""
    return Settings(spaced_repetition_enabled=False, data_dir=tmp_path)


@pytest.fixture
def sr_settings(tmp_path):
    """Settings with spaced repetition on."""
    return Settings(spaced_repetition_enabled=True, data_dir=tmp_path)


@pytest.fixture
def catalog():
    return SkillCatalog.default()


@pytest.fixture
def small_catalog():
    """Three skills: two open, one gated behind 'doubles'."""
    return SkillCatalog(
        [
            SkillDescriptor("doubles", "Doubles"),
            SkillDescriptor("swap_it", "Swap It"),
            SkillDescriptor("near_doubles", "Near Doubles", unlock_requires="doubles"),
        ]
    )


@pytest.fixture
def make_rng():
    """Factory for ScriptedRandom sources with specific draws."""
    return ScriptedRandom
