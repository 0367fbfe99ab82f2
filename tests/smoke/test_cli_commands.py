"""
Smoke Tests for CLI Commands.

These tests verify that CLI commands run without errors and produce output.
They don't validate correctness deeply - just that commands work.

Usage:
    pytest tests/smoke/test_cli_commands.py -v
    pytest tests/smoke/test_cli_commands.py -v -m smoke
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

# Mark all tests in this module as smoke tests
pytestmark = pytest.mark.smoke

# Project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


@pytest.fixture
def run_cli(tmp_path):
    """
    Run a CLI command against a throwaway data directory.

    Returns:
        Callable taking the argument list and returning (exit_code, stdout, stderr)
    """
    env = dict(os.environ)
    env["NUMBERSENSE_DATA_DIR"] = str(tmp_path)
    env["NUMBERSENSE_LOG_LEVEL"] = "WARNING"
    env["COLUMNS"] = "200"

    def run(*args: str, timeout: int = 30) -> tuple[int, str, str]:
        result = subprocess.run(
            [sys.executable, "-m", "numbersense.cli.main", *args],
            cwd=PROJECT_ROOT,
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        return result.returncode, result.stdout, result.stderr

    return run


class TestCLIHelp:
    """Test that help commands work."""

    def test_main_help(self, run_cli):
        code, stdout, stderr = run_cli("--help")

        assert code == 0, f"Help failed: {stderr}"
        assert "numbersense" in stdout.lower()
        for command in ("next", "plan", "record", "progress", "methods", "unlock"):
            assert command in stdout


class TestPracticeCommands:
    def test_next_on_fresh_player(self, run_cli):
        code, stdout, stderr = run_cli("next", "--player", "sam")

        assert code == 0, stderr
        assert "Next:" in stdout

    def test_plan_with_skill(self, run_cli):
        code, stdout, stderr = run_cli("plan", "--player", "sam", "--skill", "doubles")

        assert code == 0, stderr
        assert "10/10" in stdout

    def test_plan_unknown_skill_fails(self, run_cli):
        code, stdout, _ = run_cli("plan", "--skill", "times_tables")

        assert code == 1
        assert "Error" in stdout

    def test_record_then_progress(self, run_cli, tmp_path):
        code, stdout, stderr = run_cli(
            "record", "doubles", "--player", "sam", "--wrong", "--time-ms", "9000",
            "--question", "6 + 6", "--answer", "12",
        )
        assert code == 0, stderr
        assert "flagged" in stdout

        code, stdout, stderr = run_cli("progress", "--player", "sam")
        assert code == 0, stderr
        assert "locked" in stdout
        assert (tmp_path / "progress" / "sam.json").exists()

    def test_flagged_question_shows_as_retry(self, run_cli):
        run_cli("record", "doubles", "--player", "sam", "--wrong", "--question", "6 + 6", "--answer", "12")

        code, stdout, stderr = run_cli("plan", "--player", "sam", "--skill", "doubles")

        assert code == 0, stderr
        assert "retry" in stdout

    def test_unlock(self, run_cli):
        code, stdout, stderr = run_cli("unlock", "adjust_it", "--player", "sam")

        assert code == 0, stderr
        assert "Unlocked" in stdout


class TestMethodsCommand:
    def test_ranks_methods(self, run_cli):
        code, stdout, stderr = run_cli("methods", "58 + 39")

        assert code == 0, stderr
        assert "Compensation" in stdout

    def test_solve_shows_answer(self, run_cli):
        code, stdout, stderr = run_cli("methods", "502 - 498", "--solve", "counting_on")

        assert code == 0, stderr
        assert "Answer: 4" in stdout

    def test_personalized_ranking(self, run_cli):
        code, stdout, stderr = run_cli("methods", "58 + 39", "--comfort", "column=expert")

        assert code == 0, stderr
        assert "For you" in stdout

    def test_malformed_problem(self, run_cli):
        code, stdout, _ = run_cli("methods", "58 times 39")

        assert code == 1
        assert "Error" in stdout
