"""
Progress persistence for numbersense players.

The engine only talks to the ProgressStore protocol. Two implementations:
- InMemoryProgressStore: process-local dicts (tests, embedding in a UI)
- JsonProgressStore: one JSON file per player in ~/.numbersense/progress/

Each player's records are only mutated from one active session at a time, so
stores do plain read-then-write without locking.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from loguru import logger

from numbersense.core.records import FlaggedQuestion, MasteryRecord, RepetitionRecord


class ProgressStore(Protocol):
    """Keyed record store: (player, skill_id) -> records."""

    def get_mastery_record(self, player: str, skill_id: str) -> MasteryRecord | None:
        ...

    def put_mastery_record(self, player: str, skill_id: str, record: MasteryRecord) -> None:
        ...

    def get_repetition_record(self, player: str, skill_id: str) -> RepetitionRecord | None:
        ...

    def put_repetition_record(self, player: str, skill_id: str, record: RepetitionRecord) -> None:
        ...

    def get_flagged_questions(self, player: str, skill_id: str) -> list[FlaggedQuestion]:
        ...

    def flag_question(self, player: str, question: FlaggedQuestion) -> None:
        ...

    def unflag_question(self, player: str, skill_id: str, question_text: str) -> bool:
        ...

    def get_unlock_overrides(self, player: str) -> set[str]:
        ...

    def unlock_skill(self, player: str, skill_id: str) -> None:
        ...

    def mastery_records(self, player: str) -> dict[str, MasteryRecord]:
        ...


@dataclass
class PlayerProgress:
    """Everything stored for one player."""

    mastery: dict[str, MasteryRecord] = field(default_factory=dict)
    repetition: dict[str, RepetitionRecord] = field(default_factory=dict)
    flagged: list[FlaggedQuestion] = field(default_factory=list)
    unlocked: set[str] = field(default_factory=set)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "mastery": {k: v.to_dict() for k, v in self.mastery.items()},
            "repetition": {k: v.to_dict() for k, v in self.repetition.items()},
            "flagged": [q.to_dict() for q in self.flagged],
            "unlocked": sorted(self.unlocked),
        }

    @classmethod
    def from_dict(cls, data: dict) -> PlayerProgress:
        """Create from dictionary."""
        return cls(
            mastery={k: MasteryRecord.from_dict(v) for k, v in data.get("mastery", {}).items()},
            repetition={
                k: RepetitionRecord.from_dict(v) for k, v in data.get("repetition", {}).items()
            },
            flagged=[FlaggedQuestion.from_dict(q) for q in data.get("flagged", [])],
            unlocked=set(data.get("unlocked", [])),
        )

    def flag(self, question: FlaggedQuestion) -> None:
        # One flag per skill and question text; re-flagging refreshes it
        self.unflag(question.skill_id, question.question_text)
        self.flagged.append(question)

    def unflag(self, skill_id: str, question_text: str) -> bool:
        before = len(self.flagged)
        self.flagged = [
            q
            for q in self.flagged
            if not (q.skill_id == skill_id and q.question_text == question_text)
        ]
        return len(self.flagged) < before


class InMemoryProgressStore:
    """Progress store held in process memory."""

    def __init__(self):
        self._players: dict[str, PlayerProgress] = {}

    def _player(self, player: str) -> PlayerProgress:
        return self._players.setdefault(player, PlayerProgress())

    def get_mastery_record(self, player: str, skill_id: str) -> MasteryRecord | None:
        return self._player(player).mastery.get(skill_id)

    def put_mastery_record(self, player: str, skill_id: str, record: MasteryRecord) -> None:
        self._player(player).mastery[skill_id] = record

    def get_repetition_record(self, player: str, skill_id: str) -> RepetitionRecord | None:
        return self._player(player).repetition.get(skill_id)

    def put_repetition_record(self, player: str, skill_id: str, record: RepetitionRecord) -> None:
        self._player(player).repetition[skill_id] = record

    def get_flagged_questions(self, player: str, skill_id: str) -> list[FlaggedQuestion]:
        return [q for q in self._player(player).flagged if q.skill_id == skill_id]

    def flag_question(self, player: str, question: FlaggedQuestion) -> None:
        self._player(player).flag(question)

    def unflag_question(self, player: str, skill_id: str, question_text: str) -> bool:
        return self._player(player).unflag(skill_id, question_text)

    def get_unlock_overrides(self, player: str) -> set[str]:
        return set(self._player(player).unlocked)

    def unlock_skill(self, player: str, skill_id: str) -> None:
        self._player(player).unlocked.add(skill_id)

    def mastery_records(self, player: str) -> dict[str, MasteryRecord]:
        return dict(self._player(player).mastery)


_SAFE_NAME = re.compile(r"[^A-Za-z0-9_.-]")


class JsonProgressStore:
    """
    Progress store backed by JSON files.

    Files are named {player}.json (unsafe characters replaced by '_').
    Every write rewrites the player's file.
    """

    def __init__(self, progress_dir: Path):
        self.progress_dir = progress_dir
        self.progress_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, player: str) -> Path:
        return self.progress_dir / f"{_SAFE_NAME.sub('_', player)}.json"

    def _load(self, player: str) -> PlayerProgress:
        filepath = self._path(player)
        if not filepath.exists():
            return PlayerProgress()

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return PlayerProgress.from_dict(json.load(f))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable progress file {filepath}: {e}")
            return PlayerProgress()

    def _save(self, player: str, progress: PlayerProgress) -> Path:
        filepath = self._path(player)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(progress.to_dict(), f, indent=2)
        return filepath

    def get_mastery_record(self, player: str, skill_id: str) -> MasteryRecord | None:
        return self._load(player).mastery.get(skill_id)

    def put_mastery_record(self, player: str, skill_id: str, record: MasteryRecord) -> None:
        progress = self._load(player)
        progress.mastery[skill_id] = record
        self._save(player, progress)

    def get_repetition_record(self, player: str, skill_id: str) -> RepetitionRecord | None:
        return self._load(player).repetition.get(skill_id)

    def put_repetition_record(self, player: str, skill_id: str, record: RepetitionRecord) -> None:
        progress = self._load(player)
        progress.repetition[skill_id] = record
        self._save(player, progress)

    def get_flagged_questions(self, player: str, skill_id: str) -> list[FlaggedQuestion]:
        return [q for q in self._load(player).flagged if q.skill_id == skill_id]

    def flag_question(self, player: str, question: FlaggedQuestion) -> None:
        progress = self._load(player)
        progress.flag(question)
        self._save(player, progress)

    def unflag_question(self, player: str, skill_id: str, question_text: str) -> bool:
        progress = self._load(player)
        removed = progress.unflag(skill_id, question_text)
        if removed:
            self._save(player, progress)
        return removed

    def get_unlock_overrides(self, player: str) -> set[str]:
        return set(self._load(player).unlocked)

    def unlock_skill(self, player: str, skill_id: str) -> None:
        progress = self._load(player)
        progress.unlocked.add(skill_id)
        self._save(player, progress)

    def mastery_records(self, player: str) -> dict[str, MasteryRecord]:
        return dict(self._load(player).mastery)
