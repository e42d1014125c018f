"""Static content loading: one-shot JSON reads, logged and degraded on failure."""

import json
import logging
from collections import Counter
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from malazan.config import Config
from malazan.games.quiz import validate_quiz
from malazan.models import (
    Character,
    Faction,
    FateCard,
    Quote,
    QuizQuestion,
    TimelineEvent,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def load_records(path: Path, model: type[M]) -> list[M]:
    """Load a JSON array of records from path.

    Returns an empty list when the file is missing, is not UTF-8 JSON, or
    does not match the record schema. The failure is logged, never raised.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        records = TypeAdapter(list[model]).validate_python(raw)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.error("Error loading %s: %s", path, e)
        return []
    logger.debug("Loaded %d %s records from %s", len(records), model.__name__, path)
    return records


class ContentLibrary:
    """Lazily loads each content collection once and keeps it in memory."""

    def __init__(self, config: Config) -> None:
        self.content_dir = config.resolved_content_dir
        self._files = config.content
        self._cache: dict[str, list] = {}

    def _load(self, filename: str, model: type[M]) -> list[M]:
        if filename not in self._cache:
            self._cache[filename] = load_records(self.content_dir / filename, model)
        return self._cache[filename]

    @property
    def characters(self) -> list[Character]:
        return self._load(self._files.characters_file, Character)

    @property
    def questions(self) -> list[QuizQuestion]:
        return self._load(self._files.quiz_file, QuizQuestion)

    @property
    def deck(self) -> list[FateCard]:
        return self._load(self._files.deck_file, FateCard)

    @property
    def factions(self) -> list[Faction]:
        return self._load(self._files.factions_file, Faction)

    @property
    def timeline(self) -> list[TimelineEvent]:
        return self._load(self._files.timeline_file, TimelineEvent)

    @property
    def quotes(self) -> list[Quote]:
        return self._load(self._files.quotes_file, Quote)

    def find_character(self, key: str) -> Character:
        """Look up a character by id or case-insensitive name."""
        for c in self.characters:
            if c.id == key or c.name.lower() == key.lower():
                return c
        raise ValueError(f"Character not found: {key}")


class ValidationReport:
    """Summary of content consistency checks."""

    def __init__(self) -> None:
        self.counts: dict[str, int] = {}
        self.missing_character_ids: list[str] = []
        self.bad_quotes: list[str] = []
        self.duplicate_ids: dict[str, list[str]] = {}
        self.problems: list[str] = []

    @property
    def ok(self) -> bool:
        return not self.problems

    def __repr__(self) -> str:
        counts = ", ".join(f"{k}={v}" for k, v in self.counts.items())
        return f"ValidationReport({counts}; {len(self.problems)} problems)"


def _duplicates(ids: list[str]) -> list[str]:
    return sorted(k for k, n in Counter(ids).items() if n > 1)


def validate_content(library: ContentLibrary) -> ValidationReport:
    """Check the loaded content against the invariants the games rely on."""
    report = ValidationReport()
    report.counts = {
        "characters": len(library.characters),
        "questions": len(library.questions),
        "deck": len(library.deck),
        "factions": len(library.factions),
        "timeline": len(library.timeline),
        "quotes": len(library.quotes),
    }

    report.missing_character_ids = validate_quiz(library.questions, library.characters)
    if report.missing_character_ids:
        report.problems.append(
            f"Quiz references unknown characters: {', '.join(report.missing_character_ids)}"
        )

    for q in library.quotes:
        correct = sum(1 for o in q.options if o.score == 1)
        if correct != 1:
            report.bad_quotes.append(q.id)
            logger.warning("Quote %s has %d correct options", q.id, correct)
    if report.bad_quotes:
        report.problems.append(
            f"Quotes without exactly one correct option: {', '.join(report.bad_quotes)}"
        )

    if len(library.deck) < 3:
        report.problems.append(f"Deck has {len(library.deck)} cards, need at least 3")

    for name, records in (
        ("characters", library.characters),
        ("deck", library.deck),
        ("factions", library.factions),
        ("timeline", library.timeline),
        ("quotes", library.quotes),
    ):
        dupes = _duplicates([r.id for r in records])
        if dupes:
            report.duplicate_ids[name] = dupes
            report.problems.append(f"Duplicate {name} ids: {', '.join(dupes)}")

    return report
