"""Character quiz: per-answer score tallying and top-character selection."""

import logging
from collections.abc import Iterable, Mapping

from malazan.models import Character, QuizQuestion, QuizResult

logger = logging.getLogger(__name__)


def accumulate_scores(
    answered_options: Iterable[Mapping[str, float]],
    scores: dict[str, float] | None = None,
) -> dict[str, float]:
    """Sum point contributions per character across answered options.

    Args:
        answered_options: Ordered score maps (character id -> points), one
            per answered question.
        scores: Running totals to extend. Not mutated; a new dict is returned.
    """
    totals = dict(scores or {})
    for option_scores in answered_options:
        for character_id, points in option_scores.items():
            totals[character_id] = totals.get(character_id, 0) + points
    return totals


def calculate_top_characters(scores: Mapping[str, float]) -> list[str]:
    """Return every character id tied at the highest total."""
    if not scores:
        logger.warning("No scores accumulated during quiz")
        return []
    max_score = max(scores.values())
    return [cid for cid, score in scores.items() if score == max_score]


def get_characters_by_ids(
    character_ids: Iterable[str], characters: list[Character],
) -> list[Character]:
    """Resolve ids to characters, logging any id with no matching character."""
    wanted = list(character_ids)
    found = [c for c in characters if c.id in wanted]
    known = {c.id for c in characters}
    missing = [cid for cid in wanted if cid not in known]
    if missing:
        logger.warning("Missing character IDs: %s", missing)
    return found


def validate_quiz(
    questions: list[QuizQuestion], characters: list[Character],
) -> list[str]:
    """Return character ids referenced by quiz options but absent from the roster."""
    known = {c.id for c in characters}
    missing: list[str] = []
    for q in questions:
        for option in q.options:
            for cid in option.scores:
                if cid not in known and cid not in missing:
                    missing.append(cid)
    if missing:
        logger.warning("Quiz options reference unknown character IDs: %s", missing)
    return missing


class QuizSession:
    """Walks through the questions one at a time, tallying scores."""

    def __init__(self, questions: list[QuizQuestion], characters: list[Character]) -> None:
        self.questions = questions
        self.characters = characters
        self.current_index = 0
        self.scores: dict[str, float] = {}
        self.answers: list[int] = []

    @property
    def is_completed(self) -> bool:
        return self.current_index >= len(self.questions)

    @property
    def current_question(self) -> QuizQuestion | None:
        if self.is_completed:
            return None
        return self.questions[self.current_index]

    @property
    def progress(self) -> tuple[int, int]:
        """(question number being asked, total questions)."""
        return min(self.current_index + 1, len(self.questions)), len(self.questions)

    def answer(self, option_index: int) -> None:
        question = self.current_question
        if question is None:
            raise ValueError("Quiz is already completed")
        if not 0 <= option_index < len(question.options):
            raise ValueError(
                f"Option {option_index} out of range for question {question.id} "
                f"({len(question.options)} options)"
            )
        self.scores = accumulate_scores([question.options[option_index].scores], self.scores)
        self.answers.append(option_index)
        self.current_index += 1

    def result(self) -> QuizResult:
        top_ids = calculate_top_characters(self.scores)
        return QuizResult(
            top_character_ids=top_ids,
            characters=get_characters_by_ids(top_ids, self.characters),
            scores=dict(self.scores),
        )

    def restart(self) -> None:
        self.current_index = 0
        self.scores = {}
        self.answers = []


def run_quiz(
    questions: list[QuizQuestion],
    characters: list[Character],
    answers: Iterable[int],
) -> QuizResult:
    """Answer the quiz in one go from a list of option indices."""
    session = QuizSession(questions, characters)
    for option_index in answers:
        session.answer(option_index)
    return session.result()
