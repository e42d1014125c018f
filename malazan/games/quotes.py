"""Quote matching game: guess the speaker, track accuracy."""

import logging
import random

from malazan.models import Quote, QuoteAnswer
from malazan.shuffle import shuffled

logger = logging.getLogger(__name__)

SCORE_MESSAGES = [
    (90, "Malazan Master! You know these characters like old friends."),
    (80, "Excellent! You've clearly spent time in the Malazan world."),
    (70, "Well done! Your knowledge of the series is solid."),
    (60, "Good effort! Time for a re-read perhaps?"),
    (50, "Not bad! The Malazan world is vast and complex."),
]
FALLBACK_MESSAGE = "The Deck of Dragons is mysterious indeed. Keep reading!"


def prepare_quotes(quotes: list[Quote], rng: random.Random | None = None) -> list[Quote]:
    """Shuffle quote order and the options within each quote."""
    return [
        q.model_copy(update={"options": shuffled(q.options, rng)})
        for q in shuffled(quotes, rng)
    ]


def correct_option_index(quote: Quote) -> int:
    for i, option in enumerate(quote.options):
        if option.score == 1:
            return i
    raise ValueError(f"Quote {quote.id} has no correct option")


def score_message(accuracy: int) -> str:
    for threshold, message in SCORE_MESSAGES:
        if accuracy >= threshold:
            return message
    return FALLBACK_MESSAGE


class QuoteMatchSession:
    """One pass through a list of quotes, recording each guess."""

    def __init__(self, quotes: list[Quote]) -> None:
        self.quotes = quotes
        self.current_index = 0
        self.answers: list[QuoteAnswer] = []

    @classmethod
    def shuffled(cls, quotes: list[Quote], rng: random.Random | None = None) -> "QuoteMatchSession":
        return cls(prepare_quotes(quotes, rng))

    @property
    def is_completed(self) -> bool:
        return self.current_index >= len(self.quotes)

    @property
    def current_quote(self) -> Quote | None:
        if self.is_completed:
            return None
        return self.quotes[self.current_index]

    @property
    def correct_count(self) -> int:
        return sum(1 for a in self.answers if a.is_correct)

    @property
    def accuracy(self) -> int:
        """Percentage of correct answers, rounded half up. 0 before any answer."""
        if not self.answers:
            return 0
        return int(self.correct_count * 100 / len(self.answers) + 0.5)

    def answer(self, option_index: int) -> QuoteAnswer:
        quote = self.current_quote
        if quote is None:
            raise ValueError("Quote game is already completed")
        if not 0 <= option_index < len(quote.options):
            raise ValueError(
                f"Option {option_index} out of range for quote {quote.id} "
                f"({len(quote.options)} options)"
            )
        correct = correct_option_index(quote)
        result = QuoteAnswer(
            quote_id=quote.id,
            selected_option=option_index,
            correct_option=correct,
            is_correct=option_index == correct,
            quote=quote.quote,
            selected_text=quote.options[option_index].text,
            correct_text=quote.options[correct].text,
        )
        self.answers.append(result)
        self.current_index += 1
        logger.debug("Quote %s answered, correct=%s", quote.id, result.is_correct)
        return result

    def restart(self) -> None:
        self.current_index = 0
        self.answers = []
