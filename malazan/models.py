"""Pydantic models for the Malazan companion."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Margin(str, Enum):
    CLOSE = "close"
    DECISIVE = "decisive"
    OVERWHELMING = "overwhelming"


class Position(str, Enum):
    PAST = "Past"
    PRESENT = "Present"
    FUTURE = "Future"


POSITIONS = (Position.PAST, Position.PRESENT, Position.FUTURE)


class Record(BaseModel):
    """Base for content records: immutable after load, accepts JSON or Python names."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# --- Content records (what comes out of the JSON files) ---


class Character(Record):
    id: str = Field(alias="_id")
    name: str
    description: str = ""
    traits: list[str] = Field(default_factory=list)
    image: str | None = None
    warren: str | None = None
    power_level: float = Field(default=0.0, alias="powerLevel")
    agility: float = 0.0
    intelligence: float = 0.0


class QuizOption(Record):
    text: str
    scores: dict[str, float] = Field(default_factory=dict)


class QuizQuestion(Record):
    id: int | str
    question: str
    options: list[QuizOption]


class FateCard(Record):
    id: str
    name: str
    description: str = ""
    domain: str
    aspect: str
    icon: str = ""


class Faction(Record):
    id: str
    name: str
    type: str
    status: str
    origin: str
    description: str = ""
    affiliations: list[str] = Field(default_factory=list)
    enemies: list[str] = Field(default_factory=list)
    icon: str = ""


class TimelineEvent(Record):
    id: str
    title: str
    year: int
    book: str
    location: str
    characters: list[str] = Field(default_factory=list)
    description: str = ""


class QuoteOption(Record):
    text: str
    score: int = 0


class Quote(Record):
    id: str
    quote: str
    options: list[QuoteOption]
    answer_id: str | None = Field(default=None, alias="answerId")


# --- Result models ---


class QuizResult(BaseModel):
    top_character_ids: list[str]
    characters: list[Character]
    scores: dict[str, float]


class DuelResult(BaseModel):
    winner: Character
    loser: Character
    winner_score: float
    loser_score: float
    battle_description: str
    margin: Margin


class Reading(BaseModel):
    """A saved Deck of Fate reading: Past, Present, Future in that order."""
    id: str
    timestamp: str
    cards: list[FateCard] = Field(min_length=3, max_length=3)

    def card_at(self, position: Position) -> FateCard:
        return self.cards[POSITIONS.index(position)]


class QuoteAnswer(BaseModel):
    quote_id: str
    selected_option: int
    correct_option: int
    is_correct: bool
    quote: str
    selected_text: str
    correct_text: str
