"""Configuration loading for the Malazan companion."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class ContentConfig(BaseModel):
    content_dir: str = "data/content"
    characters_file: str = "characters.json"
    quiz_file: str = "malazan_character_quiz.json"
    deck_file: str = "deck.json"
    factions_file: str = "factions.json"
    timeline_file: str = "timeline.json"
    quotes_file: str = "quotes.json"


class DuelConfig(BaseModel):
    power_weight: float = 0.5
    agility_weight: float = 0.3
    intelligence_weight: float = 0.2
    trait_bonuses: dict[str, float] = Field(default_factory=lambda: {
        "brutal": 2.0,
        "assassin": 1.5,
        "strategist": 1.5,
        "swordmaster": 2.0,
        "elemental": 1.0,
        "shadow": 1.0,
        "rage": 1.5,
        "tactical": 1.0,
    })
    trait_priorities: list[str] = Field(default_factory=lambda: [
        "brutal", "assassin", "strategist", "schemer", "swordmaster",
        "elemental", "shadow", "rage", "tactical",
    ])
    jitter_min: float = 0.95
    jitter_max: float = 1.05
    close_below: float = 5.0  # score gap under this is "close"
    decisive_below: float = 15.0


class FateConfig(BaseModel):
    history_limit: int = Field(default=5, ge=1)


class TimelineConfig(BaseModel):
    book_order: list[str] = Field(default_factory=lambda: [
        "Gardens of the Moon",
        "Deadhouse Gates",
        "Memories of Ice",
        "House of Chains",
        "Midnight Tides",
        "The Bonehunters",
        "Reaper's Gale",
        "Toll the Hounds",
        "Dust of Dreams",
        "The Crippled God",
        "Night of Knives",
        "Return of the Crimson Guard",
    ])


class Config(BaseModel):
    db_path: str = "data/malazan.db"
    content: ContentConfig = Field(default_factory=ContentConfig)
    duel: DuelConfig = Field(default_factory=DuelConfig)
    fate: FateConfig = Field(default_factory=FateConfig)
    timeline: TimelineConfig = Field(default_factory=TimelineConfig)

    @property
    def resolved_db_path(self) -> Path:
        """Resolve db_path relative to project root."""
        p = Path(self.db_path)
        if p.is_absolute():
            return p
        return _project_root() / p

    @property
    def resolved_content_dir(self) -> Path:
        p = Path(self.content.content_dir).expanduser()
        if p.is_absolute():
            return p
        return _project_root() / p


def _project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


def load_config(config_path: Path | None = None) -> Config:
    """Load config from YAML file. Falls back to defaults if file missing."""
    if config_path is None:
        config_path = _project_root() / "config.yaml"

    if config_path.exists():
        raw: dict[str, Any] = yaml.safe_load(config_path.read_text()) or {}
        return Config(**raw)

    return Config()
