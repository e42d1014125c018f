"""Duel simulator: weighted stat scores, trait bonuses, random jitter, margin buckets.

Results are deliberately not reproducible: jitter and the battle description
are drawn from an unseeded random source unless a ``random.Random`` is passed.
"""

import logging
import random

from malazan.config import DuelConfig
from malazan.models import Character, DuelResult, Margin
from malazan.shuffle import shuffled

logger = logging.getLogger(__name__)

DESCRIPTIONS: dict[Margin, list[str]] = {
    Margin.CLOSE: [
        "{winner}'s {winner_trait} nature barely overcame {loser}'s {loser_trait} approach in a grueling battle.",
        "A razor-thin victory as {winner} exploited a momentary lapse in {loser}'s defense.",
        "{winner} and {loser} traded devastating blows before {winner} claimed victory by the narrowest margin.",
        "The duel could have gone either way, but {winner}'s experience as a {winner_trait} proved decisive.",
    ],
    Margin.DECISIVE: [
        "{winner}'s {winner_trait} prowess clearly outmatched {loser}'s {loser_trait} tactics.",
        "{winner} systematically dismantled {loser}'s defenses with {winner_trait} precision.",
        "{loser} fought valiantly, but {winner}'s {winner_trait} abilities proved superior.",
        "{winner} dominated the battlefield, their {winner_trait} nature overwhelming {loser}.",
    ],
    Margin.OVERWHELMING: [
        "{winner} utterly crushed {loser}, their {winner_trait} power leaving no doubt about the outcome.",
        "A complete massacre as {winner}'s {winner_trait} abilities made {loser} look like a novice.",
        "{loser} was helpless against {winner}'s overwhelming {winner_trait} dominance.",
        "{winner} ended the duel so quickly that {loser} barely had time to react.",
    ],
}


def base_score(character: Character, config: DuelConfig | None = None) -> float:
    cfg = config or DuelConfig()
    return (
        character.power_level * cfg.power_weight
        + character.agility * cfg.agility_weight
        + character.intelligence * cfg.intelligence_weight
    )


def trait_bonus(character: Character, config: DuelConfig | None = None) -> float:
    """Sum the fixed bonus of every trait tag the character carries exactly."""
    cfg = config or DuelConfig()
    return sum(bonus for trait, bonus in cfg.trait_bonuses.items() if trait in character.traits)


def calculate_score(
    character: Character,
    config: DuelConfig | None = None,
    rng: random.Random | None = None,
) -> float:
    cfg = config or DuelConfig()
    jitter = (rng or random).uniform(cfg.jitter_min, cfg.jitter_max)
    return (base_score(character, cfg) + trait_bonus(character, cfg)) * jitter


def classify_margin(difference: float, config: DuelConfig | None = None) -> Margin:
    cfg = config or DuelConfig()
    difference = abs(difference)
    if difference < cfg.close_below:
        return Margin.CLOSE
    if difference < cfg.decisive_below:
        return Margin.DECISIVE
    return Margin.OVERWHELMING


def primary_trait(traits: list[str], config: DuelConfig | None = None) -> str:
    """Pick the trait used in battle descriptions.

    The first priority tag contained in any trait wins; otherwise the
    character's first trait, otherwise "warrior".
    """
    cfg = config or DuelConfig()
    for priority in cfg.trait_priorities:
        if any(priority in trait for trait in traits):
            return priority
    return traits[0] if traits else "warrior"


def battle_description(
    winner: Character,
    loser: Character,
    margin: Margin,
    config: DuelConfig | None = None,
    rng: random.Random | None = None,
) -> str:
    template = (rng or random).choice(DESCRIPTIONS[margin])
    return template.format(
        winner=winner.name,
        loser=loser.name,
        winner_trait=primary_trait(winner.traits, config),
        loser_trait=primary_trait(loser.traits, config),
    )


def resolve_duel(
    fighter1: Character,
    fighter2: Character,
    score1: float,
    score2: float,
    config: DuelConfig | None = None,
    rng: random.Random | None = None,
) -> DuelResult:
    """Turn two computed scores into a result. A tie goes to fighter2."""
    if score1 > score2:
        winner, loser, winner_score, loser_score = fighter1, fighter2, score1, score2
    else:
        winner, loser, winner_score, loser_score = fighter2, fighter1, score2, score1

    margin = classify_margin(score1 - score2, config)
    return DuelResult(
        winner=winner,
        loser=loser,
        winner_score=round(winner_score, 1),
        loser_score=round(loser_score, 1),
        battle_description=battle_description(winner, loser, margin, config, rng),
        margin=margin,
    )


def simulate_duel(
    fighter1: Character,
    fighter2: Character,
    config: DuelConfig | None = None,
    rng: random.Random | None = None,
) -> DuelResult:
    score1 = calculate_score(fighter1, config, rng)
    score2 = calculate_score(fighter2, config, rng)
    logger.debug(
        "Duel %s (%.2f) vs %s (%.2f)", fighter1.name, score1, fighter2.name, score2,
    )
    return resolve_duel(fighter1, fighter2, score1, score2, config, rng)


def random_fighters(
    characters: list[Character],
    count: int = 2,
    rng: random.Random | None = None,
) -> list[Character]:
    if len(characters) < count:
        raise ValueError(f"Need at least {count} characters, have {len(characters)}")
    return shuffled(characters, rng)[:count]
