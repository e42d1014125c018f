"""Deck of Fate: three-card draws, prophecy text and the saved reading history."""

import logging
import random
from datetime import datetime, timezone

from malazan.db import ReadingStore
from malazan.models import POSITIONS, FateCard, Position, Reading
from malazan.shuffle import shuffled

logger = logging.getLogger(__name__)

PROPHECIES: dict[Position, list[str]] = {
    Position.PAST: [
        "In the shadows of what was, {name} speaks of {aspect}. The {domain} has left its mark upon your path, shaping the foundation of your current struggles.",
        "The echoes of {name} resonate from your past, where {aspect} was both burden and blessing. What was done in the realm of {domain} cannot be undone.",
        "From the depths of memory, {name} emerges, carrying the weight of {aspect}. Your history with {domain} has forged the chains that bind your present.",
    ],
    Position.PRESENT: [
        "Now stands {name}, embodying {aspect} in this moment of decision. The {domain} demands your attention, for the present is where fate pivots.",
        "In this hour, {name} manifests as {aspect}, drawing power from {domain}. The choices you make now will echo through the halls of destiny.",
        "The present moment crystallizes around {name}, where {aspect} becomes your greatest ally or most dangerous foe. {domain} watches and waits.",
    ],
    Position.FUTURE: [
        "Ahead lies {name}, promising {aspect} in times yet to come. The {domain} will play its hand when the moment is ripe.",
        "The threads of fate weave toward {name}, where {aspect} awaits your arrival. What {domain} offers may not be what you expect.",
        "In the mists of tomorrow, {name} beckons with {aspect}. The {domain} has prepared a path, but whether it leads to glory or ruin remains to be seen.",
    ],
}

GENERIC_SUMMARY = (
    "The Deck has spoken, weaving a tapestry of fate unique to your path. "
    "Trust in the wisdom of the cards, for they see what mortal eyes cannot."
)


def draw_cards(
    deck: list[FateCard], rng: random.Random | None = None,
) -> tuple[FateCard, FateCard, FateCard]:
    """Draw three distinct cards for the Past, Present and Future slots."""
    if len(deck) < 3:
        raise ValueError(f"Deck needs at least 3 cards, has {len(deck)}")
    past, present, future = shuffled(deck, rng)[:3]
    return past, present, future


def new_reading(cards: tuple[FateCard, ...] | list[FateCard], now: datetime | None = None) -> Reading:
    now = now or datetime.now(timezone.utc)
    return Reading(
        id=str(int(now.timestamp() * 1000)),
        timestamp=now.isoformat(timespec="seconds"),
        cards=list(cards),
    )


def prophecy(card: FateCard, position: Position, rng: random.Random | None = None) -> str:
    template = (rng or random).choice(PROPHECIES[position])
    return template.format(name=card.name, aspect=card.aspect.lower(), domain=card.domain)


def summarize(cards: list[FateCard] | tuple[FateCard, ...]) -> str:
    """Overall reading: special domain pairings first, then domain spread."""
    domains = [c.domain for c in cards]

    if "High House Shadow" in domains and "High House Light" in domains:
        return (
            "The eternal dance of Shadow and Light plays out in your fate. "
            "Balance will be your greatest challenge and your ultimate salvation."
        )
    if "High House Death" in domains and "High House Life" in domains:
        return (
            "Life and Death intertwine in your destiny. "
            "Transformation awaits, but the price may be higher than you imagine."
        )
    if any("oponn" in c.id for c in cards):
        return "Chance smiles. Or doesn't. The twins of luck have taken notice of your path."
    if any("Cripple" in c.id or "Fool" in c.id for c in cards):
        return "The broken see more clearly. Wisdom often wears the mask of folly."
    if "High House Chains" in domains:
        return "Chains bind, but they also connect. What enslaves you may also be what sets you free."

    unique_domains = list(dict.fromkeys(domains))
    if len(unique_domains) == 1:
        return (
            f"The {unique_domains[0]} claims dominion over your entire fate. "
            "Its influence will be absolute and undeniable."
        )
    if len(unique_domains) == 3:
        return "Three powers vie for influence over your destiny. Navigate carefully, for each demands its due."
    return GENERIC_SUMMARY


def interpret(reading: Reading, rng: random.Random | None = None) -> dict[str, object]:
    """Prophecy per slot plus the overall summary, ready for display or JSON."""
    return {
        "id": reading.id,
        "timestamp": reading.timestamp,
        "cards": [
            {
                "position": position.value,
                "card": card.model_dump(),
                "prophecy": prophecy(card, position, rng),
            }
            for position, card in zip(POSITIONS, reading.cards)
        ],
        "summary": summarize(reading.cards),
    }


def share_text(cards: list[FateCard] | tuple[FateCard, ...]) -> str:
    past, present, future = cards
    return (
        "My Malazan Deck of Fate reading:\n\n"
        f"Past: {past.name}\n"
        f"Present: {present.name}\n"
        f"Future: {future.name}\n\n"
        "The cards have spoken!"
    )


def _unused_id(reading_id: str, taken: set[str]) -> str:
    """Bump a colliding id: numeric ids count up, others get a -N suffix."""
    candidate, n = reading_id, 1
    while candidate in taken:
        if reading_id.isdigit():
            candidate = str(int(reading_id) + n)
        else:
            candidate = f"{reading_id}-{n}"
        n += 1
    return candidate


def save_reading(store: ReadingStore, reading: Reading, limit: int = 5) -> list[Reading]:
    """Prepend reading to the saved history, keep the newest `limit`, overwrite the store.

    Saving an identical reading again replaces the stored copy. A different
    reading whose id is already taken gets the next free id.
    """
    if limit < 1:
        raise ValueError(f"History limit must be at least 1, got {limit}")
    previous = [r for r in store.list_readings() if r != reading]
    new_id = _unused_id(reading.id, {r.id for r in previous})
    if new_id != reading.id:
        logger.debug("Reading id %s already stored, saving as %s", reading.id, new_id)
        reading = reading.model_copy(update={"id": new_id})
    updated = [reading] + previous[: limit - 1]
    store.replace_readings(updated)
    logger.info("Saved reading %s (%d in history)", reading.id, len(updated))
    return updated
