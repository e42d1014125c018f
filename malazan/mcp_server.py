#!/usr/bin/env python3
"""Malazan MCP Server: quiz, fate readings, duels and lore browsing."""

import json
import logging
import sys
from typing import Optional

from mcp.server.fastmcp import FastMCP

from malazan.browse import browse_factions, browse_timeline
from malazan.config import Config, load_config
from malazan.content import ContentLibrary
from malazan.db import ReadingStore
from malazan.games.duel import random_fighters
from malazan.games.duel import simulate_duel as run_duel
from malazan.games.fate import draw_cards, interpret, new_reading, save_reading
from malazan.games.quiz import run_quiz

mcp = FastMCP("malazan")
logger = logging.getLogger(__name__)

# Redirect all logging to stderr so stdout stays clean for MCP stdio transport
logging.basicConfig(
    stream=sys.stderr,
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

_store: ReadingStore | None = None
_library: ContentLibrary | None = None
_config: Config | None = None


def _get_config() -> Config:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def _get_library() -> ContentLibrary:
    global _library
    if _library is None:
        _library = ContentLibrary(_get_config())
    return _library


def _get_store() -> ReadingStore:
    global _store
    if _store is None:
        _store = ReadingStore(_get_config())
        _store.init_db()
    return _store


@mcp.tool()
def draw_fate(save: bool = False) -> str:
    """Draw three cards (Past, Present, Future) with prophecies. Optionally save to history."""
    try:
        reading = new_reading(draw_cards(_get_library().deck))
        if save:
            reading = save_reading(_get_store(), reading, _get_config().fate.history_limit)[0]
        return json.dumps(interpret(reading))
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def list_readings() -> str:
    """List saved fate readings, newest first."""
    readings = _get_store().list_readings()
    return json.dumps([r.model_dump() for r in readings])


@mcp.tool()
def simulate_duel(
    fighter1: Optional[str] = None,
    fighter2: Optional[str] = None,
) -> str:
    """Simulate a duel between two characters (id or name). Omit both for a random pairing."""
    try:
        library = _get_library()
        if fighter1 is None and fighter2 is None:
            a, b = random_fighters(library.characters)
        elif fighter1 is None or fighter2 is None:
            raise ValueError("Give both fighters or neither")
        else:
            a, b = library.find_character(fighter1), library.find_character(fighter2)
        result = run_duel(a, b, _get_config().duel)
        return json.dumps(result.model_dump(mode="json"))
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def search_factions(
    search: str = "",
    status: Optional[str] = None,
    faction_type: Optional[str] = None,
    group_by_origin: bool = False,
) -> str:
    """Search factions by name/description with optional exact status and type filters."""
    groups = browse_factions(
        _get_library().factions,
        search=search,
        status=status,
        type=faction_type,
        group_by_origin=group_by_origin,
    )
    return json.dumps({label: [f.model_dump() for f in fs] for label, fs in groups.items()})


@mcp.tool()
def search_timeline(
    search: str = "",
    book: Optional[str] = None,
    location: Optional[str] = None,
    order: str = "chronological",
) -> str:
    """Search timeline events. order is 'chronological' (by year) or 'book' (publication order)."""
    try:
        events = browse_timeline(
            _get_library().timeline,
            search=search,
            book=book,
            location=location,
            order=order,
            book_order=_get_config().timeline.book_order,
        )
        return json.dumps([e.model_dump() for e in events])
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def quiz_result(answers: list[int]) -> str:
    """Score the character quiz from 0-based option indices, one per question in order."""
    try:
        library = _get_library()
        result = run_quiz(library.questions, library.characters, answers)
        return json.dumps(result.model_dump())
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def list_characters() -> str:
    """List characters with their duel stats and warren."""
    return json.dumps([c.model_dump() for c in _get_library().characters])


if __name__ == "__main__":
    mcp.run()
