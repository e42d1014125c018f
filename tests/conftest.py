"""Shared test fixtures for malazan tests."""

import json
import random

import pytest

from malazan.config import Config, ContentConfig
from malazan.content import ContentLibrary
from malazan.db import ReadingStore
from malazan.models import Character, FateCard

CHARACTERS = [
    {
        "_id": "rake", "name": "Anomander Rake", "description": "Son of Darkness",
        "traits": ["noble", "swordmaster"], "image": "/img/rake.jpg",
        "warren": "Kurald Galain", "powerLevel": 98, "agility": 85, "intelligence": 90,
    },
    {
        "_id": "karsa", "name": "Karsa Orlong", "description": "Teblor warrior",
        "traits": ["brutal", "stubborn"], "image": "/img/karsa.jpg",
        "warren": "None", "powerLevel": 90, "agility": 70, "intelligence": 55,
    },
    {
        "_id": "kalam", "name": "Kalam Mekhar", "description": "Former Claw",
        "traits": ["assassin", "loyal"], "image": "/img/kalam.jpg",
        "warren": "Meanas", "powerLevel": 70, "agility": 92, "intelligence": 75,
    },
]

QUESTIONS = [
    {
        "id": 1, "question": "Pick a weapon",
        "options": [
            {"text": "Sword", "scores": {"rake": 2, "karsa": 1}},
            {"text": "Knife", "scores": {"kalam": 3}},
        ],
    },
    {
        "id": 2, "question": "Pick a road",
        "options": [
            {"text": "The long one", "scores": {"karsa": 2}},
            {"text": "Through the warren", "scores": {"rake": 1, "ghost": 5}},
        ],
    },
]

DECK = [
    {"id": "shadow-king", "name": "King of Shadow", "description": "", "domain": "High House Shadow", "aspect": "Deception", "icon": "K"},
    {"id": "light-queen", "name": "Queen of Light", "description": "", "domain": "High House Light", "aspect": "Revelation", "icon": "Q"},
    {"id": "death-king", "name": "King of Death", "description": "", "domain": "High House Death", "aspect": "Endings", "icon": "D"},
    {"id": "obelisk", "name": "Obelisk", "description": "", "domain": "Unaligned", "aspect": "Foundation", "icon": "O"},
    {"id": "dark-knight", "name": "Knight of Dark", "description": "", "domain": "High House Dark", "aspect": "Duty", "icon": "N"},
]

FACTIONS = [
    {"id": "bridgeburners", "name": "Bridgeburners", "type": "Military", "status": "Active", "origin": "Malazan Empire", "description": "Sappers of the Second Army", "affiliations": ["Tiste Andii"], "enemies": ["Pannion Domin"], "icon": "B"},
    {"id": "claw", "name": "The Claw", "type": "Secret Order", "status": "Active", "origin": "Malazan Empire", "description": "Imperial assassins", "affiliations": [], "enemies": ["The Talon"], "icon": "C"},
    {"id": "talon", "name": "The Talon", "type": "Secret Order", "status": "Disbanded", "origin": "Malazan Empire", "description": "Old order of killers", "affiliations": [], "enemies": ["The Claw"], "icon": "T"},
    {"id": "andii", "name": "Tiste Andii", "type": "Race", "status": "Active", "origin": "Kurald Galain", "description": "Children of Mother Dark", "affiliations": ["Bridgeburners"], "enemies": [], "icon": "A"},
    {"id": "pannion", "name": "Pannion Domin", "type": "Theocracy", "status": "Destroyed", "origin": "Genabackis", "description": "Cannibal theocracy", "affiliations": [], "enemies": ["Bridgeburners"], "icon": "P"},
]

TIMELINE = [
    {"id": "coral", "title": "Fall of Coral", "year": 1165, "book": "Memories of Ice", "location": "Coral", "characters": ["Rake"], "description": "The Seer is undone"},
    {"id": "pale", "title": "Siege of Pale", "year": 1163, "book": "Gardens of the Moon", "location": "Pale", "characters": ["Tattersail"], "description": "Moon's Spawn withdraws"},
    {"id": "knives", "title": "Night of Knives", "year": 1154, "book": "Night of Knives", "location": "Malaz City", "characters": ["Kellanved"], "description": "The Shadow Moon rises"},
    {"id": "chain", "title": "Chain of Dogs", "year": 1164, "book": "Deadhouse Gates", "location": "Seven Cities", "characters": ["Coltaine"], "description": "Coltaine crosses the continent"},
    {"id": "capustan", "title": "Siege of Capustan", "year": 1164, "book": "Memories of Ice", "location": "Capustan", "characters": ["Itkovian"], "description": "The Grey Swords hold"},
]

QUOTES = [
    {"id": "q1", "quote": "Witness.", "options": [{"text": "Tavore", "score": 0}, {"text": "Bonehunters", "score": 1}], "answerId": "bonehunters"},
    {"id": "q2", "quote": "I have yet to be killed.", "options": [{"text": "Karsa", "score": 1}, {"text": "Icarium", "score": 0}, {"text": "Onrack", "score": 0}], "answerId": "karsa"},
]


def make_character(cid: str, name: str | None = None, **stats) -> Character:
    return Character(id=cid, name=name or cid.title(), **stats)


def make_card(cid: str, domain: str = "Unaligned", aspect: str = "Luck") -> FateCard:
    return FateCard(id=cid, name=cid.title(), description="", domain=domain, aspect=aspect, icon="*")


@pytest.fixture()
def content_dir(tmp_path):
    """Temp directory holding one JSON file per content collection."""
    d = tmp_path / "content"
    d.mkdir()
    files = ContentConfig()
    for filename, data in (
        (files.characters_file, CHARACTERS),
        (files.quiz_file, QUESTIONS),
        (files.deck_file, DECK),
        (files.factions_file, FACTIONS),
        (files.timeline_file, TIMELINE),
        (files.quotes_file, QUOTES),
    ):
        (d / filename).write_text(json.dumps(data), encoding="utf-8")
    return d


@pytest.fixture()
def config(tmp_path, content_dir):
    return Config(
        db_path=str(tmp_path / "test.db"),
        content=ContentConfig(content_dir=str(content_dir)),
    )


@pytest.fixture()
def library(config):
    return ContentLibrary(config)


@pytest.fixture()
def store(config):
    """A ReadingStore backed by a temp file."""
    s = ReadingStore(config)
    s.init_db()
    yield s
    s.close()


@pytest.fixture()
def rng():
    return random.Random(1234)
