"""Tests for the duel score calculator and margin classifier."""

import random

import pytest

from malazan.config import DuelConfig
from malazan.games.duel import (
    DESCRIPTIONS,
    base_score,
    battle_description,
    calculate_score,
    classify_margin,
    primary_trait,
    random_fighters,
    resolve_duel,
    simulate_duel,
    trait_bonus,
)
from malazan.models import Margin
from conftest import make_character


@pytest.fixture()
def fighters():
    a = make_character("a", "Alpha", power_level=80, agility=60, intelligence=40, traits=["brutal"])
    b = make_character("b", "Beta", power_level=50, agility=50, intelligence=50, traits=["scholar"])
    return a, b


class TestScoring:
    def test_base_score_weights(self, fighters):
        a, _ = fighters
        assert base_score(a) == pytest.approx(80 * 0.5 + 60 * 0.3 + 40 * 0.2)

    def test_trait_bonus_exact_tags(self):
        c = make_character("c", traits=["brutal", "assassin", "rage", "shadowy"])
        # "shadowy" is not an exact "shadow" tag
        assert trait_bonus(c) == pytest.approx(2 + 1.5 + 1.5)

    def test_no_traits_no_bonus(self):
        assert trait_bonus(make_character("c")) == 0

    def test_jitter_bounds(self, fighters):
        a, _ = fighters
        raw = base_score(a) + trait_bonus(a)
        rng = random.Random(7)
        for _ in range(200):
            score = calculate_score(a, rng=rng)
            assert raw * 0.95 - 1e-9 <= score <= raw * 1.05 + 1e-9

    def test_jitter_from_config(self, fighters):
        a, _ = fighters
        cfg = DuelConfig(jitter_min=1.0, jitter_max=1.0)
        assert calculate_score(a, cfg, random.Random(1)) == pytest.approx(base_score(a) + 2)


class TestClassifyMargin:
    @pytest.mark.parametrize("difference,expected", [
        (0, Margin.CLOSE),
        (4.9, Margin.CLOSE),
        (5, Margin.DECISIVE),
        (13, Margin.DECISIVE),
        (14.99, Margin.DECISIVE),
        (15, Margin.OVERWHELMING),
        (40, Margin.OVERWHELMING),
    ])
    def test_boundaries(self, difference, expected):
        assert classify_margin(difference) is expected

    def test_symmetric(self):
        assert classify_margin(-13) is classify_margin(13)


class TestPrimaryTrait:
    def test_priority_order(self):
        assert primary_trait(["shadow", "brutal"]) == "brutal"

    def test_substring_match(self):
        assert primary_trait(["master-assassin"]) == "assassin"

    def test_falls_back_to_first_trait(self):
        assert primary_trait(["noble", "tragic"]) == "noble"

    def test_no_traits(self):
        assert primary_trait([]) == "warrior"


class TestResolveDuel:
    def test_decisive_example(self, fighters, rng):
        a, b = fighters
        result = resolve_duel(a, b, 52.0, 39.0, rng=rng)
        assert result.winner.id == "a"
        assert result.loser.id == "b"
        assert result.margin is Margin.DECISIVE
        assert result.winner_score == 52.0
        assert result.loser_score == 39.0

    def test_swapping_inputs_swaps_roles(self, fighters, rng):
        a, b = fighters
        forward = resolve_duel(a, b, 52.0, 39.0, rng=rng)
        backward = resolve_duel(b, a, 39.0, 52.0, rng=rng)
        assert forward.winner.id == backward.winner.id == "a"
        assert forward.loser.id == backward.loser.id == "b"
        assert forward.margin is backward.margin

    def test_tie_goes_to_second_fighter(self, fighters, rng):
        a, b = fighters
        result = resolve_duel(a, b, 40.0, 40.0, rng=rng)
        assert result.winner.id == "b"
        assert result.margin is Margin.CLOSE

    def test_scores_rounded(self, fighters, rng):
        a, b = fighters
        result = resolve_duel(a, b, 52.04, 39.96, rng=rng)
        assert result.winner_score == 52.0
        assert result.loser_score == 40.0

    def test_description_names_fighters(self, fighters, rng):
        a, b = fighters
        result = resolve_duel(a, b, 80.0, 40.0, rng=rng)
        assert result.margin is Margin.OVERWHELMING
        assert "Alpha" in result.battle_description or "Beta" in result.battle_description


class TestBattleDescription:
    def test_every_template_renders(self, fighters):
        a, b = fighters
        for margin, templates in DESCRIPTIONS.items():
            for i in range(len(templates)):
                rng = random.Random()
                rng.choice = lambda seq, i=i: seq[i]
                text = battle_description(a, b, margin, rng=rng)
                assert "{" not in text
                assert "Alpha" in text


class TestSimulateDuel:
    def test_stronger_fighter_wins(self, rng):
        strong = make_character("s", power_level=100, agility=100, intelligence=100)
        weak = make_character("w", power_level=10, agility=10, intelligence=10)
        for _ in range(20):
            result = simulate_duel(weak, strong, rng=rng)
            assert result.winner.id == "s"
            assert result.margin is Margin.OVERWHELMING

    def test_result_scores_ordered(self, fighters, rng):
        a, b = fighters
        result = simulate_duel(a, b, rng=rng)
        assert result.winner_score >= result.loser_score


class TestRandomFighters:
    def test_distinct(self, library, rng):
        a, b = random_fighters(library.characters, rng=rng)
        assert a.id != b.id

    def test_too_few(self):
        with pytest.raises(ValueError, match="at least 2"):
            random_fighters([make_character("solo")])
