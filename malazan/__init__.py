"""Malazan companion: quiz, deck of fate, quote match, faction and timeline browsers, duels."""
