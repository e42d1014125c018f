"""Game modules: quiz, duel, deck of fate, quote matching."""
