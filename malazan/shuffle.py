"""Unbiased Fisher-Yates shuffle used by card draws, quotes and duels."""

import random
from typing import MutableSequence, Sequence, TypeVar

T = TypeVar("T")


def shuffle_in_place(
    items: MutableSequence[T], rng: random.Random | None = None,
) -> MutableSequence[T]:
    """Permute items in place and return them.

    Walks i from the last index down to 1, swapping items[i] with a
    uniformly chosen items[j], j in [0, i].
    """
    rand = rng or random
    for i in range(len(items) - 1, 0, -1):
        j = rand.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def shuffled(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a shuffled copy, leaving the input untouched."""
    copy = list(items)
    shuffle_in_place(copy, rng)
    return copy
