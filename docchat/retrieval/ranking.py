"""Score ordering shared by the retrievers."""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")


def rank_by_score(items: list[T], score: Callable[[T], float], rng: random.Random) -> list[T]:
    """Sort by descending score with equal scores in random order.

    Shuffling first and then sorting stably gives a uniform random permutation
    within each tie group, so repeated identical queries do not always surface
    the same entry. Pass a seeded ``rng`` for reproducible ordering.
    """
    shuffled = list(items)
    rng.shuffle(shuffled)
    return sorted(shuffled, key=score, reverse=True)
