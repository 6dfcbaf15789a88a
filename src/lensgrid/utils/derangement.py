"""Uniform random derangements.

Implements the linear-time algorithm from Martinez, Panholzer and Prodinger,
"Generating random derangements" (ANALCO 2008). Every derangement of size ``n``
is equally likely; no rejection of whole permutations is needed.
"""
from __future__ import annotations

import random
from functools import lru_cache
from typing import List


@lru_cache(maxsize=None)
def derangement_count(n: int) -> int:
    """Number of permutations of ``n`` items with no fixed point (subfactorial)."""
    if n == 0:
        return 1
    if n == 1:
        return 0
    return (n - 1) * (derangement_count(n - 1) + derangement_count(n - 2))


def random_derangement(n: int, rng: random.Random | None = None) -> List[int]:
    """Return a list ``p`` of ``range(n)`` with ``p[i] != i`` for every ``i``."""
    if n < 2:
        raise ValueError(f"no derangement exists for n={n}; need n >= 2")
    rng = rng or random.Random()
    perm = list(range(n))
    marked = [False] * n
    i = n - 1
    remaining = n
    while remaining >= 2:
        if not marked[i]:
            while True:
                j = rng.randrange(i)
                if not marked[j]:
                    break
            perm[i], perm[j] = perm[j], perm[i]
            # Probability that i and j close a 2-cycle among the remaining items.
            close = (remaining - 1) * derangement_count(remaining - 2) / derangement_count(remaining)
            if rng.random() < close:
                marked[j] = True
                remaining -= 1
            remaining -= 1
        i -= 1
    return perm


def is_derangement(perm: List[int]) -> bool:
    return all(value != index for index, value in enumerate(perm))
