"""Helpers shared by the search implementations."""

from __future__ import annotations

import random
from collections.abc import Sequence


def sample(policy: Sequence[float], rng: random.Random) -> int:
    """Draw an action index from ``policy`` using ``rng``.

    The draw walks the cumulative distribution; if the probabilities sum to
    less than the drawn number, the last index is returned.
    """
    if not policy:
        raise ValueError("cannot sample from an empty policy")
    remaining = rng.random()
    for index, probability in enumerate(policy):
        remaining -= probability
        if remaining <= 0.0:
            return index
    return len(policy) - 1