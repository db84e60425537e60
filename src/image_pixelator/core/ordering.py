"""Randomized visitation order for tiles."""

import random
from typing import Optional


def visitation_order(total: int, rng: Optional[random.Random] = None) -> list[int]:
    """Draw a uniformly random permutation of ``range(total)``.

    Uses ``random.Random.shuffle`` (Fisher-Yates), so every one of the
    ``total!`` orderings is equally likely.

    Args:
        total: Number of tiles
        rng: Random generator to draw from (module-level generator if None)

    Returns:
        List containing each index in [0, total) exactly once
    """
    if total < 0:
        raise ValueError(f"total must be >= 0, got {total}")

    order = list(range(total))
    (rng or random).shuffle(order)
    return order


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Create a generator; a fixed seed makes runs reproducible."""
    return random.Random(seed)
