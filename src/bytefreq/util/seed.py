from __future__ import annotations

import random
from typing import Optional


def make_rng(seed: Optional[int]) -> random.Random:
    """Build the generator handle used for reservoir draws.

    A fresh OS-seeded generator is returned when ``seed`` is None.
    """
    if seed is None:
        return random.Random()
    return random.Random(seed)
