"""Random seed helpers.

Script code draws from one shared generator so that a seeded run of a game
session replays the same weighted picks.
"""

from __future__ import annotations

import os
import random
from typing import Optional

import numpy as np

_GENERATOR: np.random.Generator = np.random.default_rng()


def seed_everything(seed: Optional[int] = None) -> int:
    """Seed Python, NumPy and the shared gameplay generator.

    Args:
        seed: Optional manual seed. If ``None``, one will be sampled from ``os.urandom``.
    Returns:
        The seed used.
    """

    global _GENERATOR
    if seed is None:
        seed = int.from_bytes(os.urandom(4), "little")
    seed = int(seed) & 0xFFFFFFFF
    random.seed(seed)
    np.random.seed(seed)
    _GENERATOR = np.random.default_rng(seed)
    return seed


def get_rng() -> np.random.Generator:
    """Return the shared generator used when callers do not pass their own."""

    return _GENERATOR


__all__ = ["seed_everything", "get_rng"]
