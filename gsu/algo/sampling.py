"""Weighted random selection."""

from __future__ import annotations

import math
from typing import Any, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np

from ..utils.seed import get_rng


class WeightedItem(NamedTuple):
    value: Any
    weight: float


WeightedInput = Union[WeightedItem, Tuple[Any, float]]


def _as_items(items: Sequence[WeightedInput]) -> list[WeightedItem]:
    normalized = []
    for entry in items:
        value, weight = entry
        weight = float(weight)
        if not math.isfinite(weight) or weight < 0.0:
            raise ValueError(f"weight must be finite and non-negative, got {weight!r} for {value!r}")
        normalized.append(WeightedItem(value, weight))
    return normalized


def weighted_choice(items: Sequence[WeightedInput], rng: Optional[np.random.Generator] = None) -> WeightedItem:
    """Pick one item with probability proportional to its weight.

    A value ``r`` is drawn uniformly from ``[0, total)`` and the items are walked
    in order; the first item whose cumulative span ``[cum, cum + weight)``
    contains ``r`` wins. Zero-weight items are never selected.

    Args:
        items: ``WeightedItem`` instances or plain ``(value, weight)`` pairs.
        rng: Optional generator. Defaults to the shared one from :mod:`gsu.utils.seed`.
    Raises:
        ValueError: If ``items`` is empty, a weight is negative or not finite,
            or the weights do not sum to a positive total.
    """

    normalized = _as_items(items)
    if not normalized:
        raise ValueError("cannot choose from an empty collection")
    weights = np.fromiter((item.weight for item in normalized), dtype=np.float64, count=len(normalized))
    cumulative = np.cumsum(weights)
    total = float(cumulative[-1])
    if total <= 0.0:
        raise ValueError("total weight must be positive")

    generator = rng if rng is not None else get_rng()
    r = generator.random() * total
    idx = int(np.searchsorted(cumulative, r, side="right"))
    # float rounding can push r onto the last boundary; fall back to the last positive weight
    if idx >= len(normalized):
        idx = int(np.flatnonzero(weights)[-1])
    return normalized[idx]


def weighted_value(items: Sequence[WeightedInput], rng: Optional[np.random.Generator] = None):
    """Same as :func:`weighted_choice` but return only the chosen value."""

    return weighted_choice(items, rng).value


__all__ = ["WeightedItem", "weighted_choice", "weighted_value"]
