"""Predicate and transform helpers over sequences and mappings."""

from __future__ import annotations

from typing import Callable, Dict, Hashable, List, Mapping, MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Predicate = Callable[[T], bool]

NOT_FOUND = -1


def find(seq: Sequence[T], pred: Predicate[T]) -> Optional[T]:
    """Return the first element matching ``pred`` or ``None``."""

    for item in seq:
        if pred(item):
            return item
    return None


def index_of(seq: Sequence[T], pred: Predicate[T]) -> int:
    """Return the 1-based position of the first match, or ``NOT_FOUND``.

    Positions count from one so that ``0`` is never a valid answer and callers
    can test the result directly against ``NOT_FOUND``.
    """

    for position, item in enumerate(seq, start=1):
        if pred(item):
            return position
    return NOT_FOUND


def any_match(seq: Sequence[T], pred: Predicate[T]) -> bool:
    for item in seq:
        if pred(item):
            return True
    return False


def all_match(seq: Sequence[T], pred: Predicate[T]) -> bool:
    for item in seq:
        if not pred(item):
            return False
    return True


def contains(seq: Sequence[T], value: T) -> bool:
    """Equality based membership test."""

    return any_match(seq, lambda item: item == value)


def insert_if_absent(seq: MutableSequence[T], value: T) -> bool:
    """Append ``value`` unless an equal element is already present.

    The sequence is mutated in place and must not be modified by anyone else
    while the call runs.

    Returns:
        ``True`` if the value was appended.
    """

    if contains(seq, value):
        return False
    seq.append(value)
    return True


def filter_items(seq: Sequence[T], pred: Predicate[T]) -> List[T]:
    """Return the matching elements in their original relative order."""

    return [item for item in seq if pred(item)]


def transform(seq: Sequence[T], fn: Callable[[T], U]) -> List[U]:
    return [fn(item) for item in seq]


def keys(mapping: Mapping[K, V]) -> List[K]:
    return list(mapping.keys())


def values(mapping: Mapping[K, V]) -> List[V]:
    return list(mapping.values())


def merge(a: Mapping[K, V], b: Mapping[K, V]) -> Dict[K, V]:
    """Return a new dict with the entries of ``a`` overridden by ``b``."""

    merged: Dict[K, V] = dict(a)
    merged.update(b)
    return merged


def starts_with(haystack: str, needle: str) -> bool:
    if len(needle) > len(haystack):
        return False
    return haystack[: len(needle)] == needle


__all__ = [
    "NOT_FOUND",
    "Predicate",
    "find",
    "index_of",
    "any_match",
    "all_match",
    "contains",
    "insert_if_absent",
    "filter_items",
    "transform",
    "keys",
    "values",
    "merge",
    "starts_with",
]
