"""Pick items by weight from one sequence or several concatenated ones.

The selectors only translate sampled indices back onto the caller's
sequences.  Several sequences are treated as one logical sequence without
building the concatenation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TypeVar

from ..core.random_source import RandomLike
from .index_sampler import sample_index, sample_indices

__all__ = [
    "pick",
    "pick_multi_slice",
    "pick_multiple",
    "pick_multiple_multi_slice",
    "locate",
    "resolve_index",
]

T = TypeVar("T")

logger = logging.getLogger(__name__)


def locate(slices: Sequence[Sequence[T]], index: int) -> tuple[int, int] | None:
    """Return ``(slice_number, offset)`` for *index* across *slices*."""

    if index < 0:
        return None
    for number, chunk in enumerate(slices):
        size = len(chunk)
        if index < size:
            return number, index
        index -= size
    logger.debug("Index outside the combined sequences; %d positions past the end.", index)
    return None


def resolve_index(slices: Sequence[Sequence[T]], index: int) -> T | None:
    """Return the item at *index* of the logical concatenation of *slices*."""

    position = locate(slices, index)
    if position is None:
        return None
    number, offset = position
    return slices[number][offset]


def pick(items: Sequence[T], weights: Iterable[int], rng: RandomLike = None) -> T | None:
    """Pick one item from *items* by *weights*."""

    index = sample_index(len(items), weights, rng)
    if index is None:
        return None
    return items[index]


def pick_multi_slice(slices: Sequence[Sequence[T]], weights: Iterable[int], rng: RandomLike = None) -> T | None:
    """Pick one item from *slices* as if they were a single sequence."""

    total = sum(len(chunk) for chunk in slices)
    index = sample_index(total, weights, rng)
    if index is None:
        return None
    return resolve_index(slices, index)


def pick_multiple(items: Sequence[T], weights: Iterable[int], count: int, rng: RandomLike = None) -> list[T]:
    """Pick *count* items from *items* with replacement."""

    return [items[index] for index in sample_indices(len(items), weights, count, rng)]


def pick_multiple_multi_slice(
    slices: Sequence[Sequence[T]],
    weights: Iterable[int],
    count: int,
    rng: RandomLike = None,
) -> list[T]:
    """Pick *count* items from *slices* with replacement."""

    total = sum(len(chunk) for chunk in slices)
    picked: list[T] = []
    for index in sample_indices(total, weights, count, rng):
        position = locate(slices, index)
        if position is None:
            continue
        number, offset = position
        picked.append(slices[number][offset])
    return picked
