"""Weighted index sampling.

Each weight owns a bucket: a contiguous slice of ``[0, high)`` of nominal
width ``high / len(weights)``.  A draw first picks a bucket with probability
proportional to its weight, then picks an index uniformly inside the bucket's
slice.  With ``high == len(weights)`` every bucket is a single index; with
more indices than weights (100 prize slots split into 4 rarity tiers, say)
the weight chooses the tier and the second draw chooses the slot.

Bucket selection rescales the float weight sum onto the full output range of
the random source and walks the running total until it passes one
``[0, RANGE_MAX]`` draw.  Float accumulation keeps huge weight lists from
overflowing at the cost of rounding bias in the far tail.  The
``sampler.exact_cumulative`` flag swaps in an integer cumulative table
searched with :func:`bisect.bisect_right`.
"""

from __future__ import annotations

import logging
import operator
from bisect import bisect_right
from collections.abc import Iterable
from dataclasses import dataclass
from itertools import accumulate

from ..core import feature_flags
from ..core.random_source import RANGE_MAX, RandomLike, RandomSource, as_source

__all__ = [
    "WeightTable",
    "bucket_span",
    "coerce_weights",
    "sample_index",
    "sample_indices",
]

logger = logging.getLogger(__name__)


def coerce_weights(weights: Iterable[int]) -> tuple[int, ...]:
    """Return *weights* as a tuple of ints, rejecting negative or non-integer values."""

    values: list[int] = []
    for weight in weights:
        try:
            value = operator.index(weight)
        except TypeError as exc:
            raise ValueError(f"weights must be integers, got {type(weight).__name__}") from exc
        if value < 0:
            raise ValueError(f"weights must be non-negative, got {value}")
        values.append(value)
    return tuple(values)


def _coerce_non_negative(name: str, value: int) -> int:
    try:
        number = operator.index(value)
    except TypeError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if number < 0:
        raise ValueError(f"{name} must be >= 0, got {number}")
    return number


def bucket_span(bucket: int, bucket_count: int, high: int) -> tuple[int, int]:
    """Return the half-open index range ``[start, stop)`` owned by *bucket*.

    The last bucket always reaches ``high``.  When there are fewer indices
    than buckets, neighbouring buckets share an index so every span stays
    non-empty.
    """

    if bucket_count <= 0 or high <= 0:
        raise ValueError("bucket_count and high must be positive")
    if not 0 <= bucket < bucket_count:
        raise ValueError(f"bucket {bucket} outside [0, {bucket_count})")
    return _span(bucket, bucket_count, high, high / bucket_count)


def _span(bucket: int, bucket_count: int, high: int, scale: float) -> tuple[int, int]:
    start = min(int(bucket * scale), high - 1)
    stop = high if bucket == bucket_count - 1 else int((bucket + 1) * scale)
    return start, max(stop, start + 1)


@dataclass(frozen=True)
class WeightTable:
    """Per-call precomputation shared by every draw over the same weights."""

    high: int
    weights: tuple[int, ...]
    weights_sum: float
    max_weight: int
    index_scale: float
    weights_scale: float
    cumulative: tuple[int, ...]
    last_positive: int
    strict_top_edge: bool = False
    exact: bool = False

    @classmethod
    def build(
        cls,
        high: int,
        weights: Iterable[int],
        *,
        strict_top_edge: bool | None = None,
        exact: bool | None = None,
    ) -> WeightTable | None:
        """Return a table, or ``None`` when no index can ever be produced.

        ``strict_top_edge`` and ``exact`` default to the matching feature flags.
        """

        high = _coerce_non_negative("high", high)
        values = coerce_weights(weights)
        if not values:
            logger.debug("Empty weight list; nothing to sample.")
            return None
        if high == 0:
            logger.debug("Zero-length index range; nothing to sample.")
            return None

        weights_sum = 0.0
        max_weight = 0
        last_positive = -1
        for idx, weight in enumerate(values):
            weights_sum += float(weight)
            if weight > max_weight:
                max_weight = weight
            if weight > 0:
                last_positive = idx
        if max_weight == 0:
            logger.debug("All %d weights are zero; nothing to sample.", len(values))
            return None

        if strict_top_edge is None:
            strict_top_edge = feature_flags.is_enabled(feature_flags.STRICT_TOP_EDGE)
        if exact is None:
            exact = feature_flags.is_enabled(feature_flags.EXACT_CUMULATIVE)

        return cls(
            high=high,
            weights=values,
            weights_sum=weights_sum,
            max_weight=max_weight,
            index_scale=high / len(values),
            weights_scale=RANGE_MAX / weights_sum,
            cumulative=tuple(accumulate(values)),
            last_positive=last_positive,
            strict_top_edge=bool(strict_top_edge),
            exact=bool(exact),
        )

    @property
    def bucket_count(self) -> int:
        return len(self.weights)

    def draw(self, source: RandomSource) -> int | None:
        """Draw one index; ``None`` only under the strict top-edge policy."""

        if self.bucket_count == 1:
            # One bucket covers the whole range; its weight only has to be nonzero.
            return source.draw_uniform(0, self.high - 1)

        bucket = self._exact_bucket(source) if self.exact else self._scaled_bucket(source)
        if bucket is None:
            return None
        start, stop = _span(bucket, self.bucket_count, self.high, self.index_scale)
        if stop - start == 1:
            return start
        return source.draw_uniform(start, stop - 1)

    def _scaled_bucket(self, source: RandomSource) -> int | None:
        rnd = float(source.draw_uniform(0, RANGE_MAX))
        temp = 0.0
        for idx, weight in enumerate(self.weights):
            temp += weight * self.weights_scale
            if temp > rnd:
                return idx
        # Only reachable when rounding puts the final boundary at or below the draw.
        if self.strict_top_edge:
            logger.debug("Draw %.0f above final boundary %.0f; no result.", rnd, temp)
            return None
        logger.debug("Draw %.0f above final boundary %.0f; clamping to bucket %d.", rnd, temp, self.last_positive)
        return self.last_positive

    def _exact_bucket(self, source: RandomSource) -> int:
        rnd = source.draw_uniform(0, self.cumulative[-1] - 1)
        return bisect_right(self.cumulative, rnd)


def sample_index(high: int, weights: Iterable[int], rng: RandomLike = None) -> int | None:
    """Return one weighted index in ``[0, high)``.

    ``None`` when *weights* is empty, *high* is zero, or every weight is zero.
    *rng* is anything :func:`randompick.core.random_source.as_source` accepts.
    """

    table = WeightTable.build(high, weights)
    if table is None:
        return None
    return table.draw(as_source(rng))


def sample_indices(high: int, weights: Iterable[int], count: int, rng: RandomLike = None) -> list[int]:
    """Return *count* independent weighted indices in ``[0, high)``.

    The weight table is built once for all draws.  Degenerate inputs give an
    empty list rather than placeholders.
    """

    count = _coerce_non_negative("count", count)
    table = WeightTable.build(high, weights)
    if table is None or count == 0:
        return []

    source = as_source(rng)
    result: list[int] = []
    for _ in range(count):
        index = table.draw(source)
        if index is None:
            continue
        result.append(index)
    return result
