"""Empirical frequency check for weight tables.

Draws a large batch of indices, tallies them per bucket and compares each
bucket's observed share with its weight share.  Used by the ``check`` CLI
command and by the statistical tests, so a regression in the sampler shows up
as a bucket outside tolerance rather than as an opaque assertion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..core.random_source import RandomLike, as_source
from ..sampling.index_sampler import bucket_span, coerce_weights, sample_indices

__all__ = [
    "BucketStats",
    "FrequencyCheck",
    "FrequencyReport",
    "run_frequency_check",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrequencyCheck:
    """One sampling configuration to measure."""

    weights: tuple[int, ...]
    high: int | None = None
    draws: int = 1_000_000
    seed: int | None = None
    tolerance: float = 0.025

    def __post_init__(self) -> None:
        object.__setattr__(self, "weights", coerce_weights(self.weights))
        if not self.weights:
            raise ValueError("at least one weight is required")
        if sum(self.weights) <= 0:
            raise ValueError("at least one weight must be positive")
        if self.high is not None and self.high < len(self.weights):
            raise ValueError("high must be at least the number of weights")
        if self.draws <= 0:
            raise ValueError("draws must be positive")
        if not 0.0 < self.tolerance < 1.0:
            raise ValueError("tolerance must be in (0, 1)")

    def resolve_high(self) -> int:
        return self.high if self.high is not None else len(self.weights)


@dataclass(frozen=True)
class BucketStats:
    bucket: int
    start: int
    stop: int
    weight: int
    expected_share: float
    observed: int
    observed_share: float
    relative_error: float


@dataclass(frozen=True)
class FrequencyReport:
    check: FrequencyCheck
    high: int
    draws: int
    buckets: tuple[BucketStats, ...]

    @property
    def max_relative_error(self) -> float:
        return max((b.relative_error for b in self.buckets), default=0.0)

    @property
    def within_tolerance(self) -> bool:
        return self.max_relative_error <= self.check.tolerance

    def as_dict(self) -> dict[str, Any]:
        return {
            "weights": list(self.check.weights),
            "high": self.high,
            "draws": self.draws,
            "seed": self.check.seed,
            "tolerance": self.check.tolerance,
            "max_relative_error": self.max_relative_error,
            "within_tolerance": self.within_tolerance,
            "buckets": [
                {
                    "bucket": b.bucket,
                    "start": b.start,
                    "stop": b.stop,
                    "weight": b.weight,
                    "expected_share": b.expected_share,
                    "observed": b.observed,
                    "observed_share": b.observed_share,
                    "relative_error": b.relative_error,
                }
                for b in self.buckets
            ],
        }


def _relative_error(observed_share: float, expected_share: float) -> float:
    if expected_share <= 0.0:
        # A zero-weight bucket must never be hit.
        return observed_share
    return abs(observed_share - expected_share) / expected_share


def run_frequency_check(check: FrequencyCheck, rng: RandomLike = None) -> FrequencyReport:
    """Sample ``check.draws`` indices and summarise them per bucket.

    *rng* overrides ``check.seed`` when given.
    """

    high = check.resolve_high()
    source = as_source(rng if rng is not None else check.seed)
    indices = np.asarray(sample_indices(high, check.weights, check.draws, source), dtype=np.int64)
    drawn = int(indices.size)
    if drawn < check.draws:
        logger.warning("Only %d of %d draws produced an index.", drawn, check.draws)
    counts = np.bincount(indices, minlength=high)

    total_weight = float(sum(check.weights))
    bucket_count = len(check.weights)
    buckets: list[BucketStats] = []
    for bucket, weight in enumerate(check.weights):
        start, stop = bucket_span(bucket, bucket_count, high)
        observed = int(counts[start:stop].sum())
        expected_share = weight / total_weight
        observed_share = observed / drawn if drawn else 0.0
        buckets.append(
            BucketStats(
                bucket=bucket,
                start=start,
                stop=stop,
                weight=weight,
                expected_share=expected_share,
                observed=observed,
                observed_share=observed_share,
                relative_error=_relative_error(observed_share, expected_share),
            )
        )

    report = FrequencyReport(check=check, high=high, draws=drawn, buckets=tuple(buckets))
    logger.debug("Frequency check over %d draws: max relative error %.4f", drawn, report.max_relative_error)
    return report
