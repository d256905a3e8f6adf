"""Weighted random selection of indices and items."""

from __future__ import annotations

from .core.random_source import RANGE_MAX, NumpyRandomSource, PythonRandomSource, RandomLike, RandomSource
from .sampling.index_sampler import WeightTable, bucket_span, sample_index, sample_indices
from .sampling.item_selector import (
    locate,
    pick,
    pick_multi_slice,
    pick_multiple,
    pick_multiple_multi_slice,
    resolve_index,
)

__all__ = [
    "RANGE_MAX",
    "NumpyRandomSource",
    "PythonRandomSource",
    "RandomLike",
    "RandomSource",
    "WeightTable",
    "bucket_span",
    "locate",
    "pick",
    "pick_multi_slice",
    "pick_multiple",
    "pick_multiple_multi_slice",
    "resolve_index",
    "sample_index",
    "sample_indices",
]

__version__ = "0.1.0"
