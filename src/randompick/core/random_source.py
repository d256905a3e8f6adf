"""Uniform random sources consumed by the samplers.

The samplers never touch a process-wide generator.  Every public function
accepts an ``rng`` argument which :func:`as_source` turns into something with a
``draw_uniform(low, high_inclusive)`` method.  Passing nothing falls back to a
per-thread :class:`random.Random`, so concurrent callers never share state.
"""

from __future__ import annotations

import logging
import random
import threading
from typing import Final, Optional, Protocol, Union, runtime_checkable

import numpy as np

__all__ = [
    "RANGE_MAX",
    "RandomSource",
    "RandomLike",
    "PythonRandomSource",
    "NumpyRandomSource",
    "default_source",
    "as_source",
]

logger = logging.getLogger(__name__)

# Largest value of a full-width draw (unsigned 64-bit).
RANGE_MAX: Final = 2**64 - 1


@runtime_checkable
class RandomSource(Protocol):
    def draw_uniform(self, low: int, high_inclusive: int) -> int: ...


# Everything :func:`as_source` accepts; an int is a seed.
RandomLike = Optional[Union[int, np.integer, random.Random, np.random.Generator, RandomSource]]


class PythonRandomSource:
    """Adapter around :class:`random.Random`."""

    def __init__(self, rng: random.Random | None = None, *, seed: int | None = None) -> None:
        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")
        self.rng = rng if rng is not None else random.Random(seed)

    def draw_uniform(self, low: int, high_inclusive: int) -> int:
        return self.rng.randint(low, high_inclusive)


class NumpyRandomSource:
    """Adapter around :class:`numpy.random.Generator`.

    Draws use ``uint64`` so the full ``[0, RANGE_MAX]`` range is reachable.
    """

    def __init__(self, generator: np.random.Generator | None = None, *, seed: int | None = None) -> None:
        if generator is not None and seed is not None:
            raise ValueError("pass either generator or seed, not both")
        self.generator = generator if generator is not None else np.random.default_rng(seed)

    def draw_uniform(self, low: int, high_inclusive: int) -> int:
        if low < 0 or high_inclusive > RANGE_MAX:
            raise ValueError(f"numpy draws are limited to [0, {RANGE_MAX}]")
        value = self.generator.integers(low, high_inclusive, endpoint=True, dtype=np.uint64)
        return int(value)


_LOCAL = threading.local()


def default_source() -> PythonRandomSource:
    """Return the calling thread's lazily created source."""

    source = getattr(_LOCAL, "source", None)
    if source is None:
        logger.debug("Creating thread-local random source for %s", threading.current_thread().name)
        source = PythonRandomSource()
        _LOCAL.source = source
    return source


def as_source(rng: RandomLike = None) -> RandomSource:
    """Coerce *rng* into a :class:`RandomSource`.

    Accepts ``None`` (thread default), an integer seed (``int`` or a numpy
    integer), :class:`random.Random`, :class:`numpy.random.Generator` or
    anything already implementing ``draw_uniform``.
    """

    if rng is None:
        return default_source()
    if isinstance(rng, bool):
        raise TypeError("rng must not be a bool")
    if isinstance(rng, (int, np.integer)):
        return PythonRandomSource(seed=int(rng))
    if isinstance(rng, random.Random):
        return PythonRandomSource(rng)
    if isinstance(rng, np.random.Generator):
        return NumpyRandomSource(rng)
    if isinstance(rng, RandomSource):
        return rng
    raise TypeError(f"unsupported random source: {type(rng).__name__}")
