"""Switches for the sampler's alternative behaviours.

``sampler.strict_top_edge`` and ``sampler.exact_cumulative`` change how a
weight table picks its bucket without adding keyword arguments to every
sampling function.  A flag is on when it is listed in ``RANDOMPICK_FEATURES``
(comma-separated, case-insensitive) or forced on by :func:`override`::

    from randompick.core import feature_flags

    with feature_flags.override(enable={feature_flags.EXACT_CUMULATIVE}):
        sample_indices(4, [1, 5, 15, 30], 1000)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from contextlib import contextmanager
from typing import Final, NamedTuple

logger = logging.getLogger(__name__)

_ENV_VAR: Final = "RANDOMPICK_FEATURES"

STRICT_TOP_EDGE: Final = "sampler.strict_top_edge"
EXACT_CUMULATIVE: Final = "sampler.exact_cumulative"

KNOWN_FLAGS: Final[dict[str, str]] = {
    STRICT_TOP_EDGE: "Return no result when float rounding leaves the draw above every bucket boundary.",
    EXACT_CUMULATIVE: "Select buckets from an integer cumulative table instead of float rescaling.",
}


class _Layer(NamedTuple):
    enable: frozenset[str]
    disable: frozenset[str]


_LAYERS: list[_Layer] = []


def _flag_key(name: str) -> str:
    return name.strip().lower()


def _keys(names: Iterable[str] | None) -> frozenset[str]:
    return frozenset(_flag_key(name) for name in (names or ()) if name.strip())


def _from_env() -> frozenset[str]:
    return _keys((os.getenv(_ENV_VAR) or "").split(","))


def _forced(key: str) -> bool | None:
    # A disable in any active layer beats an enable in any other.
    if any(key in layer.disable for layer in _LAYERS):
        return False
    if any(key in layer.enable for layer in _LAYERS):
        return True
    return None


def is_enabled(flag: str) -> bool:
    """Whether *flag* is on for the current ``override`` layers and environment."""

    key = _flag_key(flag)
    forced = _forced(key)
    if forced is not None:
        return forced
    return key in _from_env()


def enabled_flags() -> list[str]:
    """Known flags that are currently on, in sorted order."""

    return sorted(flag for flag in KNOWN_FLAGS if is_enabled(flag))


@contextmanager
def override(*, enable: Iterable[str] | None = None, disable: Iterable[str] | None = None):
    """Force flags on or off until the block exits; blocks may nest."""

    _LAYERS.append(_Layer(_keys(enable), _keys(disable)))
    try:
        yield
    finally:
        _LAYERS.pop()


def set_env_flags(flags: Iterable[str]) -> None:
    """Replace the env flag list; unknown names are kept but logged."""

    keys = _keys(flags)
    unknown = keys.difference(KNOWN_FLAGS)
    if unknown:
        logger.warning("Unknown feature flags: %s", ", ".join(sorted(unknown)))
    os.environ[_ENV_VAR] = ",".join(sorted(keys))
