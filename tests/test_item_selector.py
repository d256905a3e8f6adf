from __future__ import annotations

import random
from collections import Counter
from enum import Enum

import numpy as np

from randompick.sampling.item_selector import (
    locate,
    pick,
    pick_multi_slice,
    pick_multiple,
    pick_multiple_multi_slice,
    resolve_index,
)

N = 1_000_000
WEIGHTS = [1, 5, 15, 30]


class Prize(Enum):
    LEGENDARY = "legendary"
    RARE = "rare"
    ENCHANTED = "enchanted"
    COMMON = "common"


PRIZES = [Prize.LEGENDARY, Prize.RARE, Prize.ENCHANTED, Prize.COMMON]


def _assert_prize_ratios(picked: list[Prize]) -> None:
    counts = Counter(picked)
    counter = [counts[prize] for prize in PRIZES]
    for i in range(4):
        for j in range(i, 4):
            expected = counter[i] * WEIGHTS[j] / WEIGHTS[i]
            assert abs(counter[j] - expected) / counter[j] < 0.025, counter


def test_pick_returns_item_from_sequence() -> None:
    rng = random.Random(1)
    for _ in range(100):
        assert pick(PRIZES, WEIGHTS, rng) in PRIZES


def test_pick_degenerate_inputs() -> None:
    assert pick([], WEIGHTS) is None
    assert pick(PRIZES, []) is None
    assert pick(PRIZES, [0, 0, 0, 0]) is None
    assert pick_multi_slice([[], []], WEIGHTS) is None
    assert pick_multi_slice([PRIZES[:2], PRIZES[2:]], [0, 0]) is None
    assert pick_multiple([], WEIGHTS, 5) == []
    assert pick_multiple_multi_slice([[], []], WEIGHTS, 5) == []


def test_pick_loot_table_ratio() -> None:
    rng = random.Random(2)
    picked = [pick(PRIZES, WEIGHTS, rng) for _ in range(N)]

    _assert_prize_ratios(picked)


def test_pick_multiple_loot_table_ratio() -> None:
    picked = pick_multiple(PRIZES, WEIGHTS, N, random.Random(3))

    assert len(picked) == N
    _assert_prize_ratios(picked)


def test_pick_from_multiple_slices_loot_table_ratio() -> None:
    rng = random.Random(4)
    slices = [PRIZES[:2], PRIZES[2:]]
    picked = [pick_multi_slice(slices, WEIGHTS, rng) for _ in range(N)]

    _assert_prize_ratios(picked)


def test_pick_multiple_from_multiple_slices_loot_table_ratio() -> None:
    picked = pick_multiple_multi_slice([PRIZES[:2], PRIZES[2:]], WEIGHTS, N, random.Random(5))

    assert len(picked) == N
    _assert_prize_ratios(picked)


def test_multi_slice_matches_concatenated_sequence() -> None:
    slices = [["a", "b", "c"], [], ["d"], ["e", "f"]]
    flat = [item for chunk in slices for item in chunk]
    weights = [1, 2, 3]

    split = pick_multiple_multi_slice(slices, weights, 2_000, random.Random(6))
    joined = pick_multiple(flat, weights, 2_000, random.Random(6))

    assert split == joined


def test_multi_slice_keeps_none_items() -> None:
    picked = pick_multiple_multi_slice([["a"], [None]], [0, 1], 10, random.Random(7))

    assert picked == [None] * 10


def test_locate_and_resolve_walk_offsets() -> None:
    slices = [["a", "b"], [], ["c", "d", "e"]]

    assert locate(slices, 0) == (0, 0)
    assert locate(slices, 1) == (0, 1)
    assert locate(slices, 2) == (2, 0)
    assert locate(slices, 4) == (2, 2)
    assert locate(slices, 5) is None
    assert locate(slices, -1) is None
    assert resolve_index(slices, 3) == "d"
    assert resolve_index(slices, 9) is None


def test_pick_accepts_numpy_generator() -> None:
    first = pick_multiple(PRIZES, WEIGHTS, 50, np.random.default_rng(8))
    second = pick_multiple(PRIZES, WEIGHTS, 50, np.random.default_rng(8))

    assert first == second
    assert set(first) <= set(PRIZES)
