from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure "src" is on sys.path for imports in tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture(autouse=True)
def _clear_feature_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Flags leaking in from the developer's shell would change sampler behaviour.
    monkeypatch.delenv("RANDOMPICK_FEATURES", raising=False)


class ScriptedSource:
    """Random source replaying fixed values and recording each request."""

    def __init__(self, values: list[int]) -> None:
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def draw_uniform(self, low: int, high_inclusive: int) -> int:
        self.calls.append((low, high_inclusive))
        value = self.values.pop(0)
        assert low <= value <= high_inclusive, f"scripted value {value} outside [{low}, {high_inclusive}]"
        return value


@pytest.fixture
def scripted():
    return ScriptedSource
