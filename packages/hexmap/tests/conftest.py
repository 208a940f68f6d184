"""Shared fixtures for hexmap tests."""
from __future__ import annotations

from collections.abc import Iterable

import pytest

from hexmap import CoordinateTransform


class ScriptedRandom:
    """Replays a fixed sequence of floats, cycling when exhausted."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = list(values)
        self._index = 0
        self.calls = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        self.calls += 1
        return value


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def transform() -> CoordinateTransform:
    return CoordinateTransform(hex_width=128, hex_height=112)
