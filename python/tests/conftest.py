"""Shared fixtures and helpers for the test suite."""

from __future__ import annotations

import random

import pytest


class ScriptedRandom:
    """Random source that replays fixed answers and records each request."""

    def __init__(self, answers: list[int]) -> None:
        self._answers = list(answers)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        value = self._answers.pop(0)
        assert a <= value <= b, f"scripted value {value} outside [{a}, {b}]"
        return value


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
