"""Shared fixtures for the test-suite."""

from __future__ import annotations

from typing import List, Tuple


class ScriptedGenerator:
    """Stand-in for ``numpy.random.Generator`` returning scripted binomial draws."""

    def __init__(self, draws: List[int]) -> None:
        self._draws = list(draws)
        self.calls: List[Tuple[int, float]] = []

    def binomial(self, n: int, p: float) -> int:
        self.calls.append((n, p))
        return self._draws.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._draws)
