"""Shared fixtures for frob tracker tests."""

from __future__ import annotations

import pytest

from frob_tracker.config import TrackerSettings


class FakeClock:
    """Deterministic clock whose reading only changes when told to."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> float:
        self.value += seconds
        return self.value


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings(clock: FakeClock) -> TrackerSettings:
    return TrackerSettings(clock=clock)
