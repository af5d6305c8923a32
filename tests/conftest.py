from __future__ import annotations

from datetime import datetime

import pytest


class ManualTimer:
    """Monotonic timer the tests advance by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 6, 8, 3, 0)  # Monday


@pytest.fixture
def manual_timer() -> ManualTimer:
    return ManualTimer()
