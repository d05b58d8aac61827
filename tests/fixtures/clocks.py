"""Deterministic clocks for the store and the verification codes."""
from datetime import datetime, timedelta, timezone

import pytest

START = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TickingClock:
    """Moves forward by `step` on every read."""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(seconds=1)):
        self.moment = start
        self.step = step

    def __call__(self) -> datetime:
        self.moment += self.step
        return self.moment


class FrozenClock:
    """Only moves when told to."""

    def __init__(self, start: datetime = START):
        self.moment = start

    def __call__(self) -> datetime:
        return self.moment

    def advance(self, **kwargs) -> None:
        self.moment += timedelta(**kwargs)


@pytest.fixture
def ticking_clock():
    return TickingClock()


@pytest.fixture
def frozen_clock():
    return FrozenClock()
