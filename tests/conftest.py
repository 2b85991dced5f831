"""Shared builders for session logs."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from pokerlog.events.model import (
    Addon,
    AllInRecord,
    HandComplete,
    HandsPassed,
    Rebuy,
    SessionPause,
    SessionResume,
    SessionStart,
    StackUpdate,
)

T0 = datetime(2025, 1, 1, 20, 0, tzinfo=timezone.utc)


def at(minutes: float) -> datetime:
    """Timestamp the given number of wall-clock minutes after T0."""
    return T0 + timedelta(minutes=minutes)


class LogBuilder:
    """Appends events with consecutive sequence numbers."""

    def __init__(self) -> None:
        self.events: list = []

    def _next(self) -> int:
        return len(self.events) + 1

    def start(self, minute: float = 0) -> "LogBuilder":
        self.events.append(SessionStart(self._next(), at(minute)))
        return self

    def pause(self, minute: float) -> "LogBuilder":
        self.events.append(SessionPause(self._next(), at(minute)))
        return self

    def resume(self, minute: float) -> "LogBuilder":
        self.events.append(SessionResume(self._next(), at(minute)))
        return self

    def stack(self, minute: float, amount: int) -> "LogBuilder":
        self.events.append(StackUpdate(self._next(), at(minute), amount))
        return self

    def rebuy(self, minute: float, amount: int) -> "LogBuilder":
        self.events.append(Rebuy(self._next(), at(minute), amount))
        return self

    def addon(self, minute: float, amount: int) -> "LogBuilder":
        self.events.append(Addon(self._next(), at(minute), amount))
        return self

    def hand(self, minute: float) -> "LogBuilder":
        self.events.append(HandComplete(self._next(), at(minute)))
        return self

    def hands(self, minute: float, count: int) -> "LogBuilder":
        self.events.append(HandsPassed(self._next(), at(minute), count))
        return self

    def add(self, event) -> "LogBuilder":
        self.events.append(event)
        return self


def all_in(
    minute: float,
    pot: int,
    probability: str,
    won: bool,
    run_it_times: int | None = None,
    wins_in_runout: int | None = None,
) -> AllInRecord:
    return AllInRecord(
        pot_amount=pot,
        win_probability=Decimal(probability),
        actual_result=won,
        recorded_at=at(minute),
        run_it_times=run_it_times,
        wins_in_runout=wins_in_runout,
    )


@pytest.fixture
def log() -> LogBuilder:
    return LogBuilder()
