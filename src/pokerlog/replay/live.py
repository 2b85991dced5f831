"""Point-in-time state of a session for the live stat panel."""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import NamedTuple

from pokerlog.config import DEFAULT_CONFIG, ReplayConfig
from pokerlog.events.model import (
    Addon,
    HandComplete,
    HandsPassed,
    Rebuy,
    SessionEvent,
    SessionParameters,
    StackUpdate,
)
from pokerlog.replay.clock import ElapsedClock
from pokerlog.replay.eventlog import order_events, skip_unusable, split_at_start
from pokerlog.replay.investment import InvestmentTracker


class LiveSnapshot(NamedTuple):
    """Derived state of a session at one moment."""

    current_stack: int
    elapsed_minutes: int
    is_paused: bool
    hand_count: int
    total_invested: int
    profit: int
    last_hand_at: datetime | None


def live_snapshot(
    events: Sequence[SessionEvent],
    params: SessionParameters,
    now: datetime | None = None,
    config: ReplayConfig | None = None,
) -> LiveSnapshot | None:
    """Replay the log up to ``now`` for the live stat panel.

    The stack starts at the initial investment, is replaced by every
    stack_update and grows with every rebuy and addon. Elapsed time counts
    completed minutes of play only.

    Args:
        events: Session events, any order; replayed by sequence.
        params: Static session parameters (buy_in is read).
        now: Moment of the snapshot. Read from the system clock when omitted.
        config: Replay configuration.

    Returns:
        LiveSnapshot, or None when the log has no session_start.
    """
    config = config or DEFAULT_CONFIG
    ordered = order_events(events)

    start, replayed = split_at_start(ordered)
    if start is None:
        return None

    if now is None:
        now = datetime.now(timezone.utc)

    clock = ElapsedClock(start.recorded_at)
    investment = InvestmentTracker.from_events(ordered, params.buy_in)

    stack = investment.initial_investment
    hand_count = 0
    last_hand_at = None

    for event in replayed:
        if skip_unusable(event, config) or clock.apply(event):
            continue

        if isinstance(event, StackUpdate):
            stack = event.amount
        elif isinstance(event, (Rebuy, Addon)):
            stack += event.amount
        elif isinstance(event, HandComplete):
            hand_count += 1
            last_hand_at = event.recorded_at
        elif isinstance(event, HandsPassed):
            hand_count += event.count

    total_invested = investment.total_as_of(now)
    return LiveSnapshot(
        current_stack=stack,
        elapsed_minutes=clock.elapsed_whole_minutes(now),
        is_paused=clock.is_paused,
        hand_count=hand_count,
        total_invested=total_invested,
        profit=stack - total_invested,
        last_hand_at=last_hand_at,
    )
