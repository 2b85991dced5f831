"""Chart series reconstruction from a session event log.

A single forward pass over the log produces one data point per distinct
minute of play that saw a stack update, seeded with a zero point at the
start and closed with a point for "now" (live session) or for the cash-out
(completed session). Cash and tournament charts read the same series; they
only differ in which fields they display (see ``pokerlog.display``).
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import NamedTuple

from pokerlog.config import DEFAULT_CONFIG, ReplayConfig
from pokerlog.events.model import (
    STACK_MUTATIONS,
    AllInRecord,
    HandComplete,
    HandsPassed,
    SessionEvent,
    SessionParameters,
    StackUpdate,
)
from pokerlog.metrics.luck import EquityAdjuster
from pokerlog.replay.clock import ElapsedClock
from pokerlog.replay.eventlog import count_hands, order_events, skip_unusable, split_at_start
from pokerlog.replay.investment import InvestmentTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ChartDataPoint:
    """One point of the session chart.

    Attributes:
        elapsed_minutes: Active minutes since the start, breaks excluded.
        hand_count: Hands played so far.
        profit: Stack minus total investment.
        adjusted_profit: Profit with all-in luck removed.
        stack: Absolute stack, shown by the tournament chart.
    """

    elapsed_minutes: int
    hand_count: int
    profit: int
    adjusted_profit: float
    stack: int


class EmptyReason(str, Enum):
    """Why no series could be drawn."""

    NO_TIME_ORIGIN = "no_time_origin"
    INSUFFICIENT_DATA = "insufficient_data"


class SeriesUnavailable(NamedTuple):
    """Result returned instead of a series that cannot be drawn."""

    reason: EmptyReason
    n_points: int = 0


def initial_stack_estimate(
    events: Sequence[SessionEvent], params: SessionParameters
) -> int:
    """Starting stack for the zero point of the chart.

    Uses the first stack_update when no rebuy or addon precedes it, then
    the live current stack, then the buy-in.
    """
    for event in events:
        if isinstance(event, STACK_MUTATIONS):
            if isinstance(event, StackUpdate):
                return event.amount
            break
    if params.current_stack is not None:
        return params.current_stack
    return params.buy_in


def build_series(
    events: Sequence[SessionEvent],
    all_ins: Sequence[AllInRecord],
    params: SessionParameters,
    now: datetime | None = None,
    config: ReplayConfig | None = None,
) -> list[ChartDataPoint] | SeriesUnavailable:
    """Replay a session log into chart points.

    Args:
        events: Session events, any order; replayed by sequence.
        all_ins: All-in records of the session, any order.
        params: Static session parameters.
        now: Current time for the closing point of a live session. Read
            from the system clock when omitted.
        config: Replay configuration.

    Returns:
        Points in chronological order, or SeriesUnavailable when the log has
        no session_start or yields fewer than two points.

    Raises:
        SequenceError: If sequence numbers repeat.
        MalformedEventError: If a replayed event is malformed and
            config.strict_payloads is set.

    Example:
        >>> from datetime import datetime, timedelta
        >>> from pokerlog.events import SessionStart, StackUpdate
        >>> t0 = datetime(2025, 1, 1, 20, 0)
        >>> log = [SessionStart(1, t0), StackUpdate(2, t0 + timedelta(minutes=30), 12000)]
        >>> points = build_series(log, [], SessionParameters(buy_in=10000))
        >>> [(p.elapsed_minutes, p.profit) for p in points]
        [(0, 0), (30, 2000)]
    """
    config = config or DEFAULT_CONFIG
    ordered = order_events(events)

    start, replayed = split_at_start(ordered)
    if start is None:
        return SeriesUnavailable(EmptyReason.NO_TIME_ORIGIN)

    clock = ElapsedClock(start.recorded_at)
    investment = InvestmentTracker.from_events(ordered, params.buy_in)
    luck = EquityAdjuster.from_records(all_ins, config)

    series = [
        ChartDataPoint(
            elapsed_minutes=0,
            hand_count=0,
            profit=0,
            adjusted_profit=0.0,
            stack=initial_stack_estimate(replayed, params),
        )
    ]
    hand_count = 0

    for event in replayed:
        if skip_unusable(event, config) or clock.apply(event):
            continue

        if isinstance(event, HandComplete):
            hand_count += 1
        elif isinstance(event, HandsPassed):
            hand_count += event.count
        elif isinstance(event, StackUpdate):
            profit = event.amount - investment.total_as_of(event.recorded_at)
            point = ChartDataPoint(
                elapsed_minutes=clock.elapsed_minutes(event.recorded_at),
                hand_count=hand_count,
                profit=profit,
                adjusted_profit=profit - luck.cumulative_luck(event.recorded_at),
                stack=event.amount,
            )
            if point.elapsed_minutes == series[-1].elapsed_minutes:
                series[-1] = point
            else:
                series.append(point)

    closing = _closing_point(clock, luck, params, now, ordered, hand_count)
    if closing is not None:
        last_minute = series[-1].elapsed_minutes
        if closing.elapsed_minutes > last_minute:
            series.append(closing)
        elif closing.elapsed_minutes < last_minute:
            logger.warning(
                "Dropping closing point at minute %d before last update at minute %d",
                closing.elapsed_minutes,
                last_minute,
            )

    if len(series) < 2:
        return SeriesUnavailable(EmptyReason.INSUFFICIENT_DATA, n_points=len(series))
    return series


def _closing_point(
    clock: ElapsedClock,
    luck: EquityAdjuster,
    params: SessionParameters,
    now: datetime | None,
    ordered: Sequence[SessionEvent],
    hand_count: int,
) -> ChartDataPoint | None:
    if params.current_stack is not None:
        at = now if now is not None else datetime.now(timezone.utc)
        stack = params.current_stack
        hands = count_hands(ordered)
    elif params.is_completed:
        at = params.end_time
        stack = params.cash_out
        hands = hand_count
    else:
        return None

    profit = stack - params.buy_in
    return ChartDataPoint(
        elapsed_minutes=clock.elapsed_minutes(at),
        hand_count=hands,
        profit=profit,
        adjusted_profit=profit - luck.cumulative_luck(at),
        stack=stack,
    )
