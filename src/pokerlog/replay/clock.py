"""Active-time accounting for a session with breaks.

Elapsed time on the chart is playing time: every interval between a
``session_pause`` and the following ``session_resume`` is cut out.
"""

import math
from datetime import datetime

from pokerlog.events.model import (
    MS_PER_MINUTE,
    SessionEvent,
    SessionPause,
    SessionResume,
    to_millis,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


class ElapsedClock:
    """Running total of paused time, driven forward one event at a time.

    Args:
        start: Timestamp of the session_start event.

    Example:
        >>> from datetime import datetime, timedelta
        >>> t0 = datetime(2025, 1, 1, 20, 0)
        >>> clock = ElapsedClock(t0)
        >>> clock.pause(t0 + timedelta(minutes=10))
        >>> clock.resume(t0 + timedelta(minutes=40))
        >>> clock.elapsed_minutes(t0 + timedelta(minutes=50))
        20
    """

    __slots__ = ("start_ms", "closed_pause_ms", "pause_started_ms")

    def __init__(self, start: datetime) -> None:
        self.start_ms = to_millis(start)
        self.closed_pause_ms = 0
        self.pause_started_ms: int | None = None

    @property
    def is_paused(self) -> bool:
        return self.pause_started_ms is not None

    def pause(self, at: datetime) -> None:
        # A second pause while one is open does not move the pause start.
        if self.pause_started_ms is None:
            self.pause_started_ms = to_millis(at)

    def resume(self, at: datetime) -> None:
        if self.pause_started_ms is None:
            return
        self.closed_pause_ms += max(0, to_millis(at) - self.pause_started_ms)
        self.pause_started_ms = None

    def apply(self, event: SessionEvent) -> bool:
        """Feed a pause or resume event. Returns False for any other event."""
        if isinstance(event, SessionPause):
            self.pause(event.recorded_at)
            return True
        if isinstance(event, SessionResume):
            self.resume(event.recorded_at)
            return True
        return False

    def paused_ms_as_of(self, at: datetime) -> int:
        """Paused milliseconds up to ``at``, including a pause still open."""
        paused = self.closed_pause_ms
        if self.pause_started_ms is not None:
            paused += max(0, to_millis(at) - self.pause_started_ms)
        return paused

    def active_ms(self, at: datetime) -> int:
        active = to_millis(at) - self.start_ms - self.paused_ms_as_of(at)
        return max(0, active)

    def elapsed_minutes(self, at: datetime) -> int:
        """Active minutes since the start, rounded to the nearest minute."""
        return round_half_up(self.active_ms(at) / MS_PER_MINUTE)

    def elapsed_whole_minutes(self, at: datetime) -> int:
        """Active minutes since the start, counting completed minutes only."""
        return self.active_ms(at) // MS_PER_MINUTE
