"""Typed vocabulary of the session event log.

Every event kind is its own frozen dataclass; the class is the discriminant
and ``event_type`` carries the name used in the stored log. Payload fields
are already validated here, so reducers never inspect raw dictionaries.
Recognized kinds whose payload could not be read are represented by
``MalformedEvent`` and kinds this package does not know by ``UnknownEvent``.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Union

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
MS_PER_MINUTE = 60_000


def to_millis(moment: datetime) -> int:
    """Convert a datetime to integer milliseconds since the Unix epoch.

    Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - EPOCH) // timedelta(milliseconds=1)


class EventType(str, Enum):
    """Event kinds recognized by the replay engine."""

    SESSION_START = "session_start"
    SESSION_PAUSE = "session_pause"
    SESSION_RESUME = "session_resume"
    SESSION_END = "session_end"
    STACK_UPDATE = "stack_update"
    REBUY = "rebuy"
    ADDON = "addon"
    HAND_COMPLETE = "hand_complete"
    HANDS_PASSED = "hands_passed"


@dataclass(frozen=True, slots=True)
class _LoggedEvent:
    sequence: int
    recorded_at: datetime

    @property
    def recorded_ms(self) -> int:
        return to_millis(self.recorded_at)


@dataclass(frozen=True, slots=True)
class SessionStart(_LoggedEvent):
    event_type: ClassVar[str] = EventType.SESSION_START.value


@dataclass(frozen=True, slots=True)
class SessionPause(_LoggedEvent):
    event_type: ClassVar[str] = EventType.SESSION_PAUSE.value


@dataclass(frozen=True, slots=True)
class SessionResume(_LoggedEvent):
    event_type: ClassVar[str] = EventType.SESSION_RESUME.value


@dataclass(frozen=True, slots=True)
class SessionEnd(_LoggedEvent):
    cash_out: int
    event_type: ClassVar[str] = EventType.SESSION_END.value


@dataclass(frozen=True, slots=True)
class StackUpdate(_LoggedEvent):
    """Absolute stack snapshot."""

    amount: int
    event_type: ClassVar[str] = EventType.STACK_UPDATE.value


@dataclass(frozen=True, slots=True)
class Rebuy(_LoggedEvent):
    """Chips purchased mid-session; adds to stack and investment."""

    amount: int
    event_type: ClassVar[str] = EventType.REBUY.value


@dataclass(frozen=True, slots=True)
class Addon(_LoggedEvent):
    """Same accounting as a rebuy under a different label."""

    amount: int
    event_type: ClassVar[str] = EventType.ADDON.value


@dataclass(frozen=True, slots=True)
class HandComplete(_LoggedEvent):
    event_type: ClassVar[str] = EventType.HAND_COMPLETE.value


@dataclass(frozen=True, slots=True)
class HandsPassed(_LoggedEvent):
    """Batch of hands played without individual records."""

    count: int
    event_type: ClassVar[str] = EventType.HANDS_PASSED.value


@dataclass(frozen=True, slots=True)
class UnknownEvent(_LoggedEvent):
    """Event kind not known to this package. Ignored by every reducer."""

    event_type: str
    data: Any = None


@dataclass(frozen=True, slots=True)
class MalformedEvent(_LoggedEvent):
    """Recognized event kind whose payload failed validation."""

    event_type: str
    data: Any
    reason: str


SessionEvent = Union[
    SessionStart,
    SessionPause,
    SessionResume,
    SessionEnd,
    StackUpdate,
    Rebuy,
    Addon,
    HandComplete,
    HandsPassed,
    UnknownEvent,
    MalformedEvent,
]

# Events that change the stack or the amount invested.
STACK_MUTATIONS = (StackUpdate, Rebuy, Addon)


@dataclass(frozen=True, slots=True)
class AllInRecord:
    """A logged all-in showdown for the tracked player.

    Attributes:
        pot_amount: Pot size in chips at the time of the all-in.
        win_probability: Player's equity as a percentage (0-100).
        actual_result: Whether the player won the pot.
        recorded_at: When the all-in happened.
        run_it_times: Number of runouts dealt, None for a single runout.
        wins_in_runout: Runouts won by the player, None for a single runout.
    """

    pot_amount: int
    win_probability: Decimal
    actual_result: bool
    recorded_at: datetime
    run_it_times: int | None = None
    wins_in_runout: int | None = None

    def __post_init__(self) -> None:
        """Validate record fields."""
        if self.pot_amount <= 0:
            raise ValueError("pot_amount must be positive")
        if not 0 <= self.win_probability <= 100:
            raise ValueError("win_probability must be between 0 and 100")
        if self.run_it_times is not None and self.run_it_times < 1:
            raise ValueError("run_it_times must be at least 1")
        if self.wins_in_runout is not None:
            if self.run_it_times is None:
                raise ValueError("wins_in_runout requires run_it_times")
            if not 0 <= self.wins_in_runout <= self.run_it_times:
                raise ValueError("wins_in_runout must be between 0 and run_it_times")

    @property
    def recorded_ms(self) -> int:
        return to_millis(self.recorded_at)

    @property
    def expected_value(self) -> float:
        """Equity share of the pot: pot_amount * win_probability / 100."""
        return self.pot_amount * float(self.win_probability) / 100.0

    @property
    def is_multi_runout(self) -> bool:
        return (
            self.run_it_times is not None
            and self.run_it_times > 1
            and self.wins_in_runout is not None
        )


@dataclass(frozen=True, slots=True)
class SessionParameters:
    """Static per-session facts read from the persisted session.

    Attributes:
        buy_in: Total stated investment, including every rebuy and addon
            recorded so far.
        current_stack: Stack right now; set only while the session is live.
        cash_out: Final stack; set only once the session is completed.
        end_time: When the session ended; set only once completed.
        big_blind: Big blind of a cash game, used for axis scaling.
    """

    buy_in: int
    current_stack: int | None = None
    cash_out: int | None = None
    end_time: datetime | None = None
    big_blind: int | None = None

    def __post_init__(self) -> None:
        """Validate that the session is either live or completed, not both."""
        if self.buy_in < 0:
            raise ValueError("buy_in cannot be negative")
        if self.current_stack is not None and (
            self.cash_out is not None or self.end_time is not None
        ):
            raise ValueError(
                "current_stack cannot be combined with cash_out or end_time"
            )
        if self.big_blind is not None and self.big_blind <= 0:
            raise ValueError("big_blind must be positive")

    @property
    def is_live(self) -> bool:
        return self.current_stack is not None

    @property
    def is_completed(self) -> bool:
        return self.end_time is not None and self.cash_out is not None
