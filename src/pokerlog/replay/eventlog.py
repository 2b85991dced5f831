"""Helpers shared by the reducers that walk a session event log."""

import logging
from collections.abc import Iterable, Sequence

from pokerlog.config import ReplayConfig
from pokerlog.errors import MalformedEventError, SequenceError
from pokerlog.events.model import (
    HandComplete,
    HandsPassed,
    MalformedEvent,
    SessionEvent,
    SessionStart,
    UnknownEvent,
)

logger = logging.getLogger(__name__)


def order_events(events: Iterable[SessionEvent]) -> list[SessionEvent]:
    """Return the events in ascending sequence order.

    Raises:
        SequenceError: If a sequence number is repeated or not an integer.
    """
    ordered = list(events)
    for event in ordered:
        if isinstance(event.sequence, bool) or not isinstance(event.sequence, int):
            raise SequenceError(
                f"{event.event_type} event has non-integer sequence {event.sequence!r}"
            )

    ordered.sort(key=lambda e: e.sequence)
    for previous, current in zip(ordered, ordered[1:]):
        if previous.sequence == current.sequence:
            raise SequenceError(
                f"sequence {current.sequence} is used by both "
                f"{previous.event_type} and {current.event_type}"
            )
    return ordered


def split_at_start(
    ordered: Sequence[SessionEvent],
) -> tuple[SessionStart | None, list[SessionEvent]]:
    """Find the first session_start and the events logged after it.

    Returns:
        (start event, later events), or (None, []) when the log has no start.
    """
    for index, event in enumerate(ordered):
        if isinstance(event, SessionStart):
            return event, list(ordered[index + 1 :])
    return None, []


def count_hands(events: Iterable[SessionEvent]) -> int:
    total = 0
    for event in events:
        if isinstance(event, HandComplete):
            total += 1
        elif isinstance(event, HandsPassed):
            total += event.count
    return total


def skip_unusable(event: SessionEvent, config: ReplayConfig) -> bool:
    """Report events that reducers must not act on.

    Returns:
        True for MalformedEvent and UnknownEvent, False otherwise.

    Raises:
        MalformedEventError: For a MalformedEvent when strict_payloads is set.
    """
    if isinstance(event, MalformedEvent):
        if config.strict_payloads:
            raise MalformedEventError(event.event_type, event.sequence, event.reason)
        logger.warning(
            "Skipping malformed %s event #%d: %s",
            event.event_type,
            event.sequence,
            event.reason,
        )
        return True
    if isinstance(event, UnknownEvent):
        logger.debug("Ignoring unknown %s event #%d", event.event_type, event.sequence)
        return True
    return False
