"""Event log vocabulary."""

from pokerlog.events.model import (
    Addon,
    AllInRecord,
    EventType,
    HandComplete,
    HandsPassed,
    MalformedEvent,
    Rebuy,
    SessionEnd,
    SessionEvent,
    SessionParameters,
    SessionPause,
    SessionResume,
    SessionStart,
    StackUpdate,
    UnknownEvent,
)

__all__ = [
    "Addon",
    "AllInRecord",
    "EventType",
    "HandComplete",
    "HandsPassed",
    "MalformedEvent",
    "Rebuy",
    "SessionEnd",
    "SessionEvent",
    "SessionParameters",
    "SessionPause",
    "SessionResume",
    "SessionStart",
    "StackUpdate",
    "UnknownEvent",
]
