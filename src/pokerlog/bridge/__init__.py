"""Bridge from stored session rows to typed events."""

from pokerlog.bridge.records import (
    SessionExport,
    parse_all_in,
    parse_all_ins,
    parse_event,
    parse_events,
    parse_parameters,
    parse_session_export,
)

__all__ = [
    "SessionExport",
    "parse_all_in",
    "parse_all_ins",
    "parse_event",
    "parse_events",
    "parse_parameters",
    "parse_session_export",
]
