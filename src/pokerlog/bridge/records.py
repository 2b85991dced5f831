"""Bridge from stored session rows to typed events.

Rows arrive as plain mappings, either straight from the database layer
(snake_case keys, datetime values) or from a JSON export (camelCase keys,
ISO-8601 strings). Both spellings are accepted.

A row that lacks its event type, sequence or timestamp cannot be placed in
the log at all and raises ``ValueError``. A row whose payload is wrong for
its kind is still placed in the log, as a ``MalformedEvent``, so that the
reducers can decide what to do with it.
"""

import json
from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, NamedTuple

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

_MARKERS = {
    EventType.SESSION_START.value: SessionStart,
    EventType.SESSION_PAUSE.value: SessionPause,
    EventType.SESSION_RESUME.value: SessionResume,
    EventType.HAND_COMPLETE.value: HandComplete,
}

# kind -> (event class, payload key, smallest accepted value)
_AMOUNTS = {
    EventType.SESSION_END.value: (SessionEnd, "cashOut", 0),
    EventType.STACK_UPDATE.value: (StackUpdate, "amount", 0),
    EventType.REBUY.value: (Rebuy, "amount", 1),
    EventType.ADDON.value: (Addon, "amount", 1),
    EventType.HANDS_PASSED.value: (HandsPassed, "count", 1),
}


def _field(row: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in row:
        return row[camel]
    return row.get(snake, default)


def _as_int(value: Any) -> int | None:
    """Return value as an int if it is an integral number, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def parse_timestamp(value: Any) -> datetime:
    """Parse a datetime or an ISO-8601 string.

    Raises:
        ValueError: If the value is neither.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    raise ValueError(f"expected a datetime or ISO-8601 string, got {value!r}")


def parse_event(row: Mapping[str, Any]) -> SessionEvent:
    """Convert one stored event row into a typed event.

    Args:
        row: Mapping with eventType, eventData, recordedAt and sequence
            (camelCase or snake_case).

    Returns:
        The typed event, an UnknownEvent for kinds not known here, or a
        MalformedEvent when the payload is unusable.

    Raises:
        ValueError: If the row has no event type, no integer sequence or no
            timestamp.

    Example:
        >>> event = parse_event({
        ...     "eventType": "stack_update",
        ...     "eventData": {"amount": 12000},
        ...     "recordedAt": "2025-01-01T20:15:00+00:00",
        ...     "sequence": 3,
        ... })
        >>> event.amount
        12000
    """
    if not isinstance(row, Mapping):
        raise ValueError(f"event row must be an object, got {row!r}")
    event_type = _field(row, "eventType", "event_type")
    if not isinstance(event_type, str) or not event_type:
        raise ValueError("event row is missing its event type")

    sequence = _as_int(row.get("sequence"))
    if sequence is None:
        raise ValueError(f"{event_type} row has no integer sequence")

    recorded_raw = _field(row, "recordedAt", "recorded_at")
    if recorded_raw is None:
        raise ValueError(f"{event_type} row #{sequence} has no timestamp")
    recorded_at = parse_timestamp(recorded_raw)

    data = _field(row, "eventData", "event_data")

    if event_type in _MARKERS:
        return _MARKERS[event_type](sequence=sequence, recorded_at=recorded_at)

    if event_type in _AMOUNTS:
        event_cls, key, minimum = _AMOUNTS[event_type]
        if not isinstance(data, Mapping) or key not in data:
            return MalformedEvent(
                sequence=sequence,
                recorded_at=recorded_at,
                event_type=event_type,
                data=data,
                reason=f"missing {key}",
            )
        value = _as_int(data[key])
        if value is None or value < minimum:
            return MalformedEvent(
                sequence=sequence,
                recorded_at=recorded_at,
                event_type=event_type,
                data=data,
                reason=f"{key} must be an integer >= {minimum}, got {data[key]!r}",
            )
        return event_cls(sequence, recorded_at, value)

    return UnknownEvent(
        sequence=sequence, recorded_at=recorded_at, event_type=event_type, data=data
    )


def parse_events(rows: Iterable[Mapping[str, Any]]) -> list[SessionEvent]:
    """Parse a sequence of event rows, preserving their order."""
    return [parse_event(row) for row in rows]


def parse_all_in(row: Mapping[str, Any]) -> AllInRecord:
    """Convert one stored all-in row into an AllInRecord.

    winProbability may be a numeric string (as stored in a decimal column)
    or a number.

    Raises:
        ValueError: If a field is missing or out of range.
    """
    if not isinstance(row, Mapping):
        raise ValueError(f"all-in row must be an object, got {row!r}")
    pot_amount = _as_int(_field(row, "potAmount", "pot_amount"))
    if pot_amount is None:
        raise ValueError("all-in row has no integer potAmount")

    raw_probability = _field(row, "winProbability", "win_probability")
    if raw_probability is None or isinstance(raw_probability, bool):
        raise ValueError("all-in row has no winProbability")
    try:
        win_probability = Decimal(str(raw_probability))
    except InvalidOperation as exc:
        raise ValueError(f"invalid winProbability {raw_probability!r}") from exc
    if not win_probability.is_finite():
        raise ValueError(f"invalid winProbability {raw_probability!r}")

    actual_result = _field(row, "actualResult", "actual_result")
    if not isinstance(actual_result, bool):
        raise ValueError("all-in row has no boolean actualResult")

    recorded_raw = _field(row, "recordedAt", "recorded_at")
    if recorded_raw is None:
        raise ValueError("all-in row has no timestamp")

    run_it_times = _field(row, "runItTimes", "run_it_times")
    wins_in_runout = _field(row, "winsInRunout", "wins_in_runout")

    return AllInRecord(
        pot_amount=pot_amount,
        win_probability=win_probability,
        actual_result=actual_result,
        recorded_at=parse_timestamp(recorded_raw),
        run_it_times=_as_int(run_it_times) if run_it_times is not None else None,
        wins_in_runout=_as_int(wins_in_runout) if wins_in_runout is not None else None,
    )


def parse_all_ins(rows: Iterable[Mapping[str, Any]]) -> list[AllInRecord]:
    return [parse_all_in(row) for row in rows]


def parse_parameters(row: Mapping[str, Any]) -> SessionParameters:
    """Build SessionParameters from a stored session row.

    Raises:
        ValueError: If buyIn is missing or the row is both live and completed.
    """
    if not isinstance(row, Mapping):
        raise ValueError(f"session row must be an object, got {row!r}")
    buy_in = _as_int(_field(row, "buyIn", "buy_in"))
    if buy_in is None:
        raise ValueError("session row has no integer buyIn")

    end_time = _field(row, "endTime", "end_time")

    def optional_int(camel: str, snake: str) -> int | None:
        value = _field(row, camel, snake)
        if value is None:
            return None
        parsed = _as_int(value)
        if parsed is None:
            raise ValueError(f"session row has a non-integer {camel}: {value!r}")
        return parsed

    return SessionParameters(
        buy_in=buy_in,
        current_stack=optional_int("currentStack", "current_stack"),
        cash_out=optional_int("cashOut", "cash_out"),
        end_time=parse_timestamp(end_time) if end_time is not None else None,
        big_blind=optional_int("bigBlind", "big_blind"),
    )


class SessionExport(NamedTuple):
    params: SessionParameters
    events: list[SessionEvent]
    all_ins: list[AllInRecord]


def parse_session_export(content: str) -> SessionExport:
    """Parse a JSON session export with ``session``, ``events`` and ``allIns``.

    Raises:
        ValueError: If the JSON, its layout or any of its rows is invalid.
    """
    payload = json.loads(content)
    if not isinstance(payload, dict):
        raise ValueError("session export must be a JSON object")
    if not isinstance(payload.get("session"), dict):
        raise ValueError("session export has no session object")

    rows = {}
    for key in ("events", "allIns"):
        value = payload.get(key, [])
        if not isinstance(value, list):
            raise ValueError(f"session export {key} must be a list")
        rows[key] = value

    return SessionExport(
        params=parse_parameters(payload["session"]),
        events=parse_events(rows["events"]),
        all_ins=parse_all_ins(rows["allIns"]),
    )
