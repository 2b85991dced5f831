"""Tests for the stored-row bridge."""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from pokerlog.bridge.records import (
    parse_all_in,
    parse_event,
    parse_events,
    parse_parameters,
    parse_session_export,
    parse_timestamp,
)
from pokerlog.events.model import (
    HandComplete,
    HandsPassed,
    MalformedEvent,
    Rebuy,
    SessionEnd,
    SessionStart,
    StackUpdate,
    UnknownEvent,
)


def row(event_type: str, data=None, sequence: int = 1, **extra) -> dict:
    return {
        "eventType": event_type,
        "eventData": data,
        "recordedAt": "2025-01-01T20:00:00Z",
        "sequence": sequence,
        **extra,
    }


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_zulu_suffix(self) -> None:
        """Test that a trailing Z is read as UTC."""
        parsed = parse_timestamp("2025-01-01T20:00:00Z")
        assert parsed == datetime(2025, 1, 1, 20, 0, tzinfo=timezone.utc)

    def test_datetime_passthrough(self) -> None:
        """Test that datetimes are returned unchanged."""
        moment = datetime(2025, 1, 1, 20, 0)
        assert parse_timestamp(moment) is moment

    def test_invalid_type_raises(self) -> None:
        """Test that numbers are rejected."""
        with pytest.raises(ValueError, match="ISO-8601"):
            parse_timestamp(1735761600)


class TestParseEvent:
    """Tests for parse_event."""

    def test_marker_event(self) -> None:
        """Test payload-free events."""
        event = parse_event(row("session_start", {}))
        assert isinstance(event, SessionStart)
        assert event.sequence == 1

    def test_stack_update(self) -> None:
        """Test that stack_update carries its amount."""
        event = parse_event(row("stack_update", {"amount": 12000}, sequence=4))
        assert isinstance(event, StackUpdate)
        assert event.amount == 12000
        assert event.sequence == 4

    def test_integral_float_amount(self) -> None:
        """Test that JSON floats with no fraction are accepted."""
        event = parse_event(row("rebuy", {"amount": 5000.0}))
        assert isinstance(event, Rebuy)
        assert event.amount == 5000

    def test_session_end_cash_out(self) -> None:
        """Test that session_end reads cashOut."""
        event = parse_event(row("session_end", {"cashOut": 0}))
        assert isinstance(event, SessionEnd)
        assert event.cash_out == 0

    def test_busted_stack_is_valid(self) -> None:
        """Test that a zero stack is a valid snapshot."""
        event = parse_event(row("stack_update", {"amount": 0}))
        assert isinstance(event, StackUpdate)

    def test_hands_passed(self) -> None:
        """Test that hands_passed reads count."""
        event = parse_event(row("hands_passed", {"count": 12}))
        assert isinstance(event, HandsPassed)
        assert event.count == 12

    def test_hand_complete_ignores_extra_payload(self) -> None:
        """Test that hand_complete accepts any payload."""
        assert isinstance(parse_event(row("hand_complete", {"position": "BTN"})), HandComplete)

    def test_missing_amount_is_malformed(self) -> None:
        """Test that stack_update without an amount is kept as malformed."""
        event = parse_event(row("stack_update", {}))
        assert isinstance(event, MalformedEvent)
        assert event.event_type == "stack_update"
        assert "missing amount" in event.reason

    def test_null_payload_is_malformed(self) -> None:
        """Test that a null payload on an amount event is malformed."""
        assert isinstance(parse_event(row("addon", None)), MalformedEvent)

    @pytest.mark.parametrize("amount", [-1, "100", True, 10.5])
    def test_invalid_stack_amount_is_malformed(self, amount) -> None:
        """Test that non-integer or negative amounts are malformed."""
        event = parse_event(row("stack_update", {"amount": amount}))
        assert isinstance(event, MalformedEvent)

    def test_zero_rebuy_is_malformed(self) -> None:
        """Test that purchases must be positive."""
        assert isinstance(parse_event(row("rebuy", {"amount": 0})), MalformedEvent)

    def test_unknown_kind(self) -> None:
        """Test that unknown kinds are kept, not rejected."""
        event = parse_event(row("player_seated", {"seatNumber": 3}))
        assert isinstance(event, UnknownEvent)
        assert event.event_type == "player_seated"
        assert event.data == {"seatNumber": 3}

    def test_snake_case_keys(self) -> None:
        """Test rows coming straight from the database layer."""
        event = parse_event(
            {
                "event_type": "stack_update",
                "event_data": {"amount": 9000},
                "recorded_at": datetime(2025, 1, 1, 20, 0, tzinfo=timezone.utc),
                "sequence": 2,
            }
        )
        assert isinstance(event, StackUpdate)
        assert event.amount == 9000

    def test_missing_type_raises(self) -> None:
        """Test that a row without a type raises ValueError."""
        with pytest.raises(ValueError, match="missing its event type"):
            parse_event({"sequence": 1, "recordedAt": "2025-01-01T20:00:00Z"})

    def test_missing_sequence_raises(self) -> None:
        """Test that a row without a sequence raises ValueError."""
        with pytest.raises(ValueError, match="no integer sequence"):
            parse_event({"eventType": "session_start", "recordedAt": "2025-01-01T20:00:00Z"})

    def test_missing_timestamp_raises(self) -> None:
        """Test that a row without a timestamp raises ValueError."""
        with pytest.raises(ValueError, match="no timestamp"):
            parse_event({"eventType": "session_start", "sequence": 1})

    def test_parse_events_preserves_order(self) -> None:
        """Test that parse_events keeps input order."""
        events = parse_events([row("session_start", sequence=2), row("hand_complete", sequence=1)])
        assert [e.sequence for e in events] == [2, 1]


class TestParseAllIn:
    """Tests for parse_all_in."""

    def test_decimal_string_probability(self) -> None:
        """Test that a decimal column string is read exactly."""
        record = parse_all_in(
            {
                "potAmount": 10000,
                "winProbability": "65.50",
                "actualResult": True,
                "recordedAt": "2025-01-01T20:30:00+00:00",
            }
        )
        assert record.win_probability == Decimal("65.50")
        assert record.run_it_times is None

    def test_numeric_probability_and_runouts(self) -> None:
        """Test numeric probability and run-it-twice fields."""
        record = parse_all_in(
            {
                "pot_amount": 8000,
                "win_probability": 45,
                "actual_result": False,
                "recorded_at": "2025-01-01T20:30:00Z",
                "run_it_times": 2,
                "wins_in_runout": 1,
            }
        )
        assert record.win_probability == Decimal("45")
        assert record.is_multi_runout

    def test_invalid_probability_raises(self) -> None:
        """Test that a non-numeric probability raises ValueError."""
        with pytest.raises(ValueError, match="invalid winProbability"):
            parse_all_in(
                {
                    "potAmount": 1000,
                    "winProbability": "high",
                    "actualResult": True,
                    "recordedAt": "2025-01-01T20:30:00Z",
                }
            )

    def test_missing_result_raises(self) -> None:
        """Test that actualResult must be a boolean."""
        with pytest.raises(ValueError, match="actualResult"):
            parse_all_in(
                {
                    "potAmount": 1000,
                    "winProbability": "50",
                    "recordedAt": "2025-01-01T20:30:00Z",
                }
            )


class TestParseParameters:
    """Tests for parse_parameters."""

    def test_live_session(self) -> None:
        """Test a live session row."""
        params = parse_parameters({"buyIn": 10000, "currentStack": 12500, "bigBlind": 100})
        assert params.is_live
        assert params.big_blind == 100

    def test_completed_session(self) -> None:
        """Test a completed session row."""
        params = parse_parameters(
            {"buyIn": 10000, "cashOut": 7000, "endTime": "2025-01-01T23:00:00Z"}
        )
        assert params.is_completed
        assert params.end_time == datetime(2025, 1, 1, 23, 0, tzinfo=timezone.utc)

    def test_missing_buy_in_raises(self) -> None:
        """Test that buyIn is required."""
        with pytest.raises(ValueError, match="no integer buyIn"):
            parse_parameters({"currentStack": 100})

    def test_non_integer_field_raises(self) -> None:
        """Test that optional fields must be integers."""
        with pytest.raises(ValueError, match="non-integer bigBlind"):
            parse_parameters({"buyIn": 10000, "bigBlind": "2/5"})

    def test_non_object_row_raises(self) -> None:
        """Test that a session row that is not an object raises ValueError."""
        with pytest.raises(ValueError, match="session row must be an object"):
            parse_parameters(["buyIn", 10000])  # type: ignore[arg-type]


class TestParseSessionExport:
    """Tests for parse_session_export."""

    def test_full_export(self) -> None:
        """Test an export with session, events and all-ins."""
        content = json.dumps(
            {
                "session": {"buyIn": 10000, "currentStack": 11000, "bigBlind": 100},
                "events": [
                    row("session_start", {}, sequence=1),
                    row("stack_update", {"amount": 11000}, sequence=2),
                ],
                "allIns": [
                    {
                        "potAmount": 4000,
                        "winProbability": "55.00",
                        "actualResult": True,
                        "recordedAt": "2025-01-01T20:10:00Z",
                    }
                ],
            }
        )
        export = parse_session_export(content)
        assert export.params.is_live
        assert [type(e) for e in export.events] == [SessionStart, StackUpdate]
        assert export.all_ins[0].pot_amount == 4000

    def test_events_optional(self) -> None:
        """Test that missing events and allIns are empty lists."""
        export = parse_session_export(json.dumps({"session": {"buyIn": 500}}))
        assert export.events == []
        assert export.all_ins == []

    @pytest.mark.parametrize(
        "payload, message",
        [
            ([1, 2, 3], "must be a JSON object"),
            ({"events": []}, "no session object"),
            ({"session": "cash"}, "no session object"),
            ({"session": {"buyIn": 1}, "events": {"a": 1}}, "events must be a list"),
            ({"session": {"buyIn": 1}, "events": [42]}, "event row must be an object"),
            ({"session": {"buyIn": 1}, "allIns": ["x"]}, "all-in row must be an object"),
        ],
    )
    def test_invalid_layout_raises(self, payload, message: str) -> None:
        """Test that well-formed JSON of the wrong shape raises ValueError."""
        with pytest.raises(ValueError, match=message):
            parse_session_export(json.dumps(payload))

    def test_invalid_json_raises(self) -> None:
        """Test that broken JSON raises ValueError."""
        with pytest.raises(ValueError):
            parse_session_export("{not json")
