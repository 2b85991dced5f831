"""Exceptions raised by the replay engine.

Conditions a caller is expected to render (no time origin, too few points)
are returned as values from the builders, not raised.
"""


class ReplayError(ValueError):
    """Base class for errors raised while replaying a session log."""


class SequenceError(ReplayError):
    """Event sequence numbers are duplicated or not integers."""


class MalformedEventError(ReplayError):
    """A recognized event carries a payload that cannot be used.

    Only raised when ``ReplayConfig.strict_payloads`` is enabled; by default
    malformed events are skipped.
    """

    def __init__(self, event_type: str, sequence: int, reason: str) -> None:
        super().__init__(f"{event_type} event #{sequence}: {reason}")
        self.event_type = event_type
        self.sequence = sequence
        self.reason = reason
