"""Configuration for session replay and chart scaling."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ReplayConfig:
    """Tunable policies for the replay engine.

    Attributes:
        min_span_big_blinds: Minimum vertical span of the cash-game chart,
            in big blinds.
        strict_payloads: Raise MalformedEventError on a malformed event
            instead of skipping it.
        split_runouts: Credit run-it-multiple-times all-ins in the chart luck
            by the fraction of runouts won rather than by the single
            actual_result flag. The all-in summary always splits.
    """

    min_span_big_blinds: int = 100
    strict_payloads: bool = False
    split_runouts: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.min_span_big_blinds <= 0:
            raise ValueError("min_span_big_blinds must be positive")


DEFAULT_CONFIG = ReplayConfig()
