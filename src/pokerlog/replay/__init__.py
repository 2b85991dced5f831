"""Session log replay: elapsed time, investment, chart series and live state."""

from pokerlog.replay.live import LiveSnapshot, live_snapshot
from pokerlog.replay.series import (
    ChartDataPoint,
    EmptyReason,
    SeriesUnavailable,
    build_series,
)

__all__ = [
    "ChartDataPoint",
    "EmptyReason",
    "LiveSnapshot",
    "SeriesUnavailable",
    "build_series",
    "live_snapshot",
]
