"""Pokerlog: session event-log replay and derived metrics for poker tracking."""

from pokerlog.config import ReplayConfig
from pokerlog.display.scaling import compute_axis_domain, format_elapsed_minutes
from pokerlog.metrics.luck import summarize_all_ins
from pokerlog.replay.live import live_snapshot
from pokerlog.replay.series import build_series

__version__ = "0.1.0"
__all__ = [
    "ReplayConfig",
    "build_series",
    "compute_axis_domain",
    "format_elapsed_minutes",
    "live_snapshot",
    "summarize_all_ins",
]
