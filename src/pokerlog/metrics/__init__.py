"""All-in luck and EV metrics."""

from pokerlog.metrics.luck import AllInSummary, EquityAdjuster, summarize_all_ins

__all__ = [
    "AllInSummary",
    "EquityAdjuster",
    "summarize_all_ins",
]
