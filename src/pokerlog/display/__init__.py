"""Axis scaling, labels and figures for session charts."""

from pokerlog.display.scaling import (
    AutoDomain,
    AxisDomain,
    AxisMode,
    Variant,
    compute_axis_domain,
    format_elapsed_minutes,
)

__all__ = [
    "AutoDomain",
    "AxisDomain",
    "AxisMode",
    "Variant",
    "compute_axis_domain",
    "format_elapsed_minutes",
]
