"""Plotly figures for session charts."""

from collections.abc import Sequence

import numpy as np
import plotly.graph_objects as go  # type: ignore[import-untyped]

from pokerlog.config import ReplayConfig
from pokerlog.display.scaling import (
    AutoDomain,
    AxisDomain,
    AxisMode,
    Variant,
    axis_values,
    compute_axis_domain,
    format_axis_label,
    format_chips,
    get_variant,
    series_values,
)
from pokerlog.replay.series import ChartDataPoint

COLORS = {
    "profit": "#2E7D32",
    "adjusted_profit": "#EF6C00",
    "stack": "#1565C0",
    "reference": "#9E9E9E",
    "grid": "rgba(93, 64, 55, 0.3)",
}

# Keep tick labels readable on long sessions
MAX_TICKS = 8


def tick_positions(x_values: np.ndarray, max_ticks: int = MAX_TICKS) -> list[int]:
    """Evenly spaced integer tick positions covering 0 to the last x value."""
    if x_values.size == 0:
        return [0]
    upper = int(np.max(x_values))
    if upper == 0:
        return [0]
    step = max(1, int(np.ceil(upper / max_ticks)))
    return list(range(0, upper + 1, step))


def create_session_chart(
    series: Sequence[ChartDataPoint],
    variant: Variant | str = Variant.CASH,
    axis_mode: AxisMode | str = AxisMode.TIME,
    big_blind: int | None = None,
    config: ReplayConfig | None = None,
    height: int = 360,
) -> go.Figure:
    """Create a Plotly line chart from a built series.

    Args:
        series: Points returned by build_series.
        variant: "cash" plots profit and adjusted profit, "tournament" the
            stack.
        axis_mode: "time" for active minutes, "hands" for hands played.
        big_blind: Cash-game big blind for the minimum axis span.
        config: Replay configuration.
        height: Figure height in pixels.

    Returns:
        Plotly Figure object.
    """
    display = get_variant(variant)
    mode = AxisMode(axis_mode)
    x_values = axis_values(series, mode)
    hover_labels = [format_axis_label(x, mode) for x in x_values]

    fig = go.Figure()

    for field, label in zip(display.fields, display.labels):
        y_values = series_values(series, field)
        fig.add_trace(
            go.Scatter(
                x=x_values,
                y=y_values,
                mode="lines",
                name=label,
                line={"color": COLORS[field], "width": 2},
                customdata=np.column_stack(
                    [hover_labels, [format_chips(y) for y in y_values]]
                ),
                hovertemplate="%{customdata[0]}: %{customdata[1]}<extra>" + label + "</extra>",
            )
        )

    for y in display.reference_lines:
        fig.add_hline(
            y=y,
            line_dash="dash",
            line_color=COLORS["reference"],
            annotation_text="±0",
            annotation_position="bottom right",
        )

    ticks = tick_positions(x_values)
    xaxis = {
        "range": [0, int(x_values.max()) if x_values.size else 0],
        "tickmode": "array",
        "tickvals": ticks,
        "ticktext": [format_axis_label(t, mode) for t in ticks],
        "gridcolor": COLORS["grid"],
    }

    domain = compute_axis_domain(series, display.variant, big_blind, config)
    yaxis: dict = {"gridcolor": COLORS["grid"], "tickformat": ",d"}
    if isinstance(domain, AxisDomain):
        yaxis["range"] = [domain.lower, domain.upper]
    elif domain is AutoDomain.FROM_ZERO:
        yaxis["rangemode"] = "tozero"

    fig.update_layout(
        height=height,
        margin={"t": 30, "b": 40, "l": 60, "r": 20},
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        hovermode="x unified",
        showlegend=len(display.fields) > 1,
        xaxis=xaxis,
        yaxis=yaxis,
    )

    return fig
