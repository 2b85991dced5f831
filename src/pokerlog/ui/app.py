"""Streamlit page for inspecting a recorded poker session.

Loads a session export (JSON with ``session``, ``events`` and ``allIns``)
and shows the live stat panel, the all-in summary and the session chart.

Run with:
    streamlit run src/pokerlog/ui/app.py
"""

import logging
from datetime import datetime, timezone

import streamlit as st

from pokerlog.bridge.records import SessionExport, parse_session_export
from pokerlog.display.chart import create_session_chart
from pokerlog.display.scaling import AxisMode, Variant, format_chips, format_elapsed_minutes
from pokerlog.errors import ReplayError
from pokerlog.metrics.luck import summarize_all_ins
from pokerlog.replay.live import live_snapshot
from pokerlog.replay.series import EmptyReason, SeriesUnavailable, build_series

logger = logging.getLogger(__name__)

EMPTY_MESSAGES = {
    EmptyReason.NO_TIME_ORIGIN: "This session has no start event.",
    EmptyReason.INSUFFICIENT_DATA: "No stack records yet.",
}


def render_sidebar() -> tuple[SessionExport | None, Variant, AxisMode]:
    """Render the sidebar and return the loaded session and display options."""
    st.sidebar.header("Session")

    uploaded_file = st.sidebar.file_uploader(
        "Session export (JSON)",
        type=["json"],
        help="Export containing session, events and allIns",
    )

    loaded = None
    if uploaded_file is not None:
        try:
            loaded = parse_session_export(uploaded_file.read().decode("utf-8"))
            st.sidebar.success(
                f"Loaded {len(loaded.events)} events and {len(loaded.all_ins)} all-ins"
            )
        except ValueError as e:
            logger.warning("Rejected session export: %s", e)
            st.sidebar.error(f"Error reading file: {e}")

    st.sidebar.divider()
    variant = st.sidebar.radio(
        "Game type",
        options=[Variant.CASH, Variant.TOURNAMENT],
        format_func=lambda v: "Cash game" if v is Variant.CASH else "Tournament",
    )
    axis_mode = st.sidebar.radio(
        "Horizontal axis",
        options=[AxisMode.TIME, AxisMode.HANDS],
        format_func=lambda m: "Time" if m is AxisMode.TIME else "Hands",
        horizontal=True,
    )
    return loaded, variant, axis_mode


def render_live_panel(session: SessionExport, now: datetime) -> None:
    """Render the current stack, profit and playing time."""
    snapshot = live_snapshot(session.events, session.params, now=now)
    if snapshot is None:
        st.info(EMPTY_MESSAGES[EmptyReason.NO_TIME_ORIGIN])
        return

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Stack", format_chips(snapshot.current_stack))
    col2.metric("Profit", format_chips(snapshot.profit))
    col3.metric(
        "Playing time",
        format_elapsed_minutes(snapshot.elapsed_minutes),
        "paused" if snapshot.is_paused else None,
        delta_color="off",
    )
    col4.metric("Hands", f"{snapshot.hand_count:,}")


def render_all_in_summary(session: SessionExport) -> None:
    """Render the all-in EV summary."""
    summary = summarize_all_ins(session.all_ins)
    if summary.count == 0:
        return

    st.subheader("All-ins")
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("All-ins", f"{summary.win_count}W / {summary.loss_count}L")
    col2.metric("Average equity", f"{summary.average_win_rate:.1f}%")
    col3.metric("Expected", format_chips(summary.all_in_ev))
    col4.metric(
        "Actual result",
        format_chips(summary.actual_result_total),
        format_chips(summary.ev_difference),
    )


def render_chart(
    session: SessionExport, variant: Variant, axis_mode: AxisMode, now: datetime
) -> None:
    """Render the session chart or an empty-state message."""
    series = build_series(session.events, session.all_ins, session.params, now=now)
    if isinstance(series, SeriesUnavailable):
        st.info(EMPTY_MESSAGES[series.reason])
        return

    fig = create_session_chart(
        series,
        variant=variant,
        axis_mode=axis_mode,
        big_blind=session.params.big_blind,
    )
    st.plotly_chart(fig, use_container_width=True)


def main() -> None:
    """Main entry point for the Streamlit application."""
    logging.basicConfig(level=logging.INFO)
    st.set_page_config(page_title="Pokerlog - Session Viewer", page_icon="♠", layout="wide")

    st.title("Pokerlog: Session Viewer")

    loaded, variant, axis_mode = render_sidebar()
    if loaded is None:
        st.info("Upload a session export in the sidebar to see its chart")
        return

    now = datetime.now(timezone.utc)
    try:
        render_live_panel(loaded, now)
        render_chart(loaded, variant, axis_mode, now)
    except ReplayError as e:
        logger.warning("Could not replay session: %s", e)
        st.error(f"Could not replay session: {e}")
    render_all_in_summary(loaded)


if __name__ == "__main__":
    main()
