"""Axis scaling and labelling for session charts.

A built series is shown in one of two variants. Cash games plot profit
and all-in adjusted profit around a zero line; when the big blind is
known the vertical axis always spans at least a fixed number of big blinds
so that small swings do not fill the whole chart. Tournaments plot the
absolute stack from zero upward.

The horizontal axis can read either active minutes or hands played.
Switching it never changes the series, only which field is read and how
labels are written.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from pokerlog.config import DEFAULT_CONFIG, ReplayConfig
from pokerlog.replay.series import ChartDataPoint


class Variant(str, Enum):
    CASH = "cash"
    TOURNAMENT = "tournament"


class AxisMode(str, Enum):
    TIME = "time"
    HANDS = "hands"


class AxisDomain(NamedTuple):
    """Fixed vertical axis range."""

    lower: float
    upper: float

    @property
    def span(self) -> float:
        return self.upper - self.lower


class AutoDomain(str, Enum):
    """Vertical axis range left to the charting library."""

    DATA = "auto"
    FROM_ZERO = "from_zero"


DomainRule = Callable[
    [Sequence[ChartDataPoint], int | None, ReplayConfig], AxisDomain | AutoDomain
]


@dataclass(frozen=True, slots=True)
class DisplayVariant:
    """How one chart variant reads and scales a series.

    Attributes:
        variant: Variant key.
        fields: ChartDataPoint fields drawn as lines, in drawing order.
        labels: Legend label for each field.
        reference_lines: Horizontal lines drawn at these y values.
        domain_rule: Computes the vertical axis domain.
    """

    variant: Variant
    fields: tuple[str, ...]
    labels: tuple[str, ...]
    reference_lines: tuple[float, ...]
    domain_rule: DomainRule


def series_values(series: Sequence[ChartDataPoint], field: str) -> NDArray[np.float64]:
    """Extract one field of every point as a float array."""
    return np.array([getattr(point, field) for point in series], dtype=np.float64)


def padded_domain(values: NDArray[np.float64], min_span: float) -> AxisDomain:
    """Data range widened symmetrically until it spans at least min_span.

    Example:
        >>> padded_domain(np.array([-200.0, 200.0]), 10000)
        AxisDomain(lower=-5000.0, upper=5000.0)
    """
    if values.size == 0:
        raise ValueError("values cannot be empty")

    data_min = float(np.min(values))
    data_max = float(np.max(values))
    data_span = data_max - data_min
    if data_span >= min_span:
        return AxisDomain(data_min, data_max)

    buffer = (min_span - data_span) / 2
    return AxisDomain(data_min - buffer, data_max + buffer)


def _cash_domain(
    series: Sequence[ChartDataPoint], big_blind: int | None, config: ReplayConfig
) -> AxisDomain | AutoDomain:
    if big_blind is None:
        return AutoDomain.DATA
    values = np.concatenate(
        [series_values(series, "profit"), series_values(series, "adjusted_profit")]
    )
    return padded_domain(values, config.min_span_big_blinds * big_blind)


def _tournament_domain(
    series: Sequence[ChartDataPoint], big_blind: int | None, config: ReplayConfig
) -> AxisDomain | AutoDomain:
    return AutoDomain.FROM_ZERO


VARIANTS: dict[Variant, DisplayVariant] = {
    Variant.CASH: DisplayVariant(
        variant=Variant.CASH,
        fields=("profit", "adjusted_profit"),
        labels=("Profit", "All-in adjusted"),
        reference_lines=(0.0,),
        domain_rule=_cash_domain,
    ),
    Variant.TOURNAMENT: DisplayVariant(
        variant=Variant.TOURNAMENT,
        fields=("stack",),
        labels=("Stack",),
        reference_lines=(),
        domain_rule=_tournament_domain,
    ),
}


def get_variant(variant: Variant | str) -> DisplayVariant:
    """Look up a display variant by key.

    Raises:
        ValueError: If the key is not a known variant.
    """
    return VARIANTS[Variant(variant)]


def compute_axis_domain(
    series: Sequence[ChartDataPoint],
    variant: Variant | str,
    big_blind: int | None = None,
    config: ReplayConfig | None = None,
) -> AxisDomain | AutoDomain:
    """Vertical axis domain for a series shown in the given variant.

    Args:
        series: Points returned by build_series.
        variant: "cash" or "tournament".
        big_blind: Cash-game big blind. Ignored for tournaments.
        config: Replay configuration (min_span_big_blinds is read).

    Returns:
        AxisDomain for a cash game with a big blind, AutoDomain.FROM_ZERO
        for tournaments, AutoDomain.DATA otherwise.

    Raises:
        ValueError: If the variant is unknown, or a cash series with a big
            blind is empty.
    """
    config = config or DEFAULT_CONFIG
    display = get_variant(variant)
    if big_blind is not None and big_blind <= 0:
        raise ValueError("big_blind must be positive")
    return display.domain_rule(series, big_blind, config)


def axis_field(mode: AxisMode | str) -> str:
    """ChartDataPoint field read by the horizontal axis."""
    if AxisMode(mode) is AxisMode.TIME:
        return "elapsed_minutes"
    return "hand_count"


def axis_values(
    series: Sequence[ChartDataPoint], mode: AxisMode | str
) -> NDArray[np.int64]:
    field = axis_field(mode)
    return np.array([getattr(point, field) for point in series], dtype=np.int64)


def format_elapsed_minutes(minutes: int) -> str:
    """Format active minutes as "45m", "2h" or "1h30m".

    Raises:
        ValueError: If minutes is negative.

    Example:
        >>> format_elapsed_minutes(90)
        '1h30m'
    """
    if minutes < 0:
        raise ValueError("minutes cannot be negative")
    hours, mins = divmod(int(minutes), 60)
    if hours == 0:
        return f"{mins}m"
    return f"{hours}h{mins}m" if mins > 0 else f"{hours}h"


def format_axis_label(value: float, mode: AxisMode | str) -> str:
    """Tooltip and tick label for a horizontal axis value."""
    if AxisMode(mode) is AxisMode.TIME:
        return format_elapsed_minutes(int(value))
    return f"{int(value)} hands"


def format_chips(value: float) -> str:
    """Chip amount with thousands separators, rounded for display."""
    return f"{value:,.0f}"
