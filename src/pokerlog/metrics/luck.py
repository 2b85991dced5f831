"""All-in luck: how far actual showdown results ran from their equity.

For every all-in the expected value is the player's equity share of the
pot, and the actual value is what they really took down. The difference,
summed over time, is the luck that the adjusted profit line removes:

    luck = actual - pot * win_probability / 100
    adjusted_profit = profit - cumulative_luck

Values are float64 throughout and never rounded here; rounding is a
display concern.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from pokerlog.config import DEFAULT_CONFIG, ReplayConfig
from pokerlog.events.model import AllInRecord, to_millis


class AllInSummary(NamedTuple):
    """Aggregate statistics for the all-ins of a session."""

    count: int
    total_pot_amount: int
    average_win_rate: float
    all_in_ev: float
    actual_result_total: float
    ev_difference: float
    win_count: int
    loss_count: int


def actual_value(record: AllInRecord, split_runouts: bool = False) -> float:
    """Chips the player actually won from an all-in pot.

    The whole pot when actual_result is set, nothing otherwise. With
    split_runouts, a board run several times is instead credited by the
    share of runouts won.

    Example:
        >>> from datetime import datetime
        >>> from decimal import Decimal
        >>> record = AllInRecord(10000, Decimal("50"), True, datetime(2025, 1, 1),
        ...                      run_it_times=2, wins_in_runout=1)
        >>> actual_value(record, split_runouts=True)
        5000.0
    """
    if split_runouts and record.is_multi_runout:
        return record.pot_amount * record.wins_in_runout / record.run_it_times
    return float(record.pot_amount) if record.actual_result else 0.0


def record_luck(record: AllInRecord, split_runouts: bool = False) -> float:
    """Actual minus expected value for a single all-in."""
    return actual_value(record, split_runouts) - record.expected_value


@dataclass(frozen=True, slots=True)
class EquityAdjuster:
    """Cumulative luck as of any moment of the session.

    Attributes:
        record_ms: Sorted all-in timestamps in epoch milliseconds.
        cumulative_luck_values: Running luck total aligned with record_ms.
    """

    record_ms: NDArray[np.int64] = field(repr=False)
    cumulative_luck_values: NDArray[np.float64] = field(repr=False)

    @classmethod
    def from_records(
        cls,
        records: Sequence[AllInRecord],
        config: ReplayConfig | None = None,
    ) -> "EquityAdjuster":
        """Sort the records by time and precompute the running luck.

        Args:
            records: All-in records of the session, any order.
            config: Replay configuration (split_runouts is read).

        Returns:
            EquityAdjuster for the session.
        """
        config = config or DEFAULT_CONFIG
        ordered = sorted(records, key=lambda r: r.recorded_ms)

        times = np.array([r.recorded_ms for r in ordered], dtype=np.int64)
        luck = np.array(
            [record_luck(r, config.split_runouts) for r in ordered], dtype=np.float64
        )
        return cls(record_ms=times, cumulative_luck_values=np.cumsum(luck))

    @property
    def total_luck(self) -> float:
        if self.cumulative_luck_values.size == 0:
            return 0.0
        return float(self.cumulative_luck_values[-1])

    def cumulative_luck(self, at: datetime) -> float:
        """Luck accumulated by all-ins recorded at or before ``at``.

        Positive means the player ran above equity, negative below.
        """
        n_seen = int(np.searchsorted(self.record_ms, to_millis(at), side="right"))
        if n_seen == 0:
            return 0.0
        return float(self.cumulative_luck_values[n_seen - 1])


def is_win(record: AllInRecord) -> bool:
    """Whether an all-in counts as won in the summary.

    A board run several times is a win when any runout was won; a missing
    runout tally counts as none won.
    """
    if record.run_it_times is not None and record.run_it_times > 1:
        return (record.wins_in_runout or 0) > 0
    return record.actual_result


def summarize_all_ins(records: Sequence[AllInRecord]) -> AllInSummary:
    """Calculate the all-in EV summary for a session.

    Runouts are always split here, whatever the chart luck uses.

    Args:
        records: All-in records of the session.

    Returns:
        AllInSummary; every field is zero when there are no records.

    Example:
        >>> from datetime import datetime
        >>> from decimal import Decimal
        >>> t = datetime(2025, 1, 1)
        >>> summary = summarize_all_ins([
        ...     AllInRecord(10000, Decimal("60"), True, t),
        ...     AllInRecord(10000, Decimal("40"), False, t),
        ... ])
        >>> summary.ev_difference
        0.0
    """
    if len(records) == 0:
        return AllInSummary(
            count=0,
            total_pot_amount=0,
            average_win_rate=0.0,
            all_in_ev=0.0,
            actual_result_total=0.0,
            ev_difference=0.0,
            win_count=0,
            loss_count=0,
        )

    pots = np.array([r.pot_amount for r in records], dtype=np.float64)
    probabilities = np.array([float(r.win_probability) for r in records], dtype=np.float64)
    actuals = np.array(
        [actual_value(r, split_runouts=True) for r in records], dtype=np.float64
    )

    all_in_ev = float(np.sum(pots * probabilities / 100.0))
    actual_result_total = float(np.sum(actuals))
    win_count = sum(1 for r in records if is_win(r))

    return AllInSummary(
        count=len(records),
        total_pot_amount=int(np.sum(pots)),
        average_win_rate=float(np.mean(probabilities)),
        all_in_ev=all_in_ev,
        actual_result_total=actual_result_total,
        ev_difference=actual_result_total - all_in_ev,
        win_count=win_count,
        loss_count=len(records) - win_count,
    )
