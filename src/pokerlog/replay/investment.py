"""Chips put into play as of any moment of the session.

The stored buy-in of a session already includes every rebuy and addon
logged so far, so the amount invested at the start is recovered by
subtracting them all, and each purchase is added back from the moment it
was recorded.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

import numpy as np
from numpy.typing import NDArray

from pokerlog.events.model import Addon, Rebuy, SessionEvent, to_millis


@dataclass(frozen=True, slots=True)
class InvestmentTracker:
    """Point-in-time view of the total investment.

    Attributes:
        initial_investment: buy_in minus every rebuy and addon in the log.
        purchase_ms: Sorted purchase timestamps in epoch milliseconds.
        cumulative_purchases: Running total of purchases, aligned with
            purchase_ms.
    """

    initial_investment: int
    purchase_ms: NDArray[np.int64] = field(repr=False)
    cumulative_purchases: NDArray[np.int64] = field(repr=False)

    @classmethod
    def from_events(
        cls, events: Sequence[SessionEvent], buy_in: int
    ) -> "InvestmentTracker":
        """Collect rebuys and addons from the whole log.

        Args:
            events: The session log, any order.
            buy_in: Stored buy-in, inclusive of all purchases.

        Returns:
            InvestmentTracker for the session.

        Example:
            >>> tracker = InvestmentTracker.from_events([], buy_in=10000)
            >>> tracker.initial_investment
            10000
        """
        purchases = [e for e in events if isinstance(e, (Rebuy, Addon))]
        times = np.array([e.recorded_ms for e in purchases], dtype=np.int64)
        amounts = np.array([e.amount for e in purchases], dtype=np.int64)

        order = np.argsort(times, kind="stable")
        return cls(
            initial_investment=buy_in - int(amounts.sum()),
            purchase_ms=times[order],
            cumulative_purchases=np.cumsum(amounts[order]),
        )

    @property
    def total_purchased(self) -> int:
        if self.cumulative_purchases.size == 0:
            return 0
        return int(self.cumulative_purchases[-1])

    def total_as_of(self, at: datetime) -> int:
        """Total investment counting purchases recorded at or before ``at``."""
        n_made = int(np.searchsorted(self.purchase_ms, to_millis(at), side="right"))
        if n_made == 0:
            return self.initial_investment
        return self.initial_investment + int(self.cumulative_purchases[n_made - 1])
