"""
Rolling price, return and volatility history.

Uses deques with maxlen for O(1) append and FIFO eviction.
"""

import math
from collections import deque

import numpy as np

from bsm_decision_engine.utils.logging import get_logger

logger = get_logger(__name__)


class PriceHistoryBuffer:
    """
    Bounded rolling window of closes and their log returns.

    The return history holds ``ln(p_t / p_{t-1})`` for each consecutive pair
    of appended closes and shares the price bound. The volatility history is
    filled by the engine once enough data exists.

    Usage:
        buffer = PriceHistoryBuffer(capacity=252)
        buffer.append(100.0)
        buffer.append(101.5)
        buffer.returns  # array([0.01477...])
    """

    def __init__(self, capacity: int = 252) -> None:
        self._capacity = capacity
        self._prices: deque = deque(maxlen=capacity)
        self._returns: deque = deque(maxlen=capacity)
        self._volatility: deque = deque(maxlen=capacity)
        self._pending_capacity: int | None = None

    @property
    def capacity(self) -> int:
        """Current bound on every history."""
        return self._capacity

    @capacity.setter
    def capacity(self, value: int) -> None:
        # Takes effect on the next append; the latest value wins
        self._pending_capacity = None if value == self._capacity else value

    def _apply_pending_capacity(self) -> None:
        if self._pending_capacity is None:
            return
        new_capacity = self._pending_capacity
        logger.debug(f"Resizing history from {self._capacity} to {new_capacity} bars")
        self._prices = deque(self._prices, maxlen=new_capacity)
        self._returns = deque(self._returns, maxlen=new_capacity)
        self._volatility = deque(self._volatility, maxlen=new_capacity)
        self._capacity = new_capacity
        self._pending_capacity = None

    def append(self, price: float) -> None:
        """
        Append a close, evicting the oldest entries beyond capacity.

        Args:
            price: Closing price (validated by the caller)
        """
        self._apply_pending_capacity()

        previous = self._prices[-1] if self._prices else None
        self._prices.append(price)

        if previous is not None:
            self._returns.append(math.log(price / previous))

    def record_volatility(self, volatility: float) -> None:
        """Append an annualized volatility estimate."""
        self._volatility.append(volatility)

    @property
    def prices(self) -> np.ndarray:
        """Retained closes, oldest first."""
        return np.fromiter(self._prices, dtype=float, count=len(self._prices))

    @property
    def returns(self) -> np.ndarray:
        """Retained log returns, oldest first."""
        return np.fromiter(self._returns, dtype=float, count=len(self._returns))

    @property
    def volatility_history(self) -> np.ndarray:
        """Retained volatility estimates, oldest first."""
        return np.fromiter(self._volatility, dtype=float, count=len(self._volatility))

    @property
    def last_price(self) -> float | None:
        """Most recent close, or None when empty."""
        return self._prices[-1] if self._prices else None

    def __len__(self) -> int:
        return len(self._prices)

    @property
    def n_returns(self) -> int:
        """Number of retained returns."""
        return len(self._returns)
