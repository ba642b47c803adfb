"""
Position risk tracker.

State machine over the single position an engine follows:

    FLAT --open(q > 0)--> LONG
    FLAT --open(q < 0)--> SHORT
    LONG/SHORT --stop-loss or take-profit hit--> FLAT

A forced close latches a close request so a host polling after the bar
still sees that the position must be exited.
"""

from dataclasses import dataclass

from bsm_decision_engine.core.types import Position, PositionState
from bsm_decision_engine.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RiskLimits:
    """Exit thresholds as fractions of cost basis."""

    stop_loss_pct: float = 0.05
    take_profit_pct: float = 0.15


class PositionRiskTracker:
    """
    Tracks unrealized P&L of one position and enforces exit rules.

    Usage:
        tracker = PositionRiskTracker()
        tracker.open(entry_price=400.0, quantity=100)
        tracker.mark_to_market(380.0)
        tracker.should_close()  # True: 5% stop-loss hit
    """

    def __init__(self, limits: RiskLimits | None = None) -> None:
        self.limits = limits or RiskLimits()
        self._position = Position()
        self._close_requested = False
        self._exit_pnl: float = 0.0

    @property
    def position(self) -> Position:
        """Copy of the current position record."""
        return self._position.model_copy()

    @property
    def state(self) -> PositionState:
        """Current lifecycle state."""
        return self._position.state

    @property
    def unrealized_pnl(self) -> float:
        """Mark-to-market P&L of the open position (0 when flat)."""
        return self._position.unrealized_pnl

    @property
    def last_exit_pnl(self) -> float:
        """P&L at the most recent forced close."""
        return self._exit_pnl

    def open(self, entry_price: float, quantity: int) -> PositionState:
        """
        Record an externally executed fill, replacing any prior position.

        Args:
            entry_price: Fill price
            quantity: Signed size (+ long, - short, 0 = flat)

        Returns:
            Resulting state
        """
        if entry_price < 0:
            raise ValueError(f"Entry price must be non-negative, got {entry_price}")

        self._position = Position(entry_price=entry_price, quantity=quantity)
        self._close_requested = False
        if quantity == 0:
            logger.info("Position reset to flat")
        else:
            logger.info(
                f"Position opened: {self._position.state.value} {quantity} @ {entry_price:.4f}"
            )
        return self._position.state

    def close(self) -> None:
        """Transition to FLAT, zeroing every position field."""
        self._position = Position()

    def mark_to_market(self, current_price: float) -> bool:
        """
        Revalue the position and force-close it when a limit is hit.

        Args:
            current_price: Latest close

        Returns:
            True if the position was force-closed on this call
        """
        self._close_requested = False

        if self._position.is_flat:
            return False

        pos = self._position
        pos.unrealized_pnl = (current_price - pos.entry_price) * pos.quantity

        pnl_pct = pos.pnl_pct
        if pnl_pct is None:
            return False

        stop, target = self.limits.stop_loss_pct, self.limits.take_profit_pct
        if pos.is_long:
            hit = pnl_pct <= -stop or pnl_pct >= target
        else:
            # Short P&L already carries the sign flip; thresholds are mirrored
            hit = pnl_pct >= stop or pnl_pct <= -target

        if hit:
            logger.info(
                f"Forced close of {pos.state.value} position at {current_price:.4f}: "
                f"pnl={pos.unrealized_pnl:.2f} ({pnl_pct:.2%})"
            )
            self._exit_pnl = pos.unrealized_pnl
            self._close_requested = True
            self.close()

        return hit

    def should_close(self) -> bool:
        """
        Whether the host should submit a closing order.

        True when a forced close happened on the last marked bar, or when
        ``|pnl_pct| >= stop_loss`` or ``pnl_pct >= take_profit``. The
        absolute-value stop also fires on large gains, unlike the
        direction-aware rule in ``mark_to_market``.
        """
        if self._close_requested:
            return True

        pnl_pct = self._position.pnl_pct
        if pnl_pct is None:
            return False

        return (
            abs(pnl_pct) >= self.limits.stop_loss_pct
            or pnl_pct >= self.limits.take_profit_pct
        )
