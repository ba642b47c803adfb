"""
Core data types for the per-bar decision engine.

Bars and signals are immutable Pydantic models; the position record is a
mutable model owned by the risk tracker.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, model_validator


class OptionType(str, Enum):
    """Option contract type."""

    CALL = "call"
    PUT = "put"


class Action(str, Enum):
    """Trading decision emitted for a bar."""

    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"

    @property
    def direction(self) -> int:
        """Signed direction for hosts that need an integer (+1, -1, 0)."""
        if self is Action.BUY:
            return 1
        if self is Action.SELL:
            return -1
        return 0


class PositionState(str, Enum):
    """Lifecycle state of the tracked position."""

    FLAT = "flat"
    LONG = "long"
    SHORT = "short"


class Bar(BaseModel):
    """
    A single OHLCV price bar.

    Only ``close`` feeds the statistics; the other fields are carried for
    hosts that pass full bars.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    open: float = Field(..., description="Open price")
    high: float = Field(..., description="High price")
    low: float = Field(..., description="Low price")
    close: float = Field(..., description="Close price", gt=0)
    volume: float = Field(default=0.0, description="Traded volume", ge=0)
    bar_index: int = Field(default=0, description="Host bar number")


class TradingSignal(BaseModel):
    """
    Bounded trading decision for one bar.

    At most one of ``buy_strength`` / ``sell_strength`` is nonzero.
    """

    model_config = ConfigDict(frozen=True)

    buy_strength: float = Field(default=0.0, ge=0, le=1)
    sell_strength: float = Field(default=0.0, ge=0, le=1)
    confidence: float = Field(default=0.0, ge=0, le=1)
    action: Action = Field(default=Action.HOLD)

    @model_validator(mode="after")
    def validate_exclusive_strengths(self) -> "TradingSignal":
        """Reject signals carrying both buy and sell strength."""
        if self.buy_strength > 0 and self.sell_strength > 0:
            raise ValueError("buy_strength and sell_strength are mutually exclusive")
        return self

    @classmethod
    def zero(cls) -> "TradingSignal":
        """Signal returned while history is insufficient."""
        return cls()

    @property
    def direction(self) -> int:
        """Signed action (+1 buy, -1 sell, 0 hold)."""
        return self.action.direction

    def as_tuple(self) -> tuple[Action, float, float, float]:
        """Return ``(action, buy, sell, confidence)`` in host order."""
        return self.action, self.buy_strength, self.sell_strength, self.confidence


class Position(BaseModel):
    """
    The single open position tracked by an engine.

    Quantity sign carries direction (+ long, - short). A flat position has
    zero quantity and zero P&L.
    """

    model_config = ConfigDict(frozen=False)  # Mutable for mark-to-market updates

    entry_price: float = Field(default=0.0, description="Fill price", ge=0)
    quantity: int = Field(default=0, description="Signed position size")
    unrealized_pnl: float = Field(default=0.0, description="Mark-to-market P&L")

    @property
    def is_long(self) -> bool:
        """True for a positive quantity."""
        return self.quantity > 0

    @property
    def is_flat(self) -> bool:
        """True when no position is held."""
        return self.quantity == 0

    @property
    def state(self) -> PositionState:
        """Lifecycle state derived from the quantity sign."""
        if self.quantity > 0:
            return PositionState.LONG
        if self.quantity < 0:
            return PositionState.SHORT
        return PositionState.FLAT

    @property
    def cost_basis(self) -> float:
        """Entry notional of the position."""
        return self.entry_price * abs(self.quantity)

    @property
    def pnl_pct(self) -> Optional[float]:
        """Unrealized P&L as a fraction of cost basis, None when undefined."""
        if self.cost_basis == 0:
            return None
        return self.unrealized_pnl / self.cost_basis
