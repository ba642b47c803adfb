"""
Per-bar decision engine.

One engine instance follows one instrument: it owns the rolling history,
the path simulator's random stream and the tracked position. Hosts hold
one engine per instrument and call it from a single thread.
"""

import math
from typing import Any, Optional

import numpy as np

from bsm_decision_engine.core.config import EngineConfig
from bsm_decision_engine.core.types import Bar, Position, PositionState, TradingSignal
from bsm_decision_engine.data.history import PriceHistoryBuffer
from bsm_decision_engine.models.volatility import HistoricalVolatility
from bsm_decision_engine.risk.position_sizing import size_position
from bsm_decision_engine.risk.position_tracker import PositionRiskTracker, RiskLimits
from bsm_decision_engine.simulation.monte_carlo import PathSimulator
from bsm_decision_engine.strategy.signal_policy import SignalDecisionPolicy
from bsm_decision_engine.utils.logging import get_logger

logger = get_logger(__name__)


class DecisionEngine:
    """
    Streaming BUY / SELL / HOLD engine with position risk tracking.

    Each ``process_bar`` call appends the close, marks the open position to
    market, and, once 30 closes are retained, estimates volatility and runs
    the signal policy.

    Usage:
        engine = DecisionEngine(EngineConfig(random_seed=7))
        for bar in bars:
            signal = engine.process_bar(bar.open, bar.high, bar.low, bar.close,
                                        bar.volume, bar.bar_index)
            if engine.should_close_position():
                ...
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: Engine parameters. If None, uses defaults.
            rng: Random generator for path simulation. If None, one is
                seeded from ``config.random_seed``.
        """
        self._config = config or EngineConfig()

        self._history = PriceHistoryBuffer(capacity=self._config.lookback_period)
        self._volatility = HistoricalVolatility()
        self._simulator = (
            PathSimulator(rng) if rng is not None
            else PathSimulator.from_seed(self._config.random_seed)
        )
        self._policy = SignalDecisionPolicy(self._simulator)
        self._tracker = PositionRiskTracker(self._risk_limits())

        self._bar_count = 0
        self._last_signal = TradingSignal.zero()

        logger.info(
            "Initialized DecisionEngine",
            extra={"extra_fields": self._config.model_dump()},
        )

    def _reseed(self, seed: Optional[int]) -> None:
        # Fresh stream for all later bars, replacing any injected generator
        self._simulator = PathSimulator.from_seed(seed)
        self._policy.simulator = self._simulator

    def _risk_limits(self) -> RiskLimits:
        return RiskLimits(
            stop_loss_pct=self._config.stop_loss_pct,
            take_profit_pct=self._config.take_profit_pct,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> EngineConfig:
        """Active configuration."""
        return self._config

    def update_config(self, **changes: Any) -> EngineConfig:
        """
        Validate and apply parameter changes from the next bar on.

        Changing ``random_seed`` restarts the path simulator on a generator
        seeded with the new value.

        Args:
            **changes: EngineConfig fields to change

        Returns:
            The new configuration

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        new_config = self._config.with_updates(**changes)
        if "random_seed" in changes and new_config.random_seed != self._config.random_seed:
            self._reseed(new_config.random_seed)

        self._config = new_config
        self._history.capacity = new_config.lookback_period

        logger.info("Engine configuration updated", extra={"extra_fields": changes})
        return new_config

    # ------------------------------------------------------------------
    # Bar processing
    # ------------------------------------------------------------------

    def process_bar(
        self,
        open: float,
        high: float,
        low: float,
        close: float,
        volume: float,
        bar_index: int,
    ) -> TradingSignal:
        """
        Process one bar and return the trading signal.

        Only ``close`` feeds the statistics; the other fields are accepted
        for interface parity with hosts that pass full bars.

        Args:
            open: Open price
            high: High price
            low: Low price
            close: Close price
            volume: Traded volume
            bar_index: Host bar number

        Returns:
            TradingSignal for this bar

        Raises:
            ValueError: If ``close`` is not a positive finite number
        """
        if not math.isfinite(close) or close <= 0:
            raise ValueError(f"Bar {bar_index}: close must be positive and finite, got {close}")

        config = self._config
        self._tracker.limits = self._risk_limits()

        self._history.append(close)
        self._bar_count += 1

        self._tracker.mark_to_market(close)

        n_prices = len(self._history)
        if n_prices < self._policy.thresholds.min_prices:
            self._last_signal = TradingSignal.zero()
            return self._last_signal

        returns = self._history.returns
        volatility = self._volatility.estimate(returns)
        self._history.record_volatility(volatility)

        self._last_signal = self._policy.decide(
            close,
            volatility,
            returns,
            n_prices,
            risk_free_rate=config.risk_free_rate,
            n_simulations=config.monte_carlo_simulations,
        )
        return self._last_signal

    def process(self, bar: Bar) -> TradingSignal:
        """Process a ``Bar`` model."""
        return self.process_bar(
            bar.open, bar.high, bar.low, bar.close, bar.volume, bar.bar_index
        )

    # ------------------------------------------------------------------
    # Position interface
    # ------------------------------------------------------------------

    def open_position(self, entry_price: float, quantity: int) -> PositionState:
        """
        Record an externally executed fill.

        Args:
            entry_price: Fill price
            quantity: Signed size (+ long, - short)

        Returns:
            Resulting position state
        """
        return self._tracker.open(entry_price, quantity)

    def get_unrealized_pnl(self) -> float:
        """Unrealized P&L of the tracked position."""
        return self._tracker.unrealized_pnl

    @property
    def unrealized_pnl(self) -> float:
        """Unrealized P&L of the tracked position."""
        return self._tracker.unrealized_pnl

    def should_close_position(self) -> bool:
        """Whether the host should submit an order closing the position."""
        return self._tracker.should_close()

    @property
    def position(self) -> Position:
        """Copy of the tracked position."""
        return self._tracker.position

    @property
    def position_state(self) -> PositionState:
        """FLAT, LONG or SHORT."""
        return self._tracker.state

    def suggest_quantity(
        self, equity: float, signal: Optional[TradingSignal] = None
    ) -> int:
        """
        Size a fill for the given (or last) signal.

        Args:
            equity: Account equity available to the strategy
            signal: Signal to size. If None, uses the last emitted signal.

        Returns:
            Signed quantity: positive for BUY, negative for SELL, 0 for HOLD
        """
        signal = signal or self._last_signal
        price = self._history.last_price
        if price is None:
            return 0

        strength = max(signal.buy_strength, signal.sell_strength)
        units = size_position(equity, price, strength, self._config.max_position_size)
        return units * signal.direction

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def prices(self) -> np.ndarray:
        """Retained closes, oldest first."""
        return self._history.prices

    @property
    def returns(self) -> np.ndarray:
        """Retained log returns, oldest first."""
        return self._history.returns

    @property
    def volatility_history(self) -> np.ndarray:
        """Volatility estimates recorded once history was sufficient."""
        return self._history.volatility_history

    @property
    def bar_count(self) -> int:
        """Number of bars processed."""
        return self._bar_count

    @property
    def last_signal(self) -> TradingSignal:
        """Signal returned by the most recent bar."""
        return self._last_signal
