"""
Signal decision policy.

Fuses a Monte Carlo outlook with option-implied signal strength:
1. Estimates drift from the trailing month of log returns
2. Simulates 21 trading days of GBM paths
3. Prices 5% OTM calls and puts with Black-Scholes
4. Classifies the combination into BUY, SELL or HOLD
"""

from dataclasses import dataclass
from typing import Sequence

from bsm_decision_engine.core.types import Action, TradingSignal
from bsm_decision_engine.models.black_scholes import BlackScholesModel
from bsm_decision_engine.models.volatility import expected_drift
from bsm_decision_engine.simulation.monte_carlo import PathSimulator, SimulationSummary
from bsm_decision_engine.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PolicyThresholds:
    """Fixed parameters of the decision rule."""

    min_prices: int = 30
    drift_window: int = 21
    horizon_days: int = 21
    option_days: float = 30.0
    otm_pct: float = 0.05
    confidence_paths: int = 1000

    # Buy: all must hold
    buy_expected_return: float = 0.08
    buy_profit_probability: float = 0.6
    buy_max_volatility: float = 0.4
    buy_call_signal: float = 0.3

    # Sell: any may hold
    sell_expected_return: float = -0.05
    sell_loss_probability: float = 0.6
    sell_min_volatility: float = 0.6
    sell_put_signal: float = 0.4

    strength_scale: float = 0.15


@dataclass(frozen=True)
class OptionSignals:
    """Option values normalized by 5% of spot."""

    call_value: float
    put_value: float
    call_signal: float
    put_signal: float


class SignalDecisionPolicy:
    """
    Multi-factor BUY / SELL / HOLD policy.

    The simulator is injected so callers control the random stream.
    """

    def __init__(
        self,
        simulator: PathSimulator,
        thresholds: PolicyThresholds | None = None,
    ) -> None:
        self.simulator = simulator
        self.thresholds = thresholds or PolicyThresholds()

    def option_signals(
        self,
        current_price: float,
        volatility: float,
        risk_free_rate: float,
    ) -> OptionSignals:
        """
        Price the OTM call and put used as signal inputs.

        Args:
            current_price: Spot price
            volatility: Annualized volatility
            risk_free_rate: Annual risk-free rate

        Returns:
            OptionSignals with raw and normalized values
        """
        t = self.thresholds
        time_to_expiry = t.option_days / 365.0
        call_strike = current_price * (1 + t.otm_pct)
        put_strike = current_price * (1 - t.otm_pct)

        call_value = BlackScholesModel.call(
            current_price, call_strike, time_to_expiry, risk_free_rate, volatility
        )
        put_value = BlackScholesModel.put(
            current_price, put_strike, time_to_expiry, risk_free_rate, volatility
        )

        scale = current_price * t.otm_pct
        return OptionSignals(
            call_value=call_value,
            put_value=put_value,
            call_signal=call_value / scale,
            put_signal=put_value / scale,
        )

    def classify(
        self,
        outcome: SimulationSummary,
        options: OptionSignals,
        volatility: float,
    ) -> TradingSignal:
        """
        Apply the decision rule; first matching branch wins.

        Args:
            outcome: Simulated outcome statistics
            options: Normalized option signals
            volatility: Annualized volatility

        Returns:
            TradingSignal with action, strength and confidence
        """
        t = self.thresholds
        confidence = min(1.0, outcome.n_paths / t.confidence_paths)
        er = outcome.expected_return

        if (
            er > t.buy_expected_return
            and outcome.profit_probability > t.buy_profit_probability
            and volatility < t.buy_max_volatility
            and options.call_signal > t.buy_call_signal
        ):
            strength = min(
                1.0, (er * outcome.profit_probability * options.call_signal) / t.strength_scale
            )
            return TradingSignal(
                buy_strength=strength, confidence=confidence, action=Action.BUY
            )

        if (
            er < t.sell_expected_return
            or outcome.loss_probability > t.sell_loss_probability
            or volatility > t.sell_min_volatility
            or options.put_signal > t.sell_put_signal
        ):
            strength = min(
                1.0, (abs(er) * outcome.loss_probability * options.put_signal) / t.strength_scale
            )
            return TradingSignal(
                sell_strength=strength, confidence=confidence, action=Action.SELL
            )

        return TradingSignal(confidence=confidence, action=Action.HOLD)

    def decide(
        self,
        current_price: float,
        volatility: float,
        returns: Sequence[float],
        n_prices: int,
        *,
        risk_free_rate: float,
        n_simulations: int,
    ) -> TradingSignal:
        """
        Produce the trading signal for the current bar.

        Args:
            current_price: Latest close
            volatility: Annualized volatility estimate
            returns: Retained log returns, oldest first
            n_prices: Number of retained closes
            risk_free_rate: Annual risk-free rate
            n_simulations: Monte Carlo paths to simulate

        Returns:
            TradingSignal, the zero signal while history is insufficient
        """
        t = self.thresholds
        if n_prices < t.min_prices:
            return TradingSignal.zero()

        drift = expected_drift(returns, window=t.drift_window)

        terminal = self.simulator.simulate(
            current_price, drift, volatility, t.horizon_days, n_simulations
        )
        outcome = self.simulator.summarize(terminal, current_price)
        options = self.option_signals(current_price, volatility, risk_free_rate)

        signal = self.classify(outcome, options, volatility)

        logger.debug(
            f"price={current_price:.4f} vol={volatility:.4f} drift={drift:.4f} "
            f"E[r]={outcome.expected_return:.4f} p_up={outcome.profit_probability:.3f} "
            f"p_down={outcome.loss_probability:.3f} call={options.call_signal:.3f} "
            f"put={options.put_signal:.3f} -> {signal.action.value}"
        )
        return signal
