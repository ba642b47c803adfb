"""
Replay a close series through a decision engine.

Produces a per-bar decision log as a DataFrame plus summary statistics,
and synthesizes SPY-like price paths for offline runs.
"""

from typing import Iterable, Optional

import numpy as np
import pandas as pd

from bsm_decision_engine.core.config import EngineConfig
from bsm_decision_engine.core.types import Action
from bsm_decision_engine.engine import DecisionEngine
from bsm_decision_engine.utils.logging import get_logger

logger = get_logger(__name__)

REPLAY_COLUMNS = [
    "bar_index",
    "close",
    "action",
    "direction",
    "buy_signal",
    "sell_signal",
    "confidence",
    "volatility",
    "unrealized_pnl",
    "should_close",
]


def synthetic_prices(
    n_bars: int = 100,
    start_price: float = 400.0,
    mu: float = 0.0005,
    sigma: float = 0.015,
    seed: Optional[int] = None,
) -> pd.Series:
    """
    Generate a daily close series with normally distributed simple returns.

    Args:
        n_bars: Number of closes
        start_price: First close
        mu: Mean daily return
        sigma: Daily return standard deviation
        seed: Optional seed for reproducibility

    Returns:
        Series of closes indexed by bar number (1-based)
    """
    rng = np.random.default_rng(seed)
    if n_bars <= 0:
        return pd.Series([], dtype=float, name="close")

    daily = 1.0 + rng.normal(mu, sigma, n_bars - 1)
    closes = start_price * np.concatenate([[1.0], np.cumprod(daily)])

    return pd.Series(closes, index=pd.RangeIndex(1, n_bars + 1, name="bar_index"), name="close")


def replay_bars(
    engine: DecisionEngine,
    closes: Iterable[float],
    start_index: int = 1,
) -> pd.DataFrame:
    """
    Feed closes through ``engine`` one bar at a time.

    Each close is used as open, high, low and close of its bar.

    Args:
        engine: Engine to drive (its state advances)
        closes: Close prices in time order
        start_index: Bar number of the first close

    Returns:
        DataFrame with one row per bar (see REPLAY_COLUMNS)
    """
    records = []
    for offset, close in enumerate(closes):
        close = float(close)
        bar_index = start_index + offset
        signal = engine.process_bar(close, close, close, close, 0.0, bar_index)

        vol_history = engine.volatility_history
        records.append(
            {
                "bar_index": bar_index,
                "close": close,
                "action": signal.action.value,
                "direction": signal.direction,
                "buy_signal": signal.buy_strength,
                "sell_signal": signal.sell_strength,
                "confidence": signal.confidence,
                "volatility": float(vol_history[-1]) if signal.confidence > 0 else np.nan,
                "unrealized_pnl": engine.unrealized_pnl,
                "should_close": engine.should_close_position(),
            }
        )

    return pd.DataFrame.from_records(records, columns=REPLAY_COLUMNS)


def sweep_parameter(
    closes: Iterable[float],
    parameter: str,
    values: Iterable[float],
    base_config: Optional[EngineConfig] = None,
) -> pd.DataFrame:
    """
    Replay the same closes under each value of one engine parameter.

    Every run uses a fresh engine seeded from ``base_config.random_seed``,
    so with a fixed seed only the swept parameter differs between rows.

    Args:
        closes: Close prices in time order
        parameter: EngineConfig field to vary
        values: Values to try
        base_config: Config the sweep starts from. If None, uses defaults.

    Returns:
        DataFrame with one summary row per value
    """
    base_config = base_config or EngineConfig()
    closes = list(closes)

    rows = []
    for value in values:
        config = base_config.with_updates(**{parameter: value})
        frame = replay_bars(DecisionEngine(config), closes)
        rows.append({parameter: value, **summarize_replay(frame)})
        logger.debug(f"Sweep {parameter}={value}: {rows[-1]}")

    return pd.DataFrame(rows)


def summarize_replay(frame: pd.DataFrame) -> dict:
    """
    Summarize a replay log.

    Args:
        frame: Output of ``replay_bars``

    Returns:
        Dictionary with bar and action counts and average strengths
    """
    counts = frame["action"].value_counts()
    buys = frame[frame["action"] == Action.BUY.value]
    sells = frame[frame["action"] == Action.SELL.value]
    active = frame[frame["confidence"] > 0]

    return {
        "bars": int(len(frame)),
        "evaluated_bars": int(len(active)),
        "buy": int(counts.get(Action.BUY.value, 0)),
        "sell": int(counts.get(Action.SELL.value, 0)),
        "hold": int(counts.get(Action.HOLD.value, 0)),
        "mean_confidence": float(active["confidence"].mean()) if len(active) else 0.0,
        "mean_buy_strength": float(buys["buy_signal"].mean()) if len(buys) else 0.0,
        "mean_sell_strength": float(sells["sell_signal"].mean()) if len(sells) else 0.0,
    }
