"""
Volatility estimation from rolling log returns.
"""

from typing import Sequence

import numpy as np

from bsm_decision_engine.utils.logging import get_logger

logger = get_logger(__name__)

TRADING_DAYS_PER_YEAR = 252
DEFAULT_VOLATILITY = 0.2
MIN_RETURNS = 10


class HistoricalVolatility:
    """
    Historical volatility estimator.

    Annualized sample standard deviation of the retained log returns, with a
    fixed cold-start value while fewer than ``min_returns`` are available.
    """

    def __init__(
        self,
        min_returns: int = MIN_RETURNS,
        default_volatility: float = DEFAULT_VOLATILITY,
    ) -> None:
        """
        Initialize historical volatility estimator.

        Args:
            min_returns: Returns required before estimating
            default_volatility: Value returned below ``min_returns``
        """
        self.min_returns = max(min_returns, 2)
        self.default_volatility = default_volatility

    def estimate(self, returns: Sequence[float]) -> float:
        """
        Calculate annualized historical volatility.

        Args:
            returns: Daily log returns, oldest first

        Returns:
            Annualized volatility, or the default on cold start
        """
        values = np.asarray(returns, dtype=float)

        if len(values) < self.min_returns:
            logger.debug(
                f"Only {len(values)} returns available, using default volatility "
                f"{self.default_volatility}"
            )
            return self.default_volatility

        # Unbiased sample variance (n - 1)
        variance = float(np.var(values, ddof=1))

        return float(np.sqrt(variance * TRADING_DAYS_PER_YEAR))


def expected_drift(returns: Sequence[float], window: int = 21) -> float:
    """
    Annualized mean of the most recent ``window`` returns.

    Args:
        returns: Daily log returns, oldest first
        window: Number of trailing returns to average

    Returns:
        Annualized drift, 0.0 when fewer than ``window`` returns exist
    """
    values = np.asarray(returns, dtype=float)
    if len(values) < window:
        return 0.0

    return float(np.mean(values[-window:]) * TRADING_DAYS_PER_YEAR)
