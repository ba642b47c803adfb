"""Pricing models and volatility estimation."""

from bsm_decision_engine.models.black_scholes import BlackScholesModel, norm_cdf
from bsm_decision_engine.models.volatility import (
    DEFAULT_VOLATILITY,
    TRADING_DAYS_PER_YEAR,
    HistoricalVolatility,
    expected_drift,
)

__all__ = [
    "BlackScholesModel",
    "norm_cdf",
    "DEFAULT_VOLATILITY",
    "TRADING_DAYS_PER_YEAR",
    "HistoricalVolatility",
    "expected_drift",
]
