"""Rolling market data history."""

from bsm_decision_engine.data.history import PriceHistoryBuffer

__all__ = ["PriceHistoryBuffer"]
