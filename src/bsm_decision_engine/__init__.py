"""
BSM Decision Engine

Per-bar trading decisions from rolling volatility, Black-Scholes option
values and Monte Carlo price simulation, with position risk tracking.
"""

__version__ = "0.1.0"

from bsm_decision_engine.core.config import EngineConfig
from bsm_decision_engine.core.exceptions import ConfigurationError
from bsm_decision_engine.core.types import (
    Action,
    Bar,
    Position,
    PositionState,
    TradingSignal,
)
from bsm_decision_engine.engine import DecisionEngine

__all__ = [
    "Action",
    "Bar",
    "ConfigurationError",
    "DecisionEngine",
    "EngineConfig",
    "Position",
    "PositionState",
    "TradingSignal",
]
