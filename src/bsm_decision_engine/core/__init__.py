"""Core types and configuration for the decision engine."""

from bsm_decision_engine.core.types import (
    Action,
    Bar,
    OptionType,
    Position,
    PositionState,
    TradingSignal,
)
from bsm_decision_engine.core.config import (
    Config,
    EngineConfig,
    LoggingConfig,
    load_config,
)
from bsm_decision_engine.core.exceptions import ConfigurationError

__all__ = [
    "Action",
    "Bar",
    "OptionType",
    "Position",
    "PositionState",
    "TradingSignal",
    "Config",
    "EngineConfig",
    "LoggingConfig",
    "load_config",
    "ConfigurationError",
]
