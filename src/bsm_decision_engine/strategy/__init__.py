"""Trading decision policies."""

from bsm_decision_engine.strategy.signal_policy import (
    OptionSignals,
    PolicyThresholds,
    SignalDecisionPolicy,
)

__all__ = [
    "OptionSignals",
    "PolicyThresholds",
    "SignalDecisionPolicy",
]
