"""Offline replay and reporting helpers."""

from bsm_decision_engine.analysis.replay import (
    REPLAY_COLUMNS,
    replay_bars,
    summarize_replay,
    sweep_parameter,
    synthetic_prices,
)

__all__ = [
    "REPLAY_COLUMNS",
    "replay_bars",
    "summarize_replay",
    "sweep_parameter",
    "synthetic_prices",
]
