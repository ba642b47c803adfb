"""Utility functions and helpers."""

from bsm_decision_engine.utils.logging import (
    get_contextual_logger,
    get_logger,
    setup_logging,
)

__all__ = [
    "get_contextual_logger",
    "get_logger",
    "setup_logging",
]
