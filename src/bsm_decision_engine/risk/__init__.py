"""
Risk management for the tracked position.

Components:
- PositionRiskTracker: Stop-loss / take-profit state machine
- size_position: Signal-scaled quantity bounded by max position size
"""

from .position_tracker import PositionRiskTracker, RiskLimits
from .position_sizing import size_position

__all__ = [
    "PositionRiskTracker",
    "RiskLimits",
    "size_position",
]
