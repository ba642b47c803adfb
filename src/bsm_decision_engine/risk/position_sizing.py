"""
Signal-scaled position sizing.

Converts a signal strength into a whole-unit quantity bounded by the
configured maximum share of equity:

    quantity = floor(equity * max_position_size * strength / price)

The engine never places orders; hosts use this to size the fill they
report back through ``open_position``.
"""

import math


def size_position(
    equity: float,
    price: float,
    strength: float,
    max_position_size: float,
) -> int:
    """
    Calculate a whole-unit position size.

    Args:
        equity: Account equity available to the strategy
        price: Expected fill price
        strength: Signal strength in [0, 1]
        max_position_size: Max notional as a fraction of equity

    Returns:
        Non-negative number of units (0 for non-positive inputs)
    """
    if equity <= 0 or price <= 0 or strength <= 0 or max_position_size <= 0:
        return 0

    budget = equity * max_position_size * min(strength, 1.0)
    return int(math.floor(budget / price))
