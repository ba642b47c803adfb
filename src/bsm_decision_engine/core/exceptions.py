"""
Exceptions raised by the decision engine.
"""


class ConfigurationError(ValueError):
    """Raised when engine parameters are invalid at setup or update time."""
