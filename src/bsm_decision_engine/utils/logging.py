"""
Structured logging for the decision engine.

Engine modules log through ``get_logger(__name__)`` and attach structured
context (bar numbers, prices, config changes) under the ``extra_fields``
record attribute. Formatters render that context as JSON keys or as
``key=value`` pairs.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from bsm_decision_engine.core.config import LoggingConfig

CONTEXT_ATTR = "extra_fields"


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return dict(getattr(record, CONTEXT_ATTR, None) or {})


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Context fields are merged at the top level so log processors can
    filter on e.g. ``bar_index`` directly.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        payload.update(_context(record))

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # numpy scalars and Paths fall back to str
        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Colorized single-line console output."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8s}"
        if self.use_color:
            color = self.LEVEL_COLORS.get(record.levelname, self.RESET)
            level = f"{color}{level}{self.RESET}"

        parts = [
            datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
            level,
            f"{record.name:20s}",
            record.getMessage(),
        ]

        context = _context(record)
        if context:
            parts.append(" ".join(f"{key}={value}" for key, value in context.items()))

        line = " | ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _make_formatter(fmt: str, stream: Any = None) -> logging.Formatter:
    if fmt == "json":
        return JSONFormatter()
    isatty = getattr(stream, "isatty", None)
    return TextFormatter(use_color=bool(isatty and isatty()))


def setup_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the root logger from a LoggingConfig.

    Existing root handlers are replaced. Log files are always JSON and are
    named ``engine_<timestamp>.log`` under ``config.log_dir``.

    Args:
        config: Logging configuration. If None, uses defaults.

    Returns:
        The configured root logger
    """
    config = config or LoggingConfig()
    level = getattr(logging, config.level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    if config.console_output:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(level)
        console.setFormatter(_make_formatter(config.format, sys.stdout))
        root.addHandler(console)

    if config.file_output:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        file_handler = logging.FileHandler(config.log_dir / f"engine_{stamp}.log")
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        root.addHandler(file_handler)

    return root


def get_logger(name: str) -> logging.Logger:
    """Module logger (pass ``__name__``)."""
    return logging.getLogger(name)


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    Adds fixed context to every record.

    Per-call ``extra={"extra_fields": {...}}`` is merged over the fixed
    context rather than replacing it.
    """

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        fields = {**self.extra[CONTEXT_ATTR], **extra.get(CONTEXT_ATTR, {})}
        extra[CONTEXT_ATTR] = fields
        kwargs["extra"] = extra
        return msg, kwargs


def get_contextual_logger(name: str, **context: Any) -> ContextLoggerAdapter:
    """
    Logger that stamps ``context`` on every record.

    Example:
        >>> logger = get_contextual_logger("run_replay", source="spy.csv")
        >>> logger.info("Replaying 250 bars")  # carries source=spy.csv
    """
    return ContextLoggerAdapter(get_logger(name), {CONTEXT_ATTR: context})
