"""
Logging infrastructure for dbdumper.

Diagnostics go to stderr so they never mix with the spinner and result lines
on stdout. Loggers accept keyword context that is appended to each message:

    logger = get_logger(__name__)
    logger.debug("Running client", program="pg_dump", port=5432)
"""

import logging
import sys
from typing import Any

_loggers: dict[str, logging.Logger] = {}


class HumanReadableFormatter(logging.Formatter):
    """
    Formatter for console diagnostics:
    [TIMESTAMP] LEVEL: message (context)
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        message = record.getMessage()

        context_str = ""
        if hasattr(record, "context") and record.context:
            context_parts = [f"{k}={v}" for k, v in record.context.items()]
            context_str = f" ({', '.join(context_parts)})"

        exc_str = ""
        if record.exc_info:
            exc_str = "\n" + self.formatException(record.exc_info)

        return f"[{timestamp}] {record.levelname}: {message}{context_str}{exc_str}"


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for dbdumper.

    Args:
        verbose: Enable DEBUG level logging (default shows warnings and errors)
    """
    level = logging.DEBUG if verbose else logging.WARNING

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(HumanReadableFormatter(datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger = logging.getLogger("dbdumper")
    root_logger.setLevel(logging.DEBUG)  # Capture all, handler filters
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


def get_logger(name: str) -> "ContextLogger":
    """
    Get or create a logger for a module.

    Args:
        name: Logger name (typically __name__ of calling module)
    """
    if name not in _loggers:
        if name != "dbdumper" and not name.startswith("dbdumper."):
            name = f"dbdumper.{name}"
        _loggers[name] = logging.getLogger(name)

    return ContextLogger(_loggers[name])


class ContextLogger:
    """Logger wrapper that attaches keyword context to records."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger
        self._context: dict[str, Any] = {}

    def _log(
        self, level: int, msg: str, context: dict[str, Any] | None = None, exc_info: Any = None
    ):
        merged_context = {**self._context}
        if context:
            merged_context.update(context)

        extra = {"context": merged_context} if merged_context else {}
        self._logger.log(level, msg, extra=extra, exc_info=exc_info)

    def debug(self, msg: str, **context):
        self._log(logging.DEBUG, msg, context)

    def info(self, msg: str, **context):
        self._log(logging.INFO, msg, context)

    def warning(self, msg: str, **context):
        self._log(logging.WARNING, msg, context)

    def critical(self, msg: str, exc_info: Any = None, **context):
        self._log(logging.CRITICAL, msg, context, exc_info=exc_info)

    def with_context(self, **context) -> "ContextLogger":
        """
        Create a new logger with additional persistent context.

        Example:
            op_logger = logger.with_context(operation="dump")
            op_logger.debug("Resolved config")  # Includes operation="dump"
        """
        new_logger = ContextLogger(self._logger)
        new_logger._context = {**self._context, **context}
        return new_logger
