"""
Simple asynchronous logging for kinship.
"""

import os
import sys
import time
from contextlib import contextmanager
from typing import Optional

from loguru import logger as loguru_logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[component]} | {message}"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class AsyncLogger:
    """
    Component logger with a flat format.

    Format: timestamp | level | component | message
    """

    # Sink ids shared by every instance
    _handler_ids: list = []

    def __init__(self, component: str, debug_mode: bool = False):
        self.component = component
        self.debug_mode = debug_mode
        if not AsyncLogger._handler_ids:
            configure_logging()

    def log(self, level: str, message: str, /, **context):
        """Log a message bound to this component, with keyword context."""
        loguru_logger.bind(component=self.component, **context).log(level, message)

    def debug(self, message: str, /, **context):
        """Log at DEBUG."""
        self.log("DEBUG", message, **context)

    def info(self, message: str, /, **context):
        """Log at INFO."""
        self.log("INFO", message, **context)

    def warning(self, message: str, /, **context):
        """Log at WARNING."""
        self.log("WARNING", message, **context)

    def error(self, message: str, /, include_trace: Optional[bool] = None, **context):
        """
        Log at ERROR with an optional stack trace.

        Args:
            message: Error message
            include_trace: Include the current traceback (None = follow debug_mode)
            **context: Extra context
        """
        should_include_trace = include_trace if include_trace is not None else self.debug_mode

        if should_include_trace:
            import traceback

            context["stack_trace"] = traceback.format_exc()

        self.log("ERROR", message, **context)


def configure_logging(level: str = "WARNING", file: Optional[str] = None) -> None:
    """
    (Re)install the loguru sinks.

    stderr always receives records at ``level`` and above. When ``file`` is
    given, a rotating file sink receives everything from DEBUG up.
    """
    for handler_id in AsyncLogger._handler_ids:
        loguru_logger.remove(handler_id)
    AsyncLogger._handler_ids = []

    # loguru installs its own stderr sink on import
    try:
        loguru_logger.remove(0)
    except ValueError:
        pass

    AsyncLogger._handler_ids.append(
        loguru_logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())
    )
    if file:
        AsyncLogger._handler_ids.append(
            loguru_logger.add(
                file,
                format=LOG_FORMAT,
                level="DEBUG",
                rotation="10 MB",
                compression="zip",
                enqueue=True,
            )
        )


class PerformanceLogger:
    """
    Logger dedicated to timing operations.
    """

    def __init__(self):
        self.logger = AsyncLogger("performance")

    @contextmanager
    def measure(self, operation: str, **context):
        """
        Context manager that logs the duration of an operation.

        Usage:
        ```
        with perf_logger.measure("resolve_edges", nodes=len(graph)):
            graph = resolver.resolve()
        ```
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start
            self.logger.debug(
                "Operation completed", operation=operation, duration_ms=duration * 1000, **context
            )


def _get_debug_mode() -> bool:
    """Read debug mode from the environment."""
    return os.getenv("KINSHIP_DEBUG", "false").lower() == "true"


logger = AsyncLogger("kinship", debug_mode=_get_debug_mode())
