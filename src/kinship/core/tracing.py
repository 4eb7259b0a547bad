"""
Local observability.

Spans and counters for debugging a run, without external telemetry.
"""

import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from kinship.core.logging import AsyncLogger


class LocalTracer:
    """
    Simple local tracing.

    LocalTracer vs MetricsCollector:
    - LocalTracer: individual spans with duration and attributes, logged at DEBUG
    - MetricsCollector: aggregated counters reported with the run statistics
    """

    def __init__(self, service_name: str = "kinship") -> None:
        self.service_name = service_name
        self.logger = AsyncLogger("tracing")

    @contextmanager
    def span(self, name: str, attributes: Optional[Dict[str, Any]] = None) -> Iterator[None]:
        """
        Measure an operation.

        Usage:
        ```
        with tracer.span("parse_unit", {"origin": path}):
            tree = provider.parse(source, path)
        ```
        """
        span_id = uuid.uuid4().hex
        start = time.perf_counter()

        try:
            yield
        finally:
            duration = time.perf_counter() - start
            self.logger.debug(
                f"Span completed: {name}",
                span_id=span_id,
                duration_ms=duration * 1000,
                **(attributes or {}),
            )


class MetricsCollector:
    """
    Local counters, never exported.
    """

    def __init__(self) -> None:
        self.metrics: Dict[str, float] = {}
        self.logger = AsyncLogger("metrics")

    def increment(self, name: str, value: float = 1.0) -> None:
        """Increments counter."""
        self.metrics[name] = self.metrics.get(name, 0) + value

    def gauge(self, name: str, value: float) -> None:
        """Sets current value."""
        self.metrics[name] = value

    def merge(self, other: "MetricsCollector") -> None:
        """Add every counter of ``other`` into this collector."""
        for name, value in other.metrics.items():
            self.increment(name, value)

    def get_metrics(self) -> Dict[str, float]:
        """Gets all metrics."""
        return self.metrics.copy()


tracer = LocalTracer()
