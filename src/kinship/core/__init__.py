"""
Kinship core module.

Ambient infrastructure: configuration, errors, logging and tracing.
"""

from kinship.core.settings import Settings, ConfigValidator

from kinship.core.exceptions import (
    KinshipError,
    ParseError,
    StructuralError,
    SourceReadError,
    OutputError,
    ConfigurationError,
    UnknownFormatError,
    UnsupportedLanguageError,
)

from kinship.core.logging import AsyncLogger, PerformanceLogger, configure_logging, logger

from kinship.core.tracing import tracer, LocalTracer, MetricsCollector

__all__ = [
    # Configuration
    "Settings",
    "ConfigValidator",
    # Exceptions
    "KinshipError",
    "ParseError",
    "StructuralError",
    "SourceReadError",
    "OutputError",
    "ConfigurationError",
    "UnknownFormatError",
    "UnsupportedLanguageError",
    # Logging
    "AsyncLogger",
    "PerformanceLogger",
    "configure_logging",
    "logger",
    # Tracing
    "tracer",
    "LocalTracer",
    "MetricsCollector",
]
