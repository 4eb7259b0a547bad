"""
Reporting - renders a resolved ObjectGraph.
"""

from kinship.reporting.formats import ReportFormat, get_formatter
from kinship.reporting.formatters import (
    CsvFormatter,
    Formatter,
    HtmlFormatter,
    JsonFormatter,
    TextFormatter,
)

__all__ = [
    "ReportFormat",
    "get_formatter",
    "Formatter",
    "TextFormatter",
    "JsonFormatter",
    "CsvFormatter",
    "HtmlFormatter",
]
