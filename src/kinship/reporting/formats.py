"""
Report formats.

The format keyword is turned into a formatter once, at the program boundary.
"""

from enum import Enum
from typing import List, Union

from kinship.core.exceptions import UnknownFormatError


class ReportFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    CSV = "csv"
    HTML = "html"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: Union[str, "ReportFormat"]) -> "ReportFormat":
        """
        Raises:
            UnknownFormatError: ``value`` names no format
        """
        if isinstance(value, ReportFormat):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            error = UnknownFormatError(f"Unknown format {value}", context={"format": value})
            error.add_suggestion(f"Use one of: {', '.join(cls.values())}")
            raise error from None


def get_formatter(value: Union[str, ReportFormat]):
    """Formatter instance for a format keyword or ReportFormat."""
    from kinship.reporting import formatters

    report_format = ReportFormat.parse(value)
    if report_format is ReportFormat.TEXT:
        return formatters.TextFormatter()
    if report_format is ReportFormat.JSON:
        return formatters.JsonFormatter()
    if report_format is ReportFormat.CSV:
        return formatters.CsvFormatter()
    return formatters.HtmlFormatter()
