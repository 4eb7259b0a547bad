"""
Unified exception hierarchy for kinship.

Structural and I/O failures are exceptions. Resolution mismatches (dangling
edges) are data and never raise.
"""

from typing import Any, Dict, List, Optional


class KinshipError(Exception):
    """
    Base error for kinship.

    Carries:
    1. A stable error code (class name by default)
    2. Structured context
    3. Resolution suggestions
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        self.message: str = message
        self.code: str = code or self.__class__.__name__
        self.context: Dict[str, Any] = context or {}
        self.cause: Optional[Exception] = cause
        self.suggestions: List[str] = []
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize for reports and machine-readable CLI output.

        Returns:
            {
                "code": "ParseError",
                "message": "Could not parse app/models/post.rb",
                "context": {...}
            }
        """
        result: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }

        if self.cause:
            result["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}

        if self.suggestions:
            result["suggestions"] = self.suggestions

        return result

    def add_suggestion(self, suggestion: str) -> None:
        """
        Add a resolution hint.

        Hints accumulate in order and duplicates are ignored.
        """
        if not suggestion or not isinstance(suggestion, str):
            return

        if suggestion not in self.suggestions:
            self.suggestions.append(suggestion)


class ParseError(KinshipError):
    """A source unit could not be turned into a syntax tree."""

    pass


class StructuralError(KinshipError):
    """
    A syntax tree is well formed but cannot be analyzed.

    Raised for namespace declarations whose header carries no constant name.
    Fatal for the source unit it occurs in.
    """

    pass


class SourceReadError(KinshipError):
    """A source path is missing, unreadable or not decodable."""

    pass


class OutputError(KinshipError):
    """A report could not be written."""

    pass


class ConfigurationError(KinshipError):
    """Invalid configuration."""

    pass


class UnknownFormatError(ConfigurationError):
    """Requested report format is not one of the known formats."""

    pass


class UnsupportedLanguageError(ConfigurationError):
    """No syntax provider is available for a language."""

    pass


__all__ = [
    "KinshipError",
    "ParseError",
    "StructuralError",
    "SourceReadError",
    "OutputError",
    "ConfigurationError",
    "UnknownFormatError",
    "UnsupportedLanguageError",
]
