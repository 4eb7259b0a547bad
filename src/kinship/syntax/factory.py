"""
Syntax provider factory.
Picks the provider for a source file from its extension.
"""

from pathlib import Path
from typing import Dict, Type

from kinship.core.exceptions import UnsupportedLanguageError
from kinship.core.logging import logger
from kinship.syntax.base import SyntaxProvider
from kinship.syntax.ruby import RubySyntaxProvider

EXTENSION_MAP: Dict[str, str] = {
    ".rb": "ruby",
    ".rake": "ruby",
    ".gemspec": "ruby",
    ".ru": "ruby",
}

LANGUAGE_PROVIDERS: Dict[str, Type[SyntaxProvider]] = {
    "ruby": RubySyntaxProvider,
}

_provider_cache: Dict[str, SyntaxProvider] = {}


def detect_language(file_path: str) -> str:
    """Language for a path by extension; 'unknown' when unmapped."""
    return EXTENSION_MAP.get(Path(file_path).suffix.lower(), "unknown")


def get_provider(language: str) -> SyntaxProvider:
    """
    Return the (cached) provider for ``language``.

    Raises:
        UnsupportedLanguageError: no provider handles the language
    """
    if language in _provider_cache:
        return _provider_cache[language]

    provider_class = LANGUAGE_PROVIDERS.get(language)
    if provider_class is None:
        error = UnsupportedLanguageError(
            f"No syntax provider for language '{language}'",
            context={"language": language},
        )
        error.add_suggestion(f"Supported languages: {', '.join(sorted(LANGUAGE_PROVIDERS))}")
        raise error

    provider = provider_class()
    _provider_cache[language] = provider
    logger.debug(f"Using {provider_class.__name__}", language=language)
    return provider


def get_provider_for_file(file_path: str) -> SyntaxProvider:
    return get_provider(detect_language(file_path))
