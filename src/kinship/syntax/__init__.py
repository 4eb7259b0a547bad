"""
Syntax tree providers.

Source text -> generic SyntaxNode tree, or ParseError.
"""

from .tree import Construct, SyntaxNode
from .base import SyntaxProvider
from .factory import detect_language, get_provider, get_provider_for_file

__all__ = [
    "Construct",
    "SyntaxNode",
    "SyntaxProvider",
    "detect_language",
    "get_provider",
    "get_provider_for_file",
]
