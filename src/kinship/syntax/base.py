"""
Base class for syntax tree providers.
"""

from abc import ABC, abstractmethod
from typing import Dict

from kinship.core.logging import logger
from kinship.syntax.tree import Construct, SyntaxNode


class SyntaxProvider(ABC):
    """
    Turns source text into a generic ``SyntaxNode`` tree.

    Subclasses supply the native parser and the native-type to ``Construct``
    mapping. Native types missing from the mapping become ``OPAQUE`` so
    unfamiliar syntax is walked through instead of rejected.
    """

    def __init__(self):
        self.constructs: Dict[str, Construct] = self._get_construct_map()
        logger.debug(
            "Syntax provider ready",
            language=self._get_language_name(),
            constructs=len(self.constructs),
        )

    @abstractmethod
    def _get_language_name(self) -> str:
        """Language identifier, e.g. 'ruby'."""
        pass

    @abstractmethod
    def _get_construct_map(self) -> Dict[str, Construct]:
        """Native node type -> Construct."""
        pass

    @abstractmethod
    def parse(self, source: str, origin: str = "<source>") -> SyntaxNode:
        """
        Parse one source unit.

        Raises:
            ParseError: the source is not syntactically valid. No partial tree
                is returned.
        """
        pass

    @property
    def language(self) -> str:
        return self._get_language_name()

    def construct_for(self, native_type: str) -> Construct:
        return self.constructs.get(native_type, Construct.OPAQUE)
