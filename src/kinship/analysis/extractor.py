"""
Reference Extractor.

Collects, for one declaration, every plain constant reference and every
association invocation, in source order. Nested declarations are skipped:
their content is extracted from their own ScopedDeclaration.
"""

from typing import List, Union

from kinship.analysis.associations import association_arguments, decode_arguments
from kinship.analysis.walker import NAMESPACE_SEPARATOR, ScopedDeclaration, constant_chain
from kinship.graph.models import AssociationReference
from kinship.syntax.tree import SyntaxNode

Reference = Union[str, AssociationReference]


class ReferenceExtractor:
    def __init__(self, owner: str):
        self.owner = owner

    def extract(self, body: SyntaxNode) -> List[Reference]:
        references: List[Reference] = []
        stack = list(reversed(body.children))

        while stack:
            node = stack.pop()

            if node.construct.is_namespace:
                continue

            if node.construct.is_constant:
                name = NAMESPACE_SEPARATOR.join(constant_chain(node))
                if name and name != self.owner:
                    references.append(name)
                continue

            arguments = association_arguments(node)
            if arguments is not None:
                association = decode_arguments(arguments)
                if association is not None:
                    references.append(association)
                # The argument list never contributes plain references
                stack.extend(reversed([child for child in node.children if child is not arguments]))
                continue

            stack.extend(reversed(node.children))

        return references


def extract_references(declaration: ScopedDeclaration) -> List[Reference]:
    return ReferenceExtractor(declaration.name).extract(declaration.body)
