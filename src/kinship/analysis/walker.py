"""
Namespace Walker - isolates every class/module declaration in a tree.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Tuple

from kinship.core.exceptions import StructuralError
from kinship.graph.models import NodeKind
from kinship.syntax.tree import Construct, SyntaxNode

NAMESPACE_SEPARATOR = "::"


@dataclass(frozen=True)
class ScopedDeclaration:
    """
    A class/module declaration together with its enclosing namespace.

    ``body`` is the declaration minus its header name, so the name itself is
    never reported as a reference of the declaration.
    """

    namespace: Tuple[str, ...]
    kind: NodeKind
    body: SyntaxNode

    @property
    def name(self) -> str:
        return NAMESPACE_SEPARATOR.join(self.namespace)


def constant_chain(node: SyntaxNode) -> List[str]:
    """
    Constant segments of a constant reference.

    ``Foo`` -> ["Foo"], ``Foo::Bar`` -> ["Foo", "Bar"], ``::Foo`` -> ["Foo"].
    Non-constant scopes (``foo::Bar``) contribute nothing.
    """
    if node.construct is Construct.CONSTANT:
        return [node.text] if node.text else []
    if node.construct is Construct.SCOPED_CONSTANT:
        segments: List[str] = []
        for child in node.children:
            segments.extend(constant_chain(child))
        return segments
    return []


def find_namespaces(root: SyntaxNode) -> List[SyntaxNode]:
    """
    Namespace declarations reachable from ``root`` without crossing another one.

    ``root`` itself is not considered, only what lies below it.
    """
    found: List[SyntaxNode] = []
    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        if node.construct.is_namespace:
            found.append(node)
        else:
            stack.extend(reversed(node.children))
    return found


def header_name(declaration: SyntaxNode) -> Tuple[SyntaxNode, List[str]]:
    """
    Locate the header name of a class/module declaration.

    The header is either a bare constant or a scoped chain; it is the first
    constant reference met breadth-first among the declaration's children.

    Raises:
        StructuralError: no constant name can be found
    """
    queue: Deque[SyntaxNode] = deque(declaration.children)
    while queue:
        node = queue.popleft()
        if node.construct.is_namespace:
            continue
        if node.construct.is_constant:
            segments = constant_chain(node)
            if segments:
                return node, segments
        queue.extend(node.children)

    raise StructuralError(
        "No constant name found in namespace declaration",
        context={"construct": declaration.construct.value, "type": declaration.type},
    )


class NamespaceWalker:
    """
    Worklist traversal producing one ScopedDeclaration per declaration.

    Reopened namespaces produce one entry per reopening;
    merging them is left to graph union.
    """

    def __init__(self, tree: SyntaxNode):
        self.tree = tree

    def walk(self) -> List[ScopedDeclaration]:
        declarations: List[ScopedDeclaration] = []
        worklist: Deque[Tuple[Tuple[str, ...], SyntaxNode]] = deque(
            ((), node) for node in find_namespaces(self.tree)
        )

        while worklist:
            parent_path, node = worklist.popleft()
            name_node, segments = header_name(node)
            path = parent_path + tuple(segments)
            kind = NodeKind.CLASS if node.construct is Construct.CLASS else NodeKind.MODULE
            body = node.without(name_node)
            declarations.append(ScopedDeclaration(namespace=path, kind=kind, body=body))
            worklist.extend((path, nested) for nested in find_namespaces(body))

        return declarations

    def walk_mapping(self) -> Dict[str, List[ScopedDeclaration]]:
        """FQ name -> declarations (more than one when a namespace is reopened)."""
        mapping: Dict[str, List[ScopedDeclaration]] = {}
        for declaration in self.walk():
            mapping.setdefault(declaration.name, []).append(declaration)
        return mapping


def walk_tree(tree: SyntaxNode) -> List[ScopedDeclaration]:
    return NamespaceWalker(tree).walk()
