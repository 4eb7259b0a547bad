"""
Generic syntax tree consumed by the analysis engine.

Providers convert their native parse trees into ``SyntaxNode`` values and tag
each node with a ``Construct``. The engine dispatches on ``construct`` only;
``type`` keeps the native node name for diagnostics.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple


class Construct(Enum):
    """Closed set of constructs the engine understands."""

    CLASS = "class"
    MODULE = "module"
    CONSTANT = "constant"
    SCOPED_CONSTANT = "scoped_constant"
    CALL = "call"
    ARGUMENTS = "arguments"
    PAIR = "pair"
    HASH = "hash"
    SYMBOL = "symbol"
    STRING = "string"
    TEXT = "text"
    LITERAL = "literal"
    IDENTIFIER = "identifier"
    OPAQUE = "opaque"

    @property
    def is_namespace(self) -> bool:
        return self in (Construct.CLASS, Construct.MODULE)

    @property
    def is_constant(self) -> bool:
        return self in (Construct.CONSTANT, Construct.SCOPED_CONSTANT)


@dataclass(frozen=True)
class SyntaxNode:
    """
    Immutable tree node.

    Leaves carry their source ``text``; inner nodes carry ``children`` in
    source order. ``field`` is the grammar field name of this node under its
    parent, when the grammar names one.
    """

    construct: Construct
    type: str
    children: Tuple["SyntaxNode", ...] = ()
    text: Optional[str] = None
    field: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def child_by_field(self, field: str) -> Optional["SyntaxNode"]:
        for child in self.children:
            if child.field == field:
                return child
        return None

    def without(self, excluded: "SyntaxNode") -> "SyntaxNode":
        """Copy of this node minus one direct child (compared by identity)."""
        return SyntaxNode(
            construct=self.construct,
            type=self.type,
            children=tuple(child for child in self.children if child is not excluded),
            text=self.text,
            field=self.field,
        )

    def iter_leaves(self) -> Iterator["SyntaxNode"]:
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield node
            else:
                stack.extend(reversed(node.children))


def leaf(construct: Construct, text: str, type: Optional[str] = None, field: Optional[str] = None):
    """Build a leaf node."""
    return SyntaxNode(construct=construct, type=type or construct.value, text=text, field=field)


def branch(construct: Construct, *children: SyntaxNode, type: Optional[str] = None, field=None):
    """Build an inner node."""
    return SyntaxNode(
        construct=construct, type=type or construct.value, children=tuple(children), field=field
    )
