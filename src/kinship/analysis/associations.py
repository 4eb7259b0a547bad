"""
Association Argument Decoder.

Turns the argument list of ``belongs_to`` / ``has_one`` / ``has_many`` /
``has_and_belongs_to_many`` into an AssociationReference:

    has_many :comments, as: :commentable, dependent: :destroy
    -> AssociationReference(reference="comments",
                            options={"as": "commentable", "dependent": "destroy"})

Only options whose value is a single literal token are kept; computed values
(lambdas, method calls, interpolated strings, arrays...) are left out.
"""

from typing import Dict, Iterable, Optional

from kinship.graph.models import AssociationReference
from kinship.syntax.tree import Construct, SyntaxNode

ASSOCIATION_COMMANDS = frozenset(
    ["belongs_to", "has_one", "has_many", "has_and_belongs_to_many"]
)

FALSY_LITERALS = frozenset(["false", "nil", ""])


def literal_text(node: SyntaxNode) -> Optional[str]:
    """
    Text of a single-token literal, or None when the node is computed.

    ``:taggings`` -> "taggings", ``"User"`` -> "User", ``true`` -> "true".
    """
    construct = node.construct

    if construct is Construct.SYMBOL:
        if node.is_leaf:
            return node.text.lstrip(":") if node.text else None
        return _single_text(node.children)

    if construct is Construct.STRING:
        return _single_text(node.children)

    if construct is Construct.LITERAL:
        return node.text

    return None


def _single_text(children: Iterable[SyntaxNode]) -> Optional[str]:
    parts = list(children)
    if len(parts) == 1 and parts[0].construct is Construct.TEXT:
        return parts[0].text
    return None


def normalize_key(key: str) -> str:
    """``class_name:`` / ``:class_name`` -> ``class_name``."""
    return key.replace(":", "")


def decode_options(entries: Iterable[SyntaxNode]) -> Dict[str, str]:
    options: Dict[str, str] = {}
    for entry in entries:
        if entry.construct is Construct.HASH:
            options.update(decode_options(entry.children))
            continue
        if entry.construct is not Construct.PAIR or len(entry.children) != 2:
            continue

        key_node = entry.child_by_field("key") or entry.children[0]
        value_node = entry.child_by_field("value") or entry.children[1]
        key = literal_text(key_node)
        value = literal_text(value_node)
        if key and value is not None:
            options[normalize_key(key)] = value
    return options


def decode_arguments(arguments: SyntaxNode) -> Optional[AssociationReference]:
    """
    Decode an association's argument list.

    Returns None when the first argument is not a symbol literal; such an
    invocation names nothing we can resolve.
    """
    if not arguments.children:
        return None

    first = arguments.children[0]
    if first.construct is not Construct.SYMBOL:
        return None

    reference = literal_text(first)
    if not reference:
        return None

    return AssociationReference(
        reference=reference,
        options=decode_options(arguments.children[1:]),
    )


def association_arguments(call: SyntaxNode) -> Optional[SyntaxNode]:
    """
    Argument list of ``call`` when it is an association invocation.

    An association invocation has no receiver, one of the association
    command names, and at least one argument.
    """
    if call.construct is not Construct.CALL or call.child_by_field("receiver") is not None:
        return None

    method = call.child_by_field("method")
    if method is None or method.construct is not Construct.IDENTIFIER:
        return None
    if method.text not in ASSOCIATION_COMMANDS:
        return None

    arguments = call.child_by_field("arguments")
    if arguments is None or arguments.construct is not Construct.ARGUMENTS:
        return None
    if not arguments.children:
        return None
    return arguments


def is_truthy(value: Optional[str]) -> bool:
    return value is not None and value not in FALSY_LITERALS
