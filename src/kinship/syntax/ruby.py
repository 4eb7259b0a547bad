"""
Ruby syntax provider using tree-sitter-ruby.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

import tree_sitter_ruby as ts_ruby
from tree_sitter import Language, Parser

from kinship.core.exceptions import ParseError
from kinship.core.logging import logger
from kinship.syntax.base import SyntaxProvider
from kinship.syntax.tree import Construct, SyntaxNode

RUBY_LANGUAGE = Language(ts_ruby.language())


class RubySyntaxProvider(SyntaxProvider):
    """
    Ruby provider.

    Tree-sitter Ruby shapes the engine relies on:
    - class / module: ``name`` field is a constant or scope_resolution
    - scope_resolution: ``scope`` (optional) and ``name`` fields
    - call: ``receiver`` (optional), ``method``, ``arguments``, ``block``
    - argument_list: positional args, then ``pair`` entries for keywords
    - pair: ``key`` (hash_key_symbol / simple_symbol / string) and ``value``
    """

    def __init__(self):
        super().__init__()
        self.parser = Parser(RUBY_LANGUAGE)

    def _get_language_name(self) -> str:
        return "ruby"

    def _get_construct_map(self) -> Dict[str, Construct]:
        return {
            "class": Construct.CLASS,
            "module": Construct.MODULE,
            "constant": Construct.CONSTANT,
            "scope_resolution": Construct.SCOPED_CONSTANT,
            "call": Construct.CALL,
            "argument_list": Construct.ARGUMENTS,
            "pair": Construct.PAIR,
            "hash": Construct.HASH,
            "simple_symbol": Construct.SYMBOL,
            "hash_key_symbol": Construct.SYMBOL,
            "delimited_symbol": Construct.SYMBOL,
            "string": Construct.STRING,
            "string_content": Construct.TEXT,
            "true": Construct.LITERAL,
            "false": Construct.LITERAL,
            "nil": Construct.LITERAL,
            "integer": Construct.LITERAL,
            "float": Construct.LITERAL,
            "identifier": Construct.IDENTIFIER,
        }

    def parse(self, source: str, origin: str = "<source>") -> SyntaxNode:
        tree = self.parser.parse(bytes(source, "utf8"))
        root = tree.root_node

        if root.has_error:
            error_node = self._first_error(root)
            line = error_node.start_point[0] + 1 if error_node is not None else None
            logger.warning("Ruby parse failed", origin=origin, line=line)
            error = ParseError(
                f"Could not parse {origin}" + (f" (line {line})" if line else ""),
                context={"origin": origin, "line": line, "language": "ruby"},
            )
            error.add_suggestion(f"Check that {origin} is valid Ruby: ruby -c {origin}")
            raise error

        return self._convert(root)

    def _convert(self, root: Any) -> SyntaxNode:
        """Native tree -> SyntaxNode, built bottom-up with an explicit stack."""
        # (native node, field, remaining named children, converted children)
        stack: List[Tuple[Any, Optional[str], Iterator[Tuple[Any, Optional[str]]], List[SyntaxNode]]]
        stack = [(root, None, iter(self._named_children(root)), [])]

        while True:
            node, field, remaining, converted = stack[-1]
            child = next(remaining, None)
            if child is not None:
                native, child_field = child
                stack.append((native, child_field, iter(self._named_children(native)), []))
                continue

            stack.pop()
            syntax_node = SyntaxNode(
                construct=self.construct_for(node.type),
                type=node.type,
                children=tuple(converted),
                text=node.text.decode("utf8") if not converted else None,
                field=field,
            )
            if not stack:
                return syntax_node
            stack[-1][3].append(syntax_node)

    def _named_children(self, node: Any) -> List[Tuple[Any, Optional[str]]]:
        """Named children of ``node`` with their grammar field names."""
        children: List[Tuple[Any, Optional[str]]] = []
        cursor = node.walk()
        if cursor.goto_first_child():
            while True:
                if cursor.node.is_named:
                    children.append((cursor.node, cursor.field_name))
                if not cursor.goto_next_sibling():
                    break
        return children

    def _first_error(self, root: Any) -> Optional[Any]:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node
            if node.has_error:
                stack.extend(reversed(node.children))
        return None
