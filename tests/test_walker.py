"""
Namespace walker over hand-built and parsed trees.
"""

import pytest

from kinship.analysis.walker import NamespaceWalker, constant_chain, header_name, walk_tree
from kinship.core.exceptions import StructuralError
from kinship.graph.models import NodeKind
from kinship.syntax.tree import Construct, branch, leaf


def const(name, field=None):
    return leaf(Construct.CONSTANT, name, field=field)


def scoped(*names, field=None):
    node = const(names[0], field="scope")
    for name in names[1:]:
        node = branch(Construct.SCOPED_CONSTANT, node, const(name, field="name"), field="scope")
    return branch(Construct.SCOPED_CONSTANT, *node.children, field=field)


def body(*statements):
    return branch(Construct.OPAQUE, *statements, type="body_statement", field="body")


def klass(name_node, *statements):
    return branch(Construct.CLASS, name_node, body(*statements), type="class")


def module(name_node, *statements):
    return branch(Construct.MODULE, name_node, body(*statements), type="module")


def program(*statements):
    return branch(Construct.OPAQUE, *statements, type="program")


class TestConstantChain:
    def test_bare_constant(self):
        assert constant_chain(const("Foo")) == ["Foo"]

    def test_scoped_chain(self):
        assert constant_chain(scoped("A", "B", "C")) == ["A", "B", "C"]

    def test_non_constant_scope_is_ignored(self):
        node = branch(
            Construct.SCOPED_CONSTANT,
            leaf(Construct.IDENTIFIER, "foo", field="scope"),
            const("Bar", field="name"),
        )
        assert constant_chain(node) == ["Bar"]


class TestHeaderName:
    def test_first_constant_wins(self):
        declaration = branch(
            Construct.CLASS,
            const("Post", field="name"),
            branch(Construct.OPAQUE, const("Base"), type="superclass"),
        )
        name_node, segments = header_name(declaration)
        assert segments == ["Post"]
        assert name_node is declaration.children[0]

    def test_missing_constant_is_structural_error(self):
        declaration = branch(Construct.CLASS, leaf(Construct.IDENTIFIER, "post"), body())
        with pytest.raises(StructuralError):
            header_name(declaration)


class TestNamespaceWalker:
    def test_nested_declarations_get_full_names(self):
        tree = program(module(const("Foo"), klass(const("Bar"), klass(const("Baz")))))

        declarations = walk_tree(tree)

        assert [d.name for d in declarations] == ["Foo", "Foo::Bar", "Foo::Bar::Baz"]
        assert [d.kind for d in declarations] == [NodeKind.MODULE, NodeKind.CLASS, NodeKind.CLASS]

    def test_breadth_first_order(self):
        tree = program(
            module(const("A"), klass(const("Inner"))),
            module(const("B")),
        )
        assert [d.name for d in walk_tree(tree)] == ["A", "B", "A::Inner"]

    def test_scoped_header_extends_namespace(self):
        tree = program(module(const("Admin"), klass(scoped("Reports", "Daily"))))
        assert [d.name for d in walk_tree(tree)] == ["Admin", "Admin::Reports::Daily"]

    def test_body_excludes_header_name(self):
        tree = program(klass(const("Post"), const("User")))

        declaration = walk_tree(tree)[0]

        constants = [n.text for n in declaration.body.iter_leaves() if n.construct is Construct.CONSTANT]
        assert constants == ["User"]

    def test_reopened_namespace_yields_one_entry_each(self):
        tree = program(klass(const("Post")), klass(const("Post")))

        walker = NamespaceWalker(tree)

        assert [d.name for d in walker.walk()] == ["Post", "Post"]
        assert len(walker.walk_mapping()["Post"]) == 2

    def test_declarations_inside_other_constructs_are_found(self):
        wrapped = branch(Construct.OPAQUE, klass(const("Hidden")), type="if")
        assert [d.name for d in walk_tree(program(wrapped))] == ["Hidden"]

    def test_malformed_nested_header_fails_whole_walk(self):
        broken = branch(Construct.CLASS, body(), type="class")
        with pytest.raises(StructuralError):
            walk_tree(program(module(const("Foo"), broken)))


class TestWalkerOnRuby:
    def test_module_with_class(self, parse_ruby):
        tree = parse_ruby(
            """
            module Foo
              class Bar
              end
            end
            """
        )
        assert [(d.name, d.kind) for d in walk_tree(tree)] == [
            ("Foo", NodeKind.MODULE),
            ("Foo::Bar", NodeKind.CLASS),
        ]

    def test_compact_style_and_singleton_class(self, parse_ruby):
        tree = parse_ruby(
            """
            class Api::V1::PostsController < ApplicationController
              class << self
                def build; end
              end
            end
            """
        )
        assert [d.name for d in walk_tree(tree)] == ["Api::V1::PostsController"]
