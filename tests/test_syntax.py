"""
Syntax providers and the generic tree.
"""

import pytest

from kinship.core.exceptions import ParseError, UnsupportedLanguageError
from kinship.syntax import Construct
from kinship.syntax.factory import detect_language, get_provider, get_provider_for_file
from kinship.syntax.ruby import RubySyntaxProvider


@pytest.mark.parametrize(
    "path, language",
    [
        ("app/models/post.rb", "ruby"),
        ("lib/tasks/db.rake", "ruby"),
        ("kinship.gemspec", "ruby"),
        ("README.md", "unknown"),
    ],
)
def test_detect_language(path, language):
    assert detect_language(path) == language


def test_providers_are_cached():
    assert get_provider("ruby") is get_provider_for_file("post.rb")
    assert isinstance(get_provider("ruby"), RubySyntaxProvider)


def test_unsupported_language():
    with pytest.raises(UnsupportedLanguageError) as info:
        get_provider("cobol")
    assert info.value.suggestions == ["Supported languages: ruby"]


class TestRubyProvider:
    def test_class_shape(self, parse_ruby):
        tree = parse_ruby(
            """
            class Post < Base
              belongs_to :author, class_name: "User"
            end
            """
        )
        declaration = tree.children[0]
        assert declaration.construct is Construct.CLASS
        name = declaration.child_by_field("name")
        assert name.construct is Construct.CONSTANT
        assert name.text == "Post"

    def test_association_call_shape(self, parse_ruby):
        tree = parse_ruby('belongs_to :author, class_name: "User"\n')
        call = tree.children[0]
        assert call.construct is Construct.CALL
        assert call.child_by_field("method").text == "belongs_to"

        arguments = call.child_by_field("arguments")
        symbol, pair = arguments.children
        assert symbol.construct is Construct.SYMBOL
        assert symbol.text == ":author"
        assert pair.construct is Construct.PAIR
        assert pair.child_by_field("key").construct is Construct.SYMBOL
        value = pair.child_by_field("value")
        assert value.construct is Construct.STRING
        assert [leaf.text for leaf in value.iter_leaves()] == ["User"]

    def test_unknown_syntax_is_opaque(self, parse_ruby):
        tree = parse_ruby("x = [1, 2]\n")
        assert tree.children[0].construct is Construct.OPAQUE

    def test_invalid_source(self, ruby):
        with pytest.raises(ParseError) as info:
            ruby.parse("class Broken\n  def x\n", "broken.rb")
        assert info.value.context["origin"] == "broken.rb"
        assert info.value.suggestions


def test_deeply_nested_expression(ruby):
    tree = ruby.parse("TOTAL = " + " + ".join(["1"] * 3000) + "\n")

    deepest, stack = 0, [(tree, 0)]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in node.children)
    assert deepest > 3000
