"""
Reference extraction, scoped to one declaration.
"""

from kinship.analysis.extractor import extract_references
from kinship.analysis.walker import NamespaceWalker
from kinship.graph.models import AssociationReference


def references_of(tree, name):
    declaration = NamespaceWalker(tree).walk_mapping()[name][0]
    return extract_references(declaration)


class TestReferenceExtractor:
    def test_plain_references_in_source_order(self, parse_ruby):
        tree = parse_ruby(
            """
            class Report < Base
              FORMAT = Formats::Csv

              def build
                Post.where(author: User.current)
              end
            end
            """
        )
        assert references_of(tree, "Report") == ["Base", "FORMAT", "Formats::Csv", "Post", "User"]

    def test_self_reference_is_excluded(self, parse_ruby):
        tree = parse_ruby(
            """
            class Post
              def self.build
                Post.new
              end
            end
            """
        )
        assert references_of(tree, "Post") == []

    def test_nested_declaration_content_is_excluded(self, parse_ruby):
        tree = parse_ruby(
            """
            module Billing
              Gateway.configure

              class Invoice
                belongs_to :customer
                Tax.rate
              end
            end
            """
        )
        assert references_of(tree, "Billing") == ["Gateway"]
        assert references_of(tree, "Billing::Invoice") == [
            AssociationReference(reference="customer"),
            "Tax",
        ]

    def test_association_with_options(self, parse_ruby):
        tree = parse_ruby(
            """
            class Post
              belongs_to :author, class_name: "User", optional: true
              has_many :comments, as: :commentable, dependent: :destroy
            end
            """
        )
        assert references_of(tree, "Post") == [
            AssociationReference(reference="author", options={"class_name": "User", "optional": "true"}),
            AssociationReference(reference="comments", options={"as": "commentable", "dependent": "destroy"}),
        ]

    def test_association_arguments_are_not_plain_references(self, parse_ruby):
        tree = parse_ruby(
            """
            class Post
              has_many :entries, class_name: Journal::Entry.name
            end
            """
        )
        assert references_of(tree, "Post") == [AssociationReference(reference="entries")]

    def test_parenthesized_association_and_scope_lambda(self, parse_ruby):
        tree = parse_ruby(
            """
            class Post
              has_many(:tags, -> { order(:name) }, through: :taggings)
            end
            """
        )
        assert references_of(tree, "Post") == [
            AssociationReference(reference="tags", options={"through": "taggings"})
        ]

    def test_hash_rocket_keys_are_normalized(self, parse_ruby):
        tree = parse_ruby(
            """
            class Post
              belongs_to :author, :class_name => "User"
            end
            """
        )
        assert references_of(tree, "Post") == [
            AssociationReference(reference="author", options={"class_name": "User"})
        ]

    def test_association_with_receiver_is_a_plain_call(self, parse_ruby):
        tree = parse_ruby(
            """
            class Post
              Relation.has_many :things
            end
            """
        )
        assert references_of(tree, "Post") == ["Relation"]
