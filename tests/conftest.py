"""
Shared fixtures for the kinship test suite.
"""

import textwrap

import pytest

from kinship.analyzer import Analyzer
from kinship.core.settings import Settings
from kinship.syntax.factory import get_provider


@pytest.fixture
def settings():
    """Default settings, independent of any .kinship.yml or environment."""
    return Settings.from_dict({})


@pytest.fixture
def ruby():
    return get_provider("ruby")


@pytest.fixture
def parse_ruby(ruby):
    def _parse(source: str):
        return ruby.parse(textwrap.dedent(source))

    return _parse


@pytest.fixture
def build_graph(settings):
    """Resolved graph for one or more Ruby snippets (one unit each)."""

    def _build(*sources: str):
        return Analyzer.for_source(
            *(textwrap.dedent(source) for source in sources), settings=settings
        ).graph

    return _build


@pytest.fixture
def models_dir(tmp_path):
    """A small Rails-style models directory."""
    models = tmp_path / "app" / "models"
    models.mkdir(parents=True)
    (models / "post.rb").write_text(
        textwrap.dedent(
            """
            class Post < ApplicationRecord
              belongs_to :author, class_name: "User"
              has_many :comments, as: :commentable
              has_many :taggings
              has_many :tags, through: :taggings
            end
            """
        )
    )
    (models / "user.rb").write_text(
        textwrap.dedent(
            """
            class User < ApplicationRecord
              has_many :posts, foreign_key: :author_id
            end
            """
        )
    )
    (models / "comment.rb").write_text(
        textwrap.dedent(
            """
            class Comment < ApplicationRecord
              belongs_to :commentable, polymorphic: true
            end
            """
        )
    )
    (models / "tagging.rb").write_text(
        textwrap.dedent(
            """
            class Tagging < ApplicationRecord
              belongs_to :post
              belongs_to :tag
            end
            """
        )
    )
    (models / "tag.rb").write_text(
        textwrap.dedent(
            """
            class Tag < ApplicationRecord
              def self.popular
                Tagging.group(:tag_id)
              end
            end
            """
        )
    )
    (models / "README.md").write_text("Not ruby")
    return models
