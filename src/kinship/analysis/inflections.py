"""
Association name -> class name inflection.

Follows the Rails convention: ``:comments`` -> ``Comment``,
``:line_items`` -> ``LineItem``, ``class_name: "Admin::User"`` ->
``Admin::User``. English-only and heuristic; irregular words are whatever the
``inflection`` rules make of them.
"""

import re
from functools import lru_cache

import inflection

_TABLE_PREFIX = re.compile(r".*\.")


def singularize(word: str) -> str:
    return inflection.singularize(word)


def classify(name: str) -> str:
    """Table-style name -> class name (``schema.line_items`` -> ``LineItem``)."""
    return inflection.camelize(inflection.singularize(_TABLE_PREFIX.sub("", name)))


@lru_cache(maxsize=4096)
def canonical_class_name(token: str) -> str:
    """Pluralize, then classify."""
    return classify(inflection.pluralize(token))
