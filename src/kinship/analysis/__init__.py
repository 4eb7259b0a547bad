"""
Analysis engine.

Namespace walking, reference extraction, raw graph construction and edge
resolution.
"""

from kinship.analysis.walker import NamespaceWalker, ScopedDeclaration, walk_tree
from kinship.analysis.associations import ASSOCIATION_COMMANDS, decode_arguments
from kinship.analysis.extractor import ReferenceExtractor, extract_references
from kinship.analysis.builder import GraphBuilder, combine
from kinship.analysis.inflections import canonical_class_name
from kinship.analysis.resolver import EdgeResolver, resolve_known_edges

__all__ = [
    "NamespaceWalker",
    "ScopedDeclaration",
    "walk_tree",
    "ASSOCIATION_COMMANDS",
    "decode_arguments",
    "ReferenceExtractor",
    "extract_references",
    "GraphBuilder",
    "combine",
    "canonical_class_name",
    "EdgeResolver",
    "resolve_known_edges",
]
