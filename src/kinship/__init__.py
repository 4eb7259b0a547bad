"""
Kinship - structural coupling graphs for object-oriented source code.

Builds a directed graph of the relationships between classes and modules:
constant references and declarative associations (belongs_to, has_many...).
"""

from kinship._version import __version__, __version_info__

from kinship.core import (
    Settings,
    KinshipError,
    ParseError,
    StructuralError,
    SourceReadError,
    ConfigurationError,
    UnknownFormatError,
    logger,
)
from kinship.graph import AssociationReference, Edge, Node, NodeKind, ObjectGraph
from kinship.analysis import EdgeResolver, GraphBuilder, NamespaceWalker, canonical_class_name
from kinship.reporting import ReportFormat, get_formatter
from kinship.analyzer import Analyzer

__all__ = [
    "__version__",
    "__version_info__",
    # Core
    "Settings",
    "logger",
    # Exceptions
    "KinshipError",
    "ParseError",
    "StructuralError",
    "SourceReadError",
    "ConfigurationError",
    "UnknownFormatError",
    # Graph
    "AssociationReference",
    "Edge",
    "Node",
    "NodeKind",
    "ObjectGraph",
    # Analysis
    "Analyzer",
    "EdgeResolver",
    "GraphBuilder",
    "NamespaceWalker",
    "canonical_class_name",
    # Reporting
    "ReportFormat",
    "get_formatter",
]
