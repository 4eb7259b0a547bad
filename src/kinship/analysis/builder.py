"""
GraphBuilder - raw (unresolved) graphs from syntax trees.

Every node produced here has empty ``edges`` and a ``pending`` list holding
the plain references and association references found in its declaration.
"""

from functools import reduce
from typing import Iterable, List, Optional

from kinship.analysis.extractor import extract_references
from kinship.analysis.walker import ScopedDeclaration, walk_tree
from kinship.core.logging import logger
from kinship.core.tracing import MetricsCollector
from kinship.graph.models import Node
from kinship.graph.object_graph import ObjectGraph
from kinship.syntax.tree import SyntaxNode


class GraphBuilder:
    def __init__(self, metrics: Optional[MetricsCollector] = None):
        self.metrics = metrics or MetricsCollector()

    def node_from(self, declaration: ScopedDeclaration) -> Node:
        pending = extract_references(declaration)
        self.metrics.increment("builder.declarations")
        self.metrics.increment("builder.pending_references", len(pending))
        return Node(name=declaration.name, kind=declaration.kind, pending=pending)

    def nodes_from(self, tree: SyntaxNode) -> List[Node]:
        return [self.node_from(declaration) for declaration in walk_tree(tree)]

    def graph_from(self, tree: SyntaxNode, origin: str = "<source>") -> ObjectGraph:
        """Raw graph for one source unit."""
        graph = reduce(ObjectGraph.append, self.nodes_from(tree), ObjectGraph())
        logger.debug("Built raw graph", origin=origin, nodes=len(graph))
        return graph


def combine(graphs: Iterable[ObjectGraph]) -> ObjectGraph:
    """Union of per-unit graphs. ``union`` is associative, so order only affects enumeration."""
    return reduce(ObjectGraph.union, graphs, ObjectGraph())
