"""
Graph Module - object graph of named types and their edges.
"""

from kinship.graph.models import AssociationReference, Edge, Node, NodeKind, PendingEdge
from kinship.graph.object_graph import ObjectGraph

__all__ = ["AssociationReference", "Edge", "Node", "NodeKind", "PendingEdge", "ObjectGraph"]
