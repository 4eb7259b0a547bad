"""
Edge Resolver - turns a combined raw graph into the final graph.

Two phases, in this order:

Phase A (associations)
    A1. Every pending AssociationReference becomes a meta record
        ``{"reference": name, **options}`` on its node. This completes for
        the whole graph before A2 starts, because A2 reads other nodes' meta.
    A2. Every meta record is resolved by the first applicable rule:
        class_name, through, polymorphic, then the reference itself.
        Targets are kept even when no node carries that name.

Phase B (plain references)
    A plain reference becomes an edge only if a node with exactly that name
    exists. Unknown names are dropped.

The final graph is the union of both phases' graphs.
"""

from typing import Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple

from kinship.analysis.associations import is_truthy
from kinship.analysis.inflections import canonical_class_name, singularize
from kinship.core.logging import logger
from kinship.core.tracing import MetricsCollector
from kinship.graph.models import Edge, Node
from kinship.graph.object_graph import ObjectGraph

MetaRecord = Dict[str, str]
Visited = FrozenSet[Tuple[str, str]]
ResolutionRule = Callable[["EdgeResolver", str, MetaRecord, Visited], Optional[List[str]]]


def _unique(names: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(names))


class EdgeResolver:
    def __init__(self, graph: ObjectGraph, metrics: Optional[MetricsCollector] = None):
        self.graph = graph
        self.metrics = metrics or MetricsCollector()
        self._annotated: Optional[ObjectGraph] = None

    def resolve(self) -> ObjectGraph:
        annotated = self.collect_meta()
        associations = self.resolve_associations(annotated)
        direct = self.resolve_direct_references(annotated)
        resolved = associations.union(direct)

        dangling = resolved.dangling_targets()
        self.metrics.gauge("resolver.dangling_targets", len(dangling))
        if dangling:
            logger.debug("Association edges without a node", targets=dangling)
        return resolved

    # Phase A1

    def collect_meta(self) -> ObjectGraph:
        """Copy of the graph with one meta record per pending association."""
        if self._annotated is None:
            annotated = []
            for node in self.graph:
                records = [association.as_meta() for association in node.association_references]
                if records:
                    node = node.merge(Node(name=node.name, kind=node.kind, meta=records))
                annotated.append(node)
            self._annotated = ObjectGraph(annotated)
        return self._annotated

    # Phase A2

    def resolve_associations(self, annotated: ObjectGraph) -> ObjectGraph:
        resolved = []
        for node in annotated:
            targets: List[str] = []
            for record in node.meta:
                targets.extend(self.targets_for(node.name, record, frozenset()))
            targets = _unique(targets)
            self.metrics.increment("resolver.edges.association", len(targets))
            resolved.append(
                Node(
                    name=node.name,
                    kind=node.kind,
                    edges=[Edge(target=target) for target in targets],
                    meta=node.meta,
                )
            )
        return ObjectGraph(resolved)

    def targets_for(self, owner: str, record: MetaRecord, visited: Visited) -> List[str]:
        """Targets of one meta record; the first rule that applies decides."""
        for rule in RESOLUTION_RULES:
            targets = rule(self, owner, record, visited)
            if targets is not None:
                return _unique(targets)
        return []

    def _by_class_name(
        self, owner: str, record: MetaRecord, visited: Visited
    ) -> Optional[List[str]]:
        class_name = record.get("class_name")
        if class_name is None:
            return None
        return [canonical_class_name(class_name)]

    def _by_through(
        self, owner: str, record: MetaRecord, visited: Visited
    ) -> Optional[List[str]]:
        through = record.get("through")
        if through is None:
            return None

        through_node = self._annotated_node(canonical_class_name(through))
        if through_node is None:
            logger.debug("Through association target missing", owner=owner, through=through)
            return []

        source = record.get("source") or record["reference"]
        candidates = {source, singularize(source)}
        targets: List[str] = []
        for candidate in through_node.meta:
            key = (through_node.name, candidate["reference"])
            if candidate["reference"] not in candidates or key in visited:
                continue
            targets.extend(self.targets_for(through_node.name, candidate, visited | {key}))
        return targets

    def _by_polymorphic(
        self, owner: str, record: MetaRecord, visited: Visited
    ) -> Optional[List[str]]:
        if not is_truthy(record.get("polymorphic")):
            return None

        reference = record["reference"]
        return [
            node.name
            for node in self.collect_meta()
            if any(candidate.get("as") == reference for candidate in node.meta)
        ]

    def _by_reference(
        self, owner: str, record: MetaRecord, visited: Visited
    ) -> Optional[List[str]]:
        return [canonical_class_name(record["reference"])]

    def _annotated_node(self, name: str) -> Optional[Node]:
        return self.collect_meta().get(name)

    # Phase B

    def resolve_direct_references(self, annotated: ObjectGraph) -> ObjectGraph:
        known = set(annotated.names)
        resolved = []
        for node in annotated:
            kept = [name for name in node.plain_references if name in known]
            dropped = len(node.plain_references) - len(kept)
            self.metrics.increment("resolver.edges.direct", len(kept))
            self.metrics.increment("resolver.references.dropped", dropped)
            resolved.append(
                Node(name=node.name, kind=node.kind, edges=[Edge(target=name) for name in kept])
            )
        return ObjectGraph(resolved)


RESOLUTION_RULES: Tuple[ResolutionRule, ...] = (
    EdgeResolver._by_class_name,
    EdgeResolver._by_through,
    EdgeResolver._by_polymorphic,
    EdgeResolver._by_reference,
)


def resolve_known_edges(graph: ObjectGraph, metrics: Optional[MetricsCollector] = None):
    return EdgeResolver(graph, metrics).resolve()
