"""
ObjectGraph - merge-capable container of Nodes keyed by name.
"""

import json
from typing import Any, Dict, Iterable, Iterator, List, Optional

from kinship.graph.models import Node


class ObjectGraph:
    """
    Mapping of fully-qualified name -> Node.

    Graphs are treated as immutable values: ``union`` and ``append`` return
    new graphs. Enumeration follows first-appearance order, so the same input
    always produces the same report.
    """

    def __init__(self, nodes: Iterable[Node] = ()):
        self._nodes: Dict[str, Node] = {}
        for node in nodes:
            self._merge_in(node)

    def _merge_in(self, node: Node) -> None:
        existing = self._nodes.get(node.name)
        self._nodes[node.name] = node if existing is None else existing.merge(node)

    def union(self, other: "ObjectGraph") -> "ObjectGraph":
        """Node-wise merge; same-named nodes are merged with ``Node.merge``."""
        merged = ObjectGraph(self._nodes.values())
        for node in other:
            merged._merge_in(node)
        return merged

    __add__ = union

    def append(self, node: Node) -> "ObjectGraph":
        """Union with a single-node graph."""
        return self.union(ObjectGraph([node]))

    __lshift__ = append

    def get(self, name: str) -> Optional[Node]:
        return self._nodes.get(name)

    def __getitem__(self, name: str) -> Node:
        return self._nodes[name]

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectGraph):
            return NotImplemented
        return self._nodes == other._nodes

    def __repr__(self) -> str:
        return f"ObjectGraph({list(self._nodes)!r})"

    @property
    def names(self) -> List[str]:
        return list(self._nodes)

    def dangling_targets(self) -> List[str]:
        """Edge targets that have no node of their own, in order of appearance."""
        dangling: List[str] = []
        for node in self._nodes.values():
            for target in node.edge_targets:
                if target not in self._nodes and target not in dangling:
                    dangling.append(target)
        return dangling

    def to_dict(self) -> Dict[str, Any]:
        return {"nodes": [node.to_export() for node in self._nodes.values()]}

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
