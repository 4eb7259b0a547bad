"""
Graph data model.

Nodes are values: merging never mutates either side, it returns a new Node.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class NodeKind(str, Enum):
    CLASS = "class"
    MODULE = "module"


class KinshipBaseModel(BaseModel):
    """Common configuration for kinship models."""

    model_config = ConfigDict(
        use_enum_values=False,
        extra="forbid",
    )


class Edge(KinshipBaseModel):
    """Directed edge to a fully-qualified name."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    target: str


class AssociationReference(KinshipBaseModel):
    """
    One decoded declarative association, e.g. ``has_many :tags, through: :taggings``.

    ``reference`` is the association name as written (``tags``); ``options``
    holds the literal keyword arguments (``{"through": "taggings"}``).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    reference: str
    options: Dict[str, str] = Field(default_factory=dict)

    def as_meta(self) -> Dict[str, str]:
        """Meta record: the reference first, then the options."""
        meta = {"reference": self.reference}
        for key, value in self.options.items():
            meta.setdefault(key, value)
        return meta


PendingEdge = Union[AssociationReference, str]


def _unique(items: Iterable[T]) -> List[T]:
    result: List[T] = []
    for item in items:
        if item not in result:
            result.append(item)
    return result


class Node(KinshipBaseModel):
    """
    A named type in the graph.

    Invariant: identity is ``name``. ``edges`` are unique by target.
    ``pending`` holds plain reference names and association references that
    have not been resolved yet; ``meta`` holds one option map per declared
    association once they have been collected.
    """

    name: str
    kind: NodeKind
    edges: List[Edge] = Field(default_factory=list)
    pending: List[PendingEdge] = Field(default_factory=list)
    meta: List[Dict[str, str]] = Field(default_factory=list)

    @field_validator("edges", "pending", "meta")
    @classmethod
    def _deduplicate(cls, value: List[Any]) -> List[Any]:
        return _unique(value)

    def merge(self, other: "Node") -> "Node":
        """
        Union with a node of the same name.

        The receiver's kind wins. Edges, pending references and meta records
        are concatenated in first-appearance order without duplicates.
        """
        if other.name != self.name:
            raise ValueError(f"Cannot merge node {other.name!r} into {self.name!r}")

        return Node(
            name=self.name,
            kind=self.kind,
            edges=_unique([*self.edges, *other.edges]),
            pending=_unique([*self.pending, *other.pending]),
            meta=_unique([*self.meta, *other.meta]),
        )

    __add__ = merge

    @property
    def edge_targets(self) -> List[str]:
        return [edge.target for edge in self.edges]

    @property
    def plain_references(self) -> List[str]:
        return [item for item in self.pending if isinstance(item, str)]

    @property
    def association_references(self) -> List[AssociationReference]:
        return [item for item in self.pending if isinstance(item, AssociationReference)]

    def to_export(self) -> Dict[str, Any]:
        """Serializable view consumed by report formatters."""
        return {
            "name": self.name,
            "kind": self.kind.value,
            "edges": self.edge_targets,
            "meta": [dict(record) for record in self.meta],
        }
