"""Data models for the reference graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from dag_stats.errors import UnknownVertex
from dag_stats.models import ROOT_ID, Vertex


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(mapping)


@dataclass(frozen=True)
class Graph:
    """Built reference graph. Read-only once constructed.

    Acyclicity and reachability from the root are assumed, not checked:
    traversals over a cyclic graph do not terminate, and vertices the root
    cannot reach simply get no depth.
    """
    vertices: Mapping[int, Vertex] = field(default_factory=lambda: _frozen({}))
    forward: Mapping[int, tuple[int, ...]] = field(default_factory=lambda: _frozen({}))  # source -> targets
    reverse: Mapping[int, tuple[int, ...]] = field(default_factory=lambda: _frozen({}))  # target -> sources
    root_id: int = ROOT_ID

    def outgoing_of(self, vertex_id: int) -> tuple[int, ...]:
        try:
            return self.forward[vertex_id]
        except KeyError:
            raise UnknownVertex(vertex_id) from None

    def incoming_of(self, vertex_id: int) -> tuple[int, ...]:
        try:
            return self.reverse[vertex_id]
        except KeyError:
            raise UnknownVertex(vertex_id) from None

    def vertex(self, vertex_id: int) -> Vertex:
        try:
            return self.vertices[vertex_id]
        except KeyError:
            raise UnknownVertex(vertex_id) from None

    def vertex_ids(self) -> tuple[int, ...]:
        return tuple(sorted(self.vertices))

    def in_degree(self, vertex_id: int) -> int:
        return len(self.incoming_of(vertex_id))

    def out_degree(self, vertex_id: int) -> int:
        return len(self.outgoing_of(vertex_id))

    def is_leaf(self, vertex_id: int) -> bool:
        return not self.outgoing_of(vertex_id)

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.forward.values())

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self.vertices

    def __len__(self) -> int:
        return len(self.vertices)


@dataclass(frozen=True)
class VertexWithStats:
    """A :class:`Vertex` joined with the statistics computed for it."""
    vertex: Vertex
    in_degree: int = 0
    depth: int | None = None  # None: not reachable from the root
    path_count: int = 0  # root-to-leaf paths passing through this vertex

    @property
    def id(self) -> int:
        return self.vertex.id

    @property
    def reachable(self) -> bool:
        return self.depth is not None
