"""Graph builder: turns edge records into an immutable reference graph."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable

from dag_stats.analysis.graph_models import Graph
from dag_stats.errors import DuplicateVertex, InvalidVertexId, MissingRoot
from dag_stats.models import ROOT_ID, EdgeRecord, Vertex

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Build a reference graph from parsed edge records.

    The builder does not detect cycles or unreachable vertices; the data
    source is trusted for both.
    """

    def __init__(self, root_id: int = ROOT_ID):
        self.root_id = root_id

    def build(self, records: Iterable[EdgeRecord]) -> Graph:
        vertices: dict[int, Vertex] = {}
        forward: dict[int, list[int]] = {}
        reverse: dict[int, list[int]] = {}
        declared: set[int] = set()

        # Step 1: Source declarations
        for record in records:
            source = self._check_id(record.source)
            if source in declared:
                raise DuplicateVertex(source)
            declared.add(source)
            vertices[source] = Vertex(id=source, timestamp=record.timestamp)
            forward[source] = []
            reverse.setdefault(source, [])

            for target in record.targets:
                target = self._check_id(target)
                self._add_edge(forward, reverse, source, target)

        # Step 2: Vertices only seen as targets are leaves
        for target in list(reverse):
            if target not in vertices:
                vertices[target] = Vertex(id=target)
                forward[target] = []

        if self.root_id not in vertices:
            raise MissingRoot(self.root_id)

        graph = Graph(
            vertices=MappingProxyType(dict(sorted(vertices.items()))),
            forward=MappingProxyType({vid: tuple(forward[vid]) for vid in sorted(forward)}),
            reverse=MappingProxyType({vid: tuple(reverse[vid]) for vid in sorted(reverse)}),
            root_id=self.root_id,
        )
        logger.debug("built graph: %d vertices, %d edges", len(graph), graph.edge_count)
        return graph

    @staticmethod
    def _add_edge(
        forward: dict[int, list[int]],
        reverse: dict[int, list[int]],
        source: int,
        target: int,
    ) -> None:
        # A reference either exists or does not
        if target in forward[source]:
            return
        forward[source].append(target)
        reverse.setdefault(target, []).append(source)

    @staticmethod
    def _check_id(vertex_id: int) -> int:
        if isinstance(vertex_id, bool) or not isinstance(vertex_id, int) or vertex_id < 1:
            raise InvalidVertexId(vertex_id)
        return vertex_id
