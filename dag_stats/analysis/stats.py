"""Graph statistics: inbound references, root depth and root path size."""

from __future__ import annotations

from collections import Counter
from typing import Mapping, Sequence

from dag_stats.analysis.graph_models import Graph, VertexWithStats
from dag_stats.models import GraphStats


class StatsAggregator:
    """Combine per-vertex and per-path values into the graph averages.

    An empty denominator (no vertices, no reached vertices, no paths)
    yields ``0.0`` for that average.
    """

    def aggregate(
        self,
        graph: Graph,
        depths: Mapping[int, int],
        path_lengths: Sequence[int],
    ) -> GraphStats:
        vertex_ids = graph.vertex_ids()
        inbound_total = sum(graph.in_degree(vid) for vid in vertex_ids)

        return GraphStats(
            avg_inbound_refs=_average(inbound_total, len(vertex_ids)),
            avg_root_depth=_average(sum(depths.values()), len(depths)),
            avg_nodes_per_root_path=_average(sum(path_lengths), len(path_lengths)),
            vertex_count=len(vertex_ids),
            edge_count=graph.edge_count,
            path_count=len(path_lengths),
            avg_nodes_per_depth=nodes_per_depth(depths),
        )

    def vertex_stats(
        self,
        graph: Graph,
        depths: Mapping[int, int],
        path_counts: Mapping[int, int],
    ) -> dict[int, VertexWithStats]:
        """Per-vertex views keyed by id, ascending."""
        return {
            vid: VertexWithStats(
                vertex=graph.vertex(vid),
                in_degree=graph.in_degree(vid),
                depth=depths.get(vid),
                path_count=path_counts.get(vid, 0),
            )
            for vid in graph.vertex_ids()
        }


def _average(total: int, count: int) -> float:
    if count == 0:
        return 0.0
    return total / count


def nodes_per_depth(depths: Mapping[int, int]) -> float:
    """Average vertex count over the occupied depth levels below the root."""
    levels = Counter(depth for depth in depths.values() if depth > 0)
    return _average(sum(levels.values()), len(levels))
