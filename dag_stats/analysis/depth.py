"""Root depth: shortest hop distance from the root to every vertex."""

from __future__ import annotations

import logging
from collections import deque

from dag_stats.analysis.graph_models import Graph

logger = logging.getLogger(__name__)


def compute_depths(graph: Graph) -> dict[int, int]:
    """BFS from the root over forward edges.

    Discovery order is non-decreasing in distance, so the first time a
    vertex is reached gives its depth even when it has several parents.
    Vertices the root cannot reach are left out of the result.
    """
    if graph.root_id not in graph:
        return {}

    depths: dict[int, int] = {graph.root_id: 0}
    queue = deque([graph.root_id])

    while queue:
        current = queue.popleft()
        next_depth = depths[current] + 1
        for neighbor in graph.outgoing_of(current):
            if neighbor in depths:
                continue
            depths[neighbor] = next_depth
            queue.append(neighbor)

    unreached = len(graph) - len(depths)
    if unreached:
        logger.debug("%d vertices are not reachable from the root", unreached)
    return depths
