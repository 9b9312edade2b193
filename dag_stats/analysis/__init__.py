"""Graph construction, traversal and aggregation."""

from __future__ import annotations

from dag_stats.analysis.depth import compute_depths
from dag_stats.analysis.graph_builder import GraphBuilder
from dag_stats.analysis.graph_models import Graph, VertexWithStats
from dag_stats.analysis.paths import (
    collect_root_paths,
    count_paths_through,
    enumerate_root_paths,
    iter_root_paths,
)
from dag_stats.analysis.stats import StatsAggregator

__all__ = [
    "Graph",
    "GraphBuilder",
    "StatsAggregator",
    "VertexWithStats",
    "collect_root_paths",
    "compute_depths",
    "count_paths_through",
    "enumerate_root_paths",
    "iter_root_paths",
]
