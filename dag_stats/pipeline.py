"""Statistics pipeline orchestrator: load -> build -> depths / paths -> aggregate."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from dag_stats.analysis.depth import compute_depths
from dag_stats.analysis.graph_builder import GraphBuilder
from dag_stats.analysis.graph_models import Graph, VertexWithStats
from dag_stats.analysis.paths import collect_root_paths, enumerate_root_paths
from dag_stats.analysis.stats import StatsAggregator
from dag_stats.database import load_records
from dag_stats.models import AnalysisConfig, EdgeRecord, GraphStats

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]

_builder = GraphBuilder()
_aggregator = StatsAggregator()


def build_graph(records: Iterable[EdgeRecord], progress: ProgressCallback | None = None) -> Graph:
    """Stage 2: Build the graph from edge records."""
    if progress:
        progress("Building", 0, 1)
    graph = _builder.build(records)
    if progress:
        progress("Building", 1, 1)
    return graph


def analyze_graph(graph: Graph, progress: ProgressCallback | None = None) -> GraphStats:
    """Stages 3-5: Depths and root paths, then the three averages."""
    # Both traversals only read the graph
    if progress:
        progress("Depths", 0, 1)
    depths = compute_depths(graph)
    if progress:
        progress("Depths", 1, 1)

    if progress:
        progress("Paths", 0, 1)
    path_lengths = enumerate_root_paths(graph)
    if progress:
        progress("Paths", 1, 1)

    if progress:
        progress("Aggregating", 0, 1)
    stats = _aggregator.aggregate(graph, depths, path_lengths)
    if progress:
        progress("Aggregating", 1, 1)

    logger.info(
        "analyzed %d vertices, %d edges, %d root paths",
        stats.vertex_count, stats.edge_count, stats.path_count,
    )
    return stats


def analyze_records(
    records: Iterable[EdgeRecord],
    progress: ProgressCallback | None = None,
) -> GraphStats:
    """Build a graph from records and compute its statistics."""
    return analyze_graph(build_graph(records, progress), progress)


def vertex_report(graph: Graph) -> list[VertexWithStats]:
    """Per-vertex stats, ordered by vertex id."""
    depths = compute_depths(graph)
    paths = collect_root_paths(graph)
    return list(_aggregator.vertex_stats(graph, depths, paths.through).values())


def run_pipeline(
    config: AnalysisConfig,
    progress: ProgressCallback | None = None,
) -> GraphStats:
    """Run the full statistics pipeline on a ledger file."""
    # Stage 1: Load
    if progress:
        progress("Loading", 0, 1)
    records = load_records(config.database_path)
    if progress:
        progress("Loading", 1, 1)
    logger.debug("loaded %d records from %s", len(records), config.database_path)

    return analyze_records(records, progress)


def run_vertex_report(config: AnalysisConfig) -> list[VertexWithStats]:
    """Load a ledger file and return per-vertex stats."""
    return vertex_report(build_graph(load_records(config.database_path)))
