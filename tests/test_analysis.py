"""Tests for root depth, root path enumeration, and the aggregated statistics."""

import pytest

from dag_stats.analysis.depth import compute_depths
from dag_stats.analysis.graph_builder import GraphBuilder
from dag_stats.analysis.graph_models import Graph, VertexWithStats
from dag_stats.analysis.paths import (
    collect_root_paths,
    count_paths_through,
    enumerate_root_paths,
    iter_root_paths,
)
from dag_stats.analysis.stats import StatsAggregator, nodes_per_depth
from dag_stats.errors import DuplicateVertex
from dag_stats.models import EdgeRecord, GraphStats
from dag_stats.pipeline import analyze_records


# ── Helpers ───────────────────────────────────────────────────

def _records(*pairs):
    return [EdgeRecord(source=s, targets=list(t)) for s, t in pairs]


def _build(*pairs):
    return GraphBuilder().build(_records(*pairs))


def _diamond():
    return _build((1, [2, 3]), (2, [4]), (3, [4]))


# ── Depth ─────────────────────────────────────────────────────

class TestDepth:
    def test_root_depth_zero(self):
        assert compute_depths(_build((1, []))) == {1: 0}

    def test_diamond(self):
        assert compute_depths(_diamond()) == {1: 0, 2: 1, 3: 1, 4: 2}

    def test_shortest_of_several_parents(self):
        # 5 hangs off both a deep chain and the root itself
        graph = _build((1, [2, 5]), (2, [3]), (3, [4]), (4, [5]))
        depths = compute_depths(graph)
        assert depths[5] == 1
        assert depths[4] == 3

    def test_deep_parent_listed_first(self):
        graph = _build((1, [2, 4]), (2, [3]), (3, [4]))
        assert compute_depths(graph)[4] == 1

    def test_unreachable_left_out(self):
        graph = _build((1, [2]), (7, [8]))
        depths = compute_depths(graph)
        assert depths == {1: 0, 2: 1}
        assert 7 not in depths

    def test_successor_depth_bound(self):
        graph = _build((1, [2, 3, 6]), (2, [4]), (3, [4, 5]), (4, [6]), (5, [6]))
        depths = compute_depths(graph)
        for vid, depth in depths.items():
            for child in graph.outgoing_of(vid):
                assert depths[child] <= depth + 1
            if vid != graph.root_id:
                # Discovered through a parent exactly one hop shallower
                assert any(depths[p] == depth - 1 for p in graph.incoming_of(vid))

    def test_empty_graph(self):
        assert compute_depths(Graph()) == {}


# ── Root paths ────────────────────────────────────────────────

class TestRootPaths:
    def test_isolated_root(self):
        graph = _build((1, []))
        assert list(iter_root_paths(graph)) == [(1,)]
        assert enumerate_root_paths(graph) == [1]

    def test_two_leaves(self):
        graph = _build((1, [2, 3]))
        assert list(iter_root_paths(graph)) == [(1, 2), (1, 3)]

    def test_diamond_shared_vertex_counted_per_path(self):
        graph = _diamond()
        assert list(iter_root_paths(graph)) == [(1, 2, 4), (1, 3, 4)]
        assert enumerate_root_paths(graph) == [3, 3]

    def test_backtracking_between_siblings(self):
        graph = _build((1, [2, 5]), (2, [3, 4]))
        assert list(iter_root_paths(graph)) == [(1, 2, 3), (1, 2, 4), (1, 5)]

    def test_lengths_at_least_one(self):
        graph = _build((1, [2, 3, 6]), (2, [4]), (3, [4, 5]), (4, [6]), (5, [6]))
        lengths = enumerate_root_paths(graph)
        assert lengths
        assert all(length >= 1 for length in lengths)

    def test_unreachable_leaves_ignored(self):
        graph = _build((1, [2]), (7, [8]))
        assert enumerate_root_paths(graph) == [2]

    def test_deep_chain_no_recursion_limit(self):
        n = 5000
        graph = _build(*[(i, [i + 1]) for i in range(1, n)])
        assert enumerate_root_paths(graph) == [n]
        assert compute_depths(graph)[n] == n - 1

    def test_paths_through(self):
        graph = _diamond()
        assert count_paths_through(graph) == {1: 2, 2: 1, 3: 1, 4: 2}

    def test_collect_matches_enumerate(self):
        graph = _build((1, [2, 3]), (2, [4, 5]), (3, [5]))
        collected = collect_root_paths(graph)
        assert collected.lengths == enumerate_root_paths(graph)
        assert collected.through[1] == len(collected.lengths)

    def test_empty_graph(self):
        assert enumerate_root_paths(Graph()) == []


# ── Aggregation ───────────────────────────────────────────────

class TestStatsAggregator:
    def test_empty_graph_reports_zero(self):
        result = StatsAggregator().aggregate(Graph(), {}, [])
        assert result == GraphStats(0.0, 0.0, 0.0)

    def test_nodes_per_depth_skips_root_level(self):
        depths = {1: 0, 2: 1, 3: 1, 4: 2, 5: 2, 6: 3}
        assert nodes_per_depth(depths) == 5 / 3

    def test_nodes_per_depth_only_occupied_levels(self):
        assert nodes_per_depth({1: 0, 2: 1, 3: 3, 4: 3}) == 1.5

    def test_nodes_per_depth_root_only(self):
        assert nodes_per_depth({1: 0}) == 0.0
        assert nodes_per_depth({}) == 0.0

    def test_no_paths_reports_zero(self):
        graph = _build((1, [2]))
        result = StatsAggregator().aggregate(graph, {1: 0, 2: 1}, [])
        assert result.avg_nodes_per_root_path == 0.0
        assert result.path_count == 0

    def test_depth_average_over_reached_only(self):
        graph = _build((1, [2]), (7, [8]))
        depths = compute_depths(graph)
        result = StatsAggregator().aggregate(graph, depths, enumerate_root_paths(graph))
        assert result.avg_root_depth == 0.5
        assert result.avg_inbound_refs == 0.5

    def test_floats_without_rounding(self):
        graph = _build((1, [2, 3]))
        result = StatsAggregator().aggregate(graph, {1: 0, 2: 1, 3: 1}, [2, 2])
        assert result.avg_inbound_refs == 2 / 3
        assert isinstance(result.avg_nodes_per_root_path, float)

    def test_vertex_stats(self):
        graph = _build((1, [2, 3]), (2, [4]), (3, [4]), (9, []))
        depths = compute_depths(graph)
        views = StatsAggregator().vertex_stats(graph, depths, count_paths_through(graph))
        assert list(views) == [1, 2, 3, 4, 9]
        assert views[4] == VertexWithStats(
            vertex=graph.vertex(4), in_degree=2, depth=2, path_count=2,
        )
        assert views[9].depth is None
        assert not views[9].reachable
        assert views[9].path_count == 0
        assert views[1].id == 1

    def test_vertex_stats_leave_graph_untouched(self):
        graph = _diamond()
        before = (dict(graph.forward), dict(graph.reverse))
        StatsAggregator().vertex_stats(graph, compute_depths(graph), count_paths_through(graph))
        assert (dict(graph.forward), dict(graph.reverse)) == before


# ── Scenarios ─────────────────────────────────────────────────

class TestScenarios:
    def test_isolated_root(self):
        result = analyze_records(_records((1, [])))
        assert result.vertex_count == 1
        assert result.avg_inbound_refs == 0.0
        assert result.avg_root_depth == 0.0
        assert result.avg_nodes_per_root_path == 1.0
        assert result.avg_nodes_per_depth == 0.0

    def test_root_with_two_leaves(self):
        result = analyze_records(_records((1, [2, 3])))
        assert result.avg_inbound_refs == pytest.approx(0.667, abs=1e-3)
        assert result.avg_root_depth == pytest.approx(0.667, abs=1e-3)
        assert result.avg_nodes_per_root_path == 2.0

    def test_diamond(self):
        result = analyze_records(_records((1, [2, 3]), (2, [4]), (3, [4])))
        assert result.avg_inbound_refs == 1.0
        assert result.avg_root_depth == 1.0
        assert result.avg_nodes_per_root_path == 3.0
        assert result.path_count == 2
        assert result.avg_nodes_per_depth == 1.5
        assert result.edge_count == 4

    def test_duplicate_source_fails_before_stats(self):
        with pytest.raises(DuplicateVertex):
            analyze_records(_records((1, [5]), (5, []), (5, [])))

    def test_deterministic(self):
        records = _records((1, [2, 3, 6]), (2, [4]), (3, [4, 5]), (4, [6]), (5, [6]))
        assert analyze_records(records) == analyze_records(records)
