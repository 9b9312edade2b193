"""Root paths: every simple path from the root down to a leaf."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator

from dag_stats.analysis.graph_models import Graph


@dataclass
class RootPaths:
    lengths: list[int] = field(default_factory=list)  # node count per path, root and leaf included
    through: Counter = field(default_factory=Counter)  # vertex id -> paths containing it


def iter_root_paths(graph: Graph) -> Iterator[tuple[int, ...]]:
    """Yield each root-to-leaf path using DFS.

    A vertex shared by several parents shows up once per distinct path.
    There is no cycle guard: a cyclic graph never finishes.
    """
    if graph.root_id not in graph:
        return

    if graph.is_leaf(graph.root_id):
        yield (graph.root_id,)
        return

    path: list[int] = [graph.root_id]
    stack = [iter(graph.outgoing_of(graph.root_id))]

    while stack:
        neighbor = next(stack[-1], None)
        if neighbor is None:
            # Backtrack before the parent tries its next child
            stack.pop()
            path.pop()
            continue

        path.append(neighbor)
        children = graph.outgoing_of(neighbor)
        if children:
            stack.append(iter(children))
        else:
            yield tuple(path)
            path.pop()


def enumerate_root_paths(graph: Graph) -> list[int]:
    """Return the node count of every root-to-leaf path."""
    return [len(path) for path in iter_root_paths(graph)]


def count_paths_through(graph: Graph) -> dict[int, int]:
    """Return how many root-to-leaf paths pass through each vertex."""
    return dict(collect_root_paths(graph).through)


def collect_root_paths(graph: Graph) -> RootPaths:
    """Path lengths and per-vertex path membership in one traversal."""
    result = RootPaths()
    for path in iter_root_paths(graph):
        result.lengths.append(len(path))
        result.through.update(path)
    return result
