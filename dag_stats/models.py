"""Data models for the dag-stats pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

ROOT_ID = 1


@dataclass(frozen=True)
class Vertex:
    """A graph vertex. Identity only, no computed analytics."""
    id: int
    timestamp: int = 0  # carried from the ledger, never validated


@dataclass
class EdgeRecord:
    """Result from the ingestion stage: ``source`` references each target."""
    source: int
    targets: list[int] = field(default_factory=list)
    timestamp: int = 0


@dataclass(frozen=True)
class GraphStats:
    """Result from the aggregation stage."""
    avg_inbound_refs: float
    avg_root_depth: float
    avg_nodes_per_root_path: float
    vertex_count: int = 0
    edge_count: int = 0
    path_count: int = 0
    avg_nodes_per_depth: float = 0.0  # vertices per occupied depth level, root level excluded

    def as_dict(self) -> dict:
        return {
            "avg_inbound_refs": self.avg_inbound_refs,
            "avg_root_depth": self.avg_root_depth,
            "avg_nodes_per_root_path": self.avg_nodes_per_root_path,
            "avg_nodes_per_depth": self.avg_nodes_per_depth,
            "vertex_count": self.vertex_count,
            "edge_count": self.edge_count,
            "path_count": self.path_count,
        }


@dataclass
class AnalysisConfig:
    """Configuration for the statistics pipeline."""
    database_path: Path = field(default_factory=lambda: Path("database.txt"))
    precision: int = 2
