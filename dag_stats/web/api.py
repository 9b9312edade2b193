"""Statistics API: graph stats and per-vertex stats over HTTP."""

from __future__ import annotations

import asyncio
from pathlib import Path

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from dag_stats.errors import DatabaseError, GraphError
from dag_stats.models import AnalysisConfig, EdgeRecord
from dag_stats.pipeline import analyze_records, build_graph, run_pipeline, vertex_report

router = APIRouter(prefix="/api")


# --- Request / Response models ---

class RecordIn(BaseModel):
    source: int
    targets: list[int] = Field(default_factory=list)
    timestamp: int = 0

class RecordsRequest(BaseModel):
    records: list[RecordIn]

class FileRequest(BaseModel):
    path: str


def _to_records(req: RecordsRequest) -> list[EdgeRecord]:
    return [
        EdgeRecord(source=r.source, targets=list(r.targets), timestamp=r.timestamp)
        for r in req.records
    ]


# --- Endpoints ---

@router.get("/health")
async def health():
    return {"status": "ok"}


@router.post("/stats")
async def stats(req: RecordsRequest):
    try:
        result = await asyncio.to_thread(analyze_records, _to_records(req))
    except GraphError as e:
        raise HTTPException(400, str(e))
    return result.as_dict()


@router.post("/stats/file")
async def stats_from_file(req: FileRequest):
    path = Path(req.path).expanduser()
    if not path.is_file():
        raise HTTPException(404, f"Database not found: {path}")

    try:
        result = await asyncio.to_thread(run_pipeline, AnalysisConfig(database_path=path))
    except (GraphError, DatabaseError) as e:
        raise HTTPException(400, str(e))
    return result.as_dict()


@router.post("/vertices")
async def vertices(req: RecordsRequest):
    def _run():
        return vertex_report(build_graph(_to_records(req)))

    try:
        report = await asyncio.to_thread(_run)
    except GraphError as e:
        raise HTTPException(400, str(e))

    return {
        "vertices": [
            {
                "id": item.id,
                "timestamp": item.vertex.timestamp,
                "in_degree": item.in_degree,
                "depth": item.depth,
                "path_count": item.path_count,
            }
            for item in report
        ]
    }
