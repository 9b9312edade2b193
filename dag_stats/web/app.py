"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from dag_stats.web.api import router


def create_app() -> FastAPI:
    app = FastAPI(title="dag-stats", version="0.1.0")
    app.include_router(router)
    return app
