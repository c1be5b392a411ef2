"""Read-only FastAPI status surface over the session registry."""

from __future__ import annotations

import logging
from typing import Any
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.responses import ORJSONResponse

from channel_voice.state import RuntimeDeps
from channel_voice.runtime.logging import configure_logging

logger = logging.getLogger(__name__)

configure_logging()


def _deps(app: FastAPI) -> RuntimeDeps:
    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


def create_app(runtime_deps: RuntimeDeps) -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        logger.info("runtime: ready")
        try:
            yield
        finally:
            await runtime_deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)
    app.state.runtime_deps = runtime_deps

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/sessions")
    async def list_sessions() -> dict[str, Any]:
        snapshots = _deps(app).registry.snapshot()
        return {"sessions": [s.to_dict() for s in snapshots], "count": len(snapshots)}

    @app.get("/sessions/{group_id}")
    async def get_session(group_id: str) -> dict[str, Any]:
        session = _deps(app).registry.get(group_id)
        if session is None:
            raise HTTPException(status_code=404, detail=f"no active voice session for group {group_id}")
        return session.snapshot().to_dict()

    return app


__all__ = ["create_app"]
