"""FastAPI app exposing the MediaArchive gateway to the web client."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles

from ..core.auth import is_authorized
from ..core.errors import (
    EngineError,
    InvalidRequestError,
    NotFoundError,
    SandboxIOError,
    UpstreamError,
)
from .runtime import GatewayRuntime, build_runtime


logger = logging.getLogger(__name__)


def _denied() -> Response:
    # Same status as a real answer so token guesses learn nothing.
    return PlainTextResponse("")


def _require_param(value: Optional[str], name: str) -> str:
    if value is None or not str(value).strip():
        raise HTTPException(status_code=400, detail=f"{name} is required")
    return str(value)


def create_app(runtime: Optional[GatewayRuntime] = None) -> FastAPI:
    runtime = runtime or build_runtime()
    config = runtime.config

    app = FastAPI(title="MediaArchive API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/ping", response_class=PlainTextResponse)
    def ping() -> str:
        return "pong!"

    @app.get("/search")
    def search(
        token: Optional[str] = Query(None),
        keyword: Optional[str] = Query(None),
    ):
        if not is_authorized(token, config):
            return _denied()
        keyword = _require_param(keyword, "keyword")
        try:
            envelope = runtime.upstream.search(keyword)
        except UpstreamError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return envelope.model_dump(exclude_unset=True)

    @app.get("/torrent-list")
    def torrent_list() -> Dict:
        try:
            torrents = runtime.orchestrator.list_torrents()
        except EngineError as exc:
            raise HTTPException(status_code=502, detail=f"Torrent engine error: {exc}") from exc
        return {"torrents": [t.to_dict() for t in torrents]}

    @app.get("/download")
    def download(
        token: Optional[str] = Query(None),
        id: Optional[str] = Query(None),
        downhash: Optional[str] = Query(None),
    ):
        if not is_authorized(token, config):
            return _denied()
        torrent_id = _require_param(id, "id")
        downhash = _require_param(downhash, "downhash")
        try:
            result = runtime.orchestrator.add(torrent_id, downhash)
        except InvalidRequestError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return result.to_dict()

    @app.get("/stop")
    def stop(
        token: Optional[str] = Query(None),
        hash: Optional[str] = Query(None),
    ):
        if not is_authorized(token, config):
            return _denied()
        torrent_hash = _require_param(hash, "hash")
        return runtime.orchestrator.stop(torrent_hash).to_dict()

    @app.get("/list")
    def list_files(
        token: Optional[str] = Query(None),
        path: Optional[str] = Query(None),
    ):
        if not is_authorized(token, config):
            return _denied()
        if path is None:
            raise HTTPException(status_code=400, detail="path is required")
        try:
            files = runtime.sandbox.list_dir(path)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except SandboxIOError as exc:
            logger.warning("Directory listing failed: %s", exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return {"files": [f.to_dict() for f in files]}

    app.mount(
        "/sync",
        StaticFiles(directory=str(config.save_root), check_dir=False),
        name="sync",
    )

    return app
