"""Runtime bootstrap for the MediaArchive web API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.config import Config, load_config
from ..core.orchestrator import TorrentOrchestrator
from ..core.path_sandbox import PathSandbox
from ..services.engine_client import EngineClient
from ..services.upstream_client import UpstreamClient


@dataclass
class GatewayRuntime:
    """Shared service graph used by web endpoints."""

    config: Config
    upstream: UpstreamClient
    engine: EngineClient
    orchestrator: TorrentOrchestrator
    sandbox: PathSandbox


def build_runtime(
    config: Optional[Config] = None,
    upstream: Optional[UpstreamClient] = None,
    engine: Optional[EngineClient] = None,
) -> GatewayRuntime:
    """Create and wire core services from one immutable Config."""

    config = config or load_config()
    upstream = upstream or UpstreamClient(config)
    engine = engine or EngineClient(config)
    return GatewayRuntime(
        config=config,
        upstream=upstream,
        engine=engine,
        orchestrator=TorrentOrchestrator(config, engine, upstream),
        sandbox=PathSandbox(config),
    )
