from .engine_client import EngineClient
from .upstream_client import UpstreamClient

__all__ = [
    "EngineClient",
    "UpstreamClient",
]
