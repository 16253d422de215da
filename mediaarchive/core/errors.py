"""
Error types
Failures raised by the gateway services and translated at the web boundary
"""


class MediaArchiveError(Exception):
    """Base class for gateway failures"""


class ConfigError(MediaArchiveError):
    """Startup configuration is missing or invalid"""


class InvalidRequestError(MediaArchiveError):
    """Caller supplied a parameter the gateway cannot act on"""


class UpstreamError(MediaArchiveError):
    """Upstream search/download API unreachable or returned an unusable body"""


class EngineError(MediaArchiveError):
    """Torrent engine rejected a call or returned an unusable response"""


class NotFoundError(MediaArchiveError):
    """Requested path does not exist under the shared root"""


class SandboxIOError(MediaArchiveError):
    """Path exists under the shared root but could not be read"""
