"""
Torrent and file views
Per-request snapshots handed to clients; never cached
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class TorrentView:
    """Engine torrent reduced to the fields clients display"""
    name: str
    progress: float  # 0.0-1.0
    size: int  # bytes
    dlspeed: int  # bytes/s
    upspeed: int  # bytes/s
    eta: int  # seconds
    content_path: str  # relative to save root, "" when outside it
    hash: str
    status: int  # 0 seeding, 1 downloading, 2 other

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class LocalFileEntry:
    """Directory entry under the save root"""
    name: str
    full_path: str  # relative to save root

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class OperationResult:
    """Envelope returned by add/stop: status is "success" or "error" """
    status: str
    message: str = ""

    @classmethod
    def success(cls) -> "OperationResult":
        return cls(status="success", message="")

    @classmethod
    def error(cls, message: str) -> "OperationResult":
        return cls(status="error", message=str(message))

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
