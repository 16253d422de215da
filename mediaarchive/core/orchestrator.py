"""
Torrent Orchestrator
Turns search results into engine downloads and engine torrents into client views
"""
from __future__ import annotations

import logging
import os
from pathlib import PurePath
from typing import Any, Dict, List

from ..models.torrent_view import OperationResult, TorrentView
from ..services.engine_client import EngineClient
from ..services.upstream_client import UpstreamClient
from .config import Config
from .errors import EngineError, InvalidRequestError, UpstreamError
from .status_mapper import map_state


logger = logging.getLogger(__name__)

REQUIRED_TORRENT_FIELDS = (
    "name",
    "progress",
    "size",
    "dlspeed",
    "upspeed",
    "eta",
    "content_path",
    "hash",
    "state",
)


def relative_to_root(path: str, root: PurePath) -> str:
    """Path relative to root, or "" when it does not live under root."""
    normalized = PurePath(os.path.normpath(str(path or "")))
    try:
        rel = normalized.relative_to(root)
    except ValueError:
        return ""
    text = rel.as_posix()
    return "" if text == "." else text


class TorrentOrchestrator:
    def __init__(self, config: Config, engine: EngineClient, upstream: UpstreamClient):
        self.config = config
        self.engine = engine
        self.upstream = upstream

    def _to_view(self, torrent: Dict[str, Any]) -> TorrentView:
        missing = [key for key in REQUIRED_TORRENT_FIELDS if torrent.get(key) is None]
        if missing:
            raise EngineError(f"Engine torrent entry missing fields: {', '.join(missing)}")
        try:
            return TorrentView(
                name=str(torrent["name"]),
                progress=float(torrent["progress"]),
                size=int(torrent["size"]),
                dlspeed=int(torrent["dlspeed"]),
                upspeed=int(torrent["upspeed"]),
                eta=int(torrent["eta"]),
                content_path=relative_to_root(torrent["content_path"], self.config.save_root),
                hash=str(torrent["hash"]),
                status=int(map_state(torrent["state"])),
            )
        except (TypeError, ValueError) as exc:
            raise EngineError(f"Engine torrent entry malformed: {exc}") from exc

    def list_torrents(self) -> List[TorrentView]:
        """Current engine torrents as client views, engine order preserved."""
        return [self._to_view(t) for t in self.engine.list_torrents()]

    def save_path_for(self, torrent_id: str) -> str:
        torrent_id = str(torrent_id or "").strip()
        if not (torrent_id.isascii() and torrent_id.isdigit()):
            raise InvalidRequestError(f"Invalid torrent id: {torrent_id!r}")
        return str(self.config.save_root / torrent_id)

    def add(self, torrent_id: str, downhash: str) -> OperationResult:
        """
        Fetch a search result's .torrent and hand it to the engine.

        Saves under <save_root>/<id>. Upstream and engine failures come back
        as an error envelope; nothing is added when the fetch fails.
        """
        save_path = self.save_path_for(torrent_id)
        torrent_id = str(torrent_id).strip()
        try:
            data = self.upstream.fetch_torrent(torrent_id, downhash)
        except UpstreamError as exc:
            return OperationResult.error(str(exc))
        try:
            self.engine.add_torrent(torrent_id, data, save_path)
        except EngineError as exc:
            return OperationResult.error(str(exc))
        logger.info("Queued torrent %s into %s", torrent_id, save_path)
        return OperationResult.success()

    def stop(self, torrent_hash: str) -> OperationResult:
        """Delete a torrent and its downloaded data."""
        try:
            self.engine.delete_torrent(torrent_hash, delete_files=True)
        except EngineError as exc:
            return OperationResult.error(str(exc))
        logger.info("Removed torrent %s", torrent_hash)
        return OperationResult.success()
