"""
Engine Client
Thin, serialized wrapper over the qBittorrent Web API
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional

import qbittorrentapi
from qbittorrentapi.exceptions import APIError

from ..core.config import Config
from ..core.errors import EngineError


logger = logging.getLogger(__name__)


class EngineClient:
    """qBittorrent client handle; the engine session is not safe for concurrent use"""

    def __init__(self, config: Config, client: Optional[qbittorrentapi.Client] = None):
        self.config = config
        self.client = client or qbittorrentapi.Client(
            host=config.engine_url,
            username=config.engine_username,
            password=config.engine_password,
            REQUESTS_ARGS={"timeout": config.request_timeout_seconds},
        )
        self._lock = threading.Lock()

    def list_torrents(self) -> List[Dict[str, Any]]:
        """Return every torrent the engine knows about, in engine order."""
        try:
            with self._lock:
                torrents = self.client.torrents_info()
        except APIError as exc:
            logger.warning("Engine torrent list failed: %s", exc)
            raise EngineError(str(exc)) from exc
        if torrents is None:
            raise EngineError("Engine returned no torrent list")
        return [dict(t) for t in torrents]

    def add_torrent(self, filename: str, data: bytes, save_path: str) -> None:
        """
        Add a .torrent payload.

        The torrent gets its own root folder and downloads pieces in order so
        partially fetched media can already be played.
        """
        try:
            with self._lock:
                result = self.client.torrents_add(
                    torrent_files={filename: data},
                    save_path=save_path,
                    root_folder=True,
                    content_layout="Subfolder",
                    is_sequential_download=True,
                )
        except APIError as exc:
            logger.warning("Engine rejected torrent %s: %s", filename, exc)
            raise EngineError(str(exc)) from exc
        if isinstance(result, str) and result.strip() != "Ok.":
            logger.warning("Engine rejected torrent %s: %s", filename, result)
            raise EngineError(result.strip() or "Engine did not accept the torrent")

    def delete_torrent(self, torrent_hash: str, delete_files: bool = True) -> None:
        try:
            with self._lock:
                self.client.torrents_delete(delete_files=delete_files, torrent_hashes=torrent_hash)
        except APIError as exc:
            logger.warning("Engine delete failed for %s: %s", torrent_hash, exc)
            raise EngineError(str(exc)) from exc
