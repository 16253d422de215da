"""
Upstream Client
Talks to the torrent-search tracker API: keyword search and .torrent download
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict

from pydantic import ValidationError
import requests

from ..core.config import Config
from ..core.errors import UpstreamError
from ..models.search_result import SearchEnvelope


logger = logging.getLogger(__name__)


class UpstreamClient:
    """Tracker API client; one shared session, one caller at a time"""

    USER_AGENT = "MediaArchive/0.1.0"
    PAGE_SIZE = 100

    def __init__(self, config: Config, session: requests.Session | None = None):
        self.config = config
        self.session = session or requests.Session()
        self._lock = threading.Lock()

    def _timeout(self) -> float:
        return float(self.config.request_timeout_seconds)

    def search(self, keyword: str) -> SearchEnvelope:
        """
        Search the upstream index.

        Args:
            keyword: Free-text query

        Returns:
            The parsed upstream envelope

        Raises:
            UpstreamError: transport failure, HTTP error or a body that does not
                match the {status, data: [...]} envelope
        """
        params: Dict[str, Any] = {
            "keyword": keyword,
            "page_size": str(self.PAGE_SIZE),
        }
        try:
            with self._lock:
                resp = self.session.post(
                    self.config.search_url,
                    data=params,
                    headers={"x-api-key": self.config.passkey},
                    timeout=self._timeout(),
                )
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Upstream search failed: %s", exc)
            raise UpstreamError(f"Upstream search request failed: {exc}") from exc

        try:
            return SearchEnvelope.model_validate_json(resp.text)
        except ValidationError as exc:
            logger.warning("Upstream search returned an unexpected body: %s", exc)
            raise UpstreamError(f"Upstream search returned an invalid response: {exc}") from exc

    def fetch_torrent(self, torrent_id: str, downhash: str) -> bytes:
        """Download raw .torrent bytes for a search result id/downhash pair."""
        try:
            with self._lock:
                resp = self.session.get(
                    self.config.download_url,
                    params={"id": torrent_id, "downhash": downhash},
                    headers={"User-Agent": self.USER_AGENT},
                    timeout=self._timeout(),
                )
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Upstream torrent download failed for id %s: %s", torrent_id, exc)
            raise UpstreamError(f"Torrent download failed: {exc}") from exc

        content = resp.content
        if not content:
            raise UpstreamError("Empty torrent file response")
        return content
