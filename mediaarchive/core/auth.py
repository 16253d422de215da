"""Shared-token check for privileged routes."""

from __future__ import annotations

import hmac
from typing import Optional

from .config import Config


def is_authorized(token: Optional[str], config: Config) -> bool:
    """Exact match against the configured access token; missing tokens are denied."""
    if not token or not config.access_token:
        return False
    return hmac.compare_digest(token.encode("utf-8"), config.access_token.encode("utf-8"))
