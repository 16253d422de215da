"""
Search Result Model
Upstream search envelope, validated before it is relayed to callers
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel


class SearchResultEntry(BaseModel):
    """One torrent row as returned by the upstream search API"""
    id: int
    promotion_time_type: int = 0
    promotion_until: str = ""
    leechers: int
    seeders: int
    name: str
    small_descr: str
    times_completed: int
    size: int  # bytes
    added: str
    hr: int = 0
    info_hash: str
    downhash: str


class SearchEnvelope(BaseModel):
    """Top-level upstream response: {status, data: [...]}"""
    status: int
    data: List[SearchResultEntry]
