"""
Status mapping
Collapses qBittorrent torrent states into the three values clients understand
"""
from enum import IntEnum
from typing import Optional


class TorrentStatus(IntEnum):
    SEEDING = 0
    DOWNLOADING = 1
    OTHER = 2


SEEDING_STATES = frozenset({"uploading", "stalledUP"})

DOWNLOADING_STATES = frozenset({
    "downloading",
    "checkingUP",
    "checkingDL",
    "allocating",
    "metaDL",
    "stalledDL",
})


def map_state(state: Optional[str]) -> TorrentStatus:
    """Map an engine state string; unknown or missing states are OTHER."""
    if not isinstance(state, str):
        return TorrentStatus.OTHER
    if state in SEEDING_STATES:
        return TorrentStatus.SEEDING
    if state in DOWNLOADING_STATES:
        return TorrentStatus.DOWNLOADING
    return TorrentStatus.OTHER
