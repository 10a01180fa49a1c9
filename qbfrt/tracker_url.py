"""Changing tracker URLs of torrents in the database."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import TYPE_CHECKING

from qbfrt.database import LibtorrentResumeData, fetch_all_torrents
from qbfrt.fastresume import Fastresume

if TYPE_CHECKING:
    from qbfrt.config import Config

_SELECT = "SELECT id, torrent_id, libtorrent_resume_data FROM torrents"
_UPDATE = "UPDATE torrents SET libtorrent_resume_data = :lrd WHERE id = :id"


@dataclass
class TrackerUrl:
    """Tracker URL replacement strings."""

    old: str
    new: str


def change_tracker_url(db: sqlite3.Connection, tracker_url: TrackerUrl, config: Config) -> int:
    """Replace a string in the trackers of every torrent that contains it.

    Returns the number of torrents updated.
    """
    print(f"Tracker url: replacing '{tracker_url.old}' with '{tracker_url.new}'")

    updated = 0
    for torrent in fetch_all_torrents(db, _SELECT, LibtorrentResumeData):
        resume_data = Fastresume.from_bytes(torrent.libtorrent_resume_data)

        matched = any(tracker_url.old in url for tier in resume_data.trackers for url in tier)
        if not matched:
            continue

        resume_data.trackers = [
            [url.replace(tracker_url.old, tracker_url.new) for url in tier]
            for tier in resume_data.trackers
        ]

        with db:
            cursor = db.execute(_UPDATE, {"lrd": resume_data.to_bytes(), "id": torrent.id})
        if cursor.rowcount != 1:
            raise LookupError(f"torrent row {torrent.id} was not updated")

        if config.verbose:
            print(f"Tracker url: updated tracker URLs for {torrent.torrent_id}")
            print(f"{torrent.torrent_id}: new tracker urls are {resume_data.trackers!r}")
        updated += 1

    if updated == 0:
        print("Tracker url: no torrents were updated")
    elif updated == 1:
        print("Tracker url: 1 torrent was updated")
    else:
        print(f"Tracker url: {updated} torrents were updated")
    return updated