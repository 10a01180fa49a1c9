"""Changing the save path of torrents in the database."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import TYPE_CHECKING

from qbfrt.database import PathData, fetch_all_torrents
from qbfrt.fastresume import Fastresume

if TYPE_CHECKING:
    from qbfrt.config import Config

_SELECT = "SELECT id, torrent_id, target_save_path, libtorrent_resume_data FROM torrents"
_UPDATE = (
    "UPDATE torrents SET target_save_path = :tsp, libtorrent_resume_data = :lrd "
    "WHERE id = :id"
)


@dataclass
class SavePath:
    """Save path replacement strings.

    qBittorrent keeps the save path in two places: ``target_save_path``,
    always with Unix separators, and the resume data blob, with the
    separators of the operating system. Both forms are held here.
    """

    old_unix: str
    new_unix: str
    old: str
    new: str
    separator: str

    @classmethod
    def from_paths(cls, old: str, new: str, separator: str) -> SavePath:
        """Build from the paths as given, deriving the Unix-style forms."""
        return cls(
            old_unix=old.replace("\\", "/"),
            new_unix=new.replace("\\", "/"),
            old=old,
            new=new,
            separator=separator,
        )

    def replace_resume_path(self, path: str) -> str:
        """Replace the path in a resume-data save path and normalise separators."""
        replaced = path.replace(self.old, self.new)
        if self.separator == "\\":
            return replaced.replace("/", self.separator)
        return replaced.replace("\\", self.separator)


def change_save_path(db: sqlite3.Connection, save_path: SavePath, config: Config) -> int:
    """Replace the save path of every torrent whose resume data contains it.

    Returns the number of torrents updated.
    """
    print(f"Save path: replacing {save_path.old} with {save_path.new}")

    updated = 0
    for torrent in fetch_all_torrents(db, _SELECT, PathData):
        resume_data = Fastresume.from_bytes(torrent.libtorrent_resume_data)
        resume_path = resume_data.save_path.decode("utf-8")

        # The libtorrent save path is always present, so it decides the match.
        if save_path.old not in resume_path:
            continue

        # Absent when the torrent is in automatic management mode.
        target_save_path = None
        if torrent.target_save_path is not None:
            target_save_path = torrent.target_save_path.replace(
                save_path.old_unix, save_path.new_unix
            )

        new_resume_path = save_path.replace_resume_path(resume_path)
        resume_data.save_path = new_resume_path.encode("utf-8")

        with db:
            cursor = db.execute(
                _UPDATE,
                {"tsp": target_save_path, "lrd": resume_data.to_bytes(), "id": torrent.id},
            )
        if cursor.rowcount != 1:
            raise LookupError(f"torrent row {torrent.id} was not updated")

        if config.verbose:
            print(f"Save path: updated save path for {torrent.torrent_id}")
            print(f"{torrent.torrent_id}: new target_save_path is '{target_save_path!r}'")
            print(
                f"{torrent.torrent_id}: new libtorrent_resume_data path is "
                f"{new_resume_path!r}"
            )
        updated += 1

    if updated == 0:
        print("Save path: no torrents were updated")
    elif updated == 1:
        print("Save path: 1 torrent was updated")
    else:
        print(f"Save path: {updated} torrents were updated")
    return updated