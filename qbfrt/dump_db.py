"""Dumping the ``torrents`` table to ``.fastresume`` and ``.torrent`` files."""

from __future__ import annotations

import sqlite3
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from qbfrt.database import DatabaseRow, fetch_all_torrents
from qbfrt.fastresume import Fastresume

if TYPE_CHECKING:
    from qbfrt.config import Config

DEFAULT_OUTPUT_DIRECTORY = "qbfrt_dump"


def _torrent_rows(db: sqlite3.Connection) -> Iterator[DatabaseRow]:
    """Yield every readable row, reporting and skipping those that cannot be read."""
    row_ids = [row_id for (row_id,) in db.execute("SELECT rowid FROM torrents")]
    for row_id in row_ids:
        try:
            rows = fetch_all_torrents(
                db, f"SELECT * FROM torrents WHERE rowid = {int(row_id)}", DatabaseRow
            )
        except ValueError as err:
            print(f"DB -> fastresume: Skipping item due to error: {err}", file=sys.stderr)
            continue
        yield from rows


def _restore_qbt_fields(resume_data: Fastresume, torrent: DatabaseRow) -> None:
    """Put back the qBittorrent fields that the database keeps in its own columns."""
    resume_data.qbt_category = (torrent.category or "").encode("utf-8")
    resume_data.qbt_content_layout = torrent.content_layout.encode("utf-8")
    resume_data.qbt_first_last_piece_priority = torrent.has_outer_pieces_priority
    resume_data.qbt_inactive_seeding_time_limit = torrent.inactive_seeding_time_limit
    resume_data.qbt_name = torrent.name or ""
    resume_data.qbt_ratio_limit = torrent.ratio_limit
    resume_data.qbt_seed_status = torrent.has_seed_status
    resume_data.qbt_seeding_time_limit = torrent.seeding_time_limit
    resume_data.qbt_share_limit_action = torrent.share_limit_action or ""
    resume_data.qbt_stop_condition = torrent.stop_condition

    # Paths are absent from the fastresume data in automatic management mode.
    if torrent.target_save_path is not None:
        resume_data.qbt_download_path = torrent.download_path or ""
        resume_data.qbt_save_path = torrent.target_save_path

    # Comma-separated in the database, a list in the fastresume data.
    resume_data.qbt_tags = torrent.tags.split(",") if torrent.tags is not None else []


def to_fastresume(db: sqlite3.Connection, config: Config) -> int:
    """Write a ``.fastresume`` and a ``.torrent`` file for every torrent.

    Files go to ``config.output_directory``, or ``qbfrt_dump`` in the current
    directory; existing files are overwritten. Returns the number dumped.
    """
    print("DB -> fastresume: creating fastresume files...")

    dir_path = Path(config.output_directory or DEFAULT_OUTPUT_DIRECTORY)
    dir_path.mkdir(parents=True, exist_ok=True)
    if config.verbose:
        print(f"DB -> fastresume: output directory: {str(dir_path)!r}")

    dumped = 0
    for torrent in _torrent_rows(db):
        resume_data = Fastresume.from_bytes(torrent.libtorrent_resume_data)
        _restore_qbt_fields(resume_data, torrent)

        (dir_path / f"{torrent.torrent_id}.fastresume").write_bytes(resume_data.to_bytes())
        (dir_path / f"{torrent.torrent_id}.torrent").write_bytes(torrent.metadata)

        if config.verbose:
            print(f"DB -> fastresume: fastresume created for {torrent.torrent_id}")
        dumped += 1

    if dumped == 0:
        print("DB -> fastresume: no torrents were dumped")
    elif dumped == 1:
        print("DB -> fastresume: 1 torrent was dumped")
    else:
        print(f"DB -> fastresume: {dumped} torrents were dumped")
    return dumped