"""Backing up and opening qBittorrent's ``torrents.db``."""

from __future__ import annotations

import shutil
import sqlite3
from datetime import datetime
from pathlib import Path

from qbfrt.config import Config


def backup(config: Config) -> Path | None:
    """Copy the database to a timestamped backup file unless backups are disabled.

    Returns the path of the backup, or ``None`` when disabled.
    """
    if config.disable_backup:
        if config.verbose:
            print("Database backup disabled")
        return None

    print("Creating database backup...")
    stamp = datetime.now().strftime("%Y%m%d%H%M%S")
    backup_file = Path(config.qb_directory) / f"torrents.db-{stamp}.bak"
    shutil.copy(config.db_file, backup_file)
    if config.verbose:
        print(f"Backup saved to: {str(backup_file)!r}")
    return backup_file


def connect(config: Config) -> sqlite3.Connection:
    """Open the existing database read-write, in autocommit mode."""
    print("Opening database...")
    uri = Path(config.db_file).resolve().as_uri() + "?mode=rw"
    return sqlite3.connect(uri, uri=True, isolation_level=None, check_same_thread=False)