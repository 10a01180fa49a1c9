"""Command line entry point.

Runs the requested tasks in order: save path change, tracker URL change,
then dumping the database to fastresume files.
"""

from __future__ import annotations

import sqlite3
import sys
from collections.abc import Sequence
from contextlib import closing

from qbfrt import db as database
from qbfrt.config import Config, ConfigError
from qbfrt.dump_db import to_fastresume
from qbfrt.save_path import change_save_path
from qbfrt.tracker_url import change_tracker_url

BANNER = r"""        _      __      _   
   __ _| |__  / _|_ __| |_ 
  / _` | '_ \| |_| '__| __|
 | (_| | |_) |  _| |  | |_ 
  \__, |_.__/|_| |_|   \__|
     |_|                   
"""

_FAILURES = (OSError, sqlite3.Error, ValueError, LookupError)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tool and return its exit status."""
    print(BANNER)

    try:
        config = Config.build(argv)
    except ConfigError as err:
        print(f"Problem parsing arguments: {err}")
        return 1

    try:
        database.backup(config)
    except OSError as err:
        print(f"Could not backup database: {err}")
        return 1

    try:
        connection = database.connect(config)
    except sqlite3.Error as err:
        print(f"Could not connect to database: {err}")
        return 1

    with closing(connection):
        if config.save_path is not None:
            try:
                change_save_path(connection, config.save_path, config)
            except _FAILURES as err:
                print(f"Could not update save paths: {err}")
                return 1

        if config.tracker_url is not None:
            try:
                change_tracker_url(connection, config.tracker_url, config)
            except _FAILURES as err:
                print(f"Could not update tracker URLs: {err}")
                return 1

        if config.db_to_fastresume:
            try:
                to_fastresume(connection, config)
            except _FAILURES as err:
                print(f"Could not dump database to fastresume files: {err}")
                return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())