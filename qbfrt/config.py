"""Application configuration from command line arguments."""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir

from qbfrt.save_path import SavePath
from qbfrt.tracker_url import TrackerUrl


class ConfigError(ValueError):
    """Raised when command line arguments are inconsistent."""


def default_qb_dir() -> Path:
    """Return the platform's local data directory for qBittorrent."""
    return Path(user_data_dir(appauthor=False, roaming=False)) / "qBittorrent"


def build_parser() -> argparse.ArgumentParser:
    """Return the command line parser."""
    parser = argparse.ArgumentParser(
        prog="qbfrt",
        description="Command line tool for working with qBittorrent's fastresume data",
    )
    parser.add_argument(
        "-p", "--config-dir", help="path to qB local config directory (where torrents.db lives)"
    )
    parser.add_argument(
        "-d", "--disable-backup", action="store_true", help="disable automatic torrents.db backup"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable verbose output")
    parser.add_argument("--old-path", help="path string to replace")
    parser.add_argument("--new-path", help="new path string")
    parser.add_argument(
        "--use-unix-sep", action="store_true", help="force using path slash '/' separators"
    )
    parser.add_argument(
        "--use-win-sep", action="store_true", help="force using Windows backslash '\\' separators"
    )
    parser.add_argument("--old-tracker", help="tracker string to replace")
    parser.add_argument("--new-tracker", help="new tracker string")
    parser.add_argument(
        "--db-to-fastresume", action="store_true", help="extract fastresume files"
    )
    parser.add_argument("-o", "--output-dir", help="output directory for fastresume files")
    return parser


def _pair(old: str | None, new: str | None, what: str) -> tuple[str, str] | None:
    if old is None and new is None:
        return None
    if new is None:
        raise ConfigError(f"--new-{what} is missing!")
    if old is None:
        raise ConfigError(f"--old-{what} is missing!")
    return old, new


@dataclass
class Config:
    """Settings for one run of the tool."""

    qb_directory: Path
    db_file: Path
    disable_backup: bool = False
    save_path: SavePath | None = None
    tracker_url: TrackerUrl | None = None
    db_to_fastresume: bool = False
    output_directory: str | None = None
    verbose: bool = False

    @classmethod
    def build(cls, argv: Sequence[str] | None = None) -> Config:
        """Build the configuration from command line arguments."""
        args = build_parser().parse_args(argv)

        qb_directory = Path(args.config_dir) if args.config_dir is not None else default_qb_dir()
        db_file = qb_directory / "torrents.db"

        save_path = None
        paths = _pair(args.old_path, args.new_path, "path")
        if paths is not None:
            if args.use_unix_sep:
                separator = "/"
            elif args.use_win_sep:
                separator = "\\"
            else:
                separator = os.sep
            save_path = SavePath.from_paths(*paths, separator)

        tracker_url = None
        trackers = _pair(args.old_tracker, args.new_tracker, "tracker")
        if trackers is not None:
            tracker_url = TrackerUrl(old=trackers[0], new=trackers[1])

        config = cls(
            qb_directory=qb_directory,
            db_file=db_file,
            disable_backup=args.disable_backup,
            save_path=save_path,
            tracker_url=tracker_url,
            db_to_fastresume=args.db_to_fastresume,
            output_directory=args.output_dir,
            verbose=args.verbose,
        )

        if config.verbose:
            print("Verbose output enabled")
            print(f"Using {str(config.qb_directory)!r} as qB directory")
            print(f"Using {str(config.db_file)!r} as qB database")
            print(f"Save path: {config.save_path!r}")
            print(f"Tracker url: {config.tracker_url!r}")

        return config