# qbfrt

A command line tool for working with the fastresume data that qBittorrent
keeps in its SQLite database (`torrents.db`).

With it you can:

- mass update the save paths of torrents, so content can move to a new drive or
  directory (or from Windows to Linux) without moving torrents inside
  qBittorrent or rechecking the data;
- mass update tracker URLs;
- dump the database to `.fastresume` and `.torrent` files, one pair per
  torrent, named by the torrent hash.

Several tasks can run in one invocation. They run in this order: save path
change, tracker URL change, then `--db-to-fastresume`. Close qBittorrent
before running the tool.

## Installation

```
pip install .
```

## Usage

```
qbfrt [options]
```

| Option | Meaning |
| --- | --- |
| `-p`, `--config-dir DIR` | qBittorrent local config directory holding `torrents.db` (defaults to the platform's local user data directory + `qBittorrent`) |
| `-d`, `--disable-backup` | do not copy `torrents.db` to a timestamped `torrents.db-YYYYmmddHHMMSS.bak` in the config directory first |
| `-v`, `--verbose` | print the configuration and details of each change |
| `--old-path OLD` / `--new-path NEW` | replace `OLD` with `NEW` in save paths (both required together) |
| `--use-unix-sep` | force `/` separators in the rewritten resume-data save path |
| `--use-win-sep` | force `\` separators in the rewritten resume-data save path |
| `--old-tracker OLD` / `--new-tracker NEW` | replace `OLD` with `NEW` in tracker URLs (both required together) |
| `--db-to-fastresume` | write `.fastresume` and `.torrent` files for every torrent |
| `-o`, `--output-dir DIR` | output directory for dumped files (default `qbfrt_dump`); existing files there are overwritten |

The command exits with status 1 and a message when an option of a pair is
missing, or when the backup, opening the database, or a task fails.

### Examples

Move everything from one drive to another:

```
qbfrt --old-path "D:\Torrents" --new-path "E:\Torrents"
```

Migrate a Windows library to Linux:

```
qbfrt -p ~/.local/share/qBittorrent --old-path "D:\Torrents" --new-path /mnt/torrents --use-unix-sep
```

Switch trackers to HTTPS and dump the result:

```
qbfrt --old-tracker http:// --new-tracker https:// --db-to-fastresume -o ./dump
```

### How save paths are matched

qBittorrent keeps the save path in two places: the `target_save_path` column,
which always uses `/` separators, and inside the libtorrent resume blob, which
uses the operating system's separators. A torrent is updated only when the
path in the resume blob contains `--old-path`, so give it with the separators
that path actually uses. The `target_save_path` replacement uses the
`/`-separated forms of both paths. Without `--use-unix-sep` or
`--use-win-sep`, the resume-blob path gets the separators of the system the
tool runs on. Torrents in Automatic Torrent Management mode have no
`target_save_path`; only their resume blob is changed.

Resume data is read into the fields the tool knows about; keys outside that
set are dropped when a torrent's resume data is rewritten or dumped.

## Library use

The modules can also be used directly:

- `qbfrt.bencode`: `encode`, `decode`, `BencodeError`;
- `qbfrt.fastresume`: `Fastresume.from_bytes`, `Fastresume.to_bytes`,
  `FastresumeError`;
- `qbfrt.database`: the row classes `DatabaseRow`, `PathData`,
  `LibtorrentResumeData` and `fetch_all_torrents`;
- `qbfrt.save_path`: `SavePath`, `SavePath.from_paths`, `change_save_path`;
- `qbfrt.tracker_url`: `TrackerUrl`, `change_tracker_url`;
- `qbfrt.dump_db`: `to_fastresume`;
- `qbfrt.db`: `backup`, `connect`;
- `qbfrt.config`: `Config.build`, `build_parser`, `default_qb_dir`,
  `ConfigError`;
- `qbfrt.cli`: `main`.

`change_save_path`, `change_tracker_url` and `to_fastresume` return the number
of torrents they updated or dumped.

## What it does not do

The tool works only on the SQLite database. It does not read or modify
`.fastresume` files in a `BT_Backup` directory, and it cannot load dumped
files back into a database.