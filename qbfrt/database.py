"""Rows of qBittorrent's ``torrents`` table and how to fetch them."""

import sqlite3
from dataclasses import dataclass, fields
from typing import Any, TypeVar, get_args

_NoneType = type(None)

RowT = TypeVar("RowT")


@dataclass
class DatabaseRow:
    """A full row of the ``torrents`` table."""

    id: int
    torrent_id: str
    queue_position: int
    name: str | None
    category: str | None
    tags: str | None
    target_save_path: str | None
    download_path: str | None
    content_layout: str
    ratio_limit: int
    seeding_time_limit: int
    inactive_seeding_time_limit: int
    share_limit_action: str | None
    has_outer_pieces_priority: int
    has_seed_status: int
    operating_mode: str
    stopped: int
    stop_condition: str
    libtorrent_resume_data: bytes
    metadata: bytes


@dataclass
class PathData:
    """The columns needed to change save paths."""

    id: int
    torrent_id: str
    target_save_path: str | None
    libtorrent_resume_data: bytes


@dataclass
class LibtorrentResumeData:
    """The columns needed to work on the resume data blob."""

    id: int
    torrent_id: str
    libtorrent_resume_data: bytes


def _convert(value: Any, hint: Any, column: str) -> Any:
    args = get_args(hint)
    optional = _NoneType in args
    base = next((arg for arg in args if arg is not _NoneType), hint)

    if value is None:
        if optional:
            return None
        raise ValueError(f"column {column!r} is NULL")
    if base is bytes:
        if isinstance(value, bytes):
            return value
        if isinstance(value, str):
            return value.encode("utf-8")
    elif base is str:
        if isinstance(value, str):
            return value
    elif base is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    name = getattr(base, "__name__", str(base))
    raise ValueError(
        f"column {column!r}: expected {name}, got {type(value).__name__}"
    )


def fetch_all_torrents(
    db: sqlite3.Connection, query_statement: str, row_type: type[RowT]
) -> list[RowT]:
    """Run a query and map each result row onto ``row_type`` by column name.

    Extra columns are ignored; a missing column or a value of the wrong
    type raises ``ValueError``.
    """
    cursor = db.execute(query_statement)
    try:
        if cursor.description is None:
            raise ValueError("query returned no columns")
        columns = [description[0] for description in cursor.description]
        specs = {spec.name: spec.type for spec in fields(row_type)}
        missing = [name for name in specs if name not in columns]
        if missing:
            raise ValueError(f"query lacks columns: {', '.join(missing)}")

        rows = []
        for record in cursor:
            values = dict(zip(columns, record))
            rows.append(
                row_type(
                    **{
                        name: _convert(values[name], hint, name)
                        for name, hint in specs.items()
                    }
                )
            )
        return rows
    finally:
        cursor.close()