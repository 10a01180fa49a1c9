"""Fastresume data as written by libtorrent and qBittorrent."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import MISSING, dataclass, field, fields
from typing import Any

from qbfrt import bencode


class FastresumeError(ValueError):
    """Raised when fastresume data is malformed."""


Converter = Callable[[Any], Any]


def _integer(bits: int, signed: bool) -> Converter:
    low = -(2 ** (bits - 1)) if signed else 0
    high = 2 ** (bits - 1) - 1 if signed else 2**bits - 1

    def convert(value: Any) -> int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise FastresumeError(f"expected an integer, got {type(value).__name__}")
        if not low <= value <= high:
            raise FastresumeError(f"integer {value} out of range")
        return value

    return convert


_U8 = _integer(8, signed=False)
_I32 = _integer(32, signed=True)
_I64 = _integer(64, signed=True)
_U64 = _integer(64, signed=False)


def _bytes(value: Any) -> bytes:
    if not isinstance(value, bytes):
        raise FastresumeError(f"expected a byte string, got {type(value).__name__}")
    return value


def _text(value: Any) -> str:
    try:
        return _bytes(value).decode("utf-8")
    except UnicodeDecodeError as err:
        raise FastresumeError("string is not valid UTF-8") from err


def _list_of(convert: Converter) -> Converter:
    def convert_list(value: Any) -> list[Any]:
        if not isinstance(value, list):
            raise FastresumeError(f"expected a list, got {type(value).__name__}")
        return [convert(item) for item in value]

    return convert_list


def _unfinished_piece(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise FastresumeError("unfinished piece must be a dictionary")
    try:
        return {"bitmask": _bytes(value["bitmask"]), "piece": _I64(value["piece"])}
    except KeyError as err:
        raise FastresumeError(f"unfinished piece lacks {err.args[0]!r}") from None


_TEXT_LIST = _list_of(_text)


def _field(key: str, convert: Converter, *, required: bool = True) -> Any:
    metadata = {"key": key, "convert": convert}
    if required:
        return field(metadata=metadata)
    return field(default=None, metadata=metadata)


@dataclass(kw_only=True)
class Fastresume:
    """The fields of a ``.fastresume`` file.

    Only the fields listed here are kept; anything else in the data is
    dropped when it is read.
    """

    active_time: int = _field("active_time", _I64)
    added_time: int = _field("added_time", _I64)
    allocation: bytes = _field("allocation", _bytes)
    apply_ip_filter: int = _field("apply_ip_filter", _U8)
    auto_managed: int = _field("auto_managed", _U8)
    banned_peers: bytes | None = _field("banned_peers", _bytes, required=False)
    banned_peers6: bytes | None = _field("banned_peers6", _bytes, required=False)
    completed_time: int = _field("completed_time", _I64)
    disable_dht: int = _field("disable_dht", _U8)
    disable_lsd: int = _field("disable_lsd", _U8)
    disable_pex: int = _field("disable_pex", _U8)
    download_rate_limit: int = _field("download_rate_limit", _I32)
    file_format: bytes = _field("file-format", _bytes)
    file_version: int = _field("file-version", _U8)
    file_priority: list[int] | None = _field("file_priority", _list_of(_U8), required=False)
    finished_time: int = _field("finished_time", _I64)
    httpseeds: list[str] | None = _field("httpseeds", _TEXT_LIST, required=False)
    i2p: int | None = _field("i2p", _U8, required=False)
    info_hash: bytes = _field("info-hash", _bytes)
    info_hash2: bytes | None = _field("info-hash2", _bytes, required=False)
    last_download: int = _field("last_download", _I64)
    last_seen_complete: int = _field("last_seen_complete", _I64)
    last_upload: int = _field("last_upload", _I64)
    libtorrent_version: bytes = _field("libtorrent-version", _bytes)
    mapped_files: list[str] | None = _field("mapped_files", _TEXT_LIST, required=False)
    max_connections: int = _field("max_connections", _I64)
    max_uploads: int = _field("max_uploads", _I64)
    name: bytes | None = _field("name", _bytes, required=False)
    num_complete: int = _field("num_complete", _U64)
    num_downloaded: int = _field("num_downloaded", _U64)
    num_incomplete: int = _field("num_incomplete", _U64)
    paused: int = _field("paused", _U8)
    peers: bytes | None = _field("peers", _bytes, required=False)
    peers6: bytes | None = _field("peers6", _bytes, required=False)
    piece_priority: bytes | None = _field("piece_priority", _bytes, required=False)
    pieces: bytes = _field("pieces", _bytes)
    qbt_category: bytes | None = _field("qBt-category", _bytes, required=False)
    qbt_content_layout: bytes | None = _field("qBt-contentLayout", _bytes, required=False)
    qbt_download_path: str | None = _field("qBt-downloadPath", _text, required=False)
    qbt_first_last_piece_priority: int | None = _field(
        "qBt-firstLastPiecePriority", _I64, required=False
    )
    qbt_inactive_seeding_time_limit: int | None = _field(
        "qBt-inactiveSeedingTimeLimit", _I64, required=False
    )
    qbt_name: str | None = _field("qBt-name", _text, required=False)
    qbt_ratio_limit: int | None = _field("qBt-ratioLimit", _I64, required=False)
    qbt_save_path: str | None = _field("qBt-savePath", _text, required=False)
    qbt_seed_status: int | None = _field("qBt-seedStatus", _I64, required=False)
    qbt_seeding_time_limit: int | None = _field("qBt-seedingTimeLimit", _I64, required=False)
    qbt_share_limit_action: str | None = _field("qBt-shareLimitAction", _text, required=False)
    qbt_stop_condition: str | None = _field("qBt-stopCondition", _text, required=False)
    qbt_tags: list[str] | None = _field("qBt-tags", _TEXT_LIST, required=False)
    save_path: bytes = _field("save_path", _bytes)
    seed_mode: int = _field("seed_mode", _U8)
    seeding_time: int = _field("seeding_time", _I64)
    sequential_download: int = _field("sequential_download", _U8)
    share_mode: int = _field("share_mode", _U8)
    stop_when_ready: int = _field("stop_when_ready", _U8)
    super_seeding: int = _field("super_seeding", _U8)
    total_downloaded: int = _field("total_downloaded", _U64)
    total_uploaded: int = _field("total_uploaded", _U64)
    trackers: list[list[str]] = _field("trackers", _list_of(_TEXT_LIST))
    unfinished: list[dict[str, Any]] | None = _field(
        "unfinished", _list_of(_unfinished_piece), required=False
    )
    upload_mode: int = _field("upload_mode", _U8)
    upload_rate_limit: int = _field("upload_rate_limit", _I64)
    url_list: list[str] = _field("url-list", _TEXT_LIST)

    @classmethod
    def from_bytes(cls, data: bytes) -> Fastresume:
        """Parse bencoded fastresume data."""
        try:
            decoded = bencode.decode(data)
        except bencode.BencodeError as err:
            raise FastresumeError(f"invalid bencode: {err}") from err
        if not isinstance(decoded, dict):
            raise FastresumeError("fastresume data must be a dictionary")

        values = {}
        for spec in fields(cls):
            key = spec.metadata["key"]
            if key not in decoded:
                if spec.default is MISSING:
                    raise FastresumeError(f"missing field {key!r}")
                continue
            try:
                values[spec.name] = spec.metadata["convert"](decoded[key])
            except FastresumeError as err:
                raise FastresumeError(f"field {key!r}: {err}") from None
        return cls(**values)

    def to_bytes(self) -> bytes:
        """Bencode the fields, leaving out those that are ``None``."""
        return bencode.encode(
            {spec.metadata["key"]: getattr(self, spec.name) for spec in fields(self)}
        )