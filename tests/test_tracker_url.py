import sqlite3
from types import SimpleNamespace

import pytest

from qbfrt.fastresume import Fastresume, FastresumeError
from qbfrt.tracker_url import TrackerUrl, change_tracker_url


def make_resume(trackers) -> Fastresume:
    return Fastresume(
        active_time=0,
        added_time=0,
        allocation=b"sparse",
        apply_ip_filter=1,
        auto_managed=0,
        completed_time=0,
        disable_dht=0,
        disable_lsd=0,
        disable_pex=0,
        download_rate_limit=-1,
        file_format=b"libtorrent resume file",
        file_version=1,
        finished_time=0,
        info_hash=b"\x00" * 20,
        last_download=0,
        last_seen_complete=0,
        last_upload=0,
        libtorrent_version=b"2.0.9.0",
        max_connections=100,
        max_uploads=100,
        num_complete=0,
        num_downloaded=0,
        num_incomplete=0,
        paused=0,
        pieces=b"\x01",
        save_path=b"/data",
        seed_mode=0,
        seeding_time=0,
        sequential_download=0,
        share_mode=0,
        stop_when_ready=0,
        super_seeding=0,
        total_downloaded=0,
        total_uploaded=0,
        trackers=trackers,
        upload_mode=0,
        upload_rate_limit=-1,
        url_list=[],
    )


@pytest.fixture
def db():
    conn = sqlite3.connect(":memory:")
    conn.execute(
        "CREATE TABLE torrents (id INTEGER PRIMARY KEY, torrent_id TEXT, "
        "libtorrent_resume_data BLOB)"
    )
    yield conn
    conn.close()


def add(db, row_id, trackers):
    with db:
        db.execute(
            "INSERT INTO torrents VALUES (?, ?, ?)",
            (row_id, f"hash{row_id}", make_resume(trackers).to_bytes()),
        )


def blob(db, row_id):
    return db.execute(
        "SELECT libtorrent_resume_data FROM torrents WHERE id = ?", (row_id,)
    ).fetchone()[0]


QUIET = SimpleNamespace(verbose=False)
HOST_A = "a.example.com/announce"
HOST_B = "udp://b.example.com:80"


def test_replaces_matching_trackers(db, capsys):
    add(db, 1, [["http://" + HOST_A], [HOST_B]])
    count = change_tracker_url(db, TrackerUrl(old="http://", new="https://"), QUIET)
    assert count == 1
    assert Fastresume.from_bytes(blob(db, 1)).trackers == [["https://" + HOST_A], [HOST_B]]
    assert "Tracker url: 1 torrent was updated" in capsys.readouterr().out


def test_non_matching_untouched(db, capsys):
    add(db, 1, [[HOST_B]])
    before = blob(db, 1)
    count = change_tracker_url(db, TrackerUrl(old="http://", new="https://"), QUIET)
    assert count == 0
    assert blob(db, 1) == before
    assert "Tracker url: no torrents were updated" in capsys.readouterr().out


def test_several_torrents(db, capsys):
    add(db, 1, [["http://" + HOST_A]])
    add(db, 2, [["http://" + HOST_A, "http://" + HOST_A]])
    add(db, 3, [])
    count = change_tracker_url(db, TrackerUrl(old="http://", new="https://"), QUIET)
    assert count == 2
    assert Fastresume.from_bytes(blob(db, 2)).trackers == [["https://" + HOST_A] * 2]
    assert "Tracker url: 2 torrents were updated" in capsys.readouterr().out


def test_other_fields_preserved(db):
    add(db, 1, [["http://" + HOST_A]])
    change_tracker_url(db, TrackerUrl(old="http://", new="https://"), QUIET)
    resume = Fastresume.from_bytes(blob(db, 1))
    assert resume.save_path == b"/data"
    assert resume.libtorrent_version == b"2.0.9.0"


def test_verbose_output(db, capsys):
    add(db, 4, [["http://" + HOST_A]])
    change_tracker_url(db, TrackerUrl(old="http://", new="https://"), SimpleNamespace(verbose=True))
    assert "Tracker url: updated tracker URLs for hash4" in capsys.readouterr().out


def test_invalid_blob_raises(db):
    with db:
        db.execute("INSERT INTO torrents VALUES (1, 'h', ?)", (b"i1e",))
    with pytest.raises(FastresumeError):
        change_tracker_url(db, TrackerUrl(old="a", new="b"), QUIET)