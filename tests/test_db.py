import re
import sqlite3

import pytest

from qbfrt.config import Config
from qbfrt.db import backup, connect


@pytest.fixture
def qb_dir(tmp_path):
    conn = sqlite3.connect(tmp_path / "torrents.db")
    conn.execute("CREATE TABLE torrents (id INTEGER PRIMARY KEY, torrent_id TEXT)")
    conn.execute("INSERT INTO torrents VALUES (1, 'abc')")
    conn.commit()
    conn.close()
    return tmp_path


def test_backup_copies_database(qb_dir):
    config = Config.build(["-p", str(qb_dir)])
    path = backup(config)
    assert path.parent == qb_dir
    assert re.fullmatch(r"torrents\.db-\d{14}\.bak", path.name)
    assert path.read_bytes() == (qb_dir / "torrents.db").read_bytes()


def test_backup_disabled(qb_dir, capsys):
    config = Config.build(["-p", str(qb_dir), "-d", "-v"])
    assert backup(config) is None
    assert sorted(p.name for p in qb_dir.iterdir()) == ["torrents.db"]
    assert "Database backup disabled" in capsys.readouterr().out


def test_backup_missing_database(tmp_path):
    config = Config.build(["-p", str(tmp_path)])
    with pytest.raises(FileNotFoundError):
        backup(config)


def test_connect_reads_and_writes(qb_dir):
    config = Config.build(["-p", str(qb_dir)])
    conn = connect(config)
    try:
        assert conn.execute("SELECT torrent_id FROM torrents").fetchall() == [("abc",)]
        conn.execute("UPDATE torrents SET torrent_id = 'def'")
    finally:
        conn.close()
    check = sqlite3.connect(qb_dir / "torrents.db")
    try:
        assert check.execute("SELECT torrent_id FROM torrents").fetchone() == ("def",)
    finally:
        check.close()


def test_connect_missing_does_not_create(tmp_path):
    config = Config.build(["-p", str(tmp_path)])
    with pytest.raises(sqlite3.OperationalError):
        connect(config)
    assert not (tmp_path / "torrents.db").exists()