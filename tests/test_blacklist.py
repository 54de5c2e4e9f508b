"""Tests for the API key blacklist."""

import signal

from shortlinks.core.blacklist import Blacklist


def test_load_ignores_comments_and_blank_lines(tmp_path):
    path = tmp_path / "blacklist.txt"
    path.write_text("# blocked keys\nkey-one\n\n  key-two  \n")

    blacklist = Blacklist(str(path))
    blacklist.load()

    assert "key-one" in blacklist
    assert "key-two" in blacklist
    assert "# blocked keys" not in blacklist
    assert len(blacklist) == 2


def test_missing_file_is_empty(tmp_path):
    blacklist = Blacklist(str(tmp_path / "missing.txt"), keys=["stale"])
    blacklist.load()
    assert len(blacklist) == 0


def test_no_path_is_empty():
    blacklist = Blacklist(None)
    blacklist.load()
    assert "anything" not in blacklist


def test_reload_on_signal(tmp_path):
    path = tmp_path / "blacklist.txt"
    path.write_text("key-one\n")
    blacklist = Blacklist(str(path))
    blacklist.load()

    path.write_text("key-two\n")
    blacklist.handle_signal(signal.SIGHUP if hasattr(signal, "SIGHUP") else 1, None)

    assert "key-one" not in blacklist
    assert "key-two" in blacklist


def test_failed_reload_keeps_keys(tmp_path):
    path = tmp_path / "blacklist.txt"
    path.write_text("key-one\n")
    blacklist = Blacklist(str(path))
    blacklist.load()

    # A directory where the file was cannot be read
    path.unlink()
    path.mkdir()
    blacklist.reload()

    assert "key-one" in blacklist
