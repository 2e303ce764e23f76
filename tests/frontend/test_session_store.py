"""Tests for the remembered-session file."""

import os

from app.frontend.session import Session, SessionStore


def test_round_trip(tmp_path):
    store = SessionStore(str(tmp_path / "nested" / "session.json"))
    store.save(Session(user={"id": "u1", "role": "ADMIN"}, token="abc"))

    loaded = store.load()

    assert loaded.token == "abc"
    assert loaded.role == "ADMIN"
    assert oct(os.stat(store.file_path).st_mode & 0o777) == oct(0o600)


def test_missing_file(tmp_path):
    assert SessionStore(str(tmp_path / "absent.json")).load() is None


def test_corrupt_file_ignored(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json")

    assert SessionStore(str(path)).load() is None


def test_clear_is_idempotent(tmp_path):
    store = SessionStore(str(tmp_path / "session.json"))
    store.save(Session(user={"id": "u1"}, token="abc"))

    store.clear()
    store.clear()

    assert not os.path.exists(store.file_path)
