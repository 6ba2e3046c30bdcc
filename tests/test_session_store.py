# tests/test_session_store.py

from __future__ import annotations

import json
from pathlib import Path

from redshift_dashboard.session.local_storage import LocalStorage
from redshift_dashboard.session.store import SessionStore

from .conftest import TTL_SECONDS
from .fakes import FakeClock, MemoryStorage


def test_save_then_load_round_trip(sessions: SessionStore, clock: FakeClock) -> None:
    saved = sessions.save("Alex", "1234")
    loaded = sessions.load()

    assert loaded is not None
    assert loaded.name == "Alex"
    assert loaded.passcode == "1234"
    assert loaded.expiry_ms == saved.expiry_ms == clock.now + TTL_SECONDS * 1000


def test_persisted_record_shape(storage: LocalStorage, sessions: SessionStore, clock: FakeClock) -> None:
    sessions.save("Alex", "1234", ttl_seconds=60)
    raw = storage.get_item("redshift_session")
    assert raw is not None
    assert json.loads(raw) == {"name": "Alex", "passcode": "1234", "expiry": clock.now + 60_000}


def test_expired_session_is_deleted_durably(
    storage: LocalStorage, sessions: SessionStore, clock: FakeClock
) -> None:
    sessions.save("Alex", "1234")
    clock.advance(TTL_SECONDS)

    assert sessions.load() is None
    assert storage.get_item("redshift_session") is None

    # Rewinding the clock does not resurrect it.
    clock.advance(-TTL_SECONDS)
    assert sessions.load() is None


def test_session_just_before_expiry_is_valid(sessions: SessionStore, clock: FakeClock) -> None:
    sessions.save("Alex", "1234")
    clock.advance(TTL_SECONDS - 0.001)
    assert sessions.load() is not None


def test_save_overwrites_prior_record(sessions: SessionStore, clock: FakeClock) -> None:
    sessions.save("Alex", "1234")
    clock.advance(600)
    second = sessions.save("Sam", "9999")

    loaded = sessions.load()
    assert loaded == second
    assert loaded is not None and loaded.name == "Sam"


def test_corrupt_record_is_treated_as_absent_and_removed(storage: LocalStorage, sessions: SessionStore) -> None:
    storage.set_item("redshift_session", '{"name": "Alex"')
    assert sessions.load() is None
    assert storage.get_item("redshift_session") is None


def test_clear_and_missing(sessions: SessionStore) -> None:
    assert sessions.load() is None
    sessions.save("Alex", "1234")
    sessions.clear()
    assert sessions.load() is None


def test_local_storage_survives_new_instance(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "ls.json"
    LocalStorage(path).set_item("k", "v")
    assert LocalStorage(path).get_item("k") == "v"

    other = LocalStorage(path)
    other.remove_item("k")
    other.remove_item("k")
    assert LocalStorage(path).get_item("k") is None


def test_local_storage_unreadable_file_reads_empty(tmp_path: Path) -> None:
    path = tmp_path / "ls.json"
    path.write_text("{broken", "utf-8")
    storage = LocalStorage(path)
    assert storage.get_item("redshift_session") is None

    storage.set_item("a", "1")
    assert json.loads(path.read_text("utf-8")) == {"a": "1"}


def test_session_store_on_memory_storage() -> None:
    clock = FakeClock()
    store = SessionStore(MemoryStorage(), key="custom", ttl_seconds=10, now_ms=clock)
    store.save("Alex", "1234")
    clock.advance(10)
    assert store.load() is None
